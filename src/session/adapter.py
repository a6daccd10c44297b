"""Bridges engine events to session state and the webhook.

Lifecycle callbacks only touch ``SessionState``. Message callbacks apply the
group filter, drop our own messages, forward the rest to the webhook and post
any reply back to the originating chat. Nothing raised while handling a
message propagates back into the engine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.config import normalize_chat_id
from src.qr.renderer import render_terminal_qr
from src.webhook.models import UNKNOWN_SENDER, WebhookPayload

if TYPE_CHECKING:
    from src.models import ContactInfo, InboundMessage
    from src.session.client import SessionClient
    from src.session.state import SessionState
    from src.webhook.forwarder import WebhookForwarder

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 50


def resolve_display_name(contact: ContactInfo, message: InboundMessage) -> str:
    """Pick the sender label: push name, contact name, author, then unknown."""
    candidates = (
        contact.push_name or message.push_name,
        contact.name,
        message.author_id,
    )
    for candidate in candidates:
        if candidate:
            return candidate
    return UNKNOWN_SENDER


class SessionAdapter:
    """Handles events from the automation engine."""

    def __init__(
        self,
        state: SessionState,
        client: SessionClient,
        forwarder: WebhookForwarder,
        group_id: str | None = None,
        terminal_qr: bool = False,
    ) -> None:
        self._state = state
        self._client = client
        self._forwarder = forwarder
        self._group_id = normalize_chat_id(group_id)
        self._terminal_qr = terminal_qr

    def on_pairing_code(self, code: str) -> None:
        self._state.pairing_code_issued(code)
        logger.info("QR generated - visit /qr to scan it")
        if self._terminal_qr:
            logger.info("Scan this QR with WhatsApp:\n%s", render_terminal_qr(code))

    def on_ready(self) -> None:
        self._state.session_ready()
        logger.info("WhatsApp connected and ready")

    def on_authenticated(self) -> None:
        logger.info("Authentication succeeded")

    def on_auth_failure(self, reason: str) -> None:
        logger.error("Authentication failed: %s", reason)

    def on_disconnected(self, reason: str) -> None:
        self._state.disconnected()
        logger.warning("WhatsApp disconnected: %s", reason)

    def accepts(self, message: InboundMessage) -> bool:
        """Return True if the message should be forwarded to the webhook."""
        if self._group_id and message.chat_id != self._group_id:
            return False
        return not message.from_me

    async def on_message(self, message: InboundMessage) -> None:
        if not self.accepts(message):
            return

        logger.info(
            "Message received from %s: %s...",
            message.chat_id, message.body[:_PREVIEW_CHARS],
        )

        try:
            contact = await self._client.get_contact(message)
            payload = WebhookPayload.from_message(
                message, resolve_display_name(contact, message),
            )
            reply = await self._forwarder.forward(payload)
            if reply:
                await self._client.send_message(message.chat_id, reply)
                logger.info("Reply sent to chat %s", message.chat_id)
        except Exception:
            logger.exception("Error processing message %s", message.message_id)
