"""Session client backed by neonize (WhatsApp Web multi-device).

Native neonize events are converted to the bridge's typed models as soon as
they arrive and handed to a ``SessionEventHandler``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from neonize.aioze.client import NewAClient
from neonize.events import (
    ConnectedEv,
    ConnectFailureEv,
    DisconnectedEv,
    LoggedOutEv,
    MessageEv,
    PairStatusEv,
)
from neonize.utils.jid import build_jid

from src.models import ContactInfo, GroupChat, InboundMessage
from src.session.convert import jid_to_str, to_inbound_message

if TYPE_CHECKING:
    from src.session.client import SessionEventHandler

logger = logging.getLogger(__name__)

_USER_SERVER = "s.whatsapp.net"
_LEGACY_USER_SERVER = "c.us"
_SESSION_DB_NAME = "whatsapp.sqlite3"


def str_to_jid(chat_id: str) -> Any:
    user, _, server = chat_id.partition("@")
    if not server or server == _LEGACY_USER_SERVER:
        server = _USER_SERVER
    return build_jid(user, server)


def _log_connect_result(task: asyncio.Task[Any]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("WhatsApp session client stopped: %s", exc, exc_info=exc)


class NeonizeSessionClient:
    """``SessionClient`` implementation on top of ``NewAClient``."""

    def __init__(self, session_path: str) -> None:
        path = Path(session_path)
        path.mkdir(parents=True, exist_ok=True)
        self._client = NewAClient(str(path / _SESSION_DB_NAME))
        self._handler: SessionEventHandler | None = None
        self._task: asyncio.Task[Any] | None = None
        self._register_events()

    def attach(self, handler: SessionEventHandler) -> None:
        self._handler = handler

    def _register_events(self) -> None:
        client = self._client

        @client.qr
        async def _on_qr(_: NewAClient, data_qr: bytes) -> None:
            if self._handler:
                self._handler.on_pairing_code(data_qr.decode())

        @client.event(PairStatusEv)
        async def _on_pair_status(_: NewAClient, __: PairStatusEv) -> None:
            if self._handler:
                self._handler.on_authenticated()

        @client.event(ConnectedEv)
        async def _on_connected(_: NewAClient, __: ConnectedEv) -> None:
            if self._handler:
                self._handler.on_ready()

        @client.event(ConnectFailureEv)
        async def _on_connect_failure(_: NewAClient, event: ConnectFailureEv) -> None:
            if self._handler:
                self._handler.on_auth_failure(event.Message or str(event.Reason))

        @client.event(LoggedOutEv)
        async def _on_logged_out(_: NewAClient, event: LoggedOutEv) -> None:
            if self._handler:
                self._handler.on_disconnected(f"logged out ({event.Reason})")

        @client.event(DisconnectedEv)
        async def _on_disconnected(_: NewAClient, __: DisconnectedEv) -> None:
            if self._handler:
                self._handler.on_disconnected("connection lost")

        @client.event(MessageEv)
        async def _on_message(_: NewAClient, event: MessageEv) -> None:
            if self._handler is None:
                return
            try:
                message = to_inbound_message(event)
            except Exception:
                logger.exception("Could not decode incoming message")
                return
            await self._handler.on_message(message)

    async def start(self) -> None:
        logger.info("Starting WhatsApp session client")
        self._task = await self._client.connect()
        self._task.add_done_callback(_log_connect_result)

    async def stop(self) -> None:
        try:
            await self._client.disconnect()
        finally:
            task, self._task = self._task, None
            if task is not None and not task.done():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

    async def send_message(self, chat_id: str, text: str) -> None:
        await self._client.send_message(str_to_jid(chat_id), text)

    async def get_contact(self, message: InboundMessage) -> ContactInfo:
        info = await self._client.contact.get_contact(str_to_jid(message.sender_id))
        return ContactInfo(
            push_name=info.PushName or None,
            name=info.FullName or None,
        )

    async def get_group_chats(self) -> list[GroupChat]:
        groups = await self._client.get_joined_groups()
        return [
            GroupChat(
                id=jid_to_str(group.JID),
                name=group.GroupName.Name,
                participants=len(group.Participants),
            )
            for group in groups
        ]
