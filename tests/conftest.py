"""Shared test fixtures for whatsapp-webhook-bridge."""

from __future__ import annotations

from typing import Any

import pytest

from src.config import BridgeSettings
from src.models import ContactInfo, GroupChat, InboundMessage
from src.session.state import SessionState

GROUP_ID = "120363000000000000@g.us"
USER_ID = "5491100000000@s.whatsapp.net"


class FakeSessionClient:
    """In-memory SessionClient recording what the bridge asks of it."""

    def __init__(
        self,
        contact: ContactInfo | None = None,
        groups: list[GroupChat] | None = None,
    ) -> None:
        self.contact = contact or ContactInfo()
        self.groups = groups or []
        self.sent: list[tuple[str, str]] = []
        self.started = False
        self.stopped = False
        self.send_error: Exception | None = None
        self.contact_error: Exception | None = None
        self.groups_error: Exception | None = None

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    async def send_message(self, chat_id: str, text: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((chat_id, text))

    async def get_contact(self, message: InboundMessage) -> ContactInfo:
        if self.contact_error is not None:
            raise self.contact_error
        return self.contact

    async def get_group_chats(self) -> list[GroupChat]:
        if self.groups_error is not None:
            raise self.groups_error
        return self.groups


@pytest.fixture
def fake_client() -> FakeSessionClient:
    return FakeSessionClient()


@pytest.fixture
def session_state() -> SessionState:
    return SessionState()


# --- Factory functions for test data ---


def make_inbound_message(**kwargs: Any) -> InboundMessage:
    """Factory for InboundMessage with sensible defaults (a direct chat)."""
    defaults: dict[str, Any] = {
        "chat_id": USER_ID,
        "sender_id": USER_ID,
        "author_id": None,
        "body": "hola",
        "timestamp": 1_700_000_000,
        "message_id": "3EB0C0FFEE",
        "is_group": False,
        "from_me": False,
        "push_name": None,
    }
    defaults.update(kwargs)
    return InboundMessage(**defaults)


def make_group_message(**kwargs: Any) -> InboundMessage:
    defaults: dict[str, Any] = {
        "chat_id": GROUP_ID,
        "author_id": USER_ID,
        "is_group": True,
    }
    defaults.update(kwargs)
    return make_inbound_message(**defaults)


def make_settings(**kwargs: Any) -> BridgeSettings:
    defaults: dict[str, Any] = {
        "group_id": None,
        "webhook_url": "http://n8n.test/webhook/bridge",
    }
    defaults.update(kwargs)
    return BridgeSettings(**defaults)
