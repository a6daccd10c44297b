"""Capabilities the bridge needs from the chat automation engine."""

from __future__ import annotations

from typing import Protocol

from src.models import ContactInfo, GroupChat, InboundMessage


class SessionClient(Protocol):
    async def start(self) -> None:
        """Connect and begin delivering events."""
        ...

    async def stop(self) -> None:
        ...

    async def send_message(self, chat_id: str, text: str) -> None:
        ...

    async def get_contact(self, message: InboundMessage) -> ContactInfo:
        ...

    async def get_group_chats(self) -> list[GroupChat]:
        ...


class SessionEventHandler(Protocol):
    """Receiver for engine lifecycle and message events."""

    def on_pairing_code(self, code: str) -> None: ...

    def on_ready(self) -> None: ...

    def on_authenticated(self) -> None: ...

    def on_auth_failure(self, reason: str) -> None: ...

    def on_disconnected(self, reason: str) -> None: ...

    async def on_message(self, message: InboundMessage) -> None: ...
