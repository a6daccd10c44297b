"""Data models for the webhook forwarding path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.models import InboundMessage

UNKNOWN_SENDER = "Desconocido"


@dataclass
class WebhookPayload:
    """Body POSTed to the workflow webhook for one inbound message."""

    message: str
    sender_name: str
    sender_phone: str
    timestamp: int
    chat_id: str
    is_group: bool
    message_id: str

    @classmethod
    def from_message(cls, message: InboundMessage, sender_name: str) -> WebhookPayload:
        return cls(
            message=message.body,
            sender_name=sender_name,
            sender_phone=message.author_id or message.chat_id,
            timestamp=message.timestamp,
            chat_id=message.chat_id,
            is_group="@g.us" in message.chat_id,
            message_id=message.message_id,
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize using the field names the workflow expects."""
        return {
            "mensaje": self.message,
            "de": self.sender_name,
            "telefono": self.sender_phone,
            "timestamp": self.timestamp,
            "chatId": self.chat_id,
            "isGroup": self.is_group,
            "messageId": self.message_id,
        }
