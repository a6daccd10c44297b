"""Shared Pydantic data models for whatsapp-webhook-bridge."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class ConnectionStatus(str, Enum):
    DISCONNECTED = "disconnected"
    AWAITING_SCAN = "awaiting_scan"
    READY = "ready"


# --- Engine boundary models ---


class InboundMessage(BaseModel):
    """A chat message as delivered by the automation engine."""

    model_config = ConfigDict(frozen=True)

    chat_id: str
    sender_id: str
    author_id: str | None = None  # group participant; None in direct chats
    body: str
    timestamp: int = Field(ge=0)  # unix seconds
    message_id: str
    is_group: bool = False
    from_me: bool = False
    push_name: str | None = None


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    push_name: str | None = None
    name: str | None = None


class GroupChat(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    participants: int = Field(default=0, ge=0)
