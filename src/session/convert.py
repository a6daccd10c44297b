"""Conversion of neonize protobuf events into bridge models.

Only attribute access is used here, so the functions work on any object
shaped like the neonize messages.
"""

from __future__ import annotations

from typing import Any

from src.models import InboundMessage


def jid_to_str(jid: Any) -> str:
    """Format a JID as ``user@server`` without the device suffix."""
    return f"{jid.User}@{jid.Server}"


def message_text(msg: Any) -> str:
    return (
        msg.conversation
        or msg.extendedTextMessage.text
        or msg.imageMessage.caption
        or msg.videoMessage.caption
        or msg.documentMessage.caption
        or ""
    )


def to_inbound_message(event: Any) -> InboundMessage:
    """Convert a neonize ``MessageEv`` to an ``InboundMessage``."""
    info = event.Info
    source = info.MessageSource
    chat_id = jid_to_str(source.Chat)
    sender_id = jid_to_str(source.Sender) if source.Sender.User else chat_id
    timestamp = int(info.Timestamp)
    if timestamp > 10**12:  # milliseconds
        timestamp //= 1000
    return InboundMessage(
        chat_id=chat_id,
        sender_id=sender_id,
        author_id=sender_id if source.IsGroup else None,
        body=message_text(event.Message),
        timestamp=max(timestamp, 0),
        message_id=info.ID,
        is_group=source.IsGroup,
        from_me=source.IsFromMe,
        push_name=info.Pushname or None,
    )
