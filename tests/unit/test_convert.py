"""Tests for converting engine message events into bridge models."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from src.session.convert import jid_to_str, to_inbound_message


def _jid(user: str, server: str) -> SimpleNamespace:
    return SimpleNamespace(User=user, Server=server)


def _text_message(**kwargs: Any) -> SimpleNamespace:
    empty = SimpleNamespace(text="", caption="")
    fields: dict[str, Any] = {
        "conversation": "",
        "extendedTextMessage": empty,
        "imageMessage": empty,
        "videoMessage": empty,
        "documentMessage": empty,
    }
    fields.update(kwargs)
    return SimpleNamespace(**fields)


def _event(
    chat: SimpleNamespace,
    sender: SimpleNamespace,
    is_group: bool,
    message: SimpleNamespace,
    timestamp: int = 1_700_000_000,
    from_me: bool = False,
) -> SimpleNamespace:
    source = SimpleNamespace(Chat=chat, Sender=sender, IsGroup=is_group, IsFromMe=from_me)
    info = SimpleNamespace(
        MessageSource=source, ID="3EB0ABC", Pushname="Ana", Timestamp=timestamp,
    )
    return SimpleNamespace(Info=info, Message=message)


def test_jid_to_str() -> None:
    assert jid_to_str(_jid("549111", "s.whatsapp.net")) == "549111@s.whatsapp.net"


def test_group_message_conversion() -> None:
    event = _event(
        chat=_jid("120363000", "g.us"),
        sender=_jid("549111", "s.whatsapp.net"),
        is_group=True,
        message=_text_message(conversation="hola grupo"),
    )
    msg = to_inbound_message(event)
    assert msg.chat_id == "120363000@g.us"
    assert msg.author_id == "549111@s.whatsapp.net"
    assert msg.is_group is True
    assert msg.body == "hola grupo"
    assert msg.message_id == "3EB0ABC"
    assert msg.push_name == "Ana"
    assert msg.timestamp == 1_700_000_000


def test_direct_message_has_no_author() -> None:
    event = _event(
        chat=_jid("549111", "s.whatsapp.net"),
        sender=_jid("549111", "s.whatsapp.net"),
        is_group=False,
        message=_text_message(extendedTextMessage=SimpleNamespace(text="link https://x")),
        from_me=True,
    )
    msg = to_inbound_message(event)
    assert msg.author_id is None
    assert msg.body == "link https://x"
    assert msg.from_me is True


def test_millisecond_timestamp_normalized() -> None:
    event = _event(
        chat=_jid("549111", "s.whatsapp.net"),
        sender=_jid("549111", "s.whatsapp.net"),
        is_group=False,
        message=_text_message(conversation="x"),
        timestamp=1_700_000_000_123,
    )
    assert to_inbound_message(event).timestamp == 1_700_000_000
