"""Tests for the normalized inbound update model."""

import pytest
from pydantic import ValidationError
from telegram import Update

from launchpad_bot.models import InboundUpdate, RateLimitEntry

USER = {"id": 4242, "is_bot": False, "first_name": "Ada", "username": "ada"}
PRIVATE_CHAT = {"id": 4242, "type": "private", "first_name": "Ada"}


def _telegram_update(payload):
    return Update.de_json({"update_id": 1, **payload}, None)


def test_message_update():
    update = _telegram_update(
        {
            "message": {
                "message_id": 10,
                "date": 1700000000,
                "chat": PRIVATE_CHAT,
                "from": USER,
                "text": "/tiers",
            }
        }
    )

    inbound = InboundUpdate.from_telegram(update)

    assert inbound.update_type == "message"
    assert inbound.user_id == 4242
    assert inbound.username == "ada"
    assert inbound.text == "/tiers"
    assert inbound.callback_data is None
    assert inbound.chat_id == 4242
    assert inbound.chat_type == "private"
    assert inbound.command_text == "/tiers"


def test_callback_query_update():
    update = _telegram_update(
        {
            "callback_query": {
                "id": "cb-1",
                "from": USER,
                "chat_instance": "ci",
                "data": "price",
                "message": {
                    "message_id": 11,
                    "date": 1700000000,
                    "chat": PRIVATE_CHAT,
                    "text": "menu",
                },
            }
        }
    )

    inbound = InboundUpdate.from_telegram(update)

    assert inbound.update_type == "callback_query"
    assert inbound.callback_data == "price"
    assert inbound.text is None
    assert inbound.command_text == "price"
    assert inbound.chat_id == 4242


def test_channel_post_has_no_user():
    update = _telegram_update(
        {
            "channel_post": {
                "message_id": 12,
                "date": 1700000000,
                "chat": {"id": -100123, "type": "channel", "title": "News"},
                "text": "/start",
            }
        }
    )

    inbound = InboundUpdate.from_telegram(update)

    assert inbound.update_type == "channel_post"
    assert inbound.user_id is None
    assert inbound.username is None
    assert inbound.chat_type == "channel"
    # Only direct messages carry a command payload
    assert inbound.text is None


def test_inbound_update_is_immutable():
    inbound = InboundUpdate(update_type="message", text="/start")

    with pytest.raises(ValidationError):
        inbound.text = "/help"

    assert inbound.model_copy(update={"text": "/help"}).text == "/help"


def test_rate_limit_entry_rejects_negative_count():
    with pytest.raises(ValidationError):
        RateLimitEntry(count=-1, reset_at=0.0)
