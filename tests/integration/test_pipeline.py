"""Integration tests for the full middleware pipeline."""

import logging
from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers
from telegram import Update

from launchpad_bot.bot.callbacks import CALLBACK_HANDLERS
from launchpad_bot.bot.dispatcher import Dispatcher
from launchpad_bot.bot.handlers import COMMAND_HANDLERS
from launchpad_bot.bot.messages import (
    GENERIC_ERROR_MESSAGE,
    RATE_LIMIT_MESSAGE,
    WELCOME_MESSAGE,
)
from launchpad_bot.config import Config
from launchpad_bot.core.container import create_container
from launchpad_bot.middleware import Pipeline


@pytest.fixture
def container(bot_config, clock):
    container = create_container(bot_config)
    container.clock.override(providers.Object(clock))
    yield container
    container.clock.reset_override()


def _pipeline_with(container, **commands):
    """Pipeline using the container's middlewares and replaced command handlers."""
    dispatcher = Dispatcher(dict(COMMAND_HANDLERS, **commands), CALLBACK_HANDLERS)
    return Pipeline(
        [
            container.error_recovery(),
            container.input_sanitizer(),
            container.rate_limit_middleware(),
        ],
        dispatcher,
    )


class TestPipelineFlow:
    """Test updates flowing through every stage to the handlers."""

    @pytest.mark.asyncio
    async def test_eleventh_request_in_window_is_denied(self, container, make_update, make_context):
        tiers_handler = AsyncMock()
        pipeline = _pipeline_with(container, tiers=tiers_handler)
        context = make_context()
        updates = [make_update("/tiers") for _ in range(11)]

        for update in updates:
            await pipeline(update, context)

        assert tiers_handler.await_count == 10
        for update in updates[:10]:
            update.effective_message.reply_text.assert_not_awaited()
        updates[10].effective_message.reply_text.assert_awaited_once_with(RATE_LIMIT_MESSAGE)

    @pytest.mark.asyncio
    async def test_window_reopens_after_expiry(self, container, clock, make_update, make_context):
        tiers_handler = AsyncMock()
        pipeline = _pipeline_with(container, tiers=tiers_handler)
        context = make_context()

        for _ in range(11):
            await pipeline(make_update("/tiers"), context)
        clock.advance(61)
        await pipeline(make_update("/tiers"), context)

        assert tiers_handler.await_count == 11

    @pytest.mark.asyncio
    async def test_failing_handler_yields_one_notice_and_one_error(
        self, container, make_update, make_context, caplog
    ):
        failing = AsyncMock(side_effect=RuntimeError("tier catalogue offline"))
        pipeline = _pipeline_with(container, price=failing)
        update = make_update("/price")

        with caplog.at_level(logging.DEBUG):
            await pipeline(update, make_context())

        update.effective_message.reply_text.assert_awaited_once_with(GENERIC_ERROR_MESSAGE)
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert "tier catalogue offline" in errors[0].getMessage()
        assert errors[0].user_id == 12345

    @pytest.mark.asyncio
    async def test_failing_real_handler_logs_warning_then_error(
        self, container, make_update, make_context, caplog
    ):
        """A decorated handler reports the failed command, recovery reports the error."""
        pipeline = container.pipeline()
        update = make_update("/mint")
        update.effective_message.reply_text = AsyncMock(
            side_effect=[RuntimeError("flood control"), None]
        )

        with caplog.at_level(logging.DEBUG):
            await pipeline(update, make_context())

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert any(getattr(r, "success", None) is False for r in warnings)
        last_call = update.effective_message.reply_text.await_args_list[-1]
        assert last_call.args == (GENERIC_ERROR_MESSAGE,)

    @pytest.mark.asyncio
    async def test_update_without_user_is_sanitized_and_dispatched(
        self, container, make_update, make_context
    ):
        pipeline = container.pipeline()
        update = make_update("  </start>  ", user_id=None, chat_type="group")

        await pipeline(update, make_context())

        update.effective_message.reply_text.assert_awaited_once()
        assert update.effective_message.reply_text.await_args.args[0] == WELCOME_MESSAGE
        assert len(container.rate_limiter()) == 0

    @pytest.mark.asyncio
    async def test_callback_is_answered_and_replied(self, container, make_update, make_context):
        pipeline = container.pipeline()
        update = make_update(callback_data="supply")
        events = []
        update.callback_query.answer = AsyncMock(side_effect=lambda: events.append("answer"))
        update.effective_message.reply_text = AsyncMock(
            side_effect=lambda *args, **kwargs: events.append("reply")
        )

        await pipeline(update, make_context())

        assert events == ["answer", "reply"]

    @pytest.mark.asyncio
    async def test_unknown_command_gets_no_reply(self, container, make_update, make_context):
        pipeline = container.pipeline()
        update = make_update("/airdrop")

        await pipeline(update, make_context())

        update.effective_message.reply_text.assert_not_awaited()
        # Ignored updates still count toward the limit
        assert container.rate_limiter().get_entry(12345).count == 1

    @pytest.mark.asyncio
    async def test_throttled_chat_member_update_notifies_chat(
        self, clock, make_context, caplog, monkeypatch
    ):
        """Updates without a message are throttled with a chat notice, not an error."""
        monkeypatch.setenv("RATE_LIMIT_MAX", "1")
        container = create_container(Config())
        container.clock.override(providers.Object(clock))
        pipeline = container.pipeline()
        context = make_context()
        context.bot.send_message = AsyncMock()

        with caplog.at_level(logging.DEBUG):
            for update_id in (1, 2):
                await pipeline(_chat_member_update(update_id, user_id=42), context)

        context.bot.send_message.assert_awaited_once_with(chat_id=42, text=RATE_LIMIT_MESSAGE)
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert any("Rate limit exceeded for user 42" in r.getMessage() for r in caplog.records)


def _chat_member_update(update_id, user_id):
    user = {"id": user_id, "is_bot": False, "first_name": "Ada"}
    bot_user = {"id": 999, "is_bot": True, "first_name": "Launchpad"}
    return Update.de_json(
        {
            "update_id": update_id,
            "my_chat_member": {
                "chat": {"id": user_id, "type": "private", "first_name": "Ada"},
                "from": user,
                "date": 1700000000,
                "old_chat_member": {"user": bot_user, "status": "member"},
                "new_chat_member": {"user": bot_user, "status": "left"},
            },
        },
        None,
    )
