"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: an isolated environment, a
controllable clock, and mocked Telegram updates and contexts. Ensures test
isolation and consistency.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from launchpad_bot.bot.utils import CONFIG_KEY
from launchpad_bot.config import Config

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "123456:test_bot_token_placeholder")
TEST_LAUNCHPAD_URL = "https://launchpad.example.com/app"
TEST_USER_ID = 12345

_ISOLATED_VARS = (
    "BOT_USERNAME",
    "WEBHOOK_DOMAIN",
    "WEBHOOK_PATH",
    "WEBHOOK_SECRET",
    "PORT",
    "BOT_LISTEN_HOST",
    "RATE_LIMIT_WINDOW",
    "RATE_LIMIT_MAX",
    "MAX_MESSAGE_LENGTH",
    "RATE_LIMIT_SWEEP_INTERVAL",
    "LOGS_DIR",
)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup test environment variables for all tests."""
    for key in _ISOLATED_VARS:
        monkeypatch.delenv(key, raising=False)

    test_env = {
        "BOT_TOKEN": TEST_BOT_TOKEN,
        "LAUNCHPAD_URL": TEST_LAUNCHPAD_URL,
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bot_config():
    """Configuration loaded from the test environment."""
    return Config()


@pytest.fixture
def make_update():
    """Factory for mocked Telegram updates.

    A message update is built unless ``callback_data`` is given. Pass
    ``user_id=None`` for updates without an originating user.
    """

    def _make_update(
        text: str | None = "/start",
        *,
        callback_data: str | None = None,
        user_id: int | None = TEST_USER_ID,
        username: str | None = "test_user",
        chat_id: int | None = 777,
        chat_type: str = "private",
    ):
        update = MagicMock()
        update.effective_user = (
            MagicMock(id=user_id, username=username) if user_id is not None else None
        )

        chat = MagicMock(id=chat_id, type=chat_type)
        update.effective_chat = chat

        message = MagicMock()
        message.text = text
        message.chat = chat
        message.reply_text = AsyncMock()
        update.effective_message = message

        if callback_data is not None:
            query = MagicMock(data=callback_data, message=message)
            query.answer = AsyncMock()
            update.callback_query = query
            update.message = None
        else:
            update.callback_query = None
            update.message = message

        return update

    return _make_update


@pytest.fixture
def make_context(bot_config):
    """Factory for mocked handler contexts carrying the configuration."""

    def _make_context(config=None):
        context = MagicMock()
        context.bot_data = {CONFIG_KEY: config or bot_config}
        return context

    return _make_context
