"""Tests for dependency-injection wiring."""

from dependency_injector import providers

from launchpad_bot.config import Config
from launchpad_bot.core.container import create_container
from launchpad_bot.middleware import (
    ErrorRecoveryMiddleware,
    InputSanitizer,
    Pipeline,
    RateLimitMiddleware,
)


def test_pipeline_stage_order(bot_config):
    container = create_container(bot_config)

    pipeline = container.pipeline()

    assert isinstance(pipeline, Pipeline)
    assert [type(stage) for stage in pipeline.middlewares] == [
        ErrorRecoveryMiddleware,
        InputSanitizer,
        RateLimitMiddleware,
    ]


def test_settings_reach_components(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_WINDOW", "5000")
    monkeypatch.setenv("RATE_LIMIT_MAX", "2")
    monkeypatch.setenv("MAX_MESSAGE_LENGTH", "64")
    monkeypatch.setenv("BOT_USERNAME", "LaunchpadBot")

    container = create_container(Config())

    limiter = container.rate_limiter()
    assert limiter.window == 5.0
    assert limiter.max_requests == 2
    assert container.input_sanitizer().max_length == 64
    assert container.dispatcher().parse_command("/help@OtherBot") is None


def test_components_are_shared(bot_config):
    container = create_container(bot_config)

    assert container.rate_limit_middleware().limiter is container.rate_limiter()
    assert container.pipeline() is container.pipeline()


def test_clock_can_be_overridden(bot_config, clock):
    container = create_container(bot_config)
    container.clock.override(providers.Object(clock))

    limiter = container.rate_limiter()
    limiter.check(1)

    assert limiter.get_entry(1).reset_at == clock() + 60.0
