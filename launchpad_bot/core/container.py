"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the middleware pipeline: the clock, the rate limiter, the pipeline stages and
the dispatcher. Tests override the clock provider to simulate time.
"""

import time

from dependency_injector import containers, providers

from launchpad_bot.bot.dispatcher import build_dispatcher
from launchpad_bot.config import Config
from launchpad_bot.middleware import (
    ErrorRecoveryMiddleware,
    InputSanitizer,
    Pipeline,
    RateLimiter,
    RateLimitMiddleware,
)


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the pipeline components.
    """

    config = providers.Configuration()

    clock = providers.Object(time.monotonic)

    # Middleware
    rate_limiter = providers.Singleton(
        RateLimiter,
        window=config.security.rate_limit_window,
        max_requests=config.security.rate_limit_max,
        sweep_interval=config.security.sweep_interval,
        clock=clock,
    )
    error_recovery = providers.Singleton(ErrorRecoveryMiddleware, clock=clock)
    input_sanitizer = providers.Singleton(
        InputSanitizer, max_length=config.security.max_message_length
    )
    rate_limit_middleware = providers.Singleton(RateLimitMiddleware, limiter=rate_limiter)

    # Bot components
    dispatcher = providers.Singleton(build_dispatcher, bot_username=config.bot.bot_username)
    pipeline = providers.Singleton(
        Pipeline,
        middlewares=providers.List(error_recovery, input_sanitizer, rate_limit_middleware),
        dispatcher=dispatcher,
    )


def create_container(config: Config) -> Container:
    """Build a container configured from the application settings."""
    container = Container()
    container.config.from_dict(
        {
            "bot": {"bot_username": config.bot.bot_username},
            "security": {
                "rate_limit_window": config.security.rate_limit_window_seconds,
                "rate_limit_max": config.security.rate_limit_max,
                "max_message_length": config.security.max_message_length,
                "sweep_interval": config.security.sweep_interval_seconds,
            },
        }
    )
    return container
