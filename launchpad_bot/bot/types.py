"""Typed structures shared across bot components."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any, Protocol

from telegram import Update
from telegram.ext import ContextTypes

from ..models import InboundUpdate

HandlerCallback = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]


@dataclass(frozen=True)
class BotRequest:
    """One update travelling through the middleware pipeline.

    Attributes:
        update: Original Telegram update, used for replies.
        context: Callback context of the python-telegram-bot application.
        inbound: Normalized (and, past the sanitizer, sanitized) payload.
    """

    update: Update
    context: Any
    inbound: InboundUpdate

    def with_inbound(self, inbound: InboundUpdate) -> BotRequest:
        return replace(self, inbound=inbound)


NextStage = Callable[[BotRequest], Awaitable[None]]


class Middleware(Protocol):
    """Pipeline stage: handles a request and may call the next stage."""

    async def __call__(self, request: BotRequest, call_next: NextStage) -> None: ...
