"""Ordered middleware chain in front of the dispatcher.

Every update runs through the stages in order (error recovery, input
sanitizer, rate limiter) and then reaches the dispatcher. Each stage either
calls the next one or stops propagation. A ``Pipeline`` instance is itself a
python-telegram-bot callback, registered through a ``TypeHandler``.
"""

import logging
from collections.abc import Sequence

from telegram import Update
from telegram.ext import ContextTypes

from ..bot.dispatcher import Dispatcher
from ..bot.types import BotRequest, Middleware
from ..models import InboundUpdate

logger = logging.getLogger(__name__)


class Pipeline:
    """Runs middlewares in order, then dispatches."""

    def __init__(self, middlewares: Sequence[Middleware], dispatcher: Dispatcher):
        self.middlewares = tuple(middlewares)
        self.dispatcher = dispatcher

    async def __call__(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        request = BotRequest(
            update=update,
            context=context,
            inbound=InboundUpdate.from_telegram(update),
        )
        await self.process(request)

    async def process(self, request: BotRequest) -> None:
        await self._run_stage(0, request)

    async def _run_stage(self, index: int, request: BotRequest) -> None:
        if index == len(self.middlewares):
            await self.dispatcher.dispatch(request)
            return

        async def call_next(next_request: BotRequest) -> None:
            await self._run_stage(index + 1, next_request)

        await self.middlewares[index](request, call_next)
