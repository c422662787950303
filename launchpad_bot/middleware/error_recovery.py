"""Error handling middleware.

Outermost pipeline stage. Times every request, reports slow ones, and turns
any failure raised further down the pipeline into one error log record and
one generic notice to the user. Nothing escapes this stage: a failing update
never takes the process down.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from ..bot.messages import GENERIC_ERROR_MESSAGE
from ..bot.types import BotRequest, NextStage
from ..bot.utils import send_notice

logger = logging.getLogger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 1000


class ErrorRecoveryMiddleware:
    """Pipeline stage that recovers from downstream failures."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        slow_request_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS,
    ):
        """Initialize the middleware.

        Args:
            clock: Returns the current time in seconds; injectable for tests.
            slow_request_threshold_ms: Duration above which a successful
                request is reported as slow.
        """
        self._clock = clock
        self.slow_request_threshold_ms = slow_request_threshold_ms

    def _elapsed_ms(self, started: float) -> int:
        return round((self._clock() - started) * 1000)

    async def __call__(self, request: BotRequest, call_next: NextStage) -> None:
        started = self._clock()
        inbound = request.inbound

        try:
            await call_next(request)
        except Exception as error:
            await self._recover(request, error, self._elapsed_ms(started))
            return

        duration_ms = self._elapsed_ms(started)
        if duration_ms > self.slow_request_threshold_ms:
            logger.warning(
                "Slow request detected: %s update from user %s took %dms",
                inbound.update_type,
                inbound.user_id,
                duration_ms,
                extra={
                    "user_id": inbound.user_id,
                    "username": inbound.username,
                    "update_type": inbound.update_type,
                    "duration_ms": duration_ms,
                },
            )

    async def _recover(self, request: BotRequest, error: Exception, duration_ms: int) -> None:
        inbound = request.inbound
        context: dict[str, Any] = {
            "update_type": inbound.update_type,
            "user_id": inbound.user_id,
            "username": inbound.username,
            "command": inbound.command_text,
            "duration_ms": duration_ms,
            "chat_id": inbound.chat_id,
            "chat_type": inbound.chat_type,
        }

        logger.error(
            "Unhandled error in middleware: %s (update_type=%s, user_id=%s, command=%r, "
            "duration=%dms, chat_id=%s, chat_type=%s)",
            error,
            inbound.update_type,
            inbound.user_id,
            inbound.command_text,
            duration_ms,
            inbound.chat_id,
            inbound.chat_type,
            exc_info=error,
            extra=context,
        )

        try:
            sent = await send_notice(request.update, request.context, GENERIC_ERROR_MESSAGE)
        except Exception as reply_error:
            logger.error(
                "Failed to send error message to user %s: %s (original error: %s)",
                inbound.user_id,
                reply_error,
                error,
                exc_info=reply_error,
                extra={"user_id": inbound.user_id, "original_error": str(error)},
            )
            return

        if not sent:
            logger.warning("No chat to deliver error message to user %s", inbound.user_id)
