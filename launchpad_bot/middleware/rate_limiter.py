"""Rate limiting middleware to prevent abuse.

Limits the number of requests a user can make within a fixed time window.
The per-user counters live inside ``RateLimiter``; a cooperative background
task owned by the limiter sweeps expired entries so memory stays bounded by
the set of recently active users.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable

from ..bot.messages import RATE_LIMIT_MESSAGE
from ..bot.types import BotRequest, NextStage
from ..bot.utils import send_notice
from ..models import RateLimitEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class RateLimiter:
    """Per-user fixed-window request counter.

    Configuration:
        window: Window length in seconds.
        max_requests: Requests admitted per user inside one window.
        sweep_interval: Seconds between expired-entry sweeps.
        clock: Returns the current time in seconds; injectable for tests.

    Behavior:
        - The first request, or the first after the window expired, starts a
          fresh window with a count of 1 and is admitted.
        - Inside a live window requests are admitted until the count reaches
          ``max_requests``; later requests are denied.
        - Denied requests change nothing.
    """

    def __init__(
        self,
        window: float,
        max_requests: int,
        sweep_interval: float = 60.0,
        clock: Clock = time.monotonic,
    ):
        self.window = window
        self.max_requests = max_requests
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[int, RateLimitEntry] = {}
        self._sweep_task: asyncio.Task[None] | None = None

    def check(self, user_id: int) -> bool:
        """Run the admission check for one request.

        Args:
            user_id: Telegram user ID.

        Returns:
            True if the request is admitted, False if it is denied.
        """
        now = self._clock()
        entry = self._entries.get(user_id)

        if entry is None or entry.reset_at < now:
            self._entries[user_id] = RateLimitEntry(count=1, reset_at=now + self.window)
            return True

        if entry.count >= self.max_requests:
            return False

        entry.count += 1
        return True

    def get_entry(self, user_id: int) -> RateLimitEntry | None:
        """Return a copy of the user's counter, None if there is none."""
        entry = self._entries.get(user_id)
        return entry.model_copy() if entry is not None else None

    def __len__(self) -> int:
        return len(self._entries)

    def sweep(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [user_id for user_id, entry in self._entries.items() if entry.reset_at < now]
        for user_id in expired:
            del self._entries[user_id]
        return len(expired)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            removed = self.sweep()
            if removed:
                logger.debug("Rate limiter sweep removed %d expired entries", removed)

    @property
    def running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    async def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.running:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop(), name="rate-limit-sweep")
        logger.info("Rate limiter sweep started (every %.0fs)", self.sweep_interval)

    async def stop(self) -> None:
        """Stop the periodic sweep."""
        task = self._sweep_task
        self._sweep_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Rate limiter sweep stopped")


class RateLimitMiddleware:
    """Pipeline stage that enforces the rate limit.

    Updates without a user ID (channel posts, system events) bypass the
    limiter and are always admitted. A denied request gets one notice and
    goes no further: no handler runs and no error is raised.
    """

    def __init__(self, limiter: RateLimiter):
        self.limiter = limiter

    async def __call__(self, request: BotRequest, call_next: NextStage) -> None:
        inbound = request.inbound
        if inbound.user_id is None:
            await call_next(request)
            return

        if not self.limiter.check(inbound.user_id):
            logger.warning(
                "Rate limit exceeded for user %s (username=%s, command=%r)",
                inbound.user_id,
                inbound.username,
                inbound.text,
                extra={
                    "user_id": inbound.user_id,
                    "username": inbound.username,
                    "command": inbound.text,
                    "chat_type": inbound.chat_type,
                },
            )
            if not await send_notice(request.update, request.context, RATE_LIMIT_MESSAGE):
                logger.warning("No chat to deliver rate limit notice to user %s", inbound.user_id)
            return

        await call_next(request)
