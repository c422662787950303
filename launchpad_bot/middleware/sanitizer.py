"""Input validation and sanitization middleware.

Strips angle brackets from text and callback payloads, trims them and caps
their length before any handler inspects them. Sanitization never rejects an
update; it always produces a (possibly empty) string.
"""

import logging
import re
from typing import Final

from ..bot.types import BotRequest, NextStage

logger = logging.getLogger(__name__)

UNSAFE_CHARS: Final[re.Pattern[str]] = re.compile(r"[<>]")
DEFAULT_MAX_LENGTH: Final[int] = 4096


def sanitize_input(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Sanitize one text payload.

    Removes every ``<`` and ``>``, trims surrounding whitespace and truncates
    to ``max_length`` characters. The result is trimmed again after the cut,
    which keeps the function idempotent.

    Args:
        text: Raw message text or callback data.
        max_length: Maximum length of the result.

    Returns:
        Sanitized text.
    """
    cleaned = UNSAFE_CHARS.sub("", text).strip()
    return cleaned[:max_length].rstrip()


class InputSanitizer:
    """Pipeline stage that sanitizes the update payload."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        self.max_length = max_length

    def sanitize(self, text: str) -> str:
        return sanitize_input(text, self.max_length)

    async def __call__(self, request: BotRequest, call_next: NextStage) -> None:
        inbound = request.inbound
        changes: dict[str, str] = {}

        if inbound.text is not None:
            changes["text"] = self.sanitize(inbound.text)
        if inbound.callback_data is not None:
            changes["callback_data"] = self.sanitize(inbound.callback_data)

        if changes:
            sanitized = inbound.model_copy(update=changes)
            if sanitized != inbound:
                logger.debug(
                    "Sanitized %s payload from user %s", inbound.update_type, inbound.user_id
                )
            request = request.with_inbound(sanitized)

        await call_next(request)
