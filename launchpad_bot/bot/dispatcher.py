"""Command and callback dispatch.

Maps each update to exactly one registered handler: text commands by command
name, inline-button callbacks by their exact callback data. The dispatch
tables are explicit mappings over a closed set of declared tags and are
checked for completeness when the dispatcher is built, so a declared command
can never be silently left without a handler. Command handlers receive the
sanitized words after the command name in ``context.args``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Final

from ..models import InboundUpdate
from .callbacks import CALLBACK_HANDLERS
from .handlers import COMMAND_HANDLERS
from .types import BotRequest, HandlerCallback

logger = logging.getLogger(__name__)

COMMANDS: Final[tuple[str, ...]] = ("start", "tiers", "price", "supply", "phase", "mint", "help")
CALLBACK_ACTIONS: Final[tuple[str, ...]] = ("tiers", "price", "supply", "phase")

COMMAND_PATTERN: Final[re.Pattern[str]] = re.compile(r"^/([A-Za-z0-9_]+)(?:@([A-Za-z0-9_]+))?(?:\s|$)")


class DispatchTableError(RuntimeError):
    """Raised when a dispatch table does not match its declared tags."""


def _check_table(kind: str, table: Mapping[str, HandlerCallback], declared: Iterable[str]) -> None:
    declared_set = set(declared)
    missing = sorted(declared_set - table.keys())
    unexpected = sorted(table.keys() - declared_set)
    if missing or unexpected:
        raise DispatchTableError(
            f"{kind} dispatch table mismatch: missing={missing}, undeclared={unexpected}"
        )


def command_args(text: str | None) -> list[str]:
    """Split the words following the command name, as PTB's CommandHandler does."""
    if not text:
        return []
    return text.split()[1:]


class Dispatcher:
    """Routes updates to command and callback handlers."""

    def __init__(
        self,
        commands: Mapping[str, HandlerCallback],
        callbacks: Mapping[str, HandlerCallback],
        declared_commands: Iterable[str] = COMMANDS,
        declared_callbacks: Iterable[str] = CALLBACK_ACTIONS,
        bot_username: str | None = None,
    ):
        """Initialize dispatcher and validate its tables.

        Args:
            commands: Handler per command name.
            callbacks: Handler per callback action.
            declared_commands: Commands the bot advertises.
            declared_callbacks: Callback actions the bot's buttons emit.
            bot_username: Bot username; ``/cmd@other_bot`` is ignored.

        Raises:
            DispatchTableError: If a table misses a declared tag or registers
                an undeclared one.
        """
        _check_table("command", commands, declared_commands)
        _check_table("callback", callbacks, declared_callbacks)

        self._commands = dict(commands)
        self._callbacks = dict(callbacks)
        self._bot_username = bot_username.lstrip("@").lower() if bot_username else None

    def parse_command(self, text: str | None) -> str | None:
        """Extract the command name addressed to this bot from message text."""
        if not text:
            return None

        match = COMMAND_PATTERN.match(text)
        if match is None:
            return None

        command, addressee = match.groups()
        if addressee and self._bot_username and addressee.lower() != self._bot_username:
            return None
        return command.lower()

    def resolve(self, inbound: InboundUpdate) -> tuple[str, HandlerCallback] | None:
        """Find the handler for an update.

        Returns:
            ``(tag, handler)`` where tag is ``/name`` for commands and
            ``callback:action`` for callbacks, or None when nothing matches.
        """
        if inbound.update_type == "callback_query":
            action = inbound.callback_data
            if action is not None and action in self._callbacks:
                return f"callback:{action}", self._callbacks[action]
            return None

        if inbound.update_type == "message":
            command = self.parse_command(inbound.text)
            if command is not None and command in self._commands:
                return f"/{command}", self._commands[command]

        return None

    async def dispatch(self, request: BotRequest) -> bool:
        """Run the matching handler for a request.

        Unmatched updates are ignored, not treated as errors.

        Returns:
            True if a handler ran.
        """
        resolved = self.resolve(request.inbound)
        if resolved is None:
            logger.debug(
                "No handler for %s update from user %s",
                request.inbound.update_type,
                request.inbound.user_id,
            )
            return False

        tag, handler = resolved
        logger.debug("Dispatching %s for user %s", tag, request.inbound.user_id)
        if request.inbound.update_type == "message":
            # Handlers read arguments from context.args, never the raw message text
            request.context.args = command_args(request.inbound.text)
        await handler(request.update, request.context)
        return True

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(self._commands)


def build_dispatcher(bot_username: str | None = None) -> Dispatcher:
    """Build the dispatcher with the bot's command and callback handlers."""
    return Dispatcher(COMMAND_HANDLERS, CALLBACK_HANDLERS, bot_username=bot_username)
