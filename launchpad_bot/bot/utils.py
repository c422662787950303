"""Bot utility functions shared by handlers and middleware.

Provides reply helpers, access to the configuration stored on the
application, the per-command activity log, and the decorators that give
every command and callback handler the same logging and failure contract.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from telegram import Update
from telegram.ext import ContextTypes

from ..config import Config
from .types import HandlerCallback

logger = logging.getLogger(__name__)

CONFIG_KEY = "config"


class ReplyUnavailableError(RuntimeError):
    """Raised when an update carries no message that can be replied to."""


async def reply_text(update: Update, text: str, **kwargs: Any) -> None:
    """Send a text reply into the chat the update came from.

    Args:
        update: Telegram update to answer.
        text: Message text.
        **kwargs: Extra ``reply_text`` options (parse_mode, reply_markup).

    Raises:
        ReplyUnavailableError: If the update has no effective message.
    """
    message = update.effective_message
    if message is None:
        raise ReplyUnavailableError("Update has no message to reply to")
    await message.reply_text(text, **kwargs)


async def send_notice(update: Update, context: Any, text: str) -> bool:
    """Deliver a middleware notice to the user.

    Replies to the update's message when there is one. Updates that carry a
    chat but no message (``my_chat_member`` and similar) get the notice sent
    to the chat through the bot instead.

    Returns:
        True if the notice was sent, False if the update has no chat.
    """
    message = update.effective_message
    if message is not None:
        await message.reply_text(text)
        return True

    chat = update.effective_chat
    if chat is None or context is None:
        return False
    await context.bot.send_message(chat_id=chat.id, text=text)
    return True


def get_bot_config(context: ContextTypes.DEFAULT_TYPE) -> Config:
    """Return the configuration stored in ``bot_data`` at startup."""
    return context.bot_data[CONFIG_KEY]


def log_command(
    command: str,
    user_id: int | None,
    username: str | None,
    success: bool = True,
    **meta: Any,
) -> None:
    """Write the structured activity record of one handled command.

    Successful commands are logged at INFO, failures at WARNING; the
    error-level record of a failure is written by the error recovery
    middleware.

    Args:
        command: Command or ``callback:<action>`` name.
        user_id: Acting Telegram user ID.
        username: Acting user's username.
        success: Whether the handler completed.
        **meta: Optional context such as the chat type.
    """
    level = logging.INFO if success else logging.WARNING
    logger.log(
        level,
        "Command: %s (user_id=%s, username=%s, success=%s)",
        command,
        user_id,
        username,
        success,
        extra={
            "command": command,
            "user_id": user_id,
            "username": username,
            "success": success,
            **meta,
        },
    )


def _user_fields(update: Update) -> tuple[int | None, str | None]:
    user = update.effective_user
    if user is None:
        return None, None
    return user.id, user.username


def command_handler(
    name: str, *, log_chat_type: bool = False
) -> Callable[[HandlerCallback], HandlerCallback]:
    """Give a command handler its activity logging and failure contract.

    The wrapped handler logs success after replying. On failure it logs the
    command with ``success=False`` and re-raises, leaving the user notice to
    the error recovery middleware.

    Args:
        name: Command name without the leading slash.
        log_chat_type: Include the chat type in the success record.
    """

    def decorator(func: HandlerCallback) -> HandlerCallback:
        @wraps(func)
        async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            user_id, username = _user_fields(update)
            try:
                await func(update, context)
            except Exception as e:
                log_command(name, user_id, username, success=False, error=str(e))
                raise

            meta: dict[str, Any] = {}
            if log_chat_type and update.effective_chat is not None:
                meta["chat_type"] = str(update.effective_chat.type)
            log_command(name, user_id, username, **meta)

        return wrapper

    return decorator


def callback_handler(action: str) -> Callable[[HandlerCallback], HandlerCallback]:
    """Give an inline-button handler its acknowledgement and logging contract.

    The callback query is answered before the reply is composed so the client
    stops its loading indicator right away.

    Args:
        action: Callback data the handler is registered for.
    """
    name = f"callback:{action}"

    def decorator(func: HandlerCallback) -> HandlerCallback:
        @wraps(func)
        async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            user_id, username = _user_fields(update)
            if update.callback_query is not None:
                await update.callback_query.answer()

            try:
                await func(update, context)
            except Exception as e:
                log_command(name, user_id, username, success=False, error=str(e))
                raise

            log_command(name, user_id, username)

        return wrapper

    return decorator
