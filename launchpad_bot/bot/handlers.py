"""Telegram bot command handlers.

Each handler sends one templated reply with the launchpad button. Handlers
hold no state and have no side effects beyond the reply and the activity log
record written by ``command_handler``.
"""

import logging
from typing import Any

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from .messages import HELP_MESSAGE, MINT_MESSAGE, PHASE_MESSAGE, WELCOME_MESSAGE
from .response_formatter import create_launchpad_button, response_formatter
from .utils import command_handler, get_bot_config, reply_text

logger = logging.getLogger(__name__)


async def reply_with_launchpad(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    text: str,
    markdown: bool = True,
) -> None:
    """Reply with ``text`` and the "Open Launchpad" button.

    Args:
        update: Telegram update to answer.
        context: Bot context holding the configuration.
        text: Message text.
        markdown: Render the text with Telegram Markdown.
    """
    config = get_bot_config(context)
    kwargs: dict[str, Any] = {"reply_markup": create_launchpad_button(config.launchpad.url)}
    if markdown:
        kwargs["parse_mode"] = ParseMode.MARKDOWN
    await reply_text(update, text, **kwargs)


async def send_tiers(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with every NFT tier and its benefits."""
    tiers = get_bot_config(context).tiers
    await reply_with_launchpad(update, context, response_formatter.format_tiers(tiers))


async def send_prices(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with the current price of each tier."""
    tiers = get_bot_config(context).tiers
    await reply_with_launchpad(update, context, response_formatter.format_prices(tiers))


async def send_supply(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with supply limits and token IDs."""
    tiers = get_bot_config(context).tiers
    await reply_with_launchpad(update, context, response_formatter.format_supply(tiers))


async def send_phase(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with the pricing phase overview."""
    await reply_with_launchpad(update, context, PHASE_MESSAGE)


@command_handler("start", log_chat_type=True)
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command.

    Sends the welcome message as plain text with the launchpad button.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    await reply_with_launchpad(update, context, WELCOME_MESSAGE, markdown=False)


@command_handler("tiers")
async def tiers(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /tiers command."""
    await send_tiers(update, context)


@command_handler("price")
async def price(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /price command."""
    await send_prices(update, context)


@command_handler("supply")
async def supply(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /supply command."""
    await send_supply(update, context)


@command_handler("phase")
async def phase(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /phase command."""
    await send_phase(update, context)


@command_handler("mint")
async def mint(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /mint command - step-by-step minting instructions."""
    await reply_with_launchpad(update, context, MINT_MESSAGE)


@command_handler("help")
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - list every available command."""
    await reply_with_launchpad(update, context, HELP_MESSAGE)


COMMAND_HANDLERS = {
    "start": start,
    "tiers": tiers,
    "price": price,
    "supply": supply,
    "phase": phase,
    "mint": mint,
    "help": help_command,
}
