"""Callback query handlers for inline button interactions.

Every callback is acknowledged before its reply is composed; the replies are
the same as the matching commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from .handlers import send_phase, send_prices, send_supply, send_tiers
from .utils import callback_handler


@callback_handler("tiers")
async def tiers_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await send_tiers(update, context)


@callback_handler("price")
async def price_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await send_prices(update, context)


@callback_handler("supply")
async def supply_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await send_supply(update, context)


@callback_handler("phase")
async def phase_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await send_phase(update, context)


CALLBACK_HANDLERS = {
    "tiers": tiers_callback,
    "price": price_callback,
    "supply": supply_callback,
    "phase": phase_callback,
}
