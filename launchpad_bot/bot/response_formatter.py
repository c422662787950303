"""Response formatting for bot messages.

Builds the tier, price and supply messages from the tier catalogue and the
inline "Open Launchpad" button. The button is a pure function of the
configured launchpad URL, never of request content.
"""

from collections.abc import Iterable

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo

from ..models import TierInfo
from .messages import (
    LAUNCHPAD_BUTTON_TEXT,
    PRICE_ENTITLEMENT_LINE,
    PRICE_FOOTER,
    PRICE_HEADER,
    PRICE_TIER_LINE,
    SUPPLY_FOOTER,
    SUPPLY_HEADER,
    SUPPLY_TOKEN_ID_LINE,
    TIER_DESCRIPTION_LINE,
    TIER_ENTITLEMENT_LINE,
    TIER_MAX_SUPPLY_LINE,
    TIER_NAME_LINE,
    TIER_PRICE_LINE,
    TIERS_FOOTER,
    TIERS_HEADER,
)


def create_launchpad_button(url: str) -> InlineKeyboardMarkup:
    """Build the single-button keyboard that opens the launchpad web app.

    Args:
        url: Launchpad URL from configuration.

    Returns:
        Inline keyboard with one Web App button.
    """
    button = InlineKeyboardButton(LAUNCHPAD_BUTTON_TEXT, web_app=WebAppInfo(url=url))
    return InlineKeyboardMarkup([[button]])


class ResponseFormatter:
    """Formats tier catalogue responses."""

    def format_tiers(self, tiers: Iterable[TierInfo]) -> str:
        """Format the full tier overview for /tiers."""
        message = TIERS_HEADER + "\n\n"
        for tier in tiers:
            message += TIER_NAME_LINE.format(name=tier.name) + "\n"
            message += TIER_PRICE_LINE.format(price=tier.price) + "\n"
            message += TIER_ENTITLEMENT_LINE.format(entitlement=tier.entitlement) + "\n"
            message += TIER_MAX_SUPPLY_LINE.format(max_supply=tier.max_supply) + "\n"
            message += TIER_DESCRIPTION_LINE.format(description=tier.description) + "\n\n"
        message += TIERS_FOOTER
        return message

    def format_prices(self, tiers: Iterable[TierInfo]) -> str:
        """Format the price list for /price."""
        message = PRICE_HEADER + "\n\n"
        for tier in tiers:
            message += PRICE_TIER_LINE.format(name=tier.name, price=tier.price) + "\n"
            message += PRICE_ENTITLEMENT_LINE.format(entitlement=tier.entitlement) + "\n\n"
        message += PRICE_FOOTER
        return message

    def format_supply(self, tiers: Iterable[TierInfo]) -> str:
        """Format supply limits and token IDs for /supply."""
        message = SUPPLY_HEADER + "\n\n"
        for tier in tiers:
            message += TIER_NAME_LINE.format(name=tier.name) + "\n"
            message += TIER_MAX_SUPPLY_LINE.format(max_supply=tier.max_supply) + "\n"
            message += SUPPLY_TOKEN_ID_LINE.format(token_id=tier.token_id) + "\n\n"
        message += SUPPLY_FOOTER
        return message


# Global response formatter instance
response_formatter = ResponseFormatter()
