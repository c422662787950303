"""Data models for the launchpad bot application.

Defines Pydantic models for the data flowing through the bot: the normalized
view of an inbound Telegram update, the rate limiter's per-user counters and
the NFT tier catalogue shown to users.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Checked in order; the first populated attribute names the update type.
_UPDATE_KINDS = (
    "callback_query",
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "inline_query",
    "chosen_inline_result",
    "my_chat_member",
    "chat_member",
    "chat_join_request",
)


class InboundUpdate(BaseModel):
    """Normalized view of one inbound Telegram update.

    Telegram objects are immutable, so pipeline stages that rewrite the
    payload (the input sanitizer) produce a new instance with ``model_copy``
    instead of touching the original update.

    Attributes:
        update_type: Kind of update, e.g. ``message`` or ``callback_query``.
        user_id: Originating Telegram user ID, None for non-user events.
        username: Telegram username if the user has one.
        text: Free-text payload of a message update.
        callback_data: Payload of an inline-button callback.
        chat_id: Chat the update belongs to.
        chat_type: Chat type tag (private, group, supergroup, channel).
    """

    model_config = ConfigDict(frozen=True)

    update_type: str = "unknown"
    user_id: int | None = None
    username: str | None = None
    text: str | None = None
    callback_data: str | None = None
    chat_id: int | None = None
    chat_type: str | None = None

    @classmethod
    def from_telegram(cls, update: Any) -> "InboundUpdate":
        """Build the normalized view from a python-telegram-bot ``Update``.

        Args:
            update: Telegram update object.

        Returns:
            InboundUpdate with the fields the pipeline inspects.
        """
        update_type = next(
            (kind for kind in _UPDATE_KINDS if getattr(update, kind, None) is not None),
            "unknown",
        )

        user = update.effective_user
        chat = update.effective_chat
        message = update.message
        query = update.callback_query

        return cls(
            update_type=update_type,
            user_id=user.id if user else None,
            username=user.username if user else None,
            text=message.text if message is not None else None,
            callback_data=query.data if query is not None else None,
            chat_id=chat.id if chat else None,
            chat_type=str(chat.type) if chat else None,
        )

    @property
    def command_text(self) -> str | None:
        """Command text or callback payload, whichever the update carries."""
        return self.text or self.callback_data


class RateLimitEntry(BaseModel):
    """Request counter for one user inside a fixed admission window.

    Attributes:
        count: Requests admitted in the current window.
        reset_at: Clock reading (seconds) after which the window expires.
    """

    count: int = Field(default=0, ge=0)
    reset_at: float


class TierInfo(BaseModel):
    """Pioneer Validator NFT tier.

    Attributes:
        key: Stable identifier of the tier.
        name: Display name.
        price: Display price, e.g. ``$250``.
        entitlement: SUSU+ token entitlement granted with the NFT.
        token_id: First token ID of the tier.
        max_supply: Maximum number of NFTs minted for the tier.
        description: One-line description shown in /tiers.
    """

    key: str
    name: str
    price: str
    entitlement: str
    token_id: int
    max_supply: int
    description: str = ""


DEFAULT_TIERS: tuple[TierInfo, ...] = (
    TierInfo(
        key="commander",
        name="Commander",
        price="$250",
        entitlement="250,000 SUSU+",
        token_id=5001,
        max_supply=4500,
        description="Entry-level Validator with Bronze Badge",
    ),
    TierInfo(
        key="counsellor",
        name="Counsellor",
        price="$750",
        entitlement="750,000 SUSU+",
        token_id=10001,
        max_supply=400,
        description="Mid-tier Validator with Silver Badge",
    ),
    TierInfo(
        key="chancellor",
        name="Chancellor",
        price="$2,500",
        entitlement="2,500,000 SUSU+",
        token_id=12001,
        max_supply=100,
        description="Premium Validator with Gold Badge",
    ),
)
