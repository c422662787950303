"""Configuration management for the launchpad bot.

Handles all application configuration including environment variables, the
YAML tier catalogue and default settings. Provides structured, immutable
configuration classes for the bot credentials, the launchpad deep link,
webhook delivery, the security middleware and logging.

Configuration is validated once at startup; a missing token or a non-HTTPS
URL raises ``pydantic.ValidationError`` and the process does not start.
"""

from pathlib import Path
from urllib.parse import urlparse

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_TIERS, TierInfo

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    frozen=True,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "HTTP": "DEBUG"}


def _is_https_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme == "https" and bool(parsed.netloc)


class BotConfig(BaseSettings):
    """Telegram bot credentials and runtime environment.

    Attributes:
        bot_token: Telegram bot API token from environment.
        bot_username: Bot username, used to match ``/command@username``.
        environment: Deployment environment name (development, production).
    """

    model_config = _SETTINGS_CONFIG

    bot_token: str = Field(..., validation_alias="BOT_TOKEN")
    bot_username: str | None = Field(default=None, validation_alias="BOT_USERNAME")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    @field_validator("bot_token")
    @classmethod
    def _require_token(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("BOT_TOKEN is required in environment variables")
        return value.strip()


class LaunchpadConfig(BaseSettings):
    """Launchpad web application reached through the inline button.

    Attributes:
        url: HTTPS URL opened by the "Open Launchpad" button.
    """

    model_config = _SETTINGS_CONFIG

    url: str = Field(default="https://susumi.io/launchpad", validation_alias="LAUNCHPAD_URL")

    @field_validator("url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if not _is_https_url(value):
            raise ValueError("LAUNCHPAD_URL must be a valid HTTPS URL")
        return value


class WebhookConfig(BaseSettings):
    """Push-delivery (webhook) settings.

    Attributes:
        domain: Public HTTPS origin Telegram posts updates to.
        path: URL path of the webhook endpoint.
        secret: Secret token Telegram echoes in every webhook request.
        port: Local port of the webhook and health server.
        listen_host: Interface the webhook server binds to.
    """

    model_config = _SETTINGS_CONFIG

    domain: str | None = Field(default=None, validation_alias="WEBHOOK_DOMAIN")
    path: str | None = Field(default=None, validation_alias="WEBHOOK_PATH")
    secret: str | None = Field(default=None, validation_alias="WEBHOOK_SECRET")
    port: int = Field(default=3000, validation_alias="PORT")
    listen_host: str = Field(default="0.0.0.0", validation_alias="BOT_LISTEN_HOST")

    @field_validator("domain")
    @classmethod
    def _require_https(cls, value: str | None) -> str | None:
        if value is not None and not _is_https_url(value):
            raise ValueError("WEBHOOK_DOMAIN must be a valid HTTPS URL")
        return value

    @field_validator("path")
    @classmethod
    def _require_leading_slash(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("/"):
            raise ValueError("WEBHOOK_PATH must start with '/'")
        return value

    @property
    def enabled(self) -> bool:
        """Webhook mode is used only when both domain and path are set."""
        return bool(self.domain and self.path)

    @property
    def url(self) -> str | None:
        """Full webhook URL registered with Telegram, None in polling mode."""
        if not self.enabled:
            return None
        return f"{self.domain}{self.path}"


class SecurityConfig(BaseSettings):
    """Settings read by the middleware pipeline.

    Attributes:
        rate_limit_window: Admission window length in milliseconds.
        rate_limit_max: Requests admitted per user inside one window.
        max_message_length: Maximum length of sanitized text payloads.
        rate_limit_sweep_interval: Interval of the expired-entry sweep in ms.
    """

    model_config = _SETTINGS_CONFIG

    rate_limit_window: int = Field(default=60000, gt=0, validation_alias="RATE_LIMIT_WINDOW")
    rate_limit_max: int = Field(default=10, ge=1, validation_alias="RATE_LIMIT_MAX")
    max_message_length: int = Field(default=4096, ge=1, validation_alias="MAX_MESSAGE_LENGTH")
    rate_limit_sweep_interval: int = Field(
        default=60000, gt=0, validation_alias="RATE_LIMIT_SWEEP_INTERVAL"
    )

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.rate_limit_window / 1000

    @property
    def sweep_interval_seconds(self) -> float:
        return self.rate_limit_sweep_interval / 1000


class LoggingConfig(BaseSettings):
    """Logging settings.

    Attributes:
        level: Minimum severity written by the root logger.
        logs_dir: Directory of the rotating log files (production only).
    """

    model_config = _SETTINGS_CONFIG

    level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    logs_dir: str = Field(default="./logs", validation_alias="LOGS_DIR")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return level


class Config:
    """Application configuration manager.

    Centralizes loading of all configuration sources: environment variables
    (and an optional ``.env`` file) for the settings sections, and the YAML
    tier catalogue. Built once at startup and never mutated afterwards.
    """

    def __init__(self, data_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            data_dir: Directory holding ``tiers.yml``, defaults to
                launchpad_bot/data.
        """
        if data_dir is None:
            data_dir = Path(__file__).parent / "data"

        self.data_dir = Path(data_dir)

        self.bot = BotConfig()
        self.launchpad = LaunchpadConfig()
        self.webhook = WebhookConfig()
        self.security = SecurityConfig()
        self.logging = LoggingConfig()

        self.tiers = self._load_tiers()

    @property
    def use_webhook(self) -> bool:
        """Whether updates are delivered by webhook instead of long polling."""
        return self.webhook.enabled

    def _load_tiers(self) -> tuple[TierInfo, ...]:
        """Load the NFT tier catalogue from YAML.

        Returns:
            Tiers in display order, the built-in defaults if the file is absent.
        """
        tiers_path = self.data_dir / "tiers.yml"
        if not tiers_path.exists():
            return DEFAULT_TIERS

        with open(tiers_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("tiers") or []
        if not entries:
            return DEFAULT_TIERS

        return tuple(TierInfo(**entry) for entry in entries)


_config: Config | None = None


def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use.

    Raises:
        pydantic.ValidationError: If a required value is missing or invalid.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config
