"""
Application settings loaded from environment variables.

Uses pydantic-settings for automatic loading from .env file.
Everything except the bot token has a working default, so a fresh
checkout only needs TELEGRAM_BOT_TOKEN to start.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration.

    All values are loaded from environment variables.
    Copy .env.example to .env and fill in your values.

    Attributes:
        telegram_bot_token: Bot token from @BotFather (required)
        environment: Runtime environment (development/production)
        use_mock_services: Use the offline analysis client instead of the API
        log_level: Logging verbosity
        api_base_url: Base URL of the token analysis API
        website_url: Public website used for full reports and upgrades
        api_timeout_seconds: Timeout for the analysis HTTP call
        client_identifier: User-Agent sent to the analysis API
        admin_ids: Comma separated Telegram user ids allowed to use /admin
        bot_username: Bot username used to build referral links
        free_daily_limit: Analyses per day on the free tier
        free_watchlist_limit: Watchlist size on the free tier
    """

    # Required
    telegram_bot_token: str

    # Environment
    environment: Literal["development", "production"] = "development"
    use_mock_services: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Analysis API
    api_base_url: str = "https://meme-iq.vercel.app/api"
    website_url: str = "https://meme-iq.vercel.app"
    api_timeout_seconds: float = 30.0
    client_identifier: str = "MemeIQ-TelegramBot/1.0"

    # Access
    admin_ids: str = ""
    bot_username: str = "MemeIQBot"

    # Free tier limits
    free_daily_limit: int = 5
    free_watchlist_limit: int = 5

    # Background jobs (seconds)
    alert_sweep_interval_seconds: int = 300
    stats_log_interval_seconds: int = 3600
    heartbeat_interval_seconds: int = 600

    # Pydantic settings config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Case-insensitive env var names
        case_sensitive=False,
        # Empty env values fall back to the defaults
        env_ignore_empty=True,
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def admin_id_set(self) -> frozenset[int]:
        """Parsed ADMIN_IDS. Non-numeric entries are ignored."""
        ids = set()
        for chunk in self.admin_ids.split(","):
            chunk = chunk.strip()
            if chunk.lstrip("-").isdigit():
                ids.add(int(chunk))
        return frozenset(ids)

    def is_admin(self, user_id: int) -> bool:
        return user_id in self.admin_id_set


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to avoid re-reading .env file on every call.
    Settings are loaded once and reused throughout the application.

    Returns:
        Settings instance with all configuration values.
    """
    return Settings()
