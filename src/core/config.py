"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from src.notifications.models import NotifierConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="content-notifier", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Deployment
    site_url: str = Field(default="https://community.preciousplastic.com", alias="SITE_URL")

    # Discord integration
    discord_webhook_url: Optional[str] = Field(default=None, alias="DISCORD_WEBHOOK_URL")
    webhook_timeout: Optional[float] = Field(default=None, alias="WEBHOOK_TIMEOUT")

    # Change feed
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    change_channel_prefix: str = Field(default="changes", alias="CHANGE_CHANNEL_PREFIX")

    # Watched collections
    pins_collection: str = Field(default="v3_mappins", alias="PINS_COLLECTION")
    howtos_collection: str = Field(default="v3_howtos", alias="HOWTOS_COLLECTION")
    research_collection: str = Field(default="research_rev20201020", alias="RESEARCH_COLLECTION")
    questions_collection: str = Field(
        default="questions_rev20230926",
        alias="QUESTIONS_COLLECTION",
    )

    @property
    def webhook_enabled(self) -> bool:
        """Check whether a Discord webhook is configured."""
        return bool(self.discord_webhook_url)

    def notifier_config(self) -> "NotifierConfig":
        """Build the configuration passed to notification handlers."""
        from src.notifications.models import NotifierConfig

        return NotifierConfig(
            webhook_url=self.discord_webhook_url,
            site_url=self.site_url,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
