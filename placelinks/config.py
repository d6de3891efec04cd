import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(default="placelinks", description="Application name")
    google_places_api_key: Optional[str] = Field(
        default=None,
        description="Places API credential. When unset, directory lookups are skipped.",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    photo_max_width: int = Field(default=400, ge=1, le=4800)
    rate_limit: str = Field(default="30/minute", description="slowapi limit for /fetch-metadata")
    log_level: str = Field(default="INFO")
    user_agent: str = Field(
        default="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        description="User-Agent sent when fetching pages for Open Graph tags",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    if not settings.google_places_api_key:
        logger.info("GOOGLE_PLACES_API_KEY is not set; place lookups will be skipped.")
    return settings
