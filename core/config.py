"""Environment-driven settings for the API process and the provider fetchers."""
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a local .env file."""

    APP_NAME: str = "Cloud Status Monitor"
    ENV: str = "dev"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    CORS_ORIGINS: str = "*"

    REFRESH_INTERVAL_SECONDS: int = 300
    CONCURRENCY_LIMIT: int = 10
    USER_AGENT: str = "CloudStatusMonitor/1.0"
    RECENT_EVENTS_LIMIT: int = 30
    DESCRIPTION_MAX_LENGTH: int = 500

    AWS_EVENTS_URL: str = "https://health.aws.amazon.com/public/currentevents"
    AWS_EVENTS_TIMEOUT: float = 15.0
    AWS_FEED_URL: str = "https://status.aws.amazon.com/rss/all.rss"
    AWS_FEED_TIMEOUT: float = 10.0

    AZURE_STATUS_URL: str = "https://azure.status.microsoft/en-us/status"
    AZURE_STATUS_TIMEOUT: float = 20.0
    AZURE_FEED_URL: str = "https://rssfeed.azure.status.microsoft/en-us/status/feed/"
    AZURE_FEED_TIMEOUT: float = 10.0

    GCP_INCIDENTS_URL: str = "https://status.cloud.google.com/incidents.json"
    GCP_INCIDENTS_TIMEOUT: float = 15.0
    GCP_FEED_URL: str = "https://status.cloud.google.com/en/feed.atom"
    GCP_FEED_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def cors_origins(self) -> list[str]:
        """Return the non-empty entries of CORS_ORIGINS."""

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings to avoid repeated environment parsing."""

    return Settings()
