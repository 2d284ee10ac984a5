"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# Nested Settings Models
# =============================================================================


class DatabaseConfig(BaseModel):
    """
    Record store connection settings.

    server_selection_timeout_ms: How long a store call waits for a reachable
        server before failing with StoreQueryFailed.
    """

    url: str = "mongodb://localhost:27017"
    name: str = "timetrack"
    server_selection_timeout_ms: int = 5000


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = "INFO"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: DATABASE__URL=mongodb://db:27017, DATABASE__NAME=timetrack_test
    """

    # Application metadata
    app_name: str = "Timetrack"
    app_version: str = "1.0.0"

    # Nested settings groups
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
