"""Configuration management for Parlor.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at process
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PARLOR_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Parlor"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./parlor_data/parlor.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Authorization Settings
    bootstrap_instance_roles: bool = Field(
        default=True,
        description="Create missing default instance roles at process startup",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """Validate that an async driver is configured."""
        if "+" not in self.database_url.split("://", 1)[0]:
            raise ValueError(
                "database_url must name an async driver, "
                "e.g. sqlite+aiosqlite:// or postgresql+asyncpg://"
            )
        return self

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once at startup and reused afterwards.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
