"""
Configuration management.
All settings can be overridden via environment variables (ROMSHELF_ prefix).
"""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ROMSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="romshelf", description="Application name")
    debug: bool = Field(default=False, description="Echo SQL statements")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/romshelf.db",
        description="Database URL"
    )
    busy_timeout: float = Field(
        default=5.0,
        ge=0,
        description="Seconds SQLite waits on a locked database before failing"
    )
    lock_retry_attempts: int = Field(
        default=5,
        ge=1,
        description="Attempts for a unit of work that hits a locked database"
    )
    lock_retry_delay: float = Field(
        default=0.05,
        ge=0,
        description="Initial backoff in seconds, doubled on every retry"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: Path = Field(default=Path("./data/logs"), description="Log file directory")

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Accept plain sqlite URLs and switch them to the aiosqlite driver."""
        if v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_app_config() -> AppConfig:
    """Get cached configuration instance."""
    return AppConfig()
