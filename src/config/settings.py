"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.catalog.client import DEFAULT_API_BASE
from src.store.repositories import RECENT_SEARCHES_LIMIT


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Without `DATABASE_URL` the bot keeps favorites, recent searches and the theme flag in process
    memory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    db_timezone: str = Field(default="UTC", alias="DB_TIMEZONE")

    jikan_api_base: str = Field(default=DEFAULT_API_BASE, alias="JIKAN_API_BASE")
    jikan_timeout_s: float = Field(default=15.0, gt=0, alias="JIKAN_TIMEOUT_S")

    recent_searches_limit: int = Field(default=RECENT_SEARCHES_LIMIT, ge=1, le=100, alias="RECENT_SEARCHES_LIMIT")

    @field_validator("db_timezone")
    @classmethod
    def validate_db_timezone_is_utc(cls, value: str) -> str:
        """Validate that the DB timezone is locked to UTC."""

        if value.upper() != "UTC":
            raise ValueError("DB_TIMEZONE must be UTC")
        return "UTC"

    @field_validator("database_url")
    @classmethod
    def blank_database_url_is_unset(cls, value: str | None) -> str | None:
        """Treat an empty `DATABASE_URL=` line as "no database"."""

        if value is not None and not value.strip():
            return None
        return value

    @field_validator("jikan_api_base")
    @classmethod
    def validate_api_base(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("JIKAN_API_BASE must be an http(s) URL")
        return value.rstrip("/")


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
