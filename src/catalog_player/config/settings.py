"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.catalog.value_objects import MergePolicy
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import MaxPagesInt, PageSizeInt, TimeoutSeconds


class SearchSettings(BaseModel):
    """Search backend and pagination configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("base_url", "url", "search_url"),
    )
    page_size: PageSizeInt = Field(
        default=20, validation_alias=AliasChoices("page_size", "PAGE_SIZE")
    )
    max_pages: MaxPagesInt = Field(
        default=10, validation_alias=AliasChoices("max_pages", "MAX_PAGES")
    )
    timeout_seconds: TimeoutSeconds = Field(
        default=10.0,
        validation_alias=AliasChoices("timeout_seconds", "timeout"),
    )
    merge_policy: MergePolicy = MergePolicy.DROP

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate search base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(ErrorMessages.INVALID_BASE_URL)
        return v.rstrip("/")


class PlayerSettings(BaseModel):
    """Virtual playback configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    tick_interval_seconds: float = Field(
        default=0.25,
        gt=0.0,
        le=5.0,
        validation_alias=AliasChoices("tick_interval_seconds", "tick_interval"),
    )
    preview_duration_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=3600.0,
        validation_alias=AliasChoices("preview_duration_seconds", "preview_duration"),
    )
    autoplay_allowed: bool = True


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - SEARCH__BASE_URL, SEARCH__PAGE_SIZE, SEARCH__MAX_PAGES, SEARCH__MERGE_POLICY
    - PLAYER__TICK_INTERVAL_SECONDS, PLAYER__PREVIEW_DURATION_SECONDS
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    search: SearchSettings = Field(default_factory=SearchSettings)
    player: PlayerSettings = Field(default_factory=PlayerSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
