"""
Configuration management for abs_investigator.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from abs_investigator.constants import (
    DEFAULT_ADAPTER_TIMEOUT,
    DEFAULT_WORKERS,
    REGISTRANT_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every provider credential is optional: an adapter without its key
    reports itself unavailable and the investigation carries on without it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # SEC EDGAR requires a descriptive User-Agent with contact details
    sec_user_agent: str = Field(
        default="abs-investigator (contact: research@example.com)",
        description="User-Agent header sent to SEC EDGAR",
    )

    # OpenFIGI Configuration
    openfigi_api_key: str | None = Field(
        default=None,
        description="OpenFIGI API key (optional, raises rate limit)",
    )

    # FRED Configuration
    fred_api_key: str | None = Field(
        default=None,
        description="FRED API key (economic snapshot is skipped without it)",
    )

    # Investigation behaviour
    adapter_timeout_seconds: float = Field(
        default=DEFAULT_ADAPTER_TIMEOUT,
        gt=0,
        description="Timeout applied to every adapter call",
    )
    registrant_cache_ttl_seconds: int = Field(
        default=REGISTRANT_CACHE_TTL_SECONDS,
        ge=0,
        description="TTL for cached registrant metadata",
    )
    max_workers: int = Field(
        default=DEFAULT_WORKERS,
        ge=1,
        description="Thread pool size for concurrent adapter calls",
    )
    cache_dir: Path = Field(
        default=Path("data/cache"),
        description="Directory for the diskcache store",
    )

    # Offline generator
    offline_jitter: bool = Field(
        default=True,
        description="Add 0-9 tie-breaking jitter to offline candidate scores",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for the offline generator's random source",
    )

    @field_validator("sec_user_agent", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("openfigi_api_key", "fred_api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

