"""Configuration management for TrueSharp analytics.

Settings are loaded from ``ANALYTICS_*`` environment variables (or a ``.env``
file) using pydantic-settings. Invalid values fail on first access.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analytics settings loaded from environment variables.

    - ANALYTICS_CONFIDENCE_LEVEL: Default two-tailed confidence level (default: 0.95)
    - ANALYTICS_KELLY_CAP: Max fraction of bankroll a Kelly stake may use (default: 0.25)
    - ANALYTICS_MAX_MONTHS: Months kept by the monthly breakdown (default: 12)
    - ANALYTICS_LOG_MODE: "development" or "production" (default: development)
    """

    confidence_level: float = Field(
        default=0.95,
        gt=0.0,
        lt=1.0,
        description="Confidence level used for ROI confidence intervals",
    )
    kelly_cap: float = Field(default=0.25, gt=0.0, le=1.0)
    max_months: int = Field(default=12, ge=1, le=120)
    log_mode: Literal["development", "production"] = Field(default="development")

    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (singleton).

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    return Settings()
