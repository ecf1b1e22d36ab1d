"""
Configuration settings for the bloomspec engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with BLOOMSPEC_ (e.g. BLOOMSPEC_TIME_ALLOWANCE_PERCENT=15).
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine tolerances and bounds loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLOOMSPEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Specification stage
    # ========================================
    target_sum_tolerance: float = Field(
        default=0.02,
        description="Allowed |sum - 1.0| for an estimated distribution",
    )

    # ========================================
    # Verification stage (batch)
    # ========================================
    time_allowance_percent: float = Field(
        default=10.0,
        description="Total time tolerance, relative to the target (±%)",
    )
    distribution_tolerance_percent: float = Field(
        default=5.0,
        description="Per-level distribution tolerance in percentage points",
    )

    # ─── Per-problem bounds ─────────────────────────────────────────────────────
    min_time_minutes: int = Field(
        default=1,
        description="Minimum estimated minutes for one problem",
    )
    max_time_minutes: int = Field(
        default=120,
        description="Maximum estimated minutes for one problem",
    )
    min_complexity: float = Field(
        default=0.1,
        description="Soft lower limit for linguistic complexity",
    )
    max_complexity: float = Field(
        default=0.9,
        description="Soft upper limit for linguistic complexity",
    )

    # ========================================
    # Assessment intent
    # ========================================
    min_assessment_minutes: int = Field(
        default=5,
        description="Shortest assessment an instructor may request",
    )
    max_assessment_minutes: int = Field(
        default=240,
        description="Longest assessment an instructor may request",
    )
    max_focus_areas: int = Field(
        default=5,
        description="Maximum number of focus areas per request",
    )
    max_classroom_context_chars: int = Field(
        default=500,
        description="Maximum length of the free-text classroom context",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
