"""
Configuration settings for the adaptive practice engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Mastery Gate
    # ========================================
    mastery_medium_plus_required: int = Field(
        default=2,
        ge=1,
        description="Correct answers at Medium or Hard needed to master a concept",
    )
    mastery_hard_required: int = Field(
        default=1,
        ge=1,
        description="Correct answers at Hard needed to master a concept",
    )

    # ========================================
    # Class Analytics
    # ========================================
    intervention_proficiency_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Average class proficiency below which a concept needs intervention",
    )
    max_suggested_interventions: int = Field(
        default=3,
        ge=0,
        description="Maximum interventions suggested per chapter",
    )
    max_hardest_concepts: int = Field(
        default=5,
        ge=0,
        description="Maximum concepts listed as hardest per chapter",
    )

    # ========================================
    # Terminal Front End
    # ========================================
    star_streak_length: int = Field(
        default=10,
        ge=1,
        description="Number of recent stars shown in the streak display",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
