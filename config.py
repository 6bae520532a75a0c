"""
Configuration settings for learn-helper.

Uses Pydantic Settings for environment variable management with .env file support.
Only the delivery layer reads settings; the study engine takes explicit arguments.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEARN_HELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Answer Grading
    # ========================================
    similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum normalized edit-distance similarity for a typed answer to count",
    )

    # ========================================
    # Card Settings (per profile in the full app)
    # ========================================
    cards_per_set: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of cards shown per learning set",
    )
    test_answer_method: Literal["manual", "self_review"] = Field(
        default="manual",
        description="How answers are checked: typed ('manual') or self-reported ('self_review')",
    )
    streak_length: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Consecutive correct answers needed before a card counts as learned",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="INFO",
        description="Minimum loguru level for the CLI stderr sink",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
