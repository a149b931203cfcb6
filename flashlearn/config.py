"""
Configuration settings for FlashLearn auth.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a FLASHLEARN_* environment variable.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FLASHLEARN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Persistence
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".flashlearn",
        description="Directory holding the durable key-value slots",
    )
    session_key: str = Field(
        default="mockUser",
        description="Storage slot for the persisted session snapshot",
    )
    token_key: str = Field(
        default="jwtToken",
        description="Storage slot for the backend JWT",
    )

    # ========================================
    # Simulated latency (mock auth)
    # ========================================
    sign_in_delay_seconds: float = Field(default=0.5, ge=0.0)
    sign_up_delay_seconds: float = Field(default=0.5, ge=0.0)
    sign_out_delay_seconds: float = Field(default=0.3, ge=0.0)

    # ========================================
    # Demo account
    # ========================================
    demo_email: str = "demo@flashlearn.ai"
    demo_password: str = "demo123"
    demo_uid: str = "demo-user-123"

    # ========================================
    # Backend API
    # ========================================
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the FlashLearn backend (login/register endpoints)",
    )
    api_timeout_seconds: float = Field(default=30.0, gt=0.0)

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(default="WARNING", description="CLI log level when --verbose is not set")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
