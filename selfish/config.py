"""
Configuration for the Selfish engine.

Uses pydantic-settings so every value can come from the environment
(prefix SELFISH_, e.g. SELFISH_SEED=42) or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine and simulation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SELFISH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # The only input that changes game outcomes
    seed: Optional[int] = Field(default=None, ge=0, lt=2**64)
    players: int = Field(default=4, ge=2, le=6)

    # Safety limit for simulations
    max_turns: int = Field(default=2000, ge=1)

    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
