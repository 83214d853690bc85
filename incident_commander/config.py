"""
Configuration management for the Incident Commander runner.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field

from incident_commander.gameplay.constants import (
    GRID_WIDTH, GRID_HEIGHT, BASE_TICK_RATE, TICK_RATE_PER_LEVEL, MAX_TICK_RATE
)


class Settings(BaseSettings):
    """Runner settings loaded from environment variables."""

    # Grid
    grid_width: int = Field(
        default=GRID_WIDTH,
        ge=1,
        description="Grid width in cells"
    )
    grid_height: int = Field(
        default=GRID_HEIGHT,
        ge=1,
        description="Grid height in cells"
    )

    # Randomness
    seed: int | None = Field(
        default=None,
        description="Seed for obstacle and alert placement. None means unseeded"
    )

    # Tick rate
    base_tick_rate: float = Field(
        default=BASE_TICK_RATE,
        gt=0,
        description="Ticks per second before the per-level term"
    )
    tick_rate_per_level: float = Field(
        default=TICK_RATE_PER_LEVEL,
        ge=0,
        description="Ticks per second added for every level"
    )
    max_tick_rate: float = Field(
        default=MAX_TICK_RATE,
        gt=0,
        description="Upper bound on ticks per second"
    )

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_prefix = "INCIDENT_COMMANDER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    """
    return Settings()
