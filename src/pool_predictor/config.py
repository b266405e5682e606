"""
Configuration management for Pool Predictor using pydantic-settings.

Environment variables are loaded from .env file and validated at startup.
Only operational knobs live here (iteration counts, seeding, logging, the
snapshot location). Model constants are defined next to the code that uses
them.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):
    """Monte Carlo simulation settings."""

    match_iterations: int = Field(
        default=5000,
        ge=1,
        description="Simulated matches per single-match prediction",
    )
    season_iterations: int = Field(
        default=1000,
        ge=1,
        description="Season replays per season simulation",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible runs (None for fresh entropy)",
    )

    model_config = SettingsConfigDict(env_prefix="SIM_")


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    data_file: Path = Field(
        default=Path("data/league.json"),
        description="League snapshot JSON used by the CLI",
    )

    model_config = SettingsConfigDict(env_prefix="")

    @field_validator("data_file", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Convert string to Path."""
        return Path(v)


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    env_paths = [
        Path(".env"),
        Path(__file__).parent.parent.parent / ".env",  # project root
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            break

    return Settings()
