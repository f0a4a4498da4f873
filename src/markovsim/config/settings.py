"""Application configuration schema and validation."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Application environment",
    )
    matrix_path: Path | None = Field(
        default=None,
        description="JSON file with both teams' transition matrices and event labels",
    )
    default_sim_n: int = Field(
        default=5000,
        ge=1,
        le=1_000_000,
        description="Default number of Monte Carlo games per batch",
    )
    cdf_precision: int = Field(
        default=4,
        ge=1,
        le=10,
        description="Decimal places kept in the cumulative distribution tables",
    )
    sampler_max_draws: int = Field(
        default=8,
        ge=1,
        le=1000,
        description="Redraw attempts before a play sample is reported as failed",
    )
    regulation_innings: int = Field(
        default=9,
        ge=1,
        le=20,
        description="Minimum innings before a game can end",
    )
    sim_mode: Literal["batch", "convergence"] = Field(
        default="batch",
        description="Entry-point run: one batch, or a convergence series of sub-batches",
    )
    convergence_batches: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Sequential sub-batches in a convergence run",
    )
    sim_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Worker processes for a partitioned batch",
    )
    sim_seed: int | None = Field(
        default=None,
        ge=0,
        description="Seed for the root random stream (None = OS entropy)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create the singleton AppConfig instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config
