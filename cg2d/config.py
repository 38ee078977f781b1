from __future__ import annotations
import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HULL_ALGORITHM_NAMES = (
    "monotone_chain",
    "graham_scan",
    "divide_and_conquer",
    "quickhull",
    "gift_wrapping",
    "brute_force",
)


class Settings(BaseSettings):
    """Налаштування ядра зі змінних оточення CG2D_* (або локального .env)."""

    hull_algorithm: str = Field(default="monotone_chain", description="Default convex hull algorithm")
    log_level: str = Field(default="WARNING", description="Logging level for configure_logging()")
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")

    model_config = SettingsConfigDict(
        env_prefix="CG2D_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("hull_algorithm")
    @classmethod
    def _known_algorithm(cls, v: str) -> str:
        if v not in HULL_ALGORITHM_NAMES:
            raise ValueError(f"unknown hull algorithm {v!r}, expected one of {HULL_ALGORITHM_NAMES}")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v


settings = Settings()
