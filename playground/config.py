"""
Configuration for the Code Playground engine.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    ALLOWED_ORIGINS: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Execution budget
    EXECUTION_TIMEOUT_MS: int = Field(default=5000, gt=0)

    # Simulated variability (0 / 0.0 keeps runs deterministic)
    SIMULATED_LATENCY_MIN_MS: int = Field(default=0, ge=0)
    SIMULATED_LATENCY_MAX_MS: int = Field(default=0, ge=0)
    FAILURE_RATE: float = Field(default=0.0, ge=0.0, le=1.0)
    RANDOM_SEED: Optional[int] = Field(default=None)

    # Heuristics
    REQUIRE_MAIN: bool = Field(default=False)  # C/C++ entry point check
    MAX_FIBONACCI_ARGUMENT: int = Field(default=10_000, ge=1)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger("playground")
