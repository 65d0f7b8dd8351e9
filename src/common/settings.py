"""
Process-level settings loaded from environment variables.
Only the values needed before the API config exists live here: project name, environment and log level.
Everything request-facing is configured in `src.api.api_config`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
)


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str = "hydrovac-finder"
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            supported = ", ".join(sorted(VALID_LOG_LEVELS))
            raise ValueError(f"LOG_LEVEL must be one of {supported}, got {value!r}")
        return normalized


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    values = {
        key: os.environ[key]
        for key in ("PROJECT_NAME", "ENV", "LOG_LEVEL")
        if os.environ.get(key, "").strip()
    }
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
