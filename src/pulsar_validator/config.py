"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from pulsar_validator.constants import MAX_SUGGESTIONS

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # Logging
    log_level: str = "INFO"
    debug_mode: bool = False
    log_dir: Path = Path("logs")

    # API
    api_key: str = ""
    cors_origins: str = "http://localhost:3000"

    # Validation
    catalog_path: Path | None = None  # None = built-in challenge seed
    max_suggestions: int = Field(default=MAX_SUGGESTIONS, ge=1, le=20)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelNamesMapping().get(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("catalog_path", mode="before")
    @classmethod
    def _empty_path_is_none(cls, v: object) -> object:
        """An empty CATALOG_PATH means 'use the built-in seed'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        return [
            o.strip() for o in self.cors_origins.split(",") if o.strip()
        ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }
