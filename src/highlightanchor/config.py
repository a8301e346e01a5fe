"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from highlightanchor.anchoring.marks import MARK_CLASS

logger = logging.getLogger(__name__)

# src/highlightanchor/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_CSS_CLASS_TOKEN = re.compile(r"-?[_a-zA-Z][_a-zA-Z0-9-]*")

_LOG_LEVELS = frozenset(("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class HighlightConfig(BaseModel):
    """Rendering defaults for highlight marks and context snippets."""

    mark_class: str = MARK_CLASS
    context_length: int = Field(default=50, ge=0)

    @field_validator("mark_class")
    @classmethod
    def _single_class_token(cls, value: str) -> str:
        if not _CSS_CLASS_TOKEN.fullmatch(value):
            msg = f"HIGHLIGHT__MARK_CLASS must be one CSS class name, got {value!r}"
            raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Log destinations and verbosity."""

    log_dir: Path = Path("logs")
    file_enabled: bool = False
    console_level: str = "INFO"

    @field_validator("console_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"LOGGING__CONSOLE_LEVEL must be one of {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``HIGHLIGHT__MARK_CLASS``, ``LOGGING__CONSOLE_LEVEL``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    highlight: HighlightConfig = HighlightConfig()
    logging: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
