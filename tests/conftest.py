"""Shared pytest fixtures for highlight-anchor tests."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from highlightanchor.config import Settings, get_settings

if TYPE_CHECKING:
    from collections.abc import Generator

_ENV_PREFIXES = ("HIGHLIGHT__", "LOGGING__")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep real environment variables and the settings cache out of tests."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings built from defaults only (no .env file)."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger]:
    """Undo handler and level changes made to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
