"""Tests for highlightanchor.config and logging setup.

Every test constructs Settings(_env_file=None, ...) to avoid reading real .env files.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

import highlightanchor.config as config_module
from highlightanchor import setup_logging
from highlightanchor.anchoring import MARK_CLASS
from highlightanchor.config import (
    HighlightConfig,
    LoggingConfig,
    Settings,
    get_settings,
)

if TYPE_CHECKING:
    from pathlib import Path


def _without_env_file(monkeypatch: pytest.MonkeyPatch) -> None:
    original_init = config_module.Settings.__init__

    def _patched_init(self: object, *args: object, **kwargs: object) -> None:
        kwargs.setdefault("_env_file", None)
        original_init(self, *args, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(config_module.Settings, "__init__", _patched_init)


class TestDefaults:
    """Settings with no env file and no env vars."""

    def test_highlight_defaults(self, settings: Settings) -> None:
        assert settings.highlight.mark_class == MARK_CLASS
        assert settings.highlight.context_length == 50

    def test_logging_defaults(self, settings: Settings) -> None:
        assert settings.logging.file_enabled is False
        assert settings.logging.console_level == "INFO"
        assert settings.logging.log_dir.name == "logs"


class TestEnvOverrides:
    """Double-underscore env vars reach the nested sub-models."""

    def test_context_length(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT__CONTEXT_LENGTH", "80")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.highlight.context_length == 80

    def test_mark_class(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT__MARK_CLASS", "hl")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.highlight.mark_class == "hl"

    def test_file_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGGING__FILE_ENABLED", "true")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.logging.file_enabled is True


class TestValidation:
    @pytest.mark.parametrize("value", ["two words", "", "9lives", 'x" onclick="y'])
    def test_mark_class_must_be_one_css_class(self, value: str) -> None:
        with pytest.raises(ValidationError, match="HIGHLIGHT__MARK_CLASS"):
            HighlightConfig(mark_class=value)

    def test_negative_context_length_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HighlightConfig(context_length=-1)

    def test_level_is_upper_cased(self) -> None:
        assert LoggingConfig(console_level="debug").console_level == "DEBUG"

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="LOGGING__CONSOLE_LEVEL"):
            LoggingConfig(console_level="LOUD")


class TestGetSettings:
    def test_cached_until_cleared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _without_env_file(monkeypatch)
        a = get_settings()
        assert get_settings() is a, "Cached calls should return same instance"
        get_settings.cache_clear()
        assert get_settings() is not a

    def test_logs_env_file_status(
        self,
        caplog: pytest.LogCaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _without_env_file(monkeypatch)
        with caplog.at_level(logging.INFO, logger="highlightanchor.config"):
            get_settings()
        assert any(".env" in r.message for r in caplog.records)


class TestSetupLogging:
    """setup_logging() attaches console and optional rotating file handlers."""

    def test_console_only_by_default(
        self, settings: Settings, restore_root_logger: logging.Logger
    ) -> None:
        before = len(restore_root_logger.handlers)
        setup_logging(settings)
        added = restore_root_logger.handlers[before:]
        assert len(added) == 1
        assert added[0].level == logging.INFO
        assert not isinstance(added[0], RotatingFileHandler)

    def test_file_handler_writes_to_log_dir(
        self, tmp_path: Path, restore_root_logger: logging.Logger
    ) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            logging=LoggingConfig(
                log_dir=tmp_path / "logs", file_enabled=True, console_level="ERROR"
            ),
        )
        setup_logging(s)
        logging.getLogger("highlightanchor.test").debug("debug line")

        file_handlers = [
            h
            for h in restore_root_logger.handlers
            if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        file_handlers[0].flush()
        log_text = (tmp_path / "logs" / "highlightanchor.log").read_text("utf-8")
        assert "debug line" in log_text
        assert "highlightanchor.test" in log_text

    def test_repeated_calls_do_not_duplicate_handlers(
        self, tmp_path: Path, restore_root_logger: logging.Logger
    ) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            logging=LoggingConfig(log_dir=tmp_path, file_enabled=True),
        )
        before = len(restore_root_logger.handlers)
        setup_logging(s)
        setup_logging(s)
        setup_logging(s)

        assert len(restore_root_logger.handlers) == before + 2
