"""highlight-anchor - anchor text highlights onto HTML documents.

Re-locates user selections in HTML after the document or the highlight set
changes, wraps them in ``<mark>`` elements, and decides when touching or
overlapping highlights should be merged.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from highlightanchor.config import Settings

__version__ = "0.1.0"

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_HANDLER_NAMES = frozenset(("highlightanchor.console", "highlightanchor.file"))


def setup_logging(settings: Settings) -> None:
    """Configure root logging to the console and, optionally, a rotating file.

    Library code only ever calls ``logging.getLogger(__name__)``; this is
    called by the CLI entry point.  Calling it again replaces the handlers a
    previous call installed.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.set_name("highlightanchor.console")
    console_handler.setLevel(settings.logging.console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if not settings.logging.file_enabled:
        return

    log_dir = settings.logging.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "highlightanchor.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.set_name("highlightanchor.file")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    root_logger.addHandler(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
