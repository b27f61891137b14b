"""Logging for tillcount.

The CLI calls configure_logging() once at startup; every other module only
asks for a logger with get_logger(__name__) and never adds handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LOG_LEVEL_ENV = "TILLCOUNT_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_PKG_LOGGER_NAME = "tillcount"
_CONFIGURED = False


def resolve_level(level: int | str | None) -> int:
    """Turn a level name, number or None into a logging level.

    None reads TILLCOUNT_LOG_LEVEL. Anything unrecognised means WARNING.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV)
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING

    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send tillcount log records to a stream. Later calls are ignored."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric_level = resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    pkg_logger.handlers = [h for h in pkg_logger.handlers if not isinstance(h, logging.NullHandler)]
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(numeric_level)
    pkg_logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; records are dropped until configure_logging runs."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
