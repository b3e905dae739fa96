"""Logging for the ``finance_tracker`` package.

The dashboard and the scripts call :func:`configure_logging` at startup.
Everything else asks :func:`get_logger` for a ``finance_tracker.<module>``
logger and never adds handlers of its own, so importing the package from a
notebook or a test stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "finance_tracker"
LEVEL_ENV_VAR = "FINTRACK_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _parse_level(level: int | str | None) -> int:
    """Resolve ``level`` (or the env var when it is None) to a logging level."""
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR, "")
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send package log records to ``stream``.

    Only the first call has any effect.

    Parameters
    ----------
    level:
        Level as ``int`` or name. ``None`` reads ``FINTRACK_LOG_LEVEL`` and
        falls back to ``INFO``.
    fmt:
        Format string, ``DEFAULT_FORMAT`` when omitted.
    stream:
        Where the handler writes.
    """
    global _configured
    if _configured:
        return

    resolved = _parse_level(level)
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.handlers = [h for h in pkg_logger.handlers if not isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler.setLevel(resolved)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(resolved)
    pkg_logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``; the package logger gets a NullHandler until configured."""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
