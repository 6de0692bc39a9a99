"""Logging for the ``beanlint`` package.

Library modules only ever call ``get_logger(__name__)``; the package logger
carries a ``NullHandler`` until the CLI calls ``configure_logging`` and
installs the one stderr handler.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LOG_LEVEL_ENV = "BEANLINT_LOG_LEVEL"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

_package_logger = logging.getLogger("beanlint")
_package_logger.addHandler(logging.NullHandler())


def parse_level(level: int | str | None) -> int:
    """Numeric level for an int, a level name or ``"off"``; unset falls back to the env, unknown to WARNING."""
    if level is None or level == "":
        level = os.getenv(LOG_LEVEL_ENV) or logging.WARNING
    if isinstance(level, int):
        return level

    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    if name == "OFF":
        return logging.CRITICAL + 10
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Route package logs to `stream` (stderr by default). Repeat calls replace the handler."""
    numeric = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    _package_logger.handlers = [handler]
    _package_logger.setLevel(numeric)
    _package_logger.propagate = False
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
