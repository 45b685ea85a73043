"""Environment driven settings for the command line front end."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .logging import get_logger

__all__ = ["ARCH_ENV", "LOG_LEVEL_ENV", "default_arch", "log_level"]

ARCH_ENV = "GSTMATCH_ARCH"
LOG_LEVEL_ENV = "GSTMATCH_LOG_LEVEL"

_log = get_logger("runtime")


def _coerce_level(value: Optional[str], default: int) -> int:
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        _log.warning("Invalid log level value: %r", value)
        return default
    return level


def default_arch() -> str:
    """Architecture used when the caller does not pass one."""

    return os.environ.get(ARCH_ENV, "").strip()


def log_level(default: int = logging.WARNING) -> int:
    return _coerce_level(os.environ.get(LOG_LEVEL_ENV), default)
