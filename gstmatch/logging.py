"""Logger helpers shared by the matcher modules."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

__all__ = ["ROOT_LOGGER", "get_logger", "configure_logging"]

ROOT_LOGGER = "gstmatch"

_HANDLER: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced below ``gstmatch``."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling this more than once only adjusts the level.
    """

    global _HANDLER

    logger = logging.getLogger(ROOT_LOGGER)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler(stream or sys.stderr)
        _HANDLER.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(_HANDLER)
    logger.setLevel(level)
    return logger
