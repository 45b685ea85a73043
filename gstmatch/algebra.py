"""Capability algebra engines used by :class:`gstmatch.matcher.Matcher`.

The matcher never interprets caps itself.  It hands canonical expression
strings to an engine implementing :class:`CapabilityAlgebra` and asks whether
two parsed values can intersect.  :class:`GstAlgebra` is the production engine
and talks to GStreamer through PyGObject.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, Protocol

from .logging import get_logger

try:  # pragma: no cover - optional dependency
    import gi

    gi.require_version("Gst", "1.0")
    from gi.repository import Gst
except Exception:  # pragma: no cover - optional dependency
    Gst = None  # type: ignore[assignment]

__all__ = [
    "AlgebraUnavailable",
    "CapabilityAlgebra",
    "GstAlgebra",
    "default_algebra",
]

_log = get_logger("algebra")

_GST_INITIALISED = False
_GST_INIT_LOCK = threading.Lock()
_DEFAULT_ALGEBRA: Optional["GstAlgebra"] = None


class AlgebraUnavailable(RuntimeError):
    """Raised when the capability engine cannot be initialised."""


class CapabilityAlgebra(Protocol):
    """Engine surface needed to parse and compare capability expressions."""

    def init(self) -> None: ...

    def parse(self, text: str) -> Optional[Any]: ...

    def can_overlap(self, a: Any, b: Any) -> bool: ...

    def release(self, value: Any) -> None: ...


class GstAlgebra:
    """:class:`CapabilityAlgebra` backed by ``Gst.Caps``."""

    def init(self) -> None:
        """Initialise GStreamer once for the whole process."""

        global _GST_INITIALISED

        if _GST_INITIALISED:
            return
        with _GST_INIT_LOCK:
            if _GST_INITIALISED:
                return
            if Gst is None:
                raise AlgebraUnavailable("PyGObject with GStreamer 1.0 is not available")
            try:
                Gst.init(None)
            except Exception as exc:
                raise AlgebraUnavailable(f"GStreamer initialisation failed: {exc}") from exc
            _GST_INITIALISED = True
            _log.debug("gst_init status=ok version=%s", Gst.version_string())

    def parse(self, text: str) -> Optional[Any]:
        # from_string returns None for malformed caps
        return Gst.Caps.from_string(text)

    def can_overlap(self, a: Any, b: Any) -> bool:
        return bool(a.can_intersect(b))

    def release(self, value: Any) -> None:
        # PyGObject drops the underlying reference when the wrapper goes away.
        del value


def default_algebra() -> GstAlgebra:
    """Return the process-wide GStreamer engine."""

    global _DEFAULT_ALGEBRA

    if _DEFAULT_ALGEBRA is None:
        _DEFAULT_ALGEBRA = GstAlgebra()
    return _DEFAULT_ALGEBRA
