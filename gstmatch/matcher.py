"""Match capability records against parsed GStreamer search terms."""

from __future__ import annotations

import logging
import weakref
from typing import Iterable, Optional, Tuple

from .algebra import CapabilityAlgebra, default_algebra
from .logging import get_logger
from .query import ParsedQuery, QueryParser, SkippedQuery

__all__ = ["Matcher"]


def _release_all(algebra: CapabilityAlgebra, queries: Tuple[ParsedQuery, ...]) -> None:
    for query in queries:
        algebra.release(query.expression)


class Matcher:
    """Decide whether a package record provides any of the requested caps.

    A record is the package's control text, e.g.::

        Package: gstreamer1.0-plugins-bad
        Gstreamer-Version: 1.0
        Gstreamer-Decoders: audio/x-wma, wmaversion=(int)3

    The matcher owns the caps values of its queries and releases them in
    :meth:`close`, or when the matcher is garbage collected.
    """

    def __init__(
        self,
        raws: Iterable[str],
        algebra: Optional[CapabilityAlgebra] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._algebra = algebra if algebra is not None else default_algebra()
        self._log = logger or get_logger("matcher")
        self._algebra.init()

        report = QueryParser(self._algebra, logger=self._log).parse_all(list(raws))
        self._queries: Tuple[ParsedQuery, ...] = tuple(report.queries)
        self._skipped: Tuple[SkippedQuery, ...] = tuple(report.skipped)
        self._finalizer = weakref.finalize(self, _release_all, self._algebra, self._queries)
        self._log.info(
            "gst_matcher parsed=%d skipped=%d", len(self._queries), len(self._skipped)
        )

    @property
    def queries(self) -> Tuple[ParsedQuery, ...]:
        return self._queries

    @property
    def skipped(self) -> Tuple[SkippedQuery, ...]:
        return self._skipped

    def __len__(self) -> int:
        return len(self._queries)

    def __enter__(self) -> "Matcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def has_matches(self) -> bool:
        """Return ``True`` when at least one search term was usable."""

        return bool(self._queries)

    def matches(self, record: str, arch: str) -> bool:
        """Return ``True`` if any query is provided by *record* on *arch*."""

        for query in self._queries:
            if query.arch_hint and query.arch_hint != arch:
                continue

            found = record.find(query.version_tag)
            if found == -1:
                continue

            # the kind line may sit anywhere after the version line
            found = record.find(query.kind_marker, found + len(query.version_tag))
            if found == -1:
                continue
            start = found + len(query.kind_marker)
            end = record.find("\n", start)
            provided = record[start:] if end == -1 else record[start:end]

            caps = self._algebra.parse(provided)
            if caps is None:
                self._log.debug("record caps rejected query=%r caps=%r", query.raw, provided)
                continue
            try:
                provides = self._algebra.can_overlap(query.expression, caps)
            finally:
                self._algebra.release(caps)

            if provides:
                self._log.debug("record match query=%r caps=%r", query.raw, provided)
                return True
        return False

    def close(self) -> None:
        """Release the caps values owned by this matcher."""

        self._queries = ()
        self._finalizer()
