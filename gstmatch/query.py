"""Parse PackageKit style GStreamer search terms into caps queries.

The daemon sends terms such as::

    gstreamer0.10(urisource-foobar)
    gstreamer1.0(decoder-audio/x-wma)(wmaversion=3)
    gstreamer1(decoder-audio/x-wma)(wmaversion=3)(64bit)

Each term becomes a :class:`ParsedQuery` holding the record markers to look
for and the caps value the record has to intersect with.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

from .algebra import CapabilityAlgebra
from .logging import get_logger

__all__ = [
    "FAMILY",
    "GrammarMismatch",
    "ParseReport",
    "ParsedQuery",
    "QueryFields",
    "QueryKind",
    "QueryParser",
    "SkipReason",
    "SkippedQuery",
    "build_caps_string",
    "match_query",
    "normalize_options",
]

FAMILY = "Gstreamer"

# pk-gstreamer-install appends this marker for 64-bit requests.
_X86_64_SUFFIX = ")(64bit"
_X86_64_ARCH = "amd64"

_QUERY_PATTERN = re.compile(
    r"^gstreamer(?P<version>0\.10|1)(?:\.0)?"
    r"\((?P<kind>encoder|decoder|urisource|urisink|element)-(?P<data>[^)]+)\)"
    r"(?P<options>\(.*\))?",
    re.DOTALL,
)


class QueryKind(Enum):
    """Element categories a search term may ask for."""

    ENCODER = ("encoder", "Encoders")
    DECODER = ("decoder", "Decoders")
    URISOURCE = ("urisource", "Uri-Sources")
    URISINK = ("urisink", "Uri-Sinks")
    ELEMENT = ("element", "Elements")

    def __init__(self, token: str, plural: str) -> None:
        self.token = token
        self.plural = plural

    @property
    def marker(self) -> str:
        return f"{FAMILY}-{self.plural}: "

    @classmethod
    def from_token(cls, token: str) -> "QueryKind":
        for kind in cls:
            if kind.token == token:
                return kind
        raise ValueError(f"unknown query kind: {token!r}")


class SkipReason(Enum):
    GRAMMAR_MISMATCH = "grammar_mismatch"
    EXPRESSION_REJECTED = "expression_rejected"


@dataclass(frozen=True, slots=True)
class QueryFields:
    """Substrings captured from a search term that matched the grammar."""

    raw: str
    version: str
    kind: str
    data: str
    options: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GrammarMismatch:
    raw: str


@dataclass(frozen=True, slots=True)
class SkippedQuery:
    raw: str
    reason: SkipReason


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """A search term ready to be tested against capability records.

    ``version_tag`` and ``kind_marker`` hold the exact text searched for in a
    record.  ``expression`` is the engine value parsed from
    :attr:`caps_string`; the owning matcher releases it.
    """

    raw: str
    version_tag: str
    kind: QueryKind
    media_descriptor: str
    constraints: str
    arch_hint: str
    expression: Any = field(compare=False, repr=False)

    @property
    def kind_marker(self) -> str:
        return self.kind.marker

    @property
    def caps_string(self) -> str:
        return build_caps_string(self.media_descriptor, self.constraints)


@dataclass(slots=True)
class ParseReport:
    queries: List[ParsedQuery] = field(default_factory=list)
    skipped: List[SkippedQuery] = field(default_factory=list)


def match_query(raw: str) -> Union[QueryFields, GrammarMismatch]:
    """Apply the search term grammar to *raw*."""

    found = _QUERY_PATTERN.match(raw)
    if found is None:
        return GrammarMismatch(raw)
    options = found.group("options")
    return QueryFields(
        raw=raw,
        version=found.group("version"),
        kind=found.group("kind"),
        data=found.group("data"),
        # drop the outer '(' and ')'
        options=options[1:-1] if options is not None else None,
    )


def normalize_options(options: Optional[str]) -> Tuple[str, str]:
    """Convert ``a=1)(b=2`` option text to ``a=1,b=2`` caps fields.

    Returns ``(constraints, arch_hint)``.  A trailing ``)(64bit`` marker is
    removed and reported as ``amd64``.
    """

    if not options:
        return "", ""

    arch = ""
    if options.endswith(_X86_64_SUFFIX):
        arch = _X86_64_ARCH
        options = options[: -len(_X86_64_SUFFIX)]

    pos = options.find(")(")
    while pos != -1:
        if pos == len(options) - 2:
            options = options[:pos]
            break
        options = options[:pos] + "," + options[pos + 2 :]
        pos = options.find(")(", pos + 1)
    return options, arch


def build_caps_string(media: str, constraints: str) -> str:
    if not constraints:
        return media
    return f"{media}, {constraints}"


class QueryParser:
    """Turn raw search terms into :class:`ParsedQuery` entries."""

    def __init__(self, algebra: CapabilityAlgebra, logger: Optional[logging.Logger] = None) -> None:
        self._algebra = algebra
        self._log = logger or get_logger("query")

    def parse(self, raw: str) -> Union[ParsedQuery, SkippedQuery]:
        fields = match_query(raw)
        if isinstance(fields, GrammarMismatch):
            self._log.debug("query status=skipped reason=grammar value=%r", raw)
            return SkippedQuery(raw, SkipReason.GRAMMAR_MISMATCH)

        constraints, arch = normalize_options(fields.options)
        caps_string = build_caps_string(fields.data, constraints)
        expression = self._algebra.parse(caps_string)
        if expression is None:
            self._log.debug(
                "query status=skipped reason=caps value=%r caps=%r", raw, caps_string
            )
            return SkippedQuery(raw, SkipReason.EXPRESSION_REJECTED)

        return ParsedQuery(
            raw=raw,
            version_tag=f"\n{FAMILY}-Version: {fields.version}",
            kind=QueryKind.from_token(fields.kind),
            media_descriptor=fields.data,
            constraints=constraints,
            arch_hint=arch,
            expression=expression,
        )

    def parse_all(self, raws: Iterable[str]) -> ParseReport:
        """Parse every term in order, collecting the ones that were skipped."""

        report = ParseReport()
        try:
            for raw in raws:
                result = self.parse(raw)
                if isinstance(result, SkippedQuery):
                    report.skipped.append(result)
                else:
                    report.queries.append(result)
        except Exception:
            for query in report.queries:
                self._algebra.release(query.expression)
            raise
        return report
