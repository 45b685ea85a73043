"""Match GStreamer capability search terms against package records."""

from .algebra import AlgebraUnavailable, CapabilityAlgebra, GstAlgebra
from .matcher import Matcher
from .query import ParsedQuery, ParseReport, QueryKind, QueryParser, SkippedQuery, SkipReason

__all__ = [
    "AlgebraUnavailable",
    "CapabilityAlgebra",
    "GstAlgebra",
    "Matcher",
    "ParseReport",
    "ParsedQuery",
    "QueryKind",
    "QueryParser",
    "SkipReason",
    "SkippedQuery",
]
