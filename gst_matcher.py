"""Command line front end for checking a package record against search terms."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from gstmatch.algebra import AlgebraUnavailable, CapabilityAlgebra
from gstmatch.logging import configure_logging, get_logger
from gstmatch.matcher import Matcher
from gstmatch.runtime import default_arch, log_level

log = get_logger("cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Check whether a package record provides GStreamer caps"
    )
    parser.add_argument(
        "queries",
        nargs="+",
        metavar="QUERY",
        help="Search term, e.g. 'gstreamer1.0(decoder-audio/x-wma)(wmaversion=3)'",
    )
    parser.add_argument(
        "--record",
        type=str,
        default="-",
        help="File holding the package record ('-' reads stdin)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default=None,
        help="Target architecture (defaults to $GSTMATCH_ARCH)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the parsed and skipped queries instead of matching",
    )
    return parser.parse_args(argv)


def _read_record(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def main(
    argv: Sequence[str] | None = None,
    *,
    algebra: Optional[CapabilityAlgebra] = None,
) -> int:
    """Entry point; returns 0 on match, 1 on no match and 2 on error."""

    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else log_level())

    try:
        matcher = Matcher(args.queries, algebra)
    except AlgebraUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    with matcher:
        if args.list:
            for query in matcher.queries:
                print(
                    f"{query.kind.token} {query.media_descriptor} "
                    f"{query.constraints or '-'} {query.arch_hint or '-'}"
                )
            for skipped in matcher.skipped:
                print(f"skipped {skipped.reason.value} {skipped.raw}")
            return 0

        try:
            record = _read_record(args.record)
        except OSError as exc:
            print(f"error: cannot read record: {exc}", file=sys.stderr)
            return 2

        arch = args.arch if args.arch is not None else default_arch()
        log.debug("cli arch=%r queries=%d", arch, len(matcher))
        if matcher.matches(record, arch):
            print("match")
            return 0
        print("no match")
        return 1


if __name__ == "__main__":  # pragma: no cover - convenience wrapper
    sys.exit(main())
