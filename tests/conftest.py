from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import pytest


@dataclass(frozen=True)
class FakeCaps:
    media: str
    fields: Dict[str, str]


class FakeAlgebra:
    """Toy caps engine: same media type and equal values on shared keys."""

    def __init__(self) -> None:
        self.init_calls = 0
        self.parse_calls = 0
        self.overlap_calls = 0
        self.released: list[FakeCaps] = []

    def init(self) -> None:
        self.init_calls += 1

    def parse(self, text: str) -> Optional[FakeCaps]:
        self.parse_calls += 1
        media, *rest = [part.strip() for part in text.split(",")]
        if not media or "=" in media or " " in media:
            return None
        fields: Dict[str, str] = {}
        for part in rest:
            key, sep, value = part.partition("=")
            if not sep or not key.strip() or not value.strip():
                return None
            value = value.strip()
            if value.startswith("(") and ")" in value:
                value = value.split(")", 1)[1]
            fields[key.strip()] = value
        return FakeCaps(media, fields)

    def can_overlap(self, a: FakeCaps, b: FakeCaps) -> bool:
        self.overlap_calls += 1
        if a.media != b.media:
            return False
        return all(b.fields[key] == value for key, value in a.fields.items() if key in b.fields)

    def release(self, value: FakeCaps) -> None:
        self.released.append(value)


@pytest.fixture
def algebra() -> FakeAlgebra:
    return FakeAlgebra()


@pytest.fixture
def wma_record() -> str:
    return "\n".join(
        [
            "Package: gstreamer1.0-plugins-bad",
            "Architecture: amd64",
            "Gstreamer-Version: 1.0",
            "Gstreamer-Elements: wmadec",
            "Gstreamer-Decoders: audio/x-wma, wmaversion=3",
            "Description: bad plugins",
        ]
    )
