"""Protocol compatibility versions and aggregation helpers.

A playlist must declare (via EXT-X-VERSION) a version at least as high as
the highest version any of its tags requires. Versions are computed on
demand from tag contents and never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from hlstags.domain.errors import UnknownVersion


class ProtocolVersion(IntEnum):
    """Closed, totally ordered set of HLS compatibility versions."""

    V1 = 1
    V2 = 2
    V3 = 3
    V4 = 4
    V5 = 5
    V6 = 6
    V7 = 7
    V8 = 8

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls, raw: str | int) -> ProtocolVersion:
        """Coerce ``"7"`` / ``7`` / ``"V7"`` into a member.

        Raises:
            UnknownVersion: If the value names no known version.
        """
        text = str(raw).strip().upper().removeprefix("V")
        if not text.isdigit():
            raise UnknownVersion(raw)
        try:
            return cls(int(text))
        except ValueError:
            raise UnknownVersion(raw) from None


DEFAULT_VERSION = ProtocolVersion.V1


def max_version(versions: Iterable[ProtocolVersion]) -> ProtocolVersion:
    """Return the highest version in *versions*, or V1 when empty."""
    return max(versions, default=DEFAULT_VERSION)
