"""Attribute value kinds and the composite value types.

Plain kinds decode to builtin Python values:

- decimal-integer -> ``int``
- decimal-floating-point -> ``float``
- quoted-string -> ``str`` (without the quotes)
- enumerated-string -> member of the field's vocabulary ``Enum``
- YES/NO enumerated-string -> ``bool``

Composite kinds decode to the frozen dataclasses below. All values are
immutable and own their data; none keeps a reference to the input line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum


class AttributeKind(StrEnum):
    """Value kinds of the attribute-list grammar (RFC 8216 section 4.2)."""

    UNSIGNED_INTEGER = "decimal-integer"
    DECIMAL = "decimal-floating-point"
    QUOTED_STRING = "quoted-string"
    ENUMERATED = "enumerated-string"
    YES_NO = "yes-no"
    HEX_SEQUENCE = "hexadecimal-sequence"
    RESOLUTION = "decimal-resolution"
    TIMESTAMP = "date-time"
    # Either a quoted-string or a token from the field vocabulary (e.g. NONE).
    QUOTED_OR_TOKEN = "quoted-or-token"
    # Unquoted text kept verbatim; only used by value tags such as URIs.
    TEXT = "text"


_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")


@dataclass(frozen=True)
class Resolution:
    """Decimal resolution, ``[width]x[height]``.

    Zero is accepted for either side; only negative values are rejected.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            msg = f"Resolution must be non-negative, got {self.width}x{self.height}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class HexSequence:
    """Hexadecimal sequence such as an AES initialization vector.

    Digits are stored upper-case without the ``0x`` prefix. Leading zeros
    are significant and preserved.
    """

    digits: str

    def __post_init__(self) -> None:
        if not _HEX_DIGITS.fullmatch(self.digits):
            msg = f"Not a hexadecimal digit string: {self.digits!r}"
            raise ValueError(msg)
        object.__setattr__(self, "digits", self.digits.upper())

    @classmethod
    def from_bytes(cls, data: bytes) -> HexSequence:
        return cls(data.hex())

    def to_bytes(self) -> bytes:
        digits = self.digits if len(self.digits) % 2 == 0 else f"0{self.digits}"
        return bytes.fromhex(digits)

    def __str__(self) -> str:
        return f"0x{self.digits}"


@dataclass(frozen=True, eq=False)
class Timestamp:
    """RFC 3339 date-time that remembers how it was written.

    Two timestamps are equal only when they render identically: the same
    wall-clock time, UTC offset, precision and ``Z`` form. The same instant
    written in different offsets is not equal; compare ``value`` for that.

    Attributes:
        value: Timezone-aware datetime in its original offset.
        fraction_digits: Number of fractional-second digits to emit (0-6).
        zulu: Emit ``Z`` instead of ``+00:00``.
    """

    value: datetime
    fraction_digits: int = 0
    zulu: bool = False

    def __post_init__(self) -> None:
        offset = self.value.utcoffset()
        if offset is None:
            msg = "Timestamp requires a timezone-aware datetime"
            raise ValueError(msg)
        if not 0 <= self.fraction_digits <= 6:
            msg = f"fraction_digits must be between 0 and 6, got {self.fraction_digits}"
            raise ValueError(msg)
        if self.value.microsecond % 10 ** (6 - self.fraction_digits):
            msg = (
                f"{self.fraction_digits} fractional digits cannot represent "
                f"microsecond={self.value.microsecond}"
            )
            raise ValueError(msg)
        if self.zulu and offset.total_seconds() != 0:
            msg = "zulu=True requires a zero UTC offset"
            raise ValueError(msg)

    @classmethod
    def of(cls, value: datetime) -> Timestamp:
        """Wrap *value*, choosing the shortest of 0, 3 or 6 fractional digits."""
        if value.microsecond == 0:
            digits = 0
        elif value.microsecond % 1000 == 0:
            digits = 3
        else:
            digits = 6
        return cls(value, digits)

    def _key(self) -> tuple[datetime, timedelta | None, int, bool]:
        return (
            self.value.replace(tzinfo=None),
            self.value.utcoffset(),
            self.fraction_digits,
            self.zulu,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def isoformat(self) -> str:
        dt = self.value
        text = (
            f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
            f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        )
        if self.fraction_digits:
            text += "." + f"{dt.microsecond:06d}"[: self.fraction_digits]
        if self.zulu:
            return f"{text}Z"
        offset = dt.utcoffset()
        assert offset is not None
        minutes = int(offset.total_seconds()) // 60
        sign = "-" if minutes < 0 else "+"
        hours, minutes = divmod(abs(minutes), 60)
        return f"{text}{sign}{hours:02d}:{minutes:02d}"

    def __str__(self) -> str:
        return self.isoformat()
