"""Scalar decoders — one parse/format pair per attribute kind.

``decode`` is partial: it raises a :class:`ScalarDecodeError` subclass on
malformed input. ``encode`` is total for every value ``decode`` can
produce, and ``decode(kind, encode(kind, v)) == v`` holds for those values.
``encode(decode(s))`` need not equal ``s``: numeric formatting and hex
digit case are normalized.

Examples:
    >>> decode(AttributeKind.RESOLUTION, "1920x1080")
    Resolution(width=1920, height=1080)
    >>> encode(AttributeKind.DECIMAL, 12.0)
    '12'
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from hlstags.domain.errors import (
    InvalidDecimal,
    InvalidHexSequence,
    InvalidInteger,
    InvalidQuotedString,
    InvalidResolution,
    InvalidTimestamp,
    UnknownToken,
    UnterminatedQuote,
)
from hlstags.domain.values import AttributeKind, HexSequence, Resolution, Timestamp

MAX_UNSIGNED = 2**64 - 1

_UNSIGNED = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_HEX = re.compile(r"0[xX]([0-9A-Fa-f]+)")
_TIMESTAMP = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?:(?P<zulu>Z)|(?P<sign>[+-])(?P<off_hour>[01][0-9]|2[0-3]):(?P<off_minute>[0-5][0-9]))"
)

_YES = "YES"
_NO = "NO"


# --- Per-kind decoders ---


def decode_unsigned(raw: str) -> int:
    if not _UNSIGNED.fullmatch(raw):
        raise InvalidInteger(raw)
    value = int(raw)
    if value > MAX_UNSIGNED:
        raise InvalidInteger(raw)
    return value


def decode_decimal(raw: str) -> float:
    if not _DECIMAL.fullmatch(raw):
        raise InvalidDecimal(raw)
    value = float(raw)
    if not math.isfinite(value):
        raise InvalidDecimal(raw)
    return value


def decode_quoted(raw: str) -> str:
    """Strip the surrounding quotes; the interior is taken verbatim."""
    if not raw.startswith('"'):
        raise InvalidQuotedString(raw)
    if len(raw) < 2 or not raw.endswith('"'):
        raise UnterminatedQuote(raw)
    inner = raw[1:-1]
    if '"' in inner or "\r" in inner or "\n" in inner:
        raise InvalidQuotedString(raw)
    return inner


def decode_token(raw: str, vocabulary: type[Enum]) -> Enum:
    """Match *raw* exactly (case-sensitive) against *vocabulary* values."""
    for member in vocabulary:
        if member.value == raw:
            return member
    raise UnknownToken(raw, [str(member.value) for member in vocabulary])


def decode_yes_no(raw: str) -> bool:
    if raw == _YES:
        return True
    if raw == _NO:
        return False
    raise UnknownToken(raw, [_YES, _NO])


def decode_hex(raw: str) -> HexSequence:
    match = _HEX.fullmatch(raw)
    if match is None:
        raise InvalidHexSequence(raw)
    return HexSequence(match.group(1))


def decode_resolution(raw: str) -> Resolution:
    if raw.count("x") != 1:
        raise InvalidResolution(raw)
    width, height = raw.split("x")
    if not (_UNSIGNED.fullmatch(width) and _UNSIGNED.fullmatch(height)):
        raise InvalidResolution(raw)
    return Resolution(int(width), int(height))


def decode_timestamp(raw: str) -> Timestamp:
    """Parse a strict RFC 3339 date-time; the UTC offset is mandatory.

    Fractional seconds beyond microseconds are truncated. Offsets range from
    -23:59 to +23:59.
    """
    match = _TIMESTAMP.fullmatch(raw)
    if match is None:
        raise InvalidTimestamp(raw)
    fraction = match.group("fraction") or ""
    digits = min(len(fraction), 6)
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    zulu = match.group("zulu") is not None
    try:
        if zulu:
            tz = timezone.utc
        else:
            offset = timedelta(
                hours=int(match.group("off_hour")),
                minutes=int(match.group("off_minute")),
            )
            if match.group("sign") == "-":
                offset = -offset
            tz = timezone(offset)
        value = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            microsecond,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise InvalidTimestamp(raw) from exc
    return Timestamp(value, digits, zulu)


# --- Per-kind encoders ---


def encode_decimal(value: float) -> str:
    """Shortest positional form that round-trips; no exponent, no trailing zeros."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode_quoted(value: str) -> str:
    return f'"{value}"'


# --- Kind dispatch ---


def decode(kind: AttributeKind, raw: str, vocabulary: type[Enum] | None = None) -> Any:
    """Decode *raw* as *kind*.

    Args:
        kind: Declared attribute kind.
        raw: Raw value exactly as it appeared after ``=``.
        vocabulary: Enum of valid tokens; required for ``ENUMERATED`` and
            ``QUOTED_OR_TOKEN``.

    Raises:
        ScalarDecodeError: If *raw* is not a valid *kind* value.
    """
    if kind is AttributeKind.UNSIGNED_INTEGER:
        return decode_unsigned(raw)
    if kind is AttributeKind.DECIMAL:
        return decode_decimal(raw)
    if kind is AttributeKind.QUOTED_STRING:
        return decode_quoted(raw)
    if kind is AttributeKind.YES_NO:
        return decode_yes_no(raw)
    if kind is AttributeKind.HEX_SEQUENCE:
        return decode_hex(raw)
    if kind is AttributeKind.RESOLUTION:
        return decode_resolution(raw)
    if kind is AttributeKind.TIMESTAMP:
        return decode_timestamp(raw)
    if kind is AttributeKind.TEXT:
        return raw
    if vocabulary is None:
        msg = f"Attribute kind {kind} needs a vocabulary"
        raise TypeError(msg)
    if kind is AttributeKind.QUOTED_OR_TOKEN and raw.startswith('"'):
        return decode_quoted(raw)
    return decode_token(raw, vocabulary)


def encode(kind: AttributeKind, value: Any) -> str:
    """Format *value* as *kind*. Never fails for decodable values."""
    if kind is AttributeKind.DECIMAL:
        return encode_decimal(value)
    if kind is AttributeKind.QUOTED_STRING:
        return encode_quoted(value)
    if kind is AttributeKind.YES_NO:
        return _YES if value else _NO
    if kind in (AttributeKind.ENUMERATED, AttributeKind.QUOTED_OR_TOKEN):
        if isinstance(value, Enum):
            return str(value.value)
        return encode_quoted(value)
    return str(value)
