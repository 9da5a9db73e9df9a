"""Codec error taxonomy.

Every failure the codec can report is an ``HlsTagsError`` subclass. They all
derive from :class:`ValueError`, carry a stable ``code`` and a ``detail``
dict, and are raised at the first problem found. Nothing in the codec
catches them to substitute a default value.

Layers:

- ``ScalarDecodeError``: one raw value does not match its declared kind.
- ``TokenizeError``: attribute-list syntax is malformed.
- ``ProjectionError``: the attribute list does not satisfy a tag schema.
- ``TagSyntaxError``: the line does not start with the expected tag name.
- ``IncompatibleVersion``: a declared version is lower than required.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar


class HlsTagsError(ValueError):
    """Base class for all codec errors."""

    code: ClassVar[str] = "HLS_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


# --- Scalar decoding ---


class ScalarDecodeError(HlsTagsError):
    """A raw value could not be decoded under its declared kind."""

    code = "INVALID_VALUE"

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"{reason}: {raw!r}", raw=raw)
        self.raw = raw


class InvalidInteger(ScalarDecodeError):
    code = "INVALID_INTEGER"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected an unsigned decimal integer")


class InvalidDecimal(ScalarDecodeError):
    code = "INVALID_DECIMAL"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected a decimal floating-point number")


class InvalidQuotedString(ScalarDecodeError):
    code = "INVALID_QUOTED_STRING"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected a double-quoted string without CR, LF or inner quotes")


class InvalidHexSequence(ScalarDecodeError):
    code = "INVALID_HEX_SEQUENCE"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected a 0x-prefixed hexadecimal sequence")


class InvalidResolution(ScalarDecodeError):
    code = "INVALID_RESOLUTION"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected [width]x[height] (ex. 1920x1080)")


class InvalidTimestamp(ScalarDecodeError):
    code = "INVALID_TIMESTAMP"

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "Expected an RFC 3339 date-time with UTC offset")


class UnknownToken(ScalarDecodeError):
    """An enumerated value outside its fixed vocabulary."""

    code = "UNKNOWN_TOKEN"

    def __init__(self, got: str, expected: Iterable[str]) -> None:
        self.got = got
        self.expected: tuple[str, ...] = tuple(sorted(expected))
        super().__init__(got, f"Expected one of {', '.join(self.expected)}")
        self.detail["expected"] = list(self.expected)


# --- Tokenizing ---


class TokenizeError(HlsTagsError):
    """Malformed attribute-list syntax."""

    code = "TOKENIZE_ERROR"


class MissingEquals(TokenizeError):
    code = "MISSING_EQUALS"

    def __init__(self, fragment: str) -> None:
        super().__init__(f"Attribute has no '=': {fragment!r}", fragment=fragment)
        self.fragment = fragment


class EmptyAttribute(TokenizeError):
    """Nothing between two commas, or after a trailing comma."""

    code = "EMPTY_ATTRIBUTE"

    def __init__(self, position: int) -> None:
        super().__init__(f"Empty attribute at position {position}", position=position)
        self.position = position


class EmptyName(TokenizeError):
    """Attribute name is empty or contains characters outside ``[A-Z0-9-]``."""

    code = "INVALID_NAME"

    def __init__(self, name: str) -> None:
        if name:
            message = f"Attribute name must match [A-Z0-9-]+: {name!r}"
        else:
            message = "Attribute name is empty"
        super().__init__(message, name=name)
        self.name = name


class UnterminatedQuote(ScalarDecodeError, TokenizeError):
    """A quoted span is opened and never closed.

    Raised by the tokenizer for a whole attribute list and by the
    quoted-string decoder for a single value.
    """

    code = "UNTERMINATED_QUOTE"

    def __init__(self, raw: str) -> None:
        ScalarDecodeError.__init__(self, raw, "Quoted string is never closed")


class DuplicateAttribute(TokenizeError):
    code = "DUPLICATE_ATTRIBUTE"

    def __init__(self, name: str) -> None:
        super().__init__(f"Attribute appears more than once: {name}", name=name)
        self.name = name


# --- Projection onto a schema ---


class ProjectionError(HlsTagsError):
    """The attribute list does not satisfy the tag schema."""

    code = "PROJECTION_ERROR"


class MissingRequiredField(ProjectionError):
    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required attribute: {name}", name=name)
        self.name = name


class FieldDecodeError(ProjectionError):
    """A present attribute failed to decode under its declared kind."""

    code = "FIELD_DECODE_ERROR"

    def __init__(self, name: str, cause: ScalarDecodeError) -> None:
        super().__init__(
            f"Invalid value for {name}: {cause.message}",
            name=name,
            cause=cause.code,
            raw=cause.raw,
        )
        self.name = name
        self.cause = cause


class UnknownAttribute(ProjectionError):
    code = "UNKNOWN_ATTRIBUTE"

    def __init__(self, name: str, tag: str) -> None:
        super().__init__(f"Attribute {name} is not defined for {tag}", name=name, tag=tag)
        self.name = name


# --- Tag-level syntax ---


class TagSyntaxError(HlsTagsError):
    """The line is not a well-formed instance of the expected tag."""

    code = "TAG_SYNTAX_ERROR"


class UnknownTag(TagSyntaxError):
    code = "UNKNOWN_TAG"

    def __init__(self, name: str) -> None:
        super().__init__(f"No tag registered for {name!r}", name=name)
        self.name = name


class PrefixMismatch(TagSyntaxError):
    code = "PREFIX_MISMATCH"

    def __init__(self, expected: str, line: str) -> None:
        super().__init__(f"Expected line to start with {expected!r}", expected=expected, line=line)
        self.expected = expected
        self.line = line


class UnexpectedValue(TagSyntaxError):
    code = "UNEXPECTED_VALUE"

    def __init__(self, tag: str, value: str) -> None:
        super().__init__(f"{tag} takes no value, got {value!r}", tag=tag, value=value)
        self.value = value


# --- Version compatibility ---


class UnknownVersion(HlsTagsError):
    """A value that names no protocol version."""

    code = "UNKNOWN_VERSION"

    def __init__(self, raw: object) -> None:
        super().__init__(f"Unknown protocol version: {raw!r}", raw=str(raw))
        self.raw = raw


class IncompatibleVersion(HlsTagsError):
    """A declared protocol version is lower than the tags require."""

    code = "INCOMPATIBLE_VERSION"

    def __init__(self, declared: int, required: int, offenders: list[str]) -> None:
        super().__init__(
            f"Declared version {declared} is lower than required version {required}",
            declared=int(declared),
            required=int(required),
            offenders=offenders,
        )
        self.declared = declared
        self.required = required
        self.offenders = offenders
