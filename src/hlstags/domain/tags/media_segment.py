"""Tags that describe one or more Media Segments."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, ClassVar

from hlstags.domain.schema import Attr, when_present
from hlstags.domain.tags.base import AttributeTag, DirectiveTag, ValueTag
from hlstags.domain.values import AttributeKind, HexSequence, Timestamp
from hlstags.domain.version import ProtocolVersion


class EncryptionMethod(StrEnum):
    NONE = "NONE"
    AES_128 = "AES-128"
    SAMPLE_AES = "SAMPLE-AES"


class KeyAttributes(AttributeTag):
    """Attribute schema shared by EXT-X-KEY and EXT-X-SESSION-KEY.

    Version rules:

    - IV present -> V2
    - KEYFORMAT or KEYFORMATVERSIONS present -> V5
    """

    method: Annotated[
        EncryptionMethod, Attr("METHOD", AttributeKind.ENUMERATED, vocabulary=EncryptionMethod)
    ]
    uri: Annotated[str | None, Attr("URI", AttributeKind.QUOTED_STRING)] = None
    iv: Annotated[
        HexSequence | None,
        Attr("IV", AttributeKind.HEX_SEQUENCE, version=when_present(ProtocolVersion.V2)),
    ] = None
    key_format: Annotated[
        str | None,
        Attr("KEYFORMAT", AttributeKind.QUOTED_STRING, version=when_present(ProtocolVersion.V5)),
    ] = None
    key_format_versions: Annotated[
        str | None,
        Attr(
            "KEYFORMATVERSIONS",
            AttributeKind.QUOTED_STRING,
            version=when_present(ProtocolVersion.V5),
        ),
    ] = None


class ExtXKey(KeyAttributes):
    """How to decrypt the segments that follow."""

    NAME: ClassVar[str] = "#EXT-X-KEY"


class ExtXMap(AttributeTag):
    """Media Initialization Section for the segments that follow."""

    NAME: ClassVar[str] = "#EXT-X-MAP"
    MIN_VERSION: ClassVar[ProtocolVersion] = ProtocolVersion.V6

    uri: Annotated[str, Attr("URI", AttributeKind.QUOTED_STRING)]
    # <n>[@<o>], kept as text
    byte_range: Annotated[str | None, Attr("BYTERANGE", AttributeKind.QUOTED_STRING)] = None


class ExtXProgramDateTime(ValueTag):
    """Absolute date and time of the first sample of a segment."""

    NAME: ClassVar[str] = "#EXT-X-PROGRAM-DATE-TIME"
    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.TIMESTAMP

    date_time: Timestamp


class ExtXDiscontinuity(DirectiveTag):
    NAME: ClassVar[str] = "#EXT-X-DISCONTINUITY"
