"""Tags that apply to a whole Media Playlist."""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import Field

from hlstags.domain.schema import Attr
from hlstags.domain.tags.base import AttributeTag, DirectiveTag, ValueTag
from hlstags.domain.values import AttributeKind
from hlstags.domain.version import ProtocolVersion


class ExtXServerControl(AttributeTag):
    """Server support for playlist delta updates and blocking reloads.

    The tag was introduced in protocol version 8; none of its attributes
    raise the version further.
    """

    NAME: ClassVar[str] = "#EXT-X-SERVER-CONTROL"
    MIN_VERSION: ClassVar[ProtocolVersion] = ProtocolVersion.V8

    can_skip_until: Annotated[float | None, Attr("CAN-SKIP-UNTIL", AttributeKind.DECIMAL)] = None
    can_skip_dateranges: Annotated[
        bool | None, Attr("CAN-SKIP-DATERANGES", AttributeKind.YES_NO)
    ] = None
    hold_back: Annotated[float | None, Attr("HOLD-BACK", AttributeKind.DECIMAL)] = None
    part_hold_back: Annotated[float | None, Attr("PART-HOLD-BACK", AttributeKind.DECIMAL)] = None
    can_block_reload: Annotated[bool | None, Attr("CAN-BLOCK-RELOAD", AttributeKind.YES_NO)] = None


class ExtXSkip(AttributeTag):
    """Number of Media Segments replaced by this tag in a delta update."""

    NAME: ClassVar[str] = "#EXT-X-SKIP"
    MIN_VERSION: ClassVar[ProtocolVersion] = ProtocolVersion.V8

    skipped_segments: Annotated[
        int, Field(ge=0), Attr("SKIPPED-SEGMENTS", AttributeKind.UNSIGNED_INTEGER)
    ]
    # Tab-separated EXT-X-DATERANGE IDs.
    recently_removed_dateranges: Annotated[
        str | None, Attr("RECENTLY-REMOVED-DATERANGES", AttributeKind.QUOTED_STRING)
    ] = None


class ExtXTargetDuration(ValueTag):
    NAME: ClassVar[str] = "#EXT-X-TARGETDURATION"
    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.UNSIGNED_INTEGER

    duration: int = Field(ge=0)


class ExtXMediaSequence(ValueTag):
    NAME: ClassVar[str] = "#EXT-X-MEDIA-SEQUENCE"
    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.UNSIGNED_INTEGER

    seq_num: int = Field(ge=0)


class ExtXDiscontinuitySequence(ValueTag):
    """Discontinuity sequence number of the first segment in the playlist."""

    NAME: ClassVar[str] = "#EXT-X-DISCONTINUITY-SEQUENCE"
    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.UNSIGNED_INTEGER

    seq_num: int = Field(ge=0)


class ExtXPrefetch(ValueTag):
    """Path to a segment the server will make available soon.

    The URI is kept verbatim; it is not a quoted-string.
    """

    NAME: ClassVar[str] = "#EXT-X-PREFETCH"
    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.TEXT

    uri: str


class ExtXEndList(DirectiveTag):
    NAME: ClassVar[str] = "#EXT-X-ENDLIST"


class ExtXIFramesOnly(DirectiveTag):
    """Every segment holds a single I-frame; requires protocol version 4."""

    NAME: ClassVar[str] = "#EXT-X-I-FRAMES-ONLY"
    MIN_VERSION: ClassVar[ProtocolVersion] = ProtocolVersion.V4
