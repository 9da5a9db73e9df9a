"""Tags that appear in a Master Playlist."""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Annotated, ClassVar

from pydantic import Field

from hlstags.domain.schema import Attr, when
from hlstags.domain.tags.base import AttributeTag
from hlstags.domain.tags.media_segment import KeyAttributes
from hlstags.domain.values import AttributeKind, Resolution
from hlstags.domain.version import ProtocolVersion


class MediaType(StrEnum):
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    SUBTITLES = "SUBTITLES"
    CLOSED_CAPTIONS = "CLOSED-CAPTIONS"


class HdcpLevel(StrEnum):
    TYPE_0 = "TYPE-0"
    TYPE_1 = "TYPE-1"
    NONE = "NONE"


class ClosedCaptions(Enum):
    """Token form of CLOSED-CAPTIONS; a group name is a quoted string instead.

    Not a ``str`` subclass, so the NONE token never equals a group named "NONE".
    """

    NONE = "NONE"


def _is_service_channel(instream_id: str) -> bool:
    return instream_id.startswith("SERVICE")


class ExtXMedia(AttributeTag):
    """Alternative rendition of the content (audio, video, subtitles, captions).

    INSTREAM-ID values ``SERVICE1`` to ``SERVICE63`` require protocol
    version 7.
    """

    NAME: ClassVar[str] = "#EXT-X-MEDIA"

    media_type: Annotated[MediaType, Attr("TYPE", AttributeKind.ENUMERATED, vocabulary=MediaType)]
    uri: Annotated[str | None, Attr("URI", AttributeKind.QUOTED_STRING)] = None
    group_id: Annotated[str, Attr("GROUP-ID", AttributeKind.QUOTED_STRING)]
    language: Annotated[str | None, Attr("LANGUAGE", AttributeKind.QUOTED_STRING)] = None
    assoc_language: Annotated[
        str | None, Attr("ASSOC-LANGUAGE", AttributeKind.QUOTED_STRING)
    ] = None
    name: Annotated[str, Attr("NAME", AttributeKind.QUOTED_STRING)]
    is_default: Annotated[bool | None, Attr("DEFAULT", AttributeKind.YES_NO)] = None
    is_autoselect: Annotated[bool | None, Attr("AUTOSELECT", AttributeKind.YES_NO)] = None
    is_forced: Annotated[bool | None, Attr("FORCED", AttributeKind.YES_NO)] = None
    instream_id: Annotated[
        str | None,
        Attr(
            "INSTREAM-ID",
            AttributeKind.QUOTED_STRING,
            version=when(_is_service_channel, ProtocolVersion.V7),
        ),
    ] = None
    characteristics: Annotated[
        str | None, Attr("CHARACTERISTICS", AttributeKind.QUOTED_STRING)
    ] = None
    channels: Annotated[str | None, Attr("CHANNELS", AttributeKind.QUOTED_STRING)] = None


class StreamInfAttributes(AttributeTag):
    """Attributes shared by EXT-X-STREAM-INF and EXT-X-I-FRAME-STREAM-INF."""

    bandwidth: Annotated[int, Field(ge=0), Attr("BANDWIDTH", AttributeKind.UNSIGNED_INTEGER)]
    average_bandwidth: Annotated[
        int | None, Attr("AVERAGE-BANDWIDTH", AttributeKind.UNSIGNED_INTEGER)
    ] = None
    codecs: Annotated[str | None, Attr("CODECS", AttributeKind.QUOTED_STRING)] = None
    resolution: Annotated[Resolution | None, Attr("RESOLUTION", AttributeKind.RESOLUTION)] = None


class ExtXStreamInf(StreamInfAttributes):
    """Variant Stream; the URI of its Media Playlist is on the next line."""

    NAME: ClassVar[str] = "#EXT-X-STREAM-INF"

    frame_rate: Annotated[float | None, Attr("FRAME-RATE", AttributeKind.DECIMAL)] = None
    hdcp_level: Annotated[
        HdcpLevel | None, Attr("HDCP-LEVEL", AttributeKind.ENUMERATED, vocabulary=HdcpLevel)
    ] = None
    audio: Annotated[str | None, Attr("AUDIO", AttributeKind.QUOTED_STRING)] = None
    video: Annotated[str | None, Attr("VIDEO", AttributeKind.QUOTED_STRING)] = None
    subtitles: Annotated[str | None, Attr("SUBTITLES", AttributeKind.QUOTED_STRING)] = None
    closed_captions: Annotated[
        ClosedCaptions | str | None,
        Attr("CLOSED-CAPTIONS", AttributeKind.QUOTED_OR_TOKEN, vocabulary=ClosedCaptions),
    ] = None


class ExtXIFrameStreamInf(StreamInfAttributes):
    """Media Playlist holding the I-frames of a multimedia presentation."""

    NAME: ClassVar[str] = "#EXT-X-I-FRAME-STREAM-INF"

    hdcp_level: Annotated[
        HdcpLevel | None, Attr("HDCP-LEVEL", AttributeKind.ENUMERATED, vocabulary=HdcpLevel)
    ] = None
    video: Annotated[str | None, Attr("VIDEO", AttributeKind.QUOTED_STRING)] = None
    uri: Annotated[str, Attr("URI", AttributeKind.QUOTED_STRING)]


class ExtXSessionData(AttributeTag):
    """Arbitrary session data carried by the Master Playlist."""

    NAME: ClassVar[str] = "#EXT-X-SESSION-DATA"

    data_id: Annotated[str, Attr("DATA-ID", AttributeKind.QUOTED_STRING)]
    value: Annotated[str | None, Attr("VALUE", AttributeKind.QUOTED_STRING)] = None
    uri: Annotated[str | None, Attr("URI", AttributeKind.QUOTED_STRING)] = None
    language: Annotated[str | None, Attr("LANGUAGE", AttributeKind.QUOTED_STRING)] = None


class ExtXSessionKey(KeyAttributes):
    """Encryption key preloaded from the Master Playlist."""

    NAME: ClassVar[str] = "#EXT-X-SESSION-KEY"
