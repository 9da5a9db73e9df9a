"""Tags allowed in both Master and Media Playlists."""

from __future__ import annotations

from typing import Annotated, ClassVar

from hlstags.domain.schema import Attr
from hlstags.domain.tags.base import AttributeTag, DirectiveTag
from hlstags.domain.values import AttributeKind


class ExtXStart(AttributeTag):
    """Preferred point at which to start playing.

    TIME-OFFSET is signed: negative values count back from the end of the
    playlist.
    """

    NAME: ClassVar[str] = "#EXT-X-START"

    time_offset: Annotated[float, Attr("TIME-OFFSET", AttributeKind.DECIMAL)]
    precise: Annotated[bool | None, Attr("PRECISE", AttributeKind.YES_NO)] = None


class ExtXIndependentSegments(DirectiveTag):
    NAME: ClassVar[str] = "#EXT-X-INDEPENDENT-SEGMENTS"
