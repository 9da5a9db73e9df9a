"""Typed playlist tags.

Importing this package registers every built-in tag with
:data:`~hlstags.domain.tags.base.TAG_REGISTRY`.
"""

from hlstags.domain.tags.base import (
    TAG_REGISTRY,
    AttributeTag,
    DirectiveTag,
    Tag,
    ValueTag,
    get_tag_class,
    parse_tag,
    register_tag,
)
from hlstags.domain.tags.master_playlist import (
    ClosedCaptions,
    ExtXIFrameStreamInf,
    ExtXMedia,
    ExtXSessionData,
    ExtXSessionKey,
    ExtXStreamInf,
    HdcpLevel,
    MediaType,
)
from hlstags.domain.tags.media_playlist import (
    ExtXDiscontinuitySequence,
    ExtXEndList,
    ExtXIFramesOnly,
    ExtXMediaSequence,
    ExtXPrefetch,
    ExtXServerControl,
    ExtXSkip,
    ExtXTargetDuration,
)
from hlstags.domain.tags.media_segment import (
    EncryptionMethod,
    ExtXDiscontinuity,
    ExtXKey,
    ExtXMap,
    ExtXProgramDateTime,
)
from hlstags.domain.tags.shared import ExtXIndependentSegments, ExtXStart

__all__ = [
    "TAG_REGISTRY",
    "AttributeTag",
    "ClosedCaptions",
    "DirectiveTag",
    "EncryptionMethod",
    "ExtXDiscontinuity",
    "ExtXDiscontinuitySequence",
    "ExtXEndList",
    "ExtXIFrameStreamInf",
    "ExtXIFramesOnly",
    "ExtXIndependentSegments",
    "ExtXKey",
    "ExtXMap",
    "ExtXMedia",
    "ExtXMediaSequence",
    "ExtXPrefetch",
    "ExtXProgramDateTime",
    "ExtXServerControl",
    "ExtXSessionData",
    "ExtXSessionKey",
    "ExtXSkip",
    "ExtXStart",
    "ExtXStreamInf",
    "ExtXTargetDuration",
    "HdcpLevel",
    "MediaType",
    "Tag",
    "ValueTag",
    "get_tag_class",
    "parse_tag",
    "register_tag",
]
