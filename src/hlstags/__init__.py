"""hlstags — HTTP Live Streaming tag and attribute-list codec.

Typical use::

    from hlstags import parse_tag, playlist_version

    tag = parse_tag("#EXT-X-KEY:METHOD=AES-128,URI=\"key.bin\",IV=0x1A2B")
    tag.serialize()          # canonical text, attributes in schema order
    tag.required_version()   # ProtocolVersion.V2
"""

from hlstags.domain.compat import check_version, playlist_version
from hlstags.domain.errors import (
    DuplicateAttribute,
    EmptyAttribute,
    EmptyName,
    FieldDecodeError,
    HlsTagsError,
    IncompatibleVersion,
    InvalidDecimal,
    InvalidHexSequence,
    InvalidInteger,
    InvalidQuotedString,
    InvalidResolution,
    InvalidTimestamp,
    MissingEquals,
    MissingRequiredField,
    PrefixMismatch,
    ProjectionError,
    ScalarDecodeError,
    TagSyntaxError,
    TokenizeError,
    UnexpectedValue,
    UnknownAttribute,
    UnknownTag,
    UnknownToken,
    UnknownVersion,
    UnterminatedQuote,
)
from hlstags.domain.policy import DEFAULT_POLICY, STRICT_POLICY, CodecPolicy
from hlstags.domain.tags import (
    AttributeTag,
    DirectiveTag,
    ExtXDiscontinuity,
    ExtXDiscontinuitySequence,
    ExtXEndList,
    ExtXIFrameStreamInf,
    ExtXIFramesOnly,
    ExtXIndependentSegments,
    ExtXKey,
    ExtXMap,
    ExtXMedia,
    ExtXMediaSequence,
    ExtXPrefetch,
    ExtXProgramDateTime,
    ExtXServerControl,
    ExtXSessionData,
    ExtXSessionKey,
    ExtXSkip,
    ExtXStart,
    ExtXStreamInf,
    ExtXTargetDuration,
    Tag,
    ValueTag,
    parse_tag,
)
from hlstags.domain.tokenizer import AttributeList, tokenize
from hlstags.domain.values import AttributeKind, HexSequence, Resolution, Timestamp
from hlstags.domain.version import ProtocolVersion

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_POLICY",
    "STRICT_POLICY",
    "AttributeKind",
    "AttributeList",
    "AttributeTag",
    "CodecPolicy",
    "DirectiveTag",
    "DuplicateAttribute",
    "EmptyAttribute",
    "EmptyName",
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
    "FieldDecodeError",
    "HexSequence",
    "HlsTagsError",
    "IncompatibleVersion",
    "InvalidDecimal",
    "InvalidHexSequence",
    "InvalidInteger",
    "InvalidQuotedString",
    "InvalidResolution",
    "InvalidTimestamp",
    "MissingEquals",
    "MissingRequiredField",
    "PrefixMismatch",
    "ProjectionError",
    "ProtocolVersion",
    "Resolution",
    "ScalarDecodeError",
    "Tag",
    "TagSyntaxError",
    "Timestamp",
    "TokenizeError",
    "UnexpectedValue",
    "UnknownAttribute",
    "UnknownTag",
    "UnknownToken",
    "UnknownVersion",
    "UnterminatedQuote",
    "ValueTag",
    "check_version",
    "parse_tag",
    "playlist_version",
    "tokenize",
]
