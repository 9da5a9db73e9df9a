"""Tests for playlist-level version aggregation and the declared-version check."""

import pytest

from hlstags.domain.compat import check_version, playlist_version
from hlstags.domain.errors import IncompatibleVersion, UnknownVersion
from hlstags.domain.tags import (
    EncryptionMethod,
    ExtXEndList,
    ExtXIFramesOnly,
    ExtXKey,
    ExtXMap,
    ExtXMediaSequence,
    ExtXServerControl,
    ExtXTargetDuration,
)
from hlstags.domain.values import HexSequence
from hlstags.domain.version import ProtocolVersion


def _key_with_iv() -> ExtXKey:
    return ExtXKey(method=EncryptionMethod.AES_128, uri="k", iv=HexSequence("01"))


class TestPlaylistVersion:
    def test_empty_playlist_is_v1(self) -> None:
        assert playlist_version([]) is ProtocolVersion.V1

    def test_v1_tags(self) -> None:
        tags = [ExtXTargetDuration(duration=10), ExtXMediaSequence(seq_num=0), ExtXEndList()]
        assert playlist_version(tags) is ProtocolVersion.V1

    def test_max_over_tags(self) -> None:
        tags = [ExtXTargetDuration(duration=10), _key_with_iv(), ExtXMap(uri="init.mp4")]
        assert playlist_version(tags) is ProtocolVersion.V6

    def test_adding_a_tag_never_lowers(self) -> None:
        tags = [ExtXIFramesOnly()]
        before = playlist_version(tags)
        after = playlist_version([*tags, ExtXEndList()])
        assert after >= before


class TestCheckVersion:
    def test_sufficient_declared(self) -> None:
        tags = [ExtXTargetDuration(duration=10), _key_with_iv()]
        assert check_version(ProtocolVersion.V3, tags) is ProtocolVersion.V2

    def test_accepts_int(self) -> None:
        assert check_version(7, [ExtXMap(uri="i.mp4")]) is ProtocolVersion.V6

    def test_exact_match(self) -> None:
        assert check_version(8, [ExtXServerControl()]) is ProtocolVersion.V8

    def test_inconsistency_surfaced(self) -> None:
        tags = [
            ExtXTargetDuration(duration=10),
            ExtXMap(uri="i.mp4"),
            _key_with_iv(),
            ExtXServerControl(),
            ExtXMap(uri="j.mp4"),
        ]
        with pytest.raises(IncompatibleVersion) as exc_info:
            check_version(ProtocolVersion.V3, tags)
        err = exc_info.value
        assert err.declared is ProtocolVersion.V3
        assert err.required is ProtocolVersion.V8
        assert err.offenders == ["#EXT-X-MAP", "#EXT-X-SERVER-CONTROL"]
        assert err.detail == {
            "declared": 3,
            "required": 8,
            "offenders": ["#EXT-X-MAP", "#EXT-X-SERVER-CONTROL"],
        }

    def test_accepts_iterator(self) -> None:
        with pytest.raises(IncompatibleVersion):
            check_version(1, iter([ExtXIFramesOnly()]))

    @pytest.mark.parametrize("declared", [0, 9, 99])
    def test_unknown_declared_version(self, declared: int) -> None:
        with pytest.raises(UnknownVersion) as exc_info:
            check_version(declared, [])
        assert exc_info.value.code == "UNKNOWN_VERSION"
        assert exc_info.value.detail == {"raw": str(declared)}
