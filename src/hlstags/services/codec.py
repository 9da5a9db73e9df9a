"""TagCodec — settings-bound facade over the domain codec.

Two calling styles:

- ``decode`` / ``encode`` / ``playlist_version`` raise
  :class:`~hlstags.domain.errors.HlsTagsError` subclasses.
- ``decode_line`` / ``decode_lines`` / ``check_version`` return
  :class:`~hlstags.services.result.CodecResult` and never raise for
  malformed input. Under the lenient policy, duplicate and ignored
  attributes are reported in ``CodecResult.warnings``.

The codec holds no mutable state; one instance can be shared across
threads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from hlstags.config.settings import HlsTagsSettings
from hlstags.domain.compat import check_version, playlist_version
from hlstags.domain.errors import HlsTagsError
from hlstags.domain.policy import CodecPolicy
from hlstags.domain.tags import Tag, parse_tag
from hlstags.domain.version import ProtocolVersion
from hlstags.services.result import CodecResult

logger = logging.getLogger(__name__)


class TagCodec:
    """Parse and serialize playlist tag lines under one policy.

    Usage::

        codec = TagCodec(HlsTagsSettings.load(), configure_logging=True)
        result = codec.decode_line("#EXT-X-SKIP:SKIPPED-SEGMENTS=12")
        if result.ok:
            print(result.data["tag"])
    """

    def __init__(
        self,
        settings: HlsTagsSettings | None = None,
        *,
        configure_logging: bool = False,
    ) -> None:
        self._settings = settings or HlsTagsSettings()
        self._policy = self._settings.policy
        if configure_logging:
            self._settings.configure_logging()

    @property
    def policy(self) -> CodecPolicy:
        return self._policy

    # --- Raising API ---

    def decode(self, line: str) -> Tag:
        return parse_tag(line, self._policy)

    def encode(self, tag: Tag) -> str:
        return tag.serialize()

    def playlist_version(self, tags: Iterable[Tag]) -> ProtocolVersion:
        return playlist_version(tags)

    # --- Result API ---

    def decode_line(self, line: str) -> CodecResult:
        op = "decode_line"
        warnings: list[str] = []
        try:
            tag = parse_tag(line, self._policy, warnings)
        except HlsTagsError as exc:
            logger.debug("Failed to decode %r: %s", line, exc.message)
            return CodecResult.failure(op, exc)
        return CodecResult(ok=True, op=op, data=self._describe(tag), warnings=warnings)

    def decode_lines(self, lines: Iterable[str]) -> list[CodecResult]:
        """Decode each line independently; one failure does not stop the rest."""
        return [self.decode_line(line) for line in lines]

    def check_version(self, declared: ProtocolVersion | int, tags: Iterable[Tag]) -> CodecResult:
        op = "check_version"
        try:
            required = check_version(declared, tags)
        except HlsTagsError as exc:
            return CodecResult.failure(op, exc)
        return CodecResult(
            ok=True,
            op=op,
            data={"declared": int(declared), "required": int(required)},
        )

    @staticmethod
    def _describe(tag: Tag) -> dict[str, Any]:
        return {
            "tag": tag,
            "name": tag.NAME,
            "canonical": tag.serialize(),
            "required_version": int(tag.required_version()),
        }
