"""Playlist-level protocol version aggregation.

The minimum version a playlist must declare is the maximum of what its
tags require, floored at V1. A declared version below that is reported,
never silently raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hlstags.domain.errors import IncompatibleVersion
from hlstags.domain.tags.base import Tag
from hlstags.domain.version import ProtocolVersion, max_version

logger = logging.getLogger(__name__)


def playlist_version(tags: Iterable[Tag]) -> ProtocolVersion:
    """Return the lowest version that can legally carry every tag in *tags*."""
    return max_version(tag.required_version() for tag in tags)


def check_version(declared: ProtocolVersion | int, tags: Iterable[Tag]) -> ProtocolVersion:
    """Verify that *declared* is high enough for *tags*.

    Returns:
        The required version (at most *declared*).

    Raises:
        UnknownVersion: If *declared* is not a protocol version.
        IncompatibleVersion: If any tag needs more than *declared*. The
            error lists the names of the offending tags in input order.
    """
    declared = ProtocolVersion.parse(declared)
    required = ProtocolVersion.V1
    offenders: list[str] = []
    for tag in tags:
        version = tag.required_version()
        required = max(required, version)
        if version > declared and tag.NAME not in offenders:
            offenders.append(tag.NAME)

    logger.debug("Declared version %s, required %s", declared, required)
    if required > declared:
        raise IncompatibleVersion(declared, required, offenders)
    return required
