"""Attribute-list tokenizer.

Splits ``NAME=VALUE,NAME=VALUE,...`` into an ordered name -> raw value
mapping. Commas and ``=`` inside a ``"..."`` span belong to the value.
Values are returned exactly as written (quotes included); decoding by kind
happens later, in the projector.

Duplicate names keep the position of their first occurrence and the value
of their last one, unless the policy rejects duplicates.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping

from hlstags.domain.errors import (
    DuplicateAttribute,
    EmptyAttribute,
    EmptyName,
    MissingEquals,
    UnterminatedQuote,
)
from hlstags.domain.policy import DEFAULT_POLICY, CodecPolicy

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Z0-9-]+")

_QUOTE = '"'
_SEPARATOR = ","
_ASSIGN = "="


class AttributeList(Mapping[str, str]):
    """Read-only, insertion-ordered mapping of attribute name to raw value."""

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def __getitem__(self, name: str) -> str:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"AttributeList({self._items!r})"


def _split_pairs(text: str) -> Iterator[str]:
    """Yield comma-separated fragments, honoring quoted spans."""
    in_quotes = False
    start = 0
    for index, char in enumerate(text):
        if char == _QUOTE:
            in_quotes = not in_quotes
        elif char == _SEPARATOR and not in_quotes:
            yield text[start:index]
            start = index + 1
    if in_quotes:
        raise UnterminatedQuote(text[start:])
    yield text[start:]


def _split_pair(fragment: str) -> tuple[str, str]:
    """Split one fragment at its first unquoted ``=``."""
    pair = fragment.strip()
    in_quotes = False
    for index, char in enumerate(pair):
        if char == _QUOTE:
            in_quotes = not in_quotes
        elif char == _ASSIGN and not in_quotes:
            name = pair[:index].strip()
            if not NAME_PATTERN.fullmatch(name):
                raise EmptyName(name)
            return name, pair[index + 1 :].strip()
    raise MissingEquals(pair)


def tokenize(
    text: str,
    policy: CodecPolicy = DEFAULT_POLICY,
    warnings: list[str] | None = None,
) -> AttributeList:
    """Tokenize one attribute list.

    An empty (or all-whitespace) *text* yields an empty list. A trailing or
    doubled comma leaves an empty fragment, which is rejected as
    :class:`EmptyAttribute`.

    Args:
        text: Attribute list without the tag prefix.
        policy: Duplicate-attribute handling.
        warnings: If given, a note is appended for each duplicate kept
            under the lenient policy.

    Raises:
        EmptyAttribute: A fragment between commas is blank.
        MissingEquals: A fragment has no unquoted ``=``.
        EmptyName: A name is empty or uses characters outside ``[A-Z0-9-]``.
        UnterminatedQuote: A quoted span runs to the end of *text*.
        DuplicateAttribute: A name repeats and *policy* rejects duplicates.
    """
    attributes: dict[str, str] = {}
    if not text.strip():
        return AttributeList()

    for position, fragment in enumerate(_split_pairs(text)):
        if not fragment.strip():
            raise EmptyAttribute(position)
        name, value = _split_pair(fragment)
        if name in attributes:
            if policy.duplicate_attributes == "reject":
                raise DuplicateAttribute(name)
            logger.debug("Duplicate attribute %s: keeping last value", name)
            if warnings is not None:
                warnings.append(f"Duplicate attribute {name}: kept last value")
        attributes[name] = value
    return AttributeList(attributes)
