"""Leniency policy shared by the tokenizer and the projector."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

DuplicatePolicy = Literal["last", "reject"]
UnknownPolicy = Literal["ignore", "reject"]


class CodecPolicy(BaseModel):
    """How to treat input that is well-formed but not canonical.

    Attributes:
        duplicate_attributes: ``"last"`` keeps the last occurrence of a
            repeated attribute name; ``"reject"`` raises
            :class:`~hlstags.domain.errors.DuplicateAttribute`.
        unknown_attributes: ``"ignore"`` drops attribute names the tag
            schema does not define; ``"reject"`` raises
            :class:`~hlstags.domain.errors.UnknownAttribute`.
    """

    model_config = {"frozen": True}

    duplicate_attributes: DuplicatePolicy = "last"
    unknown_attributes: UnknownPolicy = "ignore"


DEFAULT_POLICY = CodecPolicy()
STRICT_POLICY = CodecPolicy(duplicate_attributes="reject", unknown_attributes="reject")
