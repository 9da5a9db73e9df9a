"""Field schemas, projection, serialization, and version rules.

A tag's schema is declared inline on its pydantic fields::

    class ExtXSkip(AttributeTag):
        skipped_segments: Annotated[int, Attr("SKIPPED-SEGMENTS", AttributeKind.UNSIGNED_INTEGER)]

Field declaration order is the canonical serialization order. A field
without a default is required. Every field carries a version rule; the
default rule never raises the version above V1.

INVARIANT: ``project`` scans in schema order, so the first error reported
for a given malformed input is always the same.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from hlstags.domain import scalars
from hlstags.domain.errors import (
    FieldDecodeError,
    MissingRequiredField,
    ScalarDecodeError,
    UnknownAttribute,
)
from hlstags.domain.policy import DEFAULT_POLICY, CodecPolicy
from hlstags.domain.values import AttributeKind
from hlstags.domain.version import ProtocolVersion

if TYPE_CHECKING:
    from pydantic import BaseModel

logger = logging.getLogger(__name__)

VersionRule = Callable[[bool, Any], ProtocolVersion]

T = TypeVar("T", bound="BaseModel")


# --- Version rules ---


def always(version: ProtocolVersion) -> VersionRule:
    """Rule that yields *version* whether or not the field is present."""

    def rule(present: bool, value: Any) -> ProtocolVersion:
        return version

    rule.__name__ = f"always_{version.name}"
    return rule


def when_present(version: ProtocolVersion) -> VersionRule:
    """Rule that yields *version* as soon as the field is present."""

    def rule(present: bool, value: Any) -> ProtocolVersion:
        return version if present else ProtocolVersion.V1

    rule.__name__ = f"when_present_{version.name}"
    return rule


def when(predicate: Callable[[Any], bool], version: ProtocolVersion) -> VersionRule:
    """Rule that yields *version* when the field is present and *predicate* holds."""

    def rule(present: bool, value: Any) -> ProtocolVersion:
        if present and predicate(value):
            return version
        return ProtocolVersion.V1

    rule.__name__ = f"when_{version.name}"
    return rule


V1_ALWAYS = always(ProtocolVersion.V1)


# --- Schema declaration ---


@dataclass(frozen=True)
class Attr:
    """Annotation metadata binding a model field to an attribute.

    Attributes:
        name: Attribute name as written in the playlist (``[A-Z0-9-]+``).
        kind: Value kind used to decode and encode the raw value.
        vocabulary: Enum of valid tokens for enumerated kinds.
        version: Version rule for this field.
    """

    name: str
    kind: AttributeKind
    vocabulary: type[Enum] | None = None
    version: VersionRule = V1_ALWAYS


@dataclass(frozen=True)
class FieldSpec:
    """One resolved schema entry: the model attribute plus its :class:`Attr`."""

    attr: str
    name: str
    kind: AttributeKind
    required: bool
    vocabulary: type[Enum] | None
    version: VersionRule


def build_schema(model_cls: type[BaseModel]) -> tuple[FieldSpec, ...]:
    """Resolve the schema of *model_cls* from its annotated fields.

    Fields without :class:`Attr` metadata are not part of the attribute list.

    Raises:
        TypeError: If two fields claim the same attribute name, or an
            enumerated field has no vocabulary.
    """
    specs: list[FieldSpec] = []
    seen: set[str] = set()
    for attr_name, info in model_cls.model_fields.items():
        meta = next((m for m in info.metadata if isinstance(m, Attr)), None)
        if meta is None:
            continue
        if meta.name in seen:
            msg = f"{model_cls.__name__} declares attribute {meta.name} twice"
            raise TypeError(msg)
        needs_vocabulary = meta.kind in (AttributeKind.ENUMERATED, AttributeKind.QUOTED_OR_TOKEN)
        if needs_vocabulary and meta.vocabulary is None:
            msg = f"{model_cls.__name__}.{attr_name}: {meta.kind} needs a vocabulary"
            raise TypeError(msg)
        seen.add(meta.name)
        specs.append(
            FieldSpec(
                attr=attr_name,
                name=meta.name,
                kind=meta.kind,
                required=info.is_required(),
                vocabulary=meta.vocabulary,
                version=meta.version,
            )
        )
    return tuple(specs)


# --- Projection (decode) ---


def project(
    model_cls: type[T],
    schema: tuple[FieldSpec, ...],
    raw: Mapping[str, str],
    policy: CodecPolicy = DEFAULT_POLICY,
    warnings: list[str] | None = None,
) -> T:
    """Build a *model_cls* instance from a tokenized attribute list.

    Unknown attributes ignored under the lenient policy are noted in
    *warnings* when a list is given.

    Raises:
        MissingRequiredField: A required attribute is absent.
        FieldDecodeError: A present attribute does not decode as its kind.
        UnknownAttribute: *raw* has a name outside the schema and *policy*
            rejects unknown attributes.
    """
    values: dict[str, Any] = {}
    for spec in schema:
        raw_value = raw.get(spec.name)
        if raw_value is None:
            if spec.required:
                raise MissingRequiredField(spec.name)
            continue
        try:
            values[spec.attr] = scalars.decode(spec.kind, raw_value, spec.vocabulary)
        except ScalarDecodeError as exc:
            raise FieldDecodeError(spec.name, exc) from exc

    known = {spec.name for spec in schema}
    for name in raw:
        if name in known:
            continue
        if policy.unknown_attributes == "reject":
            raise UnknownAttribute(name, model_cls.__name__)
        logger.debug("Ignoring attribute %s not defined for %s", name, model_cls.__name__)
        if warnings is not None:
            warnings.append(f"Ignored attribute {name} not defined for {model_cls.__name__}")

    return model_cls(**values)


# --- Serialization (encode) ---


def encode_attributes(instance: BaseModel, schema: tuple[FieldSpec, ...]) -> str:
    """Render the present fields of *instance* as a canonical attribute list."""
    parts: list[str] = []
    for spec in schema:
        value = getattr(instance, spec.attr)
        if value is None:
            continue
        parts.append(f"{spec.name}={scalars.encode(spec.kind, value)}")
    return ",".join(parts)


def check_encodable(instance: BaseModel, schema: tuple[FieldSpec, ...]) -> None:
    """Verify every present field survives an encode/decode round trip.

    Raises:
        ValueError: If a field holds a value the grammar cannot express,
            such as a quoted string containing ``"``.
    """
    for spec in schema:
        value = getattr(instance, spec.attr)
        if value is None:
            continue
        text = scalars.encode(spec.kind, value)
        try:
            decoded = scalars.decode(spec.kind, text, spec.vocabulary)
        except ScalarDecodeError as exc:
            msg = f"{spec.name} cannot be written as {spec.kind}: {exc.message}"
            raise ValueError(msg) from exc
        if decoded != value:
            msg = f"{spec.name} does not round-trip: {value!r} -> {text!r}"
            raise ValueError(msg)


# --- Versions ---


def field_versions(instance: BaseModel, schema: tuple[FieldSpec, ...]) -> list[ProtocolVersion]:
    """Apply each field's version rule to *instance*."""
    versions: list[ProtocolVersion] = []
    for spec in schema:
        value = getattr(instance, spec.attr)
        versions.append(spec.version(value is not None, value))
    return versions
