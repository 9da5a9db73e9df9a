"""Tag base classes and the tag registry.

Three tag shapes share one capability set (``parse``, ``serialize``,
``required_version``):

- :class:`AttributeTag`: ``#EXT-X-NAME:A=1,B="x"``, schema-driven.
- :class:`ValueTag`: ``#EXT-X-NAME:<scalar>``, one value, no attribute list.
- :class:`DirectiveTag`: ``#EXT-X-NAME`` with nothing after it.

Concrete classes set ``NAME`` and are registered automatically; the
registry maps the tag name to its class so :func:`parse_tag` can dispatch
on the text before the first ``:``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, model_validator

from hlstags.domain import scalars
from hlstags.domain.errors import (
    FieldDecodeError,
    PrefixMismatch,
    ScalarDecodeError,
    UnexpectedValue,
    UnknownTag,
)
from hlstags.domain.policy import DEFAULT_POLICY, CodecPolicy
from hlstags.domain.schema import (
    FieldSpec,
    build_schema,
    check_encodable,
    encode_attributes,
    field_versions,
    project,
)
from hlstags.domain.tokenizer import tokenize
from hlstags.domain.values import AttributeKind
from hlstags.domain.version import ProtocolVersion, max_version

_TAG_PREFIX = "#EXT"
_VALUE_SEPARATOR = ":"

# Populated as concrete Tag subclasses are defined.
TAG_REGISTRY: dict[str, type[Tag]] = {}


def register_tag(tag_cls: type[Tag]) -> None:
    """Register *tag_cls* under its ``NAME``.

    Raises:
        ValueError: If the name is malformed or already taken by another class.
    """
    name = tag_cls.NAME
    if not name.startswith(_TAG_PREFIX) or _VALUE_SEPARATOR in name:
        msg = f"Tag name {name!r} must start with {_TAG_PREFIX!r} and contain no ':'"
        raise ValueError(msg)
    existing = TAG_REGISTRY.get(name)
    if existing is not None and existing is not tag_cls:
        msg = f"Tag {name!r} is already registered to {existing.__name__}"
        raise ValueError(msg)
    TAG_REGISTRY[name] = tag_cls


def get_tag_class(name: str) -> type[Tag]:
    """Look up the class registered for tag *name* (e.g. ``#EXT-X-KEY``).

    Raises:
        UnknownTag: If nothing is registered under *name*.
    """
    try:
        return TAG_REGISTRY[name]
    except KeyError:
        raise UnknownTag(name) from None


def parse_tag(
    line: str,
    policy: CodecPolicy = DEFAULT_POLICY,
    warnings: list[str] | None = None,
) -> Tag:
    """Parse one playlist line into the tag registered for its name.

    Non-fatal notes, such as attributes ignored under the lenient policy,
    are appended to *warnings* when a list is given.
    """
    name = line.split(_VALUE_SEPARATOR, 1)[0].strip()
    return get_tag_class(name).parse(line, policy, warnings)


class Tag(BaseModel):
    """Base for every typed playlist tag.

    Subclasses set ``NAME`` (and optionally ``MIN_VERSION``, the version in
    which the tag itself was introduced).
    """

    model_config = {"frozen": True}

    NAME: ClassVar[str] = ""
    MIN_VERSION: ClassVar[ProtocolVersion] = ProtocolVersion.V1

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "NAME" in cls.__dict__ and cls.NAME:
            register_tag(cls)

    @classmethod
    def parse(
        cls,
        line: str,
        policy: CodecPolicy = DEFAULT_POLICY,
        warnings: list[str] | None = None,
    ) -> Self:
        raise NotImplementedError

    def serialize(self) -> str:
        raise NotImplementedError

    def required_version(self) -> ProtocolVersion:
        return self.MIN_VERSION

    @classmethod
    def _strip_prefix(cls, line: str) -> str:
        prefix = f"{cls.NAME}{_VALUE_SEPARATOR}"
        if not line.startswith(prefix):
            raise PrefixMismatch(prefix, line)
        return line[len(prefix) :]

    def __str__(self) -> str:
        return self.serialize()


class AttributeTag(Tag):
    """Tag whose value is an attribute list described by ``Attr`` fields."""

    _schema: ClassVar[tuple[FieldSpec, ...]] = ()

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        cls._schema = build_schema(cls)
        super().__pydantic_init_subclass__(**kwargs)

    @classmethod
    def schema_fields(cls) -> tuple[FieldSpec, ...]:
        """The resolved schema, in canonical order."""
        return cls._schema

    @model_validator(mode="after")
    def _check_encodable(self) -> Self:
        check_encodable(self, self._schema)
        return self

    @classmethod
    def parse(
        cls,
        line: str,
        policy: CodecPolicy = DEFAULT_POLICY,
        warnings: list[str] | None = None,
    ) -> Self:
        body = cls._strip_prefix(line)
        return cls.from_attributes(body, policy, warnings)

    @classmethod
    def from_attributes(
        cls,
        text: str,
        policy: CodecPolicy = DEFAULT_POLICY,
        warnings: list[str] | None = None,
    ) -> Self:
        """Parse an attribute list without the ``#EXT-...:`` prefix."""
        raw = tokenize(text, policy, warnings)
        return project(cls, cls._schema, raw, policy, warnings)

    def attributes(self) -> str:
        """The canonical attribute list without the tag prefix."""
        return encode_attributes(self, self._schema)

    def serialize(self) -> str:
        return f"{self.NAME}{_VALUE_SEPARATOR}{self.attributes()}"

    def required_version(self) -> ProtocolVersion:
        return max_version([self.MIN_VERSION, *field_versions(self, self._schema)])


class ValueTag(Tag):
    """Tag carrying exactly one scalar value and no attribute list.

    Subclasses declare a single model field and set ``VALUE_KIND``.
    """

    VALUE_KIND: ClassVar[AttributeKind] = AttributeKind.TEXT
    _value_field: ClassVar[str] = ""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        fields = list(cls.model_fields)
        if len(fields) == 1:
            cls._value_field = fields[0]
        elif fields:
            msg = f"{cls.__name__} must declare exactly one field, got {fields}"
            raise TypeError(msg)
        super().__pydantic_init_subclass__(**kwargs)

    @property
    def value(self) -> Any:
        return getattr(self, self._value_field)

    @model_validator(mode="after")
    def _check_encodable(self) -> Self:
        text = scalars.encode(self.VALUE_KIND, self.value)
        if "\r" in text or "\n" in text:
            msg = f"{self.NAME} value must fit on one line: {text!r}"
            raise ValueError(msg)
        if scalars.decode(self.VALUE_KIND, text) != self.value:
            msg = f"{self.NAME} value does not round-trip: {self.value!r}"
            raise ValueError(msg)
        return self

    @classmethod
    def parse(
        cls,
        line: str,
        policy: CodecPolicy = DEFAULT_POLICY,
        warnings: list[str] | None = None,
    ) -> Self:
        body = cls._strip_prefix(line)
        try:
            value = scalars.decode(cls.VALUE_KIND, body)
        except ScalarDecodeError as exc:
            raise FieldDecodeError(cls.NAME, exc) from exc
        return cls(**{cls._value_field: value})

    def serialize(self) -> str:
        return f"{self.NAME}{_VALUE_SEPARATOR}{scalars.encode(self.VALUE_KIND, self.value)}"


class DirectiveTag(Tag):
    """Tag with no value at all."""

    @classmethod
    def parse(
        cls,
        line: str,
        policy: CodecPolicy = DEFAULT_POLICY,
        warnings: list[str] | None = None,
    ) -> Self:
        if line == cls.NAME:
            return cls()
        prefix = f"{cls.NAME}{_VALUE_SEPARATOR}"
        if line.startswith(prefix):
            raise UnexpectedValue(cls.NAME, line[len(prefix) :])
        raise PrefixMismatch(cls.NAME, line)

    def serialize(self) -> str:
        return self.NAME
