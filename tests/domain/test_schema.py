"""Tests for field schemas — projection, serialization, and version rules."""

from enum import StrEnum
from typing import Annotated

import pytest
from pydantic import ValidationError

from hlstags.domain.errors import (
    FieldDecodeError,
    InvalidInteger,
    MissingRequiredField,
    UnknownAttribute,
    UnknownToken,
)
from hlstags.domain.policy import STRICT_POLICY, CodecPolicy
from hlstags.domain.schema import (
    V1_ALWAYS,
    Attr,
    always,
    build_schema,
    field_versions,
    project,
    when,
    when_present,
)
from hlstags.domain.tags.base import AttributeTag
from hlstags.domain.tokenizer import tokenize
from hlstags.domain.values import AttributeKind, Resolution
from hlstags.domain.version import ProtocolVersion


class Mode(StrEnum):
    FAST = "FAST"
    SLOW = "SLOW"


class Sample(AttributeTag):
    """Unregistered attribute list used to exercise the projector."""

    count: Annotated[int, Attr("COUNT", AttributeKind.UNSIGNED_INTEGER)]
    label: Annotated[
        str | None,
        Attr("LABEL", AttributeKind.QUOTED_STRING, version=when_present(ProtocolVersion.V3)),
    ] = None
    ratio: Annotated[float | None, Attr("RATIO", AttributeKind.DECIMAL)] = None
    mode: Annotated[
        Mode | None,
        Attr(
            "MODE",
            AttributeKind.ENUMERATED,
            vocabulary=Mode,
            version=when(lambda m: m is Mode.SLOW, ProtocolVersion.V6),
        ),
    ] = None
    size: Annotated[Resolution, Attr("SIZE", AttributeKind.RESOLUTION)]


# ---------------------------------------------------------------------------
# Schema resolution
# ---------------------------------------------------------------------------


class TestBuildSchema:
    def test_declaration_order(self) -> None:
        names = [spec.name for spec in Sample.schema_fields()]
        assert names == ["COUNT", "LABEL", "RATIO", "MODE", "SIZE"]

    def test_required_from_default(self) -> None:
        required = {spec.name for spec in Sample.schema_fields() if spec.required}
        assert required == {"COUNT", "SIZE"}

    def test_default_version_rule(self) -> None:
        (count,) = [spec for spec in Sample.schema_fields() if spec.name == "COUNT"]
        assert count.version is V1_ALWAYS

    def test_fields_without_attr_are_skipped(self) -> None:
        class Partial(AttributeTag):
            count: Annotated[int, Attr("COUNT", AttributeKind.UNSIGNED_INTEGER)]
            note: str = ""

        assert [spec.attr for spec in build_schema(Partial)] == ["count"]

    def test_duplicate_name_rejected(self) -> None:
        with pytest.raises(TypeError, match="twice"):

            class Twice(AttributeTag):
                a: Annotated[int, Attr("X", AttributeKind.UNSIGNED_INTEGER)]
                b: Annotated[int, Attr("X", AttributeKind.UNSIGNED_INTEGER)]

    def test_enumerated_needs_vocabulary(self) -> None:
        with pytest.raises(TypeError, match="vocabulary"):

            class NoVocabulary(AttributeTag):
                mode: Annotated[Mode, Attr("MODE", AttributeKind.ENUMERATED)]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


class TestProject:
    def test_full_decode(self) -> None:
        tag = Sample.from_attributes('COUNT=3,LABEL="a,b",RATIO=0.5,MODE=FAST,SIZE=640x360')
        assert tag.count == 3
        assert tag.label == "a,b"
        assert tag.ratio == 0.5
        assert tag.mode is Mode.FAST
        assert tag.size == Resolution(640, 360)

    def test_optional_absent_left_unset(self) -> None:
        tag = Sample.from_attributes("COUNT=3,SIZE=1x1")
        assert tag.label is None
        assert tag.ratio is None
        assert tag.mode is None

    def test_input_order_irrelevant(self) -> None:
        a = Sample.from_attributes("SIZE=1x1,MODE=SLOW,COUNT=3")
        b = Sample.from_attributes("COUNT=3,MODE=SLOW,SIZE=1x1")
        assert a == b

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredField) as exc_info:
            Sample.from_attributes("COUNT=3")
        assert exc_info.value.name == "SIZE"
        assert exc_info.value.detail == {"name": "SIZE"}

    def test_field_decode_error_names_field(self) -> None:
        with pytest.raises(FieldDecodeError) as exc_info:
            Sample.from_attributes("COUNT=-3,SIZE=1x1")
        err = exc_info.value
        assert err.name == "COUNT"
        assert isinstance(err.cause, InvalidInteger)
        assert err.detail == {"name": "COUNT", "cause": "INVALID_INTEGER", "raw": "-3"}

    def test_unknown_token_cause(self) -> None:
        with pytest.raises(FieldDecodeError) as exc_info:
            Sample.from_attributes("COUNT=1,MODE=fast,SIZE=1x1")
        assert isinstance(exc_info.value.cause, UnknownToken)
        assert exc_info.value.cause.expected == ("FAST", "SLOW")

    def test_errors_follow_schema_order(self) -> None:
        """SIZE is bad and COUNT is missing; COUNT comes first in the schema."""
        with pytest.raises(MissingRequiredField) as exc_info:
            Sample.from_attributes("SIZE=bad,MODE=nope")
        assert exc_info.value.name == "COUNT"

    def test_first_error_is_deterministic(self) -> None:
        raw = "MODE=nope,RATIO=x,COUNT=1,SIZE=1x1"
        names = set()
        for _ in range(5):
            with pytest.raises(FieldDecodeError) as exc_info:
                Sample.from_attributes(raw)
            names.add(exc_info.value.name)
        assert names == {"RATIO"}

    def test_project_function_directly(self) -> None:
        raw = tokenize("COUNT=7,SIZE=2x2")
        tag = project(Sample, Sample.schema_fields(), raw)
        assert tag.count == 7


class TestUnknownAttributes:
    def test_ignored_by_default(self) -> None:
        tag = Sample.from_attributes("COUNT=1,SIZE=1x1,X-FUTURE=42")
        assert tag.attributes() == "COUNT=1,SIZE=1x1"

    def test_unknown_value_not_decoded(self) -> None:
        tag = Sample.from_attributes("COUNT=1,SIZE=1x1,X-FUTURE=@@not-a-kind@@")
        assert tag.count == 1

    def test_reject_policy(self) -> None:
        policy = CodecPolicy(unknown_attributes="reject")
        with pytest.raises(UnknownAttribute) as exc_info:
            Sample.from_attributes("COUNT=1,SIZE=1x1,X-FUTURE=42", policy)
        assert exc_info.value.name == "X-FUTURE"
        assert exc_info.value.detail["tag"] == "Sample"

    def test_schema_errors_before_unknown(self) -> None:
        with pytest.raises(MissingRequiredField):
            Sample.from_attributes("X-FUTURE=42", STRICT_POLICY)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialize:
    def test_schema_order(self) -> None:
        tag = Sample(size=Resolution(4, 3), mode=Mode.FAST, count=2)
        assert tag.attributes() == "COUNT=2,MODE=FAST,SIZE=4x3"

    def test_absent_optional_skipped(self) -> None:
        tag = Sample(count=2, size=Resolution(1, 1))
        assert "LABEL" not in tag.attributes()

    def test_canonical_form(self) -> None:
        a = Sample.from_attributes(' RATIO=1.50 , COUNT=0002,SIZE=1x1 ')
        b = Sample.from_attributes("COUNT=2,SIZE=1x1,RATIO=1.5")
        assert a.attributes() == b.attributes() == "COUNT=2,RATIO=1.5,SIZE=1x1"

    def test_quoted_values_requoted(self) -> None:
        tag = Sample(count=1, label="x,y", size=Resolution(1, 1))
        assert tag.attributes() == 'COUNT=1,LABEL="x,y",SIZE=1x1'

    @pytest.mark.parametrize("label", ['a"b', "a\nb"])
    def test_unencodable_value_rejected(self, label: str) -> None:
        with pytest.raises(ValidationError):
            Sample(count=1, label=label, size=Resolution(1, 1))


# ---------------------------------------------------------------------------
# Version rules
# ---------------------------------------------------------------------------


class TestVersionRules:
    def test_always(self) -> None:
        rule = always(ProtocolVersion.V4)
        assert rule(False, None) is ProtocolVersion.V4
        assert rule(True, 1) is ProtocolVersion.V4

    def test_when_present(self) -> None:
        rule = when_present(ProtocolVersion.V5)
        assert rule(False, None) is ProtocolVersion.V1
        assert rule(True, "") is ProtocolVersion.V5

    def test_when(self) -> None:
        rule = when(lambda v: v > 10, ProtocolVersion.V7)
        assert rule(True, 11) is ProtocolVersion.V7
        assert rule(True, 3) is ProtocolVersion.V1
        assert rule(False, None) is ProtocolVersion.V1

    def test_field_versions(self) -> None:
        tag = Sample(count=1, label="x", size=Resolution(1, 1))
        assert field_versions(tag, Sample.schema_fields()) == [
            ProtocolVersion.V1,
            ProtocolVersion.V3,
            ProtocolVersion.V1,
            ProtocolVersion.V1,
            ProtocolVersion.V1,
        ]

    def test_required_version_is_max(self) -> None:
        tag = Sample(count=1, label="x", mode=Mode.SLOW, size=Resolution(1, 1))
        assert tag.required_version() is ProtocolVersion.V6

    def test_value_dependent_rule(self) -> None:
        tag = Sample(count=1, mode=Mode.FAST, size=Resolution(1, 1))
        assert tag.required_version() is ProtocolVersion.V1

    def test_unset_fields_contribute_v1(self) -> None:
        tag = Sample(count=1, size=Resolution(1, 1))
        assert tag.required_version() is ProtocolVersion.V1
