"""CodecResult and CodecError — the result-shaped codec contract.

INVARIANT: ``TagCodec`` result methods never raise for malformed input.
Every codec failure becomes ``CodecResult(ok=False, error=...)``, carrying
the error code, the message, and the field name / raw fragment detail.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hlstags.domain.errors import HlsTagsError


class CodecError(BaseModel):
    """Structured error payload within a CodecResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: HlsTagsError) -> CodecError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class CodecResult(BaseModel):
    """Universal return type for codec facade operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"decode_line"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: CodecError | None = None

    @classmethod
    def failure(cls, op: str, exc: HlsTagsError) -> CodecResult:
        return cls(ok=False, op=op, error=CodecError.from_exception(exc))
