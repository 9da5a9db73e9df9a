"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hlstags.toml only contains overrides.
An empty file (or no file at all) gives the lenient codec and quiet logging.
"""

from __future__ import annotations

from pydantic import BaseModel

from hlstags.domain.policy import CodecPolicy, DuplicatePolicy, UnknownPolicy

# --- hlstags.toml sections ---


class CodecConfig(BaseModel):
    """[codec] section."""

    model_config = {"frozen": True}

    duplicate_attributes: DuplicatePolicy = "last"
    unknown_attributes: UnknownPolicy = "ignore"

    def policy(self) -> CodecPolicy:
        return CodecPolicy(
            duplicate_attributes=self.duplicate_attributes,
            unknown_attributes=self.unknown_attributes,
        )


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
