"""Shared pytest fixtures for hlstags tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from hypothesis import settings as hypothesis_settings

from hlstags.config.settings import HlsTagsSettings
from hlstags.domain.tags import TAG_REGISTRY
from hlstags.services.codec import TagCodec

# Hypothesis profiles; select with HYPOTHESIS_PROFILE=ci|dev
hypothesis_settings.register_profile("default", max_examples=100, deadline=None)
hypothesis_settings.register_profile("ci", max_examples=500, deadline=None)
hypothesis_settings.register_profile("dev", max_examples=10, deadline=None)
hypothesis_settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop HLSTAGS_* variables so the host environment never leaks into settings."""
    for key in list(os.environ):
        if key.startswith("HLSTAGS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to an empty temp directory so no hlstags.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(isolated_dir: Path) -> HlsTagsSettings:
    """Default settings with config discovery confined to a temp directory."""
    return HlsTagsSettings.load(start=isolated_dir)


@pytest.fixture
def codec(settings: HlsTagsSettings) -> TagCodec:
    """Lenient codec built from default settings."""
    return TagCodec(settings)


@pytest.fixture
def strict_codec(isolated_dir: Path) -> TagCodec:
    """Codec that rejects duplicate and unknown attributes."""
    settings = HlsTagsSettings.load(
        start=isolated_dir,
        codec={"duplicate_attributes": "reject", "unknown_attributes": "reject"},
    )
    return TagCodec(settings)


@pytest.fixture
def registry_snapshot() -> Generator[dict[str, type]]:
    """Restore TAG_REGISTRY after tests that register throwaway tags."""
    saved = dict(TAG_REGISTRY)
    try:
        yield TAG_REGISTRY
    finally:
        TAG_REGISTRY.clear()
        TAG_REGISTRY.update(saved)
