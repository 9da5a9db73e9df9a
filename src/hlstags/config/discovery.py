"""Config file discovery and reading.

Walk-up finder locates hlstags.toml, similar to how git finds .git/.
Supports the HLSTAGS_CONFIG env var as an explicit override.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from hlstags.domain.errors import HlsTagsError

CONFIG_FILENAME = "hlstags.toml"
CONFIG_ENV_VAR = "HLSTAGS_CONFIG"


class ConfigError(HlsTagsError):
    """A config file exists but cannot be read as TOML."""

    code = "CONFIG_ERROR"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for hlstags.toml.

    Returns the path to the config file, or None if not found.
    Checks HLSTAGS_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Read *path* as TOML.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg, path=str(path)) from exc
