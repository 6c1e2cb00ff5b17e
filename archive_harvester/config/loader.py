"""Configuration loading helpers for archive-harvester."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

from .models import HarvestSettings

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_ENV_VAR = "ARCHIVE_HARVESTER_CONFIG"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


class ConfigLoader:
    """Resolve and validate run settings.

    Settings come from an optional file (explicit path or the
    ``ARCHIVE_HARVESTER_CONFIG`` environment variable) with command line
    overrides applied on top. Nothing is ever written back.
    """

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def resolve_path(self, path: Path | None = None) -> Path | None:
        if path is not None:
            return path.expanduser()
        env_path = self.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        return None

    def load(self, path: Path | None = None, **overrides: Any) -> HarvestSettings:
        payload: dict[str, Any] = {}
        resolved = self.resolve_path(path)
        if resolved is not None:
            if not resolved.exists():
                raise FileNotFoundError(f"Settings file not found: {resolved}")
            if resolved.suffix not in CONFIG_EXTENSIONS:
                raise ValueError(f"Unsupported settings file type: {resolved.suffix}")
            payload = _read_file(resolved)
        # Flags left at their defaults must not mask values from the file
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return HarvestSettings.model_validate(payload)


__all__ = ["ConfigLoader", "CONFIG_ENV_VAR", "CONFIG_EXTENSIONS"]
