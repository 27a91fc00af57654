#!/usr/bin/env python3
"""
Settings loader for namesmith.

Bundled defaults live in ``namesmith/configs/app.yaml``. Point the
``NAMESMITH_CONFIG`` environment variable at another YAML file to override
individual keys; nested mappings are merged key by key.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PROJECT_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PROJECT_ROOT / "namesmith" / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
ENV_OVERRIDE = "NAMESMITH_CONFIG"


def _read_mapping(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")
    return data


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    """Bundled settings merged with the ``NAMESMITH_CONFIG`` file, if set."""
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = _read_mapping(APP_CONFIG_PATH)

    override = os.environ.get(ENV_OVERRIDE)
    if override:
        path = resolve_path(override)
        if not path.exists():
            raise FileNotFoundError(f"{ENV_OVERRIDE} points to a missing file: {path}")
        data = _merge(data, _read_mapping(path))
    return data


def reload_settings() -> None:
    """Forget cached settings so the next lookup re-reads the files."""
    load_app_config.cache_clear()


def get_setting(path: str, default: Any = None) -> Any:
    """Look up a setting by dotted path, e.g. ``"generator.max_retries"``."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Expand ``~`` and resolve relative paths against ``base`` (default: cwd)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or Path.cwd()) / path).resolve()


__all__ = [
    "load_app_config",
    "reload_settings",
    "get_setting",
    "resolve_path",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
    "ENV_OVERRIDE",
]
