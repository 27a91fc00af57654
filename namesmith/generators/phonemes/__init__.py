#!/usr/bin/env python3
"""
Preset Loader
=============
Loads named generator presets from the YAML files in this directory.

Usage:
    from namesmith.generators.phonemes import list_presets, preset_generator

    list_presets()                       # {'default': '...', 'harsh': '...', 'soft': '...'}
    gen = preset_generator('soft', seed=7)
    gen.next()
"""

import yaml
from pathlib import Path
from typing import Any, Dict
from functools import lru_cache


# =============================================================================
# Configuration Path
# =============================================================================

PHONEMES_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def _load_yaml(filename: str) -> Dict[str, Any]:
    """Load and cache a YAML file from the presets directory."""
    filepath = PHONEMES_DIR / filename
    with open(filepath, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def list_presets() -> Dict[str, str]:
    """Map every available preset name to its description."""
    return {
        path.stem: _load_yaml(path.name).get('description', '')
        for path in sorted(PHONEMES_DIR.glob('*.yaml'))
    }


def load_preset(name: str) -> Dict[str, Any]:
    """
    Load a preset as a generator configuration dict.

    Raises
    ------
    ValueError
        If no preset with that name exists.
    """
    if not (PHONEMES_DIR / f'{name}.yaml').exists():
        available = ', '.join(list_presets())
        raise ValueError(f"Unknown preset '{name}'. Available presets: {available}")
    # Callers may mutate the result; never hand out the cached dict
    return _copy(_load_yaml(f'{name}.yaml'))


def preset_generator(name: str, seed: int = None):
    """Build a ready-to-use ``NameGenerator`` from a preset."""
    from ...config import generator_from_dict

    data = load_preset(name)
    data.pop('description', None)
    return generator_from_dict(data, seed=seed)


def reload_presets():
    """Clear cached presets (after editing the YAML files)."""
    _load_yaml.cache_clear()


def _copy(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _copy(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_copy(v) for v in data]
    return data
