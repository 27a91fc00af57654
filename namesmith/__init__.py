#!/usr/bin/env python3
"""
Namesmith - Syllable-Based Name Generator
=========================================

Generates pronounceable made-up names (characters, places, products) by
assembling syllables from weighted grapheme pools, then optionally mutating
and filtering them.

Quick Start
-----------
    from namesmith import NameGenerator, SyllableGenerator, NameFilter

    gen = (NameGenerator(SyllableGenerator(seed=1)
                         .with_leading_consonants("str")
                         .with_vowels("ae")
                         .with_trailing_consonants("z"))
           .using_filter(NameFilter().do_not_allow_pattern("^.{0,2}$"))
           .using_syllable_count(2, 3))

    gen.next()                           # e.g. "saze"

    # Or start from a preset
    from namesmith import preset_generator
    preset_generator("soft", seed=7).next()

Modules
-------
    namesmith.generators - Pools, syllables, names, mutations, filters, presets
    namesmith.config     - YAML persistence of full generator configurations
    namesmith.errors     - Exception taxonomy and GenerationResult

CLI Usage
---------
    python -m namesmith generate -n 10 --preset soft
    python -m namesmith vary ta ri on -n 5
    python -m namesmith presets
"""

__version__ = "0.1.0"
__author__ = "Namesmith"

# =============================================================================
# Submodule Imports
# =============================================================================

from . import errors
from . import generators
from . import config

# =============================================================================
# Engine Imports
# =============================================================================

from .generators import (
    RandomSource,
    PoolCategory,
    ProbabilityTable,
    Name,
    SyllablePosition,
    SyllableGenerator,
    DefaultSyllableGenerator,
    NameGenerator,
    Mutation,
    NameTransformer,
    NameFilter,
    list_presets,
    load_preset,
    preset_generator,
)

# =============================================================================
# Error Imports
# =============================================================================

from .errors import (
    NamesmithError,
    EmptyPool,
    DegenerateOutput,
    InvalidConfiguration,
    InvalidSyllableCount,
    RetriesExhausted,
    IndexOutOfRange,
    InvalidPattern,
    InvalidOperation,
    GenerationResult,
)

# =============================================================================
# Config Imports
# =============================================================================

from .config import (
    generator_to_dict,
    generator_from_dict,
    save_generator,
    load_generator,
)


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(count: int = 10, preset: str = "default", seed: int = None) -> list:
    """
    Quick generation from a preset.

    See NameGenerator.next() for the underlying behaviour.
    """
    generator = preset_generator(preset, seed=seed)
    return [generator.next() for _ in range(count)]


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    '__version__',

    # Engine
    'RandomSource',
    'PoolCategory',
    'ProbabilityTable',
    'Name',
    'SyllablePosition',
    'SyllableGenerator',
    'DefaultSyllableGenerator',
    'NameGenerator',
    'Mutation',
    'NameTransformer',
    'NameFilter',
    'list_presets',
    'load_preset',
    'preset_generator',

    # Errors
    'NamesmithError',
    'EmptyPool',
    'DegenerateOutput',
    'InvalidConfiguration',
    'InvalidSyllableCount',
    'RetriesExhausted',
    'IndexOutOfRange',
    'InvalidPattern',
    'InvalidOperation',
    'GenerationResult',

    # Config
    'generator_to_dict',
    'generator_from_dict',
    'save_generator',
    'load_generator',

    # Convenience functions
    'generate',

    # Submodules
    'generators',
    'errors',
    'config',
]
