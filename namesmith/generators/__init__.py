#!/usr/bin/env python3
"""
Name Generation Engine
======================
Provides the building blocks of syllable-based generation:
- Graphemes: weighted pools for each structural role
- Syllables: coin-flip assembly of one syllable
- Names: retry loop with transformer and filter
- Mutations: variations of existing names
- Presets: ready-made configurations in YAML
"""

from .entropy import RandomSource, make_rng
from .graphemes import Grapheme, GraphemePool, PoolCategory, atomize
from .probability import DEFAULT_PROBABILITIES, CATEGORY_SLOTS, ProbabilityTable
from .name import Name
from .syllables import (
    SyllablePosition,
    PoolHandle,
    SyllableGenerator,
    DefaultSyllableGenerator,
)
from .mutation import (
    ReplaceSyllable,
    InsertSyllable,
    AppendSyllable,
    RemoveSyllable,
    CustomStep,
    MutationCondition,
    Mutation,
    NameTransformer,
    syllable_reroll_transformer,
    vowel_shift_transformer,
)
from .filter import NameFilter
from .name_generator import NameGenerator
from .phonemes import list_presets, load_preset, preset_generator

__all__ = [
    # Randomness
    'RandomSource',
    'make_rng',

    # Pools
    'Grapheme',
    'GraphemePool',
    'PoolCategory',
    'atomize',
    'ProbabilityTable',
    'DEFAULT_PROBABILITIES',
    'CATEGORY_SLOTS',

    # Syllables and names
    'Name',
    'SyllablePosition',
    'PoolHandle',
    'SyllableGenerator',
    'DefaultSyllableGenerator',
    'NameGenerator',

    # Mutations
    'ReplaceSyllable',
    'InsertSyllable',
    'AppendSyllable',
    'RemoveSyllable',
    'CustomStep',
    'MutationCondition',
    'Mutation',
    'NameTransformer',
    'syllable_reroll_transformer',
    'vowel_shift_transformer',

    # Filtering
    'NameFilter',

    # Presets
    'list_presets',
    'load_preset',
    'preset_generator',
]
