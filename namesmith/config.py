#!/usr/bin/env python3
"""
Configuration Persistence
=========================
Converts a ``NameGenerator`` to and from plain dicts and YAML files.

The format is lossless: pools with weights, every probability slot (including
disabled ones), the allow-empty flag, filter patterns, mutation steps and
conditions, transformer chance, syllable range, retry ceiling and the
variation-validation flag.

Layout:

    syllables:
      allow_empty: false
      pools:
        vowels: [a, e, {value: o, weight: 3}]
        leading_consonants: [s, t, r]
      probability:
        vowel_exists: 1.0
        trailing_consonant_exists: 0.1
    filter:
      ignore_case: false
      patterns: ["^.{0,2}$"]
      syllable_patterns: []
    transformer:
      chance: 0.5
      mutations:
        - when: {pattern: "^ta", index: 0}
          steps:
            - {op: replace, index: 0, text: zo}
    generator:
      min_syllables: 2
      max_syllables: 3
      max_retries: 1000
      validate_variations: false

Custom callback steps cannot be written and raise ``InvalidConfiguration``.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import InvalidConfiguration
from .generators.filter import NameFilter
from .generators.graphemes import PoolCategory
from .generators.mutation import (
    AppendSyllable,
    CustomStep,
    InsertSyllable,
    Mutation,
    MutationCondition,
    NameTransformer,
    RemoveSyllable,
    ReplaceSyllable,
)
from .generators.name_generator import NameGenerator
from .generators.probability import ProbabilityTable
from .generators.syllables import SyllableGenerator


# =============================================================================
# Syllables
# =============================================================================

def syllables_to_dict(syllables: SyllableGenerator) -> Dict[str, Any]:
    pools = {}
    for category, pool in syllables.pools.items():
        if not len(pool):
            continue
        pools[category.value] = [
            g.value if g.weight == 1 else {'value': g.value, 'weight': g.weight}
            for g in pool
        ]
    return {
        'allow_empty': syllables.allow_empty,
        'pools': pools,
        'probability': syllables.probability.to_dict(),
    }


def _parse_grapheme(entry: Any, category: PoolCategory):
    if isinstance(entry, str):
        return entry, 1
    if isinstance(entry, dict) and 'value' in entry:
        return str(entry['value']), entry.get('weight', 1)
    raise InvalidConfiguration(f"Invalid grapheme entry in {category.value}: {entry!r}")


def apply_syllable_config(syllables: SyllableGenerator, data: Dict[str, Any]) -> SyllableGenerator:
    """Load pools and probabilities from ``data`` into an existing generator."""
    data = data or {}
    for key, entries in (data.get('pools') or {}).items():
        try:
            category = PoolCategory(key)
        except ValueError:
            valid = ', '.join(c.value for c in PoolCategory)
            raise InvalidConfiguration(f"Unknown pool '{key}'. Valid pools: {valid}") from None
        for entry in entries or []:
            value, weight = _parse_grapheme(entry, category)
            syllables.add_graphemes(category, value, weight=weight)

    # Explicit slots last so they win over pool defaults, including explicit nulls
    for slot, value in (data.get('probability') or {}).items():
        syllables.probability.set(slot, value)

    syllables.allow_empty_strings(bool(data.get('allow_empty', False)))
    return syllables


def syllables_from_dict(data: Dict[str, Any], seed=None) -> SyllableGenerator:
    return apply_syllable_config(SyllableGenerator(seed=seed, probability=ProbabilityTable()), data)


# =============================================================================
# Filter
# =============================================================================

def filter_to_dict(name_filter: NameFilter) -> Dict[str, Any]:
    return {
        'ignore_case': name_filter.ignore_case,
        'patterns': list(name_filter.patterns),
        'syllable_patterns': list(name_filter.syllable_patterns),
    }


def filter_from_dict(data: Dict[str, Any]) -> NameFilter:
    name_filter = NameFilter(ignore_case=bool(data.get('ignore_case', False)))
    name_filter.do_not_allow_pattern(*(data.get('patterns') or []))
    name_filter.do_not_allow_syllable_pattern(*(data.get('syllable_patterns') or []))
    return name_filter


# =============================================================================
# Transformer
# =============================================================================

def _step_to_dict(step) -> Dict[str, Any]:
    if isinstance(step, ReplaceSyllable):
        return {'op': 'replace', 'index': step.index, 'text': step.text}
    if isinstance(step, InsertSyllable):
        return {'op': 'insert', 'index': step.index, 'text': step.text}
    if isinstance(step, AppendSyllable):
        return {'op': 'append', 'text': step.text}
    if isinstance(step, RemoveSyllable):
        return {'op': 'remove', 'index': step.index}
    if isinstance(step, CustomStep):
        raise InvalidConfiguration("Custom callback steps cannot be serialized")
    raise InvalidConfiguration(f"Unknown mutation step: {step!r}")


def _step_from_dict(data: Dict[str, Any]):
    op = data.get('op')
    try:
        if op == 'replace':
            return ReplaceSyllable(int(data['index']), str(data['text']))
        if op == 'insert':
            return InsertSyllable(int(data['index']), str(data['text']))
        if op == 'append':
            return AppendSyllable(str(data['text']))
        if op == 'remove':
            return RemoveSyllable(int(data['index']))
    except KeyError as e:
        raise InvalidConfiguration(f"Mutation step '{op}' is missing {e}") from None
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"Invalid mutation step '{op}': {e}") from None
    raise InvalidConfiguration(f"Unknown mutation step op '{op}'")


def mutation_to_dict(mutation: Mutation) -> Dict[str, Any]:
    result: Dict[str, Any] = {'steps': [_step_to_dict(s) for s in mutation.steps]}
    if mutation.condition is not None:
        result['when'] = {'pattern': mutation.condition.pattern, 'index': mutation.condition.index}
    return result


def mutation_from_dict(data: Dict[str, Any]) -> Mutation:
    condition = None
    when = data.get('when')
    if when:
        try:
            condition = MutationCondition(when['pattern'], when.get('index'))
        except KeyError:
            raise InvalidConfiguration("Mutation condition is missing 'pattern'") from None
        except (AttributeError, TypeError) as e:
            raise InvalidConfiguration(f"Invalid mutation condition {when!r}: {e}") from None
    return Mutation(steps=[_step_from_dict(s) for s in data.get('steps') or []], condition=condition)


def transformer_to_dict(transformer: NameTransformer) -> Dict[str, Any]:
    return {
        'chance': transformer.chance,
        'mutations': [mutation_to_dict(m) for m in transformer.mutations],
    }


def transformer_from_dict(data: Dict[str, Any], seed=None) -> NameTransformer:
    return NameTransformer(
        mutations=[mutation_from_dict(m) for m in data.get('mutations') or []],
        chance=data.get('chance'),
        seed=seed,
    )


# =============================================================================
# Generator
# =============================================================================

def generator_to_dict(generator: NameGenerator) -> Dict[str, Any]:
    """Serialize a generator. Raises ``InvalidConfiguration`` for custom steps."""
    data: Dict[str, Any] = {
        'syllables': syllables_to_dict(generator.syllables),
        'generator': {
            'min_syllables': generator.minimum_syllables,
            'max_syllables': generator.maximum_syllables,
            'max_retries': generator.max_retries,
            'validate_variations': generator.revalidate_variations,
        },
    }
    if generator.filter is not None:
        data['filter'] = filter_to_dict(generator.filter)
    if generator.transformer is not None:
        data['transformer'] = transformer_to_dict(generator.transformer)
    return data


def _sub_seed(seed: Optional[int], offset: int) -> Optional[int]:
    return None if seed is None else seed + offset


def generator_from_dict(data: Dict[str, Any], seed: Optional[int] = None) -> NameGenerator:
    """
    Build a generator from a dict. With a seed, each component gets its own
    reproducible random source.
    """
    if not isinstance(data, dict):
        raise InvalidConfiguration("Generator configuration must be a mapping")

    generator = NameGenerator(
        syllables_from_dict(data.get('syllables') or {}, seed=_sub_seed(seed, 0)),
        seed=_sub_seed(seed, 2),
    )
    if data.get('filter') is not None:
        generator.using_filter(filter_from_dict(data['filter']))
    if data.get('transformer') is not None:
        generator.using_transformer(transformer_from_dict(data['transformer'], seed=_sub_seed(seed, 1)))

    settings = data.get('generator') or {}
    minimum = settings.get('min_syllables', generator.minimum_syllables)
    maximum = settings.get('max_syllables', generator.maximum_syllables)
    generator.using_syllable_count(int(minimum), int(maximum))
    if 'max_retries' in settings:
        generator.limit_retries(int(settings['max_retries']))
    generator.validate_variations(bool(settings.get('validate_variations', False)))
    return generator


# =============================================================================
# YAML
# =============================================================================

def dump_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def load_yaml(text: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"Invalid YAML: {e}") from e
    return data or {}


def save_generator(generator: NameGenerator, path: Union[str, Path]) -> Path:
    """Write a generator's configuration to a YAML file."""
    path = Path(path)
    path.write_text(dump_yaml(generator_to_dict(generator)), encoding='utf-8')
    return path


def load_generator(path: Union[str, Path], seed: Optional[int] = None) -> NameGenerator:
    """Read a generator configuration from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing generator config: {path}")
    return generator_from_dict(load_yaml(path.read_text(encoding='utf-8')), seed=seed)


__all__ = [
    'apply_syllable_config',
    'syllables_to_dict',
    'syllables_from_dict',
    'filter_to_dict',
    'filter_from_dict',
    'mutation_to_dict',
    'mutation_from_dict',
    'transformer_to_dict',
    'transformer_from_dict',
    'generator_to_dict',
    'generator_from_dict',
    'dump_yaml',
    'load_yaml',
    'save_generator',
    'load_generator',
]
