#!/usr/bin/env python3
"""
Syllable Generator
==================
Builds single syllables out of configurable grapheme pools.

Each syllable is the result of a handful of independent coin-flips:

1. Starting syllables may open with a vowel (and skip consonants entirely).
2. Otherwise: an optional leading consonant, then an optional vowel.
3. Ending syllables may close with a final consonant...
4. ...and if they don't, any syllable may close with a trailing consonant.

Every "consonant" or "vowel" choice has a second flip deciding whether a
multi-grapheme sequence is used instead of a single grapheme.

Usage:
    gen = (SyllableGenerator(seed=7)
           .with_leading_consonants("str")
           .with_vowels("ae")
           .with_trailing_consonants("z"))
    gen.next_starting_syllable()   # e.g. "sa"

    # Explicit handles instead of chaining
    handle = gen.add_graphemes(PoolCategory.VOWEL, "o", weight=3)
    handle.sequences("ou", "oa").weight(2)
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..errors import DegenerateOutput, InvalidConfiguration
from .entropy import RandomLike, make_rng
from .graphemes import Grapheme, GraphemePool, PoolCategory, atomize
from .probability import ProbabilityTable


class SyllablePosition(Enum):
    """Where a syllable sits in a name."""
    STARTING = "starting"
    MIDDLE = "middle"
    ENDING = "ending"


class PoolHandle:
    """
    Handle to the graphemes added by one configuration call.

    ``weight()`` re-weights only those graphemes, and ``sequences()`` adds to
    the sequence pool for the same role.
    """

    def __init__(self, generator: "SyllableGenerator", category: PoolCategory,
                 added: List[Grapheme]):
        self.generator = generator
        self.category = category
        self.added = added

    def weight(self, weight: int) -> "PoolHandle":
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
            raise InvalidConfiguration(f"Grapheme weight must be a non-negative integer, got {weight!r}")
        for g in self.added:
            g.weight = weight
        return self

    def sequences(self, *values: str, weight: int = 1) -> "PoolHandle":
        return self.generator.add_graphemes(self.category.sequence_category, *values, weight=weight)


class SyllableGenerator:
    """
    Generates syllables from grapheme pools and a probability table.

    Populating a pool for the first time switches on its probability slot
    with a default value, unless the slot was already set explicitly.
    """

    def __init__(self, seed: RandomLike = None, probability: ProbabilityTable = None):
        self.rng = make_rng(seed)
        self.probability = probability if probability is not None else ProbabilityTable()
        self.pools: Dict[PoolCategory, GraphemePool] = {
            category: GraphemePool(category) for category in PoolCategory
        }
        self.allow_empty = False

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_graphemes(self, category: PoolCategory, *values: str, weight: int = 1) -> PoolHandle:
        """Add graphemes to one pool exactly as given and return a handle to them."""
        added = self.pools[category].add(values, weight=weight)
        self.probability.apply_default(category)
        return PoolHandle(self, category, added)

    def _add(self, category: PoolCategory, values: Iterable[str], weight: int) -> "SyllableGenerator":
        if not category.is_sequence:
            values = atomize(values)
        self.add_graphemes(category, *values, weight=weight)
        return self

    def with_consonants(self, *consonants: str, weight: int = 1) -> "SyllableGenerator":
        """Consonants that may appear before or after a vowel."""
        self._add(PoolCategory.LEADING_CONSONANT, consonants, weight)
        return self._add(PoolCategory.TRAILING_CONSONANT, consonants, weight)

    def with_leading_consonants(self, *consonants: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.LEADING_CONSONANT, consonants, weight)

    def with_leading_consonant_sequences(self, *sequences: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.LEADING_CONSONANT_SEQUENCE, sequences, weight)

    def with_vowels(self, *vowels: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.VOWEL, vowels, weight)

    def with_vowel_sequences(self, *sequences: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.VOWEL_SEQUENCE, sequences, weight)

    def with_trailing_consonants(self, *consonants: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.TRAILING_CONSONANT, consonants, weight)

    def with_trailing_consonant_sequences(self, *sequences: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.TRAILING_CONSONANT_SEQUENCE, sequences, weight)

    def with_final_consonants(self, *consonants: str, weight: int = 1) -> "SyllableGenerator":
        """Consonants that only close the ending syllable of a name."""
        return self._add(PoolCategory.FINAL_CONSONANT, consonants, weight)

    def with_final_consonant_sequences(self, *sequences: str, weight: int = 1) -> "SyllableGenerator":
        return self._add(PoolCategory.FINAL_CONSONANT_SEQUENCE, sequences, weight)

    def with_probability(self, **slots: Optional[float]) -> "SyllableGenerator":
        """
        Set probability slots explicitly, e.g.
        ``with_probability(vowel_is_sequence=0.5, trailing_consonant_exists=None)``.
        """
        for slot, value in slots.items():
            self.probability.set(slot, value)
        return self

    def allow_empty_strings(self, allow: bool = True) -> "SyllableGenerator":
        """Permit empty syllables instead of raising ``DegenerateOutput``."""
        self.allow_empty = allow
        return self

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def next_starting_syllable(self) -> str:
        return self.generate_syllable(SyllablePosition.STARTING)

    def next_syllable(self) -> str:
        return self.generate_syllable(SyllablePosition.MIDDLE)

    def next_ending_syllable(self) -> str:
        return self.generate_syllable(SyllablePosition.ENDING)

    def next_for_position(self, position: SyllablePosition) -> str:
        return self.generate_syllable(position)

    def _sample(self, category: PoolCategory) -> str:
        return self.pools[category].sample(self.rng)

    def _flip(self, slot: str) -> bool:
        return self.probability.is_enabled(slot) and self.rng.chance(self.probability.get(slot))

    def _pick(self, category: PoolCategory, sequence_slot: str) -> str:
        """Single grapheme or, if the sequence flip fires, a sequence."""
        if self._flip(sequence_slot):
            return self._sample(category.sequence_category)
        return self._sample(category)

    def generate_syllable(self, position: SyllablePosition) -> str:
        """
        Assemble one syllable for the given position.

        Raises
        ------
        EmptyPool
            A flip selected a pool that has nothing to sample.
        DegenerateOutput
            Nothing was emitted and empty strings are not allowed.
        """
        parts = []

        if position is SyllablePosition.STARTING and self._flip('starting_syllable_leading_vowel_exists'):
            parts.append(self._pick(PoolCategory.VOWEL, 'starting_syllable_leading_vowel_is_sequence'))
        else:
            if self._flip('leading_consonant_exists'):
                parts.append(self._pick(PoolCategory.LEADING_CONSONANT, 'leading_consonant_is_sequence'))
            if self._flip('vowel_exists'):
                parts.append(self._pick(PoolCategory.VOWEL, 'vowel_is_sequence'))

        # Final consonants take priority over trailing ones on the ending syllable
        if position is SyllablePosition.ENDING and self._flip('final_consonant_exists'):
            parts.append(self._pick(PoolCategory.FINAL_CONSONANT, 'final_consonant_is_sequence'))
        elif self._flip('trailing_consonant_exists'):
            parts.append(self._pick(PoolCategory.TRAILING_CONSONANT, 'trailing_consonant_is_sequence'))

        syllable = ''.join(parts)
        if not syllable and not self.allow_empty:
            raise DegenerateOutput(
                "Syllable generator produced an empty string; add graphemes, raise the "
                "probabilities, or call allow_empty_strings()."
            )
        return syllable


class DefaultSyllableGenerator(SyllableGenerator):
    """A syllable generator preloaded with the ``default`` preset's pools."""

    def __init__(self, seed: RandomLike = None):
        super().__init__(seed=seed)
        from ..config import apply_syllable_config
        from .phonemes import load_preset

        apply_syllable_config(self, load_preset('default').get('syllables', {}))
