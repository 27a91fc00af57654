#!/usr/bin/env python3
"""
Graphemes and Pools
===================
A grapheme is a weighted text unit ("a", "sh", "str"). A pool is the ordered
list of graphemes eligible for one structural role of a syllable.

The eight roles are captured by ``PoolCategory``. Each category knows which
probability slot governs it, so one sampling routine serves all of them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List

from ..errors import EmptyPool, InvalidConfiguration
from .entropy import RandomSource


class PoolCategory(Enum):
    """Structural role of a grapheme pool."""
    LEADING_CONSONANT = "leading_consonants"
    LEADING_CONSONANT_SEQUENCE = "leading_consonant_sequences"
    VOWEL = "vowels"
    VOWEL_SEQUENCE = "vowel_sequences"
    TRAILING_CONSONANT = "trailing_consonants"
    TRAILING_CONSONANT_SEQUENCE = "trailing_consonant_sequences"
    FINAL_CONSONANT = "final_consonants"
    FINAL_CONSONANT_SEQUENCE = "final_consonant_sequences"

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ')

    @property
    def is_sequence(self) -> bool:
        return self.name.endswith('_SEQUENCE')

    @property
    def sequence_category(self) -> "PoolCategory":
        """The sequence counterpart of a single-grapheme category."""
        if self.is_sequence:
            return self
        return PoolCategory[f"{self.name}_SEQUENCE"]

    @property
    def single_category(self) -> "PoolCategory":
        if not self.is_sequence:
            return self
        return PoolCategory[self.name[:-len('_SEQUENCE')]]


@dataclass
class Grapheme:
    """A selectable text unit with an integer weight."""
    value: str
    weight: int = 1

    def __post_init__(self):
        if isinstance(self.weight, bool) or not isinstance(self.weight, int) or self.weight < 0:
            raise InvalidConfiguration(
                f"Grapheme weight must be a non-negative integer, got {self.weight!r}"
            )


def atomize(values: Iterable[str]) -> List[str]:
    """Split each string into single characters: ("st", "r") -> [s, t, r]."""
    result = []
    for value in values:
        result.extend(value)
    return result


class GraphemePool:
    """Ordered, weighted collection of graphemes for one category."""

    def __init__(self, category: PoolCategory, graphemes: Iterable[Grapheme] = None):
        self.category = category
        self._graphemes: List[Grapheme] = list(graphemes or [])

    def add(self, values: Iterable[str], weight: int = 1) -> List[Grapheme]:
        """Append graphemes and return exactly the ones added."""
        added = [Grapheme(v, weight) for v in values]
        for g in added:
            if not g.value:
                raise InvalidConfiguration(f"Empty grapheme added to {self.category.label}")
        self._graphemes.extend(added)
        return added

    @property
    def graphemes(self) -> List[Grapheme]:
        return list(self._graphemes)

    @property
    def values(self) -> List[str]:
        return [g.value for g in self._graphemes]

    @property
    def total_weight(self) -> int:
        return sum(g.weight for g in self._graphemes)

    def is_selectable(self) -> bool:
        return self.total_weight > 0

    def sample(self, rng: RandomSource) -> str:
        """
        Weighted draw from this pool.

        Raises
        ------
        EmptyPool
            If the pool is empty or every weight is zero.
        """
        if not self.is_selectable():
            raise EmptyPool(self.category)
        index = rng.weighted_index([g.weight for g in self._graphemes])
        return self._graphemes[index].value

    def clear(self) -> None:
        self._graphemes.clear()

    def __len__(self) -> int:
        return len(self._graphemes)

    def __iter__(self) -> Iterator[Grapheme]:
        return iter(self._graphemes)

    def __repr__(self) -> str:
        return f"GraphemePool({self.category.name}, {self.values!r})"
