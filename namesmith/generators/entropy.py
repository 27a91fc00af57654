#!/usr/bin/env python3
"""
Random Source
=============
Per-instance random number generation for syllable and name generation.

Every engine object owns one ``RandomSource``; there is no module-level
instance. Pass a seed for reproducible output, or ``secure=True`` to draw
from the operating system's CSPRNG (``secrets.SystemRandom``), which cannot
be seeded.

A single ``RandomSource`` is not safe to share between threads without
external locking. Create one generator per thread instead.
"""

import random
import secrets
from typing import Any, List, Optional, Sequence, Tuple, Union


class RandomSource:
    """
    Thin wrapper around ``random.Random`` with the draws the engine needs.

    Usage:
        rng = RandomSource(seed=42)
        rng.random()                                  # [0.0, 1.0)
        rng.weighted_choice([("a", 3), ("e", 1)])     # "a" three times as often
    """

    def __init__(self, seed: Optional[int] = None, secure: bool = False):
        if secure and seed is not None:
            raise ValueError("A secure random source cannot be seeded")
        self.seed = seed
        self.secure = secure
        self._rng = secrets.SystemRandom() if secure else random.Random(seed)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def chance(self, probability: Optional[float]) -> bool:
        """Flip a coin that lands true with the given probability."""
        if probability is None:
            return False
        return self._rng.random() < probability

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        """Return random integer N such that 0 <= N < stop."""
        return self._rng.randrange(stop)

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return self._rng.choice(seq)

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index with probability proportional to its weight.

        Draws r in [0, total) and walks the weights until the running total
        exceeds r. Zero-weight entries can never be returned.

        Raises
        ------
        IndexError
            If there are no weights or they sum to zero.
        """
        total = sum(weights)
        if not weights or total <= 0:
            raise IndexError("Cannot choose from an empty or zero-weight sequence")

        r = self._rng.random() * total
        cumulative = 0
        for i, weight in enumerate(weights):
            cumulative += weight
            if cumulative > r:
                return i

        # Float rounding at the very top of the range
        for i in range(len(weights) - 1, -1, -1):
            if weights[i] > 0:
                return i
        raise IndexError("Cannot choose from an empty or zero-weight sequence")

    def weighted_choice(self, items: List[Tuple[Any, float]]) -> Any:
        """
        Choose from items with weights.

        Args:
            items: List of (item, weight) tuples

        Returns:
            Randomly selected item based on weights
        """
        index = self.weighted_index([w for _, w in items])
        return items[index][0]


RandomLike = Union[RandomSource, int, None]


def make_rng(rng: RandomLike = None) -> RandomSource:
    """Coerce a seed, an existing source, or None into a ``RandomSource``."""
    if isinstance(rng, RandomSource):
        return rng
    return RandomSource(seed=rng)
