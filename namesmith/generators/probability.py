#!/usr/bin/env python3
"""
Probability Table
=================
Per-slot probabilities that drive the syllable coin-flips.

A slot left at ``None`` disables its feature no matter what the pools hold.
A slot is enabled when it is set and greater than zero.
"""

from dataclasses import dataclass, fields, asdict
from typing import Dict, Optional

from ..errors import InvalidConfiguration
from .graphemes import PoolCategory


# Slot governed by each pool category
CATEGORY_SLOTS: Dict[PoolCategory, str] = {
    PoolCategory.LEADING_CONSONANT: 'leading_consonant_exists',
    PoolCategory.LEADING_CONSONANT_SEQUENCE: 'leading_consonant_is_sequence',
    PoolCategory.VOWEL: 'vowel_exists',
    PoolCategory.VOWEL_SEQUENCE: 'vowel_is_sequence',
    PoolCategory.TRAILING_CONSONANT: 'trailing_consonant_exists',
    PoolCategory.TRAILING_CONSONANT_SEQUENCE: 'trailing_consonant_is_sequence',
    PoolCategory.FINAL_CONSONANT: 'final_consonant_exists',
    PoolCategory.FINAL_CONSONANT_SEQUENCE: 'final_consonant_is_sequence',
}

# Applied the first time a pool receives graphemes, only if its slot is unset
DEFAULT_PROBABILITIES: Dict[PoolCategory, float] = {
    PoolCategory.LEADING_CONSONANT: 0.95,
    PoolCategory.LEADING_CONSONANT_SEQUENCE: 0.25,
    PoolCategory.VOWEL: 1.0,
    PoolCategory.VOWEL_SEQUENCE: 0.25,
    PoolCategory.TRAILING_CONSONANT: 0.10,
    PoolCategory.TRAILING_CONSONANT_SEQUENCE: 0.25,
    PoolCategory.FINAL_CONSONANT: 0.50,
    PoolCategory.FINAL_CONSONANT_SEQUENCE: 0.25,
}


@dataclass
class ProbabilityTable:
    """Optional probability in [0, 1] for each syllable slot."""
    leading_consonant_exists: Optional[float] = None
    leading_consonant_is_sequence: Optional[float] = None
    vowel_exists: Optional[float] = None
    vowel_is_sequence: Optional[float] = None
    trailing_consonant_exists: Optional[float] = None
    trailing_consonant_is_sequence: Optional[float] = None
    final_consonant_exists: Optional[float] = None
    final_consonant_is_sequence: Optional[float] = None
    starting_syllable_leading_vowel_exists: Optional[float] = None
    starting_syllable_leading_vowel_is_sequence: Optional[float] = None

    def __post_init__(self):
        for slot in self.slot_names():
            _validate(slot, getattr(self, slot))

    @classmethod
    def slot_names(cls):
        return [f.name for f in fields(cls)]

    def set(self, slot: str, value: Optional[float]) -> None:
        """Set a slot explicitly. ``None`` disables it."""
        if slot not in self.slot_names():
            raise InvalidConfiguration(f"Unknown probability slot '{slot}'")
        _validate(slot, value)
        setattr(self, slot, None if value is None else float(value))

    def get(self, slot: str) -> Optional[float]:
        if slot not in self.slot_names():
            raise InvalidConfiguration(f"Unknown probability slot '{slot}'")
        return getattr(self, slot)

    def is_enabled(self, slot: str) -> bool:
        value = self.get(slot)
        return value is not None and value > 0

    def apply_default(self, category: PoolCategory) -> None:
        """Give a category's slot its default value unless already set."""
        slot = CATEGORY_SLOTS[category]
        if getattr(self, slot) is None:
            setattr(self, slot, DEFAULT_PROBABILITIES[category])

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)

    def copy(self) -> "ProbabilityTable":
        return ProbabilityTable(**self.to_dict())


def _validate(slot: str, value) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"Probability '{slot}' must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise InvalidConfiguration(f"Probability '{slot}' must be within [0, 1], got {value}")
