#!/usr/bin/env python3
"""
Mutation Engine
===============
Produces variations of existing names.

A ``Mutation`` is a recipe of syllable edits with an optional condition.
A ``NameTransformer`` holds several mutations and an activation chance; when
it fires it picks one eligible mutation uniformly at random and applies all
of its steps in order to a copy of the name.

Usage:
    transformer = (NameTransformer(seed=3)
        .with_mutation(lambda m: m.replace_syllable(0, "zo"))
        .with_mutation(Mutation().when(r"^ta", index=0).append_syllable("x")))

    variant = transformer.apply_variation(Name(["ta", "ri"]))
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from ..errors import IndexOutOfRange, InvalidConfiguration, InvalidOperation, InvalidPattern
from .entropy import RandomLike, make_rng
from .name import Name
from .syllables import SyllableGenerator, SyllablePosition

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str, flags: int = 0) -> "re.Pattern":
    """Compile a regex, turning ``re.error`` into ``InvalidPattern``."""
    if not isinstance(pattern, str):
        raise InvalidPattern(repr(pattern), "pattern must be a string")
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPattern(pattern, str(e)) from e


def _check_index(name: Name, index: int, action: str) -> None:
    if not -len(name) <= index < len(name):
        raise IndexOutOfRange(
            f"Cannot {action} syllable {index} of a {len(name)}-syllable name"
        )


# =============================================================================
# Steps
# =============================================================================

@dataclass
class ReplaceSyllable:
    """Replace the syllable at ``index`` with ``text``."""
    index: int
    text: str

    def apply(self, name: Name) -> None:
        _check_index(name, self.index, 'replace')
        name.syllables[self.index] = self.text


@dataclass
class InsertSyllable:
    """Insert ``text`` before ``index``; later syllables shift right."""
    index: int
    text: str

    def apply(self, name: Name) -> None:
        if not -len(name) <= self.index <= len(name):
            raise IndexOutOfRange(
                f"Cannot insert at position {self.index} of a {len(name)}-syllable name"
            )
        name.syllables.insert(self.index, self.text)


@dataclass
class AppendSyllable:
    """Add ``text`` as a new last syllable."""
    text: str

    def apply(self, name: Name) -> None:
        name.syllables.append(self.text)


@dataclass
class RemoveSyllable:
    """Remove the syllable at ``index``. A name is never emptied."""
    index: int

    def apply(self, name: Name) -> None:
        _check_index(name, self.index, 'remove')
        if len(name) == 1:
            raise InvalidOperation("Removing the only syllable would leave an empty name")
        del name.syllables[self.index]


@dataclass
class CustomStep:
    """Run an arbitrary callback that edits the name in place. Not serializable."""
    callback: Callable[[Name], None]

    def apply(self, name: Name) -> None:
        self.callback(name)


MutationStep = Union[ReplaceSyllable, InsertSyllable, AppendSyllable, RemoveSyllable, CustomStep]


# =============================================================================
# Mutations
# =============================================================================

@dataclass
class MutationCondition:
    """
    Gate for a mutation.

    With ``index`` unset the pattern may match anywhere in the rendered name;
    otherwise it must match the syllable at that index (negative indices count
    from the end, and a missing syllable never matches).
    """
    pattern: str
    index: Optional[int] = None
    regex: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.index is not None and (isinstance(self.index, bool) or not isinstance(self.index, int)):
            raise InvalidConfiguration(f"Condition index must be an integer or None, got {self.index!r}")
        self.regex = compile_pattern(self.pattern)

    def is_satisfied(self, name: Name) -> bool:
        if self.index is None:
            return self.regex.search(name.render()) is not None
        if not -len(name) <= self.index < len(name):
            return False
        return self.regex.search(name.syllables[self.index]) is not None


@dataclass
class Mutation:
    """An ordered list of steps with an optional condition."""
    steps: List[MutationStep] = field(default_factory=list)
    condition: Optional[MutationCondition] = None

    def when(self, pattern: str, index: Optional[int] = None) -> "Mutation":
        self.condition = MutationCondition(pattern, index)
        return self

    def replace_syllable(self, index: int, text: str) -> "Mutation":
        self.steps.append(ReplaceSyllable(index, text))
        return self

    def insert_syllable(self, index: int, text: str) -> "Mutation":
        self.steps.append(InsertSyllable(index, text))
        return self

    def append_syllable(self, text: str) -> "Mutation":
        self.steps.append(AppendSyllable(text))
        return self

    def remove_syllable(self, index: int) -> "Mutation":
        self.steps.append(RemoveSyllable(index))
        return self

    def execute(self, callback: Callable[[Name], None]) -> "Mutation":
        self.steps.append(CustomStep(callback))
        return self

    def can_apply(self, name: Name) -> bool:
        return self.condition is None or self.condition.is_satisfied(name)

    def apply(self, name: Name) -> None:
        """Apply every step, in order, to ``name`` in place."""
        for step in self.steps:
            step.apply(name)


# =============================================================================
# Transformer
# =============================================================================

class NameTransformer:
    """
    Holds mutations and applies one of them to produce a variation.

    ``chance`` is the activation probability used by ``NameGenerator`` and
    ``transform()``; ``apply_variation()`` always tries to apply a mutation.
    """

    def __init__(self, mutations: List[Mutation] = None, chance: Optional[float] = None,
                 seed: RandomLike = None):
        self.rng = make_rng(seed)
        self.mutations: List[Mutation] = list(mutations or [])
        self.chance: Optional[float] = None
        if chance is not None:
            self.with_chance(chance)

    def with_mutation(self, mutation: Union[Mutation, Callable[[Mutation], Mutation]]) -> "NameTransformer":
        """Add a ``Mutation`` or a function that configures a fresh one."""
        if callable(mutation) and not isinstance(mutation, Mutation):
            mutation = mutation(Mutation())
        if not isinstance(mutation, Mutation):
            raise InvalidConfiguration(f"Expected a Mutation, got {type(mutation).__name__}")
        self.mutations.append(mutation)
        return self

    def with_chance(self, chance: float) -> "NameTransformer":
        if isinstance(chance, bool) or not isinstance(chance, (int, float)) or not 0.0 <= chance <= 1.0:
            raise InvalidConfiguration(f"Transform chance must be within [0, 1], got {chance!r}")
        self.chance = float(chance)
        return self

    def eligible(self, name: Name) -> List[Mutation]:
        return [m for m in self.mutations if m.can_apply(name)]

    def apply_variation(self, name: Name) -> Name:
        """
        Return a variation of ``name``; the original is left untouched.

        If no mutation's condition is satisfied an unmodified copy is returned.
        """
        result = name.copy()
        candidates = self.eligible(result)
        if not candidates:
            logger.debug(f"No eligible mutation for '{result}'")
            return result

        mutation = self.rng.choice(candidates)
        mutation.apply(result)
        logger.debug(f"Mutated '{name}' -> '{result}'")
        return result

    def transform(self, name: Name) -> Name:
        """Apply a variation only if the activation chance fires."""
        if self.rng.chance(self.chance):
            return self.apply_variation(name)
        return name.copy()


# =============================================================================
# Ready-made transformers
# =============================================================================

def _position_of(index: int, count: int) -> SyllablePosition:
    if count > 1 and index == 0:
        return SyllablePosition.STARTING
    if count > 1 and index == count - 1:
        return SyllablePosition.ENDING
    return SyllablePosition.MIDDLE


def syllable_reroll_transformer(syllables: SyllableGenerator, chance: float = 1.0,
                                seed: RandomLike = None) -> NameTransformer:
    """
    Transformer that swaps one random syllable for a freshly generated one,
    honouring starting/ending rules for its position.
    """
    transformer = NameTransformer(chance=chance, seed=seed)

    def reroll(name: Name) -> None:
        if not name.syllables:
            return
        index = transformer.rng.randrange(len(name))
        position = _position_of(index, len(name))
        name.syllables[index] = syllables.generate_syllable(position)

    return transformer.with_mutation(Mutation().execute(reroll))


def vowel_shift_transformer(vowels: str, chance: float = 1.0,
                            seed: RandomLike = None) -> NameTransformer:
    """
    Transformer that replaces one vowel in one syllable with a different vowel
    from ``vowels``. Names without any of those vowels are left unchanged.
    """
    vowel_set = list(dict.fromkeys(vowels))
    if len(vowel_set) < 2:
        raise InvalidConfiguration("A vowel shift needs at least two distinct vowels")
    transformer = NameTransformer(chance=chance, seed=seed)

    def shift(name: Name) -> None:
        spots = [
            (i, j)
            for i, syllable in enumerate(name.syllables)
            for j, char in enumerate(syllable)
            if char in vowel_set
        ]
        if not spots:
            return
        i, j = transformer.rng.choice(spots)
        syllable = name.syllables[i]
        replacement = transformer.rng.choice([v for v in vowel_set if v != syllable[j]])
        name.syllables[i] = syllable[:j] + replacement + syllable[j + 1:]

    pattern = '[' + re.escape(''.join(vowel_set)) + ']'
    return transformer.with_mutation(Mutation().when(pattern).execute(shift))
