#!/usr/bin/env python3
"""
Name Generator
==============
Joins syllables into names, optionally transforms them, and retries until the
filter accepts one.

Usage:
    gen = (NameGenerator(SyllableGenerator().with_vowels("ae").with_consonants("strl"))
           .using_filter(NameFilter().do_not_allow_pattern("^.{0,2}$"))
           .using_syllable_count(2, 3))

    gen.next()                # "sarel"
    name = gen.next_name(3)   # Name(['sa', 're', 'la'])
    gen.next_variation(name)  # needs a transformer

    result = gen.try_next_name()
    if result.is_exhausted:
        ...  # relax the filter
"""

import logging
from typing import Optional

from ..errors import (
    GenerationResult,
    InvalidConfiguration,
    InvalidSyllableCount,
    NamesmithError,
    RetriesExhausted,
)
from ..settings import get_setting
from .entropy import RandomLike, make_rng
from .filter import NameFilter
from .mutation import NameTransformer
from .name import Name
from .syllables import DefaultSyllableGenerator, SyllableGenerator, SyllablePosition

logger = logging.getLogger(__name__)


def _default_max_retries() -> int:
    return int(get_setting('generator.max_retries', 1000))


class NameGenerator:
    """
    Generates names from a ``SyllableGenerator`` with an optional
    ``NameTransformer`` and ``NameFilter``.

    With no syllable generator a ``DefaultSyllableGenerator`` is used.
    """

    def __init__(self, syllables: SyllableGenerator = None,
                 transformer: NameTransformer = None,
                 name_filter: NameFilter = None,
                 seed: RandomLike = None):
        self.rng = make_rng(seed)
        self.syllables: SyllableGenerator = None
        self.transformer: Optional[NameTransformer] = None
        self.filter: Optional[NameFilter] = None
        self.minimum_syllables = int(get_setting('generator.min_syllables', 2))
        self.maximum_syllables = int(get_setting('generator.max_syllables', 2))
        self.max_retries = _default_max_retries()
        self.revalidate_variations = False

        self.using_syllables(syllables if syllables is not None else DefaultSyllableGenerator())
        if transformer is not None:
            self.using_transformer(transformer)
        if name_filter is not None:
            self.using_filter(name_filter)

    @classmethod
    def from_graphemes(cls, vowels: str, consonants: str, seed: RandomLike = None) -> "NameGenerator":
        """Quick generator from a string of vowels and a string of consonants."""
        # Integer seeds are offset so the two random streams differ
        generator_seed = seed + 1 if isinstance(seed, int) else seed
        syllables = SyllableGenerator(seed=seed).with_vowels(vowels).with_consonants(consonants)
        return cls(syllables, seed=generator_seed)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def using_syllables(self, syllables: SyllableGenerator) -> "NameGenerator":
        if syllables is None:
            raise InvalidConfiguration("A syllable generator is required")
        self.syllables = syllables
        return self

    def using_transformer(self, transformer: NameTransformer) -> "NameGenerator":
        if transformer is None:
            raise InvalidConfiguration("The transformer is None")
        if transformer.chance is None:
            transformer.with_chance(float(get_setting('transformer.default_chance', 1.0)))
        self.transformer = transformer
        return self

    def using_filter(self, name_filter: NameFilter) -> "NameGenerator":
        if name_filter is None:
            raise InvalidConfiguration("The filter is None")
        self.filter = name_filter
        return self

    def using_syllable_count(self, minimum: int, maximum: int = None) -> "NameGenerator":
        """Fix the syllable count, or set an inclusive range."""
        if maximum is None:
            maximum = minimum
        if minimum < 1:
            raise InvalidConfiguration("The minimum syllable count must be a positive number")
        if maximum < minimum:
            raise InvalidConfiguration(
                "The maximum syllable count must be equal to or greater than the minimum"
            )
        self.minimum_syllables = minimum
        self.maximum_syllables = maximum
        return self

    def limit_retries(self, limit: int) -> "NameGenerator":
        """Retries allowed after the first attempt before ``RetriesExhausted``."""
        if limit < 1:
            raise InvalidConfiguration("The retry limit must be one or greater")
        self.max_retries = limit
        return self

    def validate_variations(self, enabled: bool = True) -> "NameGenerator":
        """Also run the filter over names returned by ``next_variation``."""
        self.revalidate_variations = enabled
        return self

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _derive_syllable_count(self) -> int:
        # Attributes can be assigned directly, so the range is checked here too
        if (self.minimum_syllables < 1 or self.maximum_syllables < 1
                or self.minimum_syllables > self.maximum_syllables):
            raise InvalidConfiguration(
                "minimum_syllables must be less than or equal to maximum_syllables "
                "and both must be positive"
            )
        return self.rng.randint(self.minimum_syllables, self.maximum_syllables)

    def _assemble(self, syllable_count: int) -> Name:
        name = Name()
        for i in range(syllable_count):
            if i == 0 and syllable_count > 1:
                position = SyllablePosition.STARTING
            elif i == syllable_count - 1 and syllable_count > 1:
                position = SyllablePosition.ENDING
            else:
                position = SyllablePosition.MIDDLE
            name.syllables.append(self.syllables.generate_syllable(position))
        return name

    def _is_valid(self, name: Name) -> bool:
        return self.filter is None or self.filter.is_valid(name)

    def next_name(self, syllable_count: int = None) -> Name:
        """
        Generate one valid name.

        Parameters
        ----------
        syllable_count : int, optional
            Exact number of syllables. Drawn from the configured range if omitted.

        Raises
        ------
        InvalidSyllableCount
            ``syllable_count`` is less than one.
        InvalidConfiguration
            The configured syllable range is invalid.
        RetriesExhausted
            The filter rejected ``max_retries + 1`` attempts.
        """
        if syllable_count is None:
            syllable_count = self._derive_syllable_count()
        elif syllable_count < 1:
            raise InvalidSyllableCount("The syllable count must be a positive number")

        attempts = 0
        while True:
            attempts += 1
            name = self._assemble(syllable_count)

            if self.transformer is not None and self.rng.chance(self.transformer.chance):
                name = self.transformer.apply_variation(name)

            if self._is_valid(name):
                return name

            logger.debug(f"Attempt {attempts} rejected by filter: '{name}'")
            if attempts > self.max_retries:
                logger.warning(f"Gave up after {attempts} attempts")
                raise RetriesExhausted(attempts)

    def next(self, syllable_count: int = None) -> str:
        """Same as ``next_name`` but returns the rendered string."""
        return self.next_name(syllable_count).render()

    def next_variation(self, name: Name) -> Name:
        """
        Produce a variation of ``name`` through the transformer.

        Variations skip the filter unless ``validate_variations()`` was called,
        in which case rejected variations are retried up to the retry ceiling.
        """
        if self.transformer is None:
            raise InvalidConfiguration("next_variation requires a transformer")

        if not self.revalidate_variations:
            return self.transformer.apply_variation(name)

        attempts = 0
        while True:
            attempts += 1
            variation = self.transformer.apply_variation(name)
            if self._is_valid(variation):
                return variation
            if attempts > self.max_retries:
                logger.warning(f"No acceptable variation of '{name}' after {attempts} attempts")
                raise RetriesExhausted(attempts)

    def try_next_name(self, syllable_count: int = None) -> GenerationResult:
        """Like ``next_name`` but returns a ``GenerationResult`` instead of raising."""
        try:
            return GenerationResult(value=self.next_name(syllable_count))
        except NamesmithError as e:
            return GenerationResult(error=e)

    def try_next(self, syllable_count: int = None) -> GenerationResult:
        result = self.try_next_name(syllable_count)
        if result.ok:
            result.value = result.value.render()
        return result

    def try_next_variation(self, name: Name) -> GenerationResult:
        try:
            return GenerationResult(value=self.next_variation(name))
        except NamesmithError as e:
            return GenerationResult(error=e)
