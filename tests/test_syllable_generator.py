"""
Tests for Syllable Generator
============================
Tests for syllable assembly rules in namesmith/generators/syllables.py.
"""

import pytest
import re
import sys
from collections import Counter
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namesmith.errors import DegenerateOutput, EmptyPool, InvalidConfiguration
from namesmith.generators.graphemes import PoolCategory
from namesmith.generators.syllables import (
    DefaultSyllableGenerator,
    SyllableGenerator,
    SyllablePosition,
)


@pytest.fixture
def basic():
    """Leading s/t/r, vowels a/e, trailing z."""
    return (SyllableGenerator(seed=21)
            .with_leading_consonants("str")
            .with_vowels("ae")
            .with_trailing_consonants("z"))


class TestSyllableShape:
    """Tests for the structure of generated syllables."""

    def test_middle_grammar(self, basic):
        """Middle syllables follow consonant? vowel consonant?."""
        pattern = re.compile(r"^[str]?[ae]z?$")
        for _ in range(500):
            assert pattern.match(basic.next_syllable())

    def test_never_empty(self, basic):
        """With empty output disallowed, every syllable has content."""
        for position in SyllablePosition:
            for _ in range(300):
                assert basic.generate_syllable(position) != ""

    def test_trailing_rate(self, basic):
        """Trailing consonants appear at roughly the default 10% rate."""
        draws = 5000
        with_z = sum(basic.next_syllable().endswith("z") for _ in range(draws))
        assert abs(with_z / draws - 0.10) < 0.02

    def test_seeded_reproducible(self):
        """Same seed and configuration give the same syllables."""
        def build():
            return SyllableGenerator(seed=5).with_consonants("bdkl").with_vowels("aeiou")
        a, b = build(), build()
        assert [a.next_syllable() for _ in range(50)] == [b.next_syllable() for _ in range(50)]


class TestPositionRules:
    """Tests for starting and ending syllable rules."""

    def test_starting_leading_vowel(self):
        """A certain starting vowel skips the leading consonant."""
        gen = (SyllableGenerator(seed=2)
               .with_leading_consonants("k")
               .with_vowels("o")
               .with_probability(starting_syllable_leading_vowel_exists=1.0))
        for _ in range(100):
            assert gen.next_starting_syllable() == "o"
        assert any(s.startswith("k") for s in (gen.next_syllable() for _ in range(100)))

    def test_starting_vowel_sequence(self):
        """The starting vowel may be a vowel sequence."""
        gen = (SyllableGenerator(seed=2)
               .with_vowels("o")
               .with_vowel_sequences("ou")
               .with_probability(starting_syllable_leading_vowel_exists=1.0,
                                 starting_syllable_leading_vowel_is_sequence=1.0))
        assert gen.next_starting_syllable() == "ou"

    def test_final_consonant_only_on_ending(self):
        """Final consonants appear only in ending syllables."""
        gen = (SyllableGenerator(seed=4)
               .with_vowels("a")
               .with_final_consonants("n")
               .with_probability(final_consonant_exists=1.0))
        assert gen.next_ending_syllable() == "an"
        assert gen.next_syllable() == "a"
        assert gen.next_starting_syllable() == "a"

    def test_final_takes_priority_over_trailing(self):
        """When the final consonant fires, no trailing consonant is added."""
        gen = (SyllableGenerator(seed=4)
               .with_vowels("a")
               .with_trailing_consonants("t")
               .with_final_consonants("n")
               .with_probability(final_consonant_exists=1.0, trailing_consonant_exists=1.0))
        assert {gen.next_ending_syllable() for _ in range(50)} == {"an"}
        assert {gen.next_syllable() for _ in range(50)} == {"at"}

    def test_trailing_on_ending_when_final_misses(self):
        """Ending syllables fall back to trailing consonants."""
        gen = (SyllableGenerator(seed=4)
               .with_vowels("a")
               .with_trailing_consonants("t")
               .with_probability(trailing_consonant_exists=1.0))
        assert gen.next_ending_syllable() == "at"

    def test_next_for_position(self, basic):
        """next_for_position dispatches on the position."""
        assert basic.next_for_position(SyllablePosition.MIDDLE)


class TestSequences:
    """Tests for sequence flips."""

    def test_sequence_always(self):
        """A certain sequence flip always draws from the sequence pool."""
        gen = (SyllableGenerator(seed=8)
               .with_leading_consonant_sequences("str")
               .with_vowels("a")
               .with_probability(leading_consonant_exists=1.0, leading_consonant_is_sequence=1.0))
        assert {gen.next_syllable() for _ in range(20)} == {"stra"}

    def test_sequence_pool_empty_raises(self):
        """A sequence flip with an empty sequence pool raises EmptyPool."""
        gen = (SyllableGenerator(seed=8)
               .with_vowels("a")
               .with_probability(vowel_is_sequence=1.0))
        with pytest.raises(EmptyPool):
            gen.next_syllable()

    def test_sequences_are_not_atomized(self):
        """Sequence pools keep multi-character graphemes whole."""
        gen = SyllableGenerator(seed=1).with_vowel_sequences("ae", "ou")
        assert gen.pools[PoolCategory.VOWEL_SEQUENCE].values == ["ae", "ou"]


class TestPoolHandle:
    """Tests for explicit pool handles."""

    def test_weight_applies_to_added_only(self):
        """weight() changes only the graphemes from the same call."""
        gen = SyllableGenerator(seed=1)
        gen.add_graphemes(PoolCategory.VOWEL, "a")
        gen.add_graphemes(PoolCategory.VOWEL, "e", "i").weight(5)
        weights = {g.value: g.weight for g in gen.pools[PoolCategory.VOWEL]}
        assert weights == {"a": 1, "e": 5, "i": 5}

    def test_invalid_weight(self):
        """Negative weights are rejected."""
        gen = SyllableGenerator(seed=1)
        with pytest.raises(InvalidConfiguration):
            gen.add_graphemes(PoolCategory.VOWEL, "a").weight(-2)

    def test_boolean_weight(self):
        """Booleans are not accepted as weights."""
        gen = SyllableGenerator(seed=1)
        with pytest.raises(InvalidConfiguration):
            gen.add_graphemes(PoolCategory.VOWEL, "a").weight(True)

    def test_sequences(self):
        """sequences() adds to the matching sequence pool."""
        gen = SyllableGenerator(seed=1)
        gen.add_graphemes(PoolCategory.VOWEL, "o").sequences("ou", "oa").weight(2)
        pool = gen.pools[PoolCategory.VOWEL_SEQUENCE]
        assert pool.values == ["ou", "oa"]
        assert pool.total_weight == 4
        assert gen.probability.vowel_is_sequence == 0.25

    def test_weighted_vowel_frequency(self):
        """Pool weights drive the syllable distribution."""
        gen = SyllableGenerator(seed=17).with_vowels("a").with_vowels("e", weight=3)
        counts = Counter(gen.next_syllable() for _ in range(8000))
        assert abs(counts["e"] / 8000 - 0.75) < 0.03


class TestEmptyOutput:
    """Tests for degenerate configurations."""

    def test_nothing_configured_raises(self):
        """A generator with nothing enabled produces DegenerateOutput."""
        with pytest.raises(DegenerateOutput):
            SyllableGenerator(seed=1).next_syllable()

    def test_allow_empty(self):
        """allow_empty_strings() permits empty syllables."""
        gen = SyllableGenerator(seed=1).allow_empty_strings()
        assert gen.next_syllable() == ""

    def test_disabled_vowels_with_consonants(self):
        """Disabling vowels leaves consonant-only syllables."""
        gen = (SyllableGenerator(seed=1)
               .with_leading_consonants("k")
               .with_vowels("a")
               .with_probability(vowel_exists=None, leading_consonant_exists=1.0))
        assert gen.next_syllable() == "k"


class TestDefaultSyllableGenerator:
    """Tests for the preloaded generator."""

    def test_default_pools_loaded(self):
        """The default generator comes with vowels and consonants."""
        gen = DefaultSyllableGenerator(seed=3)
        assert gen.pools[PoolCategory.VOWEL].values == list("aeiou")
        assert len(gen.pools[PoolCategory.LEADING_CONSONANT]) > 0
        assert gen.probability.starting_syllable_leading_vowel_exists == 0.10

    def test_default_generates(self):
        """The default generator produces non-empty syllables."""
        gen = DefaultSyllableGenerator(seed=3)
        for _ in range(200):
            assert gen.next_starting_syllable()
            assert gen.next_ending_syllable()
