"""
Tests for Configuration Persistence
===================================
Tests for dict/YAML conversion in namesmith/config.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namesmith.config import (
    dump_yaml,
    generator_from_dict,
    generator_to_dict,
    load_generator,
    load_yaml,
    mutation_from_dict,
    mutation_to_dict,
    save_generator,
    syllables_from_dict,
    syllables_to_dict,
)
from namesmith.errors import InvalidConfiguration, InvalidPattern
from namesmith.generators.filter import NameFilter
from namesmith.generators.graphemes import PoolCategory
from namesmith.generators.mutation import Mutation, NameTransformer
from namesmith.generators.name_generator import NameGenerator
from namesmith.generators.syllables import SyllableGenerator


def full_generator(seed=None):
    syllables = (SyllableGenerator(seed=seed)
                 .with_leading_consonants("str")
                 .with_vowels("ae")
                 .with_vowels("o", weight=3)
                 .with_vowel_sequences("ou")
                 .with_trailing_consonants("z")
                 .with_final_consonants("n")
                 .with_probability(trailing_consonant_exists=None,
                                   starting_syllable_leading_vowel_exists=0.2))
    transformer = (NameTransformer(chance=0.4)
                   .with_mutation(Mutation().when("^t", 0).replace_syllable(0, "zo"))
                   .with_mutation(Mutation().insert_syllable(-1, "ka").remove_syllable(0))
                   .with_mutation(Mutation().append_syllable("x")))
    name_filter = (NameFilter(ignore_case=True)
                   .do_not_allow_pattern(r"^.{0,2}$")
                   .do_not_allow_syllable_pattern("^ou$"))
    return (NameGenerator(syllables, seed=seed)
            .using_transformer(transformer)
            .using_filter(name_filter)
            .using_syllable_count(2, 4)
            .limit_retries(50)
            .validate_variations())


class TestSyllableConfig:
    """Tests for syllable generator conversion."""

    def test_weights_preserved(self):
        """Weighted graphemes are written as mappings."""
        data = syllables_to_dict(full_generator().syllables)
        assert data['pools']['vowels'] == ['a', 'e', {'value': 'o', 'weight': 3}]

    def test_empty_pools_omitted(self):
        """Pools without graphemes are not written."""
        data = syllables_to_dict(full_generator().syllables)
        assert 'final_consonant_sequences' not in data['pools']

    def test_explicit_null_survives(self):
        """A slot disabled after its pool was populated stays disabled."""
        data = syllables_to_dict(full_generator().syllables)
        restored = syllables_from_dict(data)
        assert restored.probability.trailing_consonant_exists is None
        assert restored.pools[PoolCategory.TRAILING_CONSONANT].values == ['z']

    def test_defaults_applied_on_load(self):
        """Pools without explicit probabilities get their defaults."""
        restored = syllables_from_dict({'pools': {'vowels': ['a']}})
        assert restored.probability.vowel_exists == 1.0

    def test_sequence_entries_not_split(self):
        """Multi-character entries in single pools are kept whole."""
        restored = syllables_from_dict({'pools': {'leading_consonants': ['th', 'k']}})
        assert restored.pools[PoolCategory.LEADING_CONSONANT].values == ['th', 'k']

    def test_unknown_pool(self):
        """Unknown pool names are rejected."""
        with pytest.raises(InvalidConfiguration):
            syllables_from_dict({'pools': {'consonants': ['k']}})

    def test_bad_entry(self):
        """Entries must be strings or value mappings."""
        with pytest.raises(InvalidConfiguration):
            syllables_from_dict({'pools': {'vowels': [3]}})

    def test_bad_probability(self):
        """Invalid probabilities in the file are rejected."""
        with pytest.raises(InvalidConfiguration):
            syllables_from_dict({'pools': {'vowels': ['a']}, 'probability': {'vowel_exists': 3}})


class TestMutationConfig:
    """Tests for mutation conversion."""

    def test_round_trip(self):
        """Steps and conditions survive conversion."""
        mutation = Mutation().when("^t", -1).insert_syllable(0, "a").remove_syllable(2)
        assert mutation_from_dict(mutation_to_dict(mutation)) == mutation

    def test_custom_step_not_serializable(self):
        """Callback steps cannot be written."""
        with pytest.raises(InvalidConfiguration):
            mutation_to_dict(Mutation().execute(lambda n: None))

    def test_unknown_op(self):
        """Unknown step operations are rejected."""
        with pytest.raises(InvalidConfiguration):
            mutation_from_dict({'steps': [{'op': 'swap'}]})

    def test_missing_field(self):
        """Steps missing a field are rejected."""
        with pytest.raises(InvalidConfiguration):
            mutation_from_dict({'steps': [{'op': 'replace', 'index': 0}]})

    def test_bad_condition_pattern(self):
        """Condition patterns are validated on load."""
        with pytest.raises(InvalidPattern):
            mutation_from_dict({'when': {'pattern': '[a-'}, 'steps': []})

    def test_string_condition_index(self):
        """A non-integer condition index fails on load, not during generation."""
        data = {
            'syllables': {'pools': {'vowels': ['a'], 'leading_consonants': ['k']}},
            'transformer': {'mutations': [
                {'when': {'pattern': 'k', 'index': '0'}, 'steps': [{'op': 'append', 'text': 'x'}]},
            ]},
        }
        with pytest.raises(InvalidConfiguration):
            generator_from_dict(data)

    def test_boolean_condition_index(self):
        """Booleans are not accepted as condition indices."""
        with pytest.raises(InvalidConfiguration):
            mutation_from_dict({'when': {'pattern': 'k', 'index': True}})

    def test_condition_without_pattern(self):
        """A condition must name a pattern."""
        with pytest.raises(InvalidConfiguration):
            mutation_from_dict({'when': {'index': 0}})

    def test_non_numeric_step_index(self):
        """Step indices must be numbers."""
        with pytest.raises(InvalidConfiguration):
            mutation_from_dict({'steps': [{'op': 'remove', 'index': 'first'}]})


class TestGeneratorConfig:
    """Tests for whole-generator conversion."""

    def test_lossless_round_trip(self):
        """to_dict(from_dict(to_dict(g))) equals to_dict(g)."""
        data = generator_to_dict(full_generator())
        assert generator_to_dict(generator_from_dict(data)) == data

    def test_settings_restored(self):
        """Generator settings are restored."""
        restored = generator_from_dict(generator_to_dict(full_generator()))
        assert restored.minimum_syllables == 2
        assert restored.maximum_syllables == 4
        assert restored.max_retries == 50
        assert restored.revalidate_variations is True
        assert restored.transformer.chance == 0.4
        assert restored.filter.ignore_case is True

    def test_seeded_load_reproducible(self):
        """Two generators loaded with the same seed agree."""
        data = generator_to_dict(full_generator())
        a = generator_from_dict(data, seed=12)
        b = generator_from_dict(data, seed=12)
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_not_a_mapping(self):
        """Top-level data must be a mapping."""
        with pytest.raises(InvalidConfiguration):
            generator_from_dict(['vowels'])

    def test_minimal(self):
        """Only syllable pools are required."""
        gen = generator_from_dict({'syllables': {'pools': {'vowels': ['a'], 'leading_consonants': ['k']}}})
        assert gen.filter is None
        assert gen.transformer is None
        assert set(gen.next()) <= {'a', 'k'}


class TestYaml:
    """Tests for YAML files."""

    def test_yaml_round_trip(self):
        """Dumped YAML loads back to the same dict."""
        data = generator_to_dict(full_generator())
        assert load_yaml(dump_yaml(data)) == data

    def test_invalid_yaml(self):
        """Malformed YAML raises InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            load_yaml("syllables: [unclosed")

    def test_empty_yaml(self):
        """An empty document loads as an empty dict."""
        assert load_yaml("") == {}

    def test_save_and_load(self, tmp_path):
        """Generators saved to disk load back identically."""
        path = save_generator(full_generator(), tmp_path / "names.yaml")
        assert path.exists()
        restored = load_generator(path)
        assert generator_to_dict(restored) == generator_to_dict(full_generator())

    def test_missing_file(self, tmp_path):
        """Loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_generator(tmp_path / "nope.yaml")
