"""
Tests for puzzle generation and bonus placement.
"""

from collections import Counter

from letterperk.engine import (
    DEFAULT_BONUS_CONFIG,
    LETTER_DISTRIBUTION,
    TOTAL_TILES,
    BonusConfig,
    SequenceTile,
    assign_bonuses_to_sequences,
    build_tile_bag,
    generate_game_configuration,
    seeded_random,
)
from letterperk.engine.generator import deal_columns, spread_opening_letters


def seq(letters: str):
    return [SequenceTile(letter=letter, points=1) for letter in letters]


def letters_of(sequence):
    return "".join(t.letter for t in sequence)


class TestTileBag:
    """Test cases for the letter distribution."""

    def test_total_tiles(self):
        """The bag holds 92 tiles."""
        assert len(build_tile_bag()) == TOTAL_TILES == 92

    def test_counts_match_table(self):
        """Each letter appears as often as the table says."""
        counts = Counter(t.letter for t in build_tile_bag())
        assert counts == {letter: entry["count"] for letter, entry in LETTER_DISTRIBUTION.items()}

    def test_points_match_table(self):
        """Tiles carry their letter's point value and no bonus."""
        for tile in build_tile_bag():
            assert tile.points == LETTER_DISTRIBUTION[tile.letter]["points"]
            assert tile.bonus_type is None


class TestDealColumns:
    """Test cases for dealing vowels then consonants."""

    def test_vowels_dealt_first(self):
        """Vowels go round-robin first, consonants continue the rotation."""
        columns = deal_columns(seq("ABEC"))
        assert [letters_of(c) for c in columns] == ["AC", "E", "B"]

    def test_all_tiles_dealt(self):
        """Dealing keeps every tile."""
        columns = deal_columns(build_tile_bag())
        assert sum(len(c) for c in columns) == TOTAL_TILES
        assert [len(c) for c in columns] == [31, 31, 30]


class TestSpreadOpeningLetters:
    """Test cases for the distinct-opening repair."""

    def test_first_occurrences_fill_opening(self):
        """The first occurrence of each new letter moves to the front."""
        result = spread_opening_letters(seq("AABCDE"), seeded_random(1))
        assert letters_of(result[:4]) == "ABCD"
        assert sorted(letters_of(result[4:])) == ["A", "E"]

    def test_too_few_distinct_letters(self):
        """Missing distinct letters are filled in original order."""
        result = spread_opening_letters(seq("AAAB"), seeded_random(1))
        assert letters_of(result) == "ABAA"

    def test_keeps_all_tiles(self):
        """Repair only reorders."""
        sequence = seq("EEEEIIAATNRS")
        result = spread_opening_letters(sequence, seeded_random(5))
        assert sorted(letters_of(result)) == sorted(letters_of(sequence))


class TestGenerateGameConfiguration:
    """Test cases for the full configuration generator."""

    def test_deterministic(self):
        """The same seed always gives the same configuration."""
        assert generate_game_configuration(111525) == generate_game_configuration(111525)

    def test_serialized_identically(self):
        """Two runs serialize to identical JSON."""
        a = generate_game_configuration(424242).model_dump_json()
        b = generate_game_configuration(424242).model_dump_json()
        assert a == b

    def test_seeds_differ(self):
        """Different seeds give different sequences."""
        a = generate_game_configuration(111525).column_sequences
        b = generate_game_configuration(111625).column_sequences
        assert a != b

    def test_three_columns_hold_whole_bag(self):
        """All 92 tiles are spread across three columns."""
        config = generate_game_configuration(123456)
        assert len(config.column_sequences) == 3
        letters = Counter(t.letter for column in config.column_sequences for t in column)
        assert letters == Counter(t.letter for t in build_tile_bag())

    def test_distinct_opening_letters(self):
        """The first four tiles of every column have distinct letters."""
        for seed in (1, 100000, 111525, 555555, 999999):
            for column in generate_game_configuration(seed).column_sequences:
                assert len({t.letter for t in column[:4]}) == 4

    def test_default_bonus_config(self):
        """Configurations carry the default bonus counts and no effects."""
        config = generate_game_configuration(1)
        assert [(b.type, b.min_count) for b in config.bonus_config] == [
            ("green", 3), ("purple", 3), ("red", 3), ("yellow", 6), ("blue", 3), ("black", 3),
        ]
        assert config.effects == []

    def test_no_bonuses_before_assignment(self):
        """Generation leaves bonus placement to the assignment step."""
        config = generate_game_configuration(1)
        assert all(t.bonus_type is None for column in config.column_sequences for t in column)


class TestAssignBonuses:
    """Test cases for bonus placement."""

    def test_total_bonus_tiles(self):
        """Default config places 21 bonus tiles with the configured counts."""
        config = generate_game_configuration(111525)
        sequences = assign_bonuses_to_sequences(
            config.column_sequences, config.bonus_config, seeded_random(111525)
        )
        counts = Counter(t.bonus_type for column in sequences for t in column if t.bonus_type)
        assert sum(counts.values()) == 21
        assert counts == {"green": 3, "purple": 3, "red": 3, "yellow": 6, "blue": 3, "black": 3}

    def test_letters_and_order_preserved(self):
        """Assignment only tags tiles; column contents and order stay the same."""
        config = generate_game_configuration(7)
        sequences = assign_bonuses_to_sequences(
            config.column_sequences, config.bonus_config, seeded_random(7)
        )
        for before, after in zip(config.column_sequences, sequences):
            assert letters_of(before) == letters_of(after)

    def test_input_untouched(self):
        """The input sequences keep no bonuses."""
        config = generate_game_configuration(7)
        assign_bonuses_to_sequences(config.column_sequences, config.bonus_config, seeded_random(7))
        assert all(t.bonus_type is None for column in config.column_sequences for t in column)

    def test_deterministic(self):
        """The same RNG stream places bonuses identically."""
        config = generate_game_configuration(31)
        a = assign_bonuses_to_sequences(config.column_sequences, DEFAULT_BONUS_CONFIG, seeded_random(31))
        b = assign_bonuses_to_sequences(config.column_sequences, DEFAULT_BONUS_CONFIG, seeded_random(31))
        assert a == b

    def test_small_pool_caps_assignments(self):
        """With fewer tiles than bonuses, every tile gets exactly one bonus."""
        sequences = [seq("AB"), [], []]
        result = assign_bonuses_to_sequences(
            sequences,
            [BonusConfig(type="green", min_count=3, max_count=3)],
            seeded_random(1),
        )
        assert [t.bonus_type for t in result[0]] == ["green", "green"]

    def test_zero_count(self):
        """A count of zero assigns nothing."""
        result = assign_bonuses_to_sequences(
            [seq("ABC"), [], []],
            [BonusConfig(type="red", min_count=0, max_count=0)],
            seeded_random(1),
        )
        assert all(t.bonus_type is None for t in result[0])
