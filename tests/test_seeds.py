"""
Tests for the seeded generator and the date/seed mapping.

Covers:
- LCG output and resumable state
- Fisher-Yates shuffle
- Eastern-midnight daily reset across DST, month, year and leap-day boundaries
- Seed and date string formats
"""

import random
from datetime import date, datetime, timezone

import pytest

from letterperk.engine import (
    SeededRandom,
    date_to_seed,
    eastern_date,
    format_utc_date_string,
    get_today_utc,
    random_casual_seed,
    seeded_random,
    shuffle_array,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def game_day(instant: datetime):
    today = get_today_utc(instant)
    return format_utc_date_string(today), date_to_seed(today)


class TestSeededRandom:
    """Test cases for the linear-congruential generator."""

    def test_first_value_for_seed_one(self):
        """One LCG step from seed 1 gives a known value."""
        random_func = seeded_random(1)
        assert random_func() == 1103527590 / 0x7FFFFFFF

    def test_same_seed_same_sequence(self):
        """Two generators with one seed produce identical streams."""
        a = seeded_random(111525)
        b = seeded_random(111525)
        assert [a() for _ in range(50)] == [b() for _ in range(50)]

    def test_different_seeds_differ(self):
        """Different seeds diverge immediately."""
        assert seeded_random(1)() != seeded_random(2)()

    def test_values_in_unit_interval(self):
        """Every value lies in [0, 1]."""
        random_func = seeded_random(987654)
        for _ in range(1000):
            value = random_func()
            assert 0 <= value <= 1

    def test_state_resumes_stream(self):
        """A generator built from another's state continues the same stream."""
        original = SeededRandom(42)
        original()
        original()
        resumed = SeededRandom(original.state)
        assert [resumed() for _ in range(10)] == [original() for _ in range(10)]

    def test_randbelow_range(self):
        """randbelow stays inside [0, n)."""
        random_func = seeded_random(7)
        assert all(0 <= random_func.randbelow(5) < 5 for _ in range(200))


class TestShuffleArray:
    """Test cases for the seeded Fisher-Yates shuffle."""

    def test_returns_permutation(self):
        """Shuffle keeps every element exactly once."""
        items = list(range(20))
        shuffled = shuffle_array(items, seeded_random(3))
        assert sorted(shuffled) == items

    def test_input_untouched(self):
        """The input list is not modified."""
        items = list(range(10))
        shuffle_array(items, seeded_random(3))
        assert items == list(range(10))

    def test_deterministic(self):
        """The same seed gives the same order."""
        items = list("ABCDEFGHIJ")
        assert shuffle_array(items, seeded_random(99)) == shuffle_array(items, seeded_random(99))

    def test_empty_and_single(self):
        """Trivial inputs come back unchanged."""
        assert shuffle_array([], seeded_random(1)) == []
        assert shuffle_array(["A"], seeded_random(1)) == ["A"]


class TestDateToSeed:
    """Test cases for the MMDDYY seed format."""

    @pytest.mark.parametrize("day,expected", [
        (date(2025, 1, 15), 111525),
        (date(2025, 12, 15), 221525),
        (date(2025, 1, 5), 110525),
        (date(2024, 12, 31), 223124),
    ])
    def test_known_seeds(self, day, expected):
        """Seeds are MMDDYY plus 100000."""
        assert date_to_seed(day) == expected

    def test_always_six_digits(self):
        """Every day of a year maps to a six-digit seed."""
        for ordinal in range(date(2025, 1, 1).toordinal(), date(2026, 1, 1).toordinal()):
            seed = date_to_seed(date.fromordinal(ordinal))
            assert 100000 <= seed <= 999999

    def test_datetime_uses_utc_fields(self):
        """Aware datetimes are read in UTC."""
        assert date_to_seed(utc(2025, 1, 15, 23, 0)) == 111525


class TestFormatUtcDateString:
    """Test cases for YYYY-MM-DD formatting."""

    def test_zero_padded(self):
        """Month and day are zero padded."""
        assert format_utc_date_string(utc(2025, 1, 5)) == "2025-01-05"

    def test_naive_datetime_treated_as_utc(self):
        """Naive datetimes are read as UTC."""
        assert format_utc_date_string(datetime(2025, 3, 9, 23, 30)) == "2025-03-09"

    def test_date_object(self):
        """Plain dates format directly."""
        assert format_utc_date_string(date(2024, 2, 29)) == "2024-02-29"


class TestEasternGameDay:
    """Test cases for the daily reset at Eastern midnight."""

    def test_winter_boundary(self):
        """In standard time the day changes at 05:00 UTC."""
        assert game_day(utc(2025, 1, 15, 4, 59, 59)) == ("2025-01-14", 111425)
        assert game_day(utc(2025, 1, 15, 5, 0, 0)) == ("2025-01-15", 111525)

    def test_summer_boundary(self):
        """In daylight time the day changes at 04:00 UTC."""
        assert game_day(utc(2025, 7, 4, 3, 59, 59)) == ("2025-07-03", 170325)
        assert game_day(utc(2025, 7, 4, 4, 0, 0)) == ("2025-07-04", 170425)

    def test_same_day_throughout(self):
        """Every instant inside one Eastern day maps to the same seed."""
        instants = [utc(2025, 1, 15, 5, 0), utc(2025, 1, 15, 17, 30), utc(2025, 1, 16, 4, 59, 59)]
        assert {game_day(i) for i in instants} == {("2025-01-15", 111525)}

    def test_spring_forward(self):
        """The night clocks jump forward still resets at local midnight."""
        assert game_day(utc(2025, 3, 9, 4, 59)) == ("2025-03-08", 130825)
        assert game_day(utc(2025, 3, 9, 5, 0)) == ("2025-03-09", 130925)
        # Next midnight is already daylight time
        assert game_day(utc(2025, 3, 10, 3, 59)) == ("2025-03-09", 130925)
        assert game_day(utc(2025, 3, 10, 4, 0)) == ("2025-03-10", 131025)

    def test_fall_back(self):
        """The night clocks fall back still resets at local midnight."""
        assert game_day(utc(2025, 11, 2, 3, 59)) == ("2025-11-01", 210125)
        assert game_day(utc(2025, 11, 2, 4, 0)) == ("2025-11-02", 210225)
        assert game_day(utc(2025, 11, 3, 4, 59)) == ("2025-11-02", 210225)
        assert game_day(utc(2025, 11, 3, 5, 0)) == ("2025-11-03", 210325)

    def test_year_end(self):
        """New Year arrives at 05:00 UTC on January 1st."""
        assert game_day(utc(2025, 1, 1, 4, 59, 59)) == ("2024-12-31", 223124)
        assert game_day(utc(2025, 1, 1, 5, 0)) == ("2025-01-01", 110125)

    def test_month_end(self):
        """Month boundaries follow the Eastern calendar."""
        assert game_day(utc(2025, 5, 1, 3, 0)) == ("2025-04-30", 143025)
        assert game_day(utc(2025, 5, 1, 4, 0)) == ("2025-05-01", 150125)

    def test_leap_day(self):
        """February 29th is its own game day."""
        assert game_day(utc(2024, 2, 29, 12, 0)) == ("2024-02-29", 122924)
        assert game_day(utc(2024, 3, 1, 4, 59)) == ("2024-02-29", 122924)
        assert game_day(utc(2024, 3, 1, 5, 0)) == ("2024-03-01", 130124)

    def test_get_today_is_utc_midnight(self):
        """The game day is returned as midnight UTC."""
        today = get_today_utc(utc(2025, 1, 15, 12, 0))
        assert today == utc(2025, 1, 15)

    def test_eastern_date(self):
        """eastern_date exposes the calendar day directly."""
        assert eastern_date(utc(2025, 1, 15, 4, 0)) == date(2025, 1, 14)


class TestCasualSeed:
    """Test cases for casual-mode seeds."""

    def test_in_range(self):
        """Casual seeds are six digits."""
        rng = random.Random(0)
        assert all(100000 <= random_casual_seed(rng) <= 999999 for _ in range(100))

    def test_reproducible_with_rng(self):
        """A seeded random.Random gives reproducible casual seeds."""
        assert random_casual_seed(random.Random(5)) == random_casual_seed(random.Random(5))
