"""
Date and seed mapping for daily puzzles.

The puzzle day is the US Eastern calendar day, so the daily reset happens at
Eastern midnight: 05:00 UTC in standard time, 04:00 UTC in daylight time.
"""

import random
from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from .constants import MAX_SEED, MIN_SEED


EASTERN = ZoneInfo("America/New_York")

# Added to MMDDYY so every daily seed has six digits
DAILY_SEED_OFFSET = 100000


def _as_utc(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def eastern_date(instant: Optional[datetime] = None) -> date:
    """Eastern calendar day containing ``instant`` (defaults to now)."""
    if instant is None:
        instant = datetime.now(timezone.utc)
    return _as_utc(instant).astimezone(EASTERN).date()


def get_today_utc(now: Optional[datetime] = None) -> datetime:
    """
    Current game day as a UTC datetime.

    Returns midnight UTC of the Eastern calendar day containing ``now``, so its
    UTC calendar fields name the game day and can be handed straight to
    ``format_utc_date_string`` and ``date_to_seed``.
    """
    day = eastern_date(now)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def format_utc_date_string(instant: Union[datetime, date]) -> str:
    """Format the UTC calendar fields of ``instant`` as YYYY-MM-DD."""
    if isinstance(instant, datetime):
        instant = _as_utc(instant)
    return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"


def date_to_seed(instant: Union[datetime, date]) -> int:
    """
    Six-digit seed for a calendar day: MMDDYY read as an integer plus 100000.

    Datetimes contribute their UTC calendar fields.

    >>> date_to_seed(date(2025, 1, 15))
    111525
    """
    if isinstance(instant, datetime):
        instant = _as_utc(instant)
    digits = f"{instant.month:02d}{instant.day:02d}{instant.year % 100:02d}"
    return int(digits) + DAILY_SEED_OFFSET


def random_casual_seed(rng: Optional[random.Random] = None) -> int:
    """Independent seed for a casual game, uniform over [100000, 999999]."""
    rng = rng or random.Random()
    return rng.randint(MIN_SEED, MAX_SEED)
