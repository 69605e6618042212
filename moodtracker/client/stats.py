"""
stats.py: Gamification stats derived from a user's mood history.

Points count entries, the streak counts distinct local calendar days. Two
entries on the same day are worth 20 points but only one day of streak.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, NamedTuple

from moodtracker.dates import parse_timestamp

POINTS_PER_ENTRY = 10


class MoodStats(NamedTuple):
    total_points: int
    current_streak: int


def _local_day(value) -> date:
    """Calendar day of a timestamp in local time, time-of-day dropped."""
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        # naive values are UTC, as stored by the server
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone().date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Unsupported date value: {value!r}")


def _entry_date(entry):
    if isinstance(entry, dict):
        return entry["date"]
    return entry.date


def total_points(entries) -> int:
    return len(entries) * POINTS_PER_ENTRY


def current_streak(dates: Iterable, today: date | None = None) -> int:
    """Count backward consecutive days. 1 day grace period for today."""
    days = {_local_day(d) for d in dates}
    if not days:
        return 0

    cursor = today or date.today()
    if cursor not in days:
        # user doesn't lose the streak if they haven't logged TODAY yet
        cursor -= timedelta(days=1)
        if cursor not in days:
            return 0

    streak = 1
    while cursor - timedelta(days=1) in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def derive_stats(entries, today: date | None = None) -> MoodStats:
    entries = list(entries)
    return MoodStats(
        total_points=total_points(entries),
        current_streak=current_streak((_entry_date(e) for e in entries), today=today),
    )
