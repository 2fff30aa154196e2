"""Conversions between wall-clock values and integer minutes."""
from __future__ import annotations

from datetime import time, timedelta

MINUTES_PER_DAY = 1440


def to_minutes(value: int | timedelta | time) -> int:
    """Convert a minute count, duration, or time of day into integer minutes.

    Durations are floored to whole minutes, so ``timedelta(seconds=-30)`` is
    ``-1``. A ``time`` counts minutes since midnight; seconds are dropped.
    """
    if isinstance(value, bool):
        raise TypeError("expected minutes, timedelta or time, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, timedelta):
        return (value.days * 86400 + value.seconds) // 60
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    raise TypeError(
        f"expected minutes, timedelta or time, got {type(value).__name__}"
    )


def parse_time_of_day(text: str) -> int:
    """Parse ``"HH:MM"`` into minutes since midnight."""
    hours, sep, minutes = text.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        raise ValueError(f"time of day must look like HH:MM, got {text!r}")
    h, m = int(hours), int(minutes)
    if h > 23 or m > 59:
        raise ValueError(f"time of day out of range: {text!r}")
    return h * 60 + m


def time_of_day(minutes: int) -> time:
    """Fold an absolute minute count into a time within one day."""
    folded = minutes % MINUTES_PER_DAY
    return time(hour=folded // 60, minute=folded % 60)
