"""ScheduleIter: cursor over the occurrences of a single EventSchedule.

All arithmetic is in integer minutes with floor division, so a cursor before
the zero point resolves into the previous period instead of truncating toward
zero.
"""
from __future__ import annotations

from datetime import time, timedelta
from typing import Any

from meta_clock.minutes import to_minutes
from meta_clock.types import EventInstance, EventSchedule


def _split(schedule: EventSchedule, cursor: int) -> tuple[int, int]:
    """Return (period_base, time_in_period) for a cursor."""
    period_index = cursor // schedule.frequency
    base = period_index * schedule.frequency
    return base, cursor - base


def next_start(schedule: EventSchedule, cursor: int) -> int:
    """Start of the first occurrence strictly after the cursor's position.

    Landing exactly on an occurrence start moves to the following period, so
    repeated application walks forward one occurrence at a time.
    """
    base, in_period = _split(schedule, cursor)
    if in_period < schedule.offset:
        return base + schedule.offset
    return base + schedule.offset + schedule.frequency


def active_start(schedule: EventSchedule, cursor: int) -> int | None:
    """Start of the occurrence covering ``cursor``, or None."""
    base, in_period = _split(schedule, cursor)
    if schedule.offset <= in_period < schedule.offset + schedule.length:
        return base + schedule.offset
    return None


def last_start(schedule: EventSchedule, cursor: int) -> int:
    """Start of the most recent occurrence at or before ``cursor``."""
    base, in_period = _split(schedule, cursor)
    if in_period >= schedule.offset:
        return base + schedule.offset
    return base + schedule.offset - schedule.frequency


class ScheduleIter:
    """Infinite iterator over one schedule's occurrences.

    The cursor is the only mutable state. ``next()`` moves it to the start of
    the occurrence it returns; ``now()`` and ``last()`` only read it.
    """

    def __init__(
        self, schedule: EventSchedule, start: int | timedelta | time = 0
    ) -> None:
        self._schedule = schedule
        self._cursor = to_minutes(start)

    @property
    def schedule(self) -> EventSchedule:
        return self._schedule

    @property
    def cursor(self) -> int:
        return self._cursor

    # --- Configuration ---

    def with_time(self, time_of_day: int | time) -> ScheduleIter:
        """Move the cursor to a time of day, discarding prior advancement."""
        self._cursor = to_minutes(time_of_day)
        return self

    def fast_forward(self, amount: int | timedelta) -> ScheduleIter:
        """Move the cursor by a relative amount. Negative amounts rewind."""
        self._cursor += to_minutes(amount)
        return self

    # --- Queries ---

    def now(self) -> EventInstance | None:
        """The occurrence active at the cursor, if any."""
        start = active_start(self._schedule, self._cursor)
        if start is None:
            return None
        return EventInstance(schedule=self._schedule, start_time=start)

    def last(self) -> EventInstance:
        """The most recent occurrence starting at or before the cursor."""
        return EventInstance(
            schedule=self._schedule,
            start_time=last_start(self._schedule, self._cursor),
        )

    def peek(self) -> EventInstance:
        """What ``next()`` would return, without moving the cursor."""
        return EventInstance(
            schedule=self._schedule,
            start_time=next_start(self._schedule, self._cursor),
        )

    # --- Iteration ---

    def __iter__(self) -> ScheduleIter:
        return self

    def __next__(self) -> EventInstance:
        instance = self.peek()
        self._cursor = instance.start_time
        return instance

    def take(self, n: int) -> list[EventInstance]:
        """Pull the next ``n`` occurrences."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return [next(self) for _ in range(n)]

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        """Serialize the cursor (the schedule is configuration, not state)."""
        return {"cursor": self._cursor}

    def restore(self, data: dict[str, Any]) -> None:
        self._cursor = int(data["cursor"])

    def __repr__(self) -> str:
        return f"ScheduleIter({self._schedule!r}, cursor={self._cursor})"
