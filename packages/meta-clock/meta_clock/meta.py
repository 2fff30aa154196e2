"""MetaIter: one time-ordered stream over every schedule in a meta."""
from __future__ import annotations

from datetime import time, timedelta
from typing import Any, Iterable

from meta_clock.minutes import to_minutes
from meta_clock.schedule import active_start, last_start, next_start
from meta_clock.types import EventInstance, EventSchedule, Meta, ScheduleError


class MetaIter:
    """Merged iterator over a group of schedules sharing a single cursor.

    Each ``next()`` evaluates every member from the shared cursor and emits the
    soonest occurrence; the earliest-listed schedule wins exact ties. The
    cursor then sits on the emitted start, so the winner moves on to its next
    period while the others keep their pending occurrence. The result is a
    non-decreasing stream with no duplicates and no gaps, for members whose
    starts never coincide. Of two members starting at the same instant only the
    first-listed is emitted for that instant.
    """

    def __init__(
        self,
        meta: Meta | Iterable[EventSchedule],
        start: int | timedelta | time = 0,
    ) -> None:
        if isinstance(meta, Meta):
            self._name: str | None = meta.name
            self._schedules = meta.schedules
        else:
            self._name = None
            self._schedules = tuple(meta)
        if not self._schedules:
            raise ScheduleError("MetaIter needs at least one schedule")
        self._cursor = to_minutes(start)

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def schedules(self) -> tuple[EventSchedule, ...]:
        return self._schedules

    @property
    def cursor(self) -> int:
        return self._cursor

    # --- Configuration ---

    def with_time(self, time_of_day: int | time) -> MetaIter:
        """Move the shared cursor to a time of day, discarding prior advancement."""
        self._cursor = to_minutes(time_of_day)
        return self

    def fast_forward(self, amount: int | timedelta) -> MetaIter:
        """Move the shared cursor by a relative amount."""
        self._cursor += to_minutes(amount)
        return self

    # --- Queries ---

    def now(self) -> EventInstance | None:
        """First member, in list order, with an occurrence covering the cursor."""
        for schedule in self._schedules:
            start = active_start(schedule, self._cursor)
            if start is not None:
                return EventInstance(schedule=schedule, start_time=start)
        return None

    def active(self) -> list[EventInstance]:
        """Every member occurrence covering the cursor, in list order."""
        found = []
        for schedule in self._schedules:
            start = active_start(schedule, self._cursor)
            if start is not None:
                found.append(EventInstance(schedule=schedule, start_time=start))
        return found

    def last(self) -> EventInstance:
        """Latest occurrence starting at or before the cursor across all members."""
        # max() keeps the first of equal keys, matching the tie-break of next().
        schedule, start = max(
            ((s, last_start(s, self._cursor)) for s in self._schedules),
            key=lambda pair: pair[1],
        )
        return EventInstance(schedule=schedule, start_time=start)

    def peek(self) -> EventInstance:
        """What ``next()`` would return, without moving the cursor."""
        # min() keeps the first of equal keys, so list order breaks ties.
        schedule, start = min(
            ((s, next_start(s, self._cursor)) for s in self._schedules),
            key=lambda pair: pair[1],
        )
        return EventInstance(schedule=schedule, start_time=start)

    # --- Iteration ---

    def __iter__(self) -> MetaIter:
        return self

    def __next__(self) -> EventInstance:
        instance = self.peek()
        self._cursor = instance.start_time
        return instance

    def take(self, n: int) -> list[EventInstance]:
        """Pull the next ``n`` occurrences across the whole meta."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return [next(self) for _ in range(n)]

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        return {"cursor": self._cursor}

    def restore(self, data: dict[str, Any]) -> None:
        self._cursor = int(data["cursor"])

    def __repr__(self) -> str:
        label = self._name if self._name is not None else f"{len(self._schedules)} schedules"
        return f"MetaIter({label!r}, cursor={self._cursor})"
