"""Core data types for recurring meta-event schedules."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta
from typing import TYPE_CHECKING, Any

from meta_clock.minutes import time_of_day, to_minutes

if TYPE_CHECKING:
    from meta_clock.meta import MetaIter
    from meta_clock.schedule import ScheduleIter


class ScheduleError(ValueError):
    """Raised when a schedule or meta violates its construction invariants."""


@dataclass(frozen=True)
class EventSchedule:
    """Immutable description of one recurring event.

    Attributes:
        name: Display label. Not unique; the same event may recur at several offsets.
        offset: Minutes after UTC 00:00 that the first occurrence of a period starts.
        frequency: Period length in minutes.
        length: Active duration of each occurrence in minutes.
    """

    name: str
    offset: int
    frequency: int
    length: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ScheduleError("EventSchedule name must be non-empty")
        for field_name in ("offset", "frequency", "length"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ScheduleError(
                    f"{self.name}: {field_name} must be whole minutes, got {value!r}"
                )
        if self.frequency <= 0:
            raise ScheduleError(
                f"{self.name}: frequency must be > 0, got {self.frequency}"
            )
        if self.length <= 0:
            raise ScheduleError(f"{self.name}: length must be > 0, got {self.length}")
        if self.offset < 0:
            raise ScheduleError(f"{self.name}: offset must be >= 0, got {self.offset}")

    @classmethod
    def from_time(
        cls, name: str, offset: time, frequency: timedelta, length: timedelta
    ) -> EventSchedule:
        """Build a schedule from wall-clock values."""
        return cls(
            name=name,
            offset=to_minutes(offset),
            frequency=to_minutes(frequency),
            length=to_minutes(length),
        )

    def iter(self, start: int | timedelta | time = 0) -> ScheduleIter:
        """Return a cursor over this schedule's occurrences."""
        from meta_clock.schedule import ScheduleIter

        return ScheduleIter(self, start)

    def __repr__(self) -> str:
        return (
            f"{self.name}: offset: {time_of_day(self.offset):%H:%M}, "
            f"freq: {self.frequency}m, len: {self.length}m"
        )


@dataclass(frozen=True)
class EventInstance:
    """A single occurrence of a schedule. Derived, never stored."""

    schedule: EventSchedule
    start_time: int  # minutes from the caller's zero point, unbounded

    @property
    def name(self) -> str:
        return self.schedule.name

    @property
    def end_time(self) -> int:
        """Exclusive end of the occurrence in minutes."""
        return self.start_time + self.schedule.length

    @property
    def start_delta(self) -> timedelta:
        return timedelta(minutes=self.start_time)

    @property
    def end_delta(self) -> timedelta:
        return timedelta(minutes=self.end_time)

    @property
    def time_of_day(self) -> time:
        """Start folded into a single day."""
        return time_of_day(self.start_time)

    def contains(self, minute: int | timedelta) -> bool:
        """True if ``minute`` falls in ``[start_time, end_time)``."""
        t = to_minutes(minute)
        return self.start_time <= t < self.end_time

    def __repr__(self) -> str:
        return f"{self.schedule!r}, start: {self.start_time}"


@dataclass(frozen=True)
class Meta:
    """A named group of schedules iterated as one merged timeline.

    ``category`` is opaque here; the catalog supplies a ``Category`` member.
    Schedule order is significant: it breaks ties between simultaneous starts.
    """

    name: str
    category: Any
    schedules: tuple[EventSchedule, ...]

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the meta stays hashable.
        object.__setattr__(self, "schedules", tuple(self.schedules))
        if not self.schedules:
            raise ScheduleError(f"Meta {self.name!r} must have at least one schedule")

    def iter(self, start: int | timedelta | time = 0) -> MetaIter:
        """Return a merged cursor over every member schedule."""
        from meta_clock.meta import MetaIter

        return MetaIter(self, start)

    def __len__(self) -> int:
        return len(self.schedules)
