"""Occurrence math for recurring events on a fixed 24-hour cycle."""
from meta_clock.meta import MetaIter
from meta_clock.minutes import MINUTES_PER_DAY, parse_time_of_day, to_minutes
from meta_clock.schedule import ScheduleIter
from meta_clock.types import EventInstance, EventSchedule, Meta, ScheduleError

__all__ = [
    "EventSchedule",
    "EventInstance",
    "Meta",
    "ScheduleError",
    "ScheduleIter",
    "MetaIter",
    "MINUTES_PER_DAY",
    "parse_time_of_day",
    "to_minutes",
]
