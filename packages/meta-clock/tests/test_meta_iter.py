"""Tests for meta_clock.meta — MetaIter merge ordering and queries."""
from __future__ import annotations

from datetime import time, timedelta

import pytest
from meta_clock import EventSchedule, Meta, MetaIter, ScheduleError, ScheduleIter

A = EventSchedule(name="A", offset=0, frequency=120, length=15)
B = EventSchedule(name="B", offset=30, frequency=120, length=15)

# Start times never coincide: X is 5 mod 60, Y is 20 or 110 mod 180, Z is 50 mod 180.
X = EventSchedule(name="X", offset=5, frequency=60, length=10)
Y = EventSchedule(name="Y", offset=20, frequency=90, length=10)
Z = EventSchedule(name="Z", offset=50, frequency=180, length=30)


def _pairs(instances) -> list[tuple[str, int]]:
    return [(i.name, i.start_time) for i in instances]


class TestMergeOrder:
    def test_interleaves_from_before_midnight(self) -> None:
        it = MetaIter([A, B], -1)
        assert _pairs(it.take(4)) == [("A", 0), ("B", 30), ("A", 120), ("B", 150)]

    def test_cursor_on_a_start_skips_that_occurrence(self) -> None:
        it = MetaIter([A, B], 0)
        assert _pairs(it.take(4)) == [("B", 30), ("A", 120), ("B", 150), ("A", 240)]

    def test_cursor_follows_emitted_start(self) -> None:
        it = MetaIter([A, B], -1)
        next(it)
        assert it.cursor == 0
        next(it)
        assert it.cursor == 30

    @pytest.mark.parametrize("start", [-500, -1, 0, 7, 333, 2000])
    def test_stream_is_union_of_member_streams(self, start: int) -> None:
        merged = MetaIter([X, Y, Z], start).take(60)
        horizon = merged[-1].start_time

        expected = []
        for schedule in (X, Y, Z):
            it = ScheduleIter(schedule, start)
            while True:
                inst = next(it)
                if inst.start_time > horizon:
                    break
                expected.append(inst)
        expected.sort(key=lambda i: i.start_time)

        assert _pairs(merged) == _pairs(expected)

    @pytest.mark.parametrize("start", [-500, 0, 1000])
    def test_non_decreasing(self, start: int) -> None:
        starts = [i.start_time for i in MetaIter([Z, X, Y], start).take(200)]
        assert starts == sorted(starts)
        assert starts[0] > start

    def test_mixed_frequencies(self) -> None:
        fast = EventSchedule(name="fast", offset=10, frequency=30, length=5)
        slow = EventSchedule(name="slow", offset=25, frequency=120, length=5)
        it = MetaIter([fast, slow], 0)
        assert _pairs(it.take(6)) == [
            ("fast", 10),
            ("slow", 25),
            ("fast", 40),
            ("fast", 70),
            ("fast", 100),
            ("fast", 130),
        ]


class TestTieBreak:
    P = EventSchedule(name="P", offset=0, frequency=60, length=5)
    Q = EventSchedule(name="Q", offset=0, frequency=30, length=5)

    def test_first_listed_wins(self) -> None:
        assert next(MetaIter([self.P, self.Q], -1)).name == "P"
        assert next(MetaIter([self.Q, self.P], -1)).name == "Q"

    def test_loser_of_a_tie_moves_on(self) -> None:
        it = MetaIter([self.P, self.Q], -1)
        assert _pairs(it.take(5)) == [
            ("P", 0),
            ("Q", 30),
            ("P", 60),
            ("Q", 90),
            ("P", 120),
        ]

    def test_coinciding_starts_emitted_once(self) -> None:
        starts = [e.start_time for e in MetaIter([self.P, self.Q], -1).take(8)]
        assert starts == sorted(set(starts))
        q_only = [t for t in self.Q.iter(-1).take(8) if t.start_time % 60 == 0]
        assert q_only
        emitted = {(e.name, e.start_time) for e in MetaIter([self.P, self.Q], -1).take(8)}
        assert not any(("Q", t.start_time) in emitted for t in q_only)


class TestNow:
    def test_active_member(self) -> None:
        it = MetaIter([A, B])
        assert it.with_time(10).now().name == "A"  # type: ignore[union-attr]
        assert it.with_time(20).now() is None
        assert it.with_time(35).now().start_time == 30  # type: ignore[union-attr]
        assert it.with_time(130).now().start_time == 120  # type: ignore[union-attr]

    def test_overlap_reports_first_listed(self) -> None:
        c = EventSchedule(name="C", offset=0, frequency=60, length=40)
        d = EventSchedule(name="D", offset=20, frequency=60, length=40)
        assert MetaIter([c, d], 25).now().name == "C"  # type: ignore[union-attr]
        assert MetaIter([d, c], 25).now().name == "D"  # type: ignore[union-attr]
        assert [i.name for i in MetaIter([c, d], 25).active()] == ["C", "D"]

    def test_active_empty(self) -> None:
        assert MetaIter([A, B], 20).active() == []

    def test_now_does_not_move_cursor(self) -> None:
        it = MetaIter([A, B], 10)
        it.now()
        assert it.cursor == 10
        assert next(it).name == "B"


class TestLastAndPeek:
    def test_last_picks_latest_start(self) -> None:
        assert _pairs([MetaIter([A, B], 100).last()]) == [("B", 30)]
        assert _pairs([MetaIter([A, B], 10).last()]) == [("A", 0)]

    def test_last_negative_cursor(self) -> None:
        assert _pairs([MetaIter([A, B], -1).last()]) == [("B", -90)]

    def test_peek_matches_next(self) -> None:
        it = MetaIter([X, Y, Z], 0)
        for _ in range(10):
            peeked = it.peek()
            assert next(it) == peeked


class TestConfiguration:
    def test_with_time_overwrites_fast_forward(self) -> None:
        fresh = MetaIter([A, B]).with_time(35).now()
        moved = MetaIter([A, B]).fast_forward(timedelta(hours=5)).with_time(35).now()
        assert fresh == moved

    def test_with_time_of_day(self) -> None:
        assert MetaIter([A, B]).with_time(time(2, 0)).cursor == 120

    def test_negative_cursor_matches_one_day_later(self) -> None:
        morning = EventSchedule(name="morning", offset=60, frequency=1440, length=30)
        evening = EventSchedule(name="evening", offset=1200, frequency=1440, length=30)
        before = MetaIter([morning, evening], -1).take(4)
        after = MetaIter([morning, evening], 1439).take(4)
        assert [i.name for i in before] == [i.name for i in after]
        assert all(b.start_time - a.start_time == 1440 for a, b in zip(before, after))

    def test_from_meta(self) -> None:
        meta = Meta(name="pair", category=None, schedules=(A, B))
        it = MetaIter(meta, -1)
        assert it.name == "pair"
        assert it.schedules == (A, B)
        assert repr(it) == "MetaIter('pair', cursor=-1)"

    def test_from_iterable(self) -> None:
        it = MetaIter(s for s in (A, B))
        assert it.name is None
        assert len(it.schedules) == 2

    def test_empty_rejected(self) -> None:
        with pytest.raises(ScheduleError):
            MetaIter([])


class TestSnapshot:
    def test_round_trip(self) -> None:
        it = MetaIter([A, B], -1)
        it.take(3)
        data = it.snapshot()
        assert data == {"cursor": 120}

        restored = MetaIter([A, B])
        restored.restore(data)
        assert _pairs([next(restored)]) == [("B", 150)]

    def test_take_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            MetaIter([A]).take(-2)
