"""
Tests for the simulation clock.
"""

import pytest

from snakechase.services.scheduler import SimulationClock


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, now):
        self.calls.append(now)


class TestPeriodicTasks:
    """Fixed-rate tasks."""

    def test_fires_once_per_period(self):
        """A periodic task fires once per elapsed period."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_periodic("a", 100, rec)

        fired = clock.advance(350)

        assert fired == 3
        assert rec.calls == [100, 200, 300]
        assert clock.now == 350

    def test_same_name_replaces_task(self):
        """Scheduling under an existing name replaces the task."""
        clock = SimulationClock()
        first, second = Recorder(), Recorder()
        clock.schedule_periodic("a", 100, first)
        clock.schedule_periodic("a", 100, second)
        clock.advance(100)
        assert first.calls == []
        assert second.calls == [100]

    def test_reschedule_discards_partial_wait(self):
        """reschedule() waits a full new period from now."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_periodic("a", 100, rec)
        clock.advance(50)

        clock.reschedule("a", 100)
        clock.advance_to(149)
        assert rec.calls == []

        clock.advance_to(150)
        assert rec.calls == [150]
        assert clock.period_of("a") == 100

    def test_reschedule_from_inside_the_callback(self):
        """A task may reschedule itself while running."""
        clock = SimulationClock()
        calls = []

        def speed_up(now):
            calls.append(now)
            clock.reschedule("a", 50)

        clock.schedule_periodic("a", 100, speed_up)
        clock.advance(200)
        assert calls == [100, 150, 200]

    def test_ties_run_in_scheduling_order(self):
        """Tasks due together run in the order they were scheduled."""
        clock = SimulationClock()
        order = []
        clock.schedule_periodic("first", 100, lambda now: order.append("first"))
        clock.schedule_periodic("second", 100, lambda now: order.append("second"))
        clock.advance(100)
        assert order == ["first", "second"]

    def test_invalid_period(self):
        """Non-positive periods raise ValueError."""
        clock = SimulationClock()
        with pytest.raises(ValueError):
            clock.schedule_periodic("a", 0, Recorder())

    def test_reschedule_unknown_task(self):
        """Rescheduling a missing task raises ValueError."""
        with pytest.raises(ValueError):
            SimulationClock().reschedule("missing", 100)


class TestOneShotTasks:
    """Delayed single callbacks."""

    def test_fires_once(self):
        """A one-shot fires once and is forgotten."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_once(500, rec)
        clock.advance(2000)
        assert rec.calls == [500]
        assert clock.pending() == []

    def test_unnamed_one_shots_are_independent(self):
        """Two unnamed one-shots both fire."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_once(500, rec)
        clock.advance(200)
        clock.schedule_once(500, rec)
        clock.advance(1000)
        assert rec.calls == [500, 700]

    def test_negative_delay(self):
        """Negative delays raise ValueError."""
        with pytest.raises(ValueError):
            SimulationClock().schedule_once(-1, Recorder())


class TestCancellation:
    """Stopping tasks."""

    def test_cancel(self):
        """A cancelled task never fires."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_periodic("a", 100, rec)
        assert clock.cancel("a") is True
        assert clock.cancel("a") is False
        clock.advance(500)
        assert rec.calls == []

    def test_cancel_all_stops_everything(self):
        """cancel_all() clears periodic and one-shot tasks."""
        clock = SimulationClock()
        rec = Recorder()
        clock.schedule_periodic("a", 100, rec)
        clock.schedule_once(50, rec)
        clock.cancel_all()

        assert clock.advance(1000) == 0
        assert clock.next_due() is None
        assert not clock.is_scheduled("a")

    def test_cancel_all_from_inside_a_callback(self):
        """cancel_all() inside a callback stops later tasks."""
        clock = SimulationClock()
        rec = Recorder()

        def stop(now):
            clock.cancel_all()

        clock.schedule_periodic("stop", 100, stop)
        clock.schedule_periodic("other", 100, rec)
        clock.advance(1000)
        assert rec.calls == []

    def test_clock_cannot_go_backwards(self):
        """advance_to() rejects earlier times."""
        clock = SimulationClock(start=100)
        with pytest.raises(ValueError):
            clock.advance_to(50)


class TestRealtime:
    """Following a wall clock."""

    def test_run_realtime_with_fake_wall_clock(self):
        """run_realtime() follows the wall clock and fires tasks on time."""
        wall = {"t": 0.0}
        clock = SimulationClock()
        rec = Recorder()
        frames = []
        clock.schedule_periodic("a", 100, rec)

        def sleep(seconds):
            wall["t"] += seconds

        clock.run_realtime(
            300,
            time_source=lambda: wall["t"],
            sleep=sleep,
            on_frame=frames.append,
            frame_interval=50
        )

        assert rec.calls == [100, 200, 300]
        assert clock.now == 300
        assert frames[-1] == 300
        assert len(frames) >= 6
