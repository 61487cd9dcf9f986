"""
Single-threaded task scheduler for the simulation.

SimulationClock keeps its own notion of "now" in milliseconds. Tests and
headless runs move it forward explicitly with advance()/advance_to(); an
interactive host calls run_realtime() which follows a wall clock. Either way
callbacks run one at a time, to completion, in due-time order.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

TaskCallback = Callable[[float], None]

# Wall-clock rounding slack when following a realtime source
REALTIME_EPSILON_MS = 1e-6


class ScheduledTask:
    """A pending callback. period is None for one-shot tasks."""

    def __init__(self, name: str, callback: TaskCallback, due: float, period: Optional[float]):
        self.name = name
        self.callback = callback
        self.due = due
        self.period = period
        self.cancelled = False
        self.fired = 0

    @property
    def periodic(self) -> bool:
        return self.period is not None

    def __repr__(self):
        kind = f"every {self.period}ms" if self.periodic else "once"
        return f"<ScheduledTask {self.name} {kind} due={self.due}>"


class SimulationClock:
    """
    Cooperative scheduler with named periodic tasks and one-shot timers.

    Periodic tasks are fixed-rate: each firing is due exactly one period after
    the previous due time. Changing a period is cancel-and-restart through
    reschedule(), so a partially elapsed wait is thrown away.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: List[tuple] = []
        self._sequence = itertools.count()
        self._named: Dict[str, ScheduledTask] = {}
        self._oneshot_ids = itertools.count(1)

    @property
    def now(self) -> float:
        return self._now

    def _push(self, task: ScheduledTask) -> None:
        heapq.heappush(self._queue, (task.due, next(self._sequence), task))

    def schedule_periodic(self, name: str, period: float, callback: TaskCallback) -> ScheduledTask:
        """Run callback every period ms, replacing any task already named name."""
        if period <= 0:
            raise ValueError(f"Task '{name}' needs a positive period, got {period}.")
        self.cancel(name)
        task = ScheduledTask(name, callback, self._now + period, period)
        self._named[name] = task
        self._push(task)
        logger.debug("Scheduled %s every %sms", name, period)
        return task

    def schedule_once(
        self,
        delay: float,
        callback: TaskCallback,
        name: Optional[str] = None
    ) -> ScheduledTask:
        """
        Run callback once after delay ms.

        Unnamed one-shots never replace each other; two timers started back
        to back both fire.
        """
        if delay < 0:
            raise ValueError(f"Delay must not be negative, got {delay}.")
        if name is None:
            name = f"once-{next(self._oneshot_ids)}"
        else:
            self.cancel(name)
        task = ScheduledTask(name, callback, self._now + delay, None)
        self._named[name] = task
        self._push(task)
        return task

    def reschedule(self, name: str, period: float) -> ScheduledTask:
        """Restart a periodic task with a new period, counted from now."""
        task = self._named.get(name)
        if task is None or not task.periodic:
            raise ValueError(f"No periodic task named '{name}' to reschedule.")
        logger.debug("Rescheduling %s: %sms -> %sms", name, task.period, period)
        return self.schedule_periodic(name, period, task.callback)

    def cancel(self, name: str) -> bool:
        task = self._named.pop(name, None)
        if task is None:
            return False
        task.cancelled = True
        return True

    def cancel_all(self) -> None:
        for task in self._named.values():
            task.cancelled = True
        self._named.clear()
        self._queue.clear()

    def is_scheduled(self, name: str) -> bool:
        return name in self._named

    def period_of(self, name: str) -> Optional[float]:
        task = self._named.get(name)
        return task.period if task is not None else None

    def pending(self) -> List[str]:
        return sorted(self._named)

    def next_due(self) -> Optional[float]:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

    def advance_to(self, target: float) -> int:
        """Run every task due at or before target. Returns the number fired."""
        if target < self._now:
            raise ValueError(f"Cannot move the clock backwards ({target} < {self._now}).")

        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            _, _, task = heapq.heappop(self._queue)
            self._now = due

            if task.periodic:
                task.due = due + task.period
                self._push(task)
            else:
                self._named.pop(task.name, None)
                task.cancelled = True

            task.fired += 1
            fired += 1
            task.callback(due)

        self._now = target
        return fired

    def advance(self, delta: float) -> int:
        return self.advance_to(self._now + delta)

    def run_realtime(
        self,
        duration: float,
        time_source: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_frame: Optional[Callable[[float], None]] = None,
        frame_interval: float = 1000 / 60
    ) -> None:
        """
        Follow a wall clock for duration ms.

        time_source returns seconds. on_frame, if given, is called with the
        clock's now roughly every frame_interval ms, after due tasks ran.
        """
        origin_wall = time_source()
        origin = self._now
        end = origin + duration

        while self._now < end:
            elapsed = (time_source() - origin_wall) * 1000.0
            target = min(end, origin + elapsed)
            due = self.next_due()
            if due is not None and target < due <= target + REALTIME_EPSILON_MS:
                target = due
            if target >= end - REALTIME_EPSILON_MS:
                target = end
            self.advance_to(max(self._now, target))
            if on_frame is not None:
                on_frame(self._now)
            if self._now >= end:
                break

            wake = min(end, self._now + frame_interval)
            due = self.next_due()
            if due is not None:
                wake = min(wake, due)
            sleep(max(0.0, (wake - self._now) / 1000.0))

    def __repr__(self):
        return f"<SimulationClock now={self._now} tasks={self.pending()}>"
