"""Clock abstraction and a single-threaded timer queue.

Core logic never reads real time directly: hosts pass ``RealClock`` and tests
pass a fake clock they advance by hand. Scheduled callbacks only run inside
``EventScheduler.run_due``, one at a time and in due-time order, so handlers
always run to completion before the next one starts.
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction."""

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class TimerHandle:
    """Cancellation token for one scheduled callback."""

    __slots__ = ("_due_s", "_callback", "_cancelled", "_fired")

    def __init__(self, due_s: float, callback: Callable[[float], None]) -> None:
        self._due_s = float(due_s)
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def due_s(self) -> float:
        return self._due_s

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True


class EventScheduler:
    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    @property
    def clock(self) -> Clock:
        return self._clock

    def call_at(self, due_s: float, callback: Callable[[float], None]) -> TimerHandle:
        """Schedule ``callback(due_s)`` for an absolute clock time."""

        handle = TimerHandle(due_s, callback)
        heapq.heappush(self._queue, (handle.due_s, next(self._seq), handle))
        return handle

    def call_later(self, delay_s: float, callback: Callable[[float], None]) -> TimerHandle:
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        return self.call_at(self._clock.now() + float(delay_s), callback)

    def pending_count(self) -> int:
        return sum(1 for _, _, h in self._queue if h.pending)

    def run_due(self) -> int:
        """Run every callback due at or before ``clock.now()``; return how many ran.

        Callbacks receive their scheduled due time, so a periodic timer that
        reschedules itself from it catches up after a long frame. Callbacks
        scheduled while draining run in the same call if they are already due.
        """

        now = self._clock.now()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            due_s, _, handle = heapq.heappop(self._queue)
            if not handle.pending:
                continue
            handle._fired = True
            handle._callback(due_s)
            ran += 1
        return ran

    def cancel_all(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
