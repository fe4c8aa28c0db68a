"""
scheduler.py — Cooperative Timer Scheduler
===========================================
The Player never sleeps.  It asks a scheduler to call it back after N
milliseconds and gets a TimerHandle it can cancel.

PolledScheduler is single-threaded: nothing fires until the host calls
pump() (from its event loop, a request handler, or a test).  pump() fires
every due callback in deadline order.  While a callback runs, "now" is that
callback's own deadline, so a tick that re-schedules itself lands exactly
one delay later even when the host polled late: a late poll catches up
tick by tick instead of collapsing them into one.

Cancellation is synchronous: once cancel() returns, the callback will not
run, even if its deadline has already passed.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """
    Attributes:
        deadline  : Clock time (seconds) at which the callback becomes due.
        callback  : Zero-arg callable.
        cancelled : True once cancel() was called or the callback fired.
    """

    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline:  float              = deadline
        self.callback:  Callable[[], None] = callback
        self.cancelled: bool               = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(deadline={self.deadline:.3f}, {state})"


class PolledScheduler:
    """
    Attributes:
        clock : Zero-arg callable returning seconds (time.monotonic by default;
                tests inject a fake).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock:    Callable[[], float]                    = clock
        self._heap:    List[Tuple[float, int, TimerHandle]]   = []
        self._counter                                         = itertools.count()
        self._firing_at: Optional[float]                      = None

    def now(self) -> float:
        if self._firing_at is not None:
            return self._firing_at
        return self.clock()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now() + delay_ms / 1000.0, callback)
        heapq.heappush(self._heap, (handle.deadline, next(self._counter), handle))
        return handle

    def pump(self) -> int:
        """Fire every callback whose deadline has passed.  Returns how many ran."""
        fired = 0
        limit = self.clock()
        while self._heap and self._heap[0][0] <= limit:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.cancelled = True
            self._firing_at = handle.deadline
            try:
                handle.callback()
            finally:
                self._firing_at = None
            fired += 1
        if fired:
            logger.debug("Pumped %d timer callback(s)", fired)
        return fired

    @property
    def pending(self) -> int:
        """Number of live (not cancelled, not fired) timers."""
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def next_deadline(self) -> Optional[float]:
        live = [h.deadline for _, _, h in self._heap if not h.cancelled]
        return min(live) if live else None
