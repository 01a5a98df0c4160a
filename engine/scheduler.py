"""
scheduler.py — Cooperative Tick Scheduler
==========================================
Everything time-sliced in the visualizer (row-by-row grid construction,
paced playback) runs on this object.  Nothing here starts a thread or
sleeps: the host calls `run_pending()` ("a pump") from its own loop.  In
the web app that is every /api/tick request, in tests it is the test
itself after advancing a `ManualClock`.

Two suspension mechanisms:
    call_soon(fn)            →  deferred continuation, runs on the NEXT pump
    call_every(interval, fn) →  periodic timer, fires once per elapsed interval

Both return a TimerHandle; `handle.cancel()` tears either down, even from
inside its own callback.

Thread safety:
  NOT thread-safe.  The host must pump from a single thread.
"""

import logging
import time
from collections import deque
from typing import Callable, Deque, List, Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Clocks
# ---------------------------------------------------------------------------
class ManualClock:
    """Deterministic virtual clock.  Time only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now: float = start

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("cannot move a clock backwards")
        self.now += seconds

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------
class TimerHandle:
    """
    Attributes:
        callback  : the scheduled function
        interval  : seconds between firings (None for a one-shot call_soon)
        due       : scheduler time of the next firing
    """

    __slots__ = ("callback", "interval", "due", "_cancelled")

    def __init__(self, callback: Callable[[], None], interval: Optional[float], due: float):
        self.callback:   Callable[[], None] = callback
        self.interval:   Optional[float]    = interval
        self.due:        float              = due
        self._cancelled: bool               = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        kind = "every %.4fs" % self.interval if self.interval else "soon"
        state = " cancelled" if self._cancelled else ""
        return f"<TimerHandle {kind}{state}>"


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------
class Scheduler:

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock:  Callable[[], float] = clock
        self._ready:  Deque[TimerHandle]  = deque()
        self._timers: List[TimerHandle]   = []

    def now(self) -> float:
        return self._clock()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def call_soon(self, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback, None, self.now())
        self._ready.append(handle)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(callback, interval, self.now() + interval)
        self._timers.append(handle)
        logger.debug("scheduler: periodic timer every %.4fs", interval)
        return handle

    # ------------------------------------------------------------------
    # Pump  (call this from your event loop / request handler)
    # ------------------------------------------------------------------
    def run_pending(self) -> int:
        """
        Run one round of work and return how many callbacks fired.

        Continuations queued *during* this pump wait for the next one, so
        a chain of call_soon steps advances exactly one link per pump.
        Periodic timers catch up on every interval that elapsed since
        their last firing, re-checking cancellation before each call.
        """
        fired = 0

        for _ in range(len(self._ready)):
            handle = self._ready.popleft()
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1

        now = self.now()
        for timer in list(self._timers):
            while not timer.cancelled and timer.due <= now:
                timer.due += timer.interval
                timer.callback()
                fired += 1

        self._timers = [t for t in self._timers if not t.cancelled]
        return fired

    @property
    def has_pending(self) -> bool:
        return any(not h.cancelled for h in self._ready) or \
               any(not t.cancelled for t in self._timers)
