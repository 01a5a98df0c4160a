"""
playback.py — Paced Operation Playback
=======================================
Drains a recorded operation log at a fixed rate (operations per second),
one visible operation per tick, independent of how long the search itself
took.  The search has already finished by the time playback starts.

State machine:
    IDLE     →  start()   →  PLAYING
    PLAYING  →  pause()   →  PAUSED      (timer torn down, log kept)
    PAUSED   →  resume()  →  PLAYING     (new timer, same log)
    PLAYING  →  (log exhausted) → FINISHED
    any      →  stop()    →  IDLE        (timer torn down, log discarded)

Every path out of PLAYING cancels the timer handle, so no orphaned
periodic callback can keep mutating a log that was thrown away.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Union

from engine.recorder  import Operation, OperationRecorder
from engine.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (operations per second)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   30,     # teaching mode
    "medium": 100,
    "fast":   300,    # default
    "turbo":  1000,
}

# operation kinds the presentation layer knows how to draw
SUPPORTED_OPERATIONS = ("opened", "closed")


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
class Playback:
    """
    Attributes:
        state                 : Current PlaybackState.
        operations_per_second : Replay rate.
        applied               : Operations applied since the last start().
        on_apply              : callback(Operation): draws one operation.
        on_exhausted          : callback(): fired once when the log runs dry.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        recorder: OperationRecorder,
        on_apply: Callable[[Operation], None],
        on_exhausted: Optional[Callable[[], None]] = None,
        operations_per_second: float = SPEED_PRESETS["fast"],
    ):
        self._scheduler:  Scheduler             = scheduler
        self._recorder:   OperationRecorder     = recorder
        self._timer:      Optional[TimerHandle] = None
        self.on_apply:    Callable[[Operation], None]  = on_apply
        self.on_exhausted: Optional[Callable[[], None]] = on_exhausted
        self.state:       PlaybackState         = PlaybackState.IDLE
        self.applied:     int                   = 0
        self.operations_per_second: float       = 0
        self.set_speed(operations_per_second)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin draining the recorder's current log from the top."""
        self._cancel_timer()
        self.applied = 0
        self.state   = PlaybackState.PLAYING
        self._schedule()
        logger.debug("playback: started, %d operations queued", self._recorder.pending)

    def pause(self) -> None:
        if self.state != PlaybackState.PLAYING:
            return
        self._cancel_timer()
        self.state = PlaybackState.PAUSED
        logger.debug("playback: paused after %d operations", self.applied)

    def resume(self) -> None:
        if self.state != PlaybackState.PAUSED:
            return
        self.state = PlaybackState.PLAYING
        self._schedule()
        logger.debug("playback: resumed, %d operations left", self._recorder.pending)

    def stop(self) -> None:
        """Tear the timer down and throw the remaining log away."""
        self._cancel_timer()
        self._recorder.discard()
        self.state = PlaybackState.IDLE

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: Union[str, float]) -> None:
        """Preset name or a positive operations-per-second value."""
        if isinstance(speed, str):
            if speed not in SPEED_PRESETS:
                raise ValueError(f"Unknown speed preset: {speed}")
            speed = SPEED_PRESETS[speed]
        if speed <= 0:
            raise ValueError(f"operations_per_second must be positive, got {speed}")
        self.operations_per_second = speed
        if self.state == PlaybackState.PLAYING:
            self._cancel_timer()
            self._schedule()

    @property
    def interval(self) -> float:
        return 1.0 / self.operations_per_second

    # ------------------------------------------------------------------
    # Tick  (fired by the scheduler timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Apply the next visible operation.  Unsupported kinds are skipped
        within the same tick.  Returns False once the log is exhausted.
        """
        if self.state != PlaybackState.PLAYING:
            return False

        while True:
            op = self._recorder.pop()
            if op is None:
                self._cancel_timer()
                self.state = PlaybackState.FINISHED
                logger.debug("playback: exhausted after %d operations", self.applied)
                if self.on_exhausted:
                    self.on_exhausted()
                return False
            if op.kind in SUPPORTED_OPERATIONS:
                break

        self.on_apply(op)
        self.applied += 1
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def remaining(self) -> int:
        return self._recorder.pending

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        self._timer = self._scheduler.call_every(self.interval, self.tick)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
