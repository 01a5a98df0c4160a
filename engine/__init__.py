"""
engine/
-------
Scheduling, recording & playback layer.

    from engine import Scheduler, OperationRecorder, Playback, GridBuilder
"""

from engine.scheduler import Scheduler, ManualClock, TimerHandle
from engine.recorder  import Operation, OperationRecorder, SearchStatistics
from engine.playback  import Playback, PlaybackState, SPEED_PRESETS, SUPPORTED_OPERATIONS
from engine.builder   import GridBuilder

__all__ = [
    "Scheduler",
    "ManualClock",
    "TimerHandle",
    "Operation",
    "OperationRecorder",
    "SearchStatistics",
    "Playback",
    "PlaybackState",
    "SPEED_PRESETS",
    "SUPPORTED_OPERATIONS",
    "GridBuilder",
]
