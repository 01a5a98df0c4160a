"""
recorder.py — Operation Recorder & Run Statistics
==================================================
Captures the node-status changes a finder reports during one synchronous
search, as an ordered, replayable log.

Usage:
    rec = OperationRecorder()
    rec.begin()
    path = finder(sx, sy, ex, ey, grid.clone(), rec.record)   # fills the log
    while rec.pending:
        op = rec.pop()                                         # oldest first

The recorder does not filter or de-duplicate: that is the playback's job.
There is exactly one producer (the search) and one consumer (the playback)
per log.  `begin()` refuses to start a new run on top of unconsumed
entries, so two traces can never interleave.
"""

import logging
from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Deque, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Operation: one recorded node-status change
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Operation:
    x:     int
    y:     int
    kind:  str          # "opened" | "closed" | "parent" | …
    value: Any = True


# ---------------------------------------------------------------------------
# Statistics: what the stats panel renders once playback finishes
# ---------------------------------------------------------------------------
@dataclass
class SearchStatistics:
    finder:           str   = ""
    path_length:      int   = 0          # number of moves on the path
    path_found:       bool  = False
    elapsed_time_ms:  float = 0.0        # wall-clock time of the finder call
    operation_count:  int   = 0          # operations recorded during the run

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class OperationRecorder:
    """
    Attributes:
        total      : Operations recorded since the last begin().
        statistics : Statistics of the last completed search (or None).
        path       : Path returned by the last search.
    """

    def __init__(self):
        self._log:       Deque[Operation]           = deque()
        self.total:      int                        = 0
        self.statistics: Optional[SearchStatistics] = None
        self.path:       List[Tuple[int, int]]      = []

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------
    def begin(self) -> None:
        """Start a new log.  The previous one must be fully consumed or discarded."""
        if self._log:
            raise RuntimeError(
                f"{len(self._log)} operations from the previous search are still "
                f"pending; discard() them before starting a new one"
            )
        self.total      = 0
        self.statistics = None
        self.path       = []

    def record(self, x: int, y: int, kind: str, value: Any = True) -> None:
        """The finder's on_node callback."""
        self._log.append(Operation(x, y, kind, value))
        self.total += 1

    def finish(self, path: List[Tuple[int, int]], statistics: SearchStatistics) -> None:
        self.path       = list(path)
        self.statistics = statistics
        logger.info(
            "search finished: finder=%s path_length=%d operations=%d time=%.2fms",
            statistics.finder, statistics.path_length,
            statistics.operation_count, statistics.elapsed_time_ms,
        )

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------
    def pop(self) -> Optional[Operation]:
        """Remove and return the oldest unconsumed operation, or None."""
        if not self._log:
            return None
        return self._log.popleft()

    def discard(self) -> int:
        """Drop every unconsumed operation.  Returns how many were dropped."""
        dropped = len(self._log)
        self._log.clear()
        if dropped:
            logger.debug("recorder: discarded %d pending operations", dropped)
        return dropped

    @property
    def pending(self) -> int:
        return len(self._log)

    def __len__(self) -> int:
        return len(self._log)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "statistics": self.statistics.to_dict() if self.statistics else {},
            "path":       [list(p) for p in self.path],
            "total":      self.total,
            "pending": [
                {"x": op.x, "y": op.y, "kind": op.kind, "value": _jsonable(op.value)}
                for op in self._log
            ],
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value
