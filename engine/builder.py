"""
builder.py — Row-by-Row Grid Construction
==========================================
Building the visual cells of a large grid in one go freezes the host for a
noticeable moment.  The builder splits the job into one task per row and
yields control back to the scheduler between rows:

    pump 1: row 0, progress 1/R
    pump 2: row 1, progress 2/R
    …
    pump R: row R-1, progress R/R, on_complete()

Rows are built strictly in ascending order, and `on_complete` fires exactly
once, after the last row.  `cancel()` stops the sequence between rows;
a cancelled build never calls `on_complete`.
"""

import logging
from typing import Callable, Iterator, Optional

from engine.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class GridBuilder:
    """
    Attributes:
        num_rows     : total number of row tasks
        rows_built   : how many row tasks have completed
        build_row    : callback(row_index): constructs one row
        on_progress  : callback(fraction): after every row
        on_complete  : callback(): once, after the last row
    """

    def __init__(
        self,
        scheduler: Scheduler,
        num_rows: int,
        build_row: Callable[[int], None],
        on_progress: Optional[Callable[[float], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ):
        self._scheduler:  Scheduler             = scheduler
        self._handle:     Optional[TimerHandle] = None
        self._tasks:      Optional[Iterator[int]] = None
        self.num_rows:    int                   = num_rows
        self.rows_built:  int                   = 0
        self.build_row    = build_row
        self.on_progress  = on_progress
        self.on_complete  = on_complete
        self.done:        bool                  = False
        self.cancelled:   bool                  = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._tasks is not None:
            raise RuntimeError("GridBuilder.start() called twice")
        self._tasks  = self._row_tasks()
        self._handle = self._scheduler.call_soon(self._step)

    def cancel(self) -> None:
        if self.done:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("grid build cancelled after %d/%d rows", self.rows_built, self.num_rows)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _row_tasks(self) -> Iterator[int]:
        """One yield per completed row; each yield is a suspension point."""
        for row in range(self.num_rows):
            self.build_row(row)
            self.rows_built = row + 1
            if self.on_progress:
                self.on_progress(self.rows_built / self.num_rows)
            yield row

    def _step(self) -> None:
        self._handle = None
        if self.cancelled:
            return
        try:
            next(self._tasks)
        except StopIteration:
            self._complete()
            return
        if self.rows_built == self.num_rows:
            self._complete()
        else:
            self._handle = self._scheduler.call_soon(self._step)

    def _complete(self) -> None:
        self.done = True
        logger.debug("grid build complete: %d rows", self.rows_built)
        if self.on_complete:
            self.on_complete()
