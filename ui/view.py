"""
view.py — Grid Presentation Adapter
====================================
Everything the controller wants drawn goes through this object.  It keeps
a model of what is on screen (cell states, markers, path, statistics) and
queues a render event for every change; the web layer drains the queue on
each poll and the browser applies the events to the SVG.

Owns the two coordinate sets the controller works with:
  • wall_coords  – every cell ever set non-walkable (duplicates allowed)
  • dirty_coords – every cell touched by playback, reverted before the next search
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from grid import Coord, CoordinateMapper
from engine import GridBuilder, Scheduler, SearchStatistics
from ui.canvas import build_svg_path

logger = logging.getLogger(__name__)


# cell state → what the renderer paints
NORMAL  = "normal"
BLOCKED = "blocked"
OPENED  = "opened"
CLOSED  = "closed"


class GridView:
    """
    Attributes:
        num_cols, num_rows : grid dimensions
        cells              : [[state]] for every row built so far, indexed [y][x]
        start, end         : marker positions (or None before placement)
        path               : currently drawn path
        statistics         : last reported SearchStatistics
        progress           : grid-build progress in [0, 1]
    """

    def __init__(self, scheduler: Scheduler, mapper: CoordinateMapper):
        self._scheduler: Scheduler        = scheduler
        self.mapper:     CoordinateMapper = mapper
        self.num_cols:   int              = 0
        self.num_rows:   int              = 0
        self.cells:      List[List[str]]  = []
        self.start:      Optional[Coord]  = None
        self.end:        Optional[Coord]  = None
        self.path:       List[Coord]      = []
        self.statistics: Optional[SearchStatistics] = None
        self.progress:   float            = 0.0

        self._builder:   Optional[GridBuilder] = None
        self._dirty:     List[Coord]      = []
        self._walls:     List[Coord]      = []
        self._events:    List[Dict[str, Any]] = []

    @property
    def cell_size(self) -> int:
        return self.mapper.cell_size

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def initialize(self, num_cols: int, num_rows: int) -> None:
        if self._builder is not None:
            self._builder.cancel()
            self._builder = None
        self.num_cols = num_cols
        self.num_rows = num_rows
        self.cells    = []
        self.progress = 0.0
        self._emit("init", cols=num_cols, rows=num_rows, cell_size=self.cell_size)

    def build_grid_async(self, on_complete: Callable[[], None]) -> GridBuilder:
        """Build one row of cells per scheduler pump; `on_complete` fires once at the end."""
        self._builder = GridBuilder(
            self._scheduler,
            self.num_rows,
            build_row=self._build_row,
            on_progress=self.show_progress,
            on_complete=on_complete,
        )
        self._builder.start()
        return self._builder

    def _build_row(self, row: int) -> None:
        self.cells.append([NORMAL] * self.num_cols)
        self._emit("row", y=row)

    @property
    def is_built(self) -> bool:
        return self.num_rows > 0 and len(self.cells) == self.num_rows

    def show_progress(self, fraction: float) -> None:
        self.progress = fraction
        self._emit("progress", percent=round(fraction * 100))

    # ==================================================================
    # CELLS
    # ==================================================================
    def set_cell_attribute(self, x: int, y: int, kind: str, value: Any) -> None:
        if not (0 <= y < len(self.cells) and 0 <= x < self.num_cols):
            logger.debug("ignoring %s at (%d, %d): outside the built grid", kind, x, y)
            return

        if kind == "walkable":
            state = NORMAL if value else BLOCKED
            if not value:
                self._walls.append((x, y))
        elif kind in (OPENED, CLOSED):
            state = kind
            self._dirty.append((x, y))
        else:
            logger.warning("unsupported operation: %s:%s", kind, value)
            return

        self.cells[y][x] = state
        self._emit("cell", x=x, y=y, state=state)

    def cell_state(self, x: int, y: int) -> Optional[str]:
        if 0 <= y < len(self.cells) and 0 <= x < self.num_cols:
            return self.cells[y][x]
        return None

    # ==================================================================
    # MARKERS, PATH & STATS
    # ==================================================================
    def set_start_marker(self, x: int, y: int) -> None:
        self.start = (x, y)
        px, py = self.to_page_coordinate(x, y)
        self._emit("marker", which="start", x=px, y=py)

    def set_end_marker(self, x: int, y: int) -> None:
        self.end = (x, y)
        px, py = self.to_page_coordinate(x, y)
        self._emit("marker", which="end", x=px, y=py)

    def draw_path(self, path: Sequence[Coord]) -> None:
        if not path:
            return
        self.path = [tuple(p) for p in path]
        self._emit("path", d=build_svg_path(self.path, self.cell_size))

    def clear_path(self) -> None:
        if not self.path:
            return
        self.path = []
        self._emit("path", d="")

    def show_statistics(self, statistics: SearchStatistics) -> None:
        self.statistics = statistics
        self._emit("stats", **statistics.to_dict())

    def clear_statistics(self) -> None:
        self.statistics = None
        self._emit("stats")

    # ==================================================================
    # COORDINATES
    # ==================================================================
    def to_grid_coordinate(self, page_x: float, page_y: float) -> Tuple[int, int]:
        return self.mapper.to_grid_coordinate(page_x, page_y)

    def to_page_coordinate(self, grid_x: int, grid_y: int) -> Tuple[int, int]:
        return self.mapper.to_page_coordinate(grid_x, grid_y)

    # ==================================================================
    # DIRTY / WALL BOOKKEEPING
    # ==================================================================
    @property
    def dirty_coords(self) -> List[Coord]:
        return list(self._dirty)

    def clear_dirty_coords(self) -> None:
        self._dirty = []

    @property
    def wall_coords(self) -> List[Coord]:
        return list(self._walls)

    def clear_wall_coords(self) -> None:
        self._walls = []

    # ==================================================================
    # RENDER EVENTS
    # ==================================================================
    def drain_events(self) -> List[Dict[str, Any]]:
        events, self._events = self._events, []
        return events

    def _emit(self, kind: str, **payload: Any) -> None:
        payload["type"] = kind
        self._events.append(payload)
