"""
controller.py — Visualization Controller
=========================================
The top-level object.  Owns the canonical Grid, the StateMachine, the
OperationRecorder and the Playback, and talks to the screen only through
the GridView.  Constructed once at startup; the web layer holds the single
instance and passes pointer / command input in.

Lifecycle of one search:

    start / restart  →  STARTING   stop playback, drop unconsumed log,
                                   clear path + footprints, fire `search`
    search           →  SEARCHING  run the finder on grid.clone() with the
                                   recorder as on_node, time it, start playback
    (log exhausted)  →  FINISHED   draw the path, report statistics
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Union

from grid import Grid, Coord
from engine import Operation, OperationRecorder, Playback, Scheduler, SearchStatistics
from finders import get_finder, make_finder, path_length
from controller.machine import Event, StateMachine, UIState
from controller.commands import command_slots
from settings import Settings

logger = logging.getLogger(__name__)

# how far each default marker sits from the grid centre, in columns
MARKER_OFFSET = 5


class Controller:
    """
    Attributes:
        settings   : Settings used at construction.
        grid       : The canonical, user-editable Grid.
        view       : Presentation adapter (GridView or anything with its methods).
        machine    : The interaction StateMachine.
        recorder   : OperationRecorder installed as the finders' on_node callback.
        playback   : Playback draining the recorder.
        start_pos  : (x, y) of the start marker.
        end_pos    : (x, y) of the end marker.
    """

    def __init__(self, settings: Settings, view, scheduler: Scheduler):
        self.settings:  Settings          = settings
        self.view                         = view
        self.scheduler: Scheduler         = scheduler
        self.grid:      Grid              = Grid(*settings.grid_size)
        self.machine:   StateMachine      = StateMachine()
        self.recorder:  OperationRecorder = OperationRecorder()
        self.playback:  Playback          = Playback(
            scheduler,
            self.recorder,
            on_apply=self._apply_operation,
            on_exhausted=self.finish,
            operations_per_second=settings.operations_per_second,
        )
        self.start_pos: Coord = (0, 0)
        self.end_pos:   Coord = (0, 0)

        self.finder_key:     str            = settings.finder
        self.finder_options: Dict[str, Any] = {}
        self._finder:        Callable       = make_finder(self.finder_key)

        self._bind()

    # ==================================================================
    # WIRING
    # ==================================================================
    def _bind(self) -> None:
        m = self.machine
        m.on_event[Event.SEARCH]     = self._on_search
        m.on_event[Event.PAUSE]      = self._on_pause
        m.on_event[Event.RESUME]     = self._on_resume
        m.on_event[Event.CANCEL]     = self._on_cancel
        m.on_event[Event.FINISH]     = self._on_finish
        m.on_event[Event.CLEAR]      = self._on_clear
        m.on_event[Event.RESET]      = self._on_reset
        m.on_event[Event.DRAW_WALL]  = self._on_draw_wall
        m.on_event[Event.ERASE_WALL] = self._on_erase_wall
        m.on_enter[UIState.STARTING] = self._on_enter_starting
        m.add_listener(self._log_transition)

    @staticmethod
    def _log_transition(event: Event, source: UIState, target: UIState) -> None:
        logger.info("=> %s (%s from %s)", target.value, event.value, source.value)

    # ==================================================================
    # STATE QUERIES
    # ==================================================================
    @property
    def state(self) -> UIState:
        return self.machine.current

    def can(self, event: Event) -> bool:
        # only `init` is accepted until every row has been built
        if event != Event.INIT and not self.view.is_built:
            return False
        return self.machine.can(event)

    def fire(self, event: Event, *args) -> bool:
        if not self.can(event):
            logger.debug("rejected %s in state %s", event.value, self.state.value)
            return False
        return self.machine.fire(event, *args)

    # convenience wrappers, one per user-facing command
    def start(self) -> bool:   return self.fire(Event.START)
    def restart(self) -> bool: return self.fire(Event.RESTART)
    def pause(self) -> bool:   return self.fire(Event.PAUSE)
    def resume(self) -> bool:  return self.fire(Event.RESUME)
    def cancel(self) -> bool:  return self.fire(Event.CANCEL)
    def finish(self) -> bool:  return self.fire(Event.FINISH)
    def clear(self) -> bool:   return self.fire(Event.CLEAR)
    def reset(self) -> bool:   return self.fire(Event.RESET)

    # ==================================================================
    # INITIALISATION  (UNINITIALIZED → READY, asynchronous)
    # ==================================================================
    def initialize(self) -> None:
        """Build the grid row by row; `init` fires once the last row is done."""
        cols, rows = self.settings.grid_size
        self.view.initialize(cols, rows)
        self.view.build_grid_async(self._on_grid_built)

    def _on_grid_built(self) -> None:
        self.set_default_start_end_pos()
        self.fire(Event.INIT)

    def set_default_start_end_pos(self) -> None:
        cols, rows = self.settings.grid_size
        center_x, center_y = cols // 2, rows // 2
        sx = max(0, center_x - MARKER_OFFSET)
        ex = min(cols - 1, center_x + MARKER_OFFSET)
        self.set_start_pos(sx, center_y)
        self.set_end_pos(ex, center_y)

    # ==================================================================
    # SEARCH LIFECYCLE
    # ==================================================================
    def _on_enter_starting(self) -> None:
        # a restart may interrupt a playback that is still draining
        self.playback.stop()
        self.view.clear_path()
        self.view.clear_statistics()
        self.clear_footprints()
        self.fire(Event.SEARCH)

    def _on_search(self) -> None:
        grid = self.grid.clone()
        self.recorder.begin()

        t0 = time.monotonic()
        path = self._finder(
            self.start_pos[0], self.start_pos[1],
            self.end_pos[0], self.end_pos[1],
            grid, self.recorder.record,
        )
        elapsed_ms = (time.monotonic() - t0) * 1000

        info = get_finder(self.finder_key)
        stats = SearchStatistics(
            finder=info.label if info else self.finder_key,
            path_length=path_length(path),
            path_found=bool(path),
            elapsed_time_ms=round(elapsed_ms, 2),
            operation_count=self.recorder.total,
        )
        self.recorder.finish(path, stats)
        self.playback.start()

    def _apply_operation(self, op: Operation) -> None:
        self.view.set_cell_attribute(op.x, op.y, op.kind, op.value)

    def _on_pause(self) -> None:
        self.playback.pause()

    def _on_resume(self) -> None:
        self.playback.resume()

    def _on_cancel(self) -> None:
        self.playback.stop()

    def _on_finish(self) -> None:
        self.playback.stop()
        self.view.draw_path(self.recorder.path)
        if self.recorder.statistics is not None:
            self.view.show_statistics(self.recorder.statistics)

    def _on_clear(self) -> None:
        self.view.clear_path()
        self.view.clear_statistics()
        self.clear_footprints()

    def _on_reset(self) -> None:
        self.playback.stop()
        self.view.clear_path()
        self.clear_footprints()
        self.clear_walls()
        self.view.clear_statistics()

    def clear_footprints(self) -> None:
        """Repaint every cell playback touched, then forget them."""
        for x, y in self.view.dirty_coords:
            # a wall drawn over a footprint after the search stays a wall
            if self.grid.is_walkable_at(x, y):
                self.view.set_cell_attribute(x, y, "walkable", True)
        self.view.clear_dirty_coords()

    def clear_walls(self) -> None:
        for x, y in self.view.wall_coords:
            self.set_walkable_at(x, y, True)
        self.view.clear_wall_coords()

    # ==================================================================
    # CONFIGURATION
    # ==================================================================
    def select_finder(self, key: str, **options: Any) -> None:
        """Switch algorithm / options.  Raises ValueError for unknown names."""
        self._finder        = make_finder(key, **options)
        self.finder_key     = key
        self.finder_options = dict(options)
        logger.info("finder selected: %s %s", key, options)
        if self.can(Event.MODIFY):
            self.fire(Event.MODIFY)

    def set_speed(self, speed: Union[str, float]) -> None:
        self.playback.set_speed(speed)

    # ==================================================================
    # POINTER INPUT
    # ==================================================================
    def pointer_down(self, page_x: float, page_y: float) -> bool:
        """Pick exactly one of drag_start / drag_end / draw_wall / erase_wall."""
        x, y = self.view.to_grid_coordinate(page_x, page_y)
        if not self.grid.is_inside(x, y):
            return False

        if self.can(Event.DRAG_START) and self.is_start_pos(x, y):
            return self.fire(Event.DRAG_START)
        if self.can(Event.DRAG_END) and self.is_end_pos(x, y):
            return self.fire(Event.DRAG_END)
        if self.can(Event.DRAW_WALL) and self.grid.is_walkable_at(x, y):
            return self.fire(Event.DRAW_WALL, x, y)
        if self.can(Event.ERASE_WALL) and not self.grid.is_walkable_at(x, y):
            return self.fire(Event.ERASE_WALL, x, y)
        return False

    def pointer_move(self, page_x: float, page_y: float) -> None:
        x, y = self.view.to_grid_coordinate(page_x, page_y)
        if self.is_start_or_end_pos(x, y):
            return

        state = self.state
        if state == UIState.DRAGGING_START:
            if self.grid.is_walkable_at(x, y):
                self.set_start_pos(x, y)
        elif state == UIState.DRAGGING_END:
            if self.grid.is_walkable_at(x, y):
                self.set_end_pos(x, y)
        elif state == UIState.DRAWING_WALL:
            self.set_walkable_at(x, y, False)
        elif state == UIState.ERASING_WALL:
            self.set_walkable_at(x, y, True)

    def pointer_up(self, page_x: Optional[float] = None, page_y: Optional[float] = None) -> bool:
        if self.can(Event.REST):
            return self.fire(Event.REST)
        return False

    def _on_draw_wall(self, x: int, y: int) -> None:
        self.set_walkable_at(x, y, False)

    def _on_erase_wall(self, x: int, y: int) -> None:
        self.set_walkable_at(x, y, True)

    # ==================================================================
    # GRID & MARKER MUTATION
    # ==================================================================
    def set_start_pos(self, x: int, y: int) -> None:
        self.start_pos = (x, y)
        self.view.set_start_marker(x, y)

    def set_end_pos(self, x: int, y: int) -> None:
        self.end_pos = (x, y)
        self.view.set_end_marker(x, y)

    def set_walkable_at(self, x: int, y: int, walkable: bool) -> None:
        if not self.grid.is_inside(x, y):
            return
        self.grid.set_walkable_at(x, y, walkable)
        self.view.set_cell_attribute(x, y, "walkable", walkable)

    def is_start_pos(self, x: int, y: int) -> bool:
        return (x, y) == self.start_pos

    def is_end_pos(self, x: int, y: int) -> bool:
        return (x, y) == self.end_pos

    def is_start_or_end_pos(self, x: int, y: int) -> bool:
        return self.is_start_pos(x, y) or self.is_end_pos(x, y)

    # ==================================================================
    # SNAPSHOT  (JSON-ready, for the web layer)
    # ==================================================================
    def snapshot(self) -> Dict[str, Any]:
        stats = self.view.statistics
        return {
            "state":      self.state.value,
            "start":      list(self.start_pos),
            "end":        list(self.end_pos),
            "commands":   command_slots(self.machine, can=self.can),
            "finder":     self.finder_key,
            "options":    self.finder_options,
            "speed":      self.playback.operations_per_second,
            "applied":    self.playback.applied,
            "remaining":  self.playback.remaining,
            "statistics": stats.to_dict() if stats else None,
        }
