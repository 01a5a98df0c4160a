"""
machine.py — Interaction State Machine
=======================================
A closed set of UI states, a closed set of events, and one explicit
transition table  (from_state, event) → to_state.

    init       : UNINITIALIZED                        → READY
    start      : READY, MODIFIED                      → STARTING
    restart    : SEARCHING, FINISHED                  → STARTING
    search     : STARTING                             → SEARCHING
    pause      : SEARCHING                            → PAUSED
    resume     : PAUSED                               → SEARCHING
    cancel     : PAUSED                               → READY
    finish     : SEARCHING                            → FINISHED
    modify     : FINISHED                             → MODIFIED
    clear      : FINISHED, MODIFIED                   → READY
    drag_start : READY, FINISHED                      → DRAGGING_START
    drag_end   : READY, FINISHED                      → DRAGGING_END
    draw_wall  : READY, FINISHED                      → DRAWING_WALL
    erase_wall : READY, FINISHED                      → ERASING_WALL
    rest       : DRAGGING_*, DRAWING_WALL, ERASING_WALL → READY
    reset      : any                                  → READY

Firing an event that is not legal from the current state is a no-op:
`fire()` returns False and the state does not change.  Nothing is raised.

Callback order for an accepted transition:
    1. state is updated
    2. on_event[event](*args)
    3. every listener(event, from_state, to_state)
    4. on_enter[to_state]()

Handlers may fire further events (STARTING fires `search` on entry).
Listeners run before the enter handler, so they see `start` before the
`search` that STARTING fires.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & events
# ---------------------------------------------------------------------------
class UIState(Enum):
    UNINITIALIZED  = "uninitialized"
    READY          = "ready"
    STARTING       = "starting"
    SEARCHING      = "searching"
    PAUSED         = "paused"
    FINISHED       = "finished"
    MODIFIED       = "modified"
    DRAGGING_START = "dragging_start"
    DRAGGING_END   = "dragging_end"
    DRAWING_WALL   = "drawing_wall"
    ERASING_WALL   = "erasing_wall"


class Event(Enum):
    INIT       = "init"
    START      = "start"
    RESTART    = "restart"
    SEARCH     = "search"
    PAUSE      = "pause"
    RESUME     = "resume"
    CANCEL     = "cancel"
    FINISH     = "finish"
    MODIFY     = "modify"
    CLEAR      = "clear"
    DRAG_START = "drag_start"
    DRAG_END   = "drag_end"
    DRAW_WALL  = "draw_wall"
    ERASE_WALL = "erase_wall"
    REST       = "rest"
    RESET      = "reset"


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------
def _build_table() -> Dict[Tuple[UIState, Event], UIState]:
    S, E = UIState, Event
    editable = (S.READY, S.FINISHED)
    editing  = (S.DRAGGING_START, S.DRAGGING_END, S.DRAWING_WALL, S.ERASING_WALL)

    rules: List[Tuple[Tuple[UIState, ...], Event, UIState]] = [
        ((S.UNINITIALIZED,),          E.INIT,       S.READY),
        ((S.READY, S.MODIFIED),       E.START,      S.STARTING),
        ((S.SEARCHING, S.FINISHED),   E.RESTART,    S.STARTING),
        ((S.STARTING,),               E.SEARCH,     S.SEARCHING),
        ((S.SEARCHING,),              E.PAUSE,      S.PAUSED),
        ((S.PAUSED,),                 E.RESUME,     S.SEARCHING),
        ((S.PAUSED,),                 E.CANCEL,     S.READY),
        ((S.SEARCHING,),              E.FINISH,     S.FINISHED),
        ((S.FINISHED,),               E.MODIFY,     S.MODIFIED),
        ((S.FINISHED, S.MODIFIED),    E.CLEAR,      S.READY),
        (editable,                    E.DRAG_START, S.DRAGGING_START),
        (editable,                    E.DRAG_END,   S.DRAGGING_END),
        (editable,                    E.DRAW_WALL,  S.DRAWING_WALL),
        (editable,                    E.ERASE_WALL, S.ERASING_WALL),
        (editing,                     E.REST,       S.READY),
        (tuple(S),                    E.RESET,      S.READY),
    ]

    table: Dict[Tuple[UIState, Event], UIState] = {}
    for sources, event, target in rules:
        for source in sources:
            table[(source, event)] = target
    return table


TRANSITIONS: Dict[Tuple[UIState, Event], UIState] = _build_table()


# ---------------------------------------------------------------------------
# StateMachine
# ---------------------------------------------------------------------------
class StateMachine:
    """
    Attributes:
        current   : Current UIState.
        on_event  : {Event: handler(*args)}
        on_enter  : {UIState: handler()}
    """

    def __init__(self, initial: UIState = UIState.UNINITIALIZED):
        self.current:   UIState                          = initial
        self.on_event:  Dict[Event, Callable[..., None]] = {}
        self.on_enter:  Dict[UIState, Callable[[], None]] = {}
        self._listeners: List[Callable[[Event, UIState, UIState], None]] = []

    def can(self, event: Event) -> bool:
        return (self.current, event) in TRANSITIONS

    def fire(self, event: Event, *args) -> bool:
        """Apply `event`.  Returns False (and changes nothing) if illegal."""
        target = TRANSITIONS.get((self.current, event))
        if target is None:
            logger.debug("rejected %s in state %s", event.value, self.current.value)
            return False

        source = self.current
        self.current = target
        logger.debug("%s: %s -> %s", event.value, source.value, target.value)

        handler = self.on_event.get(event)
        if handler:
            handler(*args)
        for listener in self._listeners:
            listener(event, source, target)
        enter = self.on_enter.get(target)
        if enter:
            enter()
        return True

    def add_listener(self, listener: Callable[[Event, UIState, UIState], None]) -> None:
        self._listeners.append(listener)
