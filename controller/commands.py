"""
commands.py — Contextual Command Slots
=======================================
The control panel has three buttons whose label and action depend on the
current state.  Which actions are *available* is dictated by the
transition table; a slot is enabled only when its event can fire.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from controller.machine import Event, StateMachine, UIState


@dataclass(frozen=True)
class CommandSlot:
    label: str
    event: Event


START_SEARCH   = CommandSlot("Start Search",   Event.START)
RESTART_SEARCH = CommandSlot("Restart Search", Event.RESTART)
RESUME_SEARCH  = CommandSlot("Resume Search",  Event.RESUME)
PAUSE_SEARCH   = CommandSlot("Pause Search",   Event.PAUSE)
CANCEL_SEARCH  = CommandSlot("Cancel Search",  Event.CANCEL)
CLEAR_PATH     = CommandSlot("Clear Path",     Event.CLEAR)
CLEAR_WALLS    = CommandSlot("Clear Walls",    Event.RESET)

_IDLE_LAYOUT = (START_SEARCH, PAUSE_SEARCH, CLEAR_WALLS)

LAYOUTS: Dict[UIState, Tuple[CommandSlot, CommandSlot, CommandSlot]] = {
    UIState.UNINITIALIZED:  _IDLE_LAYOUT,
    UIState.READY:          _IDLE_LAYOUT,
    UIState.STARTING:       (RESTART_SEARCH, PAUSE_SEARCH, CLEAR_WALLS),
    UIState.SEARCHING:      (RESTART_SEARCH, PAUSE_SEARCH, CLEAR_WALLS),
    UIState.PAUSED:         (RESUME_SEARCH, CANCEL_SEARCH, CLEAR_WALLS),
    UIState.FINISHED:       (RESTART_SEARCH, CLEAR_PATH, CLEAR_WALLS),
    UIState.MODIFIED:       (START_SEARCH, CLEAR_PATH, CLEAR_WALLS),
    UIState.DRAGGING_START: _IDLE_LAYOUT,
    UIState.DRAGGING_END:   _IDLE_LAYOUT,
    UIState.DRAWING_WALL:   _IDLE_LAYOUT,
    UIState.ERASING_WALL:   _IDLE_LAYOUT,
}


def command_slots(
    machine: StateMachine,
    can: Optional[Callable[[Event], bool]] = None,
) -> List[Dict[str, object]]:
    """
    JSON-ready [{label, event, enabled}] for the three buttons.  `can`
    overrides the machine's own guard (the controller refuses everything
    while the grid is still being built).
    """
    can = can or machine.can
    return [
        {
            "label":   slot.label,
            "event":   slot.event.value,
            "enabled": can(slot.event),
        }
        for slot in LAYOUTS[machine.current]
    ]
