"""
controller/
-----------
Interaction layer.

    from controller import Controller, StateMachine, UIState, Event
"""

from controller.machine    import UIState, Event, TRANSITIONS, StateMachine
from controller.commands   import CommandSlot, LAYOUTS, command_slots
from controller.controller import Controller

__all__ = [
    "UIState",
    "Event",
    "TRANSITIONS",
    "StateMachine",
    "CommandSlot",
    "LAYOUTS",
    "command_slots",
    "Controller",
]
