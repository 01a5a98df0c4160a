import pytest

from controller import LAYOUTS, TRANSITIONS, Event, StateMachine, UIState, command_slots


def machine_in(state):
    return StateMachine(initial=state)


def test_starts_uninitialized():
    m = StateMachine()
    assert m.current == UIState.UNINITIALIZED
    assert [e for e in Event if m.can(e)] == [Event.INIT, Event.RESET]


def test_ready_guard():
    m = machine_in(UIState.READY)
    assert {e for e in Event if m.can(e)} == {
        Event.START, Event.DRAG_START, Event.DRAG_END,
        Event.DRAW_WALL, Event.ERASE_WALL, Event.RESET,
    }


@pytest.mark.parametrize("event", [Event.PAUSE, Event.FINISH, Event.CLEAR, Event.RESUME, Event.INIT])
def test_illegal_event_is_a_noop(event):
    m = machine_in(UIState.READY)
    calls = []
    m.on_event[event] = lambda *a: calls.append(event)
    assert m.fire(event) is False
    assert m.current == UIState.READY
    assert calls == []


def test_reset_is_legal_from_every_state():
    for state in UIState:
        assert TRANSITIONS[(state, Event.RESET)] == UIState.READY


@pytest.mark.parametrize("source, event, target", [
    (UIState.UNINITIALIZED, Event.INIT,       UIState.READY),
    (UIState.MODIFIED,      Event.START,      UIState.STARTING),
    (UIState.FINISHED,      Event.RESTART,    UIState.STARTING),
    (UIState.SEARCHING,     Event.PAUSE,      UIState.PAUSED),
    (UIState.PAUSED,        Event.CANCEL,     UIState.READY),
    (UIState.FINISHED,      Event.MODIFY,     UIState.MODIFIED),
    (UIState.MODIFIED,      Event.CLEAR,      UIState.READY),
    (UIState.FINISHED,      Event.DRAW_WALL,  UIState.DRAWING_WALL),
    (UIState.ERASING_WALL,  Event.REST,       UIState.READY),
])
def test_transitions(source, event, target):
    m = machine_in(source)
    assert m.fire(event)
    assert m.current == target


def test_callback_order_and_arguments():
    m = machine_in(UIState.READY)
    calls = []
    m.on_event[Event.DRAW_WALL] = lambda x, y: calls.append(("event", x, y, m.current))
    m.on_enter[UIState.DRAWING_WALL] = lambda: calls.append(("enter",))
    m.add_listener(lambda e, s, t: calls.append(("listener", e, s, t)))

    m.fire(Event.DRAW_WALL, 3, 4)
    assert calls == [
        ("event", 3, 4, UIState.DRAWING_WALL),
        ("listener", Event.DRAW_WALL, UIState.READY, UIState.DRAWING_WALL),
        ("enter",),
    ]


def test_enter_handler_may_fire_the_next_event():
    m = machine_in(UIState.READY)
    m.on_enter[UIState.STARTING] = lambda: m.fire(Event.SEARCH)
    m.fire(Event.START)
    assert m.current == UIState.SEARCHING


def test_listeners_see_nested_transitions_in_order():
    m = machine_in(UIState.READY)
    seen = []
    m.on_enter[UIState.STARTING] = lambda: m.fire(Event.SEARCH)
    m.add_listener(lambda e, s, t: seen.append(t))
    m.fire(Event.START)
    assert seen == [UIState.STARTING, UIState.SEARCHING]


# ---------------------------------------------------------------------------
# Command slots
# ---------------------------------------------------------------------------
def test_every_state_has_three_slots():
    for state in UIState:
        assert len(LAYOUTS[state]) == 3


@pytest.mark.parametrize("state, labels", [
    (UIState.READY,     ["Start Search", "Pause Search", "Clear Walls"]),
    (UIState.SEARCHING, ["Restart Search", "Pause Search", "Clear Walls"]),
    (UIState.PAUSED,    ["Resume Search", "Cancel Search", "Clear Walls"]),
    (UIState.FINISHED,  ["Restart Search", "Clear Path", "Clear Walls"]),
    (UIState.MODIFIED,  ["Start Search", "Clear Path", "Clear Walls"]),
])
def test_slot_labels(state, labels):
    assert [s["label"] for s in command_slots(machine_in(state))] == labels


def test_slot_enabled_iff_event_can_fire():
    slots = command_slots(machine_in(UIState.READY))
    assert [s["enabled"] for s in slots] == [True, False, True]
    assert slots[0]["event"] == "start"


def test_slot_guard_can_be_overridden():
    slots = command_slots(machine_in(UIState.UNINITIALIZED), can=lambda event: False)
    assert [s["enabled"] for s in slots] == [False, False, False]
