import pytest

from engine import (
    SPEED_PRESETS,
    Operation,
    OperationRecorder,
    Playback,
    PlaybackState,
    SearchStatistics,
)


def fill(recorder, ops):
    recorder.begin()
    for op in ops:
        recorder.record(*op)


@pytest.fixture
def recorder():
    return OperationRecorder()


@pytest.fixture
def applied():
    return []


@pytest.fixture
def exhausted():
    return []


@pytest.fixture
def playback(scheduler, recorder, applied, exhausted):
    return Playback(
        scheduler,
        recorder,
        on_apply=applied.append,
        on_exhausted=lambda: exhausted.append(True),
        operations_per_second=4,
    )


TRACE = [
    (0, 0, "opened"),
    (0, 0, "closed"),
    (1, 0, "parent", (0, 0)),
    (1, 0, "opened"),
    (1, 0, "closed"),
]


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_recorder_keeps_order(recorder):
    fill(recorder, TRACE)
    assert len(recorder) == 5
    assert recorder.total == 5
    assert recorder.pop() == Operation(0, 0, "opened")
    assert recorder.pop() == Operation(0, 0, "closed")
    assert recorder.pending == 3


def test_pop_on_empty_log_returns_none(recorder):
    assert recorder.pop() is None


def test_begin_refuses_unconsumed_log(recorder):
    fill(recorder, TRACE)
    with pytest.raises(RuntimeError):
        recorder.begin()
    assert recorder.discard() == 5
    recorder.begin()
    assert recorder.total == 0


def test_finish_stores_path_and_statistics(recorder):
    fill(recorder, TRACE)
    stats = SearchStatistics(finder="BFS", path_length=1, path_found=True, operation_count=5)
    recorder.finish([(0, 0), (1, 0)], stats)
    assert recorder.path == [(0, 0), (1, 0)]
    assert recorder.statistics is stats


def test_export_is_json_ready(recorder):
    fill(recorder, TRACE)
    recorder.finish([(0, 0), (1, 0)], SearchStatistics(finder="BFS", path_length=1))
    export = recorder.export()
    assert export["path"] == [[0, 0], [1, 0]]
    assert export["total"] == 5
    assert export["pending"][2] == {"x": 1, "y": 0, "kind": "parent", "value": [0, 0]}
    assert export["statistics"]["finder"] == "BFS"


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
def test_playback_applies_supported_operations_in_order(clock, scheduler, recorder, playback, applied, exhausted):
    fill(recorder, TRACE)
    playback.start()
    clock.advance(100)
    scheduler.run_pending()

    assert [(op.x, op.y, op.kind) for op in applied] == [
        (0, 0, "opened"),
        (0, 0, "closed"),
        (1, 0, "opened"),
        (1, 0, "closed"),
    ]
    assert exhausted == [True]
    assert playback.state == PlaybackState.FINISHED
    assert not scheduler.has_pending


def test_one_operation_per_tick(clock, scheduler, recorder, playback, applied):
    fill(recorder, TRACE)
    playback.start()
    clock.advance(0.25)
    scheduler.run_pending()
    assert len(applied) == 1

    # "parent" is skipped inside the same tick as the next visible operation
    clock.advance(0.5)
    scheduler.run_pending()
    assert [op.kind for op in applied] == ["opened", "closed", "opened"]
    assert playback.remaining == 1


def test_pause_and_resume_neither_drop_nor_duplicate(clock, scheduler, recorder, playback, applied):
    fill(recorder, TRACE)
    playback.start()
    clock.advance(0.5)
    scheduler.run_pending()
    playback.pause()
    assert playback.state == PlaybackState.PAUSED

    clock.advance(60)
    scheduler.run_pending()
    assert len(applied) == 2

    playback.resume()
    clock.advance(60)
    scheduler.run_pending()
    assert [(op.x, op.y, op.kind) for op in applied] == [
        (0, 0, "opened"), (0, 0, "closed"), (1, 0, "opened"), (1, 0, "closed"),
    ]


def test_stop_discards_the_log(clock, scheduler, recorder, playback, applied, exhausted):
    fill(recorder, TRACE)
    playback.start()
    playback.stop()
    clock.advance(60)
    scheduler.run_pending()

    assert applied == []
    assert exhausted == []
    assert recorder.pending == 0
    assert playback.state == PlaybackState.IDLE


def test_empty_log_finishes_on_first_tick(clock, scheduler, recorder, playback, exhausted):
    recorder.begin()
    playback.start()
    clock.advance(0.25)
    scheduler.run_pending()
    assert exhausted == [True]


def test_set_speed_accepts_presets_and_numbers(playback):
    playback.set_speed("turbo")
    assert playback.operations_per_second == SPEED_PRESETS["turbo"]
    playback.set_speed(2)
    assert playback.interval == 0.5


@pytest.mark.parametrize("bad", ["warp", 0, -3])
def test_set_speed_rejects_bad_values(playback, bad):
    with pytest.raises(ValueError):
        playback.set_speed(bad)


def test_speed_change_while_playing_reschedules(clock, scheduler, recorder, playback, applied):
    fill(recorder, TRACE)
    playback.start()
    playback.set_speed(1)
    clock.advance(0.5)
    scheduler.run_pending()
    assert applied == []
    clock.advance(0.5)
    scheduler.run_pending()
    assert len(applied) == 1
