import pytest

from controller import Controller
from engine import ManualClock, Scheduler
from grid import CoordinateMapper
from settings import Settings
from ui import GridView


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def settings():
    # 4 ops/s keeps every tick boundary exact in floating point
    return Settings(grid_size=(5, 5), cell_size=10, operations_per_second=4, finder="breadth_first")


@pytest.fixture
def controller(settings, scheduler):
    """A controller whose grid has been built and is READY."""
    view = GridView(scheduler, CoordinateMapper(settings.cell_size))
    ctl = Controller(settings, view, scheduler)
    ctl.initialize()
    for _ in range(settings.grid_size[1]):
        scheduler.run_pending()
    return ctl


@pytest.fixture
def drain(clock, scheduler):
    """Let playback run until the log is exhausted."""
    def _drain():
        clock.advance(10_000)
        scheduler.run_pending()
    return _drain
