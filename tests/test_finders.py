import pytest

from finders import REGISTRY, get_finder, list_finders, make_finder, path_length
from finders.breadth_first import breadth_first
from finders.jump_point import expand_path
from finders.heuristics import get_heuristic
from grid import Grid


ALL_KEYS = list(REGISTRY)
OPTIMAL_KEYS = ["breadth_first", "dijkstra", "astar"]
BIDIRECTIONAL_KEYS = ["bi_astar", "bi_best_first", "bi_breadth_first", "bi_dijkstra"]
# always 8-connected, whatever allow_diagonal says
DIAGONAL_KEYS = {"jump_point"}


def open_grid():
    return Grid(5, 5)


def walled_grid():
    """Column x=2 fully blocked: the two halves are disconnected."""
    g = Grid(5, 5)
    for y in range(5):
        g.set_walkable_at(2, y, False)
    return g


def assert_valid_path(path, grid, start, end, diagonal=False):
    assert path[0] == start
    assert path[-1] == end
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        if diagonal:
            assert max(abs(ax - bx), abs(ay - by)) == 1
            # a diagonal step needs one of the two cells beside it open
            assert grid.is_walkable_at(ax, by) or grid.is_walkable_at(bx, ay)
        else:
            assert abs(ax - bx) + abs(ay - by) == 1
    assert all(grid.is_walkable_at(x, y) for x, y in path)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_keys():
    assert set(ALL_KEYS) == {
        "astar", "bi_astar", "best_first", "bi_best_first", "breadth_first",
        "bi_breadth_first", "dijkstra", "bi_dijkstra", "jump_point",
    }
    assert [f.key for f in list_finders()] == ALL_KEYS


def test_get_finder_unknown_is_none():
    assert get_finder("nope") is None


def test_make_finder_rejects_unknown_names():
    with pytest.raises(ValueError):
        make_finder("nope")
    with pytest.raises(ValueError):
        make_finder("astar", heuristic="nope")


def test_get_heuristic_rejects_unknown_names():
    with pytest.raises(ValueError):
        get_heuristic("nope")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", ALL_KEYS)
def test_open_grid_path(key):
    grid = open_grid()
    path = make_finder(key)(0, 0, 4, 4, grid, lambda *a: None)
    assert_valid_path(path, grid, (0, 0), (4, 4), diagonal=key in DIAGONAL_KEYS)


@pytest.mark.parametrize("key", OPTIMAL_KEYS)
def test_optimal_finders_find_shortest_path(key):
    path = make_finder(key)(0, 0, 4, 4, open_grid(), lambda *a: None)
    assert path_length(path) == 8


@pytest.mark.parametrize("key", ALL_KEYS)
def test_unreachable_end_gives_empty_path(key):
    path = make_finder(key)(0, 2, 4, 2, walled_grid(), lambda *a: None)
    assert path == []
    assert path_length(path) == 0


@pytest.mark.parametrize("key", ALL_KEYS)
def test_start_equals_end(key):
    assert make_finder(key)(1, 1, 1, 1, open_grid(), lambda *a: None) == [(1, 1)]


def test_diagonal_moves_shorten_the_path():
    path = make_finder("astar", allow_diagonal=True, heuristic="octile")(0, 0, 4, 4, open_grid(), lambda *a: None)
    assert path_length(path) == 4


def test_finder_works_on_the_grid_it_is_given():
    grid = open_grid()
    grid.set_walkable_at(1, 0, False)
    grid.set_walkable_at(1, 1, False)
    path = breadth_first(0, 0, 2, 0, grid)
    assert (1, 0) not in path and (1, 1) not in path
    assert path[-1] == (2, 0)


# ---------------------------------------------------------------------------
# Node callback
# ---------------------------------------------------------------------------
def test_callback_reports_traversal_in_order():
    events = []
    breadth_first(0, 0, 1, 0, Grid(2, 1), lambda x, y, kind, value: events.append((x, y, kind)))
    assert events == [
        (0, 0, "opened"),
        (0, 0, "closed"),
        (1, 0, "parent"),
        (1, 0, "opened"),
        (1, 0, "closed"),
    ]


@pytest.mark.parametrize("key", ALL_KEYS)
def test_every_finder_opens_and_closes_cells(key):
    kinds = set()
    make_finder(key)(0, 0, 4, 4, open_grid(), lambda x, y, kind, value: kinds.add(kind))
    assert {"opened", "closed"} <= kinds


@pytest.mark.parametrize("key", BIDIRECTIONAL_KEYS)
def test_bidirectional_finders_open_from_both_ends(key):
    sides = set()

    def on_node(x, y, kind, value):
        if kind == "opened":
            sides.add(value)

    path = make_finder(key)(0, 2, 4, 2, open_grid(), on_node)
    assert_valid_path(path, open_grid(), (0, 2), (4, 2))
    assert sides == {"start", "end"}


# ---------------------------------------------------------------------------
# Jump point search
# ---------------------------------------------------------------------------
def test_jump_point_ignores_movement_options():
    finder = make_finder("jump_point", allow_diagonal=False, heuristic="octile")
    assert path_length(finder(0, 0, 4, 4, open_grid(), lambda *a: None)) == 4


def test_jump_point_opens_only_jump_points():
    def opened(key):
        cells = []
        make_finder(key, allow_diagonal=True, heuristic="octile")(
            0, 0, 4, 4, open_grid(),
            lambda x, y, kind, value: kind == "opened" and cells.append((x, y)),
        )
        return cells

    assert opened("jump_point") == [(0, 0), (4, 4)]
    assert len(opened("astar")) > 2


def test_jump_point_finds_the_gap_in_a_wall():
    grid = Grid.from_matrix([
        [0, 0, 1, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 0, 0, 0],
    ])
    path = make_finder("jump_point", heuristic="octile")(0, 0, 4, 0, grid, lambda *a: None)
    assert_valid_path(path, grid, (0, 0), (4, 0), diagonal=True)
    assert (2, 4) in path


def test_expand_path_fills_straight_and_diagonal_runs():
    assert expand_path([(0, 0), (2, 2), (2, 4)]) == [(0, 0), (1, 1), (2, 2), (2, 3), (2, 4)]
    assert expand_path([]) == []
