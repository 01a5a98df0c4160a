import pytest

from grid import CoordinateMapper, Grid


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
def test_new_grid_is_fully_walkable():
    g = Grid(4, 3)
    assert all(g.is_walkable_at(x, y) for x in range(4) for y in range(3))
    assert list(g.walls()) == []


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3), (100, 100)])
def test_out_of_range_reads_are_not_walkable(x, y):
    assert not Grid(4, 3).is_walkable_at(x, y)


def test_out_of_range_writes_are_dropped():
    g = Grid(4, 3)
    g.set_walkable_at(10, 10, False)
    g.set_walkable_at(-1, 0, False)
    assert list(g.walls()) == []


def test_latest_write_wins():
    g = Grid(3, 3)
    g.set_walkable_at(1, 1, False)
    g.set_walkable_at(1, 1, True)
    g.set_walkable_at(1, 1, False)
    assert not g.is_walkable_at(1, 1)
    assert list(g.walls()) == [(1, 1)]


def test_clone_is_independent():
    g = Grid(3, 3)
    g.set_walkable_at(0, 0, False)
    copy = g.clone()
    copy.set_walkable_at(2, 2, False)
    g.set_walkable_at(0, 0, True)

    assert not copy.is_walkable_at(0, 0)
    assert g.is_walkable_at(2, 2)


def test_neighbours_straight_order():
    g = Grid(3, 3)
    assert g.neighbours(1, 1) == [(1, 0), (2, 1), (1, 2), (0, 1)]


def test_neighbours_skip_walls_and_edges():
    g = Grid(3, 3)
    g.set_walkable_at(1, 0, False)
    assert g.neighbours(0, 0) == [(0, 1)]


def test_diagonal_corner_rules():
    g = Grid.from_matrix([
        [0, 1, 0],
        [0, 0, 0],
        [0, 0, 0],
    ])
    # (1,0) is a wall, so the move (1,1) → (2,0) cuts its corner
    assert (2, 0) in g.neighbours(1, 1, allow_diagonal=True)
    assert (2, 0) not in g.neighbours(1, 1, allow_diagonal=True, dont_cross_corners=True)


def test_dict_round_trip_keeps_walls():
    g = Grid.from_matrix([[0, 1], [1, 0]])
    restored = Grid.from_dict(g.to_dict())
    assert sorted(restored.walls()) == [(0, 1), (1, 0)]
    assert (restored.width, restored.height) == (2, 2)


# ---------------------------------------------------------------------------
# CoordinateMapper
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("gx, gy", [(0, 0), (3, 7), (63, 35)])
def test_page_grid_round_trip(gx, gy):
    m = CoordinateMapper(30)
    assert m.to_grid_coordinate(*m.to_page_coordinate(gx, gy)) == (gx, gy)


def test_any_pixel_inside_a_cell_maps_to_it():
    m = CoordinateMapper(30)
    assert m.to_grid_coordinate(59.9, 30.0) == (1, 1)
    assert m.to_grid_coordinate(29.99, 0) == (0, 0)


def test_negative_pixels_floor_outside_the_grid():
    assert CoordinateMapper(30).to_grid_coordinate(-1, -0.5) == (-1, -1)


def test_cell_center():
    assert CoordinateMapper(30).cell_center(2, 1) == (75.0, 45.0)


def test_mapper_rejects_non_positive_size():
    with pytest.raises(ValueError):
        CoordinateMapper(0)
