"""
bi_best_first.py — Bidirectional Best-First Search
===================================================
Two greedy frontiers, each expanding whichever open cell looks closest to
the other side's root.  Fast, NOT optimal.
"""

from grid import Grid
from finders.bi_astar import bidirectional_search
from finders.util import NodeCallback, Path, noop


def bi_best_first(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    grid: Grid,
    on_node: NodeCallback = noop,
    allow_diagonal: bool = False,
    dont_cross_corners: bool = False,
    heuristic: str = "manhattan",
) -> Path:
    return bidirectional_search(
        (start_x, start_y), (end_x, end_y), grid, on_node,
        allow_diagonal, dont_cross_corners, heuristic, greedy=True,
    )
