"""
bi_dijkstra.py — Bidirectional Dijkstra
========================================
Bidirectional A* with the zero heuristic: both frontiers grow by
accumulated cost alone and are joined on first contact.
"""

from grid import Grid
from finders.bi_astar import bidirectional_search
from finders.util import NodeCallback, Path, noop


def bi_dijkstra(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    grid: Grid,
    on_node: NodeCallback = noop,
    allow_diagonal: bool = False,
    dont_cross_corners: bool = False,
) -> Path:
    return bidirectional_search(
        (start_x, start_y), (end_x, end_y), grid, on_node,
        allow_diagonal, dont_cross_corners, heuristic="zero",
    )
