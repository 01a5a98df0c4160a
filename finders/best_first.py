"""
best_first.py — Greedy Best-First Search
=========================================
Pure heuristic: the open cell that *looks* closest to the goal is expanded
next, accumulated cost is ignored.  Fast, NOT optimal.  Compare with A* to
see the difference.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid, Coord
from finders.heuristics import get_heuristic
from finders.util import NodeCallback, Path, backtrace, emit, noop


def best_first(
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
    h_fn  = get_heuristic(heuristic)
    start: Coord = (start_x, start_y)
    end:   Coord = (end_x, end_y)

    def h(node: Coord) -> float:
        return h_fn(abs(node[0] - end_x), abs(node[1] - end_y))

    counter = itertools.count()
    parent:   Dict[Coord, Optional[Coord]]   = {start: None}
    closed:   Set[Coord]                     = set()
    open_set: List[Tuple[float, int, Coord]] = [(h(start), next(counter), start)]
    emit(on_node, start, "opened")

    while open_set:
        _, _, node = heapq.heappop(open_set)
        if node in closed:
            continue
        closed.add(node)
        emit(on_node, node, "closed")

        if node == end:
            return backtrace(parent, end)

        for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
            if nbr in parent:
                continue
            parent[nbr] = node
            emit(on_node, nbr, "parent", node)
            heapq.heappush(open_set, (h(nbr), next(counter), nbr))
            emit(on_node, nbr, "opened")

    return []
