"""
astar.py — A* Search
=====================
Heap-based A* with a pluggable heuristic and an optional heuristic weight
(weight > 1 trades optimality for speed).

Node events:
  • "opened"  – cell pushed onto the open set (first time only)
  • "parent"  – cell got a better predecessor
  • "closed"  – cell popped and expanded

Stale heap entries (a cell re-pushed with a better f) are skipped on pop
instead of being decreased in place.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid, Coord
from finders.heuristics import get_heuristic
from finders.util import NodeCallback, Path, backtrace, emit, noop, step_cost


def astar(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    grid: Grid,
    on_node: NodeCallback = noop,
    allow_diagonal: bool = False,
    dont_cross_corners: bool = False,
    heuristic: str = "manhattan",
    weight: float = 1.0,
) -> Path:
    h_fn  = get_heuristic(heuristic)
    start: Coord = (start_x, start_y)
    end:   Coord = (end_x, end_y)

    def h(node: Coord) -> float:
        return weight * h_fn(abs(node[0] - end_x), abs(node[1] - end_y))

    counter = itertools.count()          # FIFO tie-break between equal f
    g_score: Dict[Coord, float]          = {start: 0.0}
    parent:  Dict[Coord, Optional[Coord]] = {start: None}
    closed:  Set[Coord]                  = set()
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
            if nbr in closed:
                continue

            tentative_g = g_score[node] + step_cost(node, nbr)
            seen = nbr in g_score
            if seen and tentative_g >= g_score[nbr]:
                continue

            g_score[nbr] = tentative_g
            parent[nbr]  = node
            emit(on_node, nbr, "parent", node)
            heapq.heappush(open_set, (tentative_g + h(nbr), next(counter), nbr))
            if not seen:
                emit(on_node, nbr, "opened")

    return []
