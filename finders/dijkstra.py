"""
dijkstra.py — Dijkstra's Algorithm
===================================
Uniform-cost search: always expands the open cell with the lowest
accumulated cost.  Straight moves cost 1, diagonal moves √2.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid, Coord
from finders.util import NodeCallback, Path, backtrace, emit, noop, step_cost


def dijkstra(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    grid: Grid,
    on_node: NodeCallback = noop,
    allow_diagonal: bool = False,
    dont_cross_corners: bool = False,
) -> Path:
    start: Coord = (start_x, start_y)
    end:   Coord = (end_x, end_y)

    counter = itertools.count()
    dist:   Dict[Coord, float]           = {start: 0.0}
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    done:   Set[Coord]                   = set()
    pq:     List[Tuple[float, int, Coord]] = [(0.0, next(counter), start)]
    emit(on_node, start, "opened")

    while pq:
        d, _, node = heapq.heappop(pq)
        if node in done:
            continue
        done.add(node)
        emit(on_node, node, "closed")

        if node == end:
            return backtrace(parent, end)

        for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
            if nbr in done:
                continue
            new_dist = d + step_cost(node, nbr)
            seen = nbr in dist
            if seen and new_dist >= dist[nbr]:
                continue
            dist[nbr]   = new_dist
            parent[nbr] = node
            emit(on_node, nbr, "parent", node)
            heapq.heappush(pq, (new_dist, next(counter), nbr))
            if not seen:
                emit(on_node, nbr, "opened")

    return []
