"""
bi_astar.py — Bidirectional A*
===============================
Two A* searches run alternately, the forward one guided towards the end
cell and the backward one towards the start cell.  The first time one side
touches a cell the other side has opened, both half paths are joined.

Meeting on first contact keeps the trace short but, like the
bidirectional BFS on weighted moves, the joined path is not guaranteed to
be optimal.

`bidirectional_search` is shared with bi_dijkstra (zero heuristic) and
bi_best_first (greedy: accumulated cost is ignored).
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid, Coord
from finders.heuristics import get_heuristic
from finders.util import NodeCallback, Path, bi_backtrace, emit, noop, step_cost


class _Side:
    """Open/closed bookkeeping for one search direction."""

    def __init__(self, root: Coord, goal: Coord, h_fn, weight: float, label: str, greedy: bool):
        self.goal    = goal
        self.h_fn    = h_fn
        self.weight  = weight
        self.label   = label
        self.greedy  = greedy
        self.counter = itertools.count()
        self.g:      Dict[Coord, float]           = {root: 0.0}
        self.parent: Dict[Coord, Optional[Coord]] = {root: None}
        self.closed: Set[Coord]                   = set()
        self.heap:   List[Tuple[float, int, Coord]] = [(self.h(root), next(self.counter), root)]

    def h(self, node: Coord) -> float:
        return self.weight * self.h_fn(abs(node[0] - self.goal[0]), abs(node[1] - self.goal[1]))

    def priority(self, node: Coord) -> float:
        if self.greedy:
            return self.h(node)
        return self.g[node] + self.h(node)

    def pop(self) -> Optional[Coord]:
        while self.heap:
            _, _, node = heapq.heappop(self.heap)
            if node not in self.closed:
                self.closed.add(node)
                return node
        return None


def bidirectional_search(
    start: Coord,
    end: Coord,
    grid: Grid,
    on_node: NodeCallback,
    allow_diagonal: bool,
    dont_cross_corners: bool,
    heuristic: str,
    weight: float = 1.0,
    greedy: bool = False,
) -> Path:
    h_fn = get_heuristic(heuristic)

    if start == end:
        emit(on_node, start, "opened", "start")
        emit(on_node, start, "closed")
        return [start]

    fwd = _Side(start, end, h_fn, weight, "start", greedy)
    bwd = _Side(end, start, h_fn, weight, "end", greedy)
    emit(on_node, start, "opened", "start")
    emit(on_node, end, "opened", "end")

    while fwd.heap and bwd.heap:
        for side, other in ((fwd, bwd), (bwd, fwd)):
            node = side.pop()
            if node is None:
                return []
            emit(on_node, node, "closed")

            for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
                if nbr in side.closed:
                    continue
                if nbr in other.parent:
                    if side is fwd:
                        return bi_backtrace(fwd.parent, node, bwd.parent, nbr)
                    return bi_backtrace(fwd.parent, nbr, bwd.parent, node)

                tentative_g = side.g[node] + step_cost(node, nbr)
                seen = nbr in side.g
                if seen and (greedy or tentative_g >= side.g[nbr]):
                    continue
                side.g[nbr]      = tentative_g
                side.parent[nbr] = node
                emit(on_node, nbr, "parent", node)
                heapq.heappush(side.heap, (side.priority(nbr), next(side.counter), nbr))
                if not seen:
                    emit(on_node, nbr, "opened", side.label)

    return []


def bi_astar(
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
    return bidirectional_search(
        (start_x, start_y), (end_x, end_y), grid, on_node,
        allow_diagonal, dont_cross_corners, heuristic, weight,
    )
