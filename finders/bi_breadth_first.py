"""
bi_breadth_first.py — Bidirectional BFS
========================================
Two BFS frontiers expand alternately, one from the start and one from the
end.  The search stops the moment a frontier reaches a cell the other side
has already discovered.

The "opened" value tells which side discovered the cell ("start" / "end").
"""

from collections import deque
from typing import Deque, Dict, Optional

from grid import Grid, Coord
from finders.util import NodeCallback, Path, bi_backtrace, emit, noop


def bi_breadth_first(
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

    if start == end:
        emit(on_node, start, "opened", "start")
        emit(on_node, start, "closed")
        return [start]

    q_start:  Deque[Coord]                 = deque([start])
    q_end:    Deque[Coord]                 = deque([end])
    p_start:  Dict[Coord, Optional[Coord]] = {start: None}
    p_end:    Dict[Coord, Optional[Coord]] = {end: None}
    emit(on_node, start, "opened", "start")
    emit(on_node, end, "opened", "end")

    while q_start and q_end:
        # -- expand one cell on the start side --
        node = q_start.popleft()
        emit(on_node, node, "closed")
        for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
            if nbr in p_start:
                continue
            if nbr in p_end:
                return bi_backtrace(p_start, node, p_end, nbr)
            p_start[nbr] = node
            emit(on_node, nbr, "parent", node)
            q_start.append(nbr)
            emit(on_node, nbr, "opened", "start")

        # -- expand one cell on the end side --
        node = q_end.popleft()
        emit(on_node, node, "closed")
        for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
            if nbr in p_end:
                continue
            if nbr in p_start:
                return bi_backtrace(p_start, nbr, p_end, node)
            p_end[nbr] = node
            emit(on_node, nbr, "parent", node)
            q_end.append(nbr)
            emit(on_node, nbr, "opened", "end")

    return []
