"""
breadth_first.py — Breadth-First Search
========================================
Explores layer by layer from the start cell; finds the shortest path by
move count.

Node events, in the order they happen:
  1. Enqueue a cell           →  "opened"
  2. Record its predecessor   →  "parent"
  3. Dequeue a cell           →  "closed"
"""

from collections import deque
from typing import Deque, Dict, Optional

from grid import Grid, Coord
from finders.util import NodeCallback, Path, backtrace, emit, noop


def breadth_first(
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

    queue:  Deque[Coord]                = deque([start])
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    emit(on_node, start, "opened")

    while queue:
        node = queue.popleft()
        emit(on_node, node, "closed")

        if node == end:
            return backtrace(parent, end)

        for nbr in grid.neighbours(node[0], node[1], allow_diagonal, dont_cross_corners):
            if nbr in parent:
                continue
            parent[nbr] = node
            emit(on_node, nbr, "parent", node)
            queue.append(nbr)
            emit(on_node, nbr, "opened")

    return []
