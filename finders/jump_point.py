"""
jump_point.py — Jump Point Search
==================================
A* over "jump points" only.  From each expanded cell the search runs in a
straight line (or a diagonal) until it hits the goal, a wall, or a cell
with a forced neighbour, and only that cell is opened.  Long empty
stretches therefore cost one open-set entry instead of one per cell.

Always 8-connected: a diagonal step is allowed when at least one of the two
straight cells beside it is open.  The returned path is expanded back to
one waypoint per cell so it draws and measures like every other finder's.

Node events:
  • "opened"  – jump point pushed onto the open set (first time only)
  • "parent"  – jump point got a better predecessor
  • "closed"  – jump point popped and expanded
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid, Coord
from finders.heuristics import get_heuristic, octile
from finders.util import NodeCallback, Path, backtrace, emit, noop


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _pruned_neighbours(grid: Grid, node: Coord, parent: Optional[Coord]) -> List[Coord]:
    """Natural and forced neighbours of `node` given the direction it was reached from."""
    x, y = node
    if parent is None:
        return grid.neighbours(x, y, allow_diagonal=True)

    dx = _sign(x - parent[0])
    dy = _sign(y - parent[1])
    walkable = grid.is_walkable_at
    result: List[Coord] = []

    if dx and dy:
        if walkable(x, y + dy):
            result.append((x, y + dy))
        if walkable(x + dx, y):
            result.append((x + dx, y))
        if walkable(x, y + dy) or walkable(x + dx, y):
            result.append((x + dx, y + dy))
        if not walkable(x - dx, y) and walkable(x, y + dy):
            result.append((x - dx, y + dy))
        if not walkable(x, y - dy) and walkable(x + dx, y):
            result.append((x + dx, y - dy))
    elif dx:
        if walkable(x + dx, y):
            result.append((x + dx, y))
            if not walkable(x, y + 1):
                result.append((x + dx, y + 1))
            if not walkable(x, y - 1):
                result.append((x + dx, y - 1))
    else:
        if walkable(x, y + dy):
            result.append((x, y + dy))
            if not walkable(x + 1, y):
                result.append((x + 1, y + dy))
            if not walkable(x - 1, y):
                result.append((x - 1, y + dy))
    return result


def _jump(grid: Grid, x: int, y: int, dx: int, dy: int, end: Coord) -> Optional[Coord]:
    """Walk from (x, y) in direction (dx, dy); return the first jump point or None."""
    walkable = grid.is_walkable_at
    while True:
        if not walkable(x, y):
            return None
        if (x, y) == end:
            return (x, y)

        if dx and dy:
            if (walkable(x - dx, y + dy) and not walkable(x - dx, y)) or \
               (walkable(x + dx, y - dy) and not walkable(x, y - dy)):
                return (x, y)
            # a diagonal run stops wherever a straight run from it would find something
            if _jump(grid, x + dx, y, dx, 0, end) or _jump(grid, x, y + dy, 0, dy, end):
                return (x, y)
            if not (walkable(x + dx, y) or walkable(x, y + dy)):
                return None
        elif dx:
            if (walkable(x + dx, y + 1) and not walkable(x, y + 1)) or \
               (walkable(x + dx, y - 1) and not walkable(x, y - 1)):
                return (x, y)
        else:
            if (walkable(x + 1, y + dy) and not walkable(x + 1, y)) or \
               (walkable(x - 1, y + dy) and not walkable(x - 1, y)):
                return (x, y)

        x += dx
        y += dy


def expand_path(path: Path) -> Path:
    """Fill in every cell between consecutive jump points."""
    if not path:
        return []
    full: Path = [path[0]]
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        dx, dy = _sign(bx - ax), _sign(by - ay)
        x, y = ax, ay
        while (x, y) != (bx, by):
            x += dx
            y += dy
            full.append((x, y))
    return full


def jump_point(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    grid: Grid,
    on_node: NodeCallback = noop,
    heuristic: str = "manhattan",
) -> Path:
    h_fn  = get_heuristic(heuristic)
    start: Coord = (start_x, start_y)
    end:   Coord = (end_x, end_y)

    def h(node: Coord) -> float:
        return h_fn(abs(node[0] - end_x), abs(node[1] - end_y))

    counter = itertools.count()
    g_score:  Dict[Coord, float]             = {start: 0.0}
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
            return expand_path(backtrace(parent, end))

        for nx, ny in _pruned_neighbours(grid, node, parent[node]):
            jp = _jump(grid, nx, ny, nx - node[0], ny - node[1], end)
            if jp is None or jp in closed:
                continue

            # each jump is a straight or pure diagonal run
            tentative_g = g_score[node] + octile(abs(jp[0] - node[0]), abs(jp[1] - node[1]))
            seen = jp in g_score
            if seen and tentative_g >= g_score[jp]:
                continue

            g_score[jp] = tentative_g
            parent[jp]  = node
            emit(on_node, jp, "parent", node)
            heapq.heappush(open_set, (tentative_g + h(jp), next(counter), jp))
            if not seen:
                emit(on_node, jp, "opened")

    return []
