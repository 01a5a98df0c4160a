"""
util.py — Shared Finder Helpers
================================
Path reconstruction, step costs and the node-callback type every finder
reports its traversal through.
"""

import math
from typing import Any, Callable, Dict, List, Optional

from grid import Coord


# on_node(x, y, kind, value): kind is "opened", "closed" or "parent"
NodeCallback = Callable[[int, int, str, Any], None]

Path = List[Coord]

SQRT2 = math.sqrt(2)


def backtrace(parent: Dict[Coord, Optional[Coord]], node: Coord) -> Path:
    """Follow parent links back to the root and return root → node."""
    path: Path = []
    cur: Optional[Coord] = node
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path


def bi_backtrace(
    parent_a: Dict[Coord, Optional[Coord]],
    node_a: Coord,
    parent_b: Dict[Coord, Optional[Coord]],
    node_b: Coord,
) -> Path:
    """Join two half paths that met between node_a and node_b."""
    head = backtrace(parent_a, node_a)
    tail = backtrace(parent_b, node_b)
    tail.reverse()
    return head + tail


def step_cost(a: Coord, b: Coord) -> float:
    """1 for a straight move, √2 for a diagonal one."""
    if a[0] == b[0] or a[1] == b[1]:
        return 1.0
    return SQRT2


def path_length(path: Path) -> int:
    """Number of moves along the path."""
    return len(path) - 1 if len(path) > 1 else 0


def noop(x: int, y: int, kind: str, value: Any) -> None:
    pass


def emit(on_node: NodeCallback, node: Coord, kind: str, value: Any = True) -> None:
    on_node(node[0], node[1], kind, value)

