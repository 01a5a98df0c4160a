"""
finders/__init__.py — Finder Registry
======================================
Single source of truth for every pathfinding algorithm the visualizer
knows about.

    from finders import REGISTRY, get_finder, make_finder

Every finder is a plain function with the same contract:

    finder(start_x, start_y, end_x, end_y, grid, on_node, **options) -> path

It runs synchronously to completion, returns the waypoints from start to
end (empty when unreachable), and reports every node status change through
`on_node(x, y, kind, value)` in traversal order.  The recorder is passed in
as `on_node`; nothing is patched.

Adding an algorithm is: write the function, add one entry here.
"""

import functools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from finders.astar            import astar
from finders.bi_astar         import bi_astar
from finders.best_first       import best_first
from finders.breadth_first    import breadth_first
from finders.bi_best_first    import bi_best_first
from finders.bi_breadth_first import bi_breadth_first
from finders.bi_dijkstra      import bi_dijkstra
from finders.dijkstra         import dijkstra
from finders.jump_point       import jump_point
from finders.heuristics       import HEURISTICS
from finders.util             import NodeCallback, Path, path_length


# ---------------------------------------------------------------------------
# FinderInfo: metadata card for each finder
# ---------------------------------------------------------------------------
@dataclass
class FinderInfo:
    key:            str                    # registry key, e.g. "astar"
    label:          str                    # human label, e.g. "A*"
    fn:             Callable               # the search function
    tags:           List[str] = field(default_factory=list)
    has_heuristic:  bool      = False      # expose heuristic selector?
    has_weight:     bool      = False      # expose heuristic weight?
    has_movement:   bool      = True       # honours allow_diagonal / dont_cross_corners?
    description:    str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, FinderInfo] = {

    "astar": FinderInfo(
        key="astar", label="A*", fn=astar,
        tags=["shortest-path", "heuristic"],
        has_heuristic=True, has_weight=True,
        description="Dijkstra + heuristic guidance. Optimal when h is admissible and weight is 1.",
    ),

    "bi_astar": FinderInfo(
        key="bi_astar", label="Bi-directional A*", fn=bi_astar,
        tags=["heuristic", "bidirectional"],
        has_heuristic=True, has_weight=True,
        description="Two A* frontiers, from start and from end, joined on first contact.",
    ),

    "best_first": FinderInfo(
        key="best_first", label="Best-First Search", fn=best_first,
        tags=["heuristic", "suboptimal"],
        has_heuristic=True,
        description="Pure heuristic. Fast but NOT optimal.",
    ),

    "bi_best_first": FinderInfo(
        key="bi_best_first", label="Bi-directional Best-First", fn=bi_best_first,
        tags=["heuristic", "bidirectional", "suboptimal"],
        has_heuristic=True,
        description="Two greedy frontiers, each heading for the other's root.",
    ),

    "breadth_first": FinderInfo(
        key="breadth_first", label="Breadth-First Search", fn=breadth_first,
        tags=["unweighted", "shortest-path"],
        description="Explores layer by layer. Shortest path by number of moves.",
    ),

    "bi_breadth_first": FinderInfo(
        key="bi_breadth_first", label="Bi-directional BFS", fn=bi_breadth_first,
        tags=["unweighted", "bidirectional"],
        description="Two BFS frontiers meet in the middle. Explores far fewer cells.",
    ),

    "dijkstra": FinderInfo(
        key="dijkstra", label="Dijkstra", fn=dijkstra,
        tags=["shortest-path"],
        description="Expands the cheapest open cell first. Diagonal moves cost √2.",
    ),

    "bi_dijkstra": FinderInfo(
        key="bi_dijkstra", label="Bi-directional Dijkstra", fn=bi_dijkstra,
        tags=["bidirectional"],
        description="Two cheapest-first frontiers joined on first contact.",
    ),

    "jump_point": FinderInfo(
        key="jump_point", label="Jump Point Search", fn=jump_point,
        tags=["shortest-path", "heuristic", "diagonal"],
        has_heuristic=True, has_movement=False,
        description="A* that only opens jump points. Always moves diagonally.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_finder(key: str) -> Optional[FinderInfo]:
    """Return FinderInfo by key, or None."""
    return REGISTRY.get(key)


def list_finders() -> List[FinderInfo]:
    """Return all registered finders in insertion order."""
    return list(REGISTRY.values())


def make_finder(
    key: str,
    allow_diagonal: bool = False,
    dont_cross_corners: bool = False,
    heuristic: str = "manhattan",
    weight: float = 1.0,
) -> Callable[..., Path]:
    """
    Bind the options a finder understands and return
    `finder(start_x, start_y, end_x, end_y, grid, on_node) -> path`.
    """
    info = get_finder(key)
    if info is None:
        raise ValueError(f"Unknown finder: {key}")
    if heuristic not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {heuristic}")

    kwargs: Dict[str, Any] = {}
    if info.has_movement:
        kwargs["allow_diagonal"]     = allow_diagonal
        kwargs["dont_cross_corners"] = dont_cross_corners
    if info.has_heuristic:
        kwargs["heuristic"] = heuristic
    if info.has_weight:
        kwargs["weight"] = weight

    return functools.partial(info.fn, **kwargs)


__all__ = [
    "FinderInfo",
    "REGISTRY",
    "HEURISTICS",
    "NodeCallback",
    "Path",
    "get_finder",
    "list_finders",
    "make_finder",
    "path_length",
]
