"""
heuristics.py — Distance Estimates
===================================
All take the absolute offsets (dx, dy) between a cell and the goal.

  • manhattan   – dx + dy                       (admissible on 4-connected grids)
  • euclidean   – √(dx² + dy²)                 (admissible everywhere)
  • octile      – max + (√2-1)·min              (exact on 8-connected grids)
  • chebyshev   – max(dx, dy)
  • zero        – 0                              (A* degrades to Dijkstra)
"""

import math
from typing import Callable, Dict


def manhattan(dx: float, dy: float) -> float:
    return dx + dy

def euclidean(dx: float, dy: float) -> float:
    return math.sqrt(dx * dx + dy * dy)

def octile(dx: float, dy: float) -> float:
    f = math.sqrt(2) - 1
    return f * dx + dy if dx < dy else f * dy + dx

def chebyshev(dx: float, dy: float) -> float:
    return max(dx, dy)

def zero(dx: float, dy: float) -> float:
    return 0.0

HEURISTICS: Dict[str, Callable[[float, float], float]] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
    "octile":    octile,
    "chebyshev": chebyshev,
    "zero":      zero,
}


def get_heuristic(name: str) -> Callable[[float, float], float]:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {name}") from None
