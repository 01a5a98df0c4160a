"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, CoordinateMapper
"""

from grid.grid   import Grid, Coord
from grid.coords import CoordinateMapper

__all__ = [
    "Grid",
    "Coord",
    "CoordinateMapper",
]
