"""
coords.py — Page ↔ Grid Coordinate Mapping
===========================================
Pure conversion between continuous pointer coordinates (pixels inside the
drawing area) and discrete cell coordinates, for a fixed cell size.
"""

import math
from typing import Tuple


class CoordinateMapper:

    def __init__(self, cell_size: int = 30):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size: int = cell_size

    def to_grid_coordinate(self, page_x: float, page_y: float) -> Tuple[int, int]:
        return (
            math.floor(page_x / self.cell_size),
            math.floor(page_y / self.cell_size),
        )

    def to_page_coordinate(self, grid_x: int, grid_y: int) -> Tuple[int, int]:
        return (grid_x * self.cell_size, grid_y * self.cell_size)

    def cell_center(self, grid_x: int, grid_y: int) -> Tuple[float, float]:
        half = self.cell_size / 2
        return (grid_x * self.cell_size + half, grid_y * self.cell_size + half)
