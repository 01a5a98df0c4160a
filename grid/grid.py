"""
grid.py — Walkability Grid
===========================
Single source of truth for which cells can be walked on.  The controller
owns the canonical instance; every search runs on a private `clone()` so
the user can keep editing walls while a trace is being replayed.

Responsibilities:
  1. Bounds-checked walkability reads / writes
  2. Neighbour queries for the finders       (4- or 8-connected)
  3. Deep copy                               (clone)
  4. Serialisation round-trip                (to_dict / from_dict / from_matrix)

Design decisions:
  - Cells are stored row-major as `_walkable[y][x]` booleans.  There is no
    per-cell object: the finders keep their own bookkeeping in dicts, so a
    clone is just a copy of the nested lists.
  - Out-of-range reads answer "not walkable", out-of-range writes are
    silently dropped.  Pointer events regularly land outside the grid.
"""

from typing import List, Tuple, Iterator, Sequence


Coord = Tuple[int, int]


class Grid:
    """
    Attributes:
        width      : number of columns
        height     : number of rows
        _walkable  : [[bool]] indexed [y][x]
    """

    def __init__(self, width: int, height: int):
        self.width:     int               = width
        self.height:    int               = height
        self._walkable: List[List[bool]]  = [[True] * width for _ in range(height)]

    # ==================================================================
    # WALKABILITY
    # ==================================================================
    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable_at(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return False
        return self._walkable[y][x]

    def set_walkable_at(self, x: int, y: int, walkable: bool) -> None:
        if not self.is_inside(x, y):
            return
        self._walkable[y][x] = bool(walkable)

    def walls(self) -> Iterator[Coord]:
        for y, row in enumerate(self._walkable):
            for x, walkable in enumerate(row):
                if not walkable:
                    yield (x, y)

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbours(
        self,
        x: int,
        y: int,
        allow_diagonal: bool = False,
        dont_cross_corners: bool = False,
    ) -> List[Coord]:
        """
        Walkable neighbours of (x, y), straight moves first
        (up, right, down, left), then diagonals.

        A diagonal move is allowed when at least one of the two adjacent
        straight cells is open, or both of them when `dont_cross_corners`.
        """
        result: List[Coord] = []
        up    = self.is_walkable_at(x, y - 1)
        right = self.is_walkable_at(x + 1, y)
        down  = self.is_walkable_at(x, y + 1)
        left  = self.is_walkable_at(x - 1, y)

        if up:
            result.append((x, y - 1))
        if right:
            result.append((x + 1, y))
        if down:
            result.append((x, y + 1))
        if left:
            result.append((x - 1, y))

        if not allow_diagonal:
            return result

        if dont_cross_corners:
            up_left, up_right     = up and left,   up and right
            down_right, down_left = down and right, down and left
        else:
            up_left, up_right     = up or left,    up or right
            down_right, down_left = down or right, down or left

        if up_left and self.is_walkable_at(x - 1, y - 1):
            result.append((x - 1, y - 1))
        if up_right and self.is_walkable_at(x + 1, y - 1):
            result.append((x + 1, y - 1))
        if down_right and self.is_walkable_at(x + 1, y + 1):
            result.append((x + 1, y + 1))
        if down_left and self.is_walkable_at(x - 1, y + 1):
            result.append((x - 1, y + 1))

        return result

    # ==================================================================
    # COPY & SERIALISATION
    # ==================================================================
    def clone(self) -> "Grid":
        g = Grid(self.width, self.height)
        g._walkable = [list(row) for row in self._walkable]
        return g

    def to_dict(self) -> dict:
        return {
            "width":  self.width,
            "height": self.height,
            "walls":  [list(c) for c in self.walls()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        g = cls(data["width"], data["height"])
        for x, y in data.get("walls", []):
            g.set_walkable_at(x, y, False)
        return g

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "Grid":
        """Rows of 0 (walkable) / 1 (wall)."""
        height = len(matrix)
        width  = len(matrix[0]) if height else 0
        g = cls(width, height)
        for y, row in enumerate(matrix):
            for x, cell in enumerate(row):
                if cell:
                    g.set_walkable_at(x, y, False)
        return g

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, walls={sum(1 for _ in self.walls())})"
