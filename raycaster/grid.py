"""
Immutable occupancy grid with point and circle collision queries.
"""

from __future__ import annotations
import enum
import logging
import math
import numbers
from typing import Iterator, Sequence, Tuple

from .checks import require_real
from .config import TILE_EMPTY, TILE_WALL

logger = logging.getLogger(__name__)


class Tile(enum.IntEnum):
    """Kinds of tile a grid cell can hold."""

    EMPTY = TILE_EMPTY
    WALL = TILE_WALL


class TileGrid:
    """
    Rectangular map from cell (col, row) to a Tile.

    Cell (c, r) covers the square [c, c+1) x [r, r+1) in map units. The grid
    copies its input and cannot be changed afterwards.
    """

    def __init__(self, rows: Sequence[Sequence[int]]) -> None:
        if rows is None:
            raise ValueError("TileGrid requires a grid, got None")
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise TypeError("TileGrid requires a sequence of rows")
        if len(rows) == 0:
            raise ValueError("TileGrid requires at least one row")
        width = None
        cells = []
        for r, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
                raise TypeError(f"row {r} is not a sequence")
            if width is None:
                width = len(row)
                if width == 0:
                    raise ValueError("TileGrid rows must not be empty")
            elif len(row) != width:
                raise ValueError(
                    f"jagged grid: row {r} has {len(row)} cells, expected {width}"
                )
            cells.append(tuple(self._tile(code, r, c) for c, code in enumerate(row)))
        self._rows: Tuple[Tuple[Tile, ...], ...] = tuple(cells)
        self.height = len(cells)
        self.width = width
        logger.debug("Built %dx%d tile grid", self.width, self.height)

    @staticmethod
    def _tile(code: object, row: int, col: int) -> Tile:
        if isinstance(code, bool) or not isinstance(code, numbers.Integral):
            raise TypeError(
                f"tile at ({col}, {row}) must be an int code, got {code!r}"
            )
        try:
            return Tile(int(code))
        except ValueError:
            raise ValueError(f"unknown tile code {code} at ({col}, {row})") from None

    @property
    def rows(self) -> Tuple[Tuple[Tile, ...], ...]:
        return self._rows

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def tile_at(self, col: int, row: int) -> Tile:
        """Return the tile at a cell; cells off the map read as EMPTY."""
        if not self.in_bounds(col, row):
            return Tile.EMPTY
        return self._rows[row][col]

    def cell_blocked(self, col: int, row: int) -> bool:
        return self.tile_at(col, row) == Tile.WALL

    def walls(self) -> Iterator[Tuple[int, int]]:
        """Yield (col, row) of every wall cell in row-major order."""
        for row, cells in enumerate(self._rows):
            for col, tile in enumerate(cells):
                if tile == Tile.WALL:
                    yield col, row

    def point_blocked(self, x: float, y: float) -> bool:
        """Return True if (x, y) lies in a wall cell. Off-map points are open."""
        x = require_real("x", x)
        y = require_real("y", y)
        return self.cell_blocked(math.floor(x), math.floor(y))

    def circle_blocked(self, cx: float, cy: float, radius: float) -> bool:
        """Return True if the circle at (cx, cy) overlaps any wall cell."""
        cx = require_real("cx", cx)
        cy = require_real("cy", cy)
        radius = require_real("radius", radius)
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        # Cells outside this window cannot touch the circle; the extra cell on
        # each side covers centres lying exactly on a grid line.
        row_lo = max(0, math.floor(cy - radius) - 1)
        row_hi = min(self.height - 1, math.floor(cy + radius) + 1)
        col_lo = max(0, math.floor(cx - radius) - 1)
        col_hi = min(self.width - 1, math.floor(cx + radius) + 1)
        for row in range(row_lo, row_hi + 1):
            cells = self._rows[row]
            for col in range(col_lo, col_hi + 1):
                if cells[col] == Tile.WALL and _overlaps_cell(
                    cx, cy, radius, col, row
                ):
                    return True
        return False

    def __repr__(self) -> str:
        return f"<TileGrid {self.width}x{self.height}>"


def _overlaps_cell(cx: float, cy: float, radius: float, col: int, row: int) -> bool:
    x1, y1 = col, row
    x2, y2 = col + 1, row + 1
    between_x = x1 <= cx <= x2
    between_y = y1 <= cy <= y2
    # Centre inside the square
    if between_x and between_y:
        return True
    # Within one radius of an edge
    if between_x and (abs(y1 - cy) < radius or abs(cy - y2) < radius):
        return True
    if between_y and (abs(x1 - cx) < radius or abs(cx - x2) < radius):
        return True
    # Within one radius of a corner
    for corner_x, corner_y in ((x1, y1), (x1, y2), (x2, y1), (x2, y2)):
        if math.hypot(corner_x - cx, corner_y - cy) < radius:
            return True
    return False
