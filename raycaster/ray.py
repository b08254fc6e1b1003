"""
Ray casting against a TileGrid.

A ray walks from grid line to grid line (digital differential analysis)
rather than sampling at fixed steps, so every wall cell it enters is tested
exactly once and hit points land exactly on cell boundaries.
"""

from __future__ import annotations
import enum
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .checks import is_integral, require_real
from .config import AXIS_EPSILON, DRAW_DISTANCE, GRID_EPSILON
from .grid import TileGrid


class Face(enum.IntEnum):
    """Side of a wall cell struck by a ray."""

    EAST = 0  # +x side
    SOUTH = 1  # +y side
    WEST = 2  # -x side
    NORTH = 3  # -y side


@dataclass(frozen=True)
class Hit:
    """Point where a ray meets a wall, the face struck and the ray length."""

    x: float
    y: float
    face: Face
    distance: float

    @property
    def point(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Miss:
    """Result of a cast that found no wall within range."""

    _instance: Optional[Miss] = None

    def __new__(cls) -> Miss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS = Miss()
CastResult = Union[Hit, Miss]


def _sign(value: float, eps: float) -> int:
    if abs(value) < eps:
        return 0
    return 1 if value > 0 else -1


def _entered(coord: float, sign: int, eps: float) -> int:
    """Index of the cell a ray moving with `sign` enters at `coord`."""
    if is_integral(coord, eps):
        return round(coord) - (1 if sign < 0 else 0)
    return math.floor(coord)


def _snap(coord: float, eps: float) -> float:
    nearest = round(coord)
    return float(nearest) if abs(coord - nearest) <= eps else coord


def _outside(coord: float, sign: int, size: int) -> bool:
    """True if a ray at `coord` moving with `sign` can no longer enter the map."""
    return (
        (coord >= size and sign >= 0)
        or (coord < 0 and sign <= 0)
        or (coord <= 0 and sign < 0)
    )


class RayCaster:
    """
    Casts a single ray from (x, y) along `angle` through `grid`.

    The caster never changes after construction; use with_angle() or
    with_origin() to derive casters for other columns or positions.
    """

    def __init__(
        self,
        x: float,
        y: float,
        angle: float,
        grid: TileGrid,
        max_distance: float = DRAW_DISTANCE,
        axis_epsilon: float = AXIS_EPSILON,
        grid_epsilon: float = GRID_EPSILON,
    ) -> None:
        if grid is None:
            raise ValueError("RayCaster requires a grid, got None")
        if not isinstance(grid, TileGrid):
            raise TypeError(
                f"RayCaster requires a TileGrid, got {type(grid).__name__}"
            )
        self._x = require_real("x", x)
        self._y = require_real("y", y)
        self._angle = require_real("angle", angle)
        self._max_distance = require_real("max_distance", max_distance)
        if self._max_distance <= 0:
            raise ValueError(
                f"max_distance must be positive, got {self._max_distance}"
            )
        self._grid = grid
        self._axis_eps = axis_epsilon
        self._grid_eps = grid_epsilon
        self.sign_cos = _sign(math.cos(self._angle), axis_epsilon)
        self.sign_sin = _sign(math.sin(self._angle), axis_epsilon)
        # Line through the origin: y = slope * x + intercept. Only defined
        # when the ray is not parallel to an axis.
        if self.sign_cos and self.sign_sin:
            self._slope = math.tan(self._angle)
            self._intercept = self._y - self._slope * self._x
        else:
            self._slope = None
            self._intercept = None

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def grid(self) -> TileGrid:
        return self._grid

    @property
    def max_distance(self) -> float:
        return self._max_distance

    def with_angle(self, angle: float) -> RayCaster:
        return RayCaster(
            self._x,
            self._y,
            angle,
            self._grid,
            self._max_distance,
            self._axis_eps,
            self._grid_eps,
        )

    def with_origin(self, x: float, y: float) -> RayCaster:
        return RayCaster(
            x,
            y,
            self._angle,
            self._grid,
            self._max_distance,
            self._axis_eps,
            self._grid_eps,
        )

    def next_x_crossing(
        self, tip_x: float, tip_y: float
    ) -> Optional[Tuple[float, float]]:
        """Next point where the ray crosses a vertical grid line, if any."""
        if self.sign_cos == 0:
            return None
        if is_integral(tip_x, self._grid_eps):
            next_x = float(round(tip_x) + self.sign_cos)
        elif self.sign_cos > 0:
            next_x = float(math.ceil(tip_x))
        else:
            next_x = float(math.floor(tip_x))
        if self.sign_sin == 0:
            next_y = self._y
        else:
            next_y = self._slope * next_x + self._intercept
        return next_x, _snap(next_y, self._grid_eps)

    def next_y_crossing(
        self, tip_x: float, tip_y: float
    ) -> Optional[Tuple[float, float]]:
        """Next point where the ray crosses a horizontal grid line, if any."""
        if self.sign_sin == 0:
            return None
        if is_integral(tip_y, self._grid_eps):
            next_y = float(round(tip_y) + self.sign_sin)
        elif self.sign_sin > 0:
            next_y = float(math.ceil(tip_y))
        else:
            next_y = float(math.floor(tip_y))
        if self.sign_cos == 0:
            next_x = self._x
        else:
            next_x = (next_y - self._intercept) / self._slope
        return _snap(next_x, self._grid_eps), next_y

    def cast(self) -> CastResult:
        """Return the first wall hit within max_distance, or MISS."""
        tip_x, tip_y = self._x, self._y
        # A ray starting on a grid line may enter a new cell immediately.
        if self._entered_cell(tip_x, tip_y) != (
            math.floor(tip_x),
            math.floor(tip_y),
        ) and self._blocked_at(tip_x, tip_y):
            return self._hit(tip_x, tip_y, 0.0)
        while True:
            x_cross = self.next_x_crossing(tip_x, tip_y)
            y_cross = self.next_y_crossing(tip_x, tip_y)
            x_dist = (
                math.hypot(x_cross[0] - tip_x, x_cross[1] - tip_y)
                if x_cross is not None
                else math.inf
            )
            y_dist = (
                math.hypot(y_cross[0] - tip_x, y_cross[1] - tip_y)
                if y_cross is not None
                else math.inf
            )
            # Ties go to the y-crossing
            tip_x, tip_y = x_cross if x_dist < y_dist else y_cross
            distance = math.hypot(tip_x - self._x, tip_y - self._y)
            if distance >= self._max_distance:
                return MISS
            if self._blocked_at(tip_x, tip_y):
                return self._hit(tip_x, tip_y, distance)
            if self._leaving_grid(tip_x, tip_y):
                return MISS

    def determine_face(
        self, x: float, y: float, sign_cos: int, sign_sin: int
    ) -> Face:
        """
        Return the face struck at crossing point (x, y).

        On a grid corner the wall face is east/west when the cell beside the
        ray's previous cell (across the horizontal grid line) is a wall too,
        otherwise north/south. Rays parallel to an axis always strike the
        face across their direction of travel.
        """
        on_x = is_integral(x, self._grid_eps)
        on_y = is_integral(y, self._grid_eps)
        if on_x and on_y:
            if sign_sin == 0:
                return self._x_face(sign_cos)
            if sign_cos == 0:
                return self._y_face(sign_sin)
            col = _entered(x, sign_cos, self._grid_eps)
            row = _entered(y, sign_sin, self._grid_eps)
            if self._grid.cell_blocked(col, row - sign_sin):
                return self._x_face(sign_cos)
            return self._y_face(sign_sin)
        if on_x:
            return self._x_face(sign_cos)
        if on_y:
            return self._y_face(sign_sin)
        raise ValueError(f"({x}, {y}) does not lie on a grid line")

    @staticmethod
    def _x_face(sign_cos: int) -> Face:
        return Face.EAST if sign_cos < 0 else Face.WEST

    @staticmethod
    def _y_face(sign_sin: int) -> Face:
        return Face.SOUTH if sign_sin < 0 else Face.NORTH

    def _hit(self, x: float, y: float, distance: float) -> Hit:
        face = self.determine_face(x, y, self.sign_cos, self.sign_sin)
        return Hit(x, y, face, distance)

    def _entered_cell(self, x: float, y: float) -> Tuple[int, int]:
        return (
            _entered(x, self.sign_cos, self._grid_eps),
            _entered(y, self.sign_sin, self._grid_eps),
        )

    def _blocked_at(self, x: float, y: float) -> bool:
        col, row = self._entered_cell(x, y)
        if self._grid.cell_blocked(col, row):
            return True
        # Passing exactly between two diagonally touching walls
        if (
            self.sign_cos
            and self.sign_sin
            and is_integral(x, self._grid_eps)
            and is_integral(y, self._grid_eps)
        ):
            return self._grid.cell_blocked(
                col - self.sign_cos, row
            ) and self._grid.cell_blocked(col, row - self.sign_sin)
        return False

    def _leaving_grid(self, x: float, y: float) -> bool:
        """True once the tip is off the map and heading further away."""
        return _outside(x, self.sign_cos, self._grid.width) or _outside(
            y, self.sign_sin, self._grid.height
        )

    def __repr__(self) -> str:
        return (
            f"<RayCaster x={self._x:.2f} y={self._y:.2f} "
            f"angle={self._angle:.3f} max={self._max_distance}>"
        )
