"""
Pose type and movement resolution with wall sliding.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from .checks import require_real
from .config import EngineConfig
from .grid import TileGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pose:
    """Position in map units plus heading in radians (unbounded)."""

    x: float
    y: float
    angle: float = 0.0

    def translated(self, dx: float, dy: float) -> Pose:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, delta: float) -> Pose:
        return replace(self, angle=self.angle + delta)

    def with_angle(self, angle: float) -> Pose:
        return replace(self, angle=angle)


class MotionResolver:
    """
    Moves a circular body across a TileGrid.

    A move whose straight path is free is taken as is. Otherwise each axis advances
    in `slide` sized steps until it would collide or reach the requested
    displacement, which lets the body slide along walls.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def move(
        self,
        pose: Pose,
        dx: float,
        dy: float,
        radius: Optional[float] = None,
        grid: Optional[TileGrid] = None,
    ) -> Pose:
        """Return `pose` moved by up to (dx, dy) without entering a wall."""
        if grid is None:
            raise ValueError("MotionResolver.move requires a grid, got None")
        if not isinstance(pose, Pose):
            raise TypeError(f"pose must be a Pose, got {type(pose).__name__}")
        dx = require_real("dx", dx)
        dy = require_real("dy", dy)
        if radius is None:
            radius = self.config.bound_radius
        radius = require_real("radius", radius)
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        if self._path_clear(pose, dx, dy, radius, grid):
            return pose.translated(dx, dy)

        slide = self.config.slide
        step_x = math.copysign(slide, dx)
        step_y = math.copysign(slide, dy)
        # Offsets are derived from step counts so they do not drift.
        count_x = count_y = 0
        tx = ty = 0.0
        active_x = dx != 0
        active_y = dy != 0
        iterations = 0
        while active_x or active_y:
            if iterations >= self.config.max_slide_steps:
                logger.warning(
                    "Slide resolution hit %d iterations at (%.3f, %.3f)",
                    iterations,
                    pose.x,
                    pose.y,
                )
                break
            iterations += 1
            if active_x:
                cand = (count_x + 1) * step_x
                if abs(cand) <= abs(dx) and not grid.circle_blocked(
                    pose.x + cand, pose.y + ty, radius
                ):
                    count_x += 1
                    tx = cand
                else:
                    active_x = False
            if active_y:
                cand = (count_y + 1) * step_y
                if abs(cand) <= abs(dy) and not grid.circle_blocked(
                    pose.x + tx, pose.y + cand, radius
                ):
                    count_y += 1
                    ty = cand
                else:
                    active_y = False
        return pose.translated(tx, ty)

    def _path_clear(
        self, pose: Pose, dx: float, dy: float, radius: float, grid: TileGrid
    ) -> bool:
        """
        True if the body can travel straight to (pose.x + dx, pose.y + dy).

        Intermediate positions are sampled no further apart than the body's
        radius, so a long move cannot jump over a wall cell.
        """
        spacing = max(radius, self.config.slide)
        samples = max(1, math.ceil(math.hypot(dx, dy) / spacing))
        for i in range(1, samples + 1):
            t = i / samples
            if grid.circle_blocked(pose.x + dx * t, pose.y + dy * t, radius):
                return False
        return True
