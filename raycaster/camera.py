"""
Camera: sweeps one ray per screen column from the player's pose.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, replace
from typing import List, Optional

import numpy as np

from .config import EngineConfig
from .grid import TileGrid
from .motion import Pose
from .projection import column_angles, corrected_distance
from .ray import CastResult, RayCaster


@dataclass(frozen=True)
class ColumnSample:
    """What column `column` sees: the cast result and its corrected distance."""

    column: int
    angle: float
    heading: float
    result: CastResult
    distance: float


class Camera:
    """
    Holds the viewing pose and a separate scan pose for the column sweep.

    Both poses are plain values; sync() copies the viewing pose into the scan
    pose, so turning the scan ray never moves the camera.
    """

    def __init__(
        self,
        grid: TileGrid,
        pose: Pose,
        screen_width: int,
        config: Optional[EngineConfig] = None,
    ) -> None:
        if screen_width <= 0:
            raise ValueError(f"screen_width must be positive, got {screen_width}")
        self.grid = grid
        self.screen_width = screen_width
        self.config = config or EngineConfig()
        self.pose = pose
        self.scan_pose = pose
        self._angles = column_angles(screen_width, self.config.fov)
        # Perpendicular distance per column; inf where nothing was hit
        self.depth_buffer = np.full(screen_width, np.inf, dtype=np.float64)

    @property
    def fov(self) -> float:
        return self.config.fov

    def set_fov(self, fov: float) -> None:
        """Change the field of view; raises ValueError outside the valid range."""
        self.config = replace(self.config, fov=fov)
        self._angles = column_angles(self.screen_width, fov)

    def sync(self, pose: Pose) -> None:
        self.pose = pose
        self.scan_pose = Pose(pose.x, pose.y, pose.angle)

    def scan(self) -> List[ColumnSample]:
        """Cast every column from the current pose and refresh depth_buffer."""
        caster = RayCaster(
            self.pose.x,
            self.pose.y,
            self.pose.angle,
            self.grid,
            self.config.draw_distance,
        )
        samples = []
        for i, angle in enumerate(self._angles):
            angle = float(angle)
            self.scan_pose = self.pose.with_angle(self.pose.angle + angle)
            result = caster.with_angle(self.scan_pose.angle).cast()
            if result:
                distance = corrected_distance(result.distance, angle)
            else:
                distance = math.inf
            self.depth_buffer[i] = distance
            samples.append(
                ColumnSample(i, angle, self.scan_pose.angle, result, distance)
            )
        self.sync(self.pose)
        return samples

    def wall_heights(self, screen_height: int) -> np.ndarray:
        """Pixel height of every column's wall slice from depth_buffer."""
        depth = np.maximum(self.depth_buffer, 1e-3)
        heights = np.where(
            np.isfinite(depth), np.minimum(screen_height / depth, screen_height), 0
        )
        return heights.astype(np.int32)
