from __future__ import annotations
import math
from typing import TYPE_CHECKING, Optional
from .config import EngineConfig
from .motion import MotionResolver, Pose

if TYPE_CHECKING:
    from .grid import TileGrid


class Player:
    """Player pose and movement."""

    def __init__(
        self,
        x: float = 3.0,
        y: float = 3.0,
        angle: float = 0.0,
        move_speed: Optional[float] = None,
        rot_speed: Optional[float] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        """
        Initialize the player.
        x, y: starting position in map blocks (floats allowed).
        angle: facing direction in radians.
        move_speed: movement speed in blocks per second (defaults to config).
        rot_speed: rotation speed in radians per second (defaults to config).
        """
        self.config = config or EngineConfig()
        self.pose = Pose(float(x), float(y), float(angle))
        self.move_speed = (
            self.config.move_speed if move_speed is None else move_speed
        )
        self.rot_speed = self.config.rot_speed if rot_speed is None else rot_speed
        self.resolver = MotionResolver(self.config)

    @property
    def x(self) -> float:
        return self.pose.x

    @property
    def y(self) -> float:
        return self.pose.y

    @property
    def angle(self) -> float:
        return self.pose.angle

    @property
    def radius(self) -> float:
        return self.config.bound_radius

    def displace(self, dx: float, dy: float, world: TileGrid) -> None:
        """Move by (dx, dy), sliding along any wall in the way."""
        self.pose = self.resolver.move(self.pose, dx, dy, self.radius, world)

    def move(self, direction: int, world: TileGrid, dt: float) -> None:
        """Move the player forward (direction=1) or backward (direction=-1)."""
        dx = math.cos(self.angle) * self.move_speed * dt * direction
        dy = math.sin(self.angle) * self.move_speed * dt * direction
        self.displace(dx, dy, world)

    def strafe(self, direction: int, world: TileGrid, dt: float) -> None:
        """Strafe the player right (direction=1) or left (direction=-1)."""
        # Perpendicular direction vector (right-handed)
        dx = -math.sin(self.angle) * self.move_speed * dt * direction
        dy = math.cos(self.angle) * self.move_speed * dt * direction
        self.displace(dx, dy, world)

    def rotate(self, direction: int, dt: float) -> None:
        """Rotate the player left (direction=-1) or right (direction=1)."""
        self.pose = self.pose.rotated(self.rot_speed * dt * direction)
