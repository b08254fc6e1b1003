"""
Column geometry: ray heading per screen column and fisheye correction.
"""

from __future__ import annotations
import math

import numpy as np

from .checks import require_real


def view_plane_distance(fov: float) -> float:
    """Distance to a view plane one unit wide that spans `fov` radians."""
    fov = require_real("fov", fov)
    if not 0 < fov < math.pi:
        raise ValueError(f"fov must lie in (0, pi), got {fov}")
    return 1.0 / (2.0 * math.tan(fov / 2.0))


def column_angle(i: float, screen_width: int, fov: float) -> float:
    """Angle of column `i` relative to the view direction."""
    if screen_width <= 0:
        raise ValueError(f"screen_width must be positive, got {screen_width}")
    d = view_plane_distance(fov)
    return math.atan((i - 0.5 * screen_width) / (d * screen_width))


def column_heading(
    i: float, screen_width: int, fov: float, base_heading: float
) -> float:
    """World heading of the ray cast for column `i`."""
    return base_heading + column_angle(i, screen_width, fov)


def column_angles(screen_width: int, fov: float) -> np.ndarray:
    """Angles of every column 0..screen_width-1 relative to the view direction."""
    if screen_width <= 0:
        raise ValueError(f"screen_width must be positive, got {screen_width}")
    d = view_plane_distance(fov)
    offsets = np.arange(screen_width, dtype=np.float64) - 0.5 * screen_width
    return np.arctan(offsets / (d * screen_width))


def corrected_distance(raw_distance: float, column_angle: float) -> float:
    """Perpendicular distance to a hit, removing fisheye distortion."""
    return raw_distance * math.cos(column_angle)


def wall_height(distance: float, screen_height: int) -> int:
    """Pixel height of a wall column at perpendicular `distance`."""
    if not math.isfinite(distance):
        return 0
    # Keep a floor on distance so a wall touching the eye fills the screen
    distance = max(distance, 1e-3)
    return min(screen_height, int(screen_height / distance))
