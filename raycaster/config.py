from __future__ import annotations
import math
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Screen settings
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
FPS = 60

# Tile codes
TILE_EMPTY = 0
TILE_WALL = 1

# Player settings
# Movement speed in map units per second
MOVE_SPEED = 3.0
# Rotation speed in radians per second
ROT_SPEED = math.pi
# Radius of the player's circular footprint (map units)
BOUND_RADIUS = 0.3
# Length of one sliding step when resolving a blocked move (map units)
SLIDE = 0.01
# Upper bound on sliding iterations per move
MAX_SLIDE_STEPS = 1000

# Raycasting settings
# Field of view angle (in radians) and the range a FOV slider may pick from
FOV = math.pi / 3
FOV_MIN = math.radians(60)
FOV_MAX = math.radians(90)
# Maximum length of a cast ray (map units)
DRAW_DISTANCE = 64.0
# |cos| or |sin| below this marks a ray as axis-aligned
AXIS_EPSILON = 1e-12
# Coordinates this close to an integer are treated as lying on a grid line
GRID_EPSILON = 1e-9

# Colors
CEILING_COLOR = (30, 30, 30)
FLOOR_COLOR = (170, 170, 170)
# Wall colour per face code: east, south, west, north
FACE_COLORS = (
    (0, 0, 0),
    (0, 68, 0),
    (0, 136, 0),
    (0, 204, 0),
)
# Top-down debug view
TOP_DOWN_CELL = 16
TOP_DOWN_WALL_COLOR = (0, 0, 255)
TOP_DOWN_PLAYER_COLOR = (0, 255, 0)
TOP_DOWN_HEADING_COLOR = (255, 0, 0)
TOP_DOWN_HIT_COLOR = (255, 0, 0)

# Default world: 1 = wall, 0 = empty space
DEFAULT_MAP = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 1),
    (1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 1, 0, 1, 1, 1, 0, 0, 1, 1, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 0, 0, 0, 1, 0, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1),
    (0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 1),
    (1, 0, 1, 0, 1, 0, 0, 0, 1, 0, 1, 0, 1, 0, 1),
    (1, 0, 1, 0, 0, 1, 0, 1, 1, 1, 1, 1, 1, 0, 1),
    (1, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 1, 0, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)
# Player start cell; the player spawns at its centre facing +x
START_X = 7
START_Y = 7


def _within(value: float, low: float, high: float) -> bool:
    """Closed range test that also accepts bounds reached by another formula,
    e.g. math.pi / 2 against math.radians(90)."""
    return (
        low <= value <= high
        or math.isclose(value, low)
        or math.isclose(value, high)
    )


@dataclass(frozen=True)
class EngineConfig:
    """
    Tuning values shared by motion resolution and casting.

    fov: field of view in radians, within [FOV_MIN, FOV_MAX].
    draw_distance: maximum ray length in map units, > 0.
    bound_radius: player footprint radius in map units, in (0, 0.5).
    slide: sliding step in map units, in (0, bound_radius].
    max_slide_steps: iteration cap for a single blocked move, >= 1.
    move_speed, rot_speed: per-second rates, >= 0.
    """

    fov: float = FOV
    draw_distance: float = DRAW_DISTANCE
    bound_radius: float = BOUND_RADIUS
    slide: float = SLIDE
    max_slide_steps: int = MAX_SLIDE_STEPS
    move_speed: float = MOVE_SPEED
    rot_speed: float = ROT_SPEED

    def __post_init__(self) -> None:
        problems = []
        if not _within(self.fov, FOV_MIN, FOV_MAX):
            problems.append(
                f"fov must lie in [{FOV_MIN:.4f}, {FOV_MAX:.4f}], got {self.fov}"
            )
        if not (self.draw_distance > 0 and math.isfinite(self.draw_distance)):
            problems.append(
                f"draw_distance must be positive and finite, got {self.draw_distance}"
            )
        if not 0 < self.bound_radius < 0.5:
            problems.append(
                f"bound_radius must lie in (0, 0.5), got {self.bound_radius}"
            )
        if not 0 < self.slide <= self.bound_radius:
            problems.append(
                f"slide must lie in (0, bound_radius], got {self.slide}"
            )
        if self.max_slide_steps < 1:
            problems.append(
                f"max_slide_steps must be at least 1, got {self.max_slide_steps}"
            )
        if self.move_speed < 0 or self.rot_speed < 0:
            problems.append("move_speed and rot_speed must be non-negative")
        if problems:
            logger.error("Invalid engine configuration: %s", "; ".join(problems))
            raise ValueError("; ".join(problems))
