"""
Software renderer: draws wall columns or a top-down debug view with pygame.
"""

from __future__ import annotations
import logging
import math
import pygame
from typing import TYPE_CHECKING, List

from .config import (
    CEILING_COLOR,
    FLOOR_COLOR,
    FACE_COLORS,
    TOP_DOWN_CELL,
    TOP_DOWN_WALL_COLOR,
    TOP_DOWN_PLAYER_COLOR,
    TOP_DOWN_HEADING_COLOR,
    TOP_DOWN_HIT_COLOR,
)

if TYPE_CHECKING:
    from .camera import Camera, ColumnSample
    from .player import Player

logger = logging.getLogger(__name__)


class Renderer:
    """Draws one frame from a camera's column samples."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.show_map = False
        logger.debug("Renderer ready at %dx%d", width, height)

    def render(
        self,
        screen: pygame.Surface,
        camera: Camera,
        samples: List[ColumnSample],
        player: Player,
    ) -> None:
        if self.show_map:
            self.draw_top_down(screen, camera, samples, player)
        else:
            self.draw_columns(screen, camera, samples)

    def draw_columns(
        self,
        screen: pygame.Surface,
        camera: Camera,
        samples: List[ColumnSample],
    ) -> None:
        half = self.height // 2
        screen.fill(CEILING_COLOR, (0, 0, self.width, half))
        screen.fill(FLOOR_COLOR, (0, half, self.width, self.height - half))
        heights = camera.wall_heights(self.height)
        for sample, wall_h in zip(samples, heights):
            if not sample.result or wall_h <= 0:
                continue
            color = FACE_COLORS[sample.result.face]
            start_y = max(0, half - int(wall_h) // 2)
            end_y = min(self.height - 1, half + int(wall_h) // 2)
            pygame.draw.line(
                screen, color, (sample.column, start_y), (sample.column, end_y)
            )

    def draw_top_down(
        self,
        screen: pygame.Surface,
        camera: Camera,
        samples: List[ColumnSample],
        player: Player,
    ) -> None:
        cell = TOP_DOWN_CELL
        screen.fill((0, 0, 0))
        for col, row in camera.grid.walls():
            screen.fill(TOP_DOWN_WALL_COLOR, (col * cell, row * cell, cell, cell))
        px, py = int(player.x * cell), int(player.y * cell)
        size = max(1, int(player.radius * cell))
        pygame.draw.circle(screen, TOP_DOWN_PLAYER_COLOR, (px, py), size)
        pygame.draw.line(
            screen,
            TOP_DOWN_HEADING_COLOR,
            (px, py),
            (
                int(px + size * math.cos(player.angle)),
                int(py + size * math.sin(player.angle)),
            ),
        )
        for sample in samples:
            if sample.result:
                screen.fill(
                    TOP_DOWN_HIT_COLOR,
                    (int(sample.result.x * cell), int(sample.result.y * cell), 1, 1),
                )
