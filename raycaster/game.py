from __future__ import annotations
import logging
import math
import pygame
from typing import Optional

from .camera import Camera
from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    DEFAULT_MAP,
    START_X,
    START_Y,
    FOV_MIN,
    FOV_MAX,
    EngineConfig,
)
from .grid import TileGrid
from .input_handler import InputHandler
from .player import Player
from .renderer import Renderer

logger = logging.getLogger(__name__)

# Field of view change per second while a zoom key is held (radians)
FOV_SPEED = math.radians(30)


class Game:
    """Main Game class: handles initialization, loop, and high-level coordination."""

    def __init__(
        self,
        clock: Optional[pygame.time.Clock] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        pygame.init()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height)
        )
        pygame.display.set_caption("Raycaster")
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.config = config or EngineConfig()
        self.world = TileGrid(DEFAULT_MAP)
        self.player = Player(
            x=START_X + 0.5,
            y=START_Y + 0.5,
            angle=0.0,
            config=self.config,
        )
        self.camera = Camera(
            self.world, self.player.pose, self.screen_width, self.config
        )
        self.renderer = Renderer(self.screen_width, self.screen_height)
        self.input = InputHandler()
        self.samples = []
        self.running = True
        self.paused = False
        logger.info(
            "Game started on %dx%d map at (%.1f, %.1f)",
            self.world.width,
            self.world.height,
            self.player.x,
            self.player.y,
        )

    def handle_events(self) -> None:
        """Process input events via InputHandler and handle one-shot actions."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        if self.input.pause_pressed():
            self.paused = not self.paused
        if self.input.toggle_map_pressed():
            self.renderer.show_map = not self.renderer.show_map

    def update(self, dt: float) -> None:
        """Update game state: apply the input intent to the player and camera."""
        if self.paused:
            return
        intent = self.input.intent()
        if intent.turn:
            self.player.rotate(intent.turn, dt)
        if intent.forward:
            self.player.move(intent.forward, self.world, dt)
        if intent.strafe:
            self.player.strafe(intent.strafe, self.world, dt)
        if intent.zoom:
            fov = self.camera.fov + intent.zoom * FOV_SPEED * dt
            self.camera.set_fov(max(FOV_MIN, min(FOV_MAX, fov)))
        self.camera.sync(self.player.pose)

    def render(self) -> None:
        """Cast the view and draw it."""
        self.samples = self.camera.scan()
        self.renderer.render(self.screen, self.camera, self.samples, self.player)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        while self.running:
            # Cap the frame rate and compute delta time in seconds
            dt = self.clock.tick(self.fps) / 1000.0
            self.handle_events()
            self.update(dt)
            self.render()
        logger.info("Game loop stopped")
        pygame.quit()
