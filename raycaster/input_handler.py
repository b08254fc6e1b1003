"""
Input handling abstraction to decouple Pygame input from game logic.
"""

from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Intent:
    """Per-frame movement request: each field is -1, 0 or 1."""

    forward: int = 0
    strafe: int = 0
    turn: int = 0
    zoom: int = 0


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events and
    provides key states and action queries.
    """

    def __init__(self) -> None:
        self._quit = False
        # Toggle top-down debug view (M key)
        self._toggle_map = False
        # Toggle pause state (P key)
        self._pause = False
        # Key state is initialized in process_events()
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """
        Poll Pygame events, update internal state for one-shot actions,
        and capture key states.
        """
        self._quit = False
        self._toggle_map = False
        self._pause = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_x, pygame.K_ESCAPE):
                    self._quit = True
                elif event.key == pygame.K_m:
                    self._toggle_map = True
                elif event.key == pygame.K_p:
                    self._pause = True
        self._keys = pygame.key.get_pressed()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def toggle_map_pressed(self) -> bool:
        """Return True if M was pressed this frame to toggle the top-down view."""
        return self._toggle_map

    def pause_pressed(self) -> bool:
        """Return True if P key was pressed this frame to toggle pause state."""
        return self._pause

    def intent(self) -> Intent:
        """Translate held keys into a movement intent."""
        keys = self._keys
        if not keys:
            return Intent()

        def axis(positive: tuple, negative: tuple) -> int:
            return int(any(keys[k] for k in positive)) - int(
                any(keys[k] for k in negative)
            )

        return Intent(
            forward=axis((pygame.K_w, pygame.K_UP), (pygame.K_s, pygame.K_DOWN)),
            strafe=axis((pygame.K_d,), (pygame.K_a,)),
            turn=axis((pygame.K_RIGHT,), (pygame.K_LEFT,)),
            zoom=axis((pygame.K_RIGHTBRACKET,), (pygame.K_LEFTBRACKET,)),
        )
