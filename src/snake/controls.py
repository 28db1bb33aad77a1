# controls.py
"""Input adapters: raw keyboard / swipe events -> directions and commands."""
from typing import Optional, Tuple

import pygame  # type: ignore

from .config import Direction, UP, DOWN, LEFT, RIGHT

PAUSE, START, QUIT = "pause", "start", "quit"

KEY_DIRECTIONS = {
    pygame.K_UP: UP,    pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT, pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}

KEY_COMMANDS = {
    pygame.K_SPACE: PAUSE, pygame.K_p: PAUSE,
    pygame.K_RETURN: START, pygame.K_r: START,
    pygame.K_ESCAPE: QUIT,
}


def direction_for_key(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


def command_for_key(key: int) -> Optional[str]:
    return KEY_COMMANDS.get(key)


def direction_from_swipe(dx: float, dy: float, min_distance: float = 0.0) -> Optional[Direction]:
    """
    Dominant axis wins; ties go vertical. Screen coordinates, so +y is down.
    Swipes shorter than ``min_distance`` on both axes are ignored.
    """
    if abs(dx) <= min_distance and abs(dy) <= min_distance:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


class SwipeTracker:
    """Pairs a press (finger or mouse) with its release."""

    def __init__(self, min_distance: float = 10.0):
        self.min_distance = min_distance
        self._start: Optional[Tuple[float, float]] = None

    def begin(self, x: float, y: float) -> None:
        self._start = (x, y)

    def end(self, x: float, y: float) -> Optional[Direction]:
        if self._start is None:
            return None
        sx, sy = self._start
        self._start = None
        return direction_from_swipe(x - sx, y - sy, self.min_distance)
