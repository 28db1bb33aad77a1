# autopilot.py
"""Headless input adapter: steer greedily toward the food, avoiding instant death."""
from typing import List, Optional

import numpy as np  # type: ignore

from .config import Cell, Direction, UP, DOWN, LEFT, RIGHT
from .game import BODY_CELL, SnakeGame, Snapshot


def best_move_toward_food(head: Cell, food: Cell) -> List[Direction]:
    """
    Preference ordering of moves: those reducing Manhattan distance first, the
    rest after. Does NOT check collisions; caller should filter unsafe moves.
    """
    hx, hy = head
    fx, fy = food
    prefs: List[Direction] = []
    if fx < hx:
        prefs.append(LEFT)
    elif fx > hx:
        prefs.append(RIGHT)
    if fy < hy:
        prefs.append(UP)
    elif fy > hy:
        prefs.append(DOWN)
    for d in (UP, DOWN, LEFT, RIGHT):
        if d not in prefs:
            prefs.append(d)
    return prefs


def _would_hit(grid: np.ndarray, head: Cell, direction: Direction) -> bool:
    n = grid.shape[0]
    nx, ny = head[0] + direction.dx, head[1] + direction.dy
    if not (0 <= nx < n and 0 <= ny < n):
        return True
    return grid[ny, nx] == BODY_CELL


def choose_direction(snapshot: Snapshot, heading: Direction, grid_size: int) -> Optional[Direction]:
    """
    Greedy on food distance with a one-step safety check. Never proposes a
    reversal. Returns None when the snake is off the board or boxed in.
    """
    if not snapshot.body:
        return None
    head = snapshot.body[0]
    if not (0 <= head[0] < grid_size and 0 <= head[1] < grid_size):
        return None
    grid = snapshot.as_grid(grid_size)
    for d in best_move_toward_food(head, snapshot.food):
        if d is heading.opposite:
            continue
        if not _would_hit(grid, head, d):
            return d
    return None


class Autopilot:
    """Renderer-shaped observer that feeds a direction back after every frame."""

    def __init__(self, game: SnakeGame):
        self.game = game

    def draw(self, snapshot: Snapshot) -> None:
        d = choose_direction(snapshot, self.game.current_direction, self.game.config.grid_size)
        if d is not None:
            self.game.change_direction(d)

    def draw_game_over(self, final_score: int) -> None:
        return None
