# src/snake/__init__.py
"""Grid snake core: snake/food models, tick engine and its collaborators."""

from .config import CFG, Config, Direction, UP, DOWN, LEFT, RIGHT
from .errors import BoardFull, SnakeError
from .food import Food
from .game import GameState, SnakeGame, Snapshot
from .snake import Snake
from .timers import Scheduler

__all__ = [
    "CFG", "Config", "Direction", "UP", "DOWN", "LEFT", "RIGHT",
    "BoardFull", "SnakeError",
    "Food", "Snake", "GameState", "SnakeGame", "Snapshot", "Scheduler",
]
