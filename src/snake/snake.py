# snake.py
from typing import List

from .config import Cell, Direction, GRID_SIZE, INITIAL_SNAKE_LENGTH


class Snake:
    """
    The player's snake.

    Attributes:
        body: cells from head at index 0 to tail at the end
        pending_growth: number of upcoming moves that keep the tail
    """

    def __init__(self, grid_size: int = GRID_SIZE, initial_length: int = INITIAL_SNAKE_LENGTH):
        self.grid_size = grid_size
        self.initial_length = initial_length
        self.body: List[Cell] = []
        self.pending_growth = 0
        self.reset()

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def reset(self) -> None:
        """Horizontal segment centered on the grid, head facing right."""
        cx, cy = self.grid_size // 2, self.grid_size // 2
        self.body = [(cx - i, cy) for i in range(self.initial_length)]
        self.pending_growth = 0

    def next_head(self, direction: Direction) -> Cell:
        hx, hy = self.head
        return (hx + direction.dx, hy + direction.dy)

    def move(self, direction: Direction) -> None:
        self.body.insert(0, self.next_head(direction))
        if self.pending_growth > 0:
            self.pending_growth -= 1
        else:
            self.body.pop()

    def grow(self) -> None:
        """Keep the tail on the next move."""
        self.pending_growth += 1

    def check_wall_collision(self) -> bool:
        hx, hy = self.head
        return not (0 <= hx < self.grid_size and 0 <= hy < self.grid_size)

    def check_self_collision(self) -> bool:
        return self.head in self.body[1:]

    def remove_last_segment(self) -> bool:
        """Drop the tail for the death animation. False once the body is empty."""
        if not self.body:
            return False
        self.body.pop()
        return True
