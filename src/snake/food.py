# food.py
import random
from typing import Iterable, Optional

from .config import Cell, GRID_SIZE, FOOD_PLACEMENT_ATTEMPTS
from .errors import BoardFull


class Food:
    """The single food cell on the board."""

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        rng: Optional[random.Random] = None,
        attempts: int = FOOD_PLACEMENT_ATTEMPTS,
    ):
        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self.attempts = attempts
        self.position: Cell = (0, 0)  # placeholder until first placement

    def generate_new_position(self, occupied: Iterable[Cell]) -> Cell:
        """
        Move the food to a random cell not in ``occupied`` and return it.

        Samples uniformly for a bounded number of attempts, then falls back to
        the first free cell in row-major order. Raises BoardFull if every cell
        is taken.
        """
        taken = set(occupied)
        n = self.grid_size

        for _ in range(self.attempts):
            cell = (self.rng.randrange(n), self.rng.randrange(n))
            if cell not in taken:
                self.position = cell
                return cell

        # Nearly full board: scan instead of sampling
        for y in range(n):
            for x in range(n):
                if (x, y) not in taken:
                    self.position = (x, y)
                    return self.position

        raise BoardFull(n, len(taken))
