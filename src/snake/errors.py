"""Exceptions raised by the snake core."""


class SnakeError(Exception):
    """Base class for snake core errors."""


class BoardFull(SnakeError):
    """No free cell is left to place food on."""

    def __init__(self, grid_size: int, occupied: int):
        self.grid_size = grid_size
        self.occupied = occupied
        super().__init__(
            f"no free cell on a {grid_size}x{grid_size} board ({occupied} cells occupied)"
        )
