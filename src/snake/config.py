from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Cell = Tuple[int, int]

# ----- Grid & geometry -----
GRID_SIZE = 20
TILE_SIZE = 20
SEGMENT_SIZE = 18
INITIAL_SNAKE_LENGTH = 3

# ----- Timing (milliseconds) -----
INITIAL_SPEED_MS = 200
MIN_SPEED_MS = 80
SPEED_FACTOR = 0.95          # tick interval multiplier per food eaten
GRACE_PERIOD_MS = 500
DEATH_ANIMATION_MS = 100
FOOD_PLACEMENT_ATTEMPTS = 100

# ----- Colors -----
BG        = (0, 0, 0)
HEAD      = (0, 68, 0)
EYE       = (255, 255, 255)
BODY      = (0, 255, 0)
FOOD      = (255, 0, 0)
FOOD_SHINE = (255, 102, 102)
GRACE_TINT = (255, 0, 0, 26)
TEXT      = (255, 255, 255)
SUBTEXT   = (204, 204, 204)


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    seed: Optional[int] = None
    grid_size: int = GRID_SIZE
    initial_length: int = INITIAL_SNAKE_LENGTH
    initial_speed_ms: float = INITIAL_SPEED_MS
    min_speed_ms: float = MIN_SPEED_MS
    speed_factor: float = SPEED_FACTOR
    grace_period_ms: float = GRACE_PERIOD_MS
    grace_on_start: bool = True
    death_animation_ms: float = DEATH_ANIMATION_MS
    food_attempts: int = FOOD_PLACEMENT_ATTEMPTS

    def validate(self) -> "Config":
        """Raise ValueError if the tunables cannot describe a playable game."""
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1")
        # the starting body runs left from the center column
        if self.grid_size < 2 or self.grid_size // 2 - (self.initial_length - 1) < 0:
            raise ValueError(
                f"grid_size {self.grid_size} too small for a snake of length {self.initial_length}"
            )
        if self.initial_speed_ms <= 0 or self.min_speed_ms <= 0:
            raise ValueError("tick intervals must be positive")
        if self.min_speed_ms > self.initial_speed_ms:
            raise ValueError("min_speed_ms must not exceed initial_speed_ms")
        if not 0 < self.speed_factor <= 1:
            raise ValueError("speed_factor must be in (0, 1]")
        if self.grace_period_ms < 0:
            raise ValueError("grace_period_ms must be non-negative")
        if self.death_animation_ms <= 0:
            raise ValueError("death_animation_ms must be positive")
        if self.food_attempts < 0:
            raise ValueError("food_attempts must be non-negative")
        return self


CFG = Config()
