# game.py
from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Callable, Optional, Protocol, Tuple

import numpy as np  # type: ignore

from .config import CFG, Cell, Config, Direction, RIGHT
from .errors import BoardFull
from .food import Food
from .snake import Snake
from .timers import Scheduler

logger = logging.getLogger(__name__)

# Occupancy grid codes for Snapshot.as_grid()
EMPTY, BODY_CELL, FOOD_CELL, HEAD_CELL = 0, 1, 2, 3


class GameState(Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    ANIMATING_DEATH = "animating-death"
    GAME_OVER = "game-over"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one frame, handed to renderers."""
    body: Tuple[Cell, ...]   # head first
    food: Cell
    grace_active: bool
    score: int
    state: GameState

    def as_grid(self, grid_size: int) -> np.ndarray:
        """(rows, cols) int8 grid; cells outside the board are dropped."""
        grid = np.zeros((grid_size, grid_size), dtype=np.int8)
        fx, fy = self.food
        if 0 <= fx < grid_size and 0 <= fy < grid_size:
            grid[fy, fx] = FOOD_CELL
        for i, (x, y) in enumerate(self.body):
            if 0 <= x < grid_size and 0 <= y < grid_size:
                grid[y, x] = HEAD_CELL if i == 0 else BODY_CELL
        return grid


class Renderer(Protocol):
    def draw(self, snapshot: Snapshot) -> None: ...

    def draw_game_over(self, final_score: int) -> None: ...


def _noop(*_args) -> None:
    return None


# ---------- Engine ----------
class SnakeGame:
    """
    Tick-driven snake state machine.

        ready --start--> playing <--pause/resume--> paused
        playing --fatal collision--> animating-death --body empty--> game-over
        game-over --start--> playing

    All timers live on ``scheduler``; at most one periodic timer (play tick or
    death animation) is active at any moment. Callbacks fire synchronously in
    the order: score update, state change, render.

    Wall collisions are forgiven while the grace period is active (armed at
    start and after each food); self-collision is always fatal.
    """

    def __init__(
        self,
        config: Config = CFG,
        renderer: Optional[Renderer] = None,
        on_score_update: Optional[Callable[[int], None]] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
        on_state_change: Optional[Callable[[GameState], None]] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config.validate()
        self.renderer = renderer
        self.on_score_update = on_score_update or _noop
        self.on_game_over = on_game_over or _noop
        self.on_state_change = on_state_change or _noop
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random(config.seed)

        self._state = GameState.READY
        self._tick_timer: Optional[int] = None
        self._death_timer: Optional[int] = None
        self._grace_timer: Optional[int] = None
        self._grace_left: Optional[float] = None   # remaining grace while paused
        self._new_round()

    # ---------- Read accessors ----------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def current_speed(self) -> float:
        return self._speed_ms

    @property
    def current_direction(self) -> Direction:
        return self._current_direction

    @property
    def next_direction(self) -> Direction:
        return self._next_direction

    @property
    def grace_active(self) -> bool:
        return self._grace_active

    @property
    def snake(self) -> Snake:
        return self._snake

    @property
    def food(self) -> Food:
        return self._food

    def snapshot(self) -> Snapshot:
        return Snapshot(
            body=tuple(self._snake.body),
            food=self._food.position,
            grace_active=self._grace_active,
            score=self._score,
            state=self._state,
        )

    # ---------- Commands ----------
    def reset(self) -> None:
        """Abandon the current round and return to ``ready``."""
        self._cancel_all_timers()
        self._new_round()
        self._set_state(GameState.READY)

    def start(self) -> None:
        if self._state not in (GameState.READY, GameState.GAME_OVER):
            logger.debug("start ignored in state %s", self._state.value)
            return
        self._cancel_all_timers()
        self._new_round()
        if self.config.grace_on_start:
            self._start_grace(self.config.grace_period_ms)
        self._tick_timer = self.scheduler.set_interval(self._tick, self._speed_ms)
        # hooks run last; one of them may already have left this state
        if self._set_state(GameState.PLAYING):
            self._render()

    def pause(self) -> None:
        if self._state is not GameState.PLAYING:
            logger.debug("pause ignored in state %s", self._state.value)
            return
        self._grace_left = self.scheduler.remaining(self._grace_timer)
        self._cancel_all_timers()
        self._set_state(GameState.PAUSED)

    def resume(self) -> None:
        if self._state is not GameState.PAUSED:
            logger.debug("resume ignored in state %s", self._state.value)
            return
        self._cancel_all_timers()
        if self._grace_active and self._grace_left:
            self._start_grace(self._grace_left)
        self._grace_left = None
        self._tick_timer = self.scheduler.set_interval(self._tick, self._speed_ms)
        self._set_state(GameState.PLAYING)

    def toggle_pause(self) -> None:
        if self._state is GameState.PLAYING:
            self.pause()
        elif self._state is GameState.PAUSED:
            self.resume()
        else:
            logger.debug("toggle_pause ignored in state %s", self._state.value)

    def change_direction(self, direction: Direction) -> None:
        """Buffer ``direction`` for the next tick; reversals are dropped."""
        if self._state is not GameState.PLAYING:
            return
        if direction is self._current_direction.opposite:
            return
        self._next_direction = direction

    # ---------- Tick ----------
    def _tick(self) -> None:
        if self._state is not GameState.PLAYING:
            return

        self._current_direction = self._next_direction
        # growth lands on the move that reaches the food
        eating = self._snake.next_head(self._current_direction) == self._food.position
        if eating:
            self._snake.grow()
        self._snake.move(self._current_direction)

        if self._snake.check_self_collision():
            self._begin_death_animation("self")
            return
        if self._snake.check_wall_collision():
            if not self._grace_active:
                self._begin_death_animation("wall")
                return
            logger.debug("wall collision at %s absorbed by grace", self._snake.head)

        if eating:
            self._eat()
            self.on_score_update(self._score)

        if self._state is GameState.PLAYING:
            self._render()

    def _eat(self) -> None:
        self._score += 1
        self._speed_ms = max(self.config.min_speed_ms, self._speed_ms * self.config.speed_factor)
        self.scheduler.clear(self._tick_timer)
        self._tick_timer = self.scheduler.set_interval(self._tick, self._speed_ms)
        self._start_grace(self.config.grace_period_ms)

        try:
            self._food.generate_new_position(self._snake.body)
        except BoardFull:
            logger.error("board full at score %d", self._score)
            self._cancel_all_timers()
            self._grace_active = False
            self.on_score_update(self._score)
            self._render()
            self._finish()
            raise

    # ---------- Grace period ----------
    def _start_grace(self, duration_ms: float) -> None:
        self.scheduler.clear(self._grace_timer)
        self._grace_timer = None
        if duration_ms <= 0:
            self._grace_active = False
            return
        self._grace_active = True
        self._grace_timer = self.scheduler.set_timeout(self._end_grace, duration_ms)

    def _end_grace(self) -> None:
        self._grace_timer = None
        self._grace_active = False

    # ---------- Death animation ----------
    def _begin_death_animation(self, reason: str) -> None:
        logger.debug("fatal %s collision at %s, score %d", reason, self._snake.head, self._score)
        self._cancel_all_timers()
        self._grace_active = False
        self._death_timer = self.scheduler.set_interval(
            self._death_step, self.config.death_animation_ms
        )
        if self._set_state(GameState.ANIMATING_DEATH):
            self._render()

    def _death_step(self) -> None:
        if self._state is not GameState.ANIMATING_DEATH:
            return
        removed = self._snake.remove_last_segment()
        if removed and len(self._snake) > 0:
            self._render()
            return
        self._cancel_all_timers()
        self._finish()

    def _finish(self) -> None:
        logger.info("game over, final score %d", self._score)
        self._set_state(GameState.GAME_OVER)
        self.on_game_over(self._score)
        if self.renderer is not None and self._state is GameState.GAME_OVER:
            self.renderer.draw_game_over(self._score)

    # ---------- Helpers ----------
    def _new_round(self) -> None:
        cfg = self.config
        self._snake = Snake(cfg.grid_size, cfg.initial_length)
        self._food = Food(cfg.grid_size, self.rng, cfg.food_attempts)
        self._food.generate_new_position(self._snake.body)
        self._score = 0
        self._speed_ms = cfg.initial_speed_ms
        self._current_direction = RIGHT
        self._next_direction = RIGHT
        self._grace_active = False
        self._grace_left = None

    def _cancel_all_timers(self) -> None:
        for handle in (self._tick_timer, self._death_timer, self._grace_timer):
            self.scheduler.clear(handle)
        self._tick_timer = self._death_timer = self._grace_timer = None

    def _set_state(self, new_state: GameState) -> bool:
        """Switch state and notify. False if the hook moved the game elsewhere."""
        if new_state is self._state:
            return True
        logger.debug("state %s -> %s", self._state.value, new_state.value)
        self._state = new_state
        self.on_state_change(new_state)
        return self._state is new_state

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer.draw(self.snapshot())
