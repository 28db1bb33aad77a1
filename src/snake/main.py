# main.py
import argparse
import logging
from typing import List, Optional

import pygame  # type: ignore

from .autopilot import Autopilot
from .config import CFG, Config, TILE_SIZE
from .controls import PAUSE, QUIT, START, SwipeTracker, command_for_key, direction_for_key
from .errors import BoardFull
from .game import GameState, SnakeGame
from .render import Fanout, PygameRenderer, TextRenderer
from .timers import Scheduler

logger = logging.getLogger(__name__)

AUTOPLAY_STEP_MS = 10
AUTOPLAY_MAX_MS = 10 * 60 * 1000


def report_score(score: int) -> None:
    """Score reporter hook; remote submission plugs in here."""
    logger.info("final score: %d", score)


def build_config(args: argparse.Namespace) -> Config:
    return Config(
        seed=args.seed,
        grid_size=args.grid_size,
        initial_speed_ms=args.speed,
        min_speed_ms=args.min_speed,
        grace_period_ms=args.grace_ms,
        grace_on_start=not args.no_start_grace,
    ).validate()


def run_autoplay(cfg: Config) -> int:
    """Play one game headless with the greedy autopilot on simulated time."""
    scheduler = Scheduler()

    def on_game_over(score: int) -> None:
        logger.info("autopilot died after %.1fs of play", scheduler.now / 1000)
        report_score(score)

    game = SnakeGame(cfg, scheduler=scheduler, on_game_over=on_game_over)
    game.renderer = Fanout([TextRenderer(cfg.grid_size), Autopilot(game)])

    game.start()
    try:
        while game.state is not GameState.GAME_OVER and scheduler.now < AUTOPLAY_MAX_MS:
            scheduler.advance(AUTOPLAY_STEP_MS)
    except BoardFull:
        logger.info("autopilot filled the board")
    return game.score


def run_window(cfg: Config) -> None:
    pygame.init()
    font = pygame.font.SysFont(None, 24)
    size = cfg.grid_size * TILE_SIZE
    screen = pygame.display.set_mode((size, size))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    # a stalled frame must not replay every missed tick at once
    scheduler = Scheduler(pygame.time.get_ticks(), catch_up=False)
    renderer = PygameRenderer(screen, font)

    def on_state_change(state: GameState) -> None:
        if state is GameState.PAUSED:
            renderer.draw_paused()
        elif state is GameState.PLAYING:
            pygame.display.set_caption("Snake")

    def on_game_over(score: int) -> None:
        pygame.display.set_caption(f"Snake - final score {score}")
        report_score(score)

    game = SnakeGame(
        cfg,
        renderer=renderer,
        on_score_update=lambda s: logger.debug("score %d", s),
        on_game_over=on_game_over,
        on_state_change=on_state_change,
        scheduler=scheduler,
    )
    swipe = SwipeTracker()
    renderer.draw(game.snapshot())

    running = True
    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                direction = direction_for_key(event.key)
                command = command_for_key(event.key)
                if direction is not None:
                    game.change_direction(direction)
                elif command == PAUSE:
                    game.toggle_pause()
                elif command == START:
                    game.start()
                elif command == QUIT:
                    running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                swipe.begin(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                direction = swipe.end(*event.pos)
                if direction is not None:
                    game.change_direction(direction)
            elif event.type == pygame.FINGERDOWN:
                swipe.begin(event.x * size, event.y * size)
            elif event.type == pygame.FINGERUP:
                direction = swipe.end(event.x * size, event.y * size)
                if direction is not None:
                    game.change_direction(direction)

        # 2) update: fire whatever ticks are due
        try:
            scheduler.advance_to(pygame.time.get_ticks())
        except BoardFull:
            logger.info("board filled, nothing left to eat")

        # 3) render (drawing happens inside the engine callbacks)
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid snake with a post-growth grace period.")
    parser.add_argument("--seed", type=int, default=CFG.seed, help="RNG seed for food placement")
    parser.add_argument("--grid-size", type=int, default=CFG.grid_size)
    parser.add_argument("--speed", type=float, default=CFG.initial_speed_ms,
                        help="initial tick interval in ms")
    parser.add_argument("--min-speed", type=float, default=CFG.min_speed_ms,
                        help="fastest tick interval in ms")
    parser.add_argument("--grace-ms", type=float, default=CFG.grace_period_ms)
    parser.add_argument("--no-start-grace", action="store_true",
                        help="only arm the grace period after eating")
    parser.add_argument("--autoplay", action="store_true",
                        help="play one headless game with the greedy autopilot")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = build_config(args)
    except ValueError as e:
        raise SystemExit(f"invalid configuration: {e}")
    if args.autoplay:
        run_autoplay(cfg)
    else:
        run_window(cfg)


if __name__ == "__main__":
    main()
