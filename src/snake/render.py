# render.py
import sys
from typing import Iterable, Optional, TextIO

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import (
    GRID_SIZE, TILE_SIZE, SEGMENT_SIZE,
    BG, HEAD, EYE, BODY, FOOD, FOOD_SHINE, GRACE_TINT, TEXT, SUBTEXT,
)
from .game import BODY_CELL, EMPTY, FOOD_CELL, HEAD_CELL, Renderer, Snapshot

GLYPHS = {EMPTY: ".", BODY_CELL: "o", FOOD_CELL: "*", HEAD_CELL: "@"}


# ---------- Text ----------
def format_grid(grid: np.ndarray) -> str:
    return "\n".join("".join(GLYPHS[int(v)] for v in row) for row in grid)


class TextRenderer:
    """Writes each frame as ASCII art; used by the headless autoplay demo."""

    def __init__(self, grid_size: int = GRID_SIZE, stream: Optional[TextIO] = None):
        self.grid_size = grid_size
        self.stream = stream or sys.stdout

    def draw(self, snapshot: Snapshot) -> None:
        status = f"score {snapshot.score}  {snapshot.state.value}"
        if snapshot.grace_active:
            status += "  (grace)"
        self.stream.write(format_grid(snapshot.as_grid(self.grid_size)) + "\n" + status + "\n\n")

    def draw_game_over(self, final_score: int) -> None:
        self.stream.write(f"GAME OVER  Final Score: {final_score}\n")


class Fanout:
    """Forwards frames to several renderers in order."""

    def __init__(self, renderers: Iterable[Renderer]):
        self.renderers = list(renderers)

    def draw(self, snapshot: Snapshot) -> None:
        for r in self.renderers:
            r.draw(snapshot)

    def draw_game_over(self, final_score: int) -> None:
        for r in self.renderers:
            r.draw_game_over(final_score)


# ---------- Pygame ----------
class PygameRenderer:
    def __init__(self, screen: pygame.Surface, font: pygame.font.Font):
        self.screen = screen
        self.font = font

    def draw(self, snapshot: Snapshot) -> None:
        self.screen.fill(BG)
        if snapshot.grace_active:
            self._overlay(GRACE_TINT)
        self._draw_snake(snapshot)
        self._draw_food(snapshot)
        txt = self.font.render(f"Score: {snapshot.score}", True, TEXT)
        self.screen.blit(txt, (8, 6))

    def draw_game_over(self, final_score: int) -> None:
        self._overlay((0, 0, 0, 204))
        w, h = self.screen.get_size()
        lines = [
            ("GAME OVER", TEXT, -30),
            (f"Final Score: {final_score}", TEXT, 0),
            ("Press Enter to restart", SUBTEXT, 30),
        ]
        for text, color, dy in lines:
            surf = self.font.render(text, True, color)
            self.screen.blit(surf, surf.get_rect(center=(w // 2, h // 2 + dy)))

    def draw_paused(self) -> None:
        w, h = self.screen.get_size()
        surf = self.font.render("PAUSED", True, TEXT)
        self.screen.blit(surf, surf.get_rect(center=(w // 2, h // 2)))

    def _overlay(self, rgba) -> None:
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill(rgba)
        self.screen.blit(overlay, (0, 0))

    def _draw_snake(self, snapshot: Snapshot) -> None:
        offset = (TILE_SIZE - SEGMENT_SIZE) // 2
        segment = pygame.Surface((SEGMENT_SIZE, SEGMENT_SIZE), pygame.SRCALPHA)
        for i, (gx, gy) in enumerate(snapshot.body):
            x, y = gx * TILE_SIZE + offset, gy * TILE_SIZE + offset
            if i == 0:
                pygame.draw.rect(self.screen, HEAD, pygame.Rect(x, y, SEGMENT_SIZE, SEGMENT_SIZE))
                eye, inset = 3, 4
                pygame.draw.rect(self.screen, EYE, pygame.Rect(x + inset, y + inset, eye, eye))
                pygame.draw.rect(
                    self.screen, EYE,
                    pygame.Rect(x + SEGMENT_SIZE - inset - eye, y + inset, eye, eye),
                )
            else:
                # tail fades out, never below 60% opacity
                alpha = int(255 * max(0.6, 1 - i * 0.02))
                segment.fill((*BODY, alpha))
                self.screen.blit(segment, (x, y))

    def _draw_food(self, snapshot: Snapshot) -> None:
        x, y = snapshot.food[0] * TILE_SIZE, snapshot.food[1] * TILE_SIZE
        pygame.draw.rect(self.screen, FOOD, pygame.Rect(x + 2, y + 2, TILE_SIZE - 4, TILE_SIZE - 4))
        pygame.draw.rect(self.screen, FOOD_SHINE, pygame.Rect(x + 4, y + 4, 4, 4))
