from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_engine.game import GameState
from tetris_engine.game.grid import ACTIVE, EMPTY, LOCKED


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        EMPTY: (245, 245, 245),
        LOCKED: (220, 30, 30),
        ACTIVE: (240, 200, 60),
    }
    return palette.get(int(v), (200, 200, 200))


class Renderer:
    """Draws a read-only snapshot of a GameState; never touches the engine."""

    def __init__(self, cell_size: int = 30, margin: int = 20, hud_height: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.hud_height = hud_height
        self._font = None
        self._banner_font = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        return (
            cols * self.cell_size + self.margin * 2,
            rows * self.cell_size + self.margin * 2 + self.hud_height,
        )

    def _grid_surface(self, grid: np.ndarray) -> pygame.Surface:
        h, w = grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((0, 0, 0))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(grid[y, x]), rect)
        return surf

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state.snapshot()), (self.margin, self.margin))

        hud_y = self.margin + state.rows * self.cell_size + 8
        score = self._font.render(f"Score: {state.score}", True, (230, 230, 230))
        screen.blit(score, (self.margin, hud_y))

        if state.is_game_over:
            if self._banner_font is None:
                self._banner_font = pygame.font.SysFont(None, 40)
            text = self._banner_font.render("Game Over! R to restart", True, (255, 80, 80))
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
