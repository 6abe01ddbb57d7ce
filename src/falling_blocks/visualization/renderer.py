from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pygame

from falling_blocks.game import BLOCK_SIZE, WALL, GameSnapshot, shape_of


HELP_LINES = (
    "h / Left  : move left",
    "l / Right : move right",
    "j / Down  : drop a block",
    "a / Space / Up : right-handed rotation",
    "s / z     : left-handed rotation",
)


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (128, 128, 128),  # I
        2: (220, 40, 40),    # S
        3: (40, 200, 40),    # Z
        4: (50, 80, 230),    # L
        5: (230, 220, 40),   # T
        6: (210, 60, 210),   # O
        7: (40, 210, 220),   # J
        WALL: (90, 90, 100),
    }
    return palette.get(int(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board_shape: Tuple[int, int]) -> Tuple[int, int]:
        h, w = board_shape
        width = self.margin * 3 + (w + BLOCK_SIZE + 10) * self.cell_size
        height = self.margin * 2 + max(h, 3 * (BLOCK_SIZE + 1)) * self.cell_size
        return width, height

    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, max(16, self.cell_size - 4))
        return self._font

    def _cell(self, surf: pygame.Surface, x: int, y: int, v: int) -> None:
        rect = pygame.Rect(x, y, self.cell_size - 1, self.cell_size - 1)
        pygame.draw.rect(surf, color_for_value(v), rect)

    def _grid_surface(self, board: np.ndarray) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                self._cell(surf, x * self.cell_size, y * self.cell_size, int(board[y, x]))
        return surf

    def _draw_next(self, screen: pygame.Surface, next_pieces: Sequence[int], x0: int) -> None:
        for idx, kind in enumerate(next_pieces):
            mask = shape_of(kind)
            y0 = self.margin + idx * (BLOCK_SIZE + 1) * self.cell_size
            for py in range(BLOCK_SIZE):
                for px in range(BLOCK_SIZE):
                    if mask[py, px]:
                        self._cell(screen, x0 + px * self.cell_size, y0 + py * self.cell_size, int(mask[py, px]))

    def _draw_text(self, screen: pygame.Surface, snapshot: GameSnapshot, x0: int) -> None:
        font = self.font()
        lines = [f"time:  {snapshot.elapsed:5d}", f"score: {snapshot.score:5d}", ""]
        lines.extend(HELP_LINES)
        y = self.margin
        for line in lines:
            text = font.render(line, True, (230, 230, 230))
            screen.blit(text, (x0, y))
            y += font.get_linesize()

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(snapshot.board), (self.margin, self.margin))
        next_x = self.margin * 2 + snapshot.board.shape[1] * self.cell_size
        self._draw_next(screen, snapshot.next_pieces, next_x)
        self._draw_text(screen, snapshot, next_x + (BLOCK_SIZE + 1) * self.cell_size)
        if snapshot.game_over:
            text = self.font().render("GAME OVER", True, (255, 255, 255))
            rect = text.get_rect(center=(self.margin + snapshot.board.shape[1] * self.cell_size // 2, screen.get_height() // 2))
            screen.blit(text, rect)
