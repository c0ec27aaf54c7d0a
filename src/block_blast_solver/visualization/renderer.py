from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from block_blast_solver.game import Piece


EMPTY = (40, 40, 48)
FILLED = (70, 200, 120)
HIGHLIGHT = (230, 80, 80)
PIECE = (200, 180, 60)


def _color_for_value(v: bool) -> Tuple[int, int, int]:
    return FILLED if v else EMPTY


def draw_board(screen: pygame.Surface, grid: np.ndarray, cell_size: int, margin: int,
               highlight: Optional[Iterable[Tuple[int, int]]] = None) -> None:
    marked = set(highlight or ())
    h, w = grid.shape
    for r in range(h):
        for c in range(w):
            rect = pygame.Rect(margin + c * cell_size, margin + r * cell_size, cell_size - 1, cell_size - 1)
            color = HIGHLIGHT if (r, c) in marked else _color_for_value(bool(grid[r, c]))
            pygame.draw.rect(screen, color, rect)


def draw_piece(screen: pygame.Surface, piece: Piece, x0: int, y0: int, cell_size: int,
               color: Tuple[int, int, int] = PIECE) -> pygame.Rect:
    """Draw a piece icon with its top-left at (x0, y0); returns its bounds."""
    for dx, dy in piece.cells:
        rect = pygame.Rect(x0 + dx * cell_size, y0 + dy * cell_size, cell_size - 1, cell_size - 1)
        pygame.draw.rect(screen, color, rect)
    return pygame.Rect(x0, y0, piece.width * cell_size, piece.height * cell_size)


def board_cell_at(pos: Tuple[int, int], cell_size: int, margin: int, rows: int, cols: int) -> Optional[Tuple[int, int]]:
    mx, my = pos
    col = (mx - margin) // cell_size
    row = (my - margin) // cell_size
    if mx < margin or my < margin or not (0 <= row < rows and 0 <= col < cols):
        return None
    return int(row), int(col)
