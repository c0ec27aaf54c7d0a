"""Integer-encoded occupancy for search.

Bit ``row * BOARD_COLS + col`` is set when that cell is occupied. Boards are
plain ints, so every search branch holds its own value and nothing is shared
between siblings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Tuple

from .pieces import Piece


BOARD_ROWS = 8
BOARD_COLS = 8

Bitboard = int

FULL_BOARD: Bitboard = (1 << (BOARD_ROWS * BOARD_COLS)) - 1


def cell_bit(row: int, col: int) -> Bitboard:
    return 1 << (row * BOARD_COLS + col)


def _window(row: int, col: int, height: int, width: int) -> Bitboard:
    mask = 0
    for r in range(row, row + height):
        for c in range(col, col + width):
            mask |= cell_bit(r, c)
    return mask


ROW_MASKS: Tuple[Bitboard, ...] = tuple(_window(r, 0, 1, BOARD_COLS) for r in range(BOARD_ROWS))
COL_MASKS: Tuple[Bitboard, ...] = tuple(_window(0, c, BOARD_ROWS, 1) for c in range(BOARD_COLS))

# Empty-space windows used by the evaluator
SQUARE_3X3_MASKS: Tuple[Bitboard, ...] = tuple(
    _window(r, c, 3, 3) for r in range(BOARD_ROWS - 2) for c in range(BOARD_COLS - 2)
)
RUN_5_MASKS: Tuple[Bitboard, ...] = tuple(
    [_window(r, c, 1, 5) for r in range(BOARD_ROWS) for c in range(BOARD_COLS - 4)]
    + [_window(r, c, 5, 1) for c in range(BOARD_COLS) for r in range(BOARD_ROWS - 4)]
)


class InvalidPlacementError(ValueError):
    """Raised when a piece is placed where it does not fit."""


@lru_cache(maxsize=None)
def placement_masks(piece: Piece) -> Tuple[Optional[Bitboard], ...]:
    """Mask of covered cells for every anchor, in row-major anchor order.

    Anchors where the piece leaves the board map to None.
    """
    masks: List[Optional[Bitboard]] = []
    for row in range(BOARD_ROWS):
        for col in range(BOARD_COLS):
            mask: Optional[Bitboard] = 0
            for r, c in piece.cells_at(row, col):
                if not (0 <= r < BOARD_ROWS and 0 <= c < BOARD_COLS):
                    mask = None
                    break
                mask |= cell_bit(r, c)
            masks.append(mask)
    return tuple(masks)


def piece_mask(piece: Piece, row: int, col: int) -> Optional[Bitboard]:
    if not (0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS):
        return None
    return placement_masks(piece)[row * BOARD_COLS + col]


def can_place(piece: Piece, row: int, col: int, board: Bitboard) -> bool:
    mask = piece_mask(piece, row, col)
    return mask is not None and not board & mask


def place(piece: Piece, row: int, col: int, board: Bitboard) -> Bitboard:
    mask = piece_mask(piece, row, col)
    if mask is None or board & mask:
        raise InvalidPlacementError(f"{piece.name} does not fit at ({row},{col})")
    return board | mask


def full_lines(board: Bitboard) -> Tuple[List[int], List[int]]:
    """Indices of full rows and full columns, both read from the same board."""
    rows = [r for r, m in enumerate(ROW_MASKS) if board & m == m]
    cols = [c for c, m in enumerate(COL_MASKS) if board & m == m]
    return rows, cols


def detect_and_clear_lines(board: Bitboard) -> Tuple[Bitboard, int]:
    """Clear every full row and column at once. Returns (new_board, lines)."""
    rows, cols = full_lines(board)
    if not rows and not cols:
        return board, 0
    cleared = 0
    for r in rows:
        cleared |= ROW_MASKS[r]
    for c in cols:
        cleared |= COL_MASKS[c]
    return board & ~cleared, len(rows) + len(cols)


def occupied_count(board: Bitboard) -> int:
    return bin(board).count("1")


def has_empty_window(board: Bitboard, masks: Tuple[Bitboard, ...]) -> bool:
    return any(not board & m for m in masks)
