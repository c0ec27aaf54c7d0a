from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .bitboard import BOARD_COLS, BOARD_ROWS, Bitboard, InvalidPlacementError, cell_bit
from .pieces import Piece


@dataclass
class LineClear:
    rows: List[int] = field(default_factory=list)
    cols: List[int] = field(default_factory=list)

    @property
    def lines_cleared(self) -> int:
        # A cell on a cleared row and a cleared column counts for both
        return len(self.rows) + len(self.cols)


class GameGrid:
    """Fixed 8x8 occupancy grid.

    Cells are booleans; True means occupied. This is the real board the game
    mutates and the surface manual edits go through. Search works on the
    bitboard form (see `to_bits`).
    """

    def __init__(self) -> None:
        self.rows = BOARD_ROWS
        self.cols = BOARD_COLS
        self.grid = np.zeros((self.rows, self.cols), dtype=np.bool_)

    def reset(self) -> None:
        self.grid.fill(False)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def can_place(self, piece: Piece, row: int, col: int) -> bool:
        for r, c in piece.cells_at(row, col):
            if not self.is_inside(r, c):
                return False
            if self.grid[r, c]:
                return False
        return True

    def place(self, piece: Piece, row: int, col: int) -> None:
        """Mark the piece's cells. The placement must be valid."""
        if not self.can_place(piece, row, col):
            raise InvalidPlacementError(f"{piece.name} does not fit at ({row},{col})")
        for r, c in piece.cells_at(row, col):
            self.grid[r, c] = True

    def find_full_lines(self) -> LineClear:
        full_rows = np.where(np.all(self.grid, axis=1))[0]
        full_cols = np.where(np.all(self.grid, axis=0))[0]
        return LineClear(rows=[int(r) for r in full_rows], cols=[int(c) for c in full_cols])

    def clear_lines(self) -> LineClear:
        """Clear all full rows and columns found on the current snapshot."""
        found = self.find_full_lines()
        for r in found.rows:
            self.grid[r, :] = False
        for c in found.cols:
            self.grid[:, c] = False
        return found

    def detect_and_clear_lines(self) -> int:
        return self.clear_lines().lines_cleared

    def toggle(self, row: int, col: int) -> bool:
        """Flip a single cell (manual editing). Returns the new value."""
        if not self.is_inside(row, col):
            raise IndexError(f"Cell ({row},{col}) is outside the board")
        self.grid[row, col] = not self.grid[row, col]
        return bool(self.grid[row, col])

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_filled_ratio(self) -> float:
        return float(self.occupied_count()) / float(self.rows * self.cols)

    def to_bits(self) -> Bitboard:
        bits = 0
        for r, c in zip(*np.nonzero(self.grid)):
            bits |= cell_bit(int(r), int(c))
        return bits

    @classmethod
    def from_bits(cls, bits: Bitboard) -> "GameGrid":
        grid = cls()
        for r in range(grid.rows):
            for c in range(grid.cols):
                grid.grid[r, c] = bool(bits & cell_bit(r, c))
        return grid

    @classmethod
    def from_rows(cls, rows: List[str]) -> "GameGrid":
        """Build a grid from text rows, 'x' or '#' marking occupied cells."""
        if len(rows) != BOARD_ROWS:
            raise ValueError(f"Expected {BOARD_ROWS} rows, got {len(rows)}")
        grid = cls()
        for r, line in enumerate(rows):
            cells = line.replace(" ", "")
            if len(cells) != BOARD_COLS:
                raise ValueError(f"Row {r} must have {BOARD_COLS} cells: {line!r}")
            for c, ch in enumerate(cells):
                grid.grid[r, c] = ch in "xX#"
        return grid

    def copy(self) -> "GameGrid":
        new_grid = GameGrid()
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
