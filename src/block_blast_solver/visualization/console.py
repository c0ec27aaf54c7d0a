from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from block_blast_solver.game import Piece, PlacementTrace


def format_grid(grid: np.ndarray, highlight: Optional[Iterable[Tuple[int, int]]] = None) -> str:
    """Bracketed rows: 'x' occupied, '.' empty, 'R' for highlighted cells."""
    marked: Set[Tuple[int, int]] = set(highlight or ())
    lines: List[str] = []
    for r, row in enumerate(grid):
        cells = []
        for c, cell in enumerate(row):
            if (r, c) in marked:
                cells.append("R")
            else:
                cells.append("x" if cell else ".")
        lines.append("[ " + " ".join(cells) + " ]")
    return "\n".join(lines)


def format_piece_sizes(pieces: Sequence[Piece]) -> str:
    return " and ".join("[" + ",".join("x" * piece.size) + "]" for piece in pieces)


def format_piece_names(pieces: Sequence[Piece]) -> str:
    return ", ".join(piece.name for piece in pieces)


def print_grid(grid: np.ndarray) -> None:
    print(format_grid(grid))


def print_piece(piece: Piece) -> None:
    for row in piece.shape():
        print("".join(["█" if cell else "·" for cell in row]))


class FramePrinter:
    """Numbered console frames, one per board snapshot."""

    ORDINALS = ("First", "Second", "Third")

    def __init__(self, start: int = 1) -> None:
        self.frame = start

    def board(self, grid: np.ndarray, highlight: Optional[Iterable[Tuple[int, int]]] = None) -> None:
        print(f"Frame {self.frame}:")
        print(format_grid(grid, highlight))
        self.frame += 1

    def selection(self, grid: np.ndarray, pieces: Sequence[Piece]) -> None:
        self.board(grid)
        print(f"{len(pieces)} pieces selected: {format_piece_sizes(pieces)}")
        print(format_piece_names(pieces))

    def trace(self, trace: PlacementTrace) -> None:
        for idx, step in enumerate(trace.steps):
            label = self.ORDINALS[idx] if idx < len(self.ORDINALS) else f"#{idx + 1}"
            placement = step.placement
            print(f"\n{label} piece placement:")
            self.board(step.board, placement.piece.cells_at(placement.row, placement.col))
            print(f"Placing {placement}")
            if step.lines_cleared:
                print(f"Cleared {step.lines_cleared} line(s), combo = {step.combo.combo_count}")
