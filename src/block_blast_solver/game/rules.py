from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .bitboard import (
    BOARD_COLS,
    BOARD_ROWS,
    RUN_5_MASKS,
    SQUARE_3X3_MASKS,
    Bitboard,
    has_empty_window,
    occupied_count,
)


class BoardFeatures(NamedTuple):
    occupied: int
    has_open_square: bool  # some 3x3 window is empty
    has_open_run: bool  # some row or column has 5 empty cells in a line


def board_features(board: Bitboard) -> BoardFeatures:
    return BoardFeatures(
        occupied=occupied_count(board),
        has_open_square=has_empty_window(board, SQUARE_3X3_MASKS),
        has_open_run=has_empty_window(board, RUN_5_MASKS),
    )


@dataclass
class ScoringRules:
    line_score: float = 50
    combo_score: float = 100
    density_threshold: float = 0.75
    density_penalty: float = 200
    open_square_bonus: float = 20
    open_run_bonus: float = 20

    def evaluate(self, board: Bitboard, total_lines: int, final_combo: int) -> float:
        return self.score_features(board_features(board), total_lines, final_combo)

    def score_features(self, features: BoardFeatures, total_lines: int, final_combo: int) -> float:
        score = float(total_lines * self.line_score)
        score += final_combo * self.combo_score

        fill_ratio = features.occupied / float(BOARD_ROWS * BOARD_COLS)
        if fill_ratio > self.density_threshold:
            score -= (fill_ratio - self.density_threshold) * self.density_penalty

        if features.has_open_square:
            score += self.open_square_bonus
        if features.has_open_run:
            score += self.open_run_bonus
        return score
