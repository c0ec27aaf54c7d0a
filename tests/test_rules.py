import pytest

from block_blast_solver.game import ScoringRules
from block_blast_solver.game.bitboard import FULL_BOARD, cell_bit
from block_blast_solver.game.rules import board_features


def test_empty_board_gets_both_open_space_bonuses():
    rules = ScoringRules()
    assert rules.evaluate(0, 0, 0) == 40.0
    assert rules.evaluate(0, 2, 3) == 2 * 50 + 3 * 100 + 40


def test_density_penalty_above_three_quarters():
    rules = ScoringRules()
    # 56 of 64 occupied, free cells scattered on a diagonal
    board = FULL_BOARD
    for i in range(8):
        board &= ~cell_bit(i, i)
    features = board_features(board)
    assert features.occupied == 56
    assert not features.has_open_square
    assert not features.has_open_run
    assert rules.evaluate(board, 0, 0) == pytest.approx(-(56 / 64 - 0.75) * 200)


def test_no_penalty_at_exactly_three_quarters():
    rules = ScoringRules()
    board = 0
    for r in range(6):
        for c in range(8):
            board |= cell_bit(r, c)
    # 48 cells is exactly 0.75; two empty rows leave a run of 5 but no 3x3
    features = board_features(board)
    assert features.occupied == 48
    assert not features.has_open_square
    assert features.has_open_run
    assert rules.evaluate(board, 0, 0) == 20.0


def test_vertical_run_counts_as_open_space():
    board = FULL_BOARD
    for r in range(2, 7):
        board &= ~cell_bit(r, 4)
    features = board_features(board)
    assert features.has_open_run
    assert not features.has_open_square
