import numpy as np
import pytest

from block_blast_solver.game import GameGrid, InvalidPlacementError, Piece, resolve_piece
from block_blast_solver.game import bitboard
from block_blast_solver.game.bitboard import cell_bit


def _fill_row(grid: GameGrid, row: int, skip=()):
    for c in range(8):
        if c not in skip:
            grid.grid[row, c] = True


def test_can_place_respects_bounds_and_occupancy(cube):
    grid = GameGrid()
    assert grid.can_place(cube, 6, 6)
    assert not grid.can_place(cube, 7, 6)
    assert not grid.can_place(cube, 6, 7)
    grid.grid[3, 3] = True
    assert not grid.can_place(cube, 2, 2)
    assert grid.can_place(cube, 2, 4)


def test_place_sets_exactly_covered_cells():
    piece = resolve_piece("T (4)")
    grid = GameGrid()
    before = grid.clone_state()
    grid.place(piece, 4, 1)
    changed = set(zip(*np.nonzero(grid.grid != before)))
    assert changed == set(piece.cells_at(4, 1))


def test_place_without_room_fails_fast(dot):
    grid = GameGrid()
    grid.place(dot, 0, 0)
    with pytest.raises(InvalidPlacementError):
        grid.place(dot, 0, 0)
    with pytest.raises(InvalidPlacementError):
        grid.place(dot, 8, 0)


def test_clear_row_and_column_from_one_snapshot():
    grid = GameGrid()
    _fill_row(grid, 2)
    grid.grid[:, 5] = True
    cleared = grid.clear_lines()
    assert cleared.rows == [2]
    assert cleared.cols == [5]
    # Intersection counts for both lines
    assert cleared.lines_cleared == 2
    assert grid.occupied_count() == 0


def test_clearing_does_not_cascade():
    grid = GameGrid()
    _fill_row(grid, 0)
    _fill_row(grid, 1, skip=(3,))
    assert grid.detect_and_clear_lines() == 1
    assert grid.grid[1].sum() == 7
    assert not grid.grid[0].any()


def test_detect_and_clear_is_idempotent():
    grid = GameGrid()
    _fill_row(grid, 7)
    grid.grid[:, 0] = True
    grid.grid[:, 1] = True
    assert grid.detect_and_clear_lines() == 3
    assert grid.detect_and_clear_lines() == 0


def test_toggle_flips_single_cell():
    grid = GameGrid()
    assert grid.toggle(3, 4) is True
    assert grid.occupied_count() == 1
    assert grid.toggle(3, 4) is False
    with pytest.raises(IndexError):
        grid.toggle(8, 0)


def test_bits_round_trip_and_row_parsing():
    grid = GameGrid.from_rows([
        "x.......",
        "........",
        "........",
        "...##...",
        "........",
        "........",
        "........",
        ".......x",
    ])
    bits = grid.to_bits()
    assert bits == cell_bit(0, 0) | cell_bit(3, 3) | cell_bit(3, 4) | cell_bit(7, 7)
    assert np.array_equal(GameGrid.from_bits(bits).grid, grid.grid)
    with pytest.raises(ValueError):
        GameGrid.from_rows(["........"] * 7)


def test_bitboard_matches_grid_engine():
    piece = resolve_piece("L (5)")
    grid = GameGrid()
    _fill_row(grid, 0, skip=(0,))
    for r in range(1, 8):
        grid.grid[r, 2] = r != 2
    bits = grid.to_bits()
    for row in range(8):
        for col in range(8):
            assert bitboard.can_place(piece, row, col, bits) == grid.can_place(piece, row, col)

    assert bitboard.can_place(piece, 0, 0, bits) is False
    hook = Piece.from_offsets("Hook", [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)])
    grid.place(hook, 0, 0)
    bits = bitboard.place(hook, 0, 0, bits)
    assert bits == grid.to_bits()
    bits, lines = bitboard.detect_and_clear_lines(bits)
    assert lines == grid.detect_and_clear_lines() == 2
    assert bits == grid.to_bits()


def test_bitboard_place_rejects_overlap(dot):
    with pytest.raises(InvalidPlacementError):
        bitboard.place(dot, 0, 0, cell_bit(0, 0))
    assert bitboard.piece_mask(dot, -1, 0) is None
