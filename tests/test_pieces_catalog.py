import numpy as np
import pytest

from block_blast_solver.game import PIECE_CATALOG, Piece, resolve_piece, search_pieces


def test_piece_requires_cells():
    with pytest.raises(ValueError):
        Piece("Empty", ())


def test_piece_rejects_duplicate_and_negative_offsets():
    with pytest.raises(ValueError):
        Piece.from_offsets("Dup", [(0, 0), (0, 0)])
    with pytest.raises(ValueError):
        Piece.from_offsets("Neg", [(0, 0), (-1, 0)])


def test_cells_at_maps_dx_to_columns_and_dy_to_rows():
    piece = Piece.from_offsets("Hook", [(0, 0), (1, 0), (1, 1)])
    assert piece.cells_at(2, 5) == [(2, 5), (2, 6), (3, 6)]
    assert (piece.height, piece.width) == (2, 2)
    assert np.array_equal(piece.shape(), np.array([[1, 1], [0, 1]], dtype=np.int8))


def test_catalog_shapes_are_distinct():
    assert len(PIECE_CATALOG) == 41
    assert len(set(PIECE_CATALOG)) == len(PIECE_CATALOG)
    assert all(p.size >= 1 for p in PIECE_CATALOG)


def test_search_is_case_insensitive_and_blank_returns_all():
    lines = search_pieces("horizontal LINE")
    assert [p.name for p in lines] == [
        "Horizontal Line (5)", "Horizontal Line (4)", "Horizontal Line (3)", "Horizontal Line (2)",
    ]
    assert search_pieces("   ") == PIECE_CATALOG
    assert search_pieces("hexagon") == []


def test_resolve_piece_by_index_and_name():
    assert resolve_piece("40").name == "Dot (1)"
    assert resolve_piece("cube (9)").size == 9
    # Shared names resolve to the first shape
    assert resolve_piece("L (3)") is PIECE_CATALOG[0]
    with pytest.raises(KeyError):
        resolve_piece("Nope")
    with pytest.raises(KeyError):
        resolve_piece("99")
