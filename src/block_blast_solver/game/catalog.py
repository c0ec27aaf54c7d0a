"""Piece catalog.

Every distinct shape offered by the game, grouped loosely by family. Several
shapes share a display name (the four "L (3)" rotations, for example), so a
name is not a unique key; use the catalog index when that matters.
"""

from __future__ import annotations

from typing import List, Sequence

from .pieces import Piece


_SHAPES = (
    ("L (3)", ((0, 0), (0, 1), (1, 0))),
    ("L (3)", ((0, 0), (1, 0), (1, 1))),
    ("L (3)", ((0, 0), (0, 1), (1, 1))),
    ("L (3)", ((1, 0), (0, 1), (1, 1))),
    ("Diagonal (3)", ((0, 0), (1, 1), (2, 2))),
    ("Diagonal (3)", ((0, 2), (1, 1), (2, 0))),
    ("Diagonal (2)", ((0, 0), (1, 1))),
    ("Diagonal (2)", ((0, 1), (1, 0))),
    ("L (4)", ((0, 0), (1, 0), (2, 0), (0, 1))),
    ("L (4)", ((0, 0), (1, 0), (2, 0), (2, 1))),
    ("L (4)", ((0, 0), (0, 1), (1, 1), (2, 1))),
    ("L (4)", ((2, 0), (0, 1), (1, 1), (2, 1))),
    ("L (4)", ((0, 0), (0, 1), (0, 2), (1, 2))),
    ("L (4)", ((0, 0), (0, 1), (0, 2), (1, 0))),
    ("L (4)", ((0, 2), (1, 1), (1, 2), (1, 0))),
    ("L (4)", ((0, 0), (1, 1), (1, 2), (1, 0))),
    ("Cube (4)", ((0, 0), (1, 1), (0, 1), (1, 0))),
    ("Rectangle (6)", ((0, 0), (1, 1), (0, 1), (1, 0), (2, 1), (2, 0))),
    ("Rectangle (6)", ((0, 0), (1, 1), (0, 1), (1, 0), (0, 2), (1, 2))),
    ("Horizontal Line (5)", ((0, 0), (1, 0), (2, 0), (3, 0), (4, 0))),
    ("Horizontal Line (4)", ((0, 0), (1, 0), (2, 0), (3, 0))),
    ("Horizontal Line (3)", ((0, 0), (1, 0), (2, 0))),
    ("Horizontal Line (2)", ((0, 0), (1, 0))),
    ("Vertical Line (5)", ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))),
    ("Vertical Line (4)", ((0, 0), (0, 1), (0, 2), (0, 3))),
    ("Vertical Line (3)", ((0, 0), (0, 1), (0, 2))),
    ("Vertical Line (2)", ((0, 0), (0, 1))),
    ("Cube (9)", ((0, 0), (1, 1), (0, 1), (1, 0), (0, 2), (1, 2), (2, 0), (2, 1), (2, 2))),
    ("S (4)", ((0, 0), (1, 1), (1, 0), (2, 1))),
    ("S (4)", ((1, 1), (0, 1), (1, 0), (2, 0))),
    ("S (4)", ((0, 0), (1, 1), (0, 1), (1, 2))),
    ("S (4)", ((1, 1), (0, 1), (1, 0), (0, 2))),
    ("L (5)", ((0, 0), (0, 1), (0, 2), (1, 0), (2, 0))),
    ("L (5)", ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))),
    ("L (5)", ((0, 0), (2, 1), (2, 2), (1, 0), (2, 0))),
    ("L (5)", ((0, 2), (1, 2), (2, 2), (2, 1), (2, 0))),
    ("T (4)", ((0, 0), (0, 1), (0, 2), (1, 1))),
    ("T (4)", ((0, 1), (1, 0), (1, 2), (1, 1))),
    ("T (4)", ((0, 2), (1, 2), (2, 2), (1, 1))),
    ("T (4)", ((0, 0), (1, 0), (2, 0), (1, 1))),
    ("Dot (1)", ((0, 0),)),
)

PIECE_CATALOG: List[Piece] = [Piece.from_offsets(name, cells) for name, cells in _SHAPES]


def search_pieces(query: str, pieces: Sequence[Piece] = PIECE_CATALOG) -> List[Piece]:
    """Case-insensitive substring match on piece names. Blank query matches all."""
    q = query.strip().lower()
    if not q:
        return list(pieces)
    return [p for p in pieces if q in p.name.lower()]


def piece_by_index(index: int) -> Piece:
    if not 0 <= index < len(PIECE_CATALOG):
        raise KeyError(f"No catalog piece with index {index}")
    return PIECE_CATALOG[index]


def resolve_piece(token: str) -> Piece:
    """Look up a piece by catalog index or exact (case-insensitive) name.

    Names shared by several shapes resolve to the first one in catalog order.
    """
    token = token.strip()
    if token.isdigit():
        return piece_by_index(int(token))
    for piece in PIECE_CATALOG:
        if piece.name.lower() == token.lower():
            return piece
    raise KeyError(f"No catalog piece named {token!r}")
