import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from block_blast_solver.game import Piece, resolve_piece


@pytest.fixture
def dot() -> Piece:
    return resolve_piece("Dot (1)")


@pytest.fixture
def cube() -> Piece:
    return resolve_piece("Cube (4)")
