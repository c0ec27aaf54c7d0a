"""Game module for the Block Blast round solver.

Exports the board engine and the solver:
- GameGrid: 8x8 occupancy grid, placement and line clearing
- Piece / PIECE_CATALOG: block shapes and the catalog of available pieces
- ComboState / advance_combo: streak tracking
- ScoringRules: heuristic weights and board evaluation
- solve_round: exhaustive 3-piece search
- BlockBlastGame / apply_arrangement: committing solved rounds
"""

from .bitboard import BOARD_COLS, BOARD_ROWS, InvalidPlacementError
from .catalog import PIECE_CATALOG, resolve_piece, search_pieces
from .combo import ComboState, advance_combo
from .core import (
    BlockBlastGame,
    GameConfig,
    PlacementStep,
    PlacementTrace,
    RoundResult,
    apply_arrangement,
)
from .grid import GameGrid, LineClear
from .pieces import Piece
from .rules import ScoringRules
from .solver import Arrangement, Placement, solve_round

__all__ = [
    "BOARD_ROWS",
    "BOARD_COLS",
    "InvalidPlacementError",
    "PIECE_CATALOG",
    "resolve_piece",
    "search_pieces",
    "ComboState",
    "advance_combo",
    "BlockBlastGame",
    "GameConfig",
    "PlacementStep",
    "PlacementTrace",
    "RoundResult",
    "apply_arrangement",
    "GameGrid",
    "LineClear",
    "Piece",
    "ScoringRules",
    "Arrangement",
    "Placement",
    "solve_round",
]
