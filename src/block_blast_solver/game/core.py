from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .combo import COMBO_GRACE, ComboState, advance_combo
from .grid import GameGrid
from .pieces import Piece
from .rules import ScoringRules
from .solver import PIECES_PER_ROUND, Arrangement, Placement, solve_round


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    pieces_per_round: int = PIECES_PER_ROUND
    combo_grace: int = COMBO_GRACE
    rules: ScoringRules = field(default_factory=ScoringRules)


@dataclass
class PlacementStep:
    placement: Placement
    lines_cleared: int
    cleared_rows: List[int]
    cleared_cols: List[int]
    combo: ComboState
    # Board right after placing, before clearing
    board: np.ndarray


@dataclass
class PlacementTrace:
    steps: List[PlacementStep]
    combo: ComboState

    @property
    def total_lines(self) -> int:
        return sum(step.lines_cleared for step in self.steps)


@dataclass
class RoundResult:
    solved: bool
    arrangement: Optional[Arrangement] = None
    trace: Optional[PlacementTrace] = None


def apply_arrangement(arrangement: Arrangement, grid: GameGrid, combo: ComboState,
                      grace: int = COMBO_GRACE) -> PlacementTrace:
    """Commit an arrangement to the real grid, one piece at a time.

    Mutates `grid`. The combo state is advanced after each piece and the final
    state is returned on the trace.
    """
    steps: List[PlacementStep] = []
    for idx, placement in enumerate(arrangement.placements):
        grid.place(placement.piece, placement.row, placement.col)
        snapshot = grid.clone_state()
        cleared = grid.clear_lines()
        for r in cleared.rows:
            logger.info("Cleared row %d", r)
        for c in cleared.cols:
            logger.info("Cleared column %d", c)

        previous = combo
        combo = advance_combo(combo, cleared.lines_cleared, grace)
        if cleared.lines_cleared > 0:
            logger.info("Lines cleared! Current combo = %d", combo.combo_count)
        elif previous.combo_count > 0 and combo.combo_count == 0:
            logger.info("Combo lost (no line clear within %d pieces).", grace)

        if idx < len(arrangement.step_combos) and arrangement.step_combos[idx] != combo:
            raise RuntimeError(
                f"Combo diverged at step {idx + 1}: projected {arrangement.step_combos[idx]}, got {combo}"
            )
        steps.append(PlacementStep(
            placement=placement,
            lines_cleared=cleared.lines_cleared,
            cleared_rows=cleared.rows,
            cleared_cols=cleared.cols,
            combo=combo,
            board=snapshot,
        ))
    return PlacementTrace(steps=steps, combo=combo)


class BlockBlastGame:
    """Real board plus real combo state, advanced one solved round at a time."""

    def __init__(self, config: Optional[GameConfig] = None, grid: Optional[GameGrid] = None) -> None:
        self.config = config or GameConfig()
        self.grid = grid or GameGrid()
        self.combo = ComboState()
        self.rounds_played = 0
        self.total_lines_cleared = 0
        self.game_over = False

    def reset(self) -> None:
        self.grid.reset()
        self.combo = ComboState()
        self.rounds_played = 0
        self.total_lines_cleared = 0
        self.game_over = False

    def solve(self, pieces: Sequence[Piece]) -> Optional[Arrangement]:
        if len(pieces) != self.config.pieces_per_round:
            raise ValueError(f"Select exactly {self.config.pieces_per_round} pieces, got {len(pieces)}")
        return solve_round(pieces, self.grid, self.combo, self.config.rules, self.config.combo_grace)

    def play_round(self, pieces: Sequence[Piece]) -> RoundResult:
        arrangement = self.solve(pieces)
        if arrangement is None:
            logger.info("No valid arrangement for %s", ", ".join(p.name for p in pieces))
            self.game_over = True
            return RoundResult(solved=False)

        trace = apply_arrangement(arrangement, self.grid, self.combo, self.config.combo_grace)
        self.combo = trace.combo
        self.rounds_played += 1
        self.total_lines_cleared += trace.total_lines
        return RoundResult(solved=True, arrangement=arrangement, trace=trace)

    def get_state(self) -> dict:
        return {
            "grid": self.grid.clone_state(),
            "combo_count": self.combo.combo_count,
            "pieces_since_last_clear": self.combo.pieces_since_last_clear,
            "rounds_played": self.rounds_played,
            "total_lines_cleared": self.total_lines_cleared,
            "filled_ratio": self.grid.get_filled_ratio(),
            "game_over": self.game_over,
        }
