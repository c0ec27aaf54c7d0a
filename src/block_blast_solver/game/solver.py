"""Exhaustive round search.

For every ordering of the three pieces, every anchor of the first piece is
tried, then every anchor of the second on the resulting board, then every
anchor of the third. Each complete triple is scored with `ScoringRules` and
the best one wins. Ties go to the candidate found first, so the enumeration
order below is part of the result:

* orderings in swap order: ABC, ACB, BAC, BCA, CBA, CAB
* anchors row-major, first piece outermost
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from .bitboard import BOARD_COLS, Bitboard, detect_and_clear_lines, placement_masks
from .combo import COMBO_GRACE, ComboState, advance_combo
from .grid import GameGrid
from .pieces import Piece
from .rules import BoardFeatures, ScoringRules, board_features


logger = logging.getLogger(__name__)

PIECES_PER_ROUND = 3

_FEATURE_CACHE_LIMIT = 200_000

T = TypeVar("T")


@dataclass(frozen=True)
class Placement:
    piece: Piece
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.piece.name} at ({self.row},{self.col})"


@dataclass(frozen=True)
class Arrangement:
    """Winning plan for one round: three placements in application order."""

    placements: Tuple[Placement, ...]
    total_lines: int
    final_combo: int
    score: float
    # Projected per-step outcome, used to check the real trajectory on commit
    step_lines: Tuple[int, ...] = ()
    step_combos: Tuple[ComboState, ...] = ()


def swap_permutations(items: Sequence[T]) -> List[Tuple[T, ...]]:
    """All orderings of `items`, produced by in-place swaps.

    For three items this yields ABC, ACB, BAC, BCA, CBA, CAB.
    """
    work = list(items)
    results: List[Tuple[T, ...]] = []

    def helper(start: int) -> None:
        if start >= len(work) - 1:
            results.append(tuple(work))
            return
        for i in range(start, len(work)):
            work[i], work[start] = work[start], work[i]
            helper(start + 1)
            work[i], work[start] = work[start], work[i]

    helper(0)
    return results


def _anchor(index: int) -> Tuple[int, int]:
    return divmod(index, BOARD_COLS)


def solve_round(
    pieces: Sequence[Piece],
    board: Union[GameGrid, Bitboard],
    combo: Optional[ComboState] = None,
    rules: Optional[ScoringRules] = None,
    grace: int = COMBO_GRACE,
) -> Optional[Arrangement]:
    """Find the best placement of all three pieces, or None if none exists.

    `board` is read only. `combo` is the real combo state at the start of the
    round; it is projected forward per candidate and never modified.
    """
    if len(pieces) != PIECES_PER_ROUND:
        raise ValueError(f"A round has exactly {PIECES_PER_ROUND} pieces, got {len(pieces)}")
    start = board.to_bits() if isinstance(board, GameGrid) else int(board)
    combo = combo or ComboState()
    rules = rules or ScoringRules()

    features_cache: Dict[Bitboard, BoardFeatures] = {}
    best_score = float("-inf")
    best = None
    seen = set()
    candidates = 0

    for order in swap_permutations(pieces):
        # A repeated ordering can only tie candidates already seen
        if order in seen:
            continue
        seen.add(order)
        masks1, masks2, masks3 = (placement_masks(p) for p in order)

        for i1, m1 in enumerate(masks1):
            if m1 is None or start & m1:
                continue
            b1, lines1 = detect_and_clear_lines(start | m1)
            combo1 = advance_combo(combo, lines1, grace)

            for i2, m2 in enumerate(masks2):
                if m2 is None or b1 & m2:
                    continue
                b2, lines2 = detect_and_clear_lines(b1 | m2)
                combo2 = advance_combo(combo1, lines2, grace)
                # The third step's combo depends only on whether it clears
                combo3_clear = advance_combo(combo2, 1, grace)
                combo3_miss = advance_combo(combo2, 0, grace)

                for i3, m3 in enumerate(masks3):
                    if m3 is None or b2 & m3:
                        continue
                    b3, lines3 = detect_and_clear_lines(b2 | m3)
                    combo3 = combo3_clear if lines3 else combo3_miss

                    features = features_cache.get(b3)
                    if features is None:
                        if len(features_cache) >= _FEATURE_CACHE_LIMIT:
                            features_cache.clear()
                        features = features_cache[b3] = board_features(b3)

                    total = lines1 + lines2 + lines3
                    score = rules.score_features(features, total, combo3.combo_count)
                    candidates += 1
                    if score > best_score:
                        best_score = score
                        best = (order, (i1, i2, i3), (lines1, lines2, lines3), (combo1, combo2, combo3))

    if best is None:
        logger.debug("No arrangement for %s (%d orderings)", [p.name for p in pieces], len(seen))
        return None

    order, anchors, lines, combos = best
    placements = tuple(Placement(piece, *_anchor(idx)) for piece, idx in zip(order, anchors))
    logger.debug(
        "Searched %d orderings, %d candidates; best score %.2f",
        len(seen), candidates, best_score,
    )
    return Arrangement(
        placements=placements,
        total_lines=sum(lines),
        final_combo=combos[-1].combo_count,
        score=best_score,
        step_lines=lines,
        step_combos=combos,
    )
