from __future__ import annotations

from dataclasses import dataclass


COMBO_GRACE = 3


@dataclass(frozen=True)
class ComboState:
    """Streak counters. combo_count 0 means no active streak."""

    combo_count: int = 0
    pieces_since_last_clear: int = 0


def advance_combo(state: ComboState, lines_cleared: int, grace: int = COMBO_GRACE) -> ComboState:
    """Apply one placement's outcome to a combo state.

    A clear within `grace` placements of the previous one extends the streak;
    a later clear starts a new streak at 1. A miss that takes the gap past
    `grace` drops the streak to 0.
    """
    if lines_cleared > 0:
        if state.pieces_since_last_clear <= grace:
            combo = 1 if state.combo_count == 0 else state.combo_count + 1
        else:
            combo = 1
        return ComboState(combo_count=combo, pieces_since_last_clear=0)

    pieces = state.pieces_since_last_clear + 1
    combo = 0 if pieces > grace else state.combo_count
    return ComboState(combo_count=combo, pieces_since_last_clear=pieces)
