from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np


Offset = Tuple[int, int]  # (dx, dy)


@dataclass(frozen=True)
class Piece:
    """Immutable block shape.

    `cells` holds (dx, dy) offsets from the anchor cell. A piece anchored at
    (row, col) covers (row + dy, col + dx) for every offset.
    """

    name: str
    cells: Tuple[Offset, ...]

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError(f"Piece {self.name!r} has no cells")
        if len(set(self.cells)) != len(self.cells):
            raise ValueError(f"Piece {self.name!r} has duplicate cells")
        if any(dx < 0 or dy < 0 for dx, dy in self.cells):
            raise ValueError(f"Piece {self.name!r} has negative offsets")

    @classmethod
    def from_offsets(cls, name: str, offsets: Iterable[Iterable[int]]) -> "Piece":
        cells = tuple((int(dx), int(dy)) for dx, dy in offsets)
        return cls(name=name, cells=cells)

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return max(dx for dx, _ in self.cells) + 1

    @property
    def height(self) -> int:
        return max(dy for _, dy in self.cells) + 1

    def shape(self) -> np.ndarray:
        s = np.zeros((self.height, self.width), dtype=np.int8)
        for dx, dy in self.cells:
            s[dy, dx] = 1
        return s

    def cells_at(self, row: int, col: int) -> List[Tuple[int, int]]:
        return [(row + dy, col + dx) for dx, dy in self.cells]

    def __str__(self) -> str:
        return self.name
