from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Row/column offsets for the 8 surrounding cells, row-major.
NEIGHBOUR_OFFSETS_8: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


@dataclass(frozen=True, order=True)
class Position:
    """Immutable (row, col) grid coordinate. Ordering is row-major."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if self.row < 0 or self.col < 0:
            raise ValueError(f"Position coordinates must be >= 0, got ({self.row}, {self.col})")

    def manhattan(self, other: "Position") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
