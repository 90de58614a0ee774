from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..core.cell import Cell
from ..core.position import NEIGHBOUR_OFFSETS_8, Position
from ..core.things import PLAYER_SYMBOL, ThingType

logger = logging.getLogger(__name__)


class DungeonMap:
    """
    Fixed-size grid of cells for one level. All cell access is bounds-checked;
    asking for a coordinate outside the grid is a caller bug and raises
    IndexError.

    ``entry`` and ``spawn`` are the level's structural coordinates. Ranged
    mutant positions are always derived from the grid, never cached.
    """

    def __init__(self, rows: int, cols: int, fill: Optional[ThingType] = ThingType.WALL) -> None:
        if rows < 3 or cols < 3:
            raise ValueError("Map must be at least 3x3")
        self.rows = rows
        self.cols = cols
        self._cells: List[List[Cell]] = [[Cell(fill) for _ in range(cols)] for _ in range(rows)]
        self.entry: Optional[Position] = None
        self.spawn: Optional[Position] = None
        # Requested entities that did not fit during generation, by type.
        self.placement_shortfall: Dict[ThingType, int] = {}

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def contains(self, pos: Position) -> bool:
        return self.in_bounds(pos.row, pos.col)

    def cell_at(self, pos: Position) -> Cell:
        if not self.contains(pos):
            raise IndexError(f"Coordinates {pos} are out of map bounds {self.rows}x{self.cols}")
        return self._cells[pos.row][pos.col]

    def thing_at(self, pos: Position) -> Optional[ThingType]:
        return self.cell_at(pos).thing

    def set_thing(self, pos: Position, thing: Optional[ThingType]) -> None:
        self.cell_at(pos).thing = thing

    def clear(self, pos: Position) -> Optional[ThingType]:
        return self.cell_at(pos).clear()

    # ---- Query -----------------------------------------------------------
    def is_traversable(self, pos: Position) -> bool:
        return self.cell_at(pos).is_traversable

    def positions(self) -> Iterator[Position]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield Position(r, c)

    def find_all(self, kind: ThingType) -> List[Position]:
        return [p for p in self.positions() if self._cells[p.row][p.col].thing is kind]

    def find_first(self, kind: ThingType) -> Optional[Position]:
        for p in self.positions():
            if self._cells[p.row][p.col].thing is kind:
                return p
        return None

    @property
    def ladder(self) -> Optional[Position]:
        return self.find_first(ThingType.LADDER)

    def ranged_mutant_positions(self) -> List[Position]:
        return self.find_all(ThingType.RANGED_MUTANT)

    def empty_positions(self) -> List[Position]:
        return [p for p in self.positions() if self._cells[p.row][p.col].is_empty]

    def neighbors_4(self, pos: Position) -> Iterable[Position]:
        for dr, dc in ((-1, 0), (0, 1), (1, 0), (0, -1)):
            r, c = pos.row + dr, pos.col + dc
            if self.in_bounds(r, c):
                yield Position(r, c)

    def neighbors_with_any_of(self, center: Position, kinds: Iterable[ThingType]) -> List[Position]:
        """Return the 8-neighbours of ``center`` holding any of ``kinds``."""
        if not self.contains(center):
            raise IndexError(f"Coordinates {center} are out of map bounds {self.rows}x{self.cols}")
        wanted = frozenset(kinds)
        found: List[Position] = []
        for dr, dc in NEIGHBOUR_OFFSETS_8:
            r, c = center.row + dr, center.col + dc
            if self.in_bounds(r, c) and self._cells[r][c].thing in wanted:
                found.append(Position(r, c))
        return found

    def count(self, kind: ThingType) -> int:
        return len(self.find_all(kind))

    # ---- Export / Import -------------------------------------------------
    def to_symbol_rows(self) -> List[str]:
        """One string per row, one symbol per cell, space for empty."""
        return ["".join(cell.symbol for cell in row) for row in self._cells]

    def render(self, player: Optional[Position] = None) -> str:
        lines = []
        for r, row in enumerate(self._cells):
            chars = []
            for c, cell in enumerate(row):
                if player is not None and (r, c) == (player.row, player.col):
                    chars.append(PLAYER_SYMBOL)
                else:
                    chars.append(cell.symbol)
            lines.append(" ".join(chars))
        return "\n".join(lines)

    @classmethod
    def from_symbol_rows(
        cls,
        rows: Sequence[str],
        *,
        spawn: Optional[Position] = None,
    ) -> "DungeonMap":
        """Build a map from symbol rows as produced by ``to_symbol_rows``.

        The entry marker's coordinate becomes ``entry``; ``spawn`` defaults to
        the entry when not given. Raises ValueError on ragged rows or unknown
        symbols.
        """
        if not rows:
            raise ValueError("Map needs at least one row")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("All map rows must have the same length")
        m = cls(len(rows), width, fill=None)
        for r, line in enumerate(rows):
            for c, symbol in enumerate(line):
                m._cells[r][c].thing = ThingType.from_symbol(symbol)
        m.entry = m.find_first(ThingType.ENTRY)
        m.spawn = spawn if spawn is not None else m.entry
        return m

    def snapshot(self) -> tuple:
        """Hashable snapshot of the occupant layout for equality tests."""
        return tuple(self.to_symbol_rows())

    def __str__(self) -> str:
        return "\n".join(self.to_symbol_rows())
