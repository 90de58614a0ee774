from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.things import ThingType

SCHEMA_VERSION = 1

# Cells a ranged foe may never share.
_RANGED_FORBIDDEN = {ThingType.WALL.symbol, ThingType.ENTRY.symbol, ThingType.LADDER.symbol}


class Coordinate(BaseModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class PlayerRecord(BaseModel):
    """Player stats at save time. Saves only happen mid-game, so hp is positive."""

    hp: int = Field(..., ge=1, description="Current hit points")
    score: int = Field(..., description="Current score")
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    bomb_count: int = Field(0, ge=0, description="Bombs in inventory")


class ProgressRecord(BaseModel):
    level: int = Field(..., ge=1, le=2)
    steps_taken: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=0, le=10)
    step_budget: int = Field(..., gt=0)
    level1_ladder: Optional[Coordinate] = Field(
        default=None, description="Level 1 ladder, known once level 2 has been entered"
    )


class MapRecord(BaseModel):
    """Occupant grid, one string per row and one symbol per cell."""

    rows: int = Field(..., ge=3)
    cols: int = Field(..., ge=3)
    cells: List[str]
    ranged_foes: List[Coordinate] = Field(default_factory=list)

    @field_validator("cells")
    @classmethod
    def known_symbols_only(cls, v: List[str]) -> List[str]:
        for r, line in enumerate(v):
            for symbol in line:
                try:
                    ThingType.from_symbol(symbol)
                except ValueError:
                    raise ValueError(f"row {r} holds unknown symbol {symbol!r}") from None
        return v

    @model_validator(mode="after")
    def check_layout(self) -> "MapRecord":
        if len(self.cells) != self.rows:
            raise ValueError(f"expected {self.rows} rows, got {len(self.cells)}")
        for r, line in enumerate(self.cells):
            if len(line) != self.cols:
                raise ValueError(f"row {r} has {len(line)} cells, expected {self.cols}")
        flat = "".join(self.cells)
        if flat.count(ThingType.ENTRY.symbol) != 1:
            raise ValueError("map must contain exactly one entry")
        if flat.count(ThingType.LADDER.symbol) != 1:
            raise ValueError("map must contain exactly one ladder")
        for foe in self.ranged_foes:
            if foe.row >= self.rows or foe.col >= self.cols:
                raise ValueError(f"ranged foe at ({foe.row}, {foe.col}) is outside the map")
            if self.cells[foe.row][foe.col] in _RANGED_FORBIDDEN:
                raise ValueError(f"ranged foe at ({foe.row}, {foe.col}) sits on a structural cell")
        return self

    def symbol_at(self, row: int, col: int) -> str:
        return self.cells[row][col]


class ScoreRecord(BaseModel):
    score: int = Field(..., gt=0)
    date: dt.date


class SaveRecord(BaseModel):
    """Complete saved game: player, progress, current map and leaderboard."""

    schema_version: int = Field(SCHEMA_VERSION)
    saved_at: dt.datetime = Field(default_factory=dt.datetime.now)
    player: PlayerRecord
    progress: ProgressRecord
    map: MapRecord
    leaderboard: List[ScoreRecord] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v != SCHEMA_VERSION:
            raise ValueError(f"unsupported schema_version {v}")
        return v

    @model_validator(mode="after")
    def player_on_map(self) -> "SaveRecord":
        p, m = self.player, self.map
        if p.row >= m.rows or p.col >= m.cols:
            raise ValueError(f"player at ({p.row}, {p.col}) is outside the {m.rows}x{m.cols} map")
        if m.symbol_at(p.row, p.col) == ThingType.WALL.symbol:
            raise ValueError(f"player at ({p.row}, {p.col}) stands in a wall")
        ladder = self.progress.level1_ladder
        if ladder is not None and (ladder.row >= m.rows or ladder.col >= m.cols):
            raise ValueError("level 1 ladder is outside the map")
        return self
