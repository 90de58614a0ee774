from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pydantic import ValidationError

from ..core.player import Player
from ..core.position import Position
from ..core.scores import ScoreEntry
from ..core.things import ThingType
from ..dungeon.map import DungeonMap
from ..errors import SaveValidationError
from .models import (
    Coordinate,
    MapRecord,
    PlayerRecord,
    ProgressRecord,
    SaveRecord,
    ScoreRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class RestoredGame:
    """Engine state rebuilt from a validated record, ready to be swapped in."""

    player: Player
    level: int
    steps_taken: int
    difficulty: int
    step_budget: int
    level1_ladder: Optional[Position]
    map: DungeonMap
    leaderboard: List[ScoreEntry]


def _coord(pos: Position) -> Coordinate:
    return Coordinate(row=pos.row, col=pos.col)


def build_record(
    *,
    player: Player,
    level: int,
    steps_taken: int,
    difficulty: int,
    step_budget: int,
    level1_ladder: Optional[Position],
    grid: DungeonMap,
    leaderboard: Iterable[ScoreEntry],
) -> SaveRecord:
    return SaveRecord(
        player=PlayerRecord(
            hp=player.hp,
            score=player.score,
            row=player.position.row,
            col=player.position.col,
            bomb_count=player.bomb_count,
        ),
        progress=ProgressRecord(
            level=level,
            steps_taken=steps_taken,
            difficulty=difficulty,
            step_budget=step_budget,
            level1_ladder=_coord(level1_ladder) if level1_ladder is not None else None,
        ),
        map=MapRecord(
            rows=grid.rows,
            cols=grid.cols,
            cells=grid.to_symbol_rows(),
            ranged_foes=[_coord(p) for p in grid.ranged_mutant_positions()],
        ),
        leaderboard=[ScoreRecord(score=e.score, date=e.achieved_on) for e in leaderboard],
    )


def restore(record: SaveRecord, *, max_hp: int) -> RestoredGame:
    """Rebuild engine state from a record without touching any live engine.

    The occupant grid is taken as saved. The ranged foe list decides where
    ranged foes stand: listed cells get one and any other ``R`` is cleared.
    """
    m = record.map
    grid = DungeonMap.from_symbol_rows(m.cells)
    listed = {Position(c.row, c.col) for c in m.ranged_foes}
    for pos in grid.ranged_mutant_positions():
        if pos not in listed:
            grid.clear(pos)
    for pos in listed:
        grid.set_thing(pos, ThingType.RANGED_MUTANT)

    p = record.player
    player = Player(
        hp=p.hp,
        score=p.score,
        position=Position(p.row, p.col),
        bomb_count=p.bomb_count,
        max_hp=max_hp,
    )
    grid.spawn = player.position

    progress = record.progress
    ladder = progress.level1_ladder
    return RestoredGame(
        player=player,
        level=progress.level,
        steps_taken=progress.steps_taken,
        difficulty=progress.difficulty,
        step_budget=progress.step_budget,
        level1_ladder=Position(ladder.row, ladder.col) if ladder is not None else None,
        map=grid,
        leaderboard=[ScoreEntry(s.score, s.date) for s in record.leaderboard],
    )


def encode(record: SaveRecord) -> str:
    return record.model_dump_json(indent=2)


def decode(text: str) -> SaveRecord:
    """Parse and validate a JSON save; raises SaveValidationError on any problem."""
    try:
        return SaveRecord.model_validate_json(text)
    except ValidationError as e:
        logger.debug("Save record failed validation: %s", e)
        raise SaveValidationError(_summarise(e)) from e


def _summarise(error: ValidationError) -> str:
    first = error.errors()[0]
    where = ".".join(str(part) for part in first.get("loc", ())) or "record"
    more = error.error_count() - 1
    suffix = f" (+{more} more)" if more > 0 else ""
    return f"{where}: {first.get('msg', 'invalid value')}{suffix}"
