from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from ..core.position import Position
from ..core.rng import RNG
from ..core.things import ThingType
from ..errors import GenerationError
from ..settings import SpawnSettings, clamp_difficulty
from .map import DungeonMap
from .pathfinding import unreachable_floor

logger = logging.getLogger(__name__)

# Carving moves two cells at a time so a wall always separates corridors.
CARVE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 2), (0, -2), (2, 0), (-2, 0))


def level1_entry(rows: int) -> Position:
    """Bottom-left corner; the level 1 entry marker."""
    return Position(rows - 1, 0)


def level1_spawn(rows: int) -> Position:
    """The cell just above the level 1 entry, where the player starts."""
    return Position(rows - 2, 0)


class MazeGenerator:
    """Builds a playable level.

    Pipeline:
    - fill the grid with walls
    - carve a spanning-tree maze with a randomized backtracker on odd cells
    - force the entry marker and clear the spawn cell
    - place the ladder and scatter items/mutants on shuffled empty cells

    Placement consumes a shuffled pool of eligible cells, so it always
    terminates; when the pool runs dry the remaining placements are dropped
    and recorded in ``DungeonMap.placement_shortfall``.
    """

    def __init__(self, rows: int, cols: int, spawns: Optional[SpawnSettings] = None, rng: Optional[RNG] = None) -> None:
        if rows < 3 or cols < 3:
            raise ValueError("Map must be at least 3x3")
        self.rows = rows
        self.cols = cols
        self.spawns = spawns or SpawnSettings()
        self.rng = rng or RNG()

    def spawn_plan(self, difficulty: int) -> List[Tuple[ThingType, int]]:
        """Ordered (type, count) pairs scattered after the ladder."""
        s = self.spawns
        return [
            (ThingType.GOLD, s.gold),
            (ThingType.TRAP, s.trap),
            (ThingType.MELEE_MUTANT, s.melee_mutant),
            (ThingType.HEALTH_POTION, s.health_potion),
            (ThingType.BOMB, s.bomb),
            (ThingType.RANGED_MUTANT, s.ranged_per_difficulty * difficulty),
        ]

    def generate(
        self,
        difficulty: int,
        first_level: bool = True,
        seed_position: Optional[Position] = None,
    ) -> DungeonMap:
        """Generate a level.

        Args:
            difficulty: 0-10 (clamped); scales the ranged mutant count.
            first_level: level 1 uses the fixed bottom-left entry; level 2
                uses ``seed_position``.
            seed_position: the level 1 ladder coordinate, which becomes the
                level 2 entry and carving origin.
        """
        difficulty = clamp_difficulty(difficulty)
        grid = DungeonMap(self.rows, self.cols, fill=ThingType.WALL)

        if first_level:
            entry = level1_entry(self.rows)
            spawn = level1_spawn(self.rows)
            origin = Position(self.rows - 3 if self.rows % 2 == 0 else self.rows - 2, 1)
        else:
            if seed_position is None:
                logger.warning("No level 1 ladder supplied for level 2; using the default entry")
                seed_position = level1_entry(self.rows)
            if not grid.contains(seed_position):
                raise IndexError(f"Seed position {seed_position} is outside the {self.rows}x{self.cols} grid")
            entry = seed_position
            spawn = seed_position
            origin = seed_position

        start = self._carve_start(origin)
        logger.info(
            "Generating %s (%dx%d, difficulty %d) carving from %s",
            "level 1" if first_level else "level 2",
            self.rows,
            self.cols,
            difficulty,
            start,
        )
        self._carve(grid, start)

        grid.set_thing(entry, ThingType.ENTRY)
        if spawn != entry:
            grid.clear(spawn)
        grid.entry = entry
        grid.spawn = spawn

        pool = [p for p in grid.empty_positions() if p not in (spawn, entry)]
        self.rng.shuffle(pool)
        placements = iter(pool)
        ladder = next(placements, None)
        if ladder is None:
            raise GenerationError("No free floor cell left for the ladder")
        grid.set_thing(ladder, ThingType.LADDER)

        for kind, count in self.spawn_plan(difficulty):
            if count <= 0:
                continue
            placed = 0
            for pos in placements:
                grid.set_thing(pos, kind)
                placed += 1
                if placed == count:
                    break
            if placed < count:
                grid.placement_shortfall[kind] = count - placed
                logger.warning("Only placed %d of %d %s; no free floor left", placed, count, kind.name)

        self._validate(grid)
        logger.debug("Generated map:\n%s", grid)
        return grid

    def _carve_start(self, origin: Position) -> Position:
        r, c = origin.row, origin.col
        if r % 2 == 0:
            r += 1
        if c % 2 == 0:
            c += 1
        if r >= self.rows:
            r = self.rows - (3 if self.rows % 2 == 0 else 2)
        if c >= self.cols:
            c = self.cols - (3 if self.cols % 2 == 0 else 2)
        return Position(max(r, 1), max(c, 1))

    def _shuffled_directions(self) -> Iterator[Tuple[int, int]]:
        return iter(self.rng.shuffled(list(CARVE_DIRECTIONS)))

    def _carve(self, grid: DungeonMap, start: Position) -> None:
        """Randomized depth-first backtracker.

        Uses an explicit stack instead of recursion; the visiting order is the
        same as the recursive formulation.
        """
        grid.clear(start)
        stack = [(start, self._shuffled_directions())]
        while stack:
            current, directions = stack[-1]
            for dr, dc in directions:
                nr, nc = current.row + dr, current.col + dc
                if grid.in_bounds(nr, nc) and grid.thing_at(Position(nr, nc)) is ThingType.WALL:
                    grid.clear(Position(current.row + dr // 2, current.col + dc // 2))
                    nxt = Position(nr, nc)
                    grid.clear(nxt)
                    stack.append((nxt, self._shuffled_directions()))
                    break
            else:
                stack.pop()

    @staticmethod
    def _validate(grid: DungeonMap) -> None:
        if grid.spawn is None or grid.entry is None:
            raise GenerationError("Generated map is missing its spawn or entry")
        if not grid.is_traversable(grid.spawn) or not grid.is_traversable(grid.entry):
            raise GenerationError("Spawn and entry must be traversable")
        if grid.count(ThingType.ENTRY) != 1 or grid.count(ThingType.LADDER) != 1:
            raise GenerationError("A level needs exactly one entry and one ladder")
        stranded = unreachable_floor(grid, grid.spawn)
        if stranded:
            raise GenerationError(f"{len(stranded)} floor cells unreachable from spawn {grid.spawn}")
