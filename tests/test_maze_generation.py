import pytest

from mini_dungeon.core.position import Position
from mini_dungeon.core.rng import RNG
from mini_dungeon.core.things import ThingType
from mini_dungeon.dungeon.generator import MazeGenerator
from mini_dungeon.dungeon.pathfinding import find_path_bfs, unreachable_floor
from mini_dungeon.settings import SpawnSettings

PLACED = {
    ThingType.GOLD: 10,
    ThingType.TRAP: 8,
    ThingType.MELEE_MUTANT: 6,
    ThingType.HEALTH_POTION: 4,
    ThingType.BOMB: 3,
}


def assert_playable(grid):
    assert grid.is_traversable(grid.spawn)
    assert grid.is_traversable(grid.entry)
    assert grid.count(ThingType.ENTRY) == 1
    assert grid.count(ThingType.LADDER) == 1
    assert not unreachable_floor(grid, grid.spawn)
    dist = find_path_bfs(grid, grid.spawn, grid.ladder)
    assert dist is not None and dist > 0


@pytest.mark.parametrize("seed", range(20))
def test_level1_connected_and_counts(seed):
    gen = MazeGenerator(20, 20, SpawnSettings(), RNG(seed))
    grid = gen.generate(3, first_level=True)
    assert grid.entry == Position(19, 0)
    assert grid.spawn == Position(18, 0)
    assert grid.thing_at(grid.entry) is ThingType.ENTRY
    assert grid.thing_at(grid.spawn) is None
    assert_playable(grid)
    for kind, count in PLACED.items():
        assert grid.count(kind) == count
    assert len(grid.ranged_mutant_positions()) == 6
    assert grid.placement_shortfall == {}


@pytest.mark.parametrize("difficulty", range(11))
def test_every_difficulty_scales_ranged_foes(difficulty):
    grid = MazeGenerator(20, 20, SpawnSettings(), RNG(difficulty)).generate(difficulty)
    assert_playable(grid)
    assert grid.count(ThingType.RANGED_MUTANT) == 2 * difficulty


def test_difficulty_is_clamped():
    grid = MazeGenerator(20, 20, SpawnSettings(), RNG(5)).generate(25)
    assert grid.count(ThingType.RANGED_MUTANT) == 20


@pytest.mark.parametrize("seed", range(10))
def test_level2_seeded_from_level1_ladder(seed):
    rng = RNG(seed)
    gen = MazeGenerator(20, 20, SpawnSettings(), rng)
    level1 = gen.generate(3, first_level=True)
    ladder = level1.ladder
    level2 = gen.generate(5, first_level=False, seed_position=ladder)
    assert level2.entry == ladder
    assert level2.spawn == ladder
    assert level2.thing_at(ladder) is ThingType.ENTRY
    assert_playable(level2)
    assert level2.count(ThingType.RANGED_MUTANT) == 10


def test_same_seed_same_map():
    a = MazeGenerator(20, 20, SpawnSettings(), RNG(42)).generate(3)
    b = MazeGenerator(20, 20, SpawnSettings(), RNG(42)).generate(3)
    assert a.snapshot() == b.snapshot()


def test_small_map_records_shortfall():
    grid = MazeGenerator(5, 5, SpawnSettings(), RNG(3)).generate(2)
    assert grid.count(ThingType.LADDER) == 1
    assert grid.empty_positions() == [grid.spawn]
    # 4 lattice cells + 3 connectors; one holds the ladder
    assert grid.count(ThingType.GOLD) == 6
    assert grid.placement_shortfall[ThingType.GOLD] == 4
    assert grid.placement_shortfall[ThingType.TRAP] == 8
    assert grid.placement_shortfall[ThingType.RANGED_MUTANT] == 4
    assert_playable(grid)


def test_zero_counts_place_nothing():
    spawns = SpawnSettings(gold=0, trap=0, melee_mutant=0, health_potion=0, bomb=0, ranged_per_difficulty=0)
    grid = MazeGenerator(9, 9, spawns, RNG(0)).generate(3)
    things = [grid.thing_at(p) for p in grid.positions()]
    assert set(things) == {ThingType.WALL, ThingType.ENTRY, ThingType.LADDER, None}
    assert grid.placement_shortfall == {}


def test_level2_without_seed_uses_default_entry():
    grid = MazeGenerator(20, 20, SpawnSettings(), RNG(8)).generate(5, first_level=False)
    assert grid.entry == Position(19, 0)
    assert_playable(grid)


def test_seed_outside_grid_raises():
    gen = MazeGenerator(10, 10, SpawnSettings(), RNG(0))
    with pytest.raises(IndexError):
        gen.generate(3, first_level=False, seed_position=Position(10, 2))
