import pytest

from mini_dungeon.core.cell import Cell
from mini_dungeon.core.player import Player
from mini_dungeon.core.position import Position
from mini_dungeon.core.rng import RNG
from mini_dungeon.core.things import Category, ThingType


def test_position_value_semantics():
    assert Position(2, 3) == Position(2, 3)
    assert sorted([Position(1, 5), Position(0, 9), Position(1, 0)]) == [
        Position(0, 9),
        Position(1, 0),
        Position(1, 5),
    ]
    assert Position(0, 0).manhattan(Position(2, 1)) == 3
    assert str(Position(4, 7)) == "(4, 7)"
    assert len({Position(1, 1), Position(1, 1)}) == 1


def test_position_rejects_negative():
    with pytest.raises(ValueError):
        Position(-1, 0)
    with pytest.raises(ValueError):
        Position(0, -2)


def test_thing_symbols_and_categories():
    assert ThingType.from_symbol("G") is ThingType.GOLD
    assert ThingType.from_symbol("#") is ThingType.WALL
    assert ThingType.from_symbol(" ") is None
    assert {t.symbol for t in ThingType} == set("EL#TGMRHB")
    assert ThingType.TRAP.category is Category.HOSTILE
    assert ThingType.BOMB.category is Category.ITEM
    assert ThingType.LADDER.is_structural
    assert not ThingType.GOLD.is_structural


def test_player_glyph_is_not_a_thing():
    with pytest.raises(ValueError):
        ThingType.from_symbol("P")
    with pytest.raises(ValueError):
        ThingType.from_symbol("x")


def test_cell_traversal_and_clear():
    assert Cell().is_traversable
    assert Cell().symbol == " "
    assert not Cell(ThingType.WALL).is_traversable
    assert Cell(ThingType.TRAP).is_traversable

    cell = Cell(ThingType.GOLD)
    assert cell.contains(ThingType.GOLD)
    assert cell.clear() is ThingType.GOLD
    assert cell.is_empty


def test_player_heal_caps_at_max():
    p = Player(hp=9)
    assert p.heal(4) == 10


def test_player_damage_floors_at_minus_one():
    p = Player(hp=1)
    assert p.take_damage(5) == -1
    assert not p.is_alive


def test_player_bombs():
    p = Player()
    assert p.use_bomb() is False
    assert p.bomb_count == 0
    p.add_bombs()
    assert p.use_bomb() is True
    assert p.bomb_count == 0


def test_rng_is_reproducible():
    a, b = RNG(7), RNG(7)
    assert [a.chance(0.5) for _ in range(10)] == [b.chance(0.5) for _ in range(10)]
    items = [1, 2, 3, 4]
    a.shuffle(items)
    b_items = [1, 2, 3, 4]
    b.shuffle(b_items)
    assert items == b_items
    assert a.shuffled([1, 2, 3, 4]) == b.shuffled([1, 2, 3, 4])
    assert RNG(1).chance(1.0) is True
    assert RNG(1).chance(0.0) is False
