from conftest import FixedRNG, place

from mini_dungeon.core.position import Position
from mini_dungeon.core.rng import RNG
from mini_dungeon.core.things import ThingType
from mini_dungeon.engine.game import GameEngine
from mini_dungeon.engine.status import GameStatus
from mini_dungeon.settings import GameSettings


def test_status_is_none_before_first_game():
    eng = GameEngine(GameSettings(), rng=RNG(0))
    assert eng.status is None
    assert eng.move_player("u") is False
    assert eng.messages == ["Game is not playing. Start a new game."]
    assert eng.render() == ""


def test_start_game_initial_state(engine):
    assert engine.status is GameStatus.PLAYING
    assert engine.level == 1
    assert engine.difficulty == 3
    assert engine.position == Position(18, 0)
    assert engine.hp == 10 and engine.score == 0 and engine.bombs == 0
    assert engine.level1_ladder is None
    assert engine.messages[0] == "Welcome to MiniDungeon!"
    assert engine.messages[1] == "Starting Level 1 with difficulty 3..."
    assert engine.player_status() == "HP: 10 | Score: 0 | Steps: 0/100 | Bombs: 0"
    assert engine.render().splitlines()[18][0] == "P"


def test_start_game_clamps_difficulty(engine):
    engine.start_game(42)
    assert engine.difficulty == 10
    engine.start_game(-3)
    assert engine.difficulty == 0


def test_out_of_bounds_rejection_is_idempotent(engine):
    place(engine, ["   ", "   ", "  L"], player=(0, 0))
    before = engine.map.snapshot()
    for _ in range(2):
        assert engine.move_player("u") is False
    assert engine.messages == ["You tried to move u one step but it is out of bounds."] * 2
    assert engine.position == Position(0, 0)
    assert engine.steps_taken == 0
    assert engine.map.snapshot() == before


def test_wall_rejected(engine):
    place(engine, [" E ", " # ", "  L"], player=(0, 1))
    assert engine.move_player("d") is False
    assert engine.messages == ["You tried to move d one step but it is a wall."]
    assert engine.position == Position(0, 1)
    assert engine.steps_taken == 0


def test_invalid_token_rejected(engine):
    place(engine, ["   ", "   ", "  L"], player=(1, 1))
    assert engine.move_player("x") is False
    assert engine.messages == ["Invalid move: x. Use 'u', 'd', 'l', or 'r'."]
    assert engine.steps_taken == 0


def test_long_and_mixed_case_tokens(engine):
    place(engine, ["   ", "   ", "  L"], player=(1, 1))
    assert engine.move_player("UP") is True
    assert engine.position == Position(0, 1)
    assert engine.move_player(" Down ") is True
    assert engine.position == Position(1, 1)
    assert engine.messages[-1] == "You moved d one step. Steps taken: 2"


def test_melee_mutant(engine):
    place(engine, ["EM ", "   ", "  L"], player=(0, 0))
    assert engine.move_player("r")
    assert engine.hp == 8
    assert engine.score == 2
    assert engine.map.thing_at(Position(0, 1)) is None
    assert engine.steps_taken == 1


def test_gold_potion_and_bomb_pickups(engine):
    place(engine, ["EGHB", "    ", "   L"], player=(0, 0), hp=9)
    engine.move_player("r")
    assert engine.score == 2
    assert engine.messages[-1] == "You picked up a gold. Score: 2"
    engine.move_player("r")
    assert engine.hp == 10
    engine.move_player("r")
    assert engine.bombs == 1
    assert [engine.map.thing_at(Position(0, c)) for c in range(1, 4)] == [None, None, None]


def test_trap_stays(engine):
    place(engine, ["ET ", "   ", "  L"], player=(0, 0))
    engine.move_player("r")
    assert engine.hp == 8
    assert engine.map.thing_at(Position(0, 1)) is ThingType.TRAP


def test_ranged_attack_hits_before_move(engine):
    place(engine, ["E R", "   ", "  L"], player=(0, 0))
    engine.rng = FixedRNG(hit=True)
    engine.move_player("d")
    assert engine.hp == 8
    assert "A ranged mutant at (0, 2) attacked and you lost 2 HP. Current HP: 8" in engine.messages
    # Attack is logged before the move line
    assert engine.messages.index("You moved d one step. Steps taken: 1") > 0


def test_ranged_attack_miss(engine):
    place(engine, ["E R", "   ", "  L"], player=(0, 0))
    engine.rng = FixedRNG(hit=False)
    engine.move_player("d")
    assert engine.hp == 10
    assert engine.messages[0] == "A ranged mutant at (0, 2) attacked, but missed."


def test_ranged_out_of_range_does_nothing(engine):
    place(engine, ["E  ", "   ", " RL"], player=(0, 0))
    engine.rng = FixedRNG(hit=True)
    engine.move_player("r")
    assert engine.hp == 10
    assert engine.messages == ["You moved r one step. Steps taken: 1"]


def test_stepping_on_ranged_mutant(engine):
    place(engine, ["ER ", "   ", "  L"], player=(0, 0))
    engine.rng = FixedRNG(hit=False)
    engine.move_player("r")
    assert engine.score == 2
    assert engine.map.ranged_mutant_positions() == []
    assert engine.map.thing_at(Position(0, 1)) is None


def test_ladder_on_level1_advances(engine):
    place(engine, ["EL ", "   ", "   "], player=(0, 0))
    engine.move_player("r")
    assert engine.score == 30
    assert engine.level == 2
    assert engine.difficulty == 5
    assert engine.level1_ladder == Position(0, 1)
    assert engine.position == Position(0, 1)
    assert engine.map.entry == Position(0, 1)
    assert (engine.map.rows, engine.map.cols) == (3, 3)
    assert engine.status is GameStatus.PLAYING
    assert "Entering Level 2 with difficulty 5..." in engine.messages
