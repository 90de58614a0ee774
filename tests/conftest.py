import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from mini_dungeon.core.position import Position  # noqa: E402
from mini_dungeon.core.rng import RNG  # noqa: E402
from mini_dungeon.dungeon.map import DungeonMap  # noqa: E402
from mini_dungeon.engine.game import GameEngine  # noqa: E402
from mini_dungeon.engine.status import GameStatus  # noqa: E402
from mini_dungeon.persistence.manager import SaveManager  # noqa: E402
from mini_dungeon.settings import GameSettings  # noqa: E402

FIXED_DAY = date(2026, 10, 16)


class FixedRNG(RNG):
    """RNG whose chance() always returns the configured outcome."""

    def __init__(self, hit: bool, seed: int = 0) -> None:
        super().__init__(seed)
        self.hit = hit

    def chance(self, probability: float) -> bool:
        return self.hit


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep tests away from the real user data dir and env overrides
    monkeypatch.setenv("MINI_DUNGEON_SAVE_DIR", str(tmp_path / "saves"))
    for name in ("MINI_DUNGEON_DIFFICULTY", "MINI_DUNGEON_STEP_BUDGET", "MINI_DUNGEON_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def engine(tmp_path) -> GameEngine:
    eng = GameEngine(GameSettings(), rng=RNG(1234), saves=SaveManager(tmp_path), clock=lambda: FIXED_DAY)
    eng.start_game(3)
    return eng


def place(engine: GameEngine, rows, player=(1, 1), **player_fields) -> GameEngine:
    """Swap a hand-built map into a running engine and put the player on it."""
    engine.map = DungeonMap.from_symbol_rows(rows)
    engine.player.move_to(Position(*player))
    for name, value in player_fields.items():
        setattr(engine.player, name, value)
    engine.status = GameStatus.PLAYING
    engine.clear_messages()
    return engine
