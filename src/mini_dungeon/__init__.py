"""
MiniDungeon core package.

Headless domain logic for a two-level, turn-based dungeon crawl:
- Maze generation and entity placement for each level
- Turn resolution (movement, combat, pickups, bombs, win/loss)
- Leaderboard and bounded message log
- Save/load of the full game state

Front ends (GUI, console) should import and drive ``GameEngine``.
"""
from importlib.metadata import PackageNotFoundError, version

from .engine.game import GameEngine
from .engine.status import Direction, GameStatus
from .errors import (
    GenerationError,
    MiniDungeonError,
    SaveError,
    SaveNotFoundError,
    SaveValidationError,
    SaveWriteError,
)
from .settings import GameSettings

try:
    __version__ = version("mini-dungeon")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "GameEngine",
    "GameSettings",
    "GameStatus",
    "Direction",
    "MiniDungeonError",
    "GenerationError",
    "SaveError",
    "SaveNotFoundError",
    "SaveValidationError",
    "SaveWriteError",
]
