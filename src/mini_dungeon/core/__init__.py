from .cell import Cell
from .player import MAX_HP, MIN_HP, Player
from .position import Position
from .rng import RNG
from .scores import Leaderboard, ScoreEntry
from .things import Category, ThingType

__all__ = [
    "Cell",
    "Category",
    "Leaderboard",
    "MAX_HP",
    "MIN_HP",
    "Player",
    "Position",
    "RNG",
    "ScoreEntry",
    "ThingType",
]
