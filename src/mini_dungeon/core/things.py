from __future__ import annotations

from enum import Enum
from typing import Optional

PLAYER_SYMBOL = "P"
EMPTY_SYMBOL = " "


class Category(Enum):
    STRUCTURAL = "structural"
    ITEM = "item"
    HOSTILE = "hostile"


class ThingType(Enum):
    """Closed set of things that can occupy a cell.

    Each member carries its one-character map symbol, its category and a
    short description used in log messages.
    """

    ENTRY = ("E", Category.STRUCTURAL, "Entry point into the maze")
    LADDER = ("L", Category.STRUCTURAL, "Advances to the next level or exits the game")
    WALL = ("#", Category.STRUCTURAL, "Blocks movement")
    TRAP = ("T", Category.HOSTILE, "Decreases player's HP")
    GOLD = ("G", Category.ITEM, "Increases player's score")
    MELEE_MUTANT = ("M", Category.HOSTILE, "Stationary; stepping on it reduces HP and increases score")
    RANGED_MUTANT = ("R", Category.HOSTILE, "Stationary; attacks from 2 tiles away, stepping on it increases score")
    HEALTH_POTION = ("H", Category.ITEM, "Restores player's HP")
    BOMB = ("B", Category.ITEM, "Activatable item: destroys adjacent walls and traps, increases score")

    def __init__(self, symbol: str, category: Category, description: str) -> None:
        self.symbol = symbol
        self.category = category
        self.description = description

    @property
    def is_structural(self) -> bool:
        return self.category is Category.STRUCTURAL

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["ThingType"]:
        """Return the type for ``symbol`` or None for the empty-cell symbol.

        Raises ValueError for anything else, including the player glyph.
        """
        if symbol == EMPTY_SYMBOL:
            return None
        for member in cls:
            if member.symbol == symbol:
                return member
        raise ValueError(f"Unknown map symbol: {symbol!r}")
