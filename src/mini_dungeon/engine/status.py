from __future__ import annotations

from enum import Enum
from typing import Optional


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Direction(Enum):
    """One-step moves; value is (short token, row delta, col delta)."""

    UP = ("u", -1, 0)
    DOWN = ("d", 1, 0)
    LEFT = ("l", 0, -1)
    RIGHT = ("r", 0, 1)

    def __init__(self, token: str, d_row: int, d_col: int) -> None:
        self.token = token
        self.d_row = d_row
        self.d_col = d_col

    @classmethod
    def parse(cls, raw: str) -> Optional["Direction"]:
        """Map ``u``/``up``, ``d``/``down`` etc. (any case) to a direction.

        Returns None for anything unrecognised.
        """
        if not isinstance(raw, str):
            return None
        key = raw.strip().lower()
        for member in cls:
            if key in (member.token, member.name.lower()):
                return member
        return None
