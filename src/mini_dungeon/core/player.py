from __future__ import annotations

import logging
from dataclasses import dataclass

from .position import Position

logger = logging.getLogger(__name__)

MAX_HP = 10
# Lowest hp value tracked; anything at or below zero is a loss.
MIN_HP = -1


@dataclass
class Player:
    """Mutable player stats.

    hp stays within [MIN_HP, max_hp]: damage floors at -1 and healing caps at
    max_hp. Score is unbounded and may be forced to -1 when a game is lost.
    """

    hp: int = MAX_HP
    score: int = 0
    position: Position = Position(0, 0)
    bomb_count: int = 0
    max_hp: int = MAX_HP

    def __post_init__(self) -> None:
        if self.max_hp <= 0:
            raise ValueError("max_hp must be positive")
        if self.bomb_count < 0:
            raise ValueError("bomb_count must be >= 0")
        self.hp = max(MIN_HP, min(self.hp, self.max_hp))

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> int:
        """Apply damage and return the resulting hp."""
        if amount < 0:
            raise ValueError("damage amount must be >= 0")
        self.hp = max(MIN_HP, self.hp - amount)
        logger.debug("Player took %d damage; hp=%d", amount, self.hp)
        return self.hp

    def heal(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("heal amount must be >= 0")
        self.hp = min(self.hp + amount, self.max_hp)
        return self.hp

    def add_score(self, points: int) -> int:
        self.score += points
        return self.score

    def force_score(self, score: int) -> None:
        self.score = score

    def add_bombs(self, count: int = 1) -> int:
        if count < 0:
            raise ValueError("bomb count must be >= 0")
        self.bomb_count += count
        return self.bomb_count

    def use_bomb(self) -> bool:
        if self.bomb_count <= 0:
            return False
        self.bomb_count -= 1
        return True

    def move_to(self, position: Position) -> None:
        self.position = position
