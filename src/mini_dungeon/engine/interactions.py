"""Effects of stepping onto an occupied cell.

Every occupant type maps to exactly one ``Interaction`` in ``INTERACTIONS``.
Handlers mutate the player and return the log line describing what happened;
the engine owns removal of the occupant and the level transition.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..core.player import Player
from ..core.things import ThingType

GOLD_SCORE = 2
POTION_HEAL = 4
TRAP_DAMAGE = 2
MELEE_DAMAGE = 2
MELEE_SCORE = 2
RANGED_SCORE = 2
RANGED_DAMAGE = 2
BOMB_SCORE = 5
LADDER_SCORE_PER_DIFFICULTY = 10

Handler = Callable[[Player, int], Optional[str]]


@dataclass(frozen=True)
class Interaction:
    """What happens when the player enters a cell holding ``kind``.

    Attributes:
        handler: Applies the effect given (player, difficulty); returns the log
            line or None when nothing is worth reporting.
        consumed: Whether the occupant is removed afterwards.
        climbs: Whether the engine should advance a level or end the game.
    """

    handler: Handler
    consumed: bool = True
    climbs: bool = False


def _gold(player: Player, difficulty: int) -> str:
    player.add_score(GOLD_SCORE)
    return f"You picked up a gold. Score: {player.score}"


def _potion(player: Player, difficulty: int) -> str:
    player.heal(POTION_HEAL)
    return f"You consumed a health potion and restored {POTION_HEAL} HP. Current HP: {player.hp}"


def _trap(player: Player, difficulty: int) -> str:
    player.take_damage(TRAP_DAMAGE)
    return f"You fell into a trap and lost {TRAP_DAMAGE} HP. Current HP: {player.hp}"


def _melee(player: Player, difficulty: int) -> str:
    player.take_damage(MELEE_DAMAGE)
    player.add_score(MELEE_SCORE)
    return (
        f"You attacked a melee mutant and won. Lost {MELEE_DAMAGE} HP, gained {MELEE_SCORE} score. "
        f"Current HP: {player.hp}, Score: {player.score}"
    )


def _ranged(player: Player, difficulty: int) -> str:
    player.add_score(RANGED_SCORE)
    return f"You attacked a ranged mutant and won. Gained {RANGED_SCORE} score. Score: {player.score}"


def _bomb(player: Player, difficulty: int) -> str:
    player.add_bombs(1)
    return f"You picked up a bomb! You now have {player.bomb_count} bomb(s)."


def _ladder(player: Player, difficulty: int) -> str:
    bonus = ladder_bonus(difficulty)
    player.add_score(bonus)
    return f"You gained {bonus} score for finding the ladder!"


def _nothing(player: Player, difficulty: int) -> None:
    return None


def ladder_bonus(difficulty: int) -> int:
    return LADDER_SCORE_PER_DIFFICULTY * difficulty


INTERACTIONS: Dict[ThingType, Interaction] = {
    ThingType.GOLD: Interaction(_gold),
    ThingType.HEALTH_POTION: Interaction(_potion),
    ThingType.TRAP: Interaction(_trap, consumed=False),
    ThingType.MELEE_MUTANT: Interaction(_melee),
    ThingType.RANGED_MUTANT: Interaction(_ranged),
    ThingType.BOMB: Interaction(_bomb),
    ThingType.LADDER: Interaction(_ladder, consumed=False, climbs=True),
    ThingType.ENTRY: Interaction(_nothing, consumed=False),
    # Walls are never entered; listed so the table covers every type.
    ThingType.WALL: Interaction(_nothing, consumed=False),
}


def interaction_for(kind: ThingType) -> Interaction:
    return INTERACTIONS[kind]
