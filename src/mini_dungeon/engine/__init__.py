from .game import GameEngine
from .interactions import INTERACTIONS, Interaction, interaction_for
from .messages import MessageLog
from .status import Direction, GameStatus

__all__ = [
    "Direction",
    "GameEngine",
    "GameStatus",
    "INTERACTIONS",
    "Interaction",
    "MessageLog",
    "interaction_for",
]
