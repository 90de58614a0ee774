from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .things import EMPTY_SYMBOL, ThingType


@dataclass
class Cell:
    """A single grid square holding at most one thing."""

    thing: Optional[ThingType] = None

    @property
    def is_empty(self) -> bool:
        return self.thing is None

    @property
    def is_traversable(self) -> bool:
        return self.thing is not ThingType.WALL

    @property
    def symbol(self) -> str:
        return EMPTY_SYMBOL if self.thing is None else self.thing.symbol

    def contains(self, kind: ThingType) -> bool:
        return self.thing is kind

    def clear(self) -> Optional[ThingType]:
        """Empty the cell and return what was there."""
        previous, self.thing = self.thing, None
        return previous
