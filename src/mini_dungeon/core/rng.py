from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, TypeVar

T = TypeVar("T")


@dataclass
class RNG:
    """
    Engine-owned randomness around random.Random.

    A fixed seed gives reproducible maze carving, placement and ranged-attack
    rolls for tests; without one the process's entropy is used.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._rng.random() < probability

    def shuffle(self, seq: MutableSequence[T]) -> None:
        """Shuffle ``seq`` in place with a uniform permutation."""
        self._rng.shuffle(seq)

    def shuffled(self, seq: List[T]) -> List[T]:
        out = list(seq)
        self._rng.shuffle(out)
        return out
