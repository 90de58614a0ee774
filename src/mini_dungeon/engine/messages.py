from __future__ import annotations

import logging
from typing import List

logger = logging.getLogger(__name__)


class MessageLog:
    """Bounded, ordered log of user-facing lines.

    Keeps only the newest ``capacity`` lines; older ones are dropped as new
    ones arrive. Owned by one engine instance.
    """

    def __init__(self, capacity: int = 10) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._lines: List[str] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._lines)

    def add(self, line: str) -> None:
        self._lines.append(line)
        # Enforce capacity (drop oldest)
        dropped = len(self._lines) - self._capacity
        if dropped > 0:
            del self._lines[0:dropped]
        logger.debug("message: %s", line)

    def lines(self) -> List[str]:
        return list(self._lines)

    def get_recent(self, n: int) -> List[str]:
        if n <= 0:
            return []
        return self._lines[-n:]

    def clear(self) -> None:
        self._lines.clear()

    def text(self) -> str:
        """All lines joined with newlines, oldest first."""
        return "\n".join(self._lines)
