from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 5
DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class ScoreEntry:
    score: int
    achieved_on: date

    def sort_key(self) -> tuple:
        # Higher scores first; on ties the earlier achievement ranks higher.
        return (-self.score, self.achieved_on)

    @property
    def formatted_date(self) -> str:
        return self.achieved_on.strftime(DATE_FORMAT)

    def __str__(self) -> str:
        return f"Score: {self.score}, Date: {self.formatted_date}"


class Leaderboard:
    """Capped, ranked collection of winning scores.

    Entries with a score of zero or less are never admitted. Sorting is
    stable, so a new entry that ties an existing one ranks after it and can
    never push it off the board.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, entries: Optional[Iterable[ScoreEntry]] = None) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[ScoreEntry] = []
        for entry in entries or ():
            if entry.score > 0:
                self._entries.append(entry)
        self._normalise()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScoreEntry]:
        return iter(list(self._entries))

    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)

    def _normalise(self) -> None:
        self._entries.sort(key=ScoreEntry.sort_key)
        del self._entries[self._capacity:]

    def add(self, score: int, achieved_on: date) -> bool:
        """Insert a score; return True if it made the board."""
        if score <= 0:
            logger.debug("Score %d not eligible for leaderboard", score)
            return False
        entry = ScoreEntry(score, achieved_on)
        self._entries.append(entry)
        self._normalise()
        # Identity check: an equal entry already on the board does not count.
        admitted = any(e is entry for e in self._entries)
        logger.info("Leaderboard insert score=%d admitted=%s", score, admitted)
        return admitted

    def merge(self, entries: Iterable[ScoreEntry]) -> None:
        """Combine with another collection of entries.

        Acts as a multiset union so entries that are already present (for
        instance a board saved and reloaded in the same session) are not
        duplicated.
        """
        ours = Counter(self._entries)
        theirs = Counter(e for e in entries if e.score > 0)
        combined = ours | theirs
        # Keep existing entries ahead of newly merged equal-ranked ones.
        merged: List[ScoreEntry] = list(self._entries)
        for entry, count in combined.items():
            missing = count - ours.get(entry, 0)
            merged.extend([entry] * missing)
        self._entries = merged
        self._normalise()

    def format(self) -> str:
        if not self._entries:
            return "No top scores yet."
        lines = ["--- Top Scores ---"]
        for rank, entry in enumerate(self._entries, start=1):
            lines.append(f"#{rank} {entry.score} {entry.formatted_date}")
        return "\n".join(lines)
