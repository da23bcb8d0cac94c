"""
High Scores
===========

Bounded leaderboard of finished games, kept sorted descending by total.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from yorinde_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class HighScoreEntry:
    """A finished game: when it ended and its (face, bonus, combination) points."""
    timestamp: datetime
    points: Tuple[int, int, int]

    @property
    def total(self) -> int:
        return sum(self.points)

    def __repr__(self) -> str:
        return f"HighScoreEntry({self.timestamp.isoformat()}, total={self.total})"


class HighScoreBoard:
    """
    Leaderboard capped at `config.highscore.max_entries`.

    Entries are ordered by total, highest first. Games tying an existing total
    rank below it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        entries: Optional[Iterable[HighScoreEntry]] = None
    ):
        """
        Initialize board.

        Args:
            config: Game configuration. Uses default if None.
            entries: Existing entries, taken as-is (possibly unsorted legacy data).
        """
        if config is None:
            config = get_config()

        self._config = config
        self._entries: List[HighScoreEntry] = list(entries) if entries else []

    @property
    def max_entries(self) -> int:
        return self._config.highscore.max_entries

    @property
    def entries(self) -> List[HighScoreEntry]:
        """Copy of the entries in rank order."""
        return list(self._entries)

    @property
    def totals(self) -> List[int]:
        return [e.total for e in self._entries]

    def normalize(self) -> None:
        """Sort descending by total and drop entries beyond the cap."""
        # stable sort keeps the older of two equal totals first
        self._entries.sort(key=lambda e: e.total, reverse=True)
        del self._entries[self.max_entries:]

    def insert(
        self,
        points: Sequence[int],
        timestamp: Optional[datetime] = None
    ) -> Optional[int]:
        """
        Add a finished game if it makes the leaderboard.

        Args:
            points: The game's (face, bonus, combination) points.
            timestamp: When the game finished. Defaults to now.

        Returns:
            0-based rank the game was inserted at, or None if it did not qualify.
        """
        self.normalize()

        if timestamp is None:
            timestamp = datetime.now()
        entry = HighScoreEntry(timestamp=timestamp, points=tuple(int(p) for p in points))
        total = entry.total

        for index, existing in enumerate(self._entries):
            if existing.total < total:
                self._entries.insert(index, entry)
                del self._entries[self.max_entries:]
                return index

        if len(self._entries) < self.max_entries:
            self._entries.append(entry)
            return len(self._entries) - 1

        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> HighScoreEntry:
        return self._entries[index]
