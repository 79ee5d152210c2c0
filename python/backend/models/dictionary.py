"""Tracks every word the player has discovered."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class SortMode(StrEnum):
    ALPHABETICAL = "alphabetical"
    RECENT = "recent"
    SCORE = "score"

    def next(self) -> SortMode:
        """The mode the sort toggle switches to after this one."""
        modes = list(SortMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    @property
    def label(self) -> str:
        return f"Sort: {self.value.capitalize()}"


@dataclass
class DictionaryEntry:
    score: int
    timestamp: datetime


class WordDictionary:
    """Mapping of discovered word -> ``DictionaryEntry``.

    Words are stored lower-case. An entry's timestamp is the moment of first
    discovery and never changes; its score is the best raw score seen.
    """

    def __init__(self, entries: dict[str, DictionaryEntry] | None = None) -> None:
        self._entries: dict[str, DictionaryEntry] = {}
        for word, entry in (entries or {}).items():
            self._entries[word.lower()] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_known(word)

    # -- queries --------------------------------------------------------------

    def is_known(self, word: str) -> bool:
        return word.lower() in self._entries

    def get(self, word: str) -> DictionaryEntry | None:
        return self._entries.get(word.lower())

    def entries(
        self, mode: SortMode = SortMode.ALPHABETICAL
    ) -> list[tuple[str, DictionaryEntry]]:
        items = list(self._entries.items())
        if mode is SortMode.ALPHABETICAL:
            items.sort(key=lambda item: item[0].casefold())
        elif mode is SortMode.RECENT:
            items.sort(key=lambda item: item[1].timestamp, reverse=True)
        elif mode is SortMode.SCORE:
            items.sort(key=lambda item: item[1].score, reverse=True)
        return items

    @property
    def header(self) -> str:
        return f"Dictionary ({len(self)})" if self._entries else "Dictionary"

    # -- mutations ------------------------------------------------------------

    def record(self, word: str, score: int, timestamp: datetime) -> bool:
        """Store *word*; return True if it was not known before."""
        key = word.lower()
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = DictionaryEntry(score=score, timestamp=timestamp)
            return True
        if score > entry.score:
            entry.score = score
        return False

    def clear(self) -> None:
        self._entries.clear()
