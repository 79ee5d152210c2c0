"""Read-only set of valid words, loaded once at startup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from backend.logging_utils import get_logger

logger = get_logger(__name__)


class WordBank:
    """Lower-case word set with case-insensitive lookup.

    ``load`` accepts the ``{"word": 1, ...}`` JSON object used by common
    English word lists, a JSON array of words, or plain text with one word
    per line.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words = frozenset(w.strip().lower() for w in words if w.strip())

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return word.lower() in self._words

    __contains__ = contains

    @classmethod
    def load(cls, path: Path) -> WordBank:
        """Load a word list; on any read or parse failure return an empty bank."""
        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix == ".json":
                data = json.loads(text)
                if isinstance(data, dict):
                    words = [w for w, flag in data.items() if flag]
                elif isinstance(data, list):
                    words = [w for w in data if isinstance(w, str)]
                else:
                    raise ValueError(f"unexpected JSON root {type(data).__name__}")
            else:
                words = text.splitlines()
        except (OSError, ValueError) as exc:
            logger.warning("Word list %s could not be loaded: %s", path, exc)
            return cls()

        bank = cls(words)
        logger.info("Loaded %d words from %s", len(bank), path)
        return bank
