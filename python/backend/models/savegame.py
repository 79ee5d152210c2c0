"""Save game persistence to a JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from backend.logging_utils import get_logger
from backend.models.dictionary import DictionaryEntry

logger = get_logger(__name__)

SAVE_VERSION = "0.1"


@dataclass
class SaveState:
    total_score: int
    grid: list[list[str]]
    dictionary: dict[str, DictionaryEntry] = field(default_factory=dict)
    shuffle_points: int = 0


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.isoformat(timespec="milliseconds")


def parse_timestamp(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class SaveGameStore:
    """Loads, saves, and clears the single save slot in a JSON file.

    The in-memory game is the source of truth; this file is a best-effort
    mirror. Write failures are logged and reported, never raised.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath

    # -- persistence ----------------------------------------------------------

    def save(self, state: SaveState) -> bool:
        data = {
            "version": SAVE_VERSION,
            "totalScore": state.total_score,
            "grid": state.grid,
            "dictionary": {
                word: {"score": e.score, "timestamp": format_timestamp(e.timestamp)}
                for word, e in state.dictionary.items()
            },
            "shufflePoints": state.shuffle_points,
        }
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self.filepath.write_text(json.dumps(data, indent=2) + "\n")
        except OSError as exc:
            logger.error("Could not write save file %s: %s", self.filepath, exc)
            return False
        return True

    def load(self) -> SaveState | None:
        """Return the saved state, or ``None`` if absent or malformed."""
        if not self.filepath.exists():
            return None
        try:
            data = json.loads(self.filepath.read_text())
            return self._decode(data)
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.warning("Ignoring unreadable save file %s: %s", self.filepath, exc)
            return None

    def clear(self) -> None:
        try:
            self.filepath.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Could not remove save file %s: %s", self.filepath, exc)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _decode(data: dict) -> SaveState:
        grid = data["grid"]
        size = len(grid)
        if size == 0 or any(len(row) != size for row in grid):
            raise ValueError("grid is not square")
        if any(not isinstance(c, str) or len(c) != 1 for row in grid for c in row):
            raise ValueError("grid cells must be single letters")

        total_score = int(data["totalScore"])
        shuffle_points = int(data.get("shufflePoints") or 0)
        dictionary = {
            word: DictionaryEntry(
                score=int(entry["score"]),
                timestamp=parse_timestamp(entry["timestamp"]),
            )
            for word, entry in data.get("dictionary", {}).items()
        }
        return SaveState(
            total_score=total_score,
            grid=[list(row) for row in grid],
            dictionary=dictionary,
            shuffle_points=shuffle_points,
        )
