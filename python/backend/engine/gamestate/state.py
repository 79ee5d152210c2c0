"""Holds the mutable state of a game in progress."""

from __future__ import annotations

from backend.models.dictionary import WordDictionary
from backend.models.grid import Grid
from backend.models.savegame import SaveState
from backend.models.shuffle import ShuffleMeter


class GameState:
    """The grid, total score, discovered words, and shuffle meter."""

    def __init__(
        self,
        grid: Grid,
        shuffle_threshold: int,
        score: int = 0,
        dictionary: WordDictionary | None = None,
        shuffle_points: int = 0,
    ) -> None:
        self.grid = grid
        self.score = score
        self.dictionary = dictionary if dictionary is not None else WordDictionary()
        self.meter = ShuffleMeter(shuffle_threshold, shuffle_points)

    # -- scoring --------------------------------------------------------------

    def add_points(self, points: int) -> None:
        self.score += points
        self.meter.add_points(points)

    # -- persistence ----------------------------------------------------------

    def snapshot(self) -> SaveState:
        if not self.grid.is_full():
            raise ValueError("Cannot snapshot a grid with empty cells.")
        return SaveState(
            total_score=self.score,
            grid=[[c for c in row if c is not None] for row in self.grid.cells],
            dictionary={word: entry for word, entry in self.dictionary.entries()},
            shuffle_points=self.meter.points,
        )

    @classmethod
    def from_save(cls, saved: SaveState, grid: Grid, shuffle_threshold: int) -> GameState:
        return cls(
            grid=grid,
            shuffle_threshold=shuffle_threshold,
            score=saved.total_score,
            dictionary=WordDictionary(saved.dictionary),
            shuffle_points=saved.shuffle_points,
        )
