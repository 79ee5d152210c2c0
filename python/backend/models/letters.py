"""Letter value table and the weighted random letter source."""

from __future__ import annotations

import random
from types import MappingProxyType
from typing import Mapping

# Rarity cost per letter. Doubles as the draw weight source: weight = 1 / value.
LETTER_VALUES = MappingProxyType(
    {
        "E": 1, "A": 1, "I": 1, "O": 1, "N": 1, "R": 1, "T": 1, "L": 1, "S": 1, "U": 1,
        "D": 2, "G": 2,
        "B": 3, "C": 3, "M": 3, "P": 3,
        "F": 4, "H": 4, "V": 4, "W": 4, "Y": 4,
        "K": 5,
        "J": 8, "X": 8,
        "Q": 10, "Z": 10,
    }
)


def letter_value(letter: str, values: Mapping[str, int] = LETTER_VALUES) -> int:
    """Return the rarity value of *letter* (case-insensitive), 1 if unknown."""
    return values.get(letter.upper(), 1)


class LetterSource:
    """Draws letters with probability inversely proportional to their value.

    Pass a seeded ``random.Random`` for reproducible grids.
    """

    def __init__(
        self,
        values: dict[str, int] | MappingProxyType = LETTER_VALUES,
        rng: random.Random | None = None,
    ) -> None:
        if not values:
            raise ValueError("Letter value table must not be empty.")
        self.rng = rng or random.Random()
        self._weights: list[tuple[str, float]] = [
            (letter, 1 / value) for letter, value in values.items()
        ]
        self._total = sum(w for _, w in self._weights)

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def draw(self) -> str:
        r = self.rng.random() * self._total
        for letter, weight in self._weights:
            r -= weight
            if r <= 0:
                return letter
        # Floating-point remainder left over: fall back to the last letter.
        return self._weights[-1][0]
