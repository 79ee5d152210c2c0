"""Word scoring: length, letter rarity, and the first-discovery bonus."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Mapping

from backend.models.letters import LETTER_VALUES, letter_value


class Scorer:
    """Stateless apart from the value table it scores against."""

    def __init__(
        self,
        values: Mapping[str, int] = LETTER_VALUES,
        novelty_multiplier: int = 2,
    ) -> None:
        self.values = values
        self.novelty_multiplier = novelty_multiplier

    def letter_bonus(self, word: str) -> int:
        return sum(letter_value(ch, self.values) for ch in word)

    def raw_score(self, word: str) -> int:
        """``floor(base * (1 + letter_bonus / base))`` with ``base = 10 * len``.

        >>> Scorer().raw_score("cat")
        35
        """
        if not word:
            return 0
        base = len(word) * 10
        # Fraction keeps the product exact before flooring.
        rarity_multiplier = 1 + Fraction(self.letter_bonus(word), base)
        return math.floor(base * rarity_multiplier)

    def score(self, word: str, first_discovery: bool) -> int:
        raw = self.raw_score(word)
        return raw * self.novelty_multiplier if first_discovery else raw
