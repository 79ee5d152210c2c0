"""Letter source tests: value table and inverse-rarity weighting."""

from __future__ import annotations

import random
import string
from collections import Counter

from backend.models.letters import LETTER_VALUES, LetterSource, letter_value


class _StuckRng:
    """Returns a value past the end of [0, 1) to force the fallback branch."""

    def random(self) -> float:
        return 1.5


def test_table_covers_the_alphabet() -> None:
    assert set(LETTER_VALUES) == set(string.ascii_uppercase)
    assert all(1 <= v <= 10 for v in LETTER_VALUES.values())


def test_letter_value_is_case_insensitive_with_default() -> None:
    assert letter_value("q") == 10
    assert letter_value("E") == 1
    assert letter_value("?") == 1


def test_letter_value_reads_a_custom_table() -> None:
    assert letter_value("a", {"A": 7}) == 7
    assert letter_value("b", {"A": 7}) == 1


def test_weights_are_inverse_values() -> None:
    weights = LetterSource().weights
    assert weights["E"] == 1.0
    assert weights["Q"] == 0.1
    assert weights["D"] == 0.5


def test_fallback_returns_last_letter() -> None:
    source = LetterSource(rng=_StuckRng())  # type: ignore[arg-type]
    assert source.draw() == "Z"


def test_draw_frequency_falls_as_value_rises() -> None:
    source = LetterSource(rng=random.Random(99))
    counts = Counter(source.draw() for _ in range(50_000))

    by_value: dict[int, list[int]] = {}
    for letter, value in LETTER_VALUES.items():
        by_value.setdefault(value, []).append(counts[letter])
    averages = [sum(c) / len(c) for _, c in sorted(by_value.items())]

    assert averages == sorted(averages, reverse=True)
    # Value-1 letters should come up about ten times as often as value-10.
    ratio = averages[0] / averages[-1]
    assert 8 < ratio < 12
