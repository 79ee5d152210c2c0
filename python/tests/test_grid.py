"""Grid state tests: clearing, gravity, refill, and the full-grid shuffle."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import GridGenerator
from backend.models.grid import Coord, Grid
from backend.models.letters import LetterSource


# -- helpers ------------------------------------------------------------------


class _FixedSource:
    """Draws letters from a fixed cycle so refills are predictable."""

    def __init__(self, letters: str = "XYZ") -> None:
        self._letters = letters
        self._i = 0

    def draw(self) -> str:
        letter = self._letters[self._i % len(self._letters)]
        self._i += 1
        return letter


def _column(grid: Grid, x: int) -> list[str | None]:
    return [grid.cells[y][x] for y in range(grid.size)]


def _sample_grid() -> Grid:
    return Grid.from_rows(
        [
            "ABCD",
            "EFGH",
            "IJKL",
            "MNOP",
        ]
    )


# -- construction -------------------------------------------------------------


def test_from_rows_rejects_ragged_rows() -> None:
    with pytest.raises(ValueError):
        Grid.from_rows(["AB", "C"])


def test_from_rows_rejects_multi_character_cells() -> None:
    with pytest.raises(ValueError):
        Grid.from_rows([["AB", "C"], ["D", "E"]])


def test_generate_fills_every_cell() -> None:
    grid = GridGenerator.generate(10, LetterSource(rng=random.Random(7)))
    assert grid.size == 10
    assert grid.is_full()
    assert all(len(c) == 1 and c.isupper() for c in grid.letters())


def test_generate_is_reproducible_with_a_seed() -> None:
    a = GridGenerator.generate(10, LetterSource(rng=random.Random(3)))
    b = GridGenerator.generate(10, LetterSource(rng=random.Random(3)))
    assert a.cells == b.cells


def test_restore_falls_back_when_size_differs() -> None:
    source = LetterSource(rng=random.Random(1))
    grid = GridGenerator.restore([["a", "b"], ["c", "d"]], 2, source)
    assert grid.cells == [["A", "B"], ["C", "D"]]

    regenerated = GridGenerator.restore([["A", "B"], ["C", "D"]], 5, source)
    assert regenerated.size == 5
    assert regenerated.is_full()


def test_get_outside_grid_raises() -> None:
    with pytest.raises(IndexError):
        _sample_grid().get((4, 0))


# -- clear / gravity / refill -------------------------------------------------


def test_clear_marks_cells_empty() -> None:
    grid = _sample_grid()
    grid.clear([Coord(0, 0), Coord(1, 1)])
    assert grid.get((0, 0)) is None
    assert grid.get((1, 1)) is None
    assert not grid.is_full()


def test_gravity_compacts_column_keeping_order() -> None:
    grid = _sample_grid()
    grid.clear([Coord(0, 1), Coord(0, 3)])  # E and M

    movements = grid.apply_gravity()

    assert _column(grid, 0) == [None, None, "A", "I"]
    moved = {(m.letter, m.from_row, m.to_row) for m in movements}
    assert moved == {("I", 2, 3), ("A", 0, 2)}
    # Untouched columns produce no movement records.
    assert all(m.column == 0 for m in movements)


def test_gravity_without_gaps_moves_nothing() -> None:
    grid = _sample_grid()
    assert grid.apply_gravity() == []


def test_refill_fills_only_empty_cells() -> None:
    grid = _sample_grid()
    grid.clear([Coord(2, 0), Coord(2, 2), Coord(3, 3)])
    grid.apply_gravity()

    placements = grid.refill(_FixedSource("XYZ"))

    assert grid.is_full()
    assert _column(grid, 2) == ["X", "Y", "G", "O"]
    assert _column(grid, 3) == ["Z", "D", "H", "L"]
    by_cell = {(p.column, p.row): p for p in placements}
    assert set(by_cell) == {(2, 0), (2, 1), (3, 0)}
    assert by_cell[(2, 0)].depth == 2
    assert by_cell[(3, 0)].depth == 1
    assert by_cell[(2, 0)].drop_order < by_cell[(2, 1)].drop_order


@pytest.mark.parametrize("seed", range(20))
def test_clear_gravity_refill_conserves_letters(seed: int) -> None:
    rng = random.Random(seed)
    source = LetterSource(rng=rng)
    grid = GridGenerator.generate(10, source)
    before = grid.copy()

    cleared = {Coord(rng.randrange(10), rng.randrange(10)) for _ in range(8)}
    grid.clear(cleared)
    survivors = {x: [c for c in _column(grid, x) if c is not None] for x in range(10)}
    grid.apply_gravity()
    placements = grid.refill(source)

    assert grid.is_full()
    assert len(placements) == len(cleared)

    # Surviving letters sit at the bottom of each column in their old order.
    for x in range(10):
        column = _column(grid, x)
        assert column[10 - len(survivors[x]):] == survivors[x]

    expected = Counter(before.letters())
    expected.subtract(before.get(c) for c in cleared)
    expected.update(p.letter for p in placements)
    assert +expected == Counter(grid.letters())


# -- shuffle ------------------------------------------------------------------


def test_permute_all_preserves_letter_multiset() -> None:
    grid = GridGenerator.generate(10, LetterSource(rng=random.Random(11)))
    before = Counter(grid.letters())
    original = grid.copy()

    relocations = grid.permute_all(random.Random(5))

    assert Counter(grid.letters()) == before
    for r in relocations:
        assert r.origin != r.destination
        assert original.get(original.coord_of(r.origin)) == r.letter
        assert grid.get(grid.coord_of(r.destination)) == r.letter


def test_permute_all_destinations_are_uniform() -> None:
    rng = random.Random(2024)
    hits = Counter()
    trials = 1000
    for _ in range(trials):
        grid = Grid.from_rows(["ABCDEFGHIJ"] * 10)
        moved = {r.origin: r.destination for r in grid.permute_all(rng)}
        hits[moved.get(0, 0)] += 1

    expected = trials / 100
    chi2 = sum((hits[i] - expected) ** 2 / expected for i in range(100))
    # 99 degrees of freedom: mean 99, sd ~14.
    assert chi2 < 180
    assert len(hits) > 90
