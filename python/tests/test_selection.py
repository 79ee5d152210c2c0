"""Selection tracker and hit-test tests."""

from __future__ import annotations

import pytest

from backend.engine.selection import (
    SelectionState,
    SelectionTracker,
    cell_at_point,
    is_adjacent,
)
from backend.models.grid import Coord, Grid


# -- helpers ------------------------------------------------------------------


def _tracker() -> SelectionTracker:
    return SelectionTracker(
        Grid.from_rows(
            [
                "WORD",
                "AXES",
                "TIME",
                "SNOW",
            ]
        )
    )


# -- adjacency ----------------------------------------------------------------


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ((0, 0), (1, 1), True),
        ((0, 0), (0, 1), True),
        ((2, 2), (1, 3), True),
        ((0, 0), (0, 0), False),
        ((0, 0), (2, 0), False),
        ((0, 0), (2, 2), False),
    ],
)
def test_is_adjacent(a, b, expected: bool) -> None:
    assert is_adjacent(a, b) is expected


# -- state machine ------------------------------------------------------------


def test_backtrack_uses_second_to_last_cell() -> None:
    t = _tracker()
    t.begin((0, 0))
    assert t.path == (Coord(0, 0),)

    assert t.extend((1, 1))  # diagonal
    assert t.path == (Coord(0, 0), Coord(1, 1))

    # (1, 1) is the last cell, not a backtrack target: ignored as a duplicate.
    assert not t.extend((1, 1))

    # (0, 0) is second-to-last: pops (1, 1).
    assert t.extend((0, 0))
    assert t.path == (Coord(0, 0),)


def test_revisiting_an_earlier_cell_is_ignored() -> None:
    t = _tracker()
    t.begin((0, 0))
    for cell in [(1, 0), (1, 1), (0, 1)]:
        assert t.extend(cell)
    # (0, 0) is adjacent to (0, 1) but already in the path and not second-to-last.
    assert not t.extend((0, 0))
    assert len(t.path) == 4


def test_non_adjacent_cells_are_ignored() -> None:
    t = _tracker()
    t.begin((0, 0))
    assert not t.extend((2, 0))
    assert not t.extend((3, 3))
    assert t.path == (Coord(0, 0),)


def test_word_follows_path_order_in_grid_case() -> None:
    t = _tracker()
    t.begin((0, 0))
    for cell in [(1, 0), (2, 0), (3, 0)]:
        t.extend(cell)
    assert t.word == "WORD"

    selection = t.resolve()
    assert selection.word == "WORD"
    assert selection.path == (Coord(0, 0), Coord(1, 0), Coord(2, 0), Coord(3, 0))
    assert t.state is SelectionState.IDLE
    assert t.path == ()
    assert t.word == ""


def test_begin_on_a_miss_still_drags() -> None:
    t = _tracker()
    t.begin(None)
    assert t.state is SelectionState.DRAGGING
    assert t.path == ()

    # The first cell reached mid-drag starts the path.
    assert t.extend((2, 2))
    assert t.word == "M"

    t2 = _tracker()
    t2.begin(None)
    selection = t2.resolve()
    assert selection.word == ""
    assert t2.state is SelectionState.IDLE


def test_off_grid_begin_leaves_path_empty() -> None:
    t = _tracker()
    t.begin((9, 9))
    assert t.is_dragging
    assert t.path == ()


def test_extend_while_idle_is_ignored() -> None:
    t = _tracker()
    assert not t.extend((0, 0))
    assert t.path == ()


def test_resolve_while_idle_returns_empty_selection() -> None:
    selection = _tracker().resolve()
    assert selection.word == ""
    assert selection.path == ()


# -- hit testing --------------------------------------------------------------


def test_hit_test_accepts_points_near_centre() -> None:
    # 50 px cells, 20 px radius.
    assert cell_at_point(25, 25, 50, 10, 20) == Coord(0, 0)
    assert cell_at_point(130, 70, 50, 10, 20) == Coord(2, 1)


def test_hit_test_rejects_corners() -> None:
    # The shared corner of four cells is ~35 px from every centre.
    assert cell_at_point(50, 50, 50, 10, 20) is None


def test_hit_test_rejects_points_off_grid() -> None:
    assert cell_at_point(-30, 25, 50, 10, 20) is None
    assert cell_at_point(525, 25, 50, 10, 20) is None
