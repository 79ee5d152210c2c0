"""Tracks the drag path the player is drawing across the grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from backend.models.grid import Coord, Grid


class SelectionState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESOLVING = "resolving"


@dataclass(frozen=True)
class Selection:
    """A resolved drag: the word it spelled and the cells it covered."""

    word: str
    path: tuple[Coord, ...]


def is_adjacent(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """8-directional neighbours; a cell is not adjacent to itself."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return dx <= 1 and dy <= 1 and (dx, dy) != (0, 0)


class SelectionTracker:
    """Idle -> Dragging -> Resolving -> Idle state machine for one turn."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.state = SelectionState.IDLE
        self._path: list[Coord] = []

    @property
    def path(self) -> tuple[Coord, ...]:
        return tuple(self._path)

    @property
    def word(self) -> str:
        return "".join(self.grid.get(c) or "" for c in self._path)

    @property
    def is_dragging(self) -> bool:
        return self.state is SelectionState.DRAGGING

    # -- transitions ----------------------------------------------------------

    def begin(self, coord: tuple[int, int] | None) -> None:
        """Start a drag. A miss (``None`` or off-grid) still captures the pointer."""
        self.state = SelectionState.DRAGGING
        self._path = []
        if coord is not None and self.grid.in_bounds(coord):
            self._path.append(Coord(*coord))

    def extend(self, coord: tuple[int, int] | None) -> bool:
        """Offer the cell under the pointer. Returns True if the path changed."""
        if self.state is not SelectionState.DRAGGING:
            return False
        if coord is None or not self.grid.in_bounds(coord):
            return False
        cell = Coord(*coord)

        if len(self._path) >= 2 and cell == self._path[-2]:
            self._path.pop()
            return True
        if cell in self._path:
            return False
        if self._path and not is_adjacent(self._path[-1], cell):
            return False
        self._path.append(cell)
        return True

    def resolve(self) -> Selection:
        """End the drag and hand back what it spelled. The tracker is Idle after."""
        if self.state is SelectionState.IDLE:
            return Selection("", ())

        self.state = SelectionState.RESOLVING
        selection = Selection(self.word, self.path)
        self._path = []
        self.state = SelectionState.IDLE
        return selection

    def cancel(self) -> None:
        self._path = []
        self.state = SelectionState.IDLE
