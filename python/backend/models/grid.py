"""Letter grid model for the word search game."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Protocol


class Coord(NamedTuple):
    """Grid coordinate: ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True)
class Movement:
    """A surviving letter that gravity moved down its column."""

    column: int
    from_row: int
    to_row: int
    letter: str


@dataclass(frozen=True)
class Placement:
    """A freshly drawn letter dropped into an empty cell.

    ``depth`` is how many new letters landed in the same column, so a host
    can start this tile ``depth`` rows above its destination.
    """

    column: int
    row: int
    letter: str
    depth: int

    @property
    def drop_order(self) -> int:
        return self.row


@dataclass(frozen=True)
class Relocation:
    """A letter moved by a full-grid shuffle, as flattened row-major indices."""

    origin: int
    destination: int
    letter: str


class LetterDrawer(Protocol):
    def draw(self) -> str: ...


@dataclass
class Grid:
    """Square letter grid.

    Cells are stored row-major as ``cells[y][x]``. ``None`` marks a cell that
    was cleared and has not been refilled yet; outside of a turn in progress
    every cell holds a letter.
    """

    size: int
    cells: list[list[str | None]]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls, size: int) -> Grid:
        return cls(size=size, cells=[[None] * size for _ in range(size)])

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str | None]]) -> Grid:
        """Create a grid from a list of rows.

        Example::

            Grid.from_rows(["CATS", "DOGE", "BIRD", "FISH"])
        """
        cells = [list(row) for row in rows]
        size = len(cells)
        if size == 0:
            raise ValueError("A grid needs at least one row.")
        for y, row in enumerate(cells):
            if len(row) != size:
                raise ValueError(
                    f"Row {y} has {len(row)} cells, expected {size} for a "
                    f"{size}×{size} grid."
                )
            for value in row:
                if value is not None and (not isinstance(value, str) or len(value) != 1):
                    raise ValueError(f"Cell values must be single letters, got {value!r}.")
        return cls(size=size, cells=cells)

    # -- queries --------------------------------------------------------------

    def in_bounds(self, coord: tuple[int, int]) -> bool:
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, coord: tuple[int, int]) -> str | None:
        if not self.in_bounds(coord):
            raise IndexError(f"{tuple(coord)} is outside the {self.size}×{self.size} grid.")
        x, y = coord
        return self.cells[y][x]

    def is_full(self) -> bool:
        return all(cell is not None for row in self.cells for cell in row)

    def letters(self) -> list[str]:
        """All non-empty letters, flattened row-major."""
        return [cell for row in self.cells for cell in row if cell is not None]

    def rows(self) -> list[list[str | None]]:
        return [row[:] for row in self.cells]

    def coord_of(self, index: int) -> Coord:
        return Coord(index % self.size, index // self.size)

    def copy(self) -> Grid:
        return Grid(size=self.size, cells=self.rows())

    # -- mutations ------------------------------------------------------------

    def fill(self, source: LetterDrawer) -> None:
        for y in range(self.size):
            for x in range(self.size):
                self.cells[y][x] = source.draw()

    def clear(self, coords: Iterable[tuple[int, int]]) -> None:
        """Mark every given cell empty. No selection rules are checked."""
        for coord in coords:
            if not self.in_bounds(coord):
                raise IndexError(f"{tuple(coord)} is outside the grid.")
            x, y = coord
            self.cells[y][x] = None

    def apply_gravity(self) -> list[Movement]:
        """Compact every column downward, keeping the letters' order.

        Returns one ``Movement`` per letter that changed row.
        """
        movements: list[Movement] = []
        for x in range(self.size):
            write = self.size - 1
            for y in range(self.size - 1, -1, -1):
                letter = self.cells[y][x]
                if letter is None:
                    continue
                if y != write:
                    self.cells[write][x] = letter
                    self.cells[y][x] = None
                    movements.append(Movement(x, y, write, letter))
                write -= 1
        return movements

    def refill(self, source: LetterDrawer) -> list[Placement]:
        """Draw a new letter for every empty cell, column by column."""
        placements: list[Placement] = []
        for x in range(self.size):
            empty_rows = [y for y in range(self.size) if self.cells[y][x] is None]
            for y in empty_rows:
                letter = source.draw()
                self.cells[y][x] = letter
                placements.append(Placement(x, y, letter, len(empty_rows)))
        return placements

    def permute_all(self, rng: random.Random) -> list[Relocation]:
        """Fisher-Yates shuffle of every letter on the grid.

        Returns a ``Relocation`` for each letter whose index changed.
        """
        tokens = [
            (i, cell)
            for i, cell in enumerate(c for row in self.cells for c in row)
        ]
        for i in range(len(tokens) - 1, 0, -1):
            j = rng.randrange(i + 1)
            tokens[i], tokens[j] = tokens[j], tokens[i]

        relocations: list[Relocation] = []
        for destination, (origin, letter) in enumerate(tokens):
            x, y = self.coord_of(destination)
            self.cells[y][x] = letter
            if origin != destination and letter is not None:
                relocations.append(Relocation(origin, destination, letter))
        return relocations
