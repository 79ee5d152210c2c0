"""Generates fresh letter grids."""

from __future__ import annotations

from backend.models.grid import Grid
from backend.models.letters import LetterSource


class GridGenerator:
    """Creates grids filled from a ``LetterSource``."""

    @staticmethod
    def generate(size: int, source: LetterSource) -> Grid:
        """Return a full ``size``×``size`` grid of weighted random letters."""
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}.")
        grid = Grid.empty(size)
        grid.fill(source)
        return grid

    @staticmethod
    def restore(rows: list[list[str]], size: int, source: LetterSource) -> Grid:
        """Rebuild a saved grid, or generate a new one if it no longer fits."""
        try:
            grid = Grid.from_rows([[c.upper() for c in row] for row in rows])
        except ValueError:
            return GridGenerator.generate(size, source)
        if grid.size != size:
            return GridGenerator.generate(size, source)
        return grid
