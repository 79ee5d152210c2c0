"""Pointer position -> grid cell translation."""

from __future__ import annotations

import math

from backend.models.grid import Coord


def cell_at_point(
    px: float,
    py: float,
    cell_size: float,
    grid_size: int,
    hit_radius: float,
) -> Coord | None:
    """Return the cell whose centre is within *hit_radius* of ``(px, py)``.

    Coordinates are relative to the grid's top-left corner. The coarse cell
    and its 8 neighbours are checked, so a point near a corner resolves to
    whichever centre it is actually close to. Points in the gaps between
    hit circles return ``None``, which keeps diagonal drags from clipping
    the orthogonal neighbours.
    """
    cx = math.floor(px / cell_size)
    cy = math.floor(py / cell_size)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            gx, gy = cx + dx, cy + dy
            if not (0 <= gx < grid_size and 0 <= gy < grid_size):
                continue
            centre_x = gx * cell_size + cell_size / 2
            centre_y = gy * cell_size + cell_size / 2
            if math.hypot(centre_x - px, centre_y - py) <= hit_radius:
                return Coord(gx, gy)
    return None
