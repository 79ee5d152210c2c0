"""Shuffle meter: points earned toward a free full-grid shuffle."""

from __future__ import annotations


class ShuffleMeter:
    def __init__(self, threshold: int, points: int = 0) -> None:
        if threshold < 1:
            raise ValueError(f"Shuffle threshold must be positive, got {threshold}.")
        self.threshold = threshold
        self.points = max(0, min(points, threshold))

    def add_points(self, n: int) -> None:
        self.points = min(self.points + n, self.threshold)

    def is_armed(self) -> bool:
        return self.points >= self.threshold

    def consume(self) -> bool:
        """Reset the meter if armed. Returns False (and does nothing) otherwise."""
        if not self.is_armed():
            return False
        self.points = 0
        return True

    def reset(self) -> None:
        self.points = 0

    # -- presentation ---------------------------------------------------------

    @property
    def fraction(self) -> float:
        return self.points / self.threshold

    @property
    def label(self) -> str:
        return f"Shuffle ({self.points} / {self.threshold})"
