"""Game tunables.

Every fixed number the game plays by lives here so hosts and
tests can build a ``GameConfig`` with different numbers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    grid_size: int = 10
    min_word_length: int = 4
    shuffle_threshold: int = 3000
    novelty_multiplier: int = 2

    # Pointer hit radius as a fraction of the cell size.
    hit_radius_fraction: float = 0.4

    # -- animation timings (seconds) ------------------------------------------

    fall_duration: float = 0.35
    fall_duration_per_row: float = 0.05
    shuffle_duration: float = 0.6
    score_tick_duration: float = 0.6
    max_step: float = 0.1

    # Fraction of the remaining distance the trail covers each step.
    trail_smoothing: float = 0.35
    trail_epsilon: float = 0.5

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}.")
        if self.min_word_length < 1:
            raise ValueError(
                f"min_word_length must be positive, got {self.min_word_length}."
            )
        if self.shuffle_threshold < 1:
            raise ValueError(
                f"shuffle_threshold must be positive, got {self.shuffle_threshold}."
            )
        if self.novelty_multiplier < 1:
            raise ValueError(
                f"novelty_multiplier must be positive, got {self.novelty_multiplier}."
            )
        for name in ("hit_radius_fraction", "trail_smoothing"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}.")
        for name in (
            "fall_duration",
            "shuffle_duration",
            "score_tick_duration",
            "max_step",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        if self.fall_duration_per_row < 0:
            raise ValueError("fall_duration_per_row must not be negative.")


DEFAULT_CONFIG = GameConfig()
