"""Time-stepped visual interpolation for tiles, the pointer trail and the score.

Nothing here touches the grid. The grid has already been mutated by the
time an animation is queued; tokens only describe how the host should draw
the transition until it catches up.
"""

from __future__ import annotations

import enum
import itertools
import math
from dataclasses import dataclass, field
from typing import Iterable

from backend.config import DEFAULT_CONFIG, GameConfig
from backend.models.grid import Coord, Movement, Placement, Relocation


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


class AnimState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class TileToken:
    """One letter travelling from ``start`` to ``end`` in grid units (x, y)."""

    letter: str
    start: tuple[float, float]
    end: tuple[float, float]
    duration: float
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        return min(max(self.elapsed / self.duration, 0.0), 1.0)

    @property
    def done(self) -> bool:
        return self.progress >= 1.0

    @property
    def position(self) -> tuple[float, float]:
        if self.done:
            return self.end
        t = ease_out_cubic(self.progress)
        return (
            self.start[0] + (self.end[0] - self.start[0]) * t,
            self.start[1] + (self.end[1] - self.start[1]) * t,
        )

    @property
    def destination(self) -> Coord:
        return Coord(round(self.end[0]), round(self.end[1]))

    def advance(self, dt: float) -> bool:
        """Step forward; return True while still moving."""
        self.elapsed = min(self.elapsed + dt, self.duration)
        return not self.done


@dataclass
class PointerTrail:
    """Exponentially smoothed follower of the real pointer position."""

    smoothing: float = DEFAULT_CONFIG.trail_smoothing
    epsilon: float = DEFAULT_CONFIG.trail_epsilon
    position: tuple[float, float] | None = None
    target: tuple[float, float] | None = None

    @property
    def converged(self) -> bool:
        return self.position is None or self.position == self.target

    def aim(self, x: float, y: float) -> None:
        self.target = (x, y)
        if self.position is None:
            self.position = self.target

    def jump(self, x: float, y: float) -> None:
        self.position = self.target = (x, y)

    def reset(self) -> None:
        self.position = self.target = None

    def step(self) -> None:
        if self.converged or self.target is None:
            return
        px, py = self.position  # type: ignore[misc]
        tx, ty = self.target
        nx = px + (tx - px) * self.smoothing
        ny = py + (ty - py) * self.smoothing
        if math.hypot(tx - nx, ty - ny) <= self.epsilon:
            self.position = self.target
        else:
            self.position = (nx, ny)


@dataclass
class ScoreTicker:
    """Counts the displayed score up to the real total."""

    duration: float = DEFAULT_CONFIG.score_tick_duration
    start: int = 0
    end: int = 0
    elapsed: float = 0.0

    @property
    def active(self) -> bool:
        return self.elapsed < self.duration and self.start != self.end

    @property
    def displayed(self) -> int:
        if not self.active:
            return self.end
        progress = min(self.elapsed / self.duration, 1.0)
        return math.floor(self.start + (self.end - self.start) * progress)

    def set_target(self, total: int) -> None:
        self.start = self.displayed
        self.end = total
        self.elapsed = 0.0

    def snap(self, total: int) -> None:
        self.start = self.end = total
        self.elapsed = self.duration

    def advance(self, dt: float) -> None:
        self.elapsed = min(self.elapsed + dt, self.duration)


@dataclass(frozen=True)
class TickResult:
    active: tuple[int, ...] = ()
    completed: tuple[int, ...] = ()


@dataclass
class AnimationEngine:
    """Owns every animation token and the frame loop's run state.

    The host calls ``tick(now)`` once per frame while ``state`` is RUNNING
    and may stop scheduling frames once it drops back to IDLE.
    """

    config: GameConfig = DEFAULT_CONFIG
    state: AnimState = AnimState.IDLE
    pointer_down: bool = False
    tokens: dict[int, TileToken] = field(default_factory=dict)
    trail: PointerTrail = field(init=False)
    score: ScoreTicker = field(init=False)
    _ids: itertools.count = field(default_factory=itertools.count, repr=False)
    _last: float | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.trail = PointerTrail(self.config.trail_smoothing, self.config.trail_epsilon)
        self.score = ScoreTicker(self.config.score_tick_duration)

    # -- queries --------------------------------------------------------------

    @property
    def wants_frames(self) -> bool:
        return (
            self.pointer_down
            or not self.trail.converged
            or bool(self.tokens)
            or self.score.active
        )

    def covered_cells(self) -> set[Coord]:
        """Cells whose letter is still being drawn in flight."""
        return {token.destination for token in self.tokens.values()}

    def tiles(self) -> list[tuple[str, float, float]]:
        """``(letter, x, y)`` for every in-flight tile, in grid units."""
        return [(t.letter, *t.position) for t in self.tokens.values()]

    # -- queuing --------------------------------------------------------------

    def add(self, token: TileToken) -> int:
        token_id = next(self._ids)
        self.tokens[token_id] = token
        self._wake()
        return token_id

    def drop(self, movements: Iterable[Movement], placements: Iterable[Placement]) -> None:
        """Queue falling tiles for a gravity + refill pass."""
        movements = list(movements)
        placements = list(placements)
        in_flight = {t.destination: t.position for t in self.tokens.values()}
        touched = {Coord(m.column, m.from_row) for m in movements}
        touched |= {Coord(m.column, m.to_row) for m in movements}
        touched |= {Coord(p.column, p.row) for p in placements}
        self.tokens = {
            token_id: token
            for token_id, token in self.tokens.items()
            if token.destination not in touched
        }

        for m in movements:
            start = in_flight.get(
                Coord(m.column, m.from_row), (float(m.column), float(m.from_row))
            )
            self.add(
                TileToken(
                    m.letter,
                    start,
                    (float(m.column), float(m.to_row)),
                    self._fall_duration(m.to_row - start[1]),
                )
            )
        for p in placements:
            self.add(
                TileToken(
                    p.letter,
                    (float(p.column), float(p.row - p.depth)),
                    (float(p.column), float(p.row)),
                    self._fall_duration(p.depth),
                )
            )

    def relocate(self, relocations: Iterable[Relocation], grid_size: int) -> None:
        """Queue moving tiles for a full-grid shuffle."""
        pending: list[TileToken] = []
        for r in relocations:
            origin = Coord(r.origin % grid_size, r.origin // grid_size)
            dest = Coord(r.destination % grid_size, r.destination // grid_size)
            start = self._position_of(origin)
            pending.append(
                TileToken(
                    r.letter,
                    start,
                    (float(dest.x), float(dest.y)),
                    self.config.shuffle_duration,
                )
            )
        # Shuffles move every tile at once; anything still falling is superseded.
        self.tokens.clear()
        for token in pending:
            self.add(token)

    def set_score(self, total: int) -> None:
        self.score.set_target(total)
        self._wake()

    def press(self, x: float, y: float) -> None:
        self.pointer_down = True
        self.trail.jump(x, y)
        self._wake()

    def move_pointer(self, x: float, y: float) -> None:
        self.trail.aim(x, y)
        if not self.trail.converged:
            self._wake()

    def release(self) -> None:
        self.pointer_down = False

    def clear(self) -> None:
        self.tokens.clear()
        self.trail.reset()
        self.pointer_down = False
        self.score.snap(self.score.end)
        self.state = AnimState.IDLE
        self._last = None

    # -- frame loop -----------------------------------------------------------

    def tick(self, now: float) -> TickResult:
        """Advance every animation to *now* (seconds, monotonic)."""
        if self.state is AnimState.IDLE:
            return TickResult()

        dt = 0.0 if self._last is None else now - self._last
        dt = min(max(dt, 0.0), self.config.max_step)
        self._last = now

        active: list[int] = []
        completed: list[int] = []
        for token_id, token in self.tokens.items():
            (active if token.advance(dt) else completed).append(token_id)
        for token_id in completed:
            del self.tokens[token_id]

        self.trail.step()
        self.score.advance(dt)

        if not self.wants_frames:
            self.state = AnimState.IDLE
            self._last = None
        return TickResult(tuple(active), tuple(completed))

    # -- helpers --------------------------------------------------------------

    def _wake(self) -> None:
        if self.state is AnimState.IDLE:
            self.state = AnimState.RUNNING
            self._last = None

    def _fall_duration(self, rows: float) -> float:
        return self.config.fall_duration + self.config.fall_duration_per_row * abs(rows)

    def _position_of(self, cell: Coord) -> tuple[float, float]:
        for token in self.tokens.values():
            if token.destination == cell:
                return token.position
        return (float(cell.x), float(cell.y))
