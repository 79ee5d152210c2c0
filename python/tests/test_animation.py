"""Animation engine tests: easing, token lifetime, loop run state."""

from __future__ import annotations

import pytest

from backend.config import GameConfig
from backend.engine.animation import (
    AnimationEngine,
    AnimState,
    PointerTrail,
    ScoreTicker,
    TileToken,
    ease_out_cubic,
)
from backend.models.grid import Coord, Movement, Placement, Relocation

CONFIG = GameConfig(
    fall_duration=0.2,
    fall_duration_per_row=0.0,
    shuffle_duration=0.4,
    score_tick_duration=0.5,
    max_step=0.1,
)


# -- helpers ------------------------------------------------------------------


def _run(engine: AnimationEngine, start: float, frames: int, dt: float = 0.05) -> float:
    now = start
    for _ in range(frames):
        engine.tick(now)
        now += dt
    return now


# -- easing / tokens ----------------------------------------------------------


@pytest.mark.parametrize(("t", "expected"), [(0.0, 0.0), (1.0, 1.0), (0.5, 0.875)])
def test_ease_out_cubic(t: float, expected: float) -> None:
    assert ease_out_cubic(t) == pytest.approx(expected)


def test_token_eases_and_snaps_to_destination() -> None:
    token = TileToken("A", (0.0, -2.0), (0.0, 3.0), duration=1.0)
    assert token.position == (0.0, -2.0)

    assert token.advance(0.5)
    assert token.position[1] == pytest.approx(-2.0 + 5.0 * 0.875)

    assert not token.advance(10.0)
    assert token.progress == 1.0
    assert token.position == (0.0, 3.0)
    assert token.destination == Coord(0, 3)


# -- engine -------------------------------------------------------------------


def test_idle_engine_does_nothing() -> None:
    engine = AnimationEngine(CONFIG)
    result = engine.tick(1.0)
    assert result.active == () and result.completed == ()
    assert engine.state is AnimState.IDLE


def test_drop_runs_until_tokens_complete_then_idles() -> None:
    engine = AnimationEngine(CONFIG)
    engine.drop(
        [Movement(column=1, from_row=0, to_row=2, letter="A")],
        [Placement(column=1, row=0, letter="B", depth=1)],
    )
    assert engine.state is AnimState.RUNNING
    assert engine.covered_cells() == {Coord(1, 2), Coord(1, 0)}

    tiles = {letter: (x, y) for letter, x, y in engine.tiles()}
    assert tiles["A"] == (1.0, 0.0)
    assert tiles["B"] == (1.0, -1.0)  # starts one row above the grid

    first = engine.tick(10.0)
    assert len(first.active) == 2  # first tick only sets the clock

    _run(engine, 10.05, 5)
    assert engine.tokens == {}
    assert engine.state is AnimState.IDLE


def test_elapsed_time_is_capped_after_a_stall() -> None:
    engine = AnimationEngine(CONFIG)
    engine.add(TileToken("Q", (0.0, 0.0), (0.0, 5.0), duration=1.0))
    engine.tick(0.0)
    engine.tick(60.0)  # a minute in a background tab
    (token,) = engine.tokens.values()
    assert token.elapsed == pytest.approx(CONFIG.max_step)


def test_tick_reports_completed_tokens() -> None:
    engine = AnimationEngine(CONFIG)
    fast = engine.add(TileToken("A", (0.0, 0.0), (0.0, 1.0), duration=0.05))
    slow = engine.add(TileToken("B", (1.0, 0.0), (1.0, 1.0), duration=1.0))
    engine.tick(0.0)
    result = engine.tick(0.08)
    assert result.completed == (fast,)
    assert result.active == (slow,)
    assert fast not in engine.tokens


def test_drop_restarts_in_flight_tile_from_drawn_position() -> None:
    engine = AnimationEngine(CONFIG)
    engine.drop([Movement(0, 0, 2, "A")], [])
    engine.tick(0.0)
    engine.tick(0.1)
    (_, _, y_mid) = engine.tiles()[0]
    assert 0.0 < y_mid < 2.0

    # The letter that was landing on row 2 now falls on to row 3.
    engine.drop([Movement(0, 2, 3, "A")], [])
    ((letter, _, y),) = engine.tiles()
    assert letter == "A"
    assert y == pytest.approx(y_mid)
    assert engine.covered_cells() == {Coord(0, 3)}


def test_relocate_replaces_pending_tokens() -> None:
    engine = AnimationEngine(CONFIG)
    engine.drop([], [Placement(0, 0, "Z", 1)])
    engine.relocate([Relocation(origin=0, destination=5, letter="Z")], grid_size=4)
    assert engine.covered_cells() == {Coord(1, 1)}
    ((_, x, y),) = engine.tiles()
    assert (x, y) == (0.0, -1.0)


def test_pointer_keeps_loop_running_until_release_and_convergence() -> None:
    engine = AnimationEngine(CONFIG)
    engine.press(0.0, 0.0)
    engine.move_pointer(100.0, 0.0)
    now = _run(engine, 0.0, 3)
    assert engine.state is AnimState.RUNNING

    engine.release()
    _run(engine, now, 100)
    assert engine.trail.position == (100.0, 0.0)
    assert engine.state is AnimState.IDLE


# -- pointer trail / score ticker --------------------------------------------


def test_trail_moves_a_fixed_fraction_per_step() -> None:
    trail = PointerTrail(smoothing=0.5, epsilon=0.01)
    trail.jump(0.0, 0.0)
    trail.aim(10.0, 0.0)
    trail.step()
    assert trail.position == (5.0, 0.0)
    trail.step()
    assert trail.position == (7.5, 0.0)
    assert not trail.converged


def test_trail_snaps_within_epsilon() -> None:
    trail = PointerTrail(smoothing=0.5, epsilon=1.0)
    trail.jump(0.0, 0.0)
    trail.aim(1.5, 0.0)
    trail.step()
    assert trail.position == (1.5, 0.0)
    assert trail.converged


def test_score_ticker_counts_up_and_lands_exactly() -> None:
    ticker = ScoreTicker(duration=1.0)
    ticker.snap(100)
    ticker.set_target(200)
    assert ticker.displayed == 100
    ticker.advance(0.25)
    assert ticker.displayed == 125
    ticker.advance(5.0)
    assert ticker.displayed == 200
    assert not ticker.active


def test_set_score_wakes_the_engine() -> None:
    engine = AnimationEngine(CONFIG)
    engine.set_score(70)
    assert engine.state is AnimState.RUNNING
    _run(engine, 0.0, 20)
    assert engine.score.displayed == 70
    assert engine.state is AnimState.IDLE
