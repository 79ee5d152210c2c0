"""Core gameplay logic: turns the player's drag into score and grid changes."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import StrEnum
from typing import Callable

from backend.config import DEFAULT_CONFIG, GameConfig
from backend.engine.animation import AnimationEngine
from backend.engine.gamegenerator import GridGenerator
from backend.engine.gamestate import GameState
from backend.engine.scoring import Scorer
from backend.engine.selection import Selection, SelectionTracker
from backend.logging_utils import get_logger
from backend.models.grid import Grid, Relocation
from backend.models.letters import LetterSource
from backend.models.savegame import SaveGameStore
from backend.models.wordbank import WordBank

logger = get_logger(__name__)


class SubmitStatus(StrEnum):
    ACCEPTED = "accepted"
    TOO_SHORT = "too_short"
    INVALID = "invalid"
    EMPTY = "empty"


@dataclass(frozen=True)
class TurnResult:
    status: SubmitStatus
    word: str = ""
    points: int = 0
    is_new: bool = False

    @property
    def accepted(self) -> bool:
        return self.status is SubmitStatus.ACCEPTED

    @property
    def message(self) -> str | None:
        """Popup text for the host, or ``None`` when nothing should show."""
        word = self.word.upper()
        if self.status is SubmitStatus.ACCEPTED:
            return f"{word}  +{self.points} pts" + ("  (NEW!)" if self.is_new else "")
        if self.status is SubmitStatus.TOO_SHORT:
            return f"{word} is too short!"
        if self.status is SubmitStatus.INVALID:
            return f"{word} is not valid!"
        return None


SHUFFLE_MESSAGE = "SHUFFLE!"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GamePlay:
    """Orchestrates a game session.

    All grid mutation happens synchronously inside ``pointer_up`` and
    ``shuffle``; the animation engine is only told what changed.
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        words: WordBank | None = None,
        store: SaveGameStore | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
        animation: AnimationEngine | None = None,
    ) -> None:
        self.config = config
        self.words = words if words is not None else WordBank()
        self.store = store
        self.rng = rng or random.Random()
        self.source = LetterSource(rng=self.rng)
        self.scorer = Scorer(novelty_multiplier=config.novelty_multiplier)
        self.clock = clock
        self.animation = animation or AnimationEngine(config)

        self.state = self._load_or_new()
        self.tracker = SelectionTracker(self.state.grid)
        self.animation.score.snap(self.state.score)

    @classmethod
    def from_grid(cls, grid: Grid, **kwargs) -> GamePlay:
        """Create a session around an existing grid (e.g. a hand-built test board)."""
        config = kwargs.pop("config", DEFAULT_CONFIG)
        if config.grid_size != grid.size:
            config = replace(config, grid_size=grid.size)
        obj = cls(config=config, **kwargs)
        obj.state = GameState(grid, config.shuffle_threshold)
        obj.tracker = SelectionTracker(grid)
        obj.animation.score.snap(0)
        return obj

    @property
    def size(self) -> int:
        return self.config.grid_size

    @property
    def current_word(self) -> str:
        return self.tracker.word

    # -- pointer input (grid coordinates) -------------------------------------

    def pointer_down(
        self, cell: tuple[int, int] | None, at: tuple[float, float] | None = None
    ) -> None:
        self.tracker.begin(cell)
        if at is not None:
            self.animation.press(*at)

    def pointer_move(
        self, cell: tuple[int, int] | None, at: tuple[float, float] | None = None
    ) -> bool:
        if not self.tracker.is_dragging:
            return False
        if at is not None:
            self.animation.move_pointer(*at)
        return self.tracker.extend(cell)

    def pointer_up(self) -> TurnResult:
        if not self.tracker.is_dragging:
            return TurnResult(SubmitStatus.EMPTY)
        self.animation.release()
        return self.submit(self.tracker.resolve())

    def cancel_drag(self) -> None:
        """Drop the selection in progress without resolving it."""
        self.tracker.cancel()
        self.animation.release()

    # -- turn resolution ------------------------------------------------------

    def submit(self, selection: Selection) -> TurnResult:
        word = selection.word.lower()
        if not word or not selection.path:
            return TurnResult(SubmitStatus.EMPTY)
        if len(word) < self.config.min_word_length:
            return TurnResult(SubmitStatus.TOO_SHORT, word)
        if not self.words.contains(word):
            return TurnResult(SubmitStatus.INVALID, word)

        state = self.state
        is_new = not state.dictionary.is_known(word)
        points = self.scorer.score(word, is_new)
        state.dictionary.record(word, self.scorer.raw_score(word), self.clock())
        state.add_points(points)
        logger.debug("Accepted %r for %d points (new=%s)", word, points, is_new)

        grid = state.grid
        grid.clear(selection.path)
        movements = grid.apply_gravity()
        placements = grid.refill(self.source)

        self.animation.drop(movements, placements)
        self.animation.set_score(state.score)
        self.save()
        return TurnResult(SubmitStatus.ACCEPTED, word, points, is_new)

    # -- shuffle --------------------------------------------------------------

    def shuffle(self) -> list[Relocation] | None:
        """Spend a full meter on a grid permutation; ``None`` if not armed."""
        if not self.state.meter.consume():
            return None
        self.cancel_drag()
        relocations = self.state.grid.permute_all(self.rng)
        self.animation.relocate(relocations, self.state.grid.size)
        logger.info("Shuffled grid (%d tiles moved)", len(relocations))
        self.save()
        return relocations

    # -- session --------------------------------------------------------------

    def save(self) -> bool:
        if self.store is None:
            return False
        return self.store.save(self.state.snapshot())

    def reset(self) -> None:
        """Wipe the save and start over with a fresh grid."""
        if self.store is not None:
            self.store.clear()
        self.state = self._new_state()
        self.tracker = SelectionTracker(self.state.grid)
        self.animation.clear()
        self.animation.score.snap(0)
        logger.info("Game reset")

    def _new_state(self) -> GameState:
        grid = GridGenerator.generate(self.size, self.source)
        return GameState(grid, self.config.shuffle_threshold)

    def _load_or_new(self) -> GameState:
        saved = self.store.load() if self.store is not None else None
        if saved is None:
            return self._new_state()
        grid = GridGenerator.restore(saved.grid, self.size, self.source)
        return GameState.from_save(saved, grid, self.config.shuffle_threshold)
