#!/usr/bin/env python3
"""Infinite Word Search.

Usage::

    python main.py                   # Pygame GUI
    python main.py -f rich           # Rich terminal, type paths like "a1 b2 c3 d3"
    python main.py --words -o score  # print discovered words and exit
    python main.py --reset           # wipe the save and exit
"""

import importlib
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"
ASSETS_DIR = PROJECT_ROOT / "assets"

SAVE_FILE = DATA_DIR / "wordsearch_game_state_v0.1.json"
WORD_LIST = ASSETS_DIR / "words_dictionary.json"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import GameConfig  # noqa: E402
from backend.logging_utils import get_logger, set_verbose  # noqa: E402
from backend.models.dictionary import SortMode, WordDictionary  # noqa: E402
from backend.models.savegame import SaveGameStore  # noqa: E402
from backend.models.wordbank import WordBank  # noqa: E402

logger = get_logger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _print_words(store: SaveGameStore, order: SortMode) -> None:
    saved = store.load()
    dictionary = WordDictionary(saved.dictionary if saved else None)

    print(f"\n  === {dictionary.header.upper()} ===")
    if not len(dictionary):
        print("  No words discovered yet.\n")
        return
    for i, (word, entry) in enumerate(dictionary.entries(order), 1):
        print(
            f"  {i:>3}. {word.upper():<16} {entry.score:>5} pts  "
            f"({entry.timestamp:%Y-%m-%d %H:%M})"
        )
    if saved is not None:
        print(f"\n  Total score: {saved.total_score}\n")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.pygame, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    size: int = typer.Option(
        10, "-s", "--size",
        min=4, max=16,
        help="Grid side length (4-16).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the letter generator for a reproducible grid.",
    ),
    word_list: Path = typer.Option(
        WORD_LIST, "--dictionary",
        help="Word list (JSON object, JSON array, or one word per line).",
    ),
    save_file: Path = typer.Option(
        SAVE_FILE, "--save-file",
        help="Where the game is saved between sessions.",
    ),
    words: bool = typer.Option(
        False, "--words",
        help="Print the discovered words and exit.",
    ),
    order: SortMode = typer.Option(
        SortMode.ALPHABETICAL, "-o", "--order",
        help="Sort order for --words.",
    ),
    reset: bool = typer.Option(
        False, "--reset",
        help="Delete the saved game and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Debug logging.",
    ),
) -> None:
    """Infinite Word Search."""
    set_verbose(verbose)
    store = SaveGameStore(save_file)

    if words:
        _print_words(store, order)
        return

    if reset:
        store.clear()
        logger.info("Save file %s removed", save_file)
        return

    config = GameConfig(grid_size=size)
    bank = WordBank.load(word_list)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(config=config, words=bank, store=store, seed=seed)


if __name__ == "__main__":
    app()
