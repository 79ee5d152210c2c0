"""Rich terminal frontend.

The terminal cannot drag, so a turn is typed as a path of cell names, e.g.
``a1 b2 c3 d3`` (column letter, row number). The path is fed through the same
pointer-down / move / up sequence the GUI uses, so adjacency and backtracking
rules apply exactly as they do with a mouse.
"""

from __future__ import annotations

import random
import re

import rich.box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import SHUFFLE_MESSAGE, GamePlay, TurnResult
from backend.models.dictionary import SortMode, WordDictionary
from backend.models.grid import Coord
from backend.models.savegame import SaveGameStore
from backend.models.wordbank import WordBank

console = Console()

_CELL_RE = re.compile(r"^([a-z])(\d{1,2})$")


# -- parsing ------------------------------------------------------------------


def parse_cell(token: str, size: int) -> Coord | None:
    """``"c4"`` -> ``Coord(2, 3)``; ``None`` when malformed or off-grid."""
    m = _CELL_RE.match(token.strip().lower())
    if not m:
        return None
    x = ord(m.group(1)) - ord("a")
    y = int(m.group(2)) - 1
    if not (0 <= x < size and 0 <= y < size):
        return None
    return Coord(x, y)


def play_path(game: GamePlay, tokens: list[str]) -> TurnResult:
    """Replay typed cells as a drag and resolve it."""
    cells = [parse_cell(t, game.size) for t in tokens]
    game.pointer_down(cells[0] if cells else None)
    for cell in cells[1:]:
        game.pointer_move(cell)
    return game.pointer_up()


# -- rendering ----------------------------------------------------------------


def _render_grid(game: GamePlay) -> Table:
    grid = game.state.grid
    table = Table(
        box=rich.box.ROUNDED,
        show_header=True,
        header_style="dim",
        border_style="bright_blue",
        padding=(0, 1),
    )
    table.add_column("", style="dim", justify="right")
    for x in range(grid.size):
        table.add_column(chr(ord("a") + x), justify="center")
    for y, row in enumerate(grid.cells):
        table.add_row(
            str(y + 1),
            *(Text(c or " ", style="bold") for c in row),
        )
    return table


def _render_dictionary(dictionary: WordDictionary, mode: SortMode) -> Table:
    table = Table(
        title=dictionary.header,
        title_style="bold cyan",
        caption=mode.label,
        box=rich.box.SIMPLE,
        show_header=False,
    )
    table.add_column("Word", style="bold")
    table.add_column("Score", justify="right", style="yellow")
    for word, entry in dictionary.entries(mode)[:20]:
        table.add_row(word.upper(), f"{entry.score} pts")
    return table


def _render_meter(game: GamePlay, width: int = 30) -> Text:
    meter = game.state.meter
    filled = int(width * meter.fraction)
    bar = Text()
    bar.append("█" * filled, style="bold green" if meter.is_armed() else "magenta")
    bar.append("░" * (width - filled), style="dim")
    bar.append(f"  {meter.label}", style="bold green" if meter.is_armed() else "dim")
    return bar


def _draw(game: GamePlay, mode: SortMode, status: str) -> None:
    console.clear()
    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(str(game.state.score), style="bold yellow")

    controls = Text()
    controls.append("  a1 b2 c3 d3", style="bold cyan")
    controls.append("  play a path   ", style="dim")
    controls.append("shuffle", style="bold cyan")
    controls.append("   ", style="dim")
    controls.append("sort", style="bold cyan")
    controls.append("   ", style="dim")
    controls.append("reset", style="bold cyan")
    controls.append("   ", style="dim")
    controls.append("quit", style="bold cyan")

    body = Columns(
        [_render_grid(game), _render_dictionary(game.state.dictionary, mode)],
        padding=(0, 4),
    )
    panel = Panel(
        Group(Align.center(stats), Text(""), body, Text(""), _render_meter(game)),
        title="[bold cyan]Infinite Word Search[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _status_for(result: TurnResult) -> str:
    if result.message is None:
        return "[dim]No cells selected.[/dim]"
    if result.accepted:
        colour = "bold yellow" if result.is_new else "bold green"
        return f"[{colour}]{result.message}[/{colour}]"
    return f"[red]{result.message}[/red]"


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay) -> None:
    mode = SortMode.ALPHABETICAL
    status = ""

    while True:
        _draw(game, mode, status)
        status = ""
        try:
            raw = console.input("[bold cyan]> [/bold cyan]").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return

        if raw in ("q", "quit", "exit"):
            return
        if raw in ("s", "shuffle"):
            if game.shuffle() is None:
                status = f"[yellow]Not yet: {game.state.meter.label}[/yellow]"
            else:
                status = f"[bold magenta]{SHUFFLE_MESSAGE}[/bold magenta]"
        elif raw in ("t", "sort"):
            mode = mode.next()
        elif raw == "reset":
            answer = console.input("[red]Reset score and dictionary? (y/N) [/red]")
            if answer.strip().lower() == "y":
                game.reset()
                status = "[yellow]New game.[/yellow]"
        elif raw:
            status = _status_for(play_path(game, raw.replace(",", " ").split()))


# -- public entry point -------------------------------------------------------


def run(
    config: GameConfig,
    words: WordBank,
    store: SaveGameStore,
    seed: int | None = None,
) -> None:
    """Launch the Rich terminal frontend."""
    game = GamePlay(config, words=words, store=store, rng=random.Random(seed))
    _play(game)
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
