"""Pygame GUI frontend.

Draws the letter grid, tracks mouse drags, and plays the falling / shuffling
tile animations. The frame loop only runs while something is moving; when
the board is still it blocks on the next input event.
"""

from __future__ import annotations

import enum
import random
import time

import pygame

from backend.config import GameConfig
from backend.engine.gameplay import SHUFFLE_MESSAGE, GamePlay, TurnResult
from backend.engine.selection import cell_at_point
from backend.logging_utils import get_logger
from backend.models.dictionary import SortMode
from backend.models.grid import Coord
from backend.models.savegame import SaveGameStore
from backend.models.wordbank import WordBank

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 860, 680
MARGIN = 20
GRID_PX = 500
GRID_X, GRID_Y = MARGIN, 90
PANEL_X = GRID_X + GRID_PX + MARGIN
PANEL_W = WIN_W - PANEL_X - MARGIN
BAR_Y = GRID_Y + GRID_PX + 16
BAR_H = 30

POPUP_LIFETIME = 2.4  # seconds
FPS = 60


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    PLAYING = "playing"
    CONFIRM_RESET = "confirm_reset"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


class _Popup:
    __slots__ = ("text", "colour", "born")

    def __init__(self, text: str, colour: tuple, born: float) -> None:
        self.text = text
        self.colour = colour
        self.born = born


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, game: GamePlay) -> None:
        self._game = game
        self._cell_px = GRID_PX / game.size
        self._hit_radius = self._cell_px * game.config.hit_radius_fraction
        self._sort_mode = SortMode.ALPHABETICAL
        self._popups: list[_Popup] = []
        self._screen = _Screen.PLAYING

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Infinite Word Search")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 30, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_tile = pygame.font.SysFont("Helvetica", int(self._cell_px * 0.6), bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._build_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_btns(self) -> None:
        bw = (PANEL_W - 10) // 2
        self._sort_btn = _Btn(
            (PANEL_X, GRID_Y, bw, 34), self._sort_mode.label, self._f_btn_sm
        )
        self._reset_btn = _Btn(
            (PANEL_X + bw + 10, GRID_Y, bw, 34),
            "RESET",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._shuffle_rect = pygame.Rect(GRID_X, BAR_Y, GRID_PX, BAR_H)

        cx = WIN_W // 2
        self._confirm_btn = _Btn(
            (cx - 130, 380, 120, 44),
            "RESET",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._cancel_btn = _Btn((cx + 10, 380, 120, 44), "CANCEL", self._f_btn_sm)
        self._game_btns = [self._sort_btn, self._reset_btn]

    # ── helpers ─────────────────────────────────────────────────────────────

    def _to_grid(self, pos: tuple[int, int]) -> tuple[float, float]:
        return pos[0] - GRID_X, pos[1] - GRID_Y

    def _cell_under(self, pos: tuple[int, int]) -> Coord | None:
        gx, gy = self._to_grid(pos)
        return cell_at_point(gx, gy, self._cell_px, self._game.size, self._hit_radius)

    def _cell_centre(self, x: float, y: float) -> tuple[float, float]:
        return (
            GRID_X + x * self._cell_px + self._cell_px / 2,
            GRID_Y + y * self._cell_px + self._cell_px / 2,
        )

    def _popup(self, result: TurnResult) -> None:
        if result.message is None:
            return
        colour = COL_GREEN if result.accepted else COL_RED
        if result.accepted and result.is_new:
            colour = COL_YELLOW
        self._popups.append(_Popup(result.message, colour, time.monotonic()))

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_tile(self, letter: str, x: float, y: float, selected: bool) -> None:
        cp = self._cell_px
        rect = pygame.Rect(
            GRID_X + x * cp + 2, GRID_Y + y * cp + 2, cp - 4, cp - 4
        )
        pygame.draw.rect(
            self._surf,
            COL_OVERLAY0 if selected else COL_SURFACE0,
            rect,
            border_radius=6,
        )
        lbl = self._f_tile.render(letter, True, COL_TEXT)
        self._surf.blit(
            lbl,
            (
                rect.centerx - lbl.get_width() // 2,
                rect.centery - lbl.get_height() // 2,
            ),
        )

    def _draw_grid(self) -> None:
        game = self._game
        grid = game.state.grid
        anim = game.animation
        selected = set(game.tracker.path)
        covered = anim.covered_cells()

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(GRID_X, GRID_Y, GRID_PX, GRID_PX),
            border_radius=10,
        )
        self._surf.set_clip(pygame.Rect(GRID_X, GRID_Y, GRID_PX, GRID_PX))
        for y in range(grid.size):
            for x in range(grid.size):
                letter = grid.cells[y][x]
                if letter is None or (x, y) in covered:
                    continue
                self._draw_tile(letter, x, y, (x, y) in selected)
        for letter, x, y in anim.tiles():
            self._draw_tile(letter, x, y, False)
        self._surf.set_clip(None)

        # connecting line plus the smoothed trail to the pointer
        points = [self._cell_centre(*c) for c in game.tracker.path]
        if game.tracker.is_dragging and points and anim.trail.position is not None:
            points.append(anim.trail.position)
        if len(points) > 1:
            line = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
            pygame.draw.lines(line, (*COL_GREEN, 150), False, points, 10)
            self._surf.blit(line, (0, 0))

    def _draw_header(self) -> None:
        game = self._game
        self._surf.blit(
            self._f_title.render("Infinite Word Search", True, COL_TEXT),
            (GRID_X, 14),
        )
        score = self._f_big.render(str(game.animation.score.displayed), True, COL_PINK)
        self._surf.blit(score, (GRID_X + GRID_PX - score.get_width(), 10))

        word = game.current_word or "—"
        self._surf.blit(
            self._f_title.render(word, True, COL_BLUE), (GRID_X, 52)
        )

    def _draw_shuffle_bar(self) -> None:
        meter = self._game.state.meter
        armed = meter.is_armed()
        pygame.draw.rect(self._surf, COL_SURFACE0, self._shuffle_rect, border_radius=8)
        fill = self._shuffle_rect.copy()
        fill.width = int(fill.width * meter.fraction)
        if fill.width:
            pygame.draw.rect(
                self._surf,
                COL_GREEN if armed else COL_LAVENDER,
                fill,
                border_radius=8,
            )
        if armed:
            pygame.draw.rect(
                self._surf, COL_YELLOW, self._shuffle_rect, width=2, border_radius=8
            )
        label = meter.label + ("  -  click or press S" if armed else "")
        lbl = self._f_small.render(label, True, COL_BASE if armed else COL_TEXT)
        self._surf.blit(
            lbl,
            (
                self._shuffle_rect.centerx - lbl.get_width() // 2,
                self._shuffle_rect.centery - lbl.get_height() // 2,
            ),
        )

    def _draw_dictionary(self) -> None:
        dictionary = self._game.state.dictionary
        for btn in self._game_btns:
            btn.draw(self._surf)

        y = GRID_Y + 48
        self._surf.blit(
            self._f_btn_sm.render(dictionary.header, True, COL_BLUE), (PANEL_X, y)
        )
        y += 26
        for word, entry in dictionary.entries(self._sort_mode):
            if y > BAR_Y + BAR_H - 18:
                break
            self._surf.blit(
                self._f_body.render(word.upper(), True, COL_TEXT), (PANEL_X, y)
            )
            pts = self._f_body.render(f"{entry.score} pts", True, COL_SUBTEXT)
            self._surf.blit(pts, (PANEL_X + PANEL_W - pts.get_width(), y))
            y += 22

    def _draw_popups(self, now: float) -> None:
        self._popups = [p for p in self._popups if now - p.born < POPUP_LIFETIME]
        for i, popup in enumerate(self._popups[-4:]):
            age = (now - popup.born) / POPUP_LIFETIME
            lbl = self._f_title.render(popup.text, True, popup.colour)
            lbl.set_alpha(int(255 * (1 - age)))
            y = GRID_Y + GRID_PX // 2 - 60 * age - i * 34
            self._surf.blit(lbl, (GRID_X + (GRID_PX - lbl.get_width()) // 2, int(y)))

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        self._draw_header()
        self._draw_grid()
        self._draw_shuffle_bar()
        self._draw_dictionary()
        self._draw_popups(time.monotonic())
        self._surf.blit(
            self._f_small.render(
                "Drag  select     S  shuffle     T  sort     R  reset     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            (GRID_X, WIN_H - 28),
        )

    def _draw_confirm(self) -> None:
        self._draw_game()
        shade = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        self._surf.blit(shade, (0, 0))
        box = pygame.Rect(WIN_W // 2 - 200, 250, 400, 200)
        pygame.draw.rect(self._surf, COL_SURFACE0, box, border_radius=12)
        for i, line in enumerate(("Reset the game?", "Score and dictionary will be lost.")):
            font = self._f_title if i == 0 else self._f_body
            lbl = font.render(line, True, COL_TEXT)
            self._surf.blit(lbl, (box.centerx - lbl.get_width() // 2, box.y + 28 + i * 40))
        self._confirm_btn.draw(self._surf)
        self._cancel_btn.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_btns:
                btn.motion(ev.pos)
            if game.tracker.is_dragging:
                game.pointer_move(self._cell_under(ev.pos), ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._sort_btn.hit(ev.pos):
                self._toggle_sort()
            elif self._reset_btn.hit(ev.pos):
                self._ask_reset()
            elif self._shuffle_rect.collidepoint(ev.pos):
                self._do_shuffle()
            elif pygame.Rect(GRID_X, GRID_Y, GRID_PX, GRID_PX).collidepoint(ev.pos):
                game.pointer_down(self._cell_under(ev.pos), ev.pos)
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
            self._popup(game.pointer_up())
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_s:
                self._do_shuffle()
            elif ev.key == pygame.K_t:
                self._toggle_sort()
            elif ev.key == pygame.K_r:
                self._ask_reset()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
        return True

    def _ev_confirm(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._confirm_btn.motion(ev.pos)
            self._cancel_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._confirm_btn.hit(ev.pos):
                self._game.reset()
                self._popups.clear()
                self._screen = _Screen.PLAYING
            elif self._cancel_btn.hit(ev.pos):
                self._screen = _Screen.PLAYING
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_RETURN, pygame.K_y):
                self._game.reset()
                self._popups.clear()
                self._screen = _Screen.PLAYING
            elif ev.key in (pygame.K_ESCAPE, pygame.K_n):
                self._screen = _Screen.PLAYING
        return True

    # ── actions ─────────────────────────────────────────────────────────────

    def _toggle_sort(self) -> None:
        self._sort_mode = self._sort_mode.next()
        self._sort_btn.text = self._sort_mode.label

    def _ask_reset(self) -> None:
        # The confirm screen swallows the button release.
        self._game.cancel_drag()
        self._screen = _Screen.CONFIRM_RESET

    def _do_shuffle(self) -> None:
        if self._game.shuffle() is not None:
            self._popups.append(_Popup(SHUFFLE_MESSAGE, COL_PINK, time.monotonic()))

    # ── main loop ───────────────────────────────────────────────────────────

    def _busy(self) -> bool:
        return self._game.animation.wants_frames or bool(self._popups)

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.PLAYING: self._ev_game,
            _Screen.CONFIRM_RESET: self._ev_confirm,
        }
        _draw = {
            _Screen.PLAYING: self._draw_game,
            _Screen.CONFIRM_RESET: self._draw_confirm,
        }

        running = True
        while running:
            # Block on input while nothing is moving on screen.
            events = pygame.event.get() if self._busy() else [pygame.event.wait()]
            for ev in events:
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            self._game.animation.tick(time.monotonic())
            _draw[self._screen]()
            pygame.display.flip()
            if self._busy():
                self._clock.tick(FPS)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    config: GameConfig,
    words: WordBank,
    store: SaveGameStore,
    seed: int | None = None,
) -> None:
    """Launch the Pygame GUI."""
    logger.info("Starting pygame frontend (%d×%d grid)", config.grid_size, config.grid_size)
    game = GamePlay(config, words=words, store=store, rng=random.Random(seed))
    PygameApp(game).run_loop()
