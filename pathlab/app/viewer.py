# pathlab/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Trace Viewer: replay what a search did, one decision at a time

- Keyboard:
    [1]..[5]     -> BFS / Dijkstra / A* / Greedy / JPS
    [M]          -> next map
    [SPACE]      -> run/pause
    [N]          -> single step
    [F]          -> jump to the end of the trace
    [R]/[ESC]    -> stop and replay from the start
    [+]/[-]      -> steps/sec
    [Q]          -> quit

The search runs to completion first; the window only replays its trace.

Settings: see pathlab.app.config (PATHLAB_* env vars or --key=value flags).
"""

# --- bootstrap import path so `from pathlab...` works when run as a script ---
import sys
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import pygame

from pathlab.app.config import ViewerConfig, resolve_config
from pathlab.app.player import TracePlayer
from pathlab.app.scenarios import get_scenario, next_scenario
from pathlab.core.finder import ALGORITHMS, get_algorithm
from pathlab.core.types import WEIGHT_BLOCK, WEIGHT_DEFAULT, Cell, Grid, SearchResult

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 36
FONT_NAME = None  # default pygame font

ALGO_KEYS = {
    pygame.K_1: "bfs",
    pygame.K_2: "dijkstra",
    pygame.K_3: "astar",
    pygame.K_4: "greedy",
    pygame.K_5: "jps",
}

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
TILE_DEFAULT   = (219,212,212)
TILE_EXPENSIVE = ( 48,166,110)
TILE_BLOCK     = ( 94, 94, 94)

STATUS_COLORS = {
    "start":     (  0,200, 60),
    "end":       (220, 50, 47),
    "frontier":  (102,135,204),
    "visit":     (191,140, 97),
    "jump_over": (170,200,235),
    "path":      (186,  0,255),
}

PATH_LINE   = (0,255,200)
BACKDROP    = (28,31,38)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
BUTTON_IDLE  = (36,40,48)
BUTTON_HOVER = (46,50,60)
BUTTON_ON    = (58,86,160)
BUTTON_RING  = (120,170,255)
TEXT_LIGHT  = (230,235,240)
TEXT_DARK   = ( 30, 30, 36)
ACCENT_GOLD = (255,210,0)


# ---------- Buttons ----------
@dataclass
class Button:
    label: str
    rect: pygame.Rect
    action: Callable[[], None]
    is_on: Optional[Callable[[], bool]] = None   # toggles report their state

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, hover: bool):
        on = self.is_on is not None and self.is_on()
        bg = BUTTON_ON if on else BUTTON_HOVER if hover else BUTTON_IDLE
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        if on:
            pygame.draw.rect(screen, BUTTON_RING, self.rect, width=2, border_radius=8)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))


# ---------- Viewer ----------
class Viewer:
    def __init__(self, config: ViewerConfig):
        pygame.init()

        self.config = config
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.selected_algo = config.algorithm
        self.selected_map = config.scenario
        self.grid: Optional[Grid] = None
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self.result: Optional[SearchResult] = None
        self.player: Optional[TracePlayer] = None
        self._buttons: List[Button] = []
        self._mouse = (-1, -1)

        self._load(self.selected_map, self.selected_algo)

        win_w = GRID_MARGIN*2 + self.grid.width * CELL_SIZE_DEFAULT + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.grid.height * CELL_SIZE_DEFAULT, 640)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        self._set_caption()
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()

    # ---------- search ----------
    def _load(self, map_key: str, algo_key: str):
        """Build the map, run the search to completion and hand its trace to a fresh player."""
        grid, start, end = get_scenario(map_key).build()
        result = get_algorithm(algo_key).run(grid, start, end)
        speed = self.player.steps_per_sec if self.player else self.config.steps_per_sec

        self.grid, self.start, self.end = grid, start, end
        self.result = result
        self.player = TracePlayer(result.trace, result.path, steps_per_sec=speed)
        self.selected_map, self.selected_algo = map_key, algo_key
        logger.info("%s on %s: %d events, visited=%d, cost=%s",
                    result.algorithm, map_key, len(result.trace), result.visited,
                    result.cost if result.found else "unreachable")

    def _switch(self, map_key: str, algo_key: str):
        try:
            self._load(map_key, algo_key)
        except (KeyError, ValueError) as ex:
            logger.error("Failed to load %s / %s: %s", map_key, algo_key, ex)
            return
        self._set_caption()
        self._layout(*self.screen.get_size())

    def _set_caption(self):
        pygame.display.set_caption(f"Pathfinding: {get_scenario(self.selected_map).title}")

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(8, min(avail_w // self.grid.width, avail_h // self.grid.height))

        plate_w = self.grid.width * self.cell_size + 2 * GRID_MARGIN
        plate_h = self.grid.height * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (plate_w + PANEL_W)) // 2)
        top_y = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.player.tick(time.time())
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_q:
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self.player.toggle_pause()
                elif e.key == pygame.K_n:
                    self.player.step()
                elif e.key == pygame.K_f:
                    self.player.run_to_end()
                elif e.key in (pygame.K_r, pygame.K_ESCAPE):
                    self.player.reset()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.player.bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self.player.bump_speed(-1)
                elif e.key == pygame.K_m:
                    self._switch(next_scenario(self.selected_map), self.selected_algo)
                elif e.key in ALGO_KEYS:
                    self._switch(self.selected_map, ALGO_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type == pygame.MOUSEMOTION:
                self._mouse = e.pos
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                for b in self._buttons:
                    if b.rect.collidepoint(e.pos):
                        b.action()
                        break

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        self.screen.fill(BACKDROP)

    def _base_color(self, cell: Cell) -> Tuple[int, int, int]:
        if cell.weight == WEIGHT_BLOCK:
            return TILE_BLOCK
        if cell.weight > WEIGHT_DEFAULT:
            return TILE_EXPENSIVE
        return TILE_DEFAULT

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)

    def _draw_grid(self):
        for cell in self.grid:
            rect = self._cell_rect(cell)
            view = self.player.tile(cell.position)
            color = STATUS_COLORS.get(view.status, self._base_color(cell))
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)
            if view.label and self.cell_size >= 20:
                txt = self.font_small.render(view.label, True, TEXT_DARK)
                self.screen.blit(txt, txt.get_rect(center=rect.center))

        if self.player.path_visible() and len(self.player.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.player.path]
            pygame.draw.lines(self.screen, PATH_LINE, False, pts, 4)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        rb = self._right_band
        x, y = rb.x + 16, rb.y + 250  # metrics card sits above
        w, h, gap = max(160, rb.width - 32), 32, 8
        half = (w - gap) // 2

        rows = [
            [("Run / Pause", lambda: self.player.toggle_pause(), lambda: not self.player.paused)],
            [("Step", lambda: self.player.step(), None), ("Replay", lambda: self.player.reset(), None)],
            [("Speed -", lambda: self.player.bump_speed(-1), None), ("Speed +", lambda: self.player.bump_speed(+1), None)],
        ]
        for key in ALGORITHMS:
            rows.append([(get_algorithm(key).name,
                          lambda k=key: self._switch(self.selected_map, k),
                          lambda k=key: k == self.selected_algo)])
        rows.append([("Next Map", lambda: self._switch(next_scenario(self.selected_map), self.selected_algo), None)])

        self._buttons = []
        for row in rows:
            bw = w if len(row) == 1 else half
            for i, (label, action, is_on) in enumerate(row):
                rect = pygame.Rect(x + i * (half + gap), y, bw, h)
                self._buttons.append(Button(label, rect, action, is_on))
            y += h + gap

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        pygame.draw.rect(card, CARD_HI, (0, 0, card.get_width(), 24), border_radius=14)
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        m = self.result.metrics()
        step, total = self.player.progress()
        cost = m["total_cost"] if m["total_cost"] is not None else "-"
        lines = [
            (f"{m['algo']} on {get_scenario(self.selected_map).title}", self.font_big, ACCENT_GOLD),
            (f"Step {step} / {total}   {self.player.status_text()}", self.font, TEXT_LIGHT),
            (f"Visited {m['popped']}   Pushed {self.result.pushed}", self.font, TEXT_LIGHT),
            (f"Open {m['open_size']}   Closed {m['closed_count']}", self.font, TEXT_LIGHT),
            (f"Path {m['path_len']} cells   Cost {cost}", self.font, TEXT_LIGHT),
            (f"Jump points {len(self.result.jump_points)}", self.font, TEXT_LIGHT),
            (f"{self.player.steps_per_sec} steps/s", self.font, TEXT_LIGHT),
        ]
        y0 = rb.y + 18
        for text, font, color in lines:
            surf = font.render(text, True, color)
            self.screen.blit(surf, (rb.x + 24, y0))
            y0 += surf.get_height() + 8

        for b in self._buttons:
            b.draw(self.screen, self.font, b.rect.collidepoint(self._mouse))


# ---------- main ----------
def main():
    config = resolve_config()
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        viewer = Viewer(config)
    except (KeyError, ValueError) as ex:
        logger.error("Failed to start viewer: %s", ex)
        sys.exit(1)
    viewer.run()

if __name__ == "__main__":
    main()
