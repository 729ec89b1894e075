# tileroute/app/viewer.py
#!/usr/bin/env python3
"""
Tile World Viewer: animated Dijkstra / A* / Greedy with metrics.

- Keyboard:
    [1]..[9]     -> switch world (files in the maps directory)
    [D]/[A]/[G]  -> select algorithm (Dijkstra / A* / Greedy)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Every reset or algorithm switch starts from a fresh copy of the world and a
freshly built node graph.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from tileroute.app import settings
from tileroute.core.engine import SearchEngine
from tileroute.core.graph import build_graph
from tileroute.core.strategies import SearchStrategy
from tileroute.core.tileworld import WORLD_SUFFIXES, load_world
from tileroute.core.types import Cell, Grid, SearchResult, TileWorldError

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

ALGO_KEYS = {
    pygame.K_d: SearchStrategy.DIJKSTRA,
    pygame.K_a: SearchStrategy.A_STAR,
    pygame.K_g: SearchStrategy.GREEDY,
}

# Colors
BLACK       = (  0,  0,  0)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


def find_worlds(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix.lower() in WORLD_SUFFIXES)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- shared drawing ----------
def _draw_gradient(screen: pygame.Surface):
    w, h = screen.get_size()
    top = (24, 26, 32); bot = (36, 40, 48)
    for y in range(h):
        t = y / max(1, h-1)
        c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
        pygame.draw.line(screen, c, (0, y), (w, y))


def _draw_cells(screen: pygame.Surface, grid: Grid, origin: Tuple[int, int], cs: int):
    ox, oy = origin
    for row in range(grid.height):
        for col in range(grid.width):
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            pygame.draw.rect(screen, grid.cells[row][col].rgb, rect)
            if cs >= 6:
                pygame.draw.rect(screen, BLACK, rect, 1)


def _draw_path(screen: pygame.Surface, path: Sequence[Cell], origin: Tuple[int, int], cs: int):
    if len(path) < 2:
        return
    ox, oy = origin
    pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (col, row) in path]
    pygame.draw.lines(screen, NEON_MINT, False, pts, max(2, cs // 5))


# ---------- Viewer ----------
class Viewer:
    def __init__(self, worlds: List[Path], index: int = 0):
        pygame.init()
        if not worlds:
            raise TileWorldError("no tile worlds to show")

        self.worlds = worlds
        self.world_index = index
        self.base_grid = load_world(worlds[index])
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size(self.base_grid)
        win_w = GRID_MARGIN*2 + self.base_grid.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.base_grid.height * self.cell_size, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Tile World: {self.base_grid.name}")

        self._buttons: List[UIButton] = []
        self.open_set: set = set()
        self.closed_set: set = set()
        self.path: List[Cell] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0
        self.state = "Idle"
        self.selected_algo = SearchStrategy.DIJKSTRA
        self.engine: Optional[SearchEngine] = None
        self._last_metrics: Dict = {}

        self._layout(win_w, win_h)
        self._new_engine()

    # ---------- engine ----------
    def _new_engine(self):
        """Fresh grid copy + fresh graph for every run."""
        self.grid = self.base_grid.copy()
        self.open_set.clear(); self.closed_set.clear(); self.path = []
        self.running = False
        start, end = self.grid.find_start(), self.grid.find_end()
        if start is None or end is None:
            self.engine = None
            self.state = "No start/end"
            self._last_metrics = {"algo": self.selected_algo.create().name}
        else:
            graph = build_graph(self.grid)
            self.engine = SearchEngine(graph, graph[start], graph[end], self.selected_algo.create(),
                                       on_path=lambda node: self.grid.mark_path(node.cell))
            self.open_set.add(start)
            self.state = "Idle"
            self._last_metrics = {"algo": self.engine.name}
        self._refresh_active_states()

    def _do_step(self):
        if self.engine is None:
            return
        res = self.engine.step()
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.closed_set.add(c)
            self.open_set.discard(c)
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    # ---------- layout ----------
    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(4, min(CELL_SIZE_DEFAULT, target_h // grid.height))

    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(2, min(avail_w // self.base_grid.width, avail_h // self.base_grid.height))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN*2 + self.base_grid.width * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run")
        add("Step Once", self._do_step)
        add("Reset", self._new_engine)
        add("Algo: Dijkstra", lambda: self._switch_algo(SearchStrategy.DIJKSTRA), togglable=True, store_as="btn_algo_d")
        add("Algo: A*",       lambda: self._switch_algo(SearchStrategy.A_STAR),   togglable=True, store_as="btn_algo_a")
        add("Algo: Greedy",   lambda: self._switch_algo(SearchStrategy.GREEDY),   togglable=True, store_as="btn_algo_g")
        add("Next world", lambda: self._switch_world((self.world_index + 1) % len(self.worlds)))
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.selected_algo is SearchStrategy.DIJKSTRA)
            self.btn_algo_a.set_active(self.selected_algo is SearchStrategy.A_STAR)
            self.btn_algo_g.set_active(self.selected_algo is SearchStrategy.GREEDY)

    # ---------- controls ----------
    def _toggle_run(self):
        if self.state in ("Done", "No path") or self.engine is None:
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _switch_algo(self, algo: SearchStrategy):
        self.selected_algo = algo
        self._new_engine()

    def _switch_world(self, index: int):
        if not 0 <= index < len(self.worlds):
            return
        try:
            self.base_grid = load_world(self.worlds[index])
        except (TileWorldError, OSError) as ex:
            logger.error("Failed to load world %s: %s", self.worlds[index], ex)
            return
        self.world_index = index
        pygame.display.set_caption(f"Tile World: {self.base_grid.name}")
        self._layout(*self.screen.get_size())
        self._new_engine()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._new_engine()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key in ALGO_KEYS:
                    self._switch_algo(ALGO_KEYS[e.key])
                elif pygame.K_1 <= e.key <= pygame.K_9:
                    self._switch_world(e.key - pygame.K_1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)
        return True

    def run(self):
        while self._handle_events():
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    # ---------- drawing ----------
    def _draw(self):
        _draw_gradient(self.screen)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        _draw_cells(self.screen, self.grid, self._grid_origin, cs)

        for cells, color in ((self.closed_set, NEON_MAG_A), (self.open_set, NEON_CYAN_A)):
            for (col, row) in cells:
                s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(color)
                self.screen.blit(s, (ox + col*cs, oy + row*cs))

        _draw_path(self.screen, self.path, self._grid_origin, cs)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Expanded: {m.get('expanded', 0)}")
        line(f"Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']}")
        line("-" * 26)
        line(f"World {self.world_index + 1}: {self.base_grid.name}")
        line(f"Algo: {m.get('algo', '')}   [{self.state}]")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- solved worlds (tileroute-search --show) ----------
def show_solutions(solved: Sequence[Tuple[str, Grid, SearchResult]], cell_size: int = 10):
    """Show solved grids side by side, each captioned with its result. Q/ESC closes."""
    pygame.init()
    font = pygame.font.Font(FONT_NAME, 18)
    caption_h = 48
    tile_w = max(GRID_MARGIN*2 + g.width * cell_size for _, g, _ in solved)
    tile_h = max(GRID_MARGIN*2 + g.height * cell_size for _, g, _ in solved) + caption_h
    cols = min(3, len(solved))
    rows = (len(solved) + cols - 1) // cols
    screen = pygame.display.set_mode((tile_w * cols, tile_h * rows))
    pygame.display.set_caption("Tile World Solutions")

    _draw_gradient(screen)
    for i, (title, grid, result) in enumerate(solved):
        tx, ty = (i % cols) * tile_w, (i // cols) * tile_h
        screen.blit(font.render(title, True, ACCENT_GOLD), (tx + GRID_MARGIN, ty + 6))
        stats = f"cost {result.best_path_cost}   nodes {result.nodes_expanded}"
        screen.blit(font.render(stats, True, TEXT_LIGHT), (tx + GRID_MARGIN, ty + 26))
        _draw_cells(screen, grid, (tx + GRID_MARGIN, ty + caption_h), cell_size)
    pygame.display.flip()

    clock = pygame.time.Clock()
    while True:
        e = pygame.event.wait()
        if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key in (pygame.K_ESCAPE, pygame.K_q)):
            break
        clock.tick(30)
    pygame.quit()


# ---------- main ----------
def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    settings.configure_logging()
    if argv:
        worlds = [Path(a) for a in argv]
    else:
        worlds = find_worlds(settings.maps_dir())
    try:
        Viewer(worlds).run()
    except (TileWorldError, OSError) as ex:
        print(f"Failed to load world: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
