# mazelab/app/viewer.py
#!/usr/bin/env python3
"""
Maze Lab Viewer — generate a maze, then watch BFS / A* expand over it.

- Keyboard:
    [1]/[2]      -> generator (Prim / Backtracker), regenerates
    [G]          -> new maze with the current generator
    [B]/[A]      -> select solver (BFS / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset the search
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit
- Mouse:
    left click on a passage  -> move start
    right click on a passage -> move goal
"""

import logging
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from mazelab import config
from mazelab.core.api import GeneratorKind, SolverKind, make_generator, make_solver
from mazelab.core.paths import default_endpoints
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid, Surface

log = logging.getLogger(__name__)

FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
WALL_DARK   = ( 28, 30, 36)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

SURFACE_COLORS: Dict[Surface, Tuple[int, int, int]] = {
    Surface.NORMAL: (200, 200, 200),
    Surface.SWAMP:  ( 96, 120,  72),
    Surface.SAND:   (226, 201, 140),
    Surface.COIN:   (255, 210,   0),
    Surface.ROAD:   (150, 160, 176),
}

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

GEN_LABELS = {GeneratorKind.PRIM: "Prim", GeneratorKind.BACKTRACKER: "Backtracker"}
SOLVER_LABELS = {SolverKind.BFS: "BFS", SolverKind.ASTAR: "A*"}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, height: int = config.DEFAULT_HEIGHT, width: int = config.DEFAULT_WIDTH,
                 generator: str = GeneratorKind.PRIM.value, solver: str = SolverKind.BFS.value,
                 rng: Optional[RandomSource] = None, cycle_probability: float = config.CYCLE_PROBABILITY):
        pygame.init()

        self.req_height = height
        self.req_width = width
        self.selected_gen = GeneratorKind(generator)
        self.selected_solver = SolverKind(solver)
        self.rng = rng or RandomSource()
        self.cycle_probability = cycle_probability

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self._buttons: List[UIButton] = []
        self.open_set: set = set()
        self.closed_set: set = set()
        self.path: List[Coordinate] = []
        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.STEPS_PER_SEC
        self.state = "Idle"
        self._last_step_t = 0.0

        self.grid = self._generate()
        self._place_default_endpoints()

        cs = self._auto_cell_size(self.grid)
        win_w = config.GRID_MARGIN*2 + self.grid.width * cs + config.PANEL_W
        win_h = max(config.GRID_MARGIN*2 + self.grid.height * cs, 640)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        self._set_caption()
        self._layout(win_w, win_h)

        self.algo = make_solver(self.selected_solver)
        if self.start is not None:
            self.algo.init(self.grid, self.start, self.goal)
        self._last_metrics = self._blank_metrics()

    # ---------- maze / algorithm ----------
    def _generate(self) -> Grid:
        gen = make_generator(self.selected_gen, self.rng, self.cycle_probability)
        t0 = time.perf_counter()
        grid = gen.generate(self.req_height, self.req_width)
        log.info("%s maze %dx%d in %.3fs", gen.name, grid.height, grid.width, time.perf_counter() - t0)
        return grid

    def _place_default_endpoints(self):
        # a grid without interior has no chamber to stand on
        self.start, self.goal = default_endpoints(self.grid) or (None, None)

    def _set_caption(self):
        pygame.display.set_caption(
            f"Maze Lab — {GEN_LABELS[self.selected_gen]} {self.grid.height}x{self.grid.width}")

    def _blank_metrics(self) -> dict:
        return {
            "algo": SOLVER_LABELS[self.selected_solver],
            "popped": 0,
            "open_size": 0,
            "closed_count": 0,
            "path_len": 0,
            "total_cost": None,
        }

    def _new_maze(self, kind: Optional[GeneratorKind] = None):
        if kind is not None:
            self.selected_gen = kind
        self.grid = self._generate()
        self._place_default_endpoints()
        self._set_caption()
        self._layout(*self.screen.get_size())
        self._reset()

    def _switch_solver(self, kind: SolverKind):
        self.selected_solver = kind
        self.algo = make_solver(kind)
        self._reset()

    def _reset(self):
        self.running = False
        self.state = "Idle"
        if self.start is None:
            self.algo = make_solver(self.selected_solver)
        else:
            self.algo.init(self.grid, self.start, self.goal)
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self._last_metrics = self._blank_metrics()
        self._refresh_active_states()

    # ---------- layout ----------
    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - config.GRID_MARGIN*2
        return max(config.CELL_SIZE_MIN, min(config.CELL_SIZE_DEFAULT, target_h // grid.height))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits the window and center the grid."""
        margin = config.GRID_MARGIN
        avail_w = max(1, win_w - config.PANEL_W - 2 * margin)
        avail_h = max(1, win_h - 2 * margin)
        self.cell_size = max(config.CELL_SIZE_MIN, min(avail_w // self.grid.width, avail_h // self.grid.height))

        plate_w = self.grid.width * self.cell_size + 2 * margin
        plate_h = self.grid.height * self.cell_size + 2 * margin
        left_x = max(0, (win_w - (plate_w + config.PANEL_W)) // 2)
        top_y = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + margin, self.canvas_rect.y + margin)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(config.PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coordinate]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        if self.grid.contains(row, col):
            return Coordinate(row, col)
        return None

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.open_set.discard(c)
            self.closed_set.add(c)
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Idle"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_1:
                    self._new_maze(GeneratorKind.PRIM)
                elif e.key == pygame.K_2:
                    self._new_maze(GeneratorKind.BACKTRACKER)
                elif e.key == pygame.K_g:
                    self._new_maze()
                elif e.key == pygame.K_b:
                    self._switch_solver(SolverKind.BFS)
                elif e.key == pygame.K_a:
                    self._switch_solver(SolverKind.ASTAR)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                handled = False
                for b in self._buttons:
                    handled = b.handle_mouse(e) or handled
                if not handled and e.type == pygame.MOUSEBUTTONDOWN:
                    self._place_endpoint(e)

    def _place_endpoint(self, e: pygame.event.Event):
        c = self._cell_at(e.pos)
        if c is None or not self.grid.is_passage(c):
            return
        if e.button == 1:
            self.start = c
        elif e.button == 3:
            self.goal = c
        else:
            return
        self._reset()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(240, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.grid

        for row in range(grid.height):
            for col in range(grid.width):
                c = Coordinate(row, col)
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                if grid.is_passage(c):
                    pygame.draw.rect(self.screen, SURFACE_COLORS[grid.surface_at(c)], rect)
                else:
                    pygame.draw.rect(self.screen, WALL_DARK, rect)
                if cs >= 10:
                    pygame.draw.rect(self.screen, BLACK, rect, 1)

        overlay = pygame.Surface((cs, cs), pygame.SRCALPHA)
        overlay.fill(NEON_MAG_A)
        for (row, col) in self.closed_set:
            self.screen.blit(overlay, (ox + col*cs, oy + row*cs))
        overlay.fill(NEON_CYAN_A)
        for (row, col) in self.open_set:
            self.screen.blit(overlay, (ox + col*cs, oy + row*cs))

        if len(self.path) >= 2:
            pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (row, col) in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 5))

        if self.start is not None:
            self._draw_badge(self.start, BLUE, "S")
            self._draw_badge(self.goal, RED, "G")

    def _draw_badge(self, cell: Coordinate, color: Tuple[int, int, int], label: str):
        cs = self.cell_size
        ox, oy = self._grid_origin
        cx = ox + cell.col*cs + cs//2
        cy = oy + cell.row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx, cy), max(3, cs//2 - 2))
        if cs >= 16:
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Solver: BFS", lambda: self._switch_solver(SolverKind.BFS), togglable=True, store_as="btn_bfs"); y += h + gap
        add("Solver: A*", lambda: self._switch_solver(SolverKind.ASTAR), togglable=True, store_as="btn_astar"); y += h + gap
        add("Gen: Prim", lambda: self._new_maze(GeneratorKind.PRIM), togglable=True, store_as="btn_prim"); y += h + gap
        add("Gen: Backtracker", lambda: self._new_maze(GeneratorKind.BACKTRACKER), togglable=True, store_as="btn_back"); y += h + gap
        add("New Maze", self._new_maze)

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
            self.btn_bfs.set_active(self.selected_solver is SolverKind.BFS)
            self.btn_astar.set_active(self.selected_solver is SolverKind.ASTAR)
            self.btn_prim.set_active(self.selected_gen is GeneratorKind.PRIM)
            self.btn_back.set_active(self.selected_gen is GeneratorKind.BACKTRACKER)

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
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']:.1f}")
        line("-" * 26)
        line(f"{GEN_LABELS[self.selected_gen]} / {SOLVER_LABELS[self.selected_solver]} — {self.state}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    Viewer(rng=RandomSource(config.resolve_seed()),
           cycle_probability=config.resolve_cycle_probability()).run()


if __name__ == "__main__":
    main()
