# mazelab/core/backtracker_generator.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List
import logging

from mazelab import config
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid, CellKind, DIRECTIONS

log = logging.getLogger(__name__)


@dataclass
class BacktrackerGenerator:
    """Randomized depth-first carving with an explicit stack (long, winding corridors)."""

    name: str = "Recursive Backtracker"
    rng: RandomSource = field(default_factory=RandomSource)
    cycle_probability: float = config.CYCLE_PROBABILITY

    def generate(self, height: int, width: int) -> Grid:
        grid = Grid.new(height, width)
        self.carve(grid)
        if self.cycle_probability > 0:
            opened = grid.open_cycles(self.cycle_probability, self.rng)
            log.info("%s: opened %d cycles (p=%.2f)", self.name, opened, self.cycle_probability)
        return grid

    def carve(self, grid: Grid) -> Grid:
        start = Coordinate(1, 1)
        if not grid.in_bounds(*start):
            log.warning("%s: %dx%d grid has no interior, leaving it solid",
                        self.name, grid.height, grid.width)
            return grid

        grid.carve(start, self.rng.surface())
        stack: List[Coordinate] = [start]
        chambers = 1

        while stack:
            current = stack[-1]
            options = self._unvisited(grid, current)
            if not options:
                stack.pop()
                continue

            chosen = self.rng.choice(options)
            link = Coordinate((current.row + chosen.row) // 2, (current.col + chosen.col) // 2)
            grid.carve(link, self.rng.surface())
            grid.carve(chosen, self.rng.surface())
            stack.append(chosen)
            chambers += 1

        log.debug("%s: carved %d chambers on %dx%d", self.name, chambers, grid.height, grid.width)
        return grid

    def _unvisited(self, grid: Grid, c: Coordinate) -> List[Coordinate]:
        """Chambers two steps away that are still WALL behind a WALL link."""
        out: List[Coordinate] = []
        for dr, dc in DIRECTIONS:
            n = Coordinate(c.row + 2 * dr, c.col + 2 * dc)
            if not grid.in_bounds(*n) or grid.kind_at(n) is not CellKind.WALL:
                continue
            if grid.kind_at(Coordinate(c.row + dr, c.col + dc)) is CellKind.WALL:
                out.append(n)
        return out
