# mazelab/core/prim_generator.py
#!/usr/bin/env python3
"""
Randomized Prim generator.

Grows the maze from chamber (1, 1). The frontier holds WALL link cells next
to the carved region; each iteration pops one uniformly at random and looks
at the two chambers it separates:
- exactly one already carved -> carve the link and the new chamber,
  then queue the new chamber's WALL neighbours
- none or both carved        -> drop the link (it would join nothing or
  close a loop)

The result is a perfect maze; `cycle_probability` then braids it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple
import logging

from mazelab import config
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid, CellKind, DIRECTIONS

log = logging.getLogger(__name__)


@dataclass
class PrimGenerator:
    name: str = "Prim"
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
        """Carve a spanning tree over the grid's chambers, in place."""
        start = Coordinate(1, 1)
        if not grid.in_bounds(*start):
            log.warning("%s: %dx%d grid has no interior, leaving it solid",
                        self.name, grid.height, grid.width)
            return grid

        grid.carve(start, self.rng.surface())
        frontier: List[Coordinate] = []
        queued: Set[Coordinate] = set()
        self._push_walls(grid, start, frontier, queued)
        chambers = 1

        while frontier:
            # swap-remove keeps the pick uniform and O(1)
            i = self.rng.randrange(len(frontier))
            frontier[i], frontier[-1] = frontier[-1], frontier[i]
            wall = frontier.pop()
            queued.discard(wall)

            pair = self._straddled(grid, wall)
            if pair is None:
                continue
            a, b = pair
            a_in, b_in = grid.is_passage(a), grid.is_passage(b)
            if a_in == b_in:
                continue

            fresh = b if a_in else a
            grid.carve(wall, self.rng.surface())
            grid.carve(fresh, self.rng.surface())
            chambers += 1
            self._push_walls(grid, fresh, frontier, queued)

        log.debug("%s: carved %d chambers on %dx%d", self.name, chambers, grid.height, grid.width)
        return grid

    # -------------------- helpers --------------------

    def _push_walls(self, grid: Grid, c: Coordinate, frontier: List[Coordinate], queued: Set[Coordinate]) -> None:
        row, col = c
        for dr, dc in DIRECTIONS:
            n = Coordinate(row + dr, col + dc)
            if n in queued or not grid.in_bounds(*n):
                continue
            if grid.kind_at(n) is CellKind.WALL:
                frontier.append(n)
                queued.add(n)

    @staticmethod
    def _straddled(grid: Grid, wall: Coordinate) -> Optional[Tuple[Coordinate, Coordinate]]:
        """The two chambers on either side of a link cell, or None."""
        row, col = wall
        if row % 2 == col % 2:
            return None
        if row % 2 == 1:
            a, b = Coordinate(row, col - 1), Coordinate(row, col + 1)
        else:
            a, b = Coordinate(row - 1, col), Coordinate(row + 1, col)
        if not (grid.in_bounds(*a) and grid.in_bounds(*b)):
            return None
        return a, b
