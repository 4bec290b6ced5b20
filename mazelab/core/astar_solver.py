# mazelab/core/astar_solver.py
#!/usr/bin/env python3
"""
Weighted A* — one expansion per step() for animation, solve() for a full run.

Edge cost = surface cost of the cell being entered.

Negative costs:
- COIN (-1.0) is searched as a free step (cost clamped at 0), so the closed
  set stays sound and no negative loop exists.
- Manhattan distance is scaled by the smallest clamped step cost found on the
  grid's passages, which keeps h consistent. Paths are optimal for the clamped
  costs, and for the real ones whenever no surface is negative.
- `total_cost` in the metrics is the real (unclamped) cost of the path.

Tie-breaking in the PQ:
- (f, h, -g, seq, cell): lower f, then lower h, then deeper g, then FIFO by seq.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
import logging
from math import inf

from mazelab.core.paths import reconstruct_path, path_cost
from mazelab.core.types import StepResult, Grid, Coordinate, SURFACE_COSTS

log = logging.getLogger(__name__)


def step_cost(grid: Grid, c: Coordinate) -> float:
    return max(0.0, grid.cost_of(c))


@dataclass
class AStarSolver:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Coordinate] = None
    goal: Optional[Coordinate] = None
    open_pq: List[Tuple[float, float, float, int, Coordinate]] = field(default_factory=list)  # (f, h, -g, seq, cell)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[Coordinate, float] = field(default_factory=dict)
    parent: Dict[Coordinate, Coordinate] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    seq: int = 0  # monotonic counter for PQ stability
    h_scale: float = 1.0

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Coordinate, goal: Coordinate) -> None:
        """Initialize on a given grid and endpoints."""
        self.grid = grid
        self.start = Coordinate(*start)
        self.goal = Coordinate(*goal)
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.seq = 0
        self.h_scale = self._min_step_cost()

        if not (self.grid.is_passage(self.start) and self.grid.is_passage(self.goal)):
            self.no_path = True
            return

        s = self.start
        self.g[s] = 0.0
        h0 = self._h(s)
        heapq.heappush(self.open_pq, (h0, h0, -0.0, self._bump(), s))
        self.open_set.add(s)

    def solve(self, grid: Grid, start: Coordinate, goal: Coordinate) -> List[Coordinate]:
        self.init(grid, start, goal)
        while True:
            res = self.step()
            if res.status == "done":
                log.debug("%s: %s -> %s, cost %.1f over %d cells",
                          self.name, self.start, self.goal, res.metrics["total_cost"], len(res.path))
                return res.path
            if res.status == "no_path":
                log.debug("%s: no path %s -> %s", self.name, self.start, self.goal)
                return []

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _min_step_cost(self) -> float:
        """Smallest clamped step cost among the grid's passages. Defaults to 1."""
        costs = {max(0.0, SURFACE_COSTS[s]) for s in self.grid.passage_surfaces()}
        return min(costs) if costs else 1.0

    def _h(self, c: Coordinate) -> float:
        dr = abs(self.goal.row - c.row)
        dc = abs(self.goal.col - c.col)
        return (dr + dc) * self.h_scale

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f node, skipping entries for already closed cells.
          - If goal, reconstruct and finish.
          - Else relax neighbors with edge cost = clamped surface cost of the destination.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = reconstruct_path(self.parent, self.start, self.goal)
            return StepResult(status="done", path=path, metrics=self._metrics(path))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        _, _, neg_g_u, _, u = heapq.heappop(self.open_pq)

        # lazy deletion: stale or already finalized entry
        if u in self.closed_set or -neg_g_u != self.g.get(u, inf):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal:
            self.done = True
            path = reconstruct_path(self.parent, self.start, u)
            return StepResult(status="done", closed=[u], current=u, path=path,
                              metrics=self._metrics(path))

        opened_now: List[Coordinate] = []
        for v in self.grid.passage_neighbors(u):
            if v in self.closed_set:
                continue
            alt = self.g[u] + step_cost(self.grid, v)
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                h_v = self._h(v)
                heapq.heappush(self.open_pq, (alt + h_v, h_v, -alt, self._bump(), v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self, path: Optional[List[Coordinate]] = None) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": len(path) if path else 0,
            "total_cost": path_cost(self.grid, path) if path else None,
        }
