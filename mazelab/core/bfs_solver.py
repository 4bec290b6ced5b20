# mazelab/core/bfs_solver.py
#!/usr/bin/env python3

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional
import logging

from mazelab.core.paths import reconstruct_path, path_cost
from mazelab.core.types import StepResult, Grid, Coordinate

log = logging.getLogger(__name__)


@dataclass
class BFSSolver:
    """Unweighted breadth-first search; fewest steps, surface costs ignored."""

    name: str = "BFS"

    grid: Optional[Grid] = None
    start: Optional[Coordinate] = None
    goal: Optional[Coordinate] = None
    queue: Deque[Coordinate] = field(default_factory=deque)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    parent: Dict[Coordinate, Coordinate] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    def init(self, grid: Grid, start: Coordinate, goal: Coordinate) -> None:
        self.grid = grid
        self.start = Coordinate(*start)
        self.goal = Coordinate(*goal)
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.queue.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False

        # endpoints off the grid or on a wall can never be joined
        if not (self.grid.is_passage(self.start) and self.grid.is_passage(self.goal)):
            self.no_path = True
            return
        self.queue.append(self.start)
        self.open_set.add(self.start)

    def solve(self, grid: Grid, start: Coordinate, goal: Coordinate) -> List[Coordinate]:
        self.init(grid, start, goal)
        while True:
            res = self.step()
            if res.status == "done":
                log.debug("%s: %s -> %s in %d cells", self.name, self.start, self.goal, len(res.path))
                return res.path
            if res.status == "no_path":
                log.debug("%s: no path %s -> %s", self.name, self.start, self.goal)
                return []

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = reconstruct_path(self.parent, self.start, self.goal)
            return StepResult(status="done", path=path, metrics=self._metrics(path))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.queue:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        u = self.queue.popleft()
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
            if v in self.open_set or v in self.closed_set:
                continue
            self.parent[v] = u
            self.queue.append(v)
            self.open_set.add(v)
            opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def _metrics(self, path: Optional[List[Coordinate]] = None) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": len(path) if path else 0,
            "total_cost": path_cost(self.grid, path) if path else None,
        }
