# mazelab/core/api.py
"""
Entry points used by the collaborators (console, CLI, viewer):

- generate(height, width, strategy) -> Grid
- solve(grid, start, end, strategy) -> List[Coordinate]   ([] means "no path")
"""

from enum import Enum
from typing import List, Optional, Union

from mazelab import config
from mazelab.core.astar_solver import AStarSolver
from mazelab.core.backtracker_generator import BacktrackerGenerator
from mazelab.core.bfs_solver import BFSSolver
from mazelab.core.prim_generator import PrimGenerator
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid


class GeneratorKind(str, Enum):
    PRIM = "prim"
    BACKTRACKER = "backtracker"


class SolverKind(str, Enum):
    BFS = "bfs"
    ASTAR = "astar"


GENERATORS = {
    GeneratorKind.PRIM: PrimGenerator,
    GeneratorKind.BACKTRACKER: BacktrackerGenerator,
}

SOLVERS = {
    SolverKind.BFS: BFSSolver,
    SolverKind.ASTAR: AStarSolver,
}


def _kind(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(k.value for k in enum_cls)
        raise ValueError(f"unknown strategy {value!r}, expected one of: {choices}") from None


def make_generator(strategy: Union[GeneratorKind, str] = GeneratorKind.PRIM,
                   rng: Optional[RandomSource] = None,
                   cycle_probability: Optional[float] = None):
    kind = _kind(GeneratorKind, strategy)
    if rng is None:
        rng = RandomSource(config.resolve_seed())
    if cycle_probability is None:
        cycle_probability = config.resolve_cycle_probability()
    return GENERATORS[kind](rng=rng, cycle_probability=cycle_probability)


def make_solver(strategy: Union[SolverKind, str] = SolverKind.BFS):
    return SOLVERS[_kind(SolverKind, strategy)]()


def generate(height: int, width: int,
             strategy: Union[GeneratorKind, str] = GeneratorKind.PRIM,
             rng: Optional[RandomSource] = None,
             cycle_probability: Optional[float] = None) -> Grid:
    return make_generator(strategy, rng, cycle_probability).generate(height, width)


def solve(grid: Grid, start: Coordinate, end: Coordinate,
          strategy: Union[SolverKind, str] = SolverKind.BFS) -> List[Coordinate]:
    return make_solver(strategy).solve(grid, start, end)
