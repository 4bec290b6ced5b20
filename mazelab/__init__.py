"""Maze generation (Prim / recursive backtracker) and path search (BFS / A*) on a surface-cost grid."""

from mazelab.core.api import GeneratorKind, SolverKind, generate, solve, make_generator, make_solver
from mazelab.core.rng import RandomSource
from mazelab.core.types import (
    Cell,
    CellKind,
    Coordinate,
    Grid,
    InvalidDimensionError,
    StepResult,
    Surface,
    surface_cost,
)

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "CellKind",
    "Coordinate",
    "GeneratorKind",
    "Grid",
    "InvalidDimensionError",
    "RandomSource",
    "SolverKind",
    "StepResult",
    "Surface",
    "generate",
    "make_generator",
    "make_solver",
    "solve",
    "surface_cost",
]
