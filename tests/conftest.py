"""
Shared fixtures and helpers for the mazelab test suite.
"""

from collections import deque
from typing import Tuple

import pytest

from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: Slow tests (large mazes)")


# =============================================================================
# Graph helpers
# =============================================================================


def passage_graph_stats(grid: Grid) -> Tuple[int, int, int]:
    """(passage cells, adjacent passage pairs, cells reachable from (1, 1))."""
    vertices = sum(1 for _ in grid.passages())
    edges = 0
    for c in grid.passages():
        for n in (Coordinate(c.row + 1, c.col), Coordinate(c.row, c.col + 1)):
            if grid.is_passage(n):
                edges += 1

    start = Coordinate(1, 1)
    seen = {start} if grid.is_passage(start) else set()
    queue = deque(seen)
    while queue:
        u = queue.popleft()
        for v in grid.passage_neighbors(u):
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return vertices, edges, len(seen)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def rng():
    return RandomSource(1234)


@pytest.fixture
def known_grid():
    """5x5 with the single corridor (1,1) -> (1,2) -> (2,2) -> (3,2) -> (3,3)."""
    return Grid.from_text([
        "#####",
        "#..##",
        "##.##",
        "##..#",
        "#####",
    ])


@pytest.fixture
def blocked_grid():
    return Grid.new(5, 5)
