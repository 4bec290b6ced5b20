# mazelab/core/paths.py
from typing import Dict, List, Optional, Sequence, Tuple

from mazelab.core.types import Coordinate, Grid


def default_endpoints(grid: Grid) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Top-left and bottom-right chambers, or None when the grid has no interior."""
    if grid.height < 3 or grid.width < 3:
        return None
    return Coordinate(1, 1), Coordinate(grid.height - 2, grid.width - 2)


def reconstruct_path(parent: Dict[Coordinate, Coordinate], start: Coordinate, end: Coordinate) -> List[Coordinate]:
    """Walk predecessors back from end to start. Empty if end was never reached."""
    if end != start and end not in parent:
        return []
    path: List[Coordinate] = [end]
    cur = end
    while cur != start:
        cur = parent[cur]
        path.append(cur)
    path.reverse()
    return path


def path_cost(grid: Grid, path: Sequence[Coordinate]) -> float:
    """Sum of the true surface costs of every cell entered after the first."""
    return sum(grid.cost_of(c) for c in path[1:])


def is_valid_path(grid: Grid, path: Sequence[Coordinate]) -> bool:
    """Every cell is PASSAGE and consecutive cells are 4-adjacent."""
    if not path:
        return False
    if not all(grid.is_passage(c) for c in path):
        return False
    for a, b in zip(path, path[1:]):
        if abs(a.row - b.row) + abs(a.col - b.col) != 1:
            return False
    return True
