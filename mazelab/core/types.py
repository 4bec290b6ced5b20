# mazelab/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Iterator, NamedTuple, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from mazelab.core.rng import RandomSource


class Coordinate(NamedTuple):
    row: int
    col: int


class CellKind(Enum):
    WALL = "wall"
    PASSAGE = "passage"


class Surface(Enum):
    NORMAL = "normal"
    SWAMP = "swamp"
    SAND = "sand"
    COIN = "coin"
    ROAD = "road"


SURFACE_COSTS: Dict[Surface, float] = {
    Surface.NORMAL: 1.0,
    Surface.SWAMP: 5.0,
    Surface.SAND: 3.0,
    Surface.COIN: -1.0,
    Surface.ROAD: 0.5,
}


def surface_cost(tag: Surface) -> float:
    return SURFACE_COSTS[tag]


class InvalidDimensionError(ValueError):
    """Raised when a grid is requested with a non-positive height or width."""


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    kind: CellKind
    surface: Surface

    @property
    def is_passage(self) -> bool:
        return self.kind is CellKind.PASSAGE


# up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _odd(n: int) -> int:
    return n if n % 2 == 1 else n + 1


@dataclass
class Grid:
    height: int
    width: int
    kinds: List[CellKind]             # flat, index = row * width + col
    surfaces: List[Surface]

    @classmethod
    def new(cls, height: int, width: int) -> "Grid":
        """All-WALL/NORMAL grid; both sides are rounded up to the next odd number."""
        if height <= 0 or width <= 0:
            raise InvalidDimensionError(f"grid size must be positive, got {height}x{width}")
        height, width = _odd(height), _odd(width)
        size = height * width
        return cls(height, width, [CellKind.WALL] * size, [Surface.NORMAL] * size)

    @classmethod
    def from_text(cls, lines: Sequence[str]) -> "Grid":
        """
        Build a grid from rows of glyphs, dimensions taken as-is:
          '#' wall, '.' normal, 'w' swamp, 's' sand, 'c' coin, 'r' road.
        """
        glyphs = {
            ".": Surface.NORMAL,
            "w": Surface.SWAMP,
            "s": Surface.SAND,
            "c": Surface.COIN,
            "r": Surface.ROAD,
        }
        height = len(lines)
        width = len(lines[0]) if lines else 0
        if height == 0 or width == 0:
            raise InvalidDimensionError("grid text is empty")
        kinds: List[CellKind] = []
        surfaces: List[Surface] = []
        for r, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(f"row {r} has length {len(line)}, expected {width}")
            for ch in line:
                if ch == "#":
                    kinds.append(CellKind.WALL)
                    surfaces.append(Surface.NORMAL)
                elif ch in glyphs:
                    kinds.append(CellKind.PASSAGE)
                    surfaces.append(glyphs[ch])
                else:
                    raise ValueError(f"unknown glyph {ch!r} in row {r}")
        return cls(height, width, kinds, surfaces)

    # -------------------- addressing --------------------

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def in_bounds(self, row: int, col: int) -> bool:
        """Interior test; the border is never addressable as a chamber."""
        return 0 < row < self.height - 1 and 0 < col < self.width - 1

    def _index(self, row: int, col: int) -> int:
        if not self.contains(row, col):
            raise IndexError(f"({row}, {col}) outside {self.height}x{self.width} grid")
        return row * self.width + col

    # -------------------- reads --------------------

    def kind_at(self, c: Coordinate) -> CellKind:
        return self.kinds[self._index(*c)]

    def surface_at(self, c: Coordinate) -> Surface:
        return self.surfaces[self._index(*c)]

    def cell(self, row: int, col: int) -> Cell:
        i = self._index(row, col)
        return Cell(row, col, self.kinds[i], self.surfaces[i])

    def is_passage(self, c: Coordinate) -> bool:
        row, col = c
        if not self.contains(row, col):
            return False
        return self.kinds[row * self.width + col] is CellKind.PASSAGE

    def cost_of(self, c: Coordinate) -> float:
        i = self._index(*c)
        if self.kinds[i] is CellKind.WALL:
            raise ValueError("Asked cost of a WALL cell")
        return SURFACE_COSTS[self.surfaces[i]]

    def passage_neighbors(self, c: Coordinate) -> List[Coordinate]:
        """4-connected PASSAGE neighbours in fixed order: up, down, left, right."""
        row, col = c
        out: List[Coordinate] = []
        for dr, dc in DIRECTIONS:
            n = Coordinate(row + dr, col + dc)
            if self.is_passage(n):
                out.append(n)
        return out

    def passages(self) -> Iterator[Coordinate]:
        for i, kind in enumerate(self.kinds):
            if kind is CellKind.PASSAGE:
                yield Coordinate(*divmod(i, self.width))

    def chambers(self) -> Iterator[Coordinate]:
        for row in range(1, self.height - 1, 2):
            for col in range(1, self.width - 1, 2):
                yield Coordinate(row, col)

    def passage_surfaces(self) -> Iterator[Surface]:
        for kind, surface in zip(self.kinds, self.surfaces):
            if kind is CellKind.PASSAGE:
                yield surface

    # -------------------- writes --------------------

    def carve(self, c: Coordinate, surface: Surface) -> None:
        i = self._index(*c)
        self.kinds[i] = CellKind.PASSAGE
        self.surfaces[i] = surface

    def open_cycles(self, probability: float, rng: "RandomSource") -> int:
        """
        Braid the maze: each WALL link cell whose two opposing chambers are both
        PASSAGE is opened with the given probability, provided exactly two of
        its four neighbours are PASSAGE. Returns the number of cells opened.
        """
        opened = 0
        for row in range(1, self.height - 1):
            for col in range(1, self.width - 1):
                if (row % 2) == (col % 2):
                    continue
                if self.kinds[row * self.width + col] is not CellKind.WALL:
                    continue
                if not rng.chance(probability):
                    continue
                if self._joins_two_chambers(row, col):
                    self.carve(Coordinate(row, col), rng.surface())
                    opened += 1
        return opened

    def _joins_two_chambers(self, row: int, col: int) -> bool:
        if row % 2 == 1:
            a, b = Coordinate(row, col - 1), Coordinate(row, col + 1)
        else:
            a, b = Coordinate(row - 1, col), Coordinate(row + 1, col)
        if not (self.is_passage(a) and self.is_passage(b)):
            return False
        return len(self.passage_neighbors(Coordinate(row, col))) == 2


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Coordinate] = field(default_factory=list)
    closed: List[Coordinate] = field(default_factory=list)
    current: Optional[Coordinate] = None
    path: Optional[List[Coordinate]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
