# mazelab/app/console.py
"""
Console collaborators: an emoji renderer and the interactive prompt loop.

Both take their streams from the caller, so they run the same against a
terminal or a StringIO in tests.
"""

from typing import IO, Iterator, List, Optional, Sequence, Set

from mazelab.core.api import GeneratorKind, SolverKind, make_generator, make_solver
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, Grid, Surface

WALL = "⬛"            # black square
PASSAGE = "⬜"         # white square
START = "\U0001F7E9"       # green square
END = "\U0001F7E5"         # red square
PATH = "\U0001F7E8"        # yellow square

SURFACE_GLYPHS = {
    Surface.NORMAL: PASSAGE,
    Surface.SWAMP: "\U0001F7EB",   # brown square
    Surface.SAND: "\U0001F7E7",    # orange square
    Surface.COIN: "\U0001FA99",    # coin
    Surface.ROAD: "\U0001F7E6",    # blue square
}


class ConsoleRenderer:
    def __init__(self, show_surfaces: bool = False):
        self.show_surfaces = show_surfaces

    def render(self, grid: Grid, path: Sequence[Coordinate] = ()) -> str:
        return self._render(grid, path, None, None, labels=False)

    def render_with_labels(self, grid: Grid) -> str:
        return self._render(grid, (), None, None, labels=True)

    def render_with_points(self, grid: Grid, start: Coordinate, end: Coordinate) -> str:
        return self._render(grid, (), start, end, labels=True)

    def render_with_path_and_points(self, grid: Grid, path: Sequence[Coordinate],
                                    start: Coordinate, end: Coordinate) -> str:
        return self._render(grid, path, start, end, labels=True)

    def _glyph(self, grid: Grid, c: Coordinate) -> str:
        if not grid.is_passage(c):
            return WALL
        if self.show_surfaces:
            return SURFACE_GLYPHS[grid.surface_at(c)]
        return PASSAGE

    def _render(self, grid: Grid, path: Sequence[Coordinate],
                start: Optional[Coordinate], end: Optional[Coordinate], *, labels: bool) -> str:
        on_path: Set[Coordinate] = {Coordinate(*c) for c in path}
        sep = " " if labels else ""
        lines: List[str] = []
        if labels:
            lines.append("   " + "".join(f"{col:2d} " for col in range(grid.width)).rstrip())
        for row in range(grid.height):
            cells: List[str] = []
            for col in range(grid.width):
                c = Coordinate(row, col)
                if c == start:
                    cells.append(START)
                elif c == end:
                    cells.append(END)
                elif c in on_path:
                    cells.append(PATH)
                else:
                    cells.append(self._glyph(grid, c))
            body = sep.join(cells)
            lines.append(f"{row:2d} {body}" if labels else body)
        return "\n".join(lines) + "\n"


class ConsoleGame:
    """Prompt for size, generator, endpoints and solver; print the maze and the route."""

    INVALID_INPUT_MSG = "Invalid input. Enter a number: "
    CHOICE_PROMPT = "Choose a value from {lo} to {hi}: "

    def __init__(self, stdin: IO[str], stdout: IO[str],
                 renderer: Optional[ConsoleRenderer] = None,
                 rng: Optional[RandomSource] = None,
                 cycle_probability: Optional[float] = None):
        self.out = stdout
        self.renderer = renderer or ConsoleRenderer()
        self.rng = rng
        self.cycle_probability = cycle_probability
        self._tokens = self._split(stdin)

    @staticmethod
    def _split(stream: IO[str]) -> Iterator[str]:
        for line in stream:
            yield from line.split()

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def _prompt(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def _next(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise EOFError("input ended before the game finished") from None

    # -------------------- readers --------------------

    def read_positive_int(self) -> int:
        while True:
            token = self._next()
            try:
                value = int(token)
            except ValueError:
                self._prompt(self.INVALID_INPUT_MSG)
                continue
            if value > 0:
                return value
            self._prompt("Enter a positive number: ")

    def read_choice(self, lo: int, hi: int) -> int:
        while True:
            token = self._next()
            try:
                value = int(token)
            except ValueError:
                self._prompt(self.INVALID_INPUT_MSG)
                continue
            if lo <= value <= hi:
                return value
            self._prompt(self.CHOICE_PROMPT.format(lo=lo, hi=hi))

    def read_coordinate(self, grid: Grid) -> Coordinate:
        while True:
            self._prompt(f"Row (1 - {grid.height - 2}): ")
            row = self.read_choice(1, grid.height - 2)
            self._prompt(f"Column (1 - {grid.width - 2}): ")
            col = self.read_choice(1, grid.width - 2)
            c = Coordinate(row, col)
            if grid.is_passage(c):
                return c
            self._print("That cell is a wall. Try again.")

    # -------------------- flow --------------------

    def start(self) -> List[Coordinate]:
        self._print("Maze Generator and Solver")

        self._prompt("Maze height (odd, e.g. 21): ")
        height = self.read_positive_int()
        self._prompt("Maze width (odd, e.g. 21): ")
        width = self.read_positive_int()

        self._print("1 - Prim's algorithm")
        self._print("2 - Recursive backtracker")
        gen_choice = self.read_choice(1, 2)
        kind = GeneratorKind.PRIM if gen_choice == 1 else GeneratorKind.BACKTRACKER
        grid = make_generator(kind, self.rng, self.cycle_probability).generate(height, width)
        if grid.height < 3 or grid.width < 3:
            self._print("The maze has no interior; nothing to solve.")
            return []

        self._print("Generated maze:")
        self._print(self.renderer.render_with_labels(grid))

        self._print("Start point A:")
        start = self.read_coordinate(grid)
        self._print("End point B:")
        end = self.read_coordinate(grid)

        self._print("Maze with points A and B:")
        self._print(self.renderer.render_with_points(grid, start, end))

        self._print("Choose a solver:")
        self._print("1 - BFS (breadth-first search)")
        self._print("2 - A* (weighted)")
        sol_choice = self.read_choice(1, 2)
        solver = make_solver(SolverKind.BFS if sol_choice == 1 else SolverKind.ASTAR)
        path = solver.solve(grid, start, end)

        if not path:
            self._print("No path found.")
        else:
            self._print("Path found:")
            self._print(self.renderer.render_with_path_and_points(grid, path, start, end))
        return path
