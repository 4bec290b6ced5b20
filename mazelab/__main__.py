# mazelab/__main__.py
#!/usr/bin/env python3
"""
Maze Lab command line.

Usage examples:
  python -m mazelab                                  # interactive console game
  python -m mazelab --height 21 --width 31 --solver astar --seed 7
  python -m mazelab --height 15 --width 15 --start 1,1 --end 13,13 --surfaces
  python -m mazelab --viewer --generator backtracker
"""

import argparse
import logging
import sys
from typing import List, Optional

from mazelab import config
from mazelab.app.console import ConsoleGame, ConsoleRenderer
from mazelab.core.api import GeneratorKind, SolverKind, make_generator, make_solver
from mazelab.core.paths import default_endpoints
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, InvalidDimensionError

log = logging.getLogger("mazelab")


def _setup_logging(level: str) -> None:
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
        log.addHandler(handler)
    log.propagate = False


def _coordinate(text: str) -> Coordinate:
    try:
        row, col = (int(p) for p in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}") from None
    return Coordinate(row, col)


def _probability(text: str) -> float:
    p = float(text)
    if not 0.0 <= p <= 1.0:
        raise argparse.ArgumentTypeError(f"probability must be within [0, 1], got {p}")
    return p


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mazelab", description="Generate a grid maze and find a route through it.")
    ap.add_argument("--height", type=int, help="Maze height (even values are rounded up). Enables batch mode with --width.")
    ap.add_argument("--width", type=int, help="Maze width (even values are rounded up).")
    ap.add_argument("--generator", choices=[k.value for k in GeneratorKind], default=GeneratorKind.PRIM.value)
    ap.add_argument("--solver", choices=[k.value for k in SolverKind], default=SolverKind.BFS.value)
    ap.add_argument("--start", type=_coordinate, help="Start ROW,COL (default 1,1)")
    ap.add_argument("--end", type=_coordinate, help="End ROW,COL (default height-2,width-2)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze (env: MAZELAB_SEED)")
    ap.add_argument("--cycles", type=_probability, default=None,
                    help=f"Cycle injection probability (default {config.CYCLE_PROBABILITY}, env: MAZELAB_CYCLE_PROBABILITY)")
    ap.add_argument("--surfaces", action="store_true", help="Show surface glyphs in console output")
    ap.add_argument("--viewer", action="store_true", help="Open the pygame viewer instead of the console")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    return ap


def _batch(args, rng: RandomSource, cycles: float) -> int:
    grid = make_generator(args.generator, rng, cycles).generate(args.height, args.width)
    renderer = ConsoleRenderer(show_surfaces=args.surfaces)
    corners = default_endpoints(grid)
    if corners is None:
        print(renderer.render(grid))
        print("No path found.")
        return 0
    start = args.start or corners[0]
    end = args.end or corners[1]
    path = make_solver(args.solver).solve(grid, start, end)
    if not path:
        print(renderer.render_with_points(grid, start, end))
        print("No path found.")
        return 0
    print(renderer.render_with_path_and_points(grid, path, start, end))
    print(f"Path length: {len(path)}")
    return 0


def _check_size(height: int, width: int) -> None:
    if height <= 0 or width <= 0:
        raise InvalidDimensionError(f"grid size must be positive, got {height}x{width}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if (args.height is None) != (args.width is None):
        ap.error("--height and --width must be given together")

    try:
        if args.verbose >= 2:
            _setup_logging("DEBUG")
        elif args.verbose == 1:
            _setup_logging("INFO")
        else:
            _setup_logging(config.resolve_log_level())

        seed = args.seed if args.seed is not None else config.resolve_seed()
        cycles = args.cycles if args.cycles is not None else config.resolve_cycle_probability()
        rng = RandomSource(seed)
        log.debug("seed=%s cycles=%.2f generator=%s solver=%s", seed, cycles, args.generator, args.solver)

        if args.viewer:
            height = args.height if args.height is not None else config.DEFAULT_HEIGHT
            width = args.width if args.width is not None else config.DEFAULT_WIDTH
            _check_size(height, width)
            from mazelab.app.viewer import Viewer
            Viewer(height=height, width=width, generator=args.generator, solver=args.solver,
                   rng=rng, cycle_probability=cycles).run()
            return 0

        if args.height is not None:
            return _batch(args, rng, cycles)
        ConsoleGame(sys.stdin, sys.stdout, ConsoleRenderer(show_surfaces=args.surfaces), rng, cycles).start()
        return 0
    except (InvalidDimensionError, config.ConfigError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 2
    except (EOFError, KeyboardInterrupt):
        print("\naborted", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
