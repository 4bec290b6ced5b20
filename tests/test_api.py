import pytest

import mazelab
from mazelab import config
from mazelab.core.api import GeneratorKind, SolverKind, generate, make_generator, make_solver, solve
from mazelab.core.astar_solver import AStarSolver
from mazelab.core.backtracker_generator import BacktrackerGenerator
from mazelab.core.bfs_solver import BFSSolver
from mazelab.core.prim_generator import PrimGenerator
from mazelab.core.rng import RandomSource
from mazelab.core.types import Coordinate, InvalidDimensionError


def test_factories_dispatch_on_kind_and_name():
    assert isinstance(make_generator(GeneratorKind.PRIM, RandomSource(0), 0.0), PrimGenerator)
    assert isinstance(make_generator("backtracker", RandomSource(0), 0.0), BacktrackerGenerator)
    assert isinstance(make_solver(SolverKind.BFS), BFSSolver)
    assert isinstance(make_solver("astar"), AStarSolver)


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError, match="unknown strategy"):
        make_generator("kruskal")
    with pytest.raises(ValueError, match="unknown strategy"):
        make_solver("dfs")


def test_generate_rejects_non_positive_size():
    with pytest.raises(InvalidDimensionError):
        generate(0, 10)


def test_generate_then_solve(rng):
    grid = generate(15, 21, GeneratorKind.BACKTRACKER, rng=rng)
    for strategy in SolverKind:
        path = solve(grid, Coordinate(1, 1), Coordinate(13, 19), strategy)
        assert path[0] == (1, 1)
        assert path[-1] == (13, 19)


def test_seed_from_environment(monkeypatch):
    monkeypatch.setenv("MAZELAB_SEED", "77")
    a = generate(17, 17)
    b = generate(17, 17)
    assert a.kinds == b.kinds


def test_cycle_probability_from_environment(monkeypatch):
    monkeypatch.setenv("MAZELAB_CYCLE_PROBABILITY", "0")
    assert make_generator(GeneratorKind.PRIM).cycle_probability == 0.0
    monkeypatch.setenv("MAZELAB_CYCLE_PROBABILITY", "1.5")
    with pytest.raises(ValueError):
        make_generator(GeneratorKind.PRIM)


def test_explicit_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("MAZELAB_CYCLE_PROBABILITY", "0.9")
    gen = make_generator(GeneratorKind.PRIM, RandomSource(1), 0.25)
    assert gen.cycle_probability == 0.25
    assert gen.rng.seed == 1


@pytest.mark.parametrize("name, value", [
    ("MAZELAB_SEED", "abc"),
    ("MAZELAB_CYCLE_PROBABILITY", "oops"),
    ("MAZELAB_CYCLE_PROBABILITY", "-0.1"),
    ("MAZELAB_LOG_LEVEL", "loud"),
])
def test_bad_environment_values_raise_config_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    resolvers = [config.resolve_seed, config.resolve_cycle_probability, config.resolve_log_level]
    with pytest.raises(config.ConfigError, match=name):
        for resolve in resolvers:
            resolve()


def test_empty_environment_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("MAZELAB_SEED", "")
    monkeypatch.setenv("MAZELAB_CYCLE_PROBABILITY", "")
    monkeypatch.delenv("MAZELAB_LOG_LEVEL", raising=False)
    assert config.resolve_seed() is None
    assert config.resolve_cycle_probability() == config.CYCLE_PROBABILITY
    assert config.resolve_log_level() == "WARNING"


def test_package_exports():
    grid = mazelab.generate(9, 9, "prim", rng=mazelab.RandomSource(2))
    assert mazelab.solve(grid, mazelab.Coordinate(1, 1), mazelab.Coordinate(7, 7), "astar")
