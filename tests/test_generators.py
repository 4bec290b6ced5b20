import pytest

from mazelab.core.api import GeneratorKind, generate
from mazelab.core.backtracker_generator import BacktrackerGenerator
from mazelab.core.prim_generator import PrimGenerator
from mazelab.core.rng import RandomSource
from mazelab.core.types import CellKind, Coordinate, Grid, Surface

from conftest import passage_graph_stats

GENERATORS = [PrimGenerator, BacktrackerGenerator]
SIZES = [(3, 3), (11, 11), (15, 9), (21, 31)]


def _border(grid: Grid):
    for col in range(grid.width):
        yield Coordinate(0, col)
        yield Coordinate(grid.height - 1, col)
    for row in range(grid.height):
        yield Coordinate(row, 0)
        yield Coordinate(row, grid.width - 1)


@pytest.mark.parametrize("gen_cls", GENERATORS)
@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("cycles", [0.0, 0.5, 1.0])
def test_border_stays_wall(gen_cls, size, cycles):
    grid = gen_cls(rng=RandomSource(5), cycle_probability=cycles).generate(*size)
    assert all(grid.kind_at(c) is CellKind.WALL for c in _border(grid))


@pytest.mark.parametrize("gen_cls", GENERATORS)
@pytest.mark.parametrize("size", SIZES)
def test_start_chamber_is_passage(gen_cls, size):
    grid = gen_cls(rng=RandomSource(11)).generate(*size)
    assert grid.is_passage(Coordinate(1, 1))


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_every_chamber_carved_and_even_cells_solid(gen_cls):
    grid = gen_cls(rng=RandomSource(3), cycle_probability=1.0).generate(21, 25)
    assert all(grid.is_passage(c) for c in grid.chambers())
    for row in range(0, grid.height, 2):
        for col in range(0, grid.width, 2):
            assert not grid.is_passage(Coordinate(row, col))


@pytest.mark.parametrize("gen_cls", GENERATORS)
@pytest.mark.parametrize("seed", [0, 1, 2, 99])
def test_without_cycles_maze_is_perfect(gen_cls, seed):
    grid = gen_cls(rng=RandomSource(seed), cycle_probability=0.0).generate(21, 17)
    vertices, edges, reachable = passage_graph_stats(grid)
    assert reachable == vertices
    # a connected graph with V - 1 edges is a tree: one simple path per pair
    assert edges == vertices - 1


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_cycle_injection_braids_the_maze(gen_cls):
    grid = gen_cls(rng=RandomSource(8), cycle_probability=1.0).generate(11, 11)
    vertices, edges, reachable = passage_graph_stats(grid)
    assert reachable == vertices
    assert edges > vertices - 1


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_same_seed_same_maze(gen_cls):
    a = gen_cls(rng=RandomSource(21)).generate(19, 23)
    b = gen_cls(rng=RandomSource(21)).generate(19, 23)
    assert a.kinds == b.kinds
    assert a.surfaces == b.surfaces


def test_generators_differ_in_shape():
    prim = PrimGenerator(rng=RandomSource(4), cycle_probability=0.0).generate(31, 31)
    back = BacktrackerGenerator(rng=RandomSource(4), cycle_probability=0.0).generate(31, 31)
    assert prim.kinds != back.kinds


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_walls_keep_a_valid_surface(gen_cls):
    grid = gen_cls(rng=RandomSource(6)).generate(15, 15)
    assert all(isinstance(s, Surface) for s in grid.surfaces)
    for kind, surface in zip(grid.kinds, grid.surfaces):
        if kind is CellKind.WALL:
            assert surface is Surface.NORMAL


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_one_wide_grid_stays_solid(gen_cls):
    grid = gen_cls(rng=RandomSource(1)).generate(1, 1)
    assert (grid.height, grid.width) == (1, 1)
    assert grid.kinds == [CellKind.WALL]


@pytest.mark.parametrize("gen_cls", GENERATORS)
def test_two_rounds_up_to_single_chamber(gen_cls):
    grid = gen_cls(rng=RandomSource(1)).generate(2, 2)
    assert (grid.height, grid.width) == (3, 3)
    assert list(grid.passages()) == [Coordinate(1, 1)]


def test_carve_works_on_existing_grid():
    grid = Grid.new(9, 9)
    assert PrimGenerator(rng=RandomSource(2)).carve(grid) is grid
    assert all(grid.is_passage(c) for c in grid.chambers())


def test_backtracker_twelve_rounds_to_thirteen():
    grid = generate(12, 12, GeneratorKind.BACKTRACKER, rng=RandomSource(12))
    assert (grid.height, grid.width) == (13, 13)


@pytest.mark.slow
def test_prim_large_maze_rounds_to_odd():
    grid = generate(1000, 1000, GeneratorKind.PRIM, rng=RandomSource(1000))
    assert (grid.height, grid.width) == (1001, 1001)
    assert grid.is_passage(Coordinate(1, 1))
    assert grid.is_passage(Coordinate(999, 999))
