import pytest

from mazelab.core.rng import RandomSource
from mazelab.core.types import (
    Cell,
    CellKind,
    Coordinate,
    Grid,
    InvalidDimensionError,
    Surface,
    surface_cost,
)


def test_surface_costs():
    assert surface_cost(Surface.NORMAL) == 1.0
    assert surface_cost(Surface.SWAMP) == 5.0
    assert surface_cost(Surface.SAND) == 3.0
    assert surface_cost(Surface.COIN) == -1.0
    assert surface_cost(Surface.ROAD) == 0.5


@pytest.mark.parametrize("requested, expected", [((4, 6), (5, 7)), ((5, 7), (5, 7)), ((1, 2), (1, 3))])
def test_new_grid_rounds_to_odd(requested, expected):
    grid = Grid.new(*requested)
    assert (grid.height, grid.width) == expected
    assert len(grid.kinds) == expected[0] * expected[1]
    assert all(k is CellKind.WALL for k in grid.kinds)
    assert all(s is Surface.NORMAL for s in grid.surfaces)


@pytest.mark.parametrize("height, width", [(0, 5), (5, 0), (-3, 5)])
def test_new_grid_rejects_non_positive(height, width):
    with pytest.raises(InvalidDimensionError):
        Grid.new(height, width)


def test_in_bounds_excludes_border():
    grid = Grid.new(5, 7)
    assert grid.in_bounds(1, 1)
    assert grid.in_bounds(3, 5)
    assert not grid.in_bounds(0, 3)
    assert not grid.in_bounds(4, 3)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(2, 6)


def test_accessors_bounds_checked(known_grid):
    with pytest.raises(IndexError):
        known_grid.cell(5, 0)
    with pytest.raises(IndexError):
        known_grid.kind_at(Coordinate(-1, 2))
    assert not known_grid.is_passage(Coordinate(-1, 2))
    assert not known_grid.is_passage(Coordinate(9, 9))


def test_cell_view(known_grid):
    assert known_grid.cell(1, 2) == Cell(1, 2, CellKind.PASSAGE, Surface.NORMAL)
    assert known_grid.cell(1, 2).is_passage
    assert not known_grid.cell(0, 0).is_passage


def test_cost_of_wall_raises(known_grid):
    assert known_grid.cost_of(Coordinate(1, 1)) == 1.0
    with pytest.raises(ValueError):
        known_grid.cost_of(Coordinate(0, 0))


def test_passage_neighbors_order():
    grid = Grid.from_text([
        "#####",
        "##.##",
        "#...#",
        "##.##",
        "#####",
    ])
    assert grid.passage_neighbors(Coordinate(2, 2)) == [(1, 2), (3, 2), (2, 1), (2, 3)]


def test_from_text_surfaces_and_errors():
    grid = Grid.from_text(["#####", "#wscr", "#####"])
    assert [grid.surface_at(Coordinate(1, c)) for c in range(1, 5)] == [
        Surface.SWAMP, Surface.SAND, Surface.COIN, Surface.ROAD,
    ]
    with pytest.raises(ValueError):
        Grid.from_text(["###", "#x#", "###"])
    with pytest.raises(ValueError):
        Grid.from_text(["###", "##", "###"])


def test_carve_sets_kind_and_surface():
    grid = Grid.new(5, 5)
    grid.carve(Coordinate(1, 1), Surface.SAND)
    assert grid.is_passage(Coordinate(1, 1))
    assert grid.surface_at(Coordinate(1, 1)) is Surface.SAND
    assert grid.kind_at(Coordinate(1, 3)) is CellKind.WALL


def test_open_cycles_opens_link_between_two_chambers():
    grid = Grid.from_text([
        "#####",
        "#...#",
        "#.#.#",
        "#.#.#",
        "#####",
    ])
    opened = grid.open_cycles(1.0, RandomSource(0))
    assert opened == 1
    assert grid.is_passage(Coordinate(3, 2))
    # both-even cells are never opened
    assert not grid.is_passage(Coordinate(2, 2))


def test_open_cycles_skips_link_with_wall_chamber():
    grid = Grid.from_text([
        "#####",
        "#...#",
        "#.#.#",
        "#.###",
        "#####",
    ])
    assert grid.open_cycles(1.0, RandomSource(0)) == 0
    assert not grid.is_passage(Coordinate(3, 2))


def test_open_cycles_zero_probability():
    grid = Grid.from_text([
        "#####",
        "#...#",
        "#.#.#",
        "#.#.#",
        "#####",
    ])
    assert grid.open_cycles(0.0, RandomSource(0)) == 0


def test_random_source_is_reproducible():
    a, b = RandomSource(42), RandomSource(42)
    assert [a.randrange(100) for _ in range(20)] == [b.randrange(100) for _ in range(20)]
    assert [a.surface() for _ in range(50)] == [b.surface() for _ in range(50)]


def test_random_source_helpers():
    rng = RandomSource(7)
    assert not rng.chance(0.0)
    assert rng.chance(1.0)
    assert rng.choice(["only"]) == "only"
    seen = {rng.surface() for _ in range(2000)}
    assert seen == set(Surface)
