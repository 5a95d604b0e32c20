"""Tests for the per-frame simulation step."""

import random

from falling_sand.grid import Grid, Particle
from falling_sand.materials import Variant
from falling_sand.simulation import step
from tests.conftest import ScriptedRandom
from tests.helpers import cells, place


def water_column(height=5):
    """3-wide grid: brick walls at x=0 and x=2, water filling x=1 below row 0."""
    grid = Grid(3, height)
    for y in range(height):
        place(grid, 0, y, Variant.BRICK)
        place(grid, 2, y, Variant.BRICK)
    for y in range(1, height):
        place(grid, 1, y, Variant.WATER)
    return grid


class TestGravity:
    """Tests for straight falls."""

    def test_sand_falls_to_floor_and_stays(self, still_rng):
        """A grain at (5, 0) drops one row per frame until y == height - 1."""
        grid = Grid(10, 6)
        place(grid, 5, 0)
        for y in range(1, 6):
            assert step(grid, still_rng) == 1
            assert cells(grid) == {(5, y): Variant.SAND}
        for _ in range(3):
            assert step(grid, still_rng) == 0
            assert cells(grid) == {(5, 5): Variant.SAND}

    def test_gravity_beats_lateral_rolls(self):
        """With every roll succeeding the grain still falls straight down."""
        grid = Grid(10, 6)
        place(grid, 5, 0)
        rng = ScriptedRandom(roll=0, offset=2)
        step(grid, rng)
        assert cells(grid) == {(5, 1): Variant.SAND}
        assert rng.calls == 0

    def test_id_travels_with_grain(self, still_rng):
        grid = Grid(4, 4)
        place(grid, 1, 0)
        pid = grid.get(1, 0).id
        step(grid, still_rng)
        assert grid.get(1, 1).id == pid
        assert grid.get(1, 0).id != pid

    def test_brick_never_moves(self):
        grid = Grid(5, 5)
        place(grid, 2, 0, Variant.BRICK)
        assert step(grid, ScriptedRandom(roll=0, offset=1)) == 0
        assert cells(grid) == {(2, 0): Variant.BRICK}

    def test_stacked_column_keeps_count(self, still_rng):
        grid = Grid(1, 6)
        for y in range(3):
            place(grid, 0, y, Variant.DIRT)
        step(grid, still_rng)
        assert grid.count(Variant.DIRT) == 3
        assert set(cells(grid)) == {(0, 0), (0, 1), (0, 3)}


class TestSingleUpdate:
    """Each logical particle is handled at most once per frame."""

    def test_one_row_per_frame(self, still_rng):
        """A grain moved into an unvisited cell is not moved again."""
        grid = Grid(3, 20)
        place(grid, 1, 0)
        step(grid, still_rng)
        assert cells(grid) == {(1, 1): Variant.SAND}

    def test_lateral_move_not_repeated(self):
        """A grain shifted into a later column is skipped there."""
        grid = Grid(10, 1)
        place(grid, 2, 0)
        rng = ScriptedRandom(roll=0, offset=2)
        assert step(grid, rng) == 1
        assert cells(grid) == {(4, 0): Variant.SAND}
        # one movement roll and one offset draw, nothing else
        assert rng.calls == 2


class TestLateral:
    """Tests for sideways drift and the diagonal drop."""

    def test_moves_into_empty_cell(self):
        grid = Grid(10, 6)
        place(grid, 5, 5, Variant.WATER)
        step(grid, ScriptedRandom(roll=0, offset=-1))
        assert cells(grid) == {(4, 5): Variant.WATER}

    def test_failed_roll_stays(self, still_rng):
        grid = Grid(10, 6)
        place(grid, 5, 5, Variant.WATER)
        assert step(grid, still_rng) == 0
        assert cells(grid) == {(5, 5): Variant.WATER}

    def test_zero_offset_is_noop(self):
        """A successful roll may still draw offset 0."""
        grid = Grid(10, 1)
        place(grid, 5, 0)
        assert step(grid, ScriptedRandom(roll=0, offset=0)) == 0
        assert cells(grid) == {(5, 0): Variant.SAND}

    def test_off_grid_target_is_ignored(self):
        grid = Grid(3, 1)
        place(grid, 0, 0)
        assert step(grid, ScriptedRandom(roll=0, offset=-2)) == 0
        assert cells(grid) == {(0, 0): Variant.SAND}

    def test_diagonal_drift(self):
        """The drift roll lowers the lateral target by one row."""
        grid = Grid(10, 6)
        place(grid, 2, 4, Variant.BRICK)
        place(grid, 2, 3)
        step(grid, ScriptedRandom(roll=0, offset=1))
        assert cells(grid) == {(2, 4): Variant.BRICK, (3, 4): Variant.SAND}

    def test_solid_blocks_solid(self):
        grid = Grid(10, 1)
        place(grid, 2, 0, Variant.SAND)
        place(grid, 4, 0, Variant.DIRT)
        sand_id = grid.get(2, 0).id
        step(grid, ScriptedRandom(roll=0, offset=2))
        assert grid.get(2, 0).id == sand_id
        assert grid.get(2, 0).variant == Variant.SAND

    def test_water_does_not_displace_water(self):
        grid = Grid(10, 1)
        place(grid, 2, 0, Variant.WATER)
        place(grid, 4, 0, Variant.WATER)
        first = grid.get(2, 0).id
        step(grid, ScriptedRandom(roll=0, offset=2))
        assert grid.get(2, 0).id == first
        assert grid.count(Variant.WATER) == 2


class TestSinking:
    """Solids sink through water and leave water behind."""

    def test_sand_sinks_through_column(self, still_rng):
        grid = water_column(height=5)
        place(grid, 1, 0)
        sand_id = grid.get(1, 0).id
        for y in range(1, 5):
            step(grid, still_rng)
            assert grid.get(1, y).id == sand_id
            assert grid.get(1, y).variant == Variant.SAND
            assert all(grid.get(1, wy).variant == Variant.WATER
                       for wy in range(5) if wy != y)
        step(grid, still_rng)
        assert grid.get(1, 4).id == sand_id

    def test_water_is_conserved(self, still_rng):
        grid = water_column(height=6)
        place(grid, 1, 0, Variant.DIRT)
        water, total = grid.count(Variant.WATER), grid.count()
        for _ in range(8):
            step(grid, still_rng)
            assert grid.count(Variant.WATER) == water
            assert grid.count() == total

    def test_stops_on_obstruction(self, still_rng):
        grid = water_column(height=6)
        grid.set(1, 3, Particle(grid.get(1, 3).id, Variant.BRICK, True))
        place(grid, 1, 0)
        for _ in range(5):
            step(grid, still_rng)
        assert grid.get(1, 2).variant == Variant.SAND
        assert grid.get(1, 3).variant == Variant.BRICK

    def test_sideways_sink_keeps_target_row(self):
        """A lateral move into water swaps places with it."""
        grid = Grid(10, 6)
        place(grid, 2, 5)
        place(grid, 4, 5, Variant.WATER)
        step(grid, ScriptedRandom(roll=0, offset=2))
        assert cells(grid) == {(2, 5): Variant.WATER, (4, 5): Variant.SAND}


class TestRandomRun:
    """Seeded runs keep material counts."""

    def test_counts_conserved(self):
        rng = random.Random(1234)
        grid = Grid(30, 20)
        for x in range(30):
            place(grid, x, 19, Variant.BRICK)
        for x in range(5, 25):
            for y in range(0, 6):
                place(grid, x, y, rng.choice([Variant.SAND, Variant.DIRT, Variant.WATER]))
        before = {v: grid.count(v) for v in Variant}
        for _ in range(60):
            step(grid, rng)
        assert {v: grid.count(v) for v in Variant} == before
        assert all(grid.get(x, 19).variant == Variant.BRICK for x in range(30))
