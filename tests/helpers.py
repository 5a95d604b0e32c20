from dataclasses import replace

from falling_sand.materials import Variant


def place(grid, x, y, variant=Variant.SAND):
    grid.set(x, y, replace(grid.get(x, y), variant=variant, active=True))


def cells(grid):
    return {(x, y): v for x, y, v in grid.active_cells()}
