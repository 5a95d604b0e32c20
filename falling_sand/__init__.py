"""Falling-sand cellular automaton: grid, per-frame step and brush painting."""

from falling_sand.brush import Brush, PointerState, paint_area, paint_line
from falling_sand.grid import Grid, OutOfBounds, Particle
from falling_sand.materials import RULES, Variant
from falling_sand.path import walk_path
from falling_sand.simulation import step

__all__ = [
    "Brush",
    "Grid",
    "OutOfBounds",
    "Particle",
    "PointerState",
    "RULES",
    "Variant",
    "paint_area",
    "paint_line",
    "step",
    "walk_path",
]

__version__ = "0.1.0"
