from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from falling_sand.config import BRUSH_MIN
from falling_sand.grid import Grid
from falling_sand.materials import Variant
from falling_sand.path import chebyshev, walk_path

Point = Tuple[int, int]


def _fill(grid: Grid, x: int, y: int, variant: Variant) -> bool:
    # paint only lands on empty, in-bounds cells
    if not grid.in_bounds(x, y):
        return False
    p = grid.get(x, y)
    if p.active:
        return False
    grid.set(x, y, replace(p, variant=variant, active=True))
    return True


def paint_area(grid: Grid, center: Point, radius: int, variant: Variant) -> int:
    """Fill x in [cx - r, cx + r), y in [cy, cy + r). Returns cells painted.

    The window only extends downward from the cursor row.
    """
    cx, cy = center
    painted = 0
    for y in range(cy, cy + radius):
        for x in range(cx - radius, cx + radius):
            painted += _fill(grid, x, y, variant)
    return painted


def paint_line(grid: Grid, previous: Point, current: Point, variant: Variant) -> int:
    """Fill ``previous`` and every cell on the walk to ``current``."""
    painted = int(_fill(grid, previous[0], previous[1], variant))
    for x, y in walk_path(previous, current):
        painted += _fill(grid, x, y, variant)
    return painted


@dataclass(frozen=True)
class PointerState:
    position: Point
    button_held: bool
    button_just_released: bool = False


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class Brush:
    """One drag session for one mouse button.

    The first held frame only records the anchor; line smoothing kicks in
    from the second held frame so a stale anchor never draws a long stroke.
    """

    def __init__(self, variant: Variant, radius: int = BRUSH_MIN):
        self.variant = variant
        self.radius = max(BRUSH_MIN, radius)
        self.state = DragState.IDLE
        self.armed = False
        self.last = (0, 0)

    def adjust_radius(self, delta: int) -> int:
        self.radius = max(BRUSH_MIN, self.radius + delta)
        return self.radius

    def reset(self) -> None:
        self.state = DragState.IDLE
        self.armed = False

    def update(self, grid: Grid, pointer: PointerState) -> int:
        if pointer.button_just_released or not pointer.button_held:
            self.reset()
            return 0

        pos = pointer.position
        painted = paint_area(grid, pos, self.radius, self.variant)

        if self.state is DragState.IDLE:
            self.state = DragState.DRAGGING
            self.armed = False
        elif not self.armed:
            self.armed = True

        if self.armed and chebyshev(self.last, pos) > 1:
            painted += paint_line(grid, self.last, pos, self.variant)
        self.last = pos
        return painted
