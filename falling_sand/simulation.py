import random

import numpy as np

from falling_sand.config import DRIFT_CHANCE, LATERAL_RANGE
from falling_sand.grid import Grid
from falling_sand.logging_config import get_logger
from falling_sand.materials import is_liquid, is_physical, movement_chance

log = get_logger(__name__)


def _roll(rng, percent: int) -> bool:
    return rng.randrange(100) < percent


def _lateral_target(grid: Grid, x: int, y: int, variant, rng):
    """Pick the cell a grounded particle tries to move into, or None."""
    dx = 0
    if _roll(rng, movement_chance(variant)):
        dx = rng.randint(-LATERAL_RANGE, LATERAL_RANGE)

    ny = y
    if y + 1 < grid.height and _roll(rng, DRIFT_CHANCE):
        ny = y + 1

    nx = x + dx
    if nx == x and ny == y:
        # no sideways move: the only option left is sinking straight down
        ny = y + 1
    if not grid.in_bounds(nx, ny):
        return None
    return nx, ny


def step(grid: Grid, rng=random) -> int:
    """Advance the grid by one frame in place. Returns the number of moves.

    Cells are scanned x-major, y ascending. A particle moved into a cell that
    is visited later in the same pass is skipped there because its id is
    already in ``processed``.
    """
    processed = set()
    moves = 0

    # Only the sinking swap activates a slot holding an unprocessed id, and
    # that slot is the one being visited, so a start-of-frame snapshot of
    # active cells covers everything a full scan would touch.
    for x, y in np.argwhere(grid.active.T).tolist():
        p = grid.get(x, y)
        if not p.active or p.id in processed:
            continue
        processed.add(p.id)
        if not is_physical(p.variant):
            continue

        # gravity
        if y + 1 < grid.height and not grid.get(x, y + 1).active:
            grid.swap(x, y, x, y + 1)
            moves += 1
            continue

        target = _lateral_target(grid, x, y, p.variant, rng)
        if target is None:
            continue
        nx, ny = target
        dest = grid.get(nx, ny)
        if not dest.active:
            grid.swap(x, y, nx, ny)
            moves += 1
        elif is_liquid(dest.variant) and not is_liquid(p.variant):
            # the liquid's record lands in the vacated slot
            grid.swap(x, y, nx, ny)
            moves += 1

    log.debug("Step: %d particles inspected, %d moved", len(processed), moves)
    return moves
