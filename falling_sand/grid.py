from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from falling_sand.logging_config import get_logger
from falling_sand.materials import Variant

log = get_logger(__name__)


class OutOfBounds(IndexError):
    """Raised when a caller reads or writes a cell outside the grid."""


@dataclass(frozen=True)
class Particle:
    id: int
    variant: Variant
    active: bool


class Grid:
    """Dense particle grid stored as three [H, W] arrays (y, x).

    Every slot always holds a record. Empty space is ``active == False``.
    Ids travel with the material when two slots are swapped.
    """

    def __init__(self, width: int = 0, height: int = 0):
        self._ids = np.zeros((0, 0), dtype=np.int64)
        self._variants = np.zeros((0, 0), dtype=np.uint8)
        self._active = np.zeros((0, 0), dtype=bool)
        self._last_id = 0
        self.ensure_size(width, height)

    @property
    def width(self) -> int:
        return self._ids.shape[1]

    @property
    def height(self) -> int:
        return self._ids.shape[0]

    @property
    def variants(self) -> np.ndarray:
        view = self._variants.view()
        view.flags.writeable = False
        return view

    @property
    def active(self) -> np.ndarray:
        view = self._active.view()
        view.flags.writeable = False
        return view

    # ---------- Storage ----------
    def ensure_size(self, width: int, height: int) -> None:
        """Grow so that [0, width) x [0, height) is addressable. Never shrinks."""
        old_h, old_w = self._ids.shape
        new_w, new_h = max(old_w, width), max(old_h, height)
        if (new_h, new_w) == (old_h, old_w):
            return

        ids = np.zeros((new_h, new_w), dtype=np.int64)
        variants = np.full((new_h, new_w), Variant.SAND, dtype=np.uint8)
        active = np.zeros((new_h, new_w), dtype=bool)
        ids[:old_h, :old_w] = self._ids
        variants[:old_h, :old_w] = self._variants
        active[:old_h, :old_w] = self._active

        fresh = np.ones((new_h, new_w), dtype=bool)
        fresh[:old_h, :old_w] = False
        n = int(fresh.sum())
        ids[fresh] = np.arange(self._last_id + 1, self._last_id + 1 + n, dtype=np.int64)
        self._last_id += n

        self._ids, self._variants, self._active = ids, variants, active
        log.debug("Grid grown from %dx%d to %dx%d (%d new slots)",
                  old_w, old_h, new_w, new_h, n)

    def clear(self) -> None:
        """Deactivate every slot. Ids are kept."""
        self._active[:, :] = False

    # ---------- Access ----------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(f"({x}, {y}) outside {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> Particle:
        self._check(x, y)
        return Particle(int(self._ids[y, x]), Variant(int(self._variants[y, x])),
                        bool(self._active[y, x]))

    def set(self, x: int, y: int, particle: Particle) -> None:
        self._check(x, y)
        self._ids[y, x] = particle.id
        self._variants[y, x] = particle.variant
        self._active[y, x] = particle.active

    def swap(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Exchange the whole records (id, variant, active) of two slots."""
        a, b = self.get(x0, y0), self.get(x1, y1)
        self.set(x0, y0, b)
        self.set(x1, y1, a)

    # ---------- Queries ----------
    def count(self, variant: Optional[Variant] = None) -> int:
        if variant is None:
            return int(self._active.sum())
        return int((self._active & (self._variants == variant)).sum())

    def active_cells(self) -> Iterator[Tuple[int, int, Variant]]:
        """Yield (x, y, variant) for each active slot, x-major then y."""
        for x, y in np.argwhere(self._active.T).tolist():
            yield x, y, Variant(int(self._variants[y, x]))
