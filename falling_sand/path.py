from typing import Iterator, Tuple

Point = Tuple[int, int]


def _toward(value: int, target: int) -> int:
    if target > value:
        return value + 1
    if target < value:
        return value - 1
    return value


def walk_path(start: Point, end: Point) -> Iterator[Point]:
    """Yield each cell stepped onto walking from ``start`` to ``end``.

    Both axes move one unit toward the target every step, so the walk runs
    diagonally until one axis lines up and straight after that. ``start``
    itself is not yielded; the last item is always ``end``.
    """
    x, y = start
    tx, ty = end
    while (x, y) != (tx, ty):
        x = _toward(x, tx)
        y = _toward(y, ty)
        yield x, y


def chebyshev(a: Point, b: Point) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
