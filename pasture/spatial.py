"""
Toroidal coordinate helpers.

Every coordinate an agent or grid sees passes through these functions,
so positions never leave [0, width) x [0, height).
"""

from typing import Tuple

import numpy as np


def wrap(value: int, size: int) -> int:
    """
    Wrap a coordinate onto a ring of given size.

    Idempotent for values already in [0, size): wrap(size) == 0,
    wrap(-1) == size - 1.

    Args:
        value: Coordinate, possibly outside the grid
        size: Ring length (grid width or height)

    Returns:
        Coordinate in [0, size)
    """
    assert isinstance(value, (int, np.integer)) and not isinstance(value, bool), \
        f"non-integer coordinate: {value!r}"
    return int(value % size)


def wrap_point(x: int, y: int, width: int, height: int) -> Tuple[int, int]:
    """Wrap both axes independently"""
    return wrap(x, width), wrap(y, height)


def wrapped_range(center: int, radius: int, size: int) -> np.ndarray:
    """
    Wrapped coordinates of the half-open window [center - radius, center + radius).

    Args:
        center: Window center on one axis
        radius: Half-width of the window
        size: Ring length

    Returns:
        (2 * radius,) int array, each entry in [0, size). Entries repeat
        when the window is wider than the ring.
    """
    return np.arange(center - radius, center + radius) % size


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height
