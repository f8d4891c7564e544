"""Utility functions for the light-up puzzle engine."""

from typing import Dict, Tuple

# Module-level cache: (width, height) -> ((x, y), ...) in row-major order
_INTERIOR_CELLS_CACHE: Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]] = {}

# Unit step for each single direction bit: bit value -> (dx, dy)
_STEP_OFFSETS: Dict[int, Tuple[int, int]] = {
    1: (0, -1),  # up
    2: (0, +1),  # down
    4: (-1, 0),  # left
    8: (+1, 0),  # right
}


def get_interior_cells(width: int, height: int) -> Tuple[Tuple[int, int], ...]:
    """
    Precompute and cache the playable coordinates of a bordered grid.

    Args:
        width: Grid width (number of columns). Must be positive.
        height: Grid height (number of rows). Must be positive.

    Returns:
        Every (x, y) with x in [1, width] and y in [1, height], in row-major
        order (y outer, x inner).

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    key = (width, height)
    cached = _INTERIOR_CELLS_CACHE.get(key)
    if cached is not None:
        return cached

    cells = tuple(
        (x, y) for y in range(1, height + 1) for x in range(1, width + 1)
    )
    _INTERIOR_CELLS_CACHE[key] = cells
    return cells


def get_step_offsets(direction: int) -> Tuple[int, int]:
    """
    Return the (dx, dy) unit step for a single direction bit.

    Raises:
        ValueError: If `direction` is not exactly one of the four direction bits.
    """
    try:
        return _STEP_OFFSETS[int(direction)]
    except KeyError:
        raise ValueError(f"Not a single direction: {direction!r}") from None
