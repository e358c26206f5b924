"""Auto-tiling: pick a visual tile variant from a cell's 3x3 neighbourhood.

Rules are evaluated in a fixed order; later rules only see neighbourhoods
that earlier rules did not resolve, so the order decides diagonal
boundaries and must not be changed.
"""

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from ..types import TileKind


class AutoTileVariant(IntEnum):
    """Visual tile variants.

    HALF_WATER_* name the side that is water. THREE_QUARTER_WATER_* name
    the single corner that is land; THREE_QUARTER_LAND_* name the single
    corner that is water.
    """

    FULL_WATER = 0
    FULL_LAND = 1
    HALF_WATER_TOP = 2
    HALF_WATER_BOTTOM = 3
    HALF_WATER_LEFT = 4
    HALF_WATER_RIGHT = 5
    THREE_QUARTER_WATER_BOTTOM_LEFT = 6
    THREE_QUARTER_WATER_BOTTOM_RIGHT = 7
    THREE_QUARTER_WATER_TOP_LEFT = 8
    THREE_QUARTER_WATER_TOP_RIGHT = 9
    THREE_QUARTER_LAND_BOTTOM_LEFT = 10
    THREE_QUARTER_LAND_BOTTOM_RIGHT = 11
    THREE_QUARTER_LAND_TOP_LEFT = 12
    THREE_QUARTER_LAND_TOP_RIGHT = 13


_V = AutoTileVariant


def _is_land(grid: NDArray, x: int, y: int) -> bool:
    """Land-like test with out-of-bounds treated as water."""
    height, width = grid.shape
    if x < 0 or x >= width or y < 0 or y >= height:
        return False
    value = grid[y, x]
    if grid.dtype == np.bool_:
        return bool(value)
    return TileKind(int(value)).land_like


def _classify_all_cardinals(tl: bool, tr: bool, bl: bool, br: bool) -> AutoTileVariant | None:
    if tl and tr and bl and br:
        return _V.FULL_LAND
    if tl and tr and bl and not br:
        return _V.THREE_QUARTER_LAND_BOTTOM_RIGHT
    if tl and tr and not bl and br:
        return _V.THREE_QUARTER_LAND_BOTTOM_LEFT
    if tl and not tr and bl and br:
        return _V.THREE_QUARTER_LAND_TOP_RIGHT
    if not tl and tr and bl and br:
        return _V.THREE_QUARTER_LAND_TOP_LEFT

    water_corners = (not tl) + (not tr) + (not bl) + (not br)
    if water_corners == 2:
        if not tl and not bl:
            return _V.HALF_WATER_LEFT
        if not tr and not br:
            return _V.HALF_WATER_RIGHT
        if not tl and not tr:
            return _V.HALF_WATER_TOP
        if not bl and not br:
            return _V.HALF_WATER_BOTTOM
    elif water_corners == 3:
        if tl:
            return _V.THREE_QUARTER_WATER_BOTTOM_RIGHT
        if tr:
            return _V.THREE_QUARTER_WATER_BOTTOM_LEFT
        if bl:
            return _V.THREE_QUARTER_WATER_TOP_RIGHT
        if br:
            return _V.THREE_QUARTER_WATER_TOP_LEFT

    # Diagonal water pairs and fully-water corners fall through
    return None


def classify(grid: NDArray, x: int, y: int) -> AutoTileVariant:
    """Classify one cell of a room layout.

    Args:
        grid: TileKind grid or boolean land mask, shape (height, width).
        x: Cell column.
        y: Cell row (+y is up).

    Returns:
        The tile variant for the cell.
    """
    if not _is_land(grid, x, y):
        return _V.FULL_WATER

    top = _is_land(grid, x, y + 1)
    bottom = _is_land(grid, x, y - 1)
    left = _is_land(grid, x - 1, y)
    right = _is_land(grid, x + 1, y)
    top_left = _is_land(grid, x - 1, y + 1)
    top_right = _is_land(grid, x + 1, y + 1)
    bottom_left = _is_land(grid, x - 1, y - 1)
    bottom_right = _is_land(grid, x + 1, y - 1)

    # Lone spur
    if top + right + bottom + left == 1:
        return _V.FULL_WATER

    if top and right and bottom and left:
        variant = _classify_all_cardinals(top_left, top_right, bottom_left, bottom_right)
        if variant is not None:
            return variant

    # Three cardinals
    if top and right and bottom and not left:
        if not top_right:
            return _V.THREE_QUARTER_WATER_BOTTOM_RIGHT
        if not bottom_right:
            return _V.THREE_QUARTER_WATER_TOP_RIGHT
        return _V.HALF_WATER_LEFT
    if top and right and not bottom and left:
        if not top_left:
            return _V.THREE_QUARTER_WATER_TOP_RIGHT
        if not top_right:
            return _V.THREE_QUARTER_WATER_TOP_LEFT
        return _V.HALF_WATER_BOTTOM
    if top and not right and bottom and left:
        if not top_left:
            return _V.THREE_QUARTER_WATER_BOTTOM_LEFT
        if not bottom_left:
            return _V.THREE_QUARTER_WATER_TOP_LEFT
        return _V.HALF_WATER_RIGHT
    if not top and right and bottom and left:
        if not bottom_left:
            return _V.THREE_QUARTER_WATER_BOTTOM_RIGHT
        if not bottom_right:
            return _V.THREE_QUARTER_WATER_BOTTOM_LEFT
        return _V.HALF_WATER_TOP

    # Two adjacent cardinals
    if top and right and not bottom and not left:
        return _V.THREE_QUARTER_WATER_TOP_RIGHT if top_right else _V.FULL_WATER
    if top and not right and not bottom and left:
        return _V.THREE_QUARTER_WATER_TOP_LEFT if top_left else _V.FULL_WATER
    if not top and right and bottom and not left:
        return _V.THREE_QUARTER_WATER_BOTTOM_RIGHT if bottom_right else _V.FULL_WATER
    if not top and not right and bottom and left:
        return _V.THREE_QUARTER_WATER_BOTTOM_LEFT if bottom_left else _V.FULL_WATER

    # Two opposite cardinals
    if top and not right and bottom and not left:
        return _V.HALF_WATER_RIGHT
    if not top and right and not bottom and left:
        return _V.HALF_WATER_TOP

    return _V.FULL_LAND


def classify_layout(grid: NDArray) -> NDArray[np.uint8]:
    """Classify every cell of a grid.

    Returns:
        uint8 array of AutoTileVariant values with the grid's shape.
    """
    height, width = grid.shape
    variants = np.zeros((height, width), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            variants[y, x] = classify(grid, x, y)
    return variants
