"""Coastal refinement: majority smoothing and single-landmass enforcement."""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

# 4-connected flood fill structure
_CROSS = ndimage.generate_binary_structure(2, 1)


def majority_smooth(
    land_mask: NDArray[np.bool_],
    iterations: int = 1,
) -> NDArray[np.bool_]:
    """Apply a cellular-automaton majority filter.

    Each cell becomes land iff more than half of its 3x3 window (itself
    included) is land. Cells outside the room count as land so borders
    stay solid.

    Args:
        land_mask: Boolean mask where True = land.
        iterations: Number of smoothing passes.

    Returns:
        Smoothed land mask (a new array).
    """
    result = land_mask.copy()

    kernel = np.ones((3, 3), dtype=np.int32)
    window = kernel.size

    for _ in range(iterations):
        land_count = ndimage.convolve(
            result.astype(np.int32), kernel, mode="constant", cval=1
        )
        result = land_count > window // 2

    return result


def find_flood_start(land_mask: NDArray[np.bool_]) -> tuple[int, int] | None:
    """Pick the cell the landmass flood fill starts from.

    The room centre if it is land, otherwise the land cell closest to the
    centre (smallest x, then smallest y, on ties).

    Args:
        land_mask: Boolean mask where True = land.

    Returns:
        (y, x) of the start cell, or None if there is no land.
    """
    height, width = land_mask.shape
    cy, cx = height // 2, width // 2

    if land_mask[cy, cx]:
        return cy, cx

    land_cells = np.argwhere(land_mask)
    if len(land_cells) == 0:
        return None

    ys, xs = land_cells[:, 0], land_cells[:, 1]
    distances = np.hypot(ys - cy, xs - cx)
    # Ties go to the smallest x, then the smallest y
    y, x = land_cells[np.lexsort((ys, xs, distances))[0]]
    return int(y), int(x)


def enforce_connectivity(land_mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Keep only the landmass connected to the room centre.

    Runs a 4-connected flood fill from find_flood_start and drops every
    land cell it does not reach. The input is left untouched.

    Args:
        land_mask: Boolean mask where True = land.

    Returns:
        New mask with a single connected landmass, or all water when the
        input has no land.
    """
    start = find_flood_start(land_mask)
    if start is None:
        return land_mask.copy()

    labeled, _ = ndimage.label(land_mask, structure=_CROSS)
    return labeled == labeled[start]


def count_landmasses(land_mask: NDArray[np.bool_]) -> int:
    """Number of 4-connected land components."""
    _, num_features = ndimage.label(land_mask, structure=_CROSS)
    return int(num_features)
