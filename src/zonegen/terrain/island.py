"""Island shaping: radial falloff and land mask synthesis for one room."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import InvalidParameterError
from .noise import NoiseSettings, sample_noise, smoothstep


def radial_falloff(
    x: ArrayLike,
    y: ArrayLike,
    width: int,
    height: int,
    offset_x: float,
    offset_y: float,
    land_scale: float,
) -> NDArray[np.float64]:
    """Compute the island falloff at world coordinates inside a room.

    Falloff is 1 at the room centre and smoothly reaches 0 at
    land_scale * min(width, height) / 2 from it.

    Args:
        x: World X coordinates.
        y: World Y coordinates.
        width: Room width in tiles.
        height: Room height in tiles.
        offset_x: World X of the room's first tile.
        offset_y: World Y of the room's first tile.
        land_scale: Island size multiplier (smaller = smaller island).

    Returns:
        Falloff values in [0, 1].
    """
    center_x = offset_x + width * 0.5
    center_y = offset_y + height * 0.5
    max_distance = min(width, height) * 0.5

    dx = np.asarray(x, dtype=np.float64) - center_x
    dy = np.asarray(y, dtype=np.float64) - center_y
    distance = np.sqrt(dx * dx + dy * dy)

    scaled = distance / land_scale
    falloff = 1.0 - np.clip(scaled / max_distance, 0.0, 1.0)
    return smoothstep(0.0, 1.0, falloff)


def island_value(
    x: ArrayLike,
    y: ArrayLike,
    width: int,
    height: int,
    offset_x: float,
    offset_y: float,
    settings: NoiseSettings,
) -> float | NDArray[np.float64]:
    """Noise multiplied by radial falloff, before thresholding."""
    noise = sample_noise(x, y, settings)
    falloff = radial_falloff(
        x, y, width, height, offset_x, offset_y, settings.land_scale
    )
    value = np.asarray(noise) * falloff
    if value.ndim == 0:
        return float(value)
    return value


def meets_land_threshold(
    x: float,
    y: float,
    width: int,
    height: int,
    offset_x: float,
    offset_y: float,
    settings: NoiseSettings,
) -> bool:
    """Whether a single world coordinate would be generated as land."""
    value = island_value(x, y, width, height, offset_x, offset_y, settings)
    return bool(value > settings.threshold)


def generate_land_mask(
    width: int,
    height: int,
    offset_x: int,
    offset_y: int,
    settings: NoiseSettings,
) -> NDArray[np.bool_]:
    """Generate the raw island mask for one room.

    Args:
        width: Room width in tiles.
        height: Room height in tiles.
        offset_x: World X of the room's first tile.
        offset_y: World Y of the room's first tile.
        settings: Room noise settings.

    Returns:
        Boolean mask of shape (height, width) where True = land.

    Raises:
        InvalidParameterError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise InvalidParameterError(
            f"Room size must be positive, got {width}x{height}"
        )

    ys, xs = np.meshgrid(
        np.arange(height, dtype=np.float64) + offset_y,
        np.arange(width, dtype=np.float64) + offset_x,
        indexing="ij",
    )
    values = island_value(xs, ys, width, height, offset_x, offset_y, settings)
    return np.asarray(values) > settings.threshold


def add_central_landmass(
    land_mask: NDArray[np.bool_],
    radius: int = 2,
) -> NDArray[np.bool_]:
    """Force a square block of land around the room centre.

    Args:
        land_mask: Input land mask.
        radius: Half-size of the block (2 gives 5x5).

    Returns:
        New mask with the central block set to land.
    """
    height, width = land_mask.shape
    result = land_mask.copy()

    cx, cy = width // 2, height // 2
    y0, y1 = max(0, cy - radius), min(height, cy + radius + 1)
    x0, x1 = max(0, cx - radius), min(width, cx + radius + 1)
    result[y0:y1, x0:x1] = True

    return result
