"""Poisson-disc (blue noise) point sampling with optional noise filtering."""

import logging
import math

import numpy as np

from ..exceptions import InvalidParameterError
from .island import island_value
from .noise import NoiseSettings, perlin_noise_01

logger = logging.getLogger(__name__)

Point = tuple[float, float]

DEFAULT_MAX_POINTS = 10_000


def _as_generator(seed: int | np.random.Generator | None) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def _region_dims(region_size: float | tuple[float, float]) -> tuple[float, float]:
    if isinstance(region_size, tuple):
        return float(region_size[0]), float(region_size[1])
    return float(region_size), float(region_size)


def poisson_disc_sample(
    origin: Point,
    region_size: float | tuple[float, float],
    min_distance: float,
    max_attempts: int = 30,
    seed: int | np.random.Generator | None = None,
    max_points: int = DEFAULT_MAX_POINTS,
) -> list[Point]:
    """Sample points with a guaranteed minimum spacing.

    Bridson's dart throwing: an active list starts from one random point;
    each round picks a random active point and tries up to `max_attempts`
    candidates in the annulus [r, 2r] around it. A candidate is accepted
    when no existing point lies closer than r; the active point retires
    when every attempt fails. A background grid of cell size r/sqrt(2)
    holds at most one point per cell, so only the surrounding 5x5 cells
    need checking.

    Args:
        origin: (x, y) of the region's lower-left corner.
        region_size: Side length, or (width, height), of the region.
        min_distance: Minimum distance r between any two points.
        max_attempts: Candidates tried per active point.
        seed: Integer seed or an existing numpy Generator.
        max_points: Stop early once this many points were accepted.

    Returns:
        Accepted points, all within [origin, origin + size). The first
        point is always accepted.

    Raises:
        InvalidParameterError: On non-positive size, distance or attempts.
    """
    width, height = _region_dims(region_size)
    if width <= 0 or height <= 0:
        raise InvalidParameterError(
            f"Region size must be positive, got {width}x{height}"
        )
    if min_distance <= 0:
        raise InvalidParameterError(f"min_distance must be > 0, got {min_distance}")
    if max_attempts < 1:
        raise InvalidParameterError(f"max_attempts must be >= 1, got {max_attempts}")
    if max_points < 1:
        raise InvalidParameterError(f"max_points must be >= 1, got {max_points}")

    rng = _as_generator(seed)
    ox, oy = float(origin[0]), float(origin[1])

    cell_size = min_distance / math.sqrt(2.0)
    grid_w = max(1, math.ceil(width / cell_size))
    grid_h = max(1, math.ceil(height / cell_size))
    # Index into points, -1 for an empty cell
    grid = np.full((grid_h, grid_w), -1, dtype=np.int64)
    min_dist_sq = min_distance * min_distance

    points: list[Point] = []
    active: list[int] = []

    def cell_of(px: float, py: float) -> tuple[int, int]:
        gx = min(grid_w - 1, int((px - ox) / cell_size))
        gy = min(grid_h - 1, int((py - oy) / cell_size))
        return gx, gy

    def is_far_enough(px: float, py: float) -> bool:
        gx, gy = cell_of(px, py)
        for cy in range(max(0, gy - 2), min(grid_h, gy + 3)):
            for cx in range(max(0, gx - 2), min(grid_w, gx + 3)):
                idx = grid[cy, cx]
                if idx < 0:
                    continue
                qx, qy = points[idx]
                if (px - qx) ** 2 + (py - qy) ** 2 < min_dist_sq:
                    return False
        return True

    def accept(px: float, py: float) -> None:
        gx, gy = cell_of(px, py)
        grid[gy, gx] = len(points)
        active.append(len(points))
        points.append((px, py))

    accept(ox + rng.random() * width, oy + rng.random() * height)

    while active:
        if len(points) >= max_points:
            logger.warning(
                f"Poisson sampler hit the {max_points} point cap; stopping early"
            )
            break

        slot = int(rng.integers(len(active)))
        cx, cy = points[active[slot]]

        found = False
        for _ in range(max_attempts):
            angle = rng.random() * 2.0 * math.pi
            distance = min_distance * (1.0 + rng.random())
            px = cx + math.cos(angle) * distance
            py = cy + math.sin(angle) * distance

            if not (ox <= px < ox + width and oy <= py < oy + height):
                continue
            if is_far_enough(px, py):
                accept(px, py)
                found = True
                break

        if not found:
            active.pop(slot)

    return points


def filter_by_noise(
    points: list[Point],
    threshold: float,
    noise_scale: float = 0.1,
    noise_offset: Point = (0.0, 0.0),
    room_settings: NoiseSettings | None = None,
    room_origin: tuple[int, int] = (0, 0),
    room_size: int = 0,
) -> list[Point]:
    """Keep only the points where a noise field is high enough.

    Without `room_settings` a single octave of gradient noise is sampled at
    (p + noise_offset) * noise_scale and points with a value >= threshold
    are kept. With `room_settings` the room's own island value is sampled
    instead and points pass the same strict `>` test that terrain
    generation uses, so decoration follows the room's land pattern.

    Args:
        points: World positions to filter.
        threshold: Noise value a point must reach.
        noise_scale: Frequency of the plain noise field.
        noise_offset: Offset added before scaling the plain noise field.
        room_settings: Noise settings of the room to match, if any.
        room_origin: World tile origin of the room (match mode only).
        room_size: Room side length in tiles (match mode only).

    Returns:
        The surviving points, in their original order.
    """
    if not points:
        return []

    coords = np.asarray(points, dtype=np.float64)
    xs, ys = coords[:, 0], coords[:, 1]

    if room_settings is not None:
        values = island_value(
            xs,
            ys,
            room_size,
            room_size,
            room_origin[0],
            room_origin[1],
            room_settings,
        )
        keep = np.asarray(values) > threshold
    else:
        values = perlin_noise_01(
            (xs + noise_offset[0]) * noise_scale,
            (ys + noise_offset[1]) * noise_scale,
        )
        keep = values >= threshold

    return [p for p, k in zip(points, keep) if k]
