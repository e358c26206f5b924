"""Door locations and arrival/path carving around door landings."""

import logging
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from ..types import DIRECTION_DELTAS, DoorDirection, TileKind

logger = logging.getLogger(__name__)

_SHORE_KINDS = (TileKind.LAND, TileKind.ARRIVAL)


def _is_shore_tile(value: int) -> bool:
    return value in _SHORE_KINDS


def door_location(
    layout: NDArray[np.uint8],
    direction: DoorDirection,
    launch: bool = True,
    inset: int = 2,
) -> tuple[int, int]:
    """Find where a door sits on a room layout.

    Scans the centre row or column from the room edge on the door's side
    towards the middle until the first land or arrival tile. Launch
    positions lie `inset` tiles outside that shoreline (in the water);
    landing positions lie `inset` tiles inside it (on land).

    Args:
        layout: TileKind grid of shape (height, width).
        direction: Side of the room the door is on.
        launch: True for the launch position, False for the landing.
        inset: Distance from the shoreline.

    Returns:
        (x, y) tile coordinates relative to the room. The room centre is
        returned when the scan line holds no land.
    """
    height, width = layout.shape
    cx, cy = width // 2, height // 2
    shift = inset if launch else -inset

    if direction == DoorDirection.UP:
        for y in range(height - 1, -1, -1):
            if _is_shore_tile(layout[y, cx]):
                return cx, y + shift
    elif direction == DoorDirection.DOWN:
        for y in range(height):
            if _is_shore_tile(layout[y, cx]):
                return cx, y - shift
    elif direction == DoorDirection.LEFT:
        for x in range(width):
            if _is_shore_tile(layout[cy, x]):
                return x - shift, cy
    elif direction == DoorDirection.RIGHT:
        for x in range(width - 1, -1, -1):
            if _is_shore_tile(layout[cy, x]):
                return x + shift, cy

    logger.warning(
        f"No door location found for direction {direction.name}; using room centre"
    )
    return cx, cy


def _stamp_arrival(
    layout: NDArray[np.uint8],
    center: tuple[int, int],
    radius: int,
) -> None:
    height, width = layout.shape
    x, y = center
    y0, y1 = max(0, y - radius), min(height, y + radius + 1)
    x0, x1 = max(0, x - radius), min(width, x + radius + 1)
    if y0 < y1 and x0 < x1:
        layout[y0:y1, x0:x1] = TileKind.ARRIVAL


def _carve_path_to_edge(
    layout: NDArray[np.uint8],
    start: tuple[int, int],
    direction: DoorDirection,
    half_width: int,
) -> None:
    height, width = layout.shape
    dx, dy = DIRECTION_DELTAS[direction]
    # Perpendicular axis for the corridor width
    px, py = (1, 0) if dx == 0 else (0, 1)

    x, y = start
    while True:
        x += dx
        y += dy
        if not (0 <= x < width and 0 <= y < height):
            break

        for offset in range(-half_width, half_width + 1):
            tx, ty = x + px * offset, y + py * offset
            if 0 <= tx < width and 0 <= ty < height:
                if layout[ty, tx] == TileKind.WATER:
                    layout[ty, tx] = TileKind.PATH


def carve_arrival_and_paths(
    layout: NDArray[np.uint8],
    open_directions: Iterable[DoorDirection],
    arrival_radius: int = 2,
    path_half_width: int = 1,
    inset: int = 2,
) -> NDArray[np.uint8]:
    """Carve arrival blocks and corridors for every passable door.

    For each door the landing tile is located on the layout as it stands,
    a (2r+1)^2 block around it becomes ARRIVAL, and a corridor from the
    landing to the room edge in the door's direction turns WATER into PATH.

    Args:
        layout: TileKind grid of shape (height, width).
        open_directions: Directions of the room's passable doors.
        arrival_radius: Half-size of the arrival block.
        path_half_width: Tiles either side of the corridor centre line.
        inset: Landing distance from the shoreline.

    Returns:
        New layout with ARRIVAL and PATH tiles.
    """
    result = layout.copy()

    for direction in open_directions:
        landing = door_location(result, direction, launch=False, inset=inset)
        _stamp_arrival(result, landing, arrival_radius)
        _carve_path_to_edge(result, landing, direction, path_half_width)

    return result
