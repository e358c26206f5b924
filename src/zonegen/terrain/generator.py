"""Per-room terrain pipeline: noise island, coastline cleanup, door paths."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidParameterError
from ..types import DoorDirection, RoomType, TileKind
from .coastal import enforce_connectivity, majority_smooth
from .config import TerrainConfig
from .island import add_central_landmass, generate_land_mask
from .noise import NoiseSettings, make_noise_settings
from .paths import carve_arrival_and_paths

if TYPE_CHECKING:
    from ..rooms import RoomNode

logger = logging.getLogger(__name__)


class RoomTerrainResult:
    """Result of generating one room's terrain."""

    def __init__(
        self,
        layout: NDArray[np.uint8],
        land_mask: NDArray[np.bool_],
        noise_settings: NoiseSettings,
    ):
        self.layout = layout
        self.land_mask = land_mask
        self.noise_settings = noise_settings


def generate_room_terrain(
    room_type: RoomType,
    room_length: int,
    origin: tuple[int, int],
    open_directions: Iterable[DoorDirection],
    config: TerrainConfig,
    rng: np.random.Generator,
) -> RoomTerrainResult:
    """Generate the tile layout of one room.

    Args:
        room_type: Type of the room (selects the island size).
        room_length: Room side length in tiles.
        origin: World tile coordinate of the room's (0, 0) tile.
        open_directions: Directions of the room's passable doors.
        config: Terrain configuration for the room's zone.
        rng: Random number generator (draws the noise offsets).

    Returns:
        RoomTerrainResult with the TileKind layout.

    Raises:
        InvalidParameterError: If room_length is not positive.
    """
    if room_length <= 0:
        raise InvalidParameterError(f"room_length must be > 0, got {room_length}")

    land_scale = config.island.land_scale_for(room_type)
    settings = make_noise_settings(config.noise, land_scale, rng)

    ox, oy = origin
    land_mask = generate_land_mask(room_length, room_length, ox, oy, settings)

    if room_type == RoomType.STARTER:
        land_mask = add_central_landmass(land_mask, config.island.central_landmass_radius)

    if land_mask.any():
        land_mask = majority_smooth(land_mask, config.island.smoothing_iterations)
        land_mask = enforce_connectivity(land_mask)
    else:
        # Smoothing would grow land in the corners, where out-of-bounds counts as land
        logger.warning(
            f"Room {room_type.value} at {origin} has no land above threshold "
            f"{settings.threshold}; leaving it all water"
        )

    layout = np.where(land_mask, TileKind.LAND, TileKind.WATER).astype(np.uint8)
    layout = carve_arrival_and_paths(
        layout,
        open_directions,
        arrival_radius=config.paths.arrival_radius,
        path_half_width=config.paths.path_half_width,
        inset=config.paths.door_inset,
    )

    logger.debug(
        f"Room {room_type.value} at {origin}: land fraction {np.mean(land_mask):.2%}"
    )
    return RoomTerrainResult(layout=layout, land_mask=land_mask, noise_settings=settings)


def generate_room(
    room: "RoomNode",
    config: TerrainConfig,
    rng: np.random.Generator,
) -> "RoomNode":
    """Generate terrain for a room node in place and return it."""
    result = generate_room_terrain(
        room.room_type,
        room.room_length,
        room.tile_origin,
        [door.direction for door in room.open_doors()],
        config,
        rng,
    )
    room.tile_layout = result.layout
    room.noise_settings = result.noise_settings
    return room
