"""Per-room terrain generation package.

This package implements noise-based island generation for single rooms,
including coastline cleanup, door paths, auto-tiling and foliage placement.
"""

from .autotile import AutoTileVariant, classify, classify_layout
from .coastal import enforce_connectivity, majority_smooth
from .config import DecorationConfig, NoiseConfig, TerrainConfig
from .generator import RoomTerrainResult, generate_room, generate_room_terrain
from .island import generate_land_mask, island_value
from .noise import NoiseSettings, make_noise_settings, sample_noise
from .objects import PlacedDecoration, place_decorations
from .paths import carve_arrival_and_paths, door_location
from .poisson import filter_by_noise, poisson_disc_sample

__all__ = [
    "AutoTileVariant",
    "DecorationConfig",
    "NoiseConfig",
    "NoiseSettings",
    "PlacedDecoration",
    "RoomTerrainResult",
    "TerrainConfig",
    "carve_arrival_and_paths",
    "classify",
    "classify_layout",
    "door_location",
    "enforce_connectivity",
    "filter_by_noise",
    "generate_land_mask",
    "generate_room",
    "generate_room_terrain",
    "island_value",
    "majority_smooth",
    "make_noise_settings",
    "place_decorations",
    "poisson_disc_sample",
    "sample_noise",
]
