"""Shared test fixtures for zone generation tests."""

import numpy as np
import pytest

from zonegen.config import GraphConfig, OrchestratorConfig, ZoneGenConfig
from zonegen.graph import generate_room_graph
from zonegen.rooms import RoomGraph, RoomNode
from zonegen.terrain.config import NoiseConfig
from zonegen.terrain.noise import NoiseSettings, make_noise_settings
from zonegen.types import RoomCoordinate, RoomType, TileKind


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible tests."""
    return np.random.default_rng(1234)


@pytest.fixture
def noise_settings(rng: np.random.Generator) -> NoiseSettings:
    """Default noise settings with land scale 1.5."""
    return make_noise_settings(NoiseConfig(), 1.5, rng)


@pytest.fixture
def small_config() -> ZoneGenConfig:
    """Small, fast zone: 16-tile rooms on a radius-4 grid."""
    return ZoneGenConfig(
        graph=GraphConfig(max_distance=4),
        orchestrator=OrchestratorConfig(room_length=16, rooms_per_batch=2),
    )


@pytest.fixture
def seed42_graph() -> RoomGraph:
    """Room graph for seed 42 on a radius-8 grid."""
    return generate_room_graph(seed=42, max_distance=8, sub_zone=0)


@pytest.fixture
def square_island() -> np.ndarray:
    """16x16 TileKind layout with a land square from 4 to 11 on both axes.

        y=15  ~~~~~~~~~~~~~~~~
        ...
        y=11  ~~~~########~~~~
        ...
        y=4   ~~~~########~~~~
        y=0   ~~~~~~~~~~~~~~~~
    """
    layout = np.full((16, 16), TileKind.WATER, dtype=np.uint8)
    layout[4:12, 4:12] = TileKind.LAND
    return layout


@pytest.fixture
def island_room(square_island: np.ndarray) -> RoomNode:
    """Normal room at grid (1, 2) holding the square island."""
    return RoomNode(
        room_type=RoomType.NORMAL,
        coordinate=RoomCoordinate(x=1, y=2),
        tile_layout=square_island,
        room_length=16,
    )
