"""Procedural island zone generation."""

from .config import GraphConfig, OrchestratorConfig, ZoneGenConfig, load_config
from .exceptions import InvalidParameterError, RoomNotFoundError, ZoneGenError
from .graph import RoomGraphGenerator, generate_room_graph
from .orchestrator import (
    GenerationProgress,
    ZoneLayout,
    ZoneOrchestrator,
    run_zone,
)
from .rooms import DoorInteraction, DoorState, RoomGraph, RoomNode
from .types import (
    DIRECTION_DELTAS,
    DoorDirection,
    RoomCoordinate,
    RoomType,
    TileKind,
    WorldPoint,
)
from .validation import ValidationResult, validate_zone

__all__ = [
    # Types
    "DoorDirection",
    "DIRECTION_DELTAS",
    "RoomCoordinate",
    "RoomType",
    "TileKind",
    "WorldPoint",
    # Rooms
    "DoorInteraction",
    "DoorState",
    "RoomNode",
    "RoomGraph",
    # Graph
    "RoomGraphGenerator",
    "generate_room_graph",
    # Orchestration
    "GenerationProgress",
    "ZoneLayout",
    "ZoneOrchestrator",
    "run_zone",
    # Config
    "GraphConfig",
    "OrchestratorConfig",
    "ZoneGenConfig",
    "load_config",
    # Validation
    "ValidationResult",
    "validate_zone",
    # Exceptions
    "ZoneGenError",
    "InvalidParameterError",
    "RoomNotFoundError",
]
