"""Post-generation validation of a zone layout."""

import logging
from typing import TYPE_CHECKING

from .terrain.coastal import count_landmasses
from .types import RoomType, TileKind

if TYPE_CHECKING:
    from .orchestrator import ZoneLayout

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of zone validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_zone(layout: "ZoneLayout") -> ValidationResult:
    """Validate a generated zone against its structural guarantees.

    Args:
        layout: Completed zone layout.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Room type counts
    _check_room_types(layout, result)

    # Check 2: Every room reachable from the starter
    _check_reachability(layout, result)

    # Check 3: Doors come in matching pairs
    _check_door_reciprocity(layout, result)

    # Check 4: One landmass per room
    _check_landmasses(layout, result)

    # Check 5: Door world positions were wired
    _check_door_positions(layout, result)

    if result.passed:
        logger.info("Zone validation passed")
    else:
        logger.warning(f"Zone validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_room_types(layout: "ZoneLayout", result: ValidationResult) -> None:
    graph = layout.graph
    starters = graph.rooms_of_type(RoomType.STARTER)
    if len(starters) != 1:
        result.add_error(f"Expected exactly one starter room, found {len(starters)}")

    if not graph.rooms_of_type(RoomType.SUB_ZONE_BOSS):
        result.add_error("No sub-zone boss room")

    for room_type in (RoomType.SHOP, RoomType.REWARD):
        if not graph.rooms_of_type(room_type):
            result.add_warning(f"No {room_type.value} room")


def _check_reachability(layout: "ZoneLayout", result: ValidationResult) -> None:
    graph = layout.graph
    if len(graph.rooms_of_type(RoomType.STARTER)) != 1:
        return

    reachable = graph.reachable_from_starter()
    unreachable = [room.coordinate for room in graph if room.coordinate not in reachable]
    if unreachable:
        coords = ", ".join(str(c) for c in unreachable)
        result.add_error(f"{len(unreachable)} rooms unreachable from starter: {coords}")


def _check_door_reciprocity(layout: "ZoneLayout", result: ValidationResult) -> None:
    graph = layout.graph
    for room in graph:
        for door in room.open_doors():
            neighbour = graph.room_at(room.coordinate.offset(door.direction))
            if neighbour is None:
                result.add_error(
                    f"Door {door.direction.name} of room {room.coordinate} leads nowhere"
                )
                continue
            if neighbour.doors[door.direction.opposite()].is_impassable:
                result.add_error(
                    f"Door {door.direction.name} of room {room.coordinate} "
                    f"has no matching door in {neighbour.coordinate}"
                )


def _check_landmasses(layout: "ZoneLayout", result: ValidationResult) -> None:
    for room in layout.graph:
        if room.tile_layout is None:
            result.add_error(f"Room {room.coordinate} has no tile layout")
            continue

        landmasses = count_landmasses(room.tile_layout != TileKind.WATER)
        if landmasses > 1:
            result.add_warning(
                f"Room {room.coordinate} has {landmasses} separate landmasses"
            )
        elif landmasses == 0:
            result.add_warning(f"Room {room.coordinate} has no land")


def _check_door_positions(layout: "ZoneLayout", result: ValidationResult) -> None:
    missing = 0
    for room in layout.graph:
        for door in room.open_doors():
            if door.launch_position is None or door.landing_position is None:
                missing += 1
    if missing:
        result.add_error(f"{missing} passable doors have no world positions")
