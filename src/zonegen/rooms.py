"""Room graph data model: doors, room nodes and the zone's room grid."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

import numpy as np
import structlog
from numpy.typing import NDArray

from .exceptions import InvalidParameterError, RoomNotFoundError
from .types import DoorDirection, RoomCoordinate, RoomType, TileKind, WorldPoint

if TYPE_CHECKING:
    from .terrain.noise import NoiseSettings
    from .terrain.objects import PlacedDecoration

logger = structlog.get_logger()


class DoorInteraction(str, Enum):
    """Outcome of interacting with a door."""

    IGNORED = "ignored"
    UNLOCKED = "unlocked"
    TRAVEL = "travel"


@dataclass
class DoorState:
    """State of one of a room's four doors.

    Impassable doors lead nowhere and ignore every state transition.
    World positions are filled in once the zone's terrain is generated.
    """

    direction: DoorDirection
    is_impassable: bool = True
    is_open: bool = False
    is_locked: bool = False
    launch_position: WorldPoint | None = None
    landing_position: WorldPoint | None = None
    other_room_launch_position: WorldPoint | None = None

    def open(self) -> bool:
        if self.is_impassable:
            return False
        self.is_open = True
        return True

    def close(self) -> bool:
        if self.is_impassable:
            return False
        self.is_open = False
        return True

    def lock(self) -> bool:
        if self.is_impassable or self.is_locked:
            return False
        self.is_locked = True
        return True

    def unlock(self) -> bool:
        if self.is_impassable or not self.is_locked:
            return False
        self.is_locked = False
        return True

    def interact(self, has_key: bool = False) -> DoorInteraction:
        """Use the door.

        An open, passable door either starts travel (unlocked) or, when a
        key is available, gets unlocked. Anything else is ignored.
        """
        if self.is_impassable or not self.is_open:
            return DoorInteraction.IGNORED
        if self.is_locked:
            if not has_key:
                return DoorInteraction.IGNORED
            self.is_locked = False
            return DoorInteraction.UNLOCKED
        return DoorInteraction.TRAVEL


def _default_doors() -> dict[DoorDirection, DoorState]:
    return {direction: DoorState(direction=direction) for direction in DoorDirection}


@dataclass
class RoomNode:
    """One room of the zone grid."""

    room_type: RoomType
    coordinate: RoomCoordinate
    gen_weight: float = 1.0
    is_leaf: bool = True
    doors: dict[DoorDirection, DoorState] = field(default_factory=_default_doors)
    tile_layout: NDArray[np.uint8] | None = None
    room_length: int = 0
    noise_settings: "NoiseSettings | None" = None
    zone: int = 0
    decorations: list["PlacedDecoration"] = field(default_factory=list)
    cleared: bool = False

    def open_doors(self) -> list[DoorState]:
        """Passable doors in UP, DOWN, LEFT, RIGHT order."""
        return [self.doors[d] for d in DoorDirection if not self.doors[d].is_impassable]

    @property
    def door_count(self) -> int:
        return len(self.open_doors())

    @property
    def tile_origin(self) -> tuple[int, int]:
        """World tile coordinate of the room's (0, 0) tile."""
        return (
            self.coordinate.x * self.room_length,
            self.coordinate.y * self.room_length,
        )

    def tile_to_world(self, x: float, y: float) -> WorldPoint:
        """World position of the centre of a room tile."""
        ox, oy = self.tile_origin
        return WorldPoint(x=ox + x + 0.5, y=oy + y + 0.5)

    def world_to_tile(self, x: float, y: float) -> tuple[int, int]:
        ox, oy = self.tile_origin
        return int(np.floor(x - ox)), int(np.floor(y - oy))

    def in_room(self, x: int, y: int) -> bool:
        return 0 <= x < self.room_length and 0 <= y < self.room_length

    def is_tile_bordering_change(self, x: int, y: int) -> bool:
        """Whether any in-room 8-neighbour differs in land/water from the tile.

        Raises:
            InvalidParameterError: If the room has no tile layout yet.
        """
        if self.tile_layout is None:
            raise InvalidParameterError(f"Room {self.coordinate} has no tile layout")

        height, width = self.tile_layout.shape
        is_land = self.tile_layout[y, x] != TileKind.WATER
        for ny in range(max(0, y - 1), min(height, y + 2)):
            for nx in range(max(0, x - 1), min(width, x + 2)):
                if (self.tile_layout[ny, nx] != TileKind.WATER) != is_land:
                    return True
        return False

    def spawn_tiles(self) -> list[tuple[int, int]]:
        """(x, y) of every LAND tile; arrival and path tiles are excluded."""
        if self.tile_layout is None:
            return []
        ys, xs = np.nonzero(self.tile_layout == TileKind.LAND)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]


RoomCallback = Callable[[RoomNode], None]


class RoomGraph:
    """Sparse square grid of rooms centred on the starter room.

    Grid coordinates run from 0 to 2 * max_distance on both axes; the
    starter sits at (max_distance, max_distance). Iteration is row-major
    (y, then x).
    """

    def __init__(self, max_distance: int, room_length: int = 0):
        if max_distance < 1:
            raise InvalidParameterError(
                f"max_distance must be >= 1, got {max_distance}"
            )
        self.max_distance = max_distance
        self.size = 2 * max_distance + 1
        self.room_length = room_length
        self._rooms: list[list[RoomNode | None]] = [
            [None] * self.size for _ in range(self.size)
        ]
        self._cleared_callbacks: list[RoomCallback] = []

    @property
    def center(self) -> RoomCoordinate:
        return RoomCoordinate(x=self.max_distance, y=self.max_distance)

    def in_bounds(self, coordinate: RoomCoordinate) -> bool:
        return 0 <= coordinate.x < self.size and 0 <= coordinate.y < self.size

    def room_at(self, coordinate: RoomCoordinate) -> RoomNode | None:
        """Room at a grid coordinate, None when empty or out of bounds."""
        if not self.in_bounds(coordinate):
            return None
        return self._rooms[coordinate.y][coordinate.x]

    def get_room(self, coordinate: RoomCoordinate) -> RoomNode:
        """Strict lookup.

        Raises:
            RoomNotFoundError: If no room exists at the coordinate.
        """
        room = self.room_at(coordinate)
        if room is None:
            raise RoomNotFoundError(f"No room at {coordinate}")
        return room

    def place(self, room: RoomNode) -> None:
        if not self.in_bounds(room.coordinate):
            raise InvalidParameterError(f"Coordinate {room.coordinate} out of bounds")
        self._rooms[room.coordinate.y][room.coordinate.x] = room

    def remove(self, coordinate: RoomCoordinate) -> RoomNode | None:
        room = self.room_at(coordinate)
        if room is not None:
            self._rooms[coordinate.y][coordinate.x] = None
        return room

    def world_to_coordinate(self, x: float, y: float) -> RoomCoordinate:
        if self.room_length <= 0:
            raise InvalidParameterError("Room length is not set on this graph")
        return RoomCoordinate(
            x=int(np.floor(x / self.room_length)),
            y=int(np.floor(y / self.room_length)),
        )

    def room_at_world(self, x: float, y: float) -> RoomNode | None:
        """Room containing a world position."""
        return self.room_at(self.world_to_coordinate(x, y))

    def coordinate_to_world(self, coordinate: RoomCoordinate) -> WorldPoint:
        """World position of a room's centre."""
        half = self.room_length * 0.5
        return WorldPoint(
            x=coordinate.x * self.room_length + half,
            y=coordinate.y * self.room_length + half,
        )

    def __iter__(self) -> Iterator[RoomNode]:
        for row in self._rooms:
            for room in row:
                if room is not None:
                    yield room

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def rooms_of_type(self, room_type: RoomType) -> list[RoomNode]:
        return [room for room in self if room.room_type == room_type]

    def starter(self) -> RoomNode:
        return self.get_room(self.center)

    def adjacent_rooms(self, coordinate: RoomCoordinate) -> list[RoomNode]:
        """Existing orthogonal neighbours, whether or not a door joins them."""
        neighbours = []
        for direction in DoorDirection:
            room = self.room_at(coordinate.offset(direction))
            if room is not None:
                neighbours.append(room)
        return neighbours

    def connected_neighbours(
        self, room: RoomNode
    ) -> Iterator[tuple[DoorDirection, RoomNode]]:
        """Neighbours reachable through a passable door."""
        for door in room.open_doors():
            other = self.room_at(room.coordinate.offset(door.direction))
            if other is not None:
                yield door.direction, other

    def connect(self, a: RoomNode, b: RoomNode) -> None:
        """Make the doors between two adjacent rooms passable (closed)."""
        direction = a.coordinate.direction_to(b.coordinate)
        for room, d in ((a, direction), (b, direction.opposite())):
            door = room.doors[d]
            door.is_impassable = False

    def are_connected(self, a: RoomNode, b: RoomNode) -> bool:
        direction = a.coordinate.direction_to(b.coordinate)
        return not a.doors[direction].is_impassable

    def reachable_from_starter(self) -> set[RoomCoordinate]:
        """Coordinates reachable from the starter through passable doors."""
        start = self.starter()
        seen = {start.coordinate}
        stack = [start]
        while stack:
            room = stack.pop()
            for _, other in self.connected_neighbours(room):
                if other.coordinate not in seen:
                    seen.add(other.coordinate)
                    stack.append(other)
        return seen

    def add_cleared_callback(self, callback: RoomCallback) -> None:
        self._cleared_callbacks.append(callback)

    def mark_cleared(self, coordinate: RoomCoordinate) -> RoomNode:
        """Mark a room cleared, open its unlocked doors and notify listeners."""
        room = self.get_room(coordinate)
        if room.cleared:
            return room

        room.cleared = True
        for door in room.open_doors():
            if not door.is_locked:
                door.open()

        logger.info(
            "room_cleared",
            coordinate=str(coordinate),
            room_type=room.room_type.value,
        )
        for callback in self._cleared_callbacks:
            callback(room)
        return room
