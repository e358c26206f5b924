"""Core types for zone generation."""

from enum import Enum, IntEnum

from pydantic import BaseModel


class DoorDirection(IntEnum):
    """Door side of a room. Coordinate system: +X is Right, +Y is Up."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    def opposite(self) -> "DoorDirection":
        """Return the direction a matching door in the neighbour faces."""
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """Grid offset (dx, dy) for one step in this direction."""
        return DIRECTION_DELTAS[self]


_OPPOSITES: dict[DoorDirection, DoorDirection] = {
    DoorDirection.UP: DoorDirection.DOWN,
    DoorDirection.DOWN: DoorDirection.UP,
    DoorDirection.LEFT: DoorDirection.RIGHT,
    DoorDirection.RIGHT: DoorDirection.LEFT,
}

DIRECTION_DELTAS: dict[DoorDirection, tuple[int, int]] = {
    DoorDirection.UP: (0, 1),
    DoorDirection.DOWN: (0, -1),
    DoorDirection.LEFT: (-1, 0),
    DoorDirection.RIGHT: (1, 0),
}


def direction_from_delta(dx: int, dy: int) -> DoorDirection:
    """Map a unit grid offset back to its door direction.

    Raises:
        ValueError: If the offset is not a single orthogonal step.
    """
    for direction, delta in DIRECTION_DELTAS.items():
        if delta == (dx, dy):
            return direction
    raise ValueError(f"Not an orthogonal unit step: ({dx}, {dy})")


class RoomType(str, Enum):
    """Kinds of rooms that can appear in a zone."""

    STARTER = "starter"
    NORMAL = "normal"
    BOSS_PORTAL = "boss_portal"
    SUB_ZONE_BOSS = "sub_zone_boss"
    SHOP = "shop"
    REWARD = "reward"
    TOTEM = "totem"

    @property
    def is_boss(self) -> bool:
        """Whether this room ends the boss path."""
        return self in _BOSS_TYPES

    @property
    def is_special(self) -> bool:
        """Whether this room gets sparse decoration."""
        return self in _SPECIAL_TYPES


_BOSS_TYPES = frozenset({RoomType.SUB_ZONE_BOSS, RoomType.BOSS_PORTAL})

_SPECIAL_TYPES = frozenset({
    RoomType.SUB_ZONE_BOSS,
    RoomType.BOSS_PORTAL,
    RoomType.SHOP,
    RoomType.REWARD,
    RoomType.TOTEM,
})


class TileKind(IntEnum):
    """Categorical value of a single room tile, stored as uint8."""

    WATER = 0
    LAND = 1
    ARRIVAL = 2
    PATH = 3

    @property
    def land_like(self) -> bool:
        """Whether auto-tiling treats this tile as land."""
        return self != TileKind.WATER


class RoomCoordinate(BaseModel, frozen=True):
    """Immutable cell coordinate in the zone's room grid."""

    x: int
    y: int

    def offset(self, direction: DoorDirection) -> "RoomCoordinate":
        """Return the neighbouring coordinate in the given direction."""
        dx, dy = DIRECTION_DELTAS[direction]
        return RoomCoordinate(x=self.x + dx, y=self.y + dy)

    def direction_to(self, other: "RoomCoordinate") -> DoorDirection:
        """Return the direction from this cell to an adjacent cell."""
        return direction_from_delta(other.x - self.x, other.y - self.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"RoomCoordinate(x={self.x}, y={self.y})"


class WorldPoint(BaseModel, frozen=True):
    """Continuous position in world units (one unit per tile)."""

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"
