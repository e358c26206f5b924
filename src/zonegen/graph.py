"""Room graph generation: the topology of rooms and doors in one sub-zone.

Generation runs in fixed stages, all drawing from one numpy Generator:

1. starter room at the grid centre
2. a walk away from the starter ending in the sub-zone boss room
3. weighted branching of extra normal rooms
4. shop, reward and optional totem rooms converted from leaves
5. extra doors between neighbouring normal rooms
6. gating of leaf rooms behind locked doors

Placement shortfalls are logged and skipped; the graph produced so far is
always returned.
"""

import numpy as np
import structlog

from .config import GraphConfig
from .exceptions import InvalidParameterError
from .rooms import RoomGraph, RoomNode
from .types import DoorDirection, RoomCoordinate, RoomType

logger = structlog.get_logger()

# Direction pairs checked once per room so each neighbour pair is visited once
_DENSIFY_DIRECTIONS = (DoorDirection.RIGHT, DoorDirection.UP)


def _away_directions(offset_x: int, offset_y: int) -> list[DoorDirection]:
    """Directions that never shrink the offset from the starter."""
    directions = []
    if offset_x <= 0:
        directions.append(DoorDirection.LEFT)
    if offset_x >= 0:
        directions.append(DoorDirection.RIGHT)
    if offset_y <= 0:
        directions.append(DoorDirection.DOWN)
    if offset_y >= 0:
        directions.append(DoorDirection.UP)
    return directions


class RoomGraphGenerator:
    """Builds a RoomGraph for one sub-zone.

    Usage:
        rng = np.random.default_rng(42)
        graph = RoomGraphGenerator(GraphConfig(), rng).generate(zone=0, sub_zone=0)
    """

    def __init__(self, config: GraphConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config or GraphConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate(
        self,
        max_distance: int | None = None,
        zone: int = 0,
        sub_zone: int = 0,
        room_length: int = 0,
    ) -> RoomGraph:
        """Generate a room graph.

        Args:
            max_distance: Grid cells from the starter to the edge. Defaults
                to the configured value.
            zone: Zone index stored on every room.
            sub_zone: Sub-zone index; scales room counts.
            room_length: Room side length in tiles, for world lookups.

        Returns:
            The generated graph.

        Raises:
            InvalidParameterError: If max_distance or sub_zone is invalid.
        """
        if max_distance is None:
            max_distance = self.config.max_distance
        if max_distance < 1:
            raise InvalidParameterError(f"max_distance must be >= 1, got {max_distance}")
        if sub_zone < 0:
            raise InvalidParameterError(f"sub_zone must be >= 0, got {sub_zone}")

        graph = RoomGraph(max_distance, room_length=room_length)
        size_scaler = sub_zone * self.config.size_scaler_per_sub_zone

        starter = RoomNode(
            room_type=RoomType.STARTER,
            coordinate=graph.center,
            is_leaf=False,
            room_length=room_length,
            zone=zone,
        )
        graph.place(starter)

        boss = self._build_boss_path(graph, size_scaler, zone)
        if sub_zone == self.config.sub_zones_per_zone - 1:
            self._attach_boss_portal(graph, boss, zone)

        self._branch(graph, size_scaler, zone)
        self._assign_special_rooms(graph, zone)
        self._densify(graph)
        self._lock_leaves(graph)

        logger.info(
            "room_graph_generated",
            zone=zone,
            sub_zone=sub_zone,
            rooms=len(graph),
            max_distance=max_distance,
        )
        return graph

    def _new_room(self, graph: RoomGraph, room_type: RoomType, coordinate: RoomCoordinate, zone: int) -> RoomNode:
        room = RoomNode(
            room_type=room_type,
            coordinate=coordinate,
            room_length=graph.room_length,
            zone=zone,
        )
        graph.place(room)
        return room

    def _link(self, graph: RoomGraph, a: RoomNode, b: RoomNode) -> None:
        graph.connect(a, b)
        for room in (a, b):
            room.is_leaf = room.room_type != RoomType.STARTER and room.door_count == 1

    def _is_free(self, graph: RoomGraph, coordinate: RoomCoordinate) -> bool:
        return graph.in_bounds(coordinate) and graph.room_at(coordinate) is None

    def _build_boss_path(self, graph: RoomGraph, size_scaler: int, zone: int) -> RoomNode:
        """Walk away from the starter placing normal rooms, then the boss."""
        path_length = int(
            self.rng.integers(self.config.boss_path_min, self.config.boss_path_max + 1)
        ) + size_scaler
        center = graph.center
        current = graph.starter()

        for step in range(path_length + 1):
            room_type = RoomType.SUB_ZONE_BOSS if step == path_length else RoomType.NORMAL
            next_coord = self._step_away(graph, current.coordinate, center)

            if next_coord is None:
                logger.warning(
                    "boss_path_blocked",
                    step=step,
                    path_length=path_length,
                    at=str(current.coordinate),
                )
                if current.room_type == RoomType.STARTER:
                    # Nothing placed yet; put the boss next to the starter
                    next_coord = self._first_free_neighbour(graph, current.coordinate)
                    if next_coord is not None:
                        boss = self._new_room(graph, RoomType.SUB_ZONE_BOSS, next_coord, zone)
                        self._link(graph, current, boss)
                        return boss
                    return current
                current.room_type = RoomType.SUB_ZONE_BOSS
                return current

            room = self._new_room(graph, room_type, next_coord, zone)
            self._link(graph, current, room)
            current = room

        return current

    def _step_away(
        self,
        graph: RoomGraph,
        coordinate: RoomCoordinate,
        center: RoomCoordinate,
    ) -> RoomCoordinate | None:
        directions = _away_directions(coordinate.x - center.x, coordinate.y - center.y)
        for _ in range(self.config.path_attempts):
            direction = directions[int(self.rng.integers(len(directions)))]
            candidate = coordinate.offset(direction)
            if self._is_free(graph, candidate):
                return candidate
        return None

    def _first_free_neighbour(self, graph: RoomGraph, coordinate: RoomCoordinate) -> RoomCoordinate | None:
        for direction in DoorDirection:
            candidate = coordinate.offset(direction)
            if self._is_free(graph, candidate):
                return candidate
        return None

    def _attach_boss_portal(self, graph: RoomGraph, boss: RoomNode, zone: int) -> None:
        free = [
            boss.coordinate.offset(d)
            for d in DoorDirection
            if self._is_free(graph, boss.coordinate.offset(d))
        ]
        if not free:
            logger.warning("boss_portal_not_placed", boss=str(boss.coordinate))
            return

        coordinate = free[int(self.rng.integers(len(free)))]
        portal = self._new_room(graph, RoomType.BOSS_PORTAL, coordinate, zone)
        self._link(graph, boss, portal)

    def _weighted_choice(self, rooms: list[RoomNode]) -> RoomNode:
        """Inverse-CDF pick over gen_weight, in the given order."""
        total = sum(room.gen_weight for room in rooms)
        draw = self.rng.random() * total
        cumulative = 0.0
        for room in rooms:
            cumulative += room.gen_weight
            if draw < cumulative:
                return room
        return rooms[-1]

    def _add_branch_room(self, graph: RoomGraph, zone: int) -> RoomNode | None:
        """Attach one normal room to a weighted-random existing room."""
        candidates = [room for room in graph if not room.room_type.is_boss]
        if not candidates:
            return None

        for _ in range(self.config.branch_attempts):
            parent = self._weighted_choice(candidates)
            direction = DoorDirection(int(self.rng.integers(4)))
            coordinate = parent.coordinate.offset(direction)
            if not self._is_free(graph, coordinate):
                continue

            room = self._new_room(graph, RoomType.NORMAL, coordinate, zone)
            self._link(graph, parent, room)

            for other in graph:
                other.gen_weight = max(1.0, other.gen_weight - self.config.weight_decay)
            room.gen_weight = self.config.leaf_weight
            return room

        logger.warning("branch_room_not_placed", attempts=self.config.branch_attempts)
        return None

    def _branch(self, graph: RoomGraph, size_scaler: int, zone: int) -> None:
        count = int(
            self.rng.integers(self.config.branch_min, self.config.branch_max + 1)
        ) + size_scaler
        for _ in range(count):
            if self._add_branch_room(graph, zone) is None:
                break

    def _normal_leaves(self, graph: RoomGraph) -> list[RoomNode]:
        return [
            room
            for room in graph
            if room.is_leaf and room.room_type == RoomType.NORMAL
        ]

    def _convert_leaf(self, graph: RoomGraph, room_type: RoomType, zone: int, fallback: bool) -> RoomNode | None:
        leaves = self._normal_leaves(graph)
        if leaves:
            room = leaves[int(self.rng.integers(len(leaves)))]
        elif fallback:
            logger.warning("no_leaf_for_special_room", room_type=room_type.value)
            room = self._add_branch_room(graph, zone)
            if room is None:
                logger.warning("special_room_not_placed", room_type=room_type.value)
                return None
        else:
            return None

        room.room_type = room_type
        return room

    def _assign_special_rooms(self, graph: RoomGraph, zone: int) -> None:
        self._convert_leaf(graph, RoomType.SHOP, zone, fallback=True)
        self._convert_leaf(graph, RoomType.REWARD, zone, fallback=True)
        if self.rng.random() < self.config.totem_chance:
            if self._convert_leaf(graph, RoomType.TOTEM, zone, fallback=False) is None:
                logger.debug("totem_room_skipped")

    def _densify(self, graph: RoomGraph) -> None:
        """Open extra doors between neighbouring normal rooms."""
        for room in list(graph):
            if room.room_type != RoomType.NORMAL:
                continue
            for direction in _DENSIFY_DIRECTIONS:
                other = graph.room_at(room.coordinate.offset(direction))
                if other is None or other.room_type != RoomType.NORMAL:
                    continue
                if graph.are_connected(room, other):
                    continue
                if self.rng.random() < self.config.door_chance:
                    graph.connect(room, other)
                    room.is_leaf = False
                    other.is_leaf = False

    def _lock_leaves(self, graph: RoomGraph) -> None:
        """Gate leaf rooms from the far side.

        The locked door is the neighbour's door facing the leaf, not the
        leaf's own door.
        """
        for room in graph:
            if not room.is_leaf or room.room_type.is_boss:
                continue
            if room.room_type == RoomType.STARTER:
                continue
            if self.rng.random() >= self.config.lock_chance:
                continue

            door = room.open_doors()[0]
            neighbour = graph.room_at(room.coordinate.offset(door.direction))
            if neighbour is None:
                continue
            neighbour.doors[door.direction.opposite()].lock()


def generate_room_graph(
    seed: int | None = None,
    max_distance: int | None = None,
    zone: int = 0,
    sub_zone: int = 0,
    config: GraphConfig | None = None,
    room_length: int = 0,
) -> RoomGraph:
    """Convenience wrapper creating the Generator from a seed."""
    generator = RoomGraphGenerator(config, np.random.default_rng(seed))
    return generator.generate(max_distance, zone=zone, sub_zone=sub_zone, room_length=room_length)
