"""Cooperative zone generation: graph, rooms, doors and the combined map."""

import asyncio
import gc
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Callable

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import ZoneGenConfig
from .graph import RoomGraphGenerator
from .rooms import RoomGraph, RoomNode
from .terrain.generator import generate_room
from .terrain.objects import PlacedDecoration, place_decorations
from .terrain.paths import door_location
from .types import RoomCoordinate, RoomType, TileKind

logger = structlog.get_logger()

# Progress milestones
PROGRESS_GRAPH = 0.05
PROGRESS_ROOMS_START = 0.10
PROGRESS_ROOMS_END = 0.60
PROGRESS_DOORS_END = 0.70
PROGRESS_COMBINED = 0.72
PROGRESS_NAVIGATION = 0.75
PROGRESS_ROOM_INDEX = 0.80
PROGRESS_COMPLETE = 1.0


@dataclass
class GenerationProgress:
    """Progress report for one completed unit of work."""

    fraction: float
    stage: str
    rooms_done: int = 0
    rooms_total: int = 0


@dataclass
class ZoneLayout:
    """Result of a completed zone generation."""

    graph: RoomGraph
    combined_layout: NDArray[np.uint8]
    navigation_mask: NDArray[np.bool_]
    seed: int
    zone: int = 0
    sub_zone: int = 0
    decorations: list[PlacedDecoration] = field(default_factory=list)
    room_index: dict[RoomType, list[RoomCoordinate]] = field(default_factory=dict)

    @property
    def room_length(self) -> int:
        return self.graph.room_length


ProgressCallback = Callable[[GenerationProgress], None]
RoomFinalizedCallback = Callable[[RoomNode], None]
CompleteCallback = Callable[[ZoneLayout], None]


class ZoneOrchestrator:
    """
    Drives zone generation in small steps so a host loop stays responsive.

    Usage:
        orchestrator = ZoneOrchestrator(config, on_progress=show_progress)

        # Poll from a frame loop:
        orchestrator.start(zone=0, sub_zone=0, seed=42)
        while orchestrator.is_generating:
            orchestrator.step()

        # Or in one call:
        layout = orchestrator.run(zone=0, sub_zone=0, seed=42)
    """

    def __init__(
        self,
        config: ZoneGenConfig | None = None,
        on_progress: ProgressCallback | None = None,
        on_room_finalized: RoomFinalizedCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ):
        self.config = config or ZoneGenConfig()
        self.on_progress = on_progress
        self.on_room_finalized = on_room_finalized
        self.on_complete = on_complete

        self._generating = False
        self._cancelled = False
        self._progress = 0.0
        self._steps: Iterator[GenerationProgress] | None = None
        self._graph: RoomGraph | None = None
        self._layout: ZoneLayout | None = None

    @property
    def is_generating(self) -> bool:
        """Whether a generation run is in progress."""
        return self._generating

    @property
    def zone_generated(self) -> bool:
        """Whether the last run completed."""
        return self._layout is not None

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def layout(self) -> ZoneLayout | None:
        return self._layout

    @property
    def graph(self) -> RoomGraph | None:
        """The room graph; only complete once zone_generated is True."""
        return self._graph

    def start(
        self,
        zone: int = 0,
        sub_zone: int = 0,
        seed: int | None = None,
        max_distance: int | None = None,
    ) -> bool:
        """Begin a generation run.

        Returns:
            False if a run is already in progress, True otherwise.
        """
        if self._generating:
            logger.warning("zone_generation_already_running", zone=zone, sub_zone=sub_zone)
            return False

        if seed is None:
            seed = int(np.random.default_rng().integers(2**31))

        self._generating = True
        self._cancelled = False
        self._progress = 0.0
        self._graph = None
        self._layout = None
        self._steps = self._pipeline(zone, sub_zone, seed, max_distance)

        logger.info("zone_generation_started", zone=zone, sub_zone=sub_zone, seed=seed)
        return True

    def step(self) -> float:
        """Perform one bounded unit of work and return the progress."""
        if not self._generating or self._steps is None:
            return self._progress

        if self._cancelled:
            self._steps.close()
            self._finish()
            logger.info("zone_generation_cancelled", progress=self._progress)
            return self._progress

        try:
            report = next(self._steps)
        except StopIteration:
            self._finish()
            return self._progress
        except Exception:
            self._finish()
            raise

        self._progress = report.fraction
        if self.on_progress:
            self.on_progress(report)
        if report.fraction >= PROGRESS_COMPLETE:
            self._finish()
        return self._progress

    def cancel(self) -> None:
        """Stop the current run at the next step."""
        if self._generating:
            self._cancelled = True

    def _finish(self) -> None:
        self._generating = False
        self._steps = None

    def run(
        self,
        zone: int = 0,
        sub_zone: int = 0,
        seed: int | None = None,
        max_distance: int | None = None,
    ) -> ZoneLayout | None:
        """Generate a zone to completion synchronously.

        Returns:
            The ZoneLayout, or None if a run was already in progress or
            the run was cancelled.
        """
        if not self.start(zone, sub_zone, seed, max_distance):
            return None
        while self._generating:
            self.step()
        return self._layout

    async def run_async(
        self,
        zone: int = 0,
        sub_zone: int = 0,
        seed: int | None = None,
        max_distance: int | None = None,
    ) -> ZoneLayout | None:
        """Generate a zone, yielding to the event loop between steps."""
        if not self.start(zone, sub_zone, seed, max_distance):
            return None
        while self._generating:
            self.step()
            await asyncio.sleep(0)
        return self._layout

    def _pipeline(
        self,
        zone: int,
        sub_zone: int,
        seed: int,
        max_distance: int | None,
    ) -> Iterator[GenerationProgress]:
        rng = np.random.default_rng(seed)
        settings = self.config.orchestrator
        terrain = self.config.terrain_for(zone)
        room_length = settings.room_length

        graph = RoomGraphGenerator(self.config.graph, rng).generate(
            max_distance, zone=zone, sub_zone=sub_zone, room_length=room_length
        )
        self._graph = graph
        yield GenerationProgress(PROGRESS_GRAPH, "graph")

        rooms = list(graph)
        total = len(rooms)
        span = PROGRESS_ROOMS_END - PROGRESS_ROOMS_START
        decorations: list[PlacedDecoration] = []

        for done, room in enumerate(rooms, start=1):
            generate_room(room, terrain, rng)
            if settings.decorate:
                room.decorations = place_decorations(room, terrain.decoration, None, rng)
                decorations.extend(room.decorations)

            if self.on_room_finalized:
                self.on_room_finalized(room)

            if settings.gc_interval and done % settings.gc_interval == 0:
                gc.collect()

            if done % settings.rooms_per_batch == 0 or done == total:
                yield GenerationProgress(
                    PROGRESS_ROOMS_START + span * done / total,
                    "rooms",
                    rooms_done=done,
                    rooms_total=total,
                )

        span = PROGRESS_DOORS_END - PROGRESS_ROOMS_END
        for done, room in enumerate(rooms, start=1):
            _wire_doors(graph, room)
            if done % settings.doors_per_batch == 0 or done == total:
                yield GenerationProgress(
                    PROGRESS_ROOMS_END + span * done / total,
                    "doors",
                    rooms_done=done,
                    rooms_total=total,
                )

        combined = combine_layouts(graph)
        yield GenerationProgress(PROGRESS_COMBINED, "combine")

        navigation = combined != TileKind.WATER
        yield GenerationProgress(PROGRESS_NAVIGATION, "navigation")

        room_index = build_room_index(graph)
        yield GenerationProgress(PROGRESS_ROOM_INDEX, "room_index")

        self._layout = ZoneLayout(
            graph=graph,
            combined_layout=combined,
            navigation_mask=navigation,
            seed=seed,
            zone=zone,
            sub_zone=sub_zone,
            decorations=decorations,
            room_index=room_index,
        )
        logger.info(
            "zone_generation_complete",
            zone=zone,
            sub_zone=sub_zone,
            seed=seed,
            rooms=total,
            decorations=len(decorations),
        )
        if self.on_complete:
            self.on_complete(self._layout)
        yield GenerationProgress(PROGRESS_COMPLETE, "complete", rooms_done=total, rooms_total=total)


def _wire_doors(graph: RoomGraph, room: RoomNode) -> None:
    """Store world launch and landing positions on a room's doors."""
    for door in room.open_doors():
        neighbour = graph.room_at(room.coordinate.offset(door.direction))
        if neighbour is None or neighbour.tile_layout is None or room.tile_layout is None:
            logger.warning(
                "door_without_neighbour",
                coordinate=str(room.coordinate),
                direction=door.direction.name,
            )
            continue

        facing = door.direction.opposite()
        launch = door_location(room.tile_layout, door.direction, launch=True)
        landing = door_location(neighbour.tile_layout, facing, launch=False)
        other_launch = door_location(neighbour.tile_layout, facing, launch=True)

        door.launch_position = room.tile_to_world(*launch)
        door.landing_position = neighbour.tile_to_world(*landing)
        door.other_room_launch_position = neighbour.tile_to_world(*other_launch)


def combine_layouts(graph: RoomGraph) -> NDArray[np.uint8]:
    """Paste every room layout into one zone-wide grid (water elsewhere)."""
    length = graph.room_length
    side = graph.size * length
    combined = np.full((side, side), TileKind.WATER, dtype=np.uint8)

    for room in graph:
        if room.tile_layout is None:
            continue
        ox, oy = room.tile_origin
        combined[oy : oy + length, ox : ox + length] = room.tile_layout

    return combined


def build_room_index(graph: RoomGraph) -> dict[RoomType, list[RoomCoordinate]]:
    """Coordinates of every room, grouped by type."""
    index: dict[RoomType, list[RoomCoordinate]] = {}
    for room in graph:
        index.setdefault(room.room_type, []).append(room.coordinate)
    return index


def run_zone(
    seed: int,
    zone: int = 0,
    sub_zone: int = 0,
    config: ZoneGenConfig | None = None,
    max_distance: int | None = None,
) -> ZoneLayout:
    """
    Generate one zone synchronously (useful for testing).

    Args:
        seed: Random seed
        zone: Zone index
        sub_zone: Sub-zone index
        config: Zone generation configuration
        max_distance: Override for the room grid radius

    Returns:
        The generated ZoneLayout
    """
    orchestrator = ZoneOrchestrator(config)
    layout = orchestrator.run(zone, sub_zone, seed, max_distance)
    if layout is None:
        raise RuntimeError("Zone generation did not complete")
    return layout
