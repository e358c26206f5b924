"""Decoration placement: Poisson-disc scattered foliage per room."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ..types import RoomType, TileKind
from .config import DecorationConfig, FoliageGroupConfig, FoliageKindConfig
from .poisson import filter_by_noise, poisson_disc_sample

if TYPE_CHECKING:
    from ..rooms import RoomNode

logger = logging.getLogger(__name__)


@dataclass
class PlacedDecoration:
    """A placed piece of foliage in world coordinates."""

    x: float
    y: float
    kind: str
    group: str
    decoration_id: str


def density_scale_for(room_type: RoomType, config: DecorationConfig) -> float:
    """Land spacing multiplier: sparse in special rooms, 1.0 elsewhere."""
    if room_type.is_special:
        return config.special_room_density_scale
    return 1.0


def select_kind(kinds: list[FoliageKindConfig], rng: np.random.Generator) -> str | None:
    """Weighted pick of a foliage kind.

    Returns the first kind when all weights are zero and None when the
    group has no kinds.
    """
    if not kinds:
        return None

    total = sum(k.relative_weight for k in kinds)
    if total <= 0:
        return kinds[0].kind

    draw = rng.random() * total
    cumulative = 0.0
    for option in kinds:
        cumulative += option.relative_weight
        if draw <= cumulative:
            return option.kind
    return kinds[-1].kind


def _is_valid_position(room: "RoomNode", x: int, y: int, land_group: bool) -> bool:
    if not room.in_room(x, y):
        return False
    kind = room.tile_layout[y, x]
    wanted = kind == TileKind.LAND if land_group else kind == TileKind.WATER
    return bool(wanted) and not room.is_tile_bordering_change(x, y)


def _place_group(
    room: "RoomNode",
    group: FoliageGroupConfig,
    density_scale: float,
    max_points: int,
    rng: np.random.Generator,
    start_id: int,
) -> list[PlacedDecoration]:
    min_distance = group.min_distance * density_scale if group.is_land_group else group.min_distance
    origin = room.tile_origin

    points = poisson_disc_sample(
        (float(origin[0]), float(origin[1])),
        float(room.room_length),
        min_distance,
        max_attempts=group.max_attempts,
        seed=rng,
        max_points=max_points,
    )

    if group.use_noise_filter:
        if group.match_room_noise and room.noise_settings is not None:
            points = filter_by_noise(
                points,
                group.noise_threshold,
                room_settings=room.noise_settings,
                room_origin=origin,
                room_size=room.room_length,
            )
        else:
            points = filter_by_noise(
                points,
                group.noise_threshold,
                noise_scale=group.noise_scale,
                noise_offset=group.noise_offset,
            )

    placed: list[PlacedDecoration] = []
    for px, py in points:
        tx, ty = room.world_to_tile(px, py)
        if not _is_valid_position(room, tx, ty, group.is_land_group):
            continue

        kind = select_kind(group.kinds, rng)
        if kind is None:
            continue

        jitter_x, jitter_y = rng.uniform(-group.jitter, group.jitter, size=2)
        placed.append(
            PlacedDecoration(
                x=px + float(jitter_x),
                y=py + float(jitter_y),
                kind=kind,
                group=group.name,
                decoration_id=f"{group.name}_{room.coordinate.x}_{room.coordinate.y}_{start_id + len(placed)}",
            )
        )

    return placed


def place_decorations(
    room: "RoomNode",
    config: DecorationConfig,
    density_scale: float | None,
    rng: np.random.Generator,
) -> list[PlacedDecoration]:
    """Scatter every configured foliage group over a room.

    Args:
        room: Room with its tile layout and noise settings set.
        config: Decoration configuration for the room's zone.
        density_scale: Land spacing multiplier, or None to derive it from
            the room type.
        rng: Random number generator.

    Returns:
        Placed decorations for all groups.
    """
    if room.tile_layout is None:
        logger.warning(f"Room {room.coordinate} has no layout; skipping decoration")
        return []

    if density_scale is None:
        density_scale = density_scale_for(room.room_type, config)

    decorations: list[PlacedDecoration] = []
    for group in config.groups:
        if not group.kinds:
            continue
        decorations.extend(
            _place_group(
                room,
                group,
                density_scale,
                config.max_points_per_group,
                rng,
                start_id=len(decorations),
            )
        )

    logger.debug(
        f"Placed {len(decorations)} decorations in room {room.coordinate} "
        f"(density scale {density_scale})"
    )
    return decorations
