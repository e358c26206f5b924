"""Terrain generation configuration models."""

from pydantic import BaseModel, Field

from ..types import RoomType


class NoiseConfig(BaseModel):
    """Octave noise parameters for room island generation."""

    octaves: int = Field(default=3, ge=1, description="Number of noise octaves")
    persistence: float = Field(
        default=0.5, description="Amplitude multiplier per octave"
    )
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    noise_scale: float = Field(
        default=0.1, gt=0.0, description="Base frequency (smaller = larger features)"
    )
    threshold: float = Field(
        default=0.4, description="Island value above which a tile is land"
    )
    offset_range: float = Field(
        default=1000.0, gt=0.0, description="Per-octave offsets drawn from [-r, r)"
    )


def _default_land_scales() -> dict[RoomType, float]:
    return {
        RoomType.STARTER: 1.0,
        RoomType.NORMAL: 1.5,
        RoomType.SUB_ZONE_BOSS: 1.95,
        RoomType.BOSS_PORTAL: 1.95,
        RoomType.SHOP: 0.8,
        RoomType.REWARD: 0.8,
        RoomType.TOTEM: 1.2,
    }


class IslandConfig(BaseModel):
    """Island shaping parameters."""

    land_scales: dict[RoomType, float] = Field(
        default_factory=_default_land_scales,
        description="Radial falloff scale per room type (higher = larger island)",
    )
    central_landmass_radius: int = Field(
        default=2, ge=0, description="Half-size of the land block forced in starter rooms"
    )
    smoothing_iterations: int = Field(
        default=1, ge=0, description="Majority filter passes"
    )

    def land_scale_for(self, room_type: RoomType) -> float:
        """Land scale for a room type, 1.0 when not configured."""
        return self.land_scales.get(room_type, 1.0)


class PathConfig(BaseModel):
    """Arrival and path carving around door landings."""

    arrival_radius: int = Field(
        default=2, ge=0, description="Half-size of the arrival block at a landing"
    )
    path_half_width: int = Field(
        default=1, ge=0, description="Tiles either side of the path centre line"
    )
    door_inset: int = Field(
        default=2, description="Tiles between the shoreline and a door position"
    )


class FoliageKindConfig(BaseModel):
    """A single decoration kind with its selection weight."""

    kind: str
    relative_weight: float = Field(default=1.0, ge=0.0)


class FoliageGroupConfig(BaseModel):
    """A decoration group sampled with its own Poisson-disc parameters."""

    name: str
    kinds: list[FoliageKindConfig] = Field(default_factory=list)
    min_distance: float = Field(
        default=1.5, gt=0.0, description="Minimum spacing between pieces"
    )
    max_attempts: int = Field(
        default=30, ge=1, description="Candidates tried around each active point"
    )
    is_land_group: bool = Field(
        default=True, description="Spawns on land (True) or water (False)"
    )
    use_noise_filter: bool = Field(
        default=False, description="Reject samples below a noise threshold"
    )
    match_room_noise: bool = Field(
        default=False, description="Filter with the room's own island noise"
    )
    noise_scale: float = Field(default=0.1, gt=0.0)
    noise_threshold: float = Field(default=0.5)
    noise_offset: tuple[float, float] = (0.0, 0.0)
    jitter: float = Field(
        default=0.2, ge=0.0, description="Random offset applied to placed pieces"
    )


def _default_foliage_groups() -> list[FoliageGroupConfig]:
    return [
        FoliageGroupConfig(
            name="reeds",
            kinds=[
                FoliageKindConfig(kind="reed", relative_weight=3.0),
                FoliageKindConfig(kind="cattail", relative_weight=1.0),
            ],
            min_distance=2.0,
            is_land_group=True,
            use_noise_filter=True,
            match_room_noise=True,
            noise_threshold=0.45,
        ),
        FoliageGroupConfig(
            name="shrubs",
            kinds=[
                FoliageKindConfig(kind="bush", relative_weight=2.0),
                FoliageKindConfig(kind="mushroom", relative_weight=1.0),
            ],
            min_distance=3.0,
            is_land_group=True,
        ),
        FoliageGroupConfig(
            name="lily_pads",
            kinds=[FoliageKindConfig(kind="lily_pad")],
            min_distance=2.5,
            is_land_group=False,
            use_noise_filter=True,
            noise_scale=0.15,
            noise_threshold=0.5,
        ),
    ]


class DecorationConfig(BaseModel):
    """Foliage placement parameters."""

    groups: list[FoliageGroupConfig] = Field(default_factory=_default_foliage_groups)
    special_room_density_scale: float = Field(
        default=5.0,
        gt=0.0,
        description="Land spacing multiplier for boss, shop, reward and totem rooms",
    )
    max_points_per_group: int = Field(
        default=10_000, ge=1, description="Sampler cap per group per room"
    )


class TerrainConfig(BaseModel):
    """Complete per-zone terrain configuration."""

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    island: IslandConfig = Field(default_factory=IslandConfig)
    paths: PathConfig = Field(default_factory=PathConfig)
    decoration: DecorationConfig = Field(default_factory=DecorationConfig)
