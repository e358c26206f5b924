"""Zone generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from .terrain.config import TerrainConfig


class GraphConfig(BaseModel):
    """Room graph topology parameters."""

    max_distance: int = Field(
        default=8, ge=1, description="Grid cells from the starter to the edge"
    )
    boss_path_min: int = Field(default=1, ge=0, description="Fewest normal rooms on the boss path")
    boss_path_max: int = Field(default=3, ge=0, description="Most normal rooms on the boss path")
    branch_min: int = Field(default=2, ge=0, description="Fewest branch rooms")
    branch_max: int = Field(default=4, ge=0, description="Most branch rooms")
    size_scaler_per_sub_zone: int = Field(
        default=1, ge=0, description="Extra path and branch rooms per sub-zone index"
    )
    sub_zones_per_zone: int = Field(
        default=2, ge=1, description="Sub-zones per zone; the last gets a boss portal"
    )
    path_attempts: int = Field(default=20, ge=1, description="Direction retries per path step")
    branch_attempts: int = Field(default=50, ge=1, description="Placement retries per branch room")
    weight_decay: float = Field(default=1.5, ge=0.0, description="Weight removed from every room per branch")
    leaf_weight: float = Field(default=5.0, ge=1.0, description="Weight given to a new branch room")
    door_chance: float = Field(default=0.35, ge=0.0, le=1.0, description="Extra door probability between normal rooms")
    lock_chance: float = Field(default=0.5, ge=0.0, le=1.0, description="Probability a leaf is gated")
    totem_chance: float = Field(default=0.5, ge=0.0, le=1.0, description="Probability a leaf becomes a totem room")

    @model_validator(mode="after")
    def _check_ranges(self) -> "GraphConfig":
        if self.boss_path_min > self.boss_path_max:
            raise ValueError("boss_path_min must not exceed boss_path_max")
        if self.branch_min > self.branch_max:
            raise ValueError("branch_min must not exceed branch_max")
        return self


class OrchestratorConfig(BaseModel):
    """Pacing of cooperative zone generation."""

    room_length: int = Field(default=32, ge=8, description="Room side length in tiles")
    rooms_per_batch: int = Field(default=2, ge=1, description="Rooms generated per step")
    doors_per_batch: int = Field(default=8, ge=1, description="Rooms wired per door step")
    gc_interval: int = Field(
        default=0, ge=0, description="Force a collection every N rooms (0 = never)"
    )
    decorate: bool = Field(default=True, description="Place foliage in every room")


class ZoneGenConfig(BaseModel):
    """Complete configuration for zone generation."""

    graph: GraphConfig = Field(default_factory=GraphConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    zones: list[TerrainConfig] = Field(
        default_factory=lambda: [TerrainConfig()],
        description="Terrain settings per zone index",
    )

    def terrain_for(self, zone: int) -> TerrainConfig:
        """Terrain settings for a zone, reusing the last entry past the end."""
        if not self.zones:
            return TerrainConfig()
        return self.zones[min(max(zone, 0), len(self.zones) - 1)]


def load_config(config_path: Path) -> ZoneGenConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed ZoneGenConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return ZoneGenConfig.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
