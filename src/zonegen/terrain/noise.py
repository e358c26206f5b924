"""Noise generation functions for room terrain.

Provides classic 2D gradient (Perlin) noise, an octave sum over it with
per-octave random offsets, and the smoothstep helper used for island falloff.
Everything is vectorized: coordinates may be scalars or numpy arrays.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field, model_validator

from ..exceptions import InvalidParameterError
from .config import NoiseConfig

# Fixed permutation so that a coordinate always maps to the same gradient;
# per-room variety comes from the octave offsets.
_PERMUTATION_SEED = 1337

_GRADIENTS = np.array(
    [
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
    ],
    dtype=np.float64,
)


def _build_permutation(seed: int) -> NDArray[np.int64]:
    """Build the doubled 512-entry permutation table."""
    perm = np.random.default_rng(seed).permutation(256).astype(np.int64)
    return np.concatenate([perm, perm])


_PERMUTATION = _build_permutation(_PERMUTATION_SEED)


class NoiseSettings(BaseModel, frozen=True):
    """Noise parameters and octave offsets used to generate one room.

    Kept on the room after generation so decoration can sample the exact
    same terrain pattern.
    """

    octaves: int = Field(ge=1)
    persistence: float
    lacunarity: float
    noise_scale: float = Field(gt=0.0)
    threshold: float
    land_scale: float = Field(gt=0.0)
    octave_offsets_x: tuple[float, ...]
    octave_offsets_y: tuple[float, ...]

    @model_validator(mode="after")
    def _check_offsets(self) -> "NoiseSettings":
        if len(self.octave_offsets_x) != self.octaves or len(
            self.octave_offsets_y
        ) != self.octaves:
            raise ValueError(
                f"Expected {self.octaves} octave offsets per axis, got "
                f"{len(self.octave_offsets_x)} x and {len(self.octave_offsets_y)} y"
            )
        return self

    def with_threshold(self, threshold: float) -> "NoiseSettings":
        """Return a copy with a different land threshold."""
        return self.model_copy(update={"threshold": threshold})


def make_noise_settings(
    config: NoiseConfig,
    land_scale: float,
    rng: np.random.Generator,
) -> NoiseSettings:
    """Draw per-octave offsets and freeze them into NoiseSettings.

    Args:
        config: Noise parameters for the zone.
        land_scale: Island size multiplier for the room type.
        rng: Random number generator (consumes 2 * octaves draws).

    Returns:
        NoiseSettings for one room.

    Raises:
        InvalidParameterError: If octaves or land_scale are not positive.
    """
    if config.octaves < 1:
        raise InvalidParameterError(f"octaves must be >= 1, got {config.octaves}")
    if land_scale <= 0:
        raise InvalidParameterError(f"land_scale must be > 0, got {land_scale}")

    r = config.offset_range
    offsets_x = rng.uniform(-r, r, size=config.octaves)
    offsets_y = rng.uniform(-r, r, size=config.octaves)

    return NoiseSettings(
        octaves=config.octaves,
        persistence=config.persistence,
        lacunarity=config.lacunarity,
        noise_scale=config.noise_scale,
        threshold=config.threshold,
        land_scale=land_scale,
        octave_offsets_x=tuple(float(v) for v in offsets_x),
        octave_offsets_y=tuple(float(v) for v in offsets_y),
    )


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _gradient_dot(
    hashed: NDArray[np.int64],
    dx: NDArray[np.float64],
    dy: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Dot product of the hashed corner gradient with the offset vector."""
    grad = _GRADIENTS[hashed & 7]
    return grad[..., 0] * dx + grad[..., 1] * dy


def gradient_noise(x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Sample 2D gradient noise in roughly [-1, 1].

    Args:
        x: X coordinates (scalar or array).
        y: Y coordinates, broadcastable against x.

    Returns:
        Noise values with the broadcast shape of x and y.
    """
    x, y = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
    )

    x0 = np.floor(x).astype(np.int64)
    y0 = np.floor(y).astype(np.int64)
    xf = x - x0
    yf = y - y0
    xi = x0 & 255
    yi = y0 & 255

    perm = _PERMUTATION
    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    n00 = _gradient_dot(aa, xf, yf)
    n10 = _gradient_dot(ba, xf - 1.0, yf)
    n01 = _gradient_dot(ab, xf, yf - 1.0)
    n11 = _gradient_dot(bb, xf - 1.0, yf - 1.0)

    u = _fade(xf)
    v = _fade(yf)
    nx0 = n00 + u * (n10 - n00)
    nx1 = n01 + u * (n11 - n01)
    return nx0 + v * (nx1 - nx0)


def perlin_noise_01(x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Gradient noise rescaled to [0, 1]."""
    return np.clip((gradient_noise(x, y) + 1.0) * 0.5, 0.0, 1.0)


def sample_noise(
    x: ArrayLike,
    y: ArrayLike,
    settings: NoiseSettings,
) -> float | NDArray[np.float64]:
    """Sum octaves of gradient noise at the given coordinates.

    Each octave shifts the coordinate by its own offset before scaling.
    Frequency starts at noise_scale and is multiplied by lacunarity per
    octave; amplitude starts at 1 and is multiplied by persistence.

    Args:
        x: X coordinates in world tiles.
        y: Y coordinates in world tiles.
        settings: Room noise settings.

    Returns:
        Noise value(s) clamped to [0, 1]. A float for scalar input.
    """
    xs = np.asarray(x, dtype=np.float64)
    ys = np.asarray(y, dtype=np.float64)
    value = np.zeros(np.broadcast_shapes(xs.shape, ys.shape), dtype=np.float64)

    amplitude = 1.0
    frequency = settings.noise_scale
    for i in range(settings.octaves):
        sample_x = (xs + settings.octave_offsets_x[i]) * frequency
        sample_y = (ys + settings.octave_offsets_y[i]) * frequency
        value += perlin_noise_01(sample_x, sample_y) * amplitude
        amplitude *= settings.persistence
        frequency *= settings.lacunarity

    value = np.clip(value, 0.0, 1.0)
    if value.ndim == 0:
        return float(value)
    return value


def smoothstep(edge0: float, edge1: float, x: ArrayLike) -> NDArray[np.float64]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((np.asarray(x, dtype=np.float64) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
