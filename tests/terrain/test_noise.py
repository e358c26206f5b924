"""Tests for gradient noise functions."""

import numpy as np
import pytest
from pydantic import ValidationError

from zonegen.exceptions import InvalidParameterError
from zonegen.terrain.config import NoiseConfig
from zonegen.terrain.noise import (
    NoiseSettings,
    gradient_noise,
    make_noise_settings,
    perlin_noise_01,
    sample_noise,
    smoothstep,
)


class TestGradientNoise:
    """Tests for the base gradient noise."""

    def test_zero_at_lattice_points(self) -> None:
        """Gradient noise vanishes at integer coordinates."""
        xs = np.array([0.0, 1.0, 5.0, -3.0, 100.0])
        ys = np.array([0.0, 2.0, 7.0, 4.0, -50.0])
        np.testing.assert_allclose(gradient_noise(xs, ys), 0.0, atol=1e-12)

    def test_deterministic(self) -> None:
        """Same coordinates give the same values."""
        xs = np.linspace(0, 10, 50)
        ys = np.linspace(-5, 5, 50)
        np.testing.assert_array_equal(gradient_noise(xs, ys), gradient_noise(xs, ys))

    def test_rescaled_range(self) -> None:
        """Rescaled noise is within [0, 1]."""
        ys, xs = np.mgrid[0:20:0.37, 0:20:0.41]
        values = perlin_noise_01(xs, ys)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_broadcasts(self) -> None:
        """Scalar y broadcasts against an x array."""
        values = gradient_noise(np.array([0.5, 1.5, 2.5]), 0.5)
        assert values.shape == (3,)


class TestSampleNoise:
    """Tests for octave noise sampling."""

    def test_output_range(self, noise_settings: NoiseSettings) -> None:
        """Summed octaves are clamped to [0, 1]."""
        ys, xs = np.mgrid[0:32, 0:32].astype(np.float64)
        values = sample_noise(xs, ys, noise_settings)
        assert values.shape == (32, 32)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_scalar_returns_float(self, noise_settings: NoiseSettings) -> None:
        """Scalar coordinates give a plain float."""
        value = sample_noise(3.5, 7.25, noise_settings)
        assert isinstance(value, float)

    def test_scalar_matches_array(self, noise_settings: NoiseSettings) -> None:
        """Scalar sampling agrees with the vectorized path."""
        xs = np.array([1.0, 2.5, 10.0])
        ys = np.array([4.0, 0.5, 8.0])
        values = sample_noise(xs, ys, noise_settings)
        for i in range(3):
            assert sample_noise(xs[i], ys[i], noise_settings) == pytest.approx(values[i])

    def test_offsets_change_pattern(self) -> None:
        """Different octave offsets give different fields."""
        ys, xs = np.mgrid[0:16, 0:16].astype(np.float64)
        a = make_noise_settings(NoiseConfig(), 1.0, np.random.default_rng(1))
        b = make_noise_settings(NoiseConfig(), 1.0, np.random.default_rng(2))
        assert not np.array_equal(sample_noise(xs, ys, a), sample_noise(xs, ys, b))


class TestNoiseSettings:
    """Tests for noise settings creation."""

    def test_offsets_per_octave(self, rng: np.random.Generator) -> None:
        """One offset per octave on each axis, within the offset range."""
        settings = make_noise_settings(NoiseConfig(octaves=5), 1.0, rng)
        assert len(settings.octave_offsets_x) == 5
        assert len(settings.octave_offsets_y) == 5
        for v in settings.octave_offsets_x + settings.octave_offsets_y:
            assert -1000.0 <= v < 1000.0

    def test_same_seed_same_settings(self) -> None:
        """Offsets come only from the passed generator."""
        a = make_noise_settings(NoiseConfig(), 1.5, np.random.default_rng(7))
        b = make_noise_settings(NoiseConfig(), 1.5, np.random.default_rng(7))
        assert a == b

    def test_zero_octaves_rejected(self, rng: np.random.Generator) -> None:
        """Zero octaves is a configuration error."""
        config = NoiseConfig.model_construct(octaves=0)
        with pytest.raises(InvalidParameterError):
            make_noise_settings(config, 1.0, rng)

    def test_non_positive_land_scale_rejected(self, rng: np.random.Generator) -> None:
        """Land scale must be positive."""
        with pytest.raises(InvalidParameterError):
            make_noise_settings(NoiseConfig(), 0.0, rng)

    def test_config_validates_octaves(self) -> None:
        """The pydantic config refuses zero octaves."""
        with pytest.raises(ValidationError):
            NoiseConfig(octaves=0)

    def test_mismatched_offsets_rejected(self) -> None:
        """Offset tuples must match the octave count."""
        with pytest.raises(ValidationError):
            NoiseSettings(
                octaves=2,
                persistence=0.5,
                lacunarity=2.0,
                noise_scale=0.1,
                threshold=0.4,
                land_scale=1.0,
                octave_offsets_x=(1.0,),
                octave_offsets_y=(1.0, 2.0),
            )

    def test_with_threshold_copies(self, noise_settings: NoiseSettings) -> None:
        """with_threshold leaves the original untouched."""
        changed = noise_settings.with_threshold(0.9)
        assert changed.threshold == 0.9
        assert noise_settings.threshold == 0.4
        assert changed.octave_offsets_x == noise_settings.octave_offsets_x


class TestSmoothstep:
    """Tests for smoothstep helper."""

    def test_edges(self) -> None:
        """Smoothstep clamps at and beyond the edges."""
        values = smoothstep(0.0, 1.0, np.array([-1.0, 0.0, 0.5, 1.0, 2.0]))
        np.testing.assert_allclose(values, [0.0, 0.0, 0.5, 1.0, 1.0])
