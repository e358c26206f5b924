"""Tests for island shaping functions."""

import numpy as np
import pytest

from zonegen.exceptions import InvalidParameterError
from zonegen.terrain.island import (
    add_central_landmass,
    generate_land_mask,
    island_value,
    meets_land_threshold,
    radial_falloff,
)
from zonegen.terrain.noise import NoiseSettings


class TestRadialFalloff:
    """Tests for radial falloff."""

    def test_centre_is_one(self) -> None:
        """Falloff is 1 at the room centre."""
        value = radial_falloff(16.0, 16.0, 32, 32, 0, 0, land_scale=1.0)
        assert float(value) == pytest.approx(1.0)

    def test_corner_is_zero(self) -> None:
        """Falloff reaches 0 beyond half the room size."""
        value = radial_falloff(0.0, 0.0, 32, 32, 0, 0, land_scale=1.0)
        assert float(value) == pytest.approx(0.0)

    def test_respects_room_offset(self) -> None:
        """The centre moves with the room's world offset."""
        value = radial_falloff(80.0, 48.0, 32, 32, 64, 32, land_scale=1.0)
        assert float(value) == pytest.approx(1.0)

    def test_larger_land_scale_widens_island(self) -> None:
        """A larger land scale keeps more falloff at the same distance."""
        small = radial_falloff(24.0, 16.0, 32, 32, 0, 0, land_scale=1.0)
        large = radial_falloff(24.0, 16.0, 32, 32, 0, 0, land_scale=1.95)
        assert float(large) > float(small)

    def test_monotonic_from_centre(self) -> None:
        """Falloff never increases moving away from the centre."""
        xs = np.arange(16, 32, dtype=np.float64)
        values = radial_falloff(xs, 16.0, 32, 32, 0, 0, land_scale=1.5)
        assert np.all(np.diff(values) <= 1e-12)


class TestGenerateLandMask:
    """Tests for land mask synthesis."""

    def test_shape_and_dtype(self, noise_settings: NoiseSettings) -> None:
        """Mask is (height, width) booleans."""
        mask = generate_land_mask(24, 16, 0, 0, noise_settings)
        assert mask.shape == (16, 24)
        assert mask.dtype == np.bool_

    def test_unreachable_threshold_all_water(self, noise_settings: NoiseSettings) -> None:
        """A threshold above 1 produces no land and no error."""
        mask = generate_land_mask(32, 32, 0, 0, noise_settings.with_threshold(1.1))
        assert not mask.any()

    def test_negative_threshold_all_land(self, noise_settings: NoiseSettings) -> None:
        """Island values are never negative, so a negative threshold is all land."""
        mask = generate_land_mask(32, 32, 0, 0, noise_settings.with_threshold(-0.1))
        assert mask.all()

    def test_corners_are_water(self, noise_settings: NoiseSettings) -> None:
        """Falloff drives the room corners to water."""
        mask = generate_land_mask(32, 32, 0, 0, noise_settings)
        assert not mask[0, 0]
        assert not mask[31, 31]

    def test_deterministic(self, noise_settings: NoiseSettings) -> None:
        """Same settings and offset give the same mask."""
        a = generate_land_mask(32, 32, 64, 96, noise_settings)
        b = generate_land_mask(32, 32, 64, 96, noise_settings)
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-4, 8)])
    def test_non_positive_size_rejected(
        self, noise_settings: NoiseSettings, width: int, height: int
    ) -> None:
        """Non-positive room sizes are rejected."""
        with pytest.raises(InvalidParameterError):
            generate_land_mask(width, height, 0, 0, noise_settings)

    def test_matches_pointwise_threshold(self, noise_settings: NoiseSettings) -> None:
        """Each mask cell agrees with the single-point threshold test."""
        settings = noise_settings.with_threshold(0.2)
        mask = generate_land_mask(16, 16, 32, 16, settings)
        for x, y in [(0, 0), (8, 8), (5, 11), (15, 3)]:
            expected = meets_land_threshold(x + 32, y + 16, 16, 16, 32, 16, settings)
            assert mask[y, x] == expected

    def test_island_value_scalar(self, noise_settings: NoiseSettings) -> None:
        """island_value returns a float for scalar input."""
        assert isinstance(island_value(8.0, 8.0, 16, 16, 0, 0, noise_settings), float)


class TestCentralLandmass:
    """Tests for the forced central block."""

    def test_block_is_land(self) -> None:
        """A 5x5 block around the centre becomes land."""
        mask = np.zeros((16, 16), dtype=bool)
        result = add_central_landmass(mask, radius=2)
        assert result[6:11, 6:11].all()
        assert result.sum() == 25

    def test_input_not_mutated(self) -> None:
        """The input mask is left untouched."""
        mask = np.zeros((8, 8), dtype=bool)
        add_central_landmass(mask)
        assert not mask.any()
