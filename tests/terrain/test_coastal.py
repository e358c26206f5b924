"""Tests for coastal refinement functions."""

import numpy as np

from zonegen.terrain.coastal import (
    count_landmasses,
    enforce_connectivity,
    find_flood_start,
    majority_smooth,
)


class TestMajoritySmooth:
    """Tests for majority filter smoothing."""

    def test_isolated_pixel_removed(self) -> None:
        """Single isolated land pixel is removed."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 2] = True
        result = majority_smooth(land_mask, iterations=1)
        assert not result[2, 2]

    def test_isolated_water_filled(self) -> None:
        """Single water pixel inside land is filled."""
        land_mask = np.ones((5, 5), dtype=bool)
        land_mask[2, 2] = False
        result = majority_smooth(land_mask, iterations=1)
        assert result[2, 2]

    def test_out_of_bounds_counts_as_land(self) -> None:
        """Corner cells see five out-of-bounds neighbours as land."""
        land_mask = np.zeros((5, 5), dtype=bool)
        result = majority_smooth(land_mask, iterations=1)
        # 5 out-of-bounds cells > 9 // 2
        assert result[0, 0] and result[0, 4] and result[4, 0] and result[4, 4]
        # Edge cells only have 3
        assert not result[0, 2]
        assert not result[2, 2]

    def test_solid_block_unchanged(self) -> None:
        """Solid land stays solid."""
        land_mask = np.ones((10, 10), dtype=bool)
        np.testing.assert_array_equal(majority_smooth(land_mask), land_mask)

    def test_input_not_mutated(self) -> None:
        """Smoothing returns a new array."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 2] = True
        majority_smooth(land_mask)
        assert land_mask[2, 2]

    def test_zero_iterations_copy(self) -> None:
        """Zero iterations returns an equal copy."""
        land_mask = np.eye(4, dtype=bool)
        result = majority_smooth(land_mask, iterations=0)
        np.testing.assert_array_equal(result, land_mask)
        assert result is not land_mask


class TestFindFloodStart:
    """Tests for choosing the connectivity seed."""

    def test_centre_when_land(self) -> None:
        """The centre cell is used when it is land."""
        land_mask = np.zeros((7, 7), dtype=bool)
        land_mask[3, 3] = True
        assert find_flood_start(land_mask) == (3, 3)

    def test_nearest_land_when_centre_is_water(self) -> None:
        """The closest land cell to the centre is used otherwise."""
        land_mask = np.zeros((7, 7), dtype=bool)
        land_mask[0, 0] = True
        land_mask[3, 5] = True
        assert find_flood_start(land_mask) == (3, 5)

    def test_tie_break_smallest_x_first(self) -> None:
        """Equidistant candidates resolve to the smallest x, then the smallest y."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 1] = True  # x=1, y=2
        land_mask[1, 2] = True  # x=2, y=1
        assert find_flood_start(land_mask) == (2, 1)

    def test_tie_break_same_x(self) -> None:
        """With equal x the lower row wins."""
        land_mask = np.zeros((7, 7), dtype=bool)
        land_mask[5, 3] = True
        land_mask[1, 3] = True
        assert find_flood_start(land_mask) == (1, 3)

    def test_no_land(self) -> None:
        """All-water masks have no start."""
        assert find_flood_start(np.zeros((4, 4), dtype=bool)) is None


class TestEnforceConnectivity:
    """Tests for single-landmass enforcement."""

    def test_single_component_unchanged(self) -> None:
        """Single connected component is unchanged."""
        land_mask = np.array([
            [False, False, False, False],
            [False, True,  True,  False],
            [False, True,  True,  False],
            [False, False, False, False],
        ])
        np.testing.assert_array_equal(enforce_connectivity(land_mask), land_mask)

    def test_keeps_centre_component_not_largest(self) -> None:
        """The component holding the centre wins even when smaller."""
        land_mask = np.zeros((9, 9), dtype=bool)
        land_mask[4, 4] = True
        land_mask[0:3, 0:9] = True
        result = enforce_connectivity(land_mask)
        assert result[4, 4]
        assert result.sum() == 1

    def test_tied_components_keep_smallest_x(self) -> None:
        """Of two equally near landmasses the one at smaller x survives."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 1] = True
        land_mask[1, 2] = True
        result = enforce_connectivity(land_mask)
        np.testing.assert_array_equal(np.argwhere(result), [[2, 1]])

    def test_diagonal_is_not_connected(self) -> None:
        """Connectivity is 4-neighbour only."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 2] = True
        land_mask[3, 3] = True
        result = enforce_connectivity(land_mask)
        assert result[2, 2]
        assert not result[3, 3]

    def test_all_water_returns_copy(self) -> None:
        """All-water input comes back as a distinct all-water array."""
        land_mask = np.zeros((6, 6), dtype=bool)
        result = enforce_connectivity(land_mask)
        assert not result.any()
        assert result is not land_mask

    def test_idempotent(self) -> None:
        """Re-running on its own output changes nothing."""
        rng = np.random.default_rng(5)
        land_mask = rng.random((20, 20)) > 0.45
        once = enforce_connectivity(land_mask)
        twice = enforce_connectivity(once)
        np.testing.assert_array_equal(once, twice)
        assert count_landmasses(once) <= 1

    def test_input_not_mutated(self) -> None:
        """The input mask is left untouched."""
        land_mask = np.zeros((5, 5), dtype=bool)
        land_mask[2, 2] = True
        land_mask[0, 0] = True
        enforce_connectivity(land_mask)
        assert land_mask[0, 0]


class TestCountLandmasses:
    """Tests for component counting."""

    def test_counts_separate_islands(self) -> None:
        land_mask = np.zeros((6, 6), dtype=bool)
        land_mask[0, 0] = True
        land_mask[5, 5] = True
        land_mask[2:4, 2:4] = True
        assert count_landmasses(land_mask) == 3
