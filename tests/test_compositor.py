"""Tests for flood surface compositing."""

import numpy as np
import pytest

from worldwater.flood.compositor import (
    comparison_band,
    composite,
    composite_tile,
    flood_mask,
    smoothstep,
)
from worldwater.flood.constants import COMPARISON_OPACITY, EDGE_SOFTNESS
from worldwater.flood.models import FloodDecision
from worldwater.utils import InvalidInput


class TestSmoothstep:
    def test_edges_and_midpoint(self):
        assert smoothstep(0.0, 1.0, -1.0) == 0.0
        assert smoothstep(0.0, 1.0, 0.5) == pytest.approx(0.5)
        assert smoothstep(0.0, 1.0, 2.0) == 1.0


class TestFloodMask:
    def test_half_at_surface(self):
        assert flood_mask(1.0, 1.0) == pytest.approx(0.5)

    def test_monotonic_in_height(self):
        heights = np.linspace(-5.0, 5.0, 2001)
        mask = flood_mask(heights, 0.7)
        assert (np.diff(mask) <= 0).all()

    @pytest.mark.parametrize("height, expected", [
        (-np.inf, 1.0), (-1e9, 1.0), (1e9, 0.0), (np.inf, 0.0),
    ])
    def test_limits(self, height, expected):
        assert flood_mask(height, 0.0) == expected

    def test_fully_wet_beyond_soft_edge(self):
        assert flood_mask(1.0 - EDGE_SOFTNESS, 1.0) == 1.0
        assert flood_mask(1.0 + EDGE_SOFTNESS, 1.0) == 0.0

    def test_non_positive_softness_rejected(self):
        with pytest.raises(InvalidInput):
            flood_mask(0.0, 0.0, edge_softness=0.0)


class TestComposite:
    def test_low_terrain_flooded(self):
        d = composite(terrain_height=-35.0, undulation=-33.0, sea_level_rise=1.0, alpha=0.55)
        assert d.is_flooded
        assert d.flood_opacity == pytest.approx(0.55)
        assert not d.is_comparison_band

    def test_high_terrain_dry(self):
        d = composite(terrain_height=50.0, undulation=-33.0, sea_level_rise=1.0, alpha=0.55)
        assert not d.is_flooded
        assert d.flood_opacity == 0.0

    def test_undulation_shifts_flood_surface(self):
        # Same terrain height, but a negative undulation lowers the water
        high_geoid = composite(0.0, 20.0, 0.5, 0.55)
        low_geoid = composite(0.0, -20.0, 0.5, 0.55)
        assert high_geoid.is_flooded
        assert not low_geoid.is_flooded

    def test_opacity_scales_with_alpha(self):
        d = composite(-10.0, 0.0, 1.0, alpha=0.2)
        assert d.flood_opacity == pytest.approx(0.2)

    def test_no_rise_no_flood(self):
        d = composite(-10.0, 0.0, 0.0, 0.55)
        assert d == FloodDecision.dry()

    def test_open_water_never_flooded(self):
        d = composite(-10.0, 0.0, 2.0, 0.55, comparison_sea_level_rise=1.0, is_water=True)
        assert d == FloodDecision.dry()


class TestComparisonBand:
    def test_terrain_between_surfaces(self):
        d = composite(1.5, 0.0, 2.0, 0.55, comparison_sea_level_rise=1.0)
        assert d.is_comparison_band
        assert d.comparison_opacity == COMPARISON_OPACITY
        assert d.opacity == COMPARISON_OPACITY

    def test_band_is_half_open(self):
        assert comparison_band(1.0, 2.0, 1.0)
        assert not comparison_band(2.0, 2.0, 1.0)

    def test_band_symmetric_in_order(self):
        heights = np.linspace(0.0, 3.0, 31)
        assert np.array_equal(
            comparison_band(heights, 2.0, 1.0),
            comparison_band(heights, 1.0, 2.0),
        )

    def test_equal_levels_give_empty_band(self):
        heights = np.linspace(-100.0, 100.0, 4001)
        tile = composite_tile(heights, 5.0, 1.2, 0.55, comparison_sea_level_rise=1.2)
        assert not tile.is_comparison_band.any()

    def test_band_outside_range(self):
        d = composite(5.0, 0.0, 2.0, 0.55, comparison_sea_level_rise=1.0)
        assert not d.is_comparison_band
        assert d.comparison_opacity == 0.0

    def test_no_comparison_without_previous(self):
        assert not composite(1.5, 0.0, 2.0, 0.55).is_comparison_band


class TestCompositeTile:
    def test_broadcasts_scalar_undulation(self):
        heights = np.array([[-5.0, 0.0], [5.0, 50.0]])
        tile = composite_tile(heights, 0.0, 1.0, 0.55)
        assert tile.is_flooded.shape == (2, 2)
        assert tile.is_flooded.tolist() == [[True, True], [False, False]]

    def test_water_mask_excludes_ocean(self):
        heights = np.array([-5.0, -5.0, -5.0])
        water = np.array([1.0, 0.2, 0.6])
        tile = composite_tile(heights, 0.0, 1.0, 0.55, water_mask=water)
        assert tile.is_flooded.tolist() == [False, True, False]
        assert tile.flood_opacity[0] == 0.0

    def test_water_mask_clears_band(self):
        tile = composite_tile(
            np.array([1.5, 1.5]), 0.0, 2.0, 0.55,
            comparison_sea_level_rise=1.0,
            water_mask=np.array([True, False]),
        )
        assert tile.is_comparison_band.tolist() == [False, True]

    def test_matches_scalar_composite(self):
        heights = np.array([-1.0, 0.9, 1.0, 1.2, 3.0])
        tile = composite_tile(heights, 0.0, 1.0, 0.55, comparison_sea_level_rise=0.5)
        for i, h in enumerate(heights):
            d = composite(h, 0.0, 1.0, 0.55, comparison_sea_level_rise=0.5)
            assert d.is_flooded == bool(tile.is_flooded[i])
            assert d.flood_opacity == pytest.approx(tile.flood_opacity[i])
            assert d.is_comparison_band == bool(tile.is_comparison_band[i])
            assert d.opacity == pytest.approx(tile.opacity[i])
