"""Flood surface compositing for one fragment or a block of fragments.

The flood surface at a point is the local geoid undulation plus the sea
level rise, i.e. an ellipsoid-referenced height comparable with terrain
heights. Terrain below it is underwater, with a smoothstep band of
``edge_softness`` meters on either side instead of a hard threshold.

When a comparison level is supplied, terrain between the two flood surfaces
is marked as the comparison band, which takes over from the flood shading
for that point. Pre-existing open water is never shaded.
"""

from __future__ import annotations

import numpy as np

from worldwater.flood.constants import (
    COMPARISON_OPACITY,
    EDGE_SOFTNESS,
    FLOOD_EPSILON,
    WATER_MASK_THRESHOLD,
)
from worldwater.flood.models import FloodDecision, FloodTile
from worldwater.utils import InvalidInput


def smoothstep(edge0, edge1, x):
    """Hermite interpolation between two edges, clamped to [0, 1]."""
    t = np.clip((np.asarray(x, dtype=np.float64) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def flood_mask(terrain_height, flood_surface, edge_softness: float = EDGE_SOFTNESS):
    """Soft membership in [0, 1]: 1 well below the surface, 0 well above."""
    if edge_softness <= 0:
        raise InvalidInput(f"Edge softness must be positive, got {edge_softness}")
    return 1.0 - smoothstep(flood_surface - edge_softness, flood_surface + edge_softness, terrain_height)


def comparison_band(terrain_height, flood_surface, comparison_surface):
    """True where terrain lies in [lower, upper) of the two flood surfaces."""
    lower = np.minimum(flood_surface, comparison_surface)
    upper = np.maximum(flood_surface, comparison_surface)
    h = np.asarray(terrain_height, dtype=np.float64)
    return (h >= lower) & (h < upper)


def composite_tile(
    terrain_heights,
    undulations,
    sea_level_rise: float,
    alpha: float,
    *,
    comparison_sea_level_rise: float | None = None,
    water_mask=None,
    edge_softness: float = EDGE_SOFTNESS,
    comparison_opacity: float = COMPARISON_OPACITY,
) -> FloodTile:
    """Vectorized flood decisions for broadcastable height/undulation arrays.

    Args:
        terrain_heights: Ellipsoid-referenced terrain heights (m).
        undulations: Geoid undulation at each point (m).
        sea_level_rise: Active flood level above mean sea level (m).
        alpha: Current animated flood opacity.
        comparison_sea_level_rise: Previous snapshot level when the
            comparison overlay is shown, else None.
        water_mask: Boolean or [0, 1] wet-mask; True / > 0.5 is open water.
        edge_softness: Half-width of the soft flood edge (m).
        comparison_opacity: Fixed opacity of the comparison band.
    """
    h, g = np.broadcast_arrays(
        np.asarray(terrain_heights, dtype=np.float64),
        np.asarray(undulations, dtype=np.float64),
    )
    flood_surface = g + sea_level_rise

    if sea_level_rise > 0:
        mask = flood_mask(h, flood_surface, edge_softness)
    else:
        mask = np.zeros(h.shape)

    if comparison_sea_level_rise is not None and comparison_sea_level_rise > 0:
        band = comparison_band(h, flood_surface, g + comparison_sea_level_rise)
    else:
        band = np.zeros(h.shape, dtype=bool)

    if water_mask is not None:
        wet = np.broadcast_to(np.asarray(water_mask, dtype=np.float64), h.shape)
        dry_land = ~(wet > WATER_MASK_THRESHOLD)
        mask = np.where(dry_land, mask, 0.0)
        band = band & dry_land

    return FloodTile(
        flood_mask=mask,
        is_flooded=mask > FLOOD_EPSILON,
        flood_opacity=alpha * mask,
        is_comparison_band=band,
        comparison_opacity=np.where(band, comparison_opacity, 0.0),
    )


def composite(
    terrain_height: float,
    undulation: float,
    sea_level_rise: float,
    alpha: float,
    *,
    comparison_sea_level_rise: float | None = None,
    is_water: bool = False,
    edge_softness: float = EDGE_SOFTNESS,
    comparison_opacity: float = COMPARISON_OPACITY,
) -> FloodDecision:
    """Flood decision for a single fragment."""
    if is_water:
        return FloodDecision.dry()

    tile = composite_tile(
        terrain_height,
        undulation,
        sea_level_rise,
        alpha,
        comparison_sea_level_rise=comparison_sea_level_rise,
        edge_softness=edge_softness,
        comparison_opacity=comparison_opacity,
    )
    return FloodDecision(
        is_flooded=bool(tile.is_flooded),
        flood_opacity=float(tile.flood_opacity),
        is_comparison_band=bool(tile.is_comparison_band),
        comparison_opacity=float(tile.comparison_opacity),
    )
