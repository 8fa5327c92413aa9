"""Geoid-corrected flood surface compositing and per-viewer flood state."""

from worldwater.flood.compositor import composite, composite_tile, flood_mask, smoothstep
from worldwater.flood.geoid import GeoidGrid, ZeroGeoid, decode_grid, encode_texture, load_geoid
from worldwater.flood.models import (
    ComparisonDelta,
    FloodDecision,
    FloodPhase,
    FloodSnapshot,
    FloodTile,
)
from worldwater.flood.session import FloodSession

__all__ = [
    "ComparisonDelta",
    "FloodDecision",
    "FloodPhase",
    "FloodSession",
    "FloodSnapshot",
    "FloodTile",
    "GeoidGrid",
    "ZeroGeoid",
    "composite",
    "composite_tile",
    "decode_grid",
    "encode_texture",
    "flood_mask",
    "load_geoid",
    "smoothstep",
]
