"""EGM96 geoid undulation grid: decoding, texture codec and lookup.

Grid format (WW15MGH.DAC): 721 rows x 1440 cols of signed 16-bit big-endian
integers in centimeters. Rows run 90N to 90S, columns 0E to 359.75E.

Decoded grids are stored in meters with columns rearranged to start at
180W, plus one extra column duplicating the first so that lookups wrap
cleanly across the antimeridian. Lookups take normalized surface texture
coordinates: u runs west to east over [0, 1], v runs south to north.

The texture codec packs each value into two 8-bit channels (R high byte,
G low byte) over the fixed [GEOID_MIN, GEOID_MAX] range, roughly 3 mm
precision, for renderers that sample the geoid on the GPU.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
import numpy as np

from worldwater.flood.constants import (
    GEOID_COLS,
    GEOID_MIN,
    GEOID_RANGE,
    GEOID_ROWS,
)
from worldwater.utils import GeoidFormatError

logger = logging.getLogger(__name__)


class GeoidGrid:
    """Undulation lookup over a (rows, cols + 1) grid in meters."""

    def __init__(self, values: np.ndarray) -> None:
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 2 or values.shape[0] < 2 or values.shape[1] < 2:
            raise GeoidFormatError(f"Geoid grid must be 2-D and at least 2x2, got {values.shape}")
        self.values = values

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def undulation(self, u, v):
        """Bilinear undulation (meters) at texture coordinates, clamped to edge.

        Accepts scalars or broadcastable arrays; returns a float for scalar
        input and an ndarray otherwise.
        """
        height, width = self.values.shape
        u = np.clip(np.asarray(u, dtype=np.float64), 0.0, 1.0)
        v = np.clip(np.asarray(v, dtype=np.float64), 0.0, 1.0)

        x = u * (width - 1)
        y = (1.0 - v) * (height - 1)
        x0 = np.minimum(np.floor(x).astype(np.intp), width - 2)
        y0 = np.minimum(np.floor(y).astype(np.intp), height - 2)
        fx = x - x0
        fy = y - y0

        g = self.values
        top = g[y0, x0] * (1.0 - fx) + g[y0, x0 + 1] * fx
        bottom = g[y0 + 1, x0] * (1.0 - fx) + g[y0 + 1, x0 + 1] * fx
        out = top * (1.0 - fy) + bottom * fy
        return float(out) if np.ndim(out) == 0 else out

    @classmethod
    def from_texture(cls, rgba: np.ndarray) -> GeoidGrid:
        """Decode a 2-channel packed texture back to meters."""
        rgba = np.asarray(rgba)
        if rgba.ndim != 3 or rgba.shape[2] < 2:
            raise GeoidFormatError(f"Texture must be (rows, cols, channels>=2), got {rgba.shape}")
        encoded = rgba[..., 0].astype(np.float64) * 256.0 + rgba[..., 1].astype(np.float64)
        return cls(encoded / 65535.0 * GEOID_RANGE + GEOID_MIN)


class ZeroGeoid:
    """Ellipsoid-only fallback: zero undulation everywhere."""

    def undulation(self, u, v):
        u, v = np.broadcast_arrays(np.asarray(u, dtype=np.float64), np.asarray(v, dtype=np.float64))
        return 0.0 if u.ndim == 0 else np.zeros(u.shape)


def decode_grid(
    raw: bytes,
    rows: int = GEOID_ROWS,
    cols: int = GEOID_COLS,
) -> GeoidGrid:
    """Decode a raw big-endian centimeter grid into a wrapped GeoidGrid.

    Raises:
        GeoidFormatError: If the payload length does not match rows x cols.
    """
    expected = rows * cols * 2
    if len(raw) != expected:
        raise GeoidFormatError(f"EGM96 data wrong size: expected {expected}, got {len(raw)}")

    meters = np.frombuffer(raw, dtype=">i2").reshape(rows, cols).astype(np.float64) / 100.0
    # 0E..359.75E -> 180W..179.75E
    shifted = np.roll(meters, -(cols // 2), axis=1)
    return GeoidGrid(np.concatenate([shifted, shifted[:, :1]], axis=1))


def encode_texture(grid: GeoidGrid) -> np.ndarray:
    """Pack a grid into an RGBA uint8 texture (R high byte, G low byte)."""
    normalized = np.clip((grid.values - GEOID_MIN) / GEOID_RANGE, 0.0, 1.0)
    encoded = np.floor(normalized * 65535 + 0.5).astype(np.uint16)

    rgba = np.zeros(grid.values.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = encoded >> 8
    rgba[..., 1] = encoded & 0xFF
    rgba[..., 3] = 255
    return rgba


def load_geoid(source: str | Path | None, timeout: float = 30.0) -> GeoidGrid | None:
    """Load the EGM96 grid from a file path or an http(s) URL.

    Single attempt, no retry. Any failure is logged and reported as ``None``
    so callers can fall back to ZeroGeoid instead of aborting.
    """
    if source is None:
        return None

    source = str(source)
    try:
        if source.startswith(("http://", "https://")):
            resp = httpx.get(source, timeout=timeout)
            resp.raise_for_status()
            raw = resp.content
        else:
            raw = Path(source).read_bytes()
        grid = decode_grid(raw)
    except httpx.HTTPError as exc:
        logger.error("Failed to fetch EGM96 data from %s: %s", source, exc)
        return None
    except OSError as exc:
        logger.error("Failed to read EGM96 data from %s: %s", source, exc)
        return None
    except GeoidFormatError as exc:
        logger.error("Failed to decode EGM96 data from %s: %s", source, exc)
        return None

    logger.info("EGM96 geoid grid loaded from %s", source)
    return grid
