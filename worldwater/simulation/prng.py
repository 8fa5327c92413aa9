"""Seeded random source and seed derivation policies.

The engine only ever sees an explicit 32-bit seed. Deciding where a seed
comes from (temperature, scenario/year, wall clock) is the caller's job and
lives here so every caller derives seeds the same way.
"""

import hashlib
import time

import numpy as np

from worldwater.simulation.constants import BASE_SEED, UINT32_MAX
from worldwater.utils import InvalidInput, round_half_up


def validate_seed(seed) -> int:
    """Return ``seed`` as a plain int, rejecting anything outside uint32."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidInput(f"Seed must be an unsigned 32-bit integer, got {seed!r}")
    seed = int(seed)
    if seed < 0 or seed > UINT32_MAX:
        raise InvalidInput(f"Seed out of uint32 range: {seed}")
    return seed


def create_rng(seed: int) -> np.random.Generator:
    """Build a reproducible PCG64 generator; ``random()`` yields doubles in [0, 1)."""
    return np.random.default_rng(validate_seed(seed))


def seed_for_temperature(temperature_increase: float, base_seed: int = BASE_SEED) -> int:
    """Manual-mode seed: each temperature step gets its own reproducible stream."""
    return (base_seed + round_half_up(temperature_increase * 1000)) & UINT32_MAX


def _scenario_hash(scenario_id: str) -> int:
    digest = hashlib.sha256(scenario_id.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")


def seed_for_projection(scenario_id: str, year: int, base_seed: int = BASE_SEED) -> int:
    """Projection-mode seed combining scenario hash, year and base seed."""
    return (_scenario_hash(scenario_id) + year * 1000 + base_seed) & UINT32_MAX


def wall_clock_seed() -> int:
    """Non-reproducible seed for callers that explicitly want fresh randomness."""
    return time.time_ns() & UINT32_MAX
