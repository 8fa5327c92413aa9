"""
WorldWater
Monte Carlo sea level rise simulation with geoid-corrected flood compositing
"""

__version__ = "0.1.0"

from worldwater.config import Config, get_config
from worldwater.flood import FloodSession, composite
from worldwater.scenario import get_projected_temperature
from worldwater.simulation import run_simulation

__all__ = [
    "Config",
    "get_config",
    "FloodSession",
    "composite",
    "get_projected_temperature",
    "run_simulation",
]
