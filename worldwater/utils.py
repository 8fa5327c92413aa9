"""
Utility functions for WorldWater

Provides logging setup, rounding helpers and the exception hierarchy
"""

import logging
import math
from pathlib import Path
from typing import Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure logging for WorldWater"""
    level = getattr(logging, log_level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# NUMERIC HELPERS
# ═══════════════════════════════════════════════════════════════════

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``);
    seed derivation and population estimates need ``floor(x + 0.5)``.
    """
    return math.floor(value + 0.5)


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class WorldWaterError(Exception):
    """Base exception for WorldWater"""
    pass


class InvalidInput(WorldWaterError, ValueError):
    """Caller supplied an input the engine refuses to compute on"""
    pass


class UnknownScenario(WorldWaterError, LookupError):
    """Scenario id is not among the registered SSP presets"""

    def __init__(self, scenario_id: str):
        self.scenario_id = scenario_id
        super().__init__(f"Unknown scenario id: {scenario_id}")


class UnknownLocation(WorldWaterError, LookupError):
    """Location id is not among the registered coastal locations"""

    def __init__(self, location_id: str):
        self.location_id = location_id
        super().__init__(f"Unknown location id: {location_id}")


class GeoidFormatError(WorldWaterError, ValueError):
    """Geoid grid payload does not match the expected layout"""
    pass
