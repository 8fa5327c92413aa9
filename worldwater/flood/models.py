"""Models for flood snapshots and per-point flood decisions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from worldwater.simulation.models import SimulationResult


class FloodPhase(str, Enum):
    """Display phase of a flood session.

    idle: no flood surface attached.
    flooding: alpha easing toward the flood opacity.
    steady: alpha settled at its target.
    clearing: alpha easing toward zero before the surface detaches.
    """
    idle = "idle"
    flooding = "flooding"
    steady = "steady"
    clearing = "clearing"


class FloodSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    sea_level_rise: float
    source_result: SimulationResult | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FloodDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_flooded: bool = False
    flood_opacity: float = Field(default=0.0, ge=0, le=1)
    is_comparison_band: bool = False
    comparison_opacity: float = Field(default=0.0, ge=0, le=1)

    @classmethod
    def dry(cls) -> FloodDecision:
        return cls()

    @property
    def opacity(self) -> float:
        """Effective opacity; the comparison band overrides the flood shading."""
        return self.comparison_opacity if self.is_comparison_band else self.flood_opacity


@dataclass(frozen=True)
class FloodTile:
    """Array form of FloodDecision for a block of fragments."""

    flood_mask: np.ndarray
    is_flooded: np.ndarray
    flood_opacity: np.ndarray
    is_comparison_band: np.ndarray
    comparison_opacity: np.ndarray

    @property
    def opacity(self) -> np.ndarray:
        return np.where(self.is_comparison_band, self.comparison_opacity, self.flood_opacity)


class ComparisonDelta(BaseModel):
    current_slr: float
    previous_slr: float
    delta: float
    current_temperature: float = 0.0
    previous_temperature: float = 0.0
