"""Pydantic v2 models for scenario presets and projection runs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from worldwater.simulation.models import SimulationResult


class Scenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str = ""
    temperatures_by_year: dict[int, float] = Field(..., min_length=1)

    @property
    def anchor_years(self) -> list[int]:
        """Configured years in ascending order, regardless of table order."""
        return sorted(self.temperatures_by_year)


class ProjectionRun(BaseModel):
    """A simulation driven by a (scenario, year) pair rather than a raw temperature."""

    scenario: Scenario
    year: int
    temperature_increase: float
    seed: int
    result: SimulationResult
