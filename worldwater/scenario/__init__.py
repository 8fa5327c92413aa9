"""SSP scenario presets, temperature projection and projection runs."""

from worldwater.scenario.constants import PROJECTION_YEARS
from worldwater.scenario.models import ProjectionRun, Scenario
from worldwater.scenario.projections import (
    get_projected_temperature,
    get_scenario_by_id,
    get_scenario_presets,
)

__all__ = [
    "PROJECTION_YEARS",
    "ProjectionRun",
    "Scenario",
    "get_projected_temperature",
    "get_scenario_by_id",
    "get_scenario_presets",
]
