"""Scenario-based warming projections.

Resolves an SSP scenario and target year to a temperature increase by
anchor lookup, clamping outside the configured range and linear
interpolation between anchors. No randomness is involved.
"""

from __future__ import annotations

from worldwater.scenario.constants import SSP_SCENARIOS
from worldwater.scenario.models import Scenario
from worldwater.utils import UnknownScenario

_SCENARIOS: dict[str, Scenario] = {
    scenario_id: Scenario(id=scenario_id, **data)
    for scenario_id, data in SSP_SCENARIOS.items()
}


def get_scenario_presets() -> list[Scenario]:
    """Return the available scenario presets in registry order."""
    return list(_SCENARIOS.values())


def get_scenario_by_id(scenario_id: str) -> Scenario | None:
    return _SCENARIOS.get(scenario_id)


def interpolate_temperature(scenario: Scenario, year: float) -> float:
    """Temperature for ``year`` from a scenario's anchors.

    Exact anchor years return the anchor value untouched; years outside the
    anchor range clamp to the nearest end (no extrapolation).
    """
    anchors = scenario.temperatures_by_year
    if year in anchors:
        return anchors[year]

    years = scenario.anchor_years
    if year <= years[0]:
        return anchors[years[0]]
    if year >= years[-1]:
        return anchors[years[-1]]

    for y0, y1 in zip(years, years[1:]):
        if y0 <= year <= y1:
            t0 = anchors[y0]
            t1 = anchors[y1]
            alpha = (year - y0) / (y1 - y0)
            return t0 + (t1 - t0) * alpha

    return anchors[years[0]]


def get_projected_temperature(scenario_id: str, year: float) -> float:
    """Resolve projected temperature increase for a scenario/year pair.

    Raises:
        UnknownScenario: If ``scenario_id`` is not a registered preset.
    """
    scenario = get_scenario_by_id(scenario_id)
    if scenario is None:
        raise UnknownScenario(scenario_id)
    return interpolate_temperature(scenario, year)
