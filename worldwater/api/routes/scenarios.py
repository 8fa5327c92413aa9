"""Scenario preset endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from worldwater.api.auth import rate_limit_default
from worldwater.api.models import ProjectedTemperatureResponse, ScenarioItem
from worldwater.scenario.projections import get_projected_temperature, get_scenario_presets
from worldwater.utils import UnknownScenario

router = APIRouter(prefix="/api", tags=["scenarios"], dependencies=[Depends(rate_limit_default)])


@router.get("/scenarios", response_model=list[ScenarioItem])
def list_scenarios():
    return [ScenarioItem(**s.model_dump()) for s in get_scenario_presets()]


@router.get("/scenarios/{scenario_id}/temperature", response_model=ProjectedTemperatureResponse)
def projected_temperature(scenario_id: str, year: int = Query(..., ge=1850, le=2300)):
    """Projected warming for a scenario in a given year (interpolated, clamped)."""
    try:
        temperature = get_projected_temperature(scenario_id, year)
    except UnknownScenario as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return ProjectedTemperatureResponse(
        scenario_id=scenario_id, year=year, temperature_increase=temperature,
    )
