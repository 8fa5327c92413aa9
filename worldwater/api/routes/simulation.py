"""Simulation endpoints - manual temperature and scenario projection runs."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from worldwater.api.auth import rate_limit_simulation
from worldwater.api.models import (
    ContributorShare,
    ProjectionRequest,
    ProjectionResponse,
    SimulationRequest,
    SimulationResponse,
)
from worldwater.config import get_config
from worldwater.scenario.runner import simulate_projection
from worldwater.simulation.engine import run_simulation
from worldwater.simulation.impact import contributor_breakdown, get_impact_description, histogram
from worldwater.simulation.models import SimulationResult
from worldwater.simulation.prng import seed_for_temperature
from worldwater.utils import InvalidInput, UnknownScenario

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["simulation"], dependencies=[Depends(rate_limit_simulation)])


def _summarize(result: SimulationResult, metric: str) -> dict:
    cfg = get_config()
    return {
        "temperature_increase": result.temperature_increase,
        "iterations": result.iterations,
        "seed": result.seed,
        "stats": result.stats,
        "per_contributor_stats": result.per_contributor_stats,
        "contributors": [ContributorShare(**row) for row in contributor_breakdown(result)],
        "histogram": histogram(result, cfg.histogram_bins),
        "impact": get_impact_description(result.stats.median),
        "metric": metric,
        "flood_level": result.flood_level(metric),
    }


@router.post("/simulations", response_model=SimulationResponse)
def simulate(request: SimulationRequest):
    """Run the Monte Carlo simulation for a warming level.

    Without an explicit seed the manual-mode seed is derived from the
    temperature, so repeated requests return identical distributions.
    """
    cfg = get_config()
    iterations = request.iterations or cfg.iterations
    metric = request.metric or cfg.flood_metric
    seed = request.seed
    if seed is None:
        seed = seed_for_temperature(request.temperature_increase, cfg.base_seed)

    try:
        result = run_simulation(request.temperature_increase, iterations, seed=seed)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return SimulationResponse(**_summarize(result, metric))


@router.post("/simulations/projection", response_model=ProjectionResponse)
def simulate_scenario(request: ProjectionRequest):
    """Resolve an SSP scenario/year to a temperature and simulate it."""
    cfg = get_config()
    metric = request.metric or cfg.flood_metric

    try:
        run = simulate_projection(request.scenario_id, request.year, iterations=request.iterations)
    except UnknownScenario as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return ProjectionResponse(
        scenario_id=run.scenario.id,
        scenario_label=run.scenario.label,
        year=run.year,
        **_summarize(run.result, metric),
    )
