"""Caller-side orchestration: derive the seed, then run the engine.

Manual mode seeds from the temperature itself so the same slider position
always reproduces the same distribution. Projection mode seeds from the
scenario id and year so each scenario/year cell is independently
reproducible even when two cells resolve to the same temperature.
"""

from __future__ import annotations

import logging

from worldwater.config import get_config
from worldwater.scenario.models import ProjectionRun
from worldwater.scenario.projections import get_projected_temperature, get_scenario_by_id
from worldwater.simulation.engine import run_simulation
from worldwater.simulation.models import SimulationResult
from worldwater.simulation.prng import seed_for_projection, seed_for_temperature
from worldwater.utils import UnknownScenario

logger = logging.getLogger(__name__)


def simulate_temperature(
    temperature_increase: float,
    iterations: int | None = None,
    base_seed: int | None = None,
) -> SimulationResult:
    """Run the simulation for a user-chosen warming level."""
    cfg = get_config()
    iterations = cfg.iterations if iterations is None else iterations
    base_seed = cfg.base_seed if base_seed is None else base_seed

    seed = seed_for_temperature(temperature_increase, base_seed)
    return run_simulation(temperature_increase, iterations, seed=seed)


def simulate_projection(
    scenario_id: str,
    year: int,
    iterations: int | None = None,
    base_seed: int | None = None,
) -> ProjectionRun:
    """Resolve a scenario/year to a temperature and run the simulation.

    Raises:
        UnknownScenario: If ``scenario_id`` is not registered.
    """
    cfg = get_config()
    iterations = cfg.iterations if iterations is None else iterations
    base_seed = cfg.base_seed if base_seed is None else base_seed

    scenario = get_scenario_by_id(scenario_id)
    if scenario is None:
        raise UnknownScenario(scenario_id)

    temperature = get_projected_temperature(scenario_id, year)
    seed = seed_for_projection(scenario_id, year, base_seed)
    logger.debug("Projection %s/%d resolved to +%.3fC", scenario.label, year, temperature)

    result = run_simulation(temperature, iterations, seed=seed)
    return ProjectionRun(
        scenario=scenario,
        year=year,
        temperature_increase=temperature,
        seed=seed,
        result=result,
    )
