"""Monte Carlo sea level rise simulation: sampling, reduction and summaries."""

from worldwater.simulation.engine import run_simulation
from worldwater.simulation.models import (
    Contributor,
    ContributorStats,
    HistogramBin,
    IterationSample,
    SimulationResult,
    StatSummary,
)
from worldwater.simulation.prng import (
    create_rng,
    seed_for_projection,
    seed_for_temperature,
    wall_clock_seed,
)
from worldwater.simulation.sampler import CONTRIBUTORS
from worldwater.simulation.statistics import compute_stats

__all__ = [
    "CONTRIBUTORS",
    "Contributor",
    "ContributorStats",
    "HistogramBin",
    "IterationSample",
    "SimulationResult",
    "StatSummary",
    "compute_stats",
    "create_rng",
    "run_simulation",
    "seed_for_projection",
    "seed_for_temperature",
    "wall_clock_seed",
]
