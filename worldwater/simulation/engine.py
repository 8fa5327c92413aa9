"""Monte Carlo sea level rise simulation.

Semi-empirical approach after IPCC AR5/AR6: five contributors, each with
temperature-scaled uncertainty and non-linear ice sheet response at higher
warming.

Fixed-Size Sampling Rationale
-----------------------------
Every run draws exactly ``iterations`` samples. There is no early stopping,
convergence test or variance reduction: a given (temperature, iterations,
seed) triple always consumes the same random stream and produces the same
sorted sample, which keeps every published figure auditable by re-running it.
The engine requires an explicit seed; see ``worldwater.simulation.prng`` for
the seed policies callers use.
"""

import logging
import math
import operator

import numpy as np

from worldwater.simulation.constants import DEFAULT_ITERATIONS
from worldwater.simulation.models import ContributorStats, SimulationResult, StatSummary
from worldwater.simulation.prng import create_rng
from worldwater.simulation.sampler import CONTRIBUTORS, sample_iterations
from worldwater.simulation.statistics import compute_stats, summarize
from worldwater.utils import InvalidInput

logger = logging.getLogger(__name__)


def _zero_result() -> SimulationResult:
    return SimulationResult(
        temperature_increase=0.0,
        iterations=0,
        seed=None,
        sorted_totals=(),
        stats=StatSummary.zeros(),
        per_contributor_stats={
            c.key: ContributorStats(name=c.name) for c in CONTRIBUTORS
        },
    )


def _validate_iterations(iterations) -> int:
    if isinstance(iterations, bool):
        raise InvalidInput(f"Iterations must be a positive integer, got {iterations!r}")
    try:
        iterations = operator.index(iterations)
    except TypeError:
        raise InvalidInput(f"Iterations must be a positive integer, got {iterations!r}") from None
    if iterations <= 0:
        raise InvalidInput(f"Iterations must be a positive integer, got {iterations}")
    return iterations


def run_simulation(
    temperature_increase: float,
    iterations: int = DEFAULT_ITERATIONS,
    *,
    seed: int,
) -> SimulationResult:
    """Run the full Monte Carlo simulation for one warming level.

    Args:
        temperature_increase: Warming in degrees C (expected 0-10).
        iterations: Number of Monte Carlo iterations; must be positive when
            ``temperature_increase > 0``.
        seed: Unsigned 32-bit seed for the sampling stream.

    Returns:
        SimulationResult with the ascending total sample, summary stats and
        per-contributor stats. A non-positive temperature short-circuits to
        an all-zero result without touching the random stream.

    Raises:
        InvalidInput: Non-finite temperature, non-positive iterations or a
            seed outside the uint32 range.
    """
    if not math.isfinite(temperature_increase):
        raise InvalidInput(f"Temperature increase must be finite, got {temperature_increase}")

    if temperature_increase <= 0:
        return _zero_result()

    iterations = _validate_iterations(iterations)
    rng = create_rng(seed)

    logger.debug(
        "Running %d iterations at +%.2fC (seed=%d)", iterations, temperature_increase, seed,
    )

    samples = sample_iterations(temperature_increase, iterations, rng)
    totals = np.sort(samples.sum(axis=1))

    per_contributor_stats: dict[str, ContributorStats] = {}
    for idx, contributor in enumerate(CONTRIBUTORS):
        summary = summarize(samples[:, idx])
        per_contributor_stats[contributor.key] = ContributorStats(
            name=contributor.name, **summary.model_dump(),
        )

    return SimulationResult(
        temperature_increase=float(temperature_increase),
        iterations=iterations,
        seed=int(seed),
        sorted_totals=tuple(totals.tolist()),
        stats=compute_stats(totals),
        per_contributor_stats=per_contributor_stats,
    )
