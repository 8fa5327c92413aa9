"""Nearest-rank statistics over a sorted Monte Carlo sample.

Percentiles index the ascending sample at ``floor(n * p)`` with no
interpolation between ranks; ``numpy.percentile`` interpolates and does not
reproduce these values.
"""

import math

import numpy as np

from worldwater.simulation.constants import PERCENTILE_FRACTIONS
from worldwater.simulation.models import StatSummary
from worldwater.utils import InvalidInput


def nearest_rank(sorted_values: np.ndarray, fraction: float) -> float:
    """Value at rank ``floor(n * fraction)`` of an ascending sample."""
    return float(sorted_values[math.floor(len(sorted_values) * fraction)])


def compute_stats(sorted_values) -> StatSummary:
    """Reduce an ascending, non-empty sample to a StatSummary.

    The caller guarantees ascending order; use ``summarize`` for raw samples.
    """
    values = np.asarray(sorted_values, dtype=float)
    n = values.size
    if n == 0:
        raise InvalidInput("Cannot compute statistics of an empty sample")

    return StatSummary(
        mean=float(values.sum()) / n,
        median=nearest_rank(values, PERCENTILE_FRACTIONS["median"]),
        p5=nearest_rank(values, PERCENTILE_FRACTIONS["p5"]),
        p95=nearest_rank(values, PERCENTILE_FRACTIONS["p95"]),
        min=float(values[0]),
        max=float(values[-1]),
    )


def summarize(values) -> StatSummary:
    """Sort a raw sample ascending and reduce it."""
    return compute_stats(np.sort(np.asarray(values, dtype=float)))
