"""Presentation-facing summaries of a simulation result.

Impact wording, histogram binning and contributor share breakdown. The
renderer owns colors and layout; these helpers only produce numbers and
labels.
"""

import math

from worldwater.simulation.constants import (
    IMPACT_BEYOND,
    IMPACT_THRESHOLDS,
    SEVERITY_BANDS,
    SEVERITY_BEYOND,
)
from worldwater.simulation.models import HistogramBin, SimulationResult
from worldwater.utils import InvalidInput


def get_impact_description(slr_meters: float) -> str:
    """Human-readable description of a sea level rise magnitude."""
    for upper, description in IMPACT_THRESHOLDS:
        if slr_meters < upper:
            return description
    return IMPACT_BEYOND


def severity_for(slr_meters: float) -> str:
    for upper, label in SEVERITY_BANDS:
        if slr_meters < upper:
            return label
    return SEVERITY_BEYOND


def histogram(result: SimulationResult, bin_count: int = 30) -> list[HistogramBin]:
    """Bin the sorted total sample into ``bin_count`` equal-width bins.

    Bin edges are the sample range widened to whole centimeters. Values on
    the upper edge fall into the last bin. A degenerate range (all samples
    in one centimeter step) puts every sample in the first bin.
    """
    if bin_count <= 0:
        raise InvalidInput(f"Histogram bin count must be positive, got {bin_count}")

    data = result.sorted_totals
    if not data:
        return []

    lo = math.floor(data[0] * 100) / 100
    hi = math.ceil(data[-1] * 100) / 100
    width = (hi - lo) / bin_count

    counts = [0] * bin_count
    for value in data:
        idx = min(math.floor((value - lo) / width), bin_count - 1) if width > 0 else 0
        counts[idx] += 1

    return [
        HistogramBin(
            start=lo + i * width,
            end=lo + (i + 1) * width,
            count=counts[i],
            severity=severity_for(lo + (i + 0.5) * width),
        )
        for i in range(bin_count)
    ]


def contributor_breakdown(result: SimulationResult) -> list[dict]:
    """Share of the mean total attributable to each contributor.

    Returns one dict per contributor (table order) with ``key``, ``name``,
    ``mean`` in meters and ``share_pct`` of the total mean.
    """
    total_mean = result.stats.mean
    rows = []
    for key, cs in result.per_contributor_stats.items():
        share = (cs.mean / total_mean * 100) if total_mean else 0.0
        rows.append({"key": key, "name": cs.name, "mean": cs.mean, "share_pct": share})
    return rows
