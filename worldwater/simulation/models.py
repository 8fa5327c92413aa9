"""Pydantic v2 models for simulation inputs and results.

Importable without numpy-heavy modules; results are immutable once built.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from worldwater.simulation.constants import FLOOD_METRICS
from worldwater.utils import InvalidInput


class Contributor(BaseModel):
    """One physical source of sea level rise."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    mean_per_degree: float = Field(..., ge=0)
    std_per_degree: float = Field(..., ge=0)
    non_linear_exponent: float = Field(..., gt=0)


class StatSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    mean: float = 0.0
    median: float = 0.0
    p5: float = 0.0
    p95: float = 0.0
    min: float = 0.0
    max: float = 0.0

    @classmethod
    def zeros(cls) -> StatSummary:
        return cls()


class ContributorStats(StatSummary):
    name: str = ""


class IterationSample(BaseModel):
    per_contributor: dict[str, float]
    total: float


class HistogramBin(BaseModel):
    start: float
    end: float
    count: int = Field(..., ge=0)
    severity: str


class SimulationResult(BaseModel):
    """Outcome of one Monte Carlo run.

    ``sorted_totals`` holds every iteration total in ascending order so
    histogram and comparison consumers never need to re-run the engine.
    """

    model_config = ConfigDict(frozen=True)

    temperature_increase: float
    iterations: int = Field(..., ge=0)
    seed: int | None = None
    sorted_totals: tuple[float, ...] = ()
    stats: StatSummary
    per_contributor_stats: dict[str, ContributorStats]

    @property
    def is_empty(self) -> bool:
        return self.iterations == 0

    def flood_level(self, metric: str = "p95") -> float:
        """Return the statistic used as the rendered flood level."""
        if metric not in FLOOD_METRICS:
            raise InvalidInput(
                f"Unknown flood metric: {metric}. Expected one of {list(FLOOD_METRICS)}"
            )
        return getattr(self.stats, metric)
