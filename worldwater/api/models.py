"""Pydantic request/response models for the WorldWater API."""

from typing import Literal

from pydantic import BaseModel, Field

from worldwater.flood.models import FloodDecision
from worldwater.simulation.constants import TEMPERATURE_MAX, TEMPERATURE_MIN, UINT32_MAX
from worldwater.simulation.models import ContributorStats, HistogramBin, StatSummary


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    geoid_loaded: bool = False
    version: str = ""


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

class SimulationRequest(BaseModel):
    temperature_increase: float = Field(..., ge=TEMPERATURE_MIN, le=TEMPERATURE_MAX)
    iterations: int | None = Field(default=None, ge=1, le=100_000)
    seed: int | None = Field(default=None, ge=0, le=UINT32_MAX)
    metric: Literal["median", "p95"] | None = None


class ProjectionRequest(BaseModel):
    scenario_id: str = Field(..., min_length=1, max_length=32)
    year: int = Field(..., ge=1850, le=2300)
    iterations: int | None = Field(default=None, ge=1, le=100_000)
    metric: Literal["median", "p95"] | None = None


class ContributorShare(BaseModel):
    key: str
    name: str
    mean: float
    share_pct: float


class SimulationResponse(BaseModel):
    temperature_increase: float
    iterations: int
    seed: int | None = None
    stats: StatSummary
    per_contributor_stats: dict[str, ContributorStats] = {}
    contributors: list[ContributorShare] = []
    histogram: list[HistogramBin] = []
    impact: str = ""
    metric: str = "p95"
    flood_level: float = 0.0


class ProjectionResponse(SimulationResponse):
    scenario_id: str
    scenario_label: str
    year: int


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class ScenarioItem(BaseModel):
    id: str
    label: str
    description: str = ""
    temperatures_by_year: dict[int, float]


class ProjectedTemperatureResponse(BaseModel):
    scenario_id: str
    year: int
    temperature_increase: float


# ---------------------------------------------------------------------------
# Flood
# ---------------------------------------------------------------------------

class FloodPoint(BaseModel):
    terrain_height: float
    u: float = Field(default=0.5, ge=0, le=1)
    v: float = Field(default=0.5, ge=0, le=1)
    is_water: bool = False


class FloodEvaluateRequest(BaseModel):
    sea_level_rise: float
    previous_sea_level_rise: float | None = None
    alpha: float = Field(default=0.55, ge=0, le=1)
    points: list[FloodPoint] = Field(..., min_length=1, max_length=10_000)


class FloodPointDecision(FloodDecision):
    undulation: float = 0.0
    flood_surface: float = 0.0


class FloodEvaluateResponse(BaseModel):
    geoid_corrected: bool
    flood_color: tuple[float, float, float]
    comparison_color: tuple[float, float, float]
    decisions: list[FloodPointDecision]


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

class LocationImpactResponse(BaseModel):
    location_id: str
    name: str
    sea_level_rise: float
    avg_elevation: float
    population_at_risk: int
    coastal_population: int
