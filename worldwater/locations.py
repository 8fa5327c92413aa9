"""Predefined coastal locations and population-at-risk estimates.

Each location carries camera parameters for fly-to navigation plus the
context shown next to a simulation result. Population multipliers are
rough per-meter exposure figures from published literature.
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from worldwater.utils import UnknownLocation, round_half_up


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)
    height: float = Field(..., gt=0, description="Camera height (m)")
    pitch: float = -30.0
    heading: float = 0.0
    avg_elevation: float = Field(..., description="Meters above sea level")
    population: int = Field(..., ge=0)
    coastal_population: int = Field(..., ge=0)
    geoid_undulation: float = Field(..., description="EGM96 approx, meters")


LOCATIONS: tuple[Location, ...] = (
    Location(
        id="bangladesh", name="Bangladesh",
        description="Low-lying delta, one of the most vulnerable nations",
        longitude=90.35, latitude=23.0, height=150_000, pitch=-30,
        avg_elevation=5, population=170_000_000, coastal_population=40_000_000,
        geoid_undulation=-45,
    ),
    Location(
        id="srilanka", name="Sri Lanka",
        description="Island nation with extensive low-lying coastal areas",
        longitude=80.77, latitude=7.87, height=200_000, pitch=-35,
        avg_elevation=15, population=22_000_000, coastal_population=5_000_000,
        geoid_undulation=-90,
    ),
    Location(
        id="maldives", name="Maldives",
        description="Average elevation ~1.5m - existential threat",
        longitude=73.22, latitude=3.20, height=100_000, pitch=-40,
        avg_elevation=1.5, population=520_000, coastal_population=520_000,
        geoid_undulation=-100,
    ),
    Location(
        id="netherlands", name="Netherlands",
        description="~26% below sea level, protected by extensive dike systems",
        longitude=4.90, latitude=52.10, height=200_000, pitch=-30,
        avg_elevation=-2, population=17_500_000, coastal_population=9_000_000,
        geoid_undulation=46,
    ),
    Location(
        id="nyc", name="New York City",
        description="Low-lying boroughs, major infrastructure at risk",
        longitude=-74.00, latitude=40.71, height=80_000, pitch=-25,
        avg_elevation=10, population=8_300_000, coastal_population=3_000_000,
        geoid_undulation=-33,
    ),
    Location(
        id="mumbai", name="Mumbai",
        description="Built on reclaimed land, western coast extremely low",
        longitude=72.88, latitude=19.07, height=100_000, pitch=-30,
        avg_elevation=8, population=20_000_000, coastal_population=10_000_000,
        geoid_undulation=-75,
    ),
    Location(
        id="shanghai", name="Shanghai",
        description="Yangtze River delta, vast low-lying urban area",
        longitude=121.47, latitude=31.23, height=120_000, pitch=-30,
        avg_elevation=4, population=28_000_000, coastal_population=15_000_000,
        geoid_undulation=-22,
    ),
)

_LOCATIONS_BY_ID = {loc.id: loc for loc in LOCATIONS}


def _maldives(slr: float) -> int:
    # Whole population exposed beyond half a meter
    if slr > 0.5:
        return 520_000
    return min(520_000, round_half_up(slr * 1_040_000))


POPULATION_AT_RISK: dict[str, Callable[[float], int]] = {
    "bangladesh": lambda slr: round_half_up(slr * 20_000_000),
    "srilanka": lambda slr: round_half_up(slr * 2_000_000),
    "maldives": _maldives,
    "netherlands": lambda slr: round_half_up(slr * 4_000_000),
    "nyc": lambda slr: round_half_up(slr * 800_000),
    "mumbai": lambda slr: round_half_up(slr * 3_000_000),
    "shanghai": lambda slr: round_half_up(slr * 5_000_000),
}


def get_location_by_id(location_id: str) -> Location:
    """Look up a location, raising UnknownLocation when absent."""
    try:
        return _LOCATIONS_BY_ID[location_id]
    except KeyError:
        raise UnknownLocation(location_id) from None


def population_at_risk(location_id: str, slr_meters: float) -> int:
    """Estimated population at risk for a location at a given sea level rise."""
    get_location_by_id(location_id)
    return POPULATION_AT_RISK[location_id](slr_meters)
