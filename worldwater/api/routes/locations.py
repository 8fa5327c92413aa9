"""Coastal location endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from worldwater.api.auth import rate_limit_default
from worldwater.api.models import LocationImpactResponse
from worldwater.locations import LOCATIONS, Location, get_location_by_id, population_at_risk
from worldwater.utils import UnknownLocation

router = APIRouter(prefix="/api", tags=["locations"], dependencies=[Depends(rate_limit_default)])


@router.get("/locations", response_model=list[Location])
def list_locations():
    return list(LOCATIONS)


@router.get("/locations/{location_id}/impact", response_model=LocationImpactResponse)
def location_impact(location_id: str, sea_level_rise: float = Query(..., ge=0)):
    """Population-at-risk estimate for a location at a given sea level rise."""
    try:
        location = get_location_by_id(location_id)
    except UnknownLocation as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return LocationImpactResponse(
        location_id=location.id,
        name=location.name,
        sea_level_rise=sea_level_rise,
        avg_elevation=location.avg_elevation,
        population_at_risk=population_at_risk(location.id, sea_level_rise),
        coastal_population=location.coastal_population,
    )
