"""Health check endpoint."""

import logging

from fastapi import APIRouter, Request

from worldwater import __version__
from worldwater.api.models import HealthResponse
from worldwater.flood.geoid import GeoidGrid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    """Report whether the geoid grid is loaded; fallback mode is 'degraded'."""
    geoid_loaded = isinstance(getattr(request.app.state, "geoid", None), GeoidGrid)
    return HealthResponse(
        status="healthy" if geoid_loaded else "degraded",
        geoid_loaded=geoid_loaded,
        version=__version__,
    )
