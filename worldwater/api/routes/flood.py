"""Flood compositing endpoint.

Stateless: the caller sends the levels and opacity it is displaying and
gets per-point decisions back. Per-viewer state (snapshots, fade) lives in
the client's own FloodSession.
"""

import logging

from fastapi import APIRouter, Depends, Request

from worldwater.api.auth import charge_flood_points, rate_limit_default, require_api_key
from worldwater.api.models import FloodEvaluateRequest, FloodEvaluateResponse, FloodPointDecision
from worldwater.config import get_config
from worldwater.flood.compositor import composite
from worldwater.flood.constants import COMPARISON_COLOR, FLOOD_COLOR
from worldwater.flood.geoid import ZeroGeoid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["flood"], dependencies=[Depends(rate_limit_default)])


@router.post("/flood/evaluate", response_model=FloodEvaluateResponse)
def evaluate(body: FloodEvaluateRequest, request: Request, api_key: str = Depends(require_api_key)):
    charge_flood_points(api_key, len(body.points))
    cfg = get_config()
    geoid = getattr(request.app.state, "geoid", None) or ZeroGeoid()

    decisions = []
    for point in body.points:
        undulation = geoid.undulation(point.u, point.v)
        decision = composite(
            point.terrain_height,
            undulation,
            body.sea_level_rise,
            body.alpha,
            comparison_sea_level_rise=body.previous_sea_level_rise,
            is_water=point.is_water,
            edge_softness=cfg.edge_softness,
            comparison_opacity=cfg.comparison_opacity,
        )
        decisions.append(FloodPointDecision(
            **decision.model_dump(),
            undulation=undulation,
            flood_surface=undulation + body.sea_level_rise,
        ))

    return FloodEvaluateResponse(
        geoid_corrected=not isinstance(geoid, ZeroGeoid),
        flood_color=FLOOD_COLOR,
        comparison_color=COMPARISON_COLOR,
        decisions=decisions,
    )
