"""WorldWater FastAPI application."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from worldwater import __version__
from worldwater.api.auth import request_logging_middleware
from worldwater.config import get_config
from worldwater.flood.geoid import ZeroGeoid, load_geoid
from worldwater.utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle handler."""
    config = get_config()
    setup_logging(config.log_level, config.log_file)

    if not config.demo_mode and not config.api_key:
        logger.critical("WWL_API_KEY is not set. Set it in .env or export it. Use WWL_DEMO_MODE=true to skip.")
        sys.exit(1)

    grid = load_geoid(config.geoid_source, config.geoid_timeout)
    if grid is None:
        logger.warning("Geoid unavailable - flood surfaces fall back to the ellipsoid")
        app.state.geoid = ZeroGeoid()
    else:
        app.state.geoid = grid

    logger.info("WorldWater API starting - iterations=%d, metric=%s", config.iterations, config.flood_metric)
    yield
    logger.info("WorldWater API shutdown")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="WorldWater API",
        description="Monte Carlo sea level rise projections and flood surface compositing",
        version=__version__,
        lifespan=lifespan,
    )

    config = get_config()

    # CORS - restricted to configured origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # Request logging and X-Request-ID middleware
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)

    from worldwater.api.routes.flood import router as flood_router
    from worldwater.api.routes.health import router as health_router
    from worldwater.api.routes.locations import router as locations_router
    from worldwater.api.routes.scenarios import router as scenarios_router
    from worldwater.api.routes.simulation import router as simulation_router

    app.include_router(health_router)
    app.include_router(simulation_router)
    app.include_router(scenarios_router)
    app.include_router(locations_router)
    app.include_router(flood_router)

    return app


app = create_app()
