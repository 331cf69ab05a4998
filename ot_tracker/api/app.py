"""FastAPI application for OT Tracker."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ot_tracker import __version__
from ot_tracker.api.middleware import RequestLoggingMiddleware
from ot_tracker.api.routes import assessments, catalog, health, progress
from ot_tracker.config import get_settings
from ot_tracker.instruments import PROGRAM_QUESTIONS, ROM_MEASUREMENTS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting OT Tracker API")

    # Catalogs are static; expose their sizes for the readiness probe
    app.state.question_count = len(PROGRAM_QUESTIONS)
    app.state.measurement_count = len(ROM_MEASUREMENTS)

    logger.info(
        "OT Tracker API started: %d questions, %d ROM movements",
        app.state.question_count,
        app.state.measurement_count,
    )

    yield

    logger.info("Shutting down OT Tracker API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="OT Tracker API",
        description="Pediatric occupational therapy assessment scoring and progress reporting",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(catalog.router, prefix="/api/v1")
    app.include_router(assessments.router, prefix="/api/v1")
    app.include_router(progress.router, prefix="/api/v1")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.debug_mode else None,
            },
        )

    return app
