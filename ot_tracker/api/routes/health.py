"""Health check endpoints."""

from fastapi import APIRouter, Request

from ot_tracker import __version__
from ot_tracker.instruments import PROGRAM_QUESTIONS, ROM_MEASUREMENTS

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Basic health check."""
    return {
        "status": "healthy",
        "service": "ot-tracker",
    }


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict:
    """Readiness check - verifies the assessment catalogs are loaded."""
    question_count = getattr(request.app.state, "question_count", len(PROGRAM_QUESTIONS))
    measurement_count = getattr(request.app.state, "measurement_count", len(ROM_MEASUREMENTS))

    errors = []
    if question_count == 0:
        errors.append("Program evaluation catalog empty")
    if measurement_count == 0:
        errors.append("ROM catalog empty")

    if errors:
        return {
            "status": "not_ready",
            "errors": errors,
        }

    return {
        "status": "ready",
        "program_questions": question_count,
        "rom_measurements": measurement_count,
    }


@router.get("/health/live")
async def liveness_check() -> dict:
    """Liveness check - basic process health."""
    return {"status": "alive"}


@router.get("/api-info")
async def api_info(request: Request) -> dict:
    """API information for frontend integration."""
    base_url = str(request.base_url).rstrip("/")

    return {
        "name": "OT Tracker API",
        "version": __version__,
        "description": "Pediatric occupational therapy assessment scoring and progress reporting",
        "base_url": base_url,
        "openapi_url": f"{base_url}/openapi.json",
        "docs_url": f"{base_url}/docs",
        "endpoints": {
            "catalog": {
                "program_evaluation": "/api/v1/catalog/program-evaluation",
                "rom": "/api/v1/catalog/rom",
            },
            "assessments": {
                "score_program": "/api/v1/assessments/program/score",
                "save_program": "/api/v1/assessments/program",
                "score_rom": "/api/v1/assessments/rom/score",
                "save_rom": "/api/v1/assessments/rom",
            },
            "progress": {
                "program": "/api/v1/progress/program",
                "rom": "/api/v1/progress/rom",
                "rom_joint": "/api/v1/progress/rom/joint",
                "overview": "/api/v1/progress/overview",
            },
        },
    }
