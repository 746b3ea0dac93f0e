# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness plus record store connectivity. Always answers 200 so monitors can
# tell "process up, database down" apart from "process down".
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter

from app.dependencies import ImageCodecDep, RecordServiceDep
from core.models.common import HealthResponse

router = APIRouter()


def _database_status(records: RecordServiceDep) -> str:
    return "connected" if records.is_connected() else "disconnected"


@router.get("/health-check", response_model=HealthResponse)
async def health_check(records: RecordServiceDep, codec: ImageCodecDep):
    """
    Health check endpoint.

    Returns 200 even when the record store is unreachable; the `database`
    field reports its status.
    """
    return HealthResponse(
        status="OK",
        message="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=_database_status(records),
        image_storage=codec.description,
    )


@router.get("/test")
async def api_test(records: RecordServiceDep, codec: ImageCodecDep):
    """Simple banner used by the admin UI to check the API base URL."""
    return {
        "message": "RealTrust API is working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": _database_status(records),
        "imageStorage": codec.description,
    }
