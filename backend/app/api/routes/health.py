"""Health & Readiness Probes - liveness text and readiness JSON.

Invariants:
    - GET /api always returns 200 plain text while the process is up (liveness)
    - GET /api/health/ready returns 503 unless the store is verified and answering
    - root_router (GET /) is only included when no frontend build is mounted
"""


from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.dependencies import get_db_manager
from app.infrastructure.database import DatabaseSessionManager


SERVICE_NAME = "lead-quiz-api"
SERVICE_VERSION = "1.0.0"
LIVENESS_TEXT = "API is running"

router = APIRouter(prefix="/api", tags=["health"])
root_router = APIRouter(tags=["health"])


@router.get("", response_class=PlainTextResponse)
async def api_root():
    """Static liveness text."""
    return LIVENESS_TEXT


@root_router.get("/", response_class=PlainTextResponse)
async def root():
    """Static liveness text at / when no frontend is served."""
    return LIVENESS_TEXT


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/health/ready")
async def readiness_check(
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness probe: startup verification plus live connectivity."""
    if not db.is_ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "state": db.state.value},
        )
    if not await db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "state": db.state.value,
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
