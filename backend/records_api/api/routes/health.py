"""Health, Readiness & Metrics — probes for container orchestration and scraping.

Invariants:
    - GET /health always returns 200 if the process is up (liveness);
      database state is reported, never acted on
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - GET /metrics is a point-in-time snapshot; the request counter includes
      the metrics request itself
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from records_api.api.dependencies import get_metrics
from records_api.config import Settings, get_settings
from records_api.infrastructure import database
from records_api.infrastructure.observability import ProcessMetrics, utc_now_iso

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
async def root(settings: Settings = Depends(get_settings)):
    return {
        "message": "Healthcare Backend Server is running!",
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "environment": settings.environment,
        "port": settings.port,
    }


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(metrics: ProcessMetrics = Depends(get_metrics)):
    """Liveness probe. Returns 200 while the process is responsive."""
    return {
        "status": "healthy",
        "uptime": metrics.uptime(),
        "timestamp": utc_now_iso(),
        "database": database.connection_state().value,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe — includes a database round trip."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "connected"}}


@router.get("/metrics")
async def metrics_snapshot(metrics: ProcessMetrics = Depends(get_metrics)):
    return metrics.snapshot(database.connection_state().value)
