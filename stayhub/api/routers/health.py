"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/db: Storage connectivity check
- /health/ready: Readiness check (all dependencies healthy)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from stayhub.api.dependencies import get_bundle

logger = logging.getLogger(__name__)

router = APIRouter()


async def _probe_storage(bundle: dict[str, Any]) -> str:
    """Return the storage backend name; raises if the database is unreachable."""
    engine = bundle["engine"]
    if engine is None:
        return "in_memory"
    async with engine.connect() as conn:
        result = await conn.execute(text("SELECT 1"))
        result.scalar()
    return "database"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": "stayhub-booking"}


@router.get("/health/db")
async def health_check_db(bundle: dict = Depends(get_bundle)):
    """
    Storage connectivity health check.

    Returns 503 Service Unavailable if the database is down.
    """
    try:
        backend = await _probe_storage(bundle)
        return {"status": "healthy", "component": backend}
    except Exception as e:
        logger.error("Database health check failed", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed",
            },
        )


@router.get("/health/ready")
async def health_check_ready(bundle: dict = Depends(get_bundle)):
    """
    Readiness probe for K8s/orchestration.

    Checks storage connectivity and reports pending notification deliveries.
    Returns 503 if not ready to accept requests.
    """
    health_status: dict[str, Any] = {"status": "ready", "checks": {}}

    try:
        await _probe_storage(bundle)
        health_status["checks"]["storage"] = "healthy"
    except Exception as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["storage"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    health_status["checks"]["pending_notifications"] = bundle["dispatcher"].pending
    return health_status


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for Kubernetes liveness probe."""
    return {"status": "ok", "service": "stayhub-booking"}
