"""Health & Readiness - liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready raises DatabaseError (503) while the store
      is missing or unreachable (readiness)
"""

import logging
from fastapi import APIRouter, status

from taskboard.core.errors import DatabaseError, ErrorContext
from taskboard.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "taskboard-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness, includes database connectivity."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        raise DatabaseError(
            "store unreachable", "health_check",
            ErrorContext(operation="health_check"),
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
