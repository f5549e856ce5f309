"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Both answer in the uniform {success, message, data} envelope
"""

import logging

from fastapi import APIRouter, status

from forms_api.api.responder import json_responder
from forms_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "customer-forms-api"


@router.get("/")
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return json_responder.success(
        status.HTTP_200_OK, "Service is healthy",
        {"status": "healthy", "service": SERVICE_NAME},
    )


@router.get("/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return json_responder.error(
            status.HTTP_503_SERVICE_UNAVAILABLE, "Database unavailable",
            {"status": "not_ready", "reason": "database_unavailable"},
        )
    return json_responder.success(
        status.HTTP_200_OK, "Service is ready",
        {"status": "ready", "checks": {"database": "healthy"}},
    )
