"""
Health check router.

Reports database reachability and required settings for readiness
probes. Returns 500 when the service cannot work.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from hoardrun.core.config import settings
from hoardrun.infrastructure.persistence.database import check_connection
from hoardrun.interfaces.dependencies import get_engine
from hoardrun.interfaces.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": HealthResponse}},
    summary="Health check",
    description="Returns application status, version and database connectivity.",
)
def health_check(engine: Engine = Depends(get_engine)) -> JSONResponse:
    """Return current application health status."""
    database_ok = check_connection(engine)
    missing = settings.missing_required()
    healthy = database_ok and not missing
    if not healthy:
        logger.error(
            "Health check failed: database=%s missing_settings=%s",
            "connected" if database_ok else "unreachable",
            missing,
        )
    body = HealthResponse(
        status="ok" if healthy else "unhealthy",
        version=settings.version,
        environment=settings.environment,
        database="connected" if database_ok else "unreachable",
        missing_settings=missing,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=200 if healthy else 500, content=body.model_dump(mode="json")
    )
