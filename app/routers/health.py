# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.dependencies import SettingsDep, StagerDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual local checks. The relay is not contacted."""
    scratch_directory: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(stager: StagerDep):
    """
    Readiness check endpoint.

    Ready when the scratch directory exists and is writable, since job
    applications cannot be staged otherwise.
    """
    writable = stager.is_writable()

    return ReadinessResponse(
        status="ready" if writable else "degraded",
        checks=ChecksResponse(
            scratch_directory="healthy" if writable else f"unwritable: {stager.upload_dir}",
        ),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
