"""
Health Check Endpoints

Health, readiness and liveness endpoints for orchestrators and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, HTTPException, Request, status

from docs_gateway.models.health import (
    ConfigurationSummary,
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
)

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Reports the gateway version and a summary of the loaded configuration.
    """
    settings = request.app.state.settings

    return HealthResponse(
        status="healthy",
        gateway=settings.GATEWAY_NAME,
        version=settings.GATEWAY_VERSION,
        timestamp=datetime.now(UTC).isoformat(),
        configuration_file=settings.CONFIGURATION_FILE,
        configuration=ConfigurationSummary.of(request.app.state.configuration),
    )


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness check")
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Not ready until at least one swagger endpoint is configured.
    """
    summary = ConfigurationSummary.of(request.app.state.configuration)

    if not summary.document_versions:
        logger.warning("Readiness check failed, no swagger endpoints configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No swagger endpoints configured",
        )

    return ReadinessResponse(ready=True, document_versions=summary.document_versions)


@router.get("/live", response_model=LivenessResponse, summary="Liveness check")
async def liveness_check() -> LivenessResponse:
    return LivenessResponse()
