"""Health check endpoints.

Provides liveness and readiness probes for orchestrators and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from code_assist.api.dependencies import get_app_settings
from code_assist.cache.backend import get_cache_backend
from code_assist.core.config import Settings


router = APIRouter(tags=["health"])

_NON_BLOCKING_STATES = ("healthy", "disabled", "not_initialized")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with dependency status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive. Does not touch dependencies."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Check if the service can handle requests.

    The generation client is required; Redis is optional and an outage
    only marks the service as degraded.
    """
    llm_ready = getattr(request.app.state, "assist_service", None) is not None
    dependencies = {
        "redis_cache": await get_cache_backend().health(),
        "llm": "healthy" if llm_ready else "not_initialized",
    }

    if not llm_ready:
        status = "not_ready"
    elif dependencies["redis_cache"] in _NON_BLOCKING_STATES:
        status = "ready"
    else:
        status = "degraded"

    return ReadinessResponse(
        status=status,
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
