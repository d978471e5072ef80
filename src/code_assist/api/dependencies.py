"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from code_assist.core.config import Settings, get_settings
from code_assist.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from code_assist.services.assist.service import AssistService


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_assist_service(request: Request) -> AssistService:
    """Get the assist service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: AssistService | None = getattr(request.app.state, "assist_service", None)
    if service is None:
        raise ServiceUnavailableException("Assist service not available")
    return service
