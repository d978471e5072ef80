"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, Redis cache, generation client, assist service
- Application shutdown: close HTTP and Redis connections, flush traces
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from code_assist.cache.backend import close_cache_backend, init_cache_backend
from code_assist.core.config import Settings, get_settings
from code_assist.llm.client.openai import OpenAIClient
from code_assist.llm.prompts import validate_prompt_table
from code_assist.observability.logging import get_logger, setup_logging
from code_assist.observability.tracing import shutdown_tracing
from code_assist.services.assist.service import AssistService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Configuration errors (missing API key, missing prompt template) are
    raised and abort startup. A Redis outage is not an error: the cache
    degrades to passthrough.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    validate_prompt_table()

    cache = init_cache_backend(settings)
    if settings.cache.enabled and not await cache.probe():
        logger.warning("Redis unavailable at startup - serving without cache")

    llm_client = OpenAIClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.llm.model,
        base_url=settings.llm.base_url,
        timeout=settings.llm.timeout,
        max_retries=settings.llm.max_retries,
        requests_per_minute=settings.llm.requests_per_minute,
    )
    await llm_client.initialize()

    app.state.llm_client = llm_client
    app.state.assist_service = AssistService(
        llm_client=llm_client,
        cache=cache,
        settings=settings,
    )

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    llm_client = getattr(app.state, "llm_client", None)
    if llm_client is not None:
        await llm_client.shutdown()
        app.state.llm_client = None

    app.state.assist_service = None

    shutdown_tracing()

    await close_cache_backend()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
