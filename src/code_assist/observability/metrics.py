"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- Cache and generation counters for the assist routes
- Metrics endpoint configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from code_assist.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from code_assist.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "code_assist"

CACHE_LOOKUPS = Counter(
    "cache_lookups_total",
    "Response cache lookups by route and result (hit, miss)",
    ["route", "result"],
    namespace=METRIC_NAMESPACE,
)

GENERATION_FAILURES = Counter(
    "generation_failures_total",
    "Failed calls to the text generation service by route",
    ["route"],
    namespace=METRIC_NAMESPACE,
)


def record_cache_lookup(route: str, *, hit: bool) -> None:
    """Count a cache lookup for a route."""
    CACHE_LOOKUPS.labels(route=route, result="hit" if hit else "miss").inc()


def record_generation_failure(route: str) -> None:
    """Count a failed generation call for a route."""
    GENERATION_FAILURES.labels(route=route).inc()


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Configure Prometheus metrics instrumentation.

    Sets up automatic HTTP request metrics collection including:
    - Request count by method, path, and status code
    - Request duration histogram
    - Requests in progress gauge

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        Configured Instrumentator instance.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    logger.info("Setting up Prometheus metrics")

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/health", "/ready", "/metrics"],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
            should_only_respect_2xx_for_highr=False,
        )
    )

    instrumentator.instrument(app)
    instrumentator.expose(
        app,
        endpoint="/metrics",
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint="/metrics")

    return instrumentator


__all__ = [
    "CACHE_LOOKUPS",
    "GENERATION_FAILURES",
    "record_cache_lookup",
    "record_generation_failure",
    "setup_metrics",
]
