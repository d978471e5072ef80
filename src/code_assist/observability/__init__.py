"""Observability components: logging, metrics, and tracing."""

from code_assist.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
)
from code_assist.observability.metrics import (
    record_cache_lookup,
    record_generation_failure,
    setup_metrics,
)
from code_assist.observability.tracing import (
    add_span_attributes,
    setup_tracing,
    shutdown_tracing,
)


__all__ = [
    "add_span_attributes",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "record_cache_lookup",
    "record_generation_failure",
    "setup_logging",
    "setup_metrics",
    "setup_tracing",
    "shutdown_tracing",
]
