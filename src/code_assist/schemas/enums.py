"""Enumerations shared across the service."""

from __future__ import annotations

from enum import StrEnum


class RouteId(StrEnum):
    """Supported assist modes.

    The value doubles as the URL path segment and the cache key namespace.
    """

    COMPLETIONS = "completions"
    EXPLAIN = "explain"
    COMMENT = "comment"
    OBFUS = "obfus"
    SUGGEST = "suggest"
