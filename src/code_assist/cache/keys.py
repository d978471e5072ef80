"""Cache key derivation for assist responses."""

from __future__ import annotations

import hashlib


def derive_key(route_id: str, raw_input: str) -> str:
    """Build the cache key for a route and its raw user input.

    The input is stripped of surrounding whitespace and hashed with SHA-256,
    so keys have a fixed length regardless of input size. The route id is
    used as a namespace prefix.

    Args:
        route_id: Route identifier (e.g. "explain").
        raw_input: Text exactly as received in the request body.

    Returns:
        Key of the form ``"<route_id>:<64 hex chars>"``.

    Example:
        derive_key("explain", "  print(1)\\n")
        # Returns: "explain:<sha256 of 'print(1)'>"
    """
    # JSON strings may carry lone surrogates; they must hash, not raise
    digest = hashlib.sha256(
        raw_input.strip().encode("utf-8", "surrogatepass")
    ).hexdigest()
    return f"{route_id}:{digest}"
