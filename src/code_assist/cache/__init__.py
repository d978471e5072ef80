"""Redis caching layer.

This module provides:
- Fail-soft Redis cache backend with a lazy liveness probe
- Deterministic cache key derivation
"""

from code_assist.cache.backend import (
    CacheBackend,
    close_cache_backend,
    get_cache_backend,
    init_cache_backend,
)
from code_assist.cache.keys import derive_key


__all__ = [
    "CacheBackend",
    "close_cache_backend",
    "derive_key",
    "get_cache_backend",
    "init_cache_backend",
]
