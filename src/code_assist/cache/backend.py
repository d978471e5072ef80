"""Redis cache backend with fail-soft semantics.

This module provides:
- A lazily connected, process-wide Redis client
- A timeout-bounded, single-flight liveness probe
- get/set operations that degrade to cache-miss/no-op when Redis is down
- Connection lifecycle management via lifespan events

Cache errors are never propagated to callers: caching is an optimization,
and a Redis outage must not turn into a failed request.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from code_assist.core.config import get_settings
from code_assist.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from code_assist.core.config import Settings

logger = get_logger(__name__)


class CacheBackend:
    """Key-value cache on top of a shared Redis client.

    Availability is established lazily by ``probe()`` and then cached: once
    Redis answered a PING, later calls skip the probe. After a failed probe
    the backend stays unavailable for ``reprobe_interval`` seconds before
    another PING is attempted.

    Attributes:
        url: Redis connection URL.
        enabled: When False every operation is a no-op and Redis is never touched.
        probe_timeout: Upper bound in seconds for a single PING.
        reprobe_interval: Seconds to wait after a failed probe before retrying.
    """

    def __init__(
        self,
        url: str,
        *,
        enabled: bool = True,
        probe_timeout: float = 2.0,
        reprobe_interval: float = 30.0,
        socket_timeout: float = 2.0,
        max_connections: int = 20,
        client: Redis[Any] | None = None,
    ) -> None:
        self.url = url
        self.enabled = enabled
        self.probe_timeout = probe_timeout
        self.reprobe_interval = reprobe_interval
        self.socket_timeout = socket_timeout
        self.max_connections = max_connections
        self._client = client
        self._ready = False
        self._last_failure: float | None = None
        self._probe_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheBackend:
        """Build a backend from application settings."""
        return cls(
            settings.redis_cache_url,
            enabled=settings.cache.enabled,
            probe_timeout=settings.redis.probe_timeout,
            reprobe_interval=settings.redis.reprobe_interval,
            socket_timeout=settings.redis.socket_timeout,
            max_connections=settings.redis.max_connections,
        )

    @property
    def is_ready(self) -> bool:
        """Whether Redis has answered a liveness probe."""
        return self._ready

    def _get_client(self) -> Redis[Any]:
        """Return the shared client, creating it on first use.

        Creating the client does not open a connection; redis-py connects
        on the first command.
        """
        if self._client is None:
            self._client = redis.Redis.from_url(
                self.url,
                decode_responses=True,
                max_connections=self.max_connections,
                socket_connect_timeout=self.probe_timeout,
                socket_timeout=self.socket_timeout,
            )
        return self._client

    def _in_backoff(self) -> bool:
        if self._last_failure is None:
            return False
        return time.monotonic() - self._last_failure < self.reprobe_interval

    def _mark_unavailable(self) -> None:
        self._ready = False
        self._last_failure = time.monotonic()

    async def probe(self) -> bool:
        """Verify connectivity to Redis.

        Returns:
            True if Redis is (or already was) reachable, False otherwise.
            Never raises.
        """
        if self._ready:
            return True
        if not self.enabled or self._in_backoff():
            return False

        async with self._probe_lock:
            # Another request may have finished the probe while we waited
            if self._ready:
                return True
            if self._in_backoff():
                return False

            try:
                await asyncio.wait_for(
                    self._get_client().ping(), timeout=self.probe_timeout
                )
            except TimeoutError:
                logger.warning(
                    "Redis liveness probe timed out - caching disabled",
                    timeout=self.probe_timeout,
                    retry_in=self.reprobe_interval,
                )
                self._mark_unavailable()
                return False
            except Exception as e:
                logger.warning(
                    "Redis liveness probe failed - caching disabled",
                    error=str(e),
                    retry_in=self.reprobe_interval,
                )
                self._mark_unavailable()
                return False

            self._ready = True
            self._last_failure = None
            logger.info("Redis cache connected")
            return True

    async def get(self, key: str) -> str | None:
        """Get a cached value.

        Args:
            key: Full cache key.

        Returns:
            The cached string, or None on a miss or when Redis is unavailable.
        """
        if not await self.probe():
            return None

        try:
            value = await self._get_client().get(key)
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.warning("Cache get failed - Redis unreachable", key=key, error=str(e))
            self._mark_unavailable()
            return None
        except Exception:
            logger.exception("Cache get error", key=key)
            return None

        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store a value with an expiration.

        Args:
            key: Full cache key.
            value: String value to store.
            ttl: Time to live in seconds.

        Returns:
            True if the value was written, False otherwise.
        """
        if not await self.probe():
            return False

        try:
            await self._get_client().set(key, value, ex=ttl)
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.warning("Cache set failed - Redis unreachable", key=key, error=str(e))
            self._mark_unavailable()
            return False
        except Exception:
            logger.exception("Cache set error", key=key)
            return False

        logger.debug("Cached response", key=key, ttl=ttl)
        return True

    async def health(self) -> str:
        """Report cache health for the readiness endpoint.

        Returns:
            "disabled", "not_initialized", "healthy" or "unhealthy".
        """
        if not self.enabled:
            return "disabled"
        if self._client is None:
            return "not_initialized"
        try:
            await asyncio.wait_for(self._client.ping(), timeout=self.probe_timeout)
        except Exception:
            return "unhealthy"
        return "healthy"

    async def close(self) -> None:
        """Close the Redis client and release its connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._ready = False


_backend: CacheBackend | None = None


def init_cache_backend(settings: Settings | None = None) -> CacheBackend:
    """Create the process-wide cache backend.

    Should be called during application startup (lifespan).
    """
    global _backend  # noqa: PLW0603

    if settings is None:
        settings = get_settings()

    logger.info(
        "Initializing Redis cache",
        host=settings.redis.host,
        port=settings.redis.port,
        enabled=settings.cache.enabled,
    )
    _backend = CacheBackend.from_settings(settings)
    return _backend


def get_cache_backend() -> CacheBackend:
    """Get the process-wide cache backend, creating it on first use."""
    if _backend is None:
        return init_cache_backend()
    return _backend


async def close_cache_backend() -> None:
    """Close the process-wide cache backend.

    Should be called during application shutdown (lifespan).
    """
    global _backend  # noqa: PLW0603

    if _backend is not None:
        logger.info("Closing Redis cache connection")
        await _backend.close()
        _backend = None
