"""Unit tests for health and root endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from code_assist.cache import backend as backend_module
from code_assist.cache.backend import CacheBackend
from tests.conftest import FakeRedis


if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


pytestmark = pytest.mark.unit


class TestHealthEndpoint:
    """Tests for the liveness probe."""

    async def test_health(self, client: AsyncClient) -> None:
        """Should always report healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert data["version"] == "0.1.0"
        assert "timestamp" in data

    async def test_health_with_redis_down(
        self,
        client: AsyncClient,
        fake_redis: FakeRedis,
    ) -> None:
        """Liveness does not depend on Redis."""
        fake_redis.fail_ping = True

        response = await client.get("/health")

        assert response.json()["status"] == "healthy"


class TestReadinessEndpoint:
    """Tests for the readiness probe."""

    async def test_ready(self, client: AsyncClient) -> None:
        """Both dependencies healthy means ready."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["dependencies"] == {"redis_cache": "healthy", "llm": "healthy"}

    async def test_degraded_when_redis_down(
        self,
        client: AsyncClient,
        fake_redis: FakeRedis,
    ) -> None:
        """Redis is optional, so an outage only degrades the service."""
        fake_redis.fail_ping = True

        response = await client.get("/ready")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["redis_cache"] == "unhealthy"

    async def test_ready_when_cache_disabled(self, client: AsyncClient) -> None:
        """A disabled cache does not block readiness."""
        backend_module._backend = CacheBackend(
            "redis://localhost:6379/0",
            enabled=False,
            client=FakeRedis(),  # type: ignore[arg-type]
        )

        response = await client.get("/ready")

        data = response.json()
        assert data["status"] == "ready"
        assert data["dependencies"]["redis_cache"] == "disabled"

    async def test_not_ready_without_service(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Without the assist service the instance cannot serve traffic."""
        app.state.assist_service = None

        response = await client.get("/ready")

        data = response.json()
        assert data["status"] == "not_ready"
        assert data["dependencies"]["llm"] == "not_initialized"


class TestRootEndpoint:
    """Tests for the root endpoint."""

    async def test_root(self, client: AsyncClient) -> None:
        """Should describe the service."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "Code Assist Service"
        assert data["docs"] == "/docs"

    async def test_openapi_lists_assist_routes(self, client: AsyncClient) -> None:
        """Docs are enabled outside production and list every route."""
        response = await client.get("/openapi.json")

        paths = response.json()["paths"]
        for path in ("/completions", "/explain", "/comment", "/obfus", "/suggest"):
            assert "post" in paths[path]
