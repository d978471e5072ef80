"""Unit tests for the assist endpoints.

Requests go through the full application (middleware, exception handlers,
routing) with the generation client mocked and Redis in memory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from code_assist.cache.keys import derive_key
from code_assist.llm.exceptions import LLMUnavailableError
from code_assist.schemas.enums import RouteId
from code_assist.services.assist.constants import ROUTES
from tests.conftest import GENERATED_TEXT, FakeRedis


if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


pytestmark = pytest.mark.unit


class TestAssistRoutes:
    """Tests for the happy path of every route."""

    @pytest.mark.parametrize("route_id", list(RouteId))
    async def test_route_returns_output_field(
        self,
        client: AsyncClient,
        route_id: RouteId,
    ) -> None:
        """Each route should answer with exactly its output field."""
        route = ROUTES[route_id]

        response = await client.post(route.path, json={route.input_field: "x = 1"})

        assert response.status_code == 200
        assert response.json() == {route.output_field: GENERATED_TEXT}

    async def test_cold_then_warm_completion(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """The second identical request is served from the cache."""
        body = {"instruction": "reverse a string"}

        first = await client.post("/completions", json=body)
        second = await client.post("/completions", json=body)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == {"completion": GENERATED_TEXT}
        assert mock_llm_client.generate.await_count == 1
        assert derive_key("completions", "reverse a string") in fake_redis.store

    async def test_cached_response_returned(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """A pre-populated entry should be returned verbatim."""
        fake_redis.store[derive_key("obfus", "print(1)")] = "def a1b2(c): print(c)"

        response = await client.post("/obfus", json={"code": "print(1)"})

        assert response.json() == {"obfus": "def a1b2(c): print(c)"}
        mock_llm_client.generate.assert_not_awaited()

    async def test_only_post_allowed(self, client: AsyncClient) -> None:
        """Assist routes do not accept GET."""
        response = await client.get("/explain")

        assert response.status_code == 405
        assert "error" in response.json()


class TestAssistValidation:
    """Tests for 400 responses."""

    async def test_missing_field(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """An empty object is rejected without side effects."""
        response = await client.post("/explain", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or empty `code` field."}
        mock_llm_client.generate.assert_not_awaited()
        assert fake_redis.get_calls == 0

    async def test_blank_field(self, client: AsyncClient) -> None:
        """Whitespace-only input counts as empty."""
        response = await client.post("/suggest", json={"code_context": "  \n "})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or empty `code_context` field."}

    async def test_wrong_field_name(self, client: AsyncClient) -> None:
        """Input under another route's field name is missing."""
        response = await client.post("/completions", json={"code": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or empty `instruction` field."}

    async def test_invalid_json(self, client: AsyncClient) -> None:
        """A body that is not JSON is treated as a missing field."""
        response = await client.post(
            "/comment",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or empty `code` field."}

    async def test_non_object_json(self, client: AsyncClient) -> None:
        """A JSON array is not a valid body."""
        response = await client.post("/comment", json=["x = 1"])

        assert response.status_code == 400

    async def test_lone_surrogate_escape(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """A valid JSON escape for a lone surrogate is ordinary input."""
        response = await client.post(
            "/explain",
            content=b'{"code": "\\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"explanation": GENERATED_TEXT}
        args, _ = mock_llm_client.generate.call_args
        assert args[0] == "\ud800"
        assert derive_key("explain", "\ud800") in fake_redis.store


class TestAssistFailures:
    """Tests for 500 and 503 responses."""

    async def test_generation_failure(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """An upstream failure becomes the route's generic error."""
        mock_llm_client.generate.side_effect = LLMUnavailableError("refused")

        response = await client.post("/comment", json={"code": "x = 1"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to comment code."}
        assert fake_redis.store == {}

    async def test_redis_down_still_serves(
        self,
        client: AsyncClient,
        mock_llm_client: AsyncMock,
        fake_redis: FakeRedis,
    ) -> None:
        """A Redis outage should not affect responses."""
        fake_redis.fail_ping = True

        first = await client.post("/explain", json={"code": "x = 1"})
        second = await client.post("/explain", json={"code": "x = 1"})

        assert first.status_code == second.status_code == 200
        assert mock_llm_client.generate.await_count == 2

    async def test_service_not_initialized(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Requests before startup completes get a 503."""
        app.state.assist_service = None

        response = await client.post("/explain", json={"code": "x = 1"})

        assert response.status_code == 503
        assert response.json() == {"error": "Assist service not available"}


class TestRequestHeaders:
    """Tests for headers added by middleware."""

    async def test_request_id_generated(self, client: AsyncClient) -> None:
        """Responses should carry a request ID."""
        response = await client.post("/explain", json={"code": "x = 1"})

        assert response.headers["X-Request-ID"]
        assert response.headers["X-Process-Time"].endswith("ms")

    async def test_request_id_propagated(self, client: AsyncClient) -> None:
        """An incoming request ID should be echoed back."""
        response = await client.post(
            "/explain",
            json={"code": "x = 1"},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"
