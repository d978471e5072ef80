"""Shared test fixtures for the code assist service tests.

Provides an in-memory Redis stand-in, test settings with observability
switched off, a mocked generation client and an ASGI test client wired to
the real assist service.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError


# Must be set before any settings are loaded
os.environ.setdefault("APP_ENV", "test")

from code_assist.cache import backend as backend_module  # noqa: E402
from code_assist.cache.backend import CacheBackend  # noqa: E402
from code_assist.core.config import Settings  # noqa: E402
from code_assist.factory import create_app  # noqa: E402
from code_assist.llm.client.openai import OpenAIClient  # noqa: E402
from code_assist.llm.models import LLMCompletionResult  # noqa: E402
from code_assist.services.assist.service import AssistService  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator

    from fastapi import FastAPI


GENERATED_TEXT = "def reverse(s: str) -> str:\n    return s[::-1]"


class FakeRedis:
    """Minimal in-memory replacement for ``redis.asyncio.Redis``.

    Records how often each command was issued so tests can assert that an
    unavailable cache performs no I/O.
    """

    def __init__(self, *, fail_ping: bool = False, fail_ops: bool = False) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail_ping = fail_ping
        self.fail_ops = fail_ops
        self.ping_calls = 0
        self.get_calls = 0
        self.set_calls = 0
        self.closed = False

    async def ping(self) -> bool:
        self.ping_calls += 1
        if self.fail_ping:
            msg = "Error 111 connecting to localhost:6379. Connection refused."
            raise RedisConnectionError(msg)
        return True

    async def get(self, key: str) -> str | None:
        self.get_calls += 1
        if self.fail_ops:
            msg = "Connection closed by server."
            raise RedisConnectionError(msg)
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.set_calls += 1
        if self.fail_ops:
            msg = "Connection closed by server."
            raise RedisConnectionError(msg)
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def aclose(self) -> None:
        self.closed = True


def make_result(text: str = GENERATED_TEXT, **kwargs: Any) -> LLMCompletionResult:
    """Build a generation result with sensible defaults."""
    defaults: dict[str, Any] = {
        "model": "gpt-4o-mini",
        "prompt_tokens": 42,
        "completion_tokens": 12,
        "finish_reason": "stop",
    }
    defaults.update(kwargs)
    return LLMCompletionResult(text=text, **defaults)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: no metrics, no tracing, a dummy API key."""
    return Settings(
        APP_ENV="test",
        OPENAI_API_KEY="sk-test",
        observability={
            "tracing": {"enabled": False},
            "metrics": {"enabled": False},
        },
    )


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Healthy in-memory Redis."""
    return FakeRedis()


@pytest.fixture
def cache_backend(fake_redis: FakeRedis) -> CacheBackend:
    """Cache backend on top of the in-memory Redis."""
    return CacheBackend("redis://localhost:6379/0", client=fake_redis)  # type: ignore[arg-type]


@pytest.fixture
def mock_llm_client() -> AsyncMock:
    """Generation client returning a fixed completion."""
    client = AsyncMock(spec=OpenAIClient)
    client.generate.return_value = make_result()
    return client


@pytest.fixture
def assist_service(
    mock_llm_client: AsyncMock,
    cache_backend: CacheBackend,
    test_settings: Settings,
) -> AssistService:
    """Assist service with mocked generation and in-memory cache."""
    return AssistService(
        llm_client=mock_llm_client,
        cache=cache_backend,
        settings=test_settings,
    )


@pytest.fixture
def app(
    test_settings: Settings,
    assist_service: AssistService,
    cache_backend: CacheBackend,
) -> Iterator[FastAPI]:
    """Application with services installed directly on app.state.

    The lifespan is not run by the ASGI transport, so the fixtures stand in
    for what startup would create.
    """
    application = create_app(test_settings)
    application.state.assist_service = assist_service

    previous = backend_module._backend
    backend_module._backend = cache_backend
    yield application
    backend_module._backend = previous


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the application in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
