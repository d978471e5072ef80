"""Unit tests for request logging middleware."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from code_assist.core.middleware.logging import LoggingMiddleware
from code_assist.observability.logging import clear_context, get_context


pytestmark = pytest.mark.unit


def _request(path: str, headers: dict[str, str] | None = None) -> MagicMock:
    request = MagicMock()
    request.method = "POST"
    request.url.path = path
    request.headers = headers or {}
    request.client.host = "10.0.0.5"
    return request


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    async def test_excluded_paths_not_logged(self) -> None:
        """Probe endpoints should pass through silently."""
        middleware = LoggingMiddleware(MagicMock(), exclude_paths={"/health"})
        call_next = AsyncMock(return_value=MagicMock(status_code=200))

        with patch("code_assist.core.middleware.logging.logger") as mock_logger:
            await middleware.dispatch(_request("/health"), call_next)

        mock_logger.info.assert_not_called()
        call_next.assert_awaited_once()

    async def test_logs_start_and_completion(self) -> None:
        """Should log the request and the response status."""
        clear_context()
        middleware = LoggingMiddleware(MagicMock())
        call_next = AsyncMock(return_value=MagicMock(status_code=201))

        with patch("code_assist.core.middleware.logging.logger") as mock_logger:
            await middleware.dispatch(_request("/explain"), call_next)

        assert mock_logger.info.call_count == 2
        assert mock_logger.info.call_args.kwargs["status_code"] == 201
        assert get_context() == {
            "method": "POST",
            "path": "/explain",
            "client_ip": "10.0.0.5",
        }

    @pytest.mark.parametrize(
        ("headers", "expected"),
        [
            ({"x-forwarded-for": "1.2.3.4, 10.0.0.1"}, "1.2.3.4"),
            ({"x-real-ip": "5.6.7.8"}, "5.6.7.8"),
            ({}, "10.0.0.5"),
        ],
    )
    def test_client_ip(self, headers: dict[str, str], expected: str) -> None:
        """Should prefer proxy headers over the socket address."""
        middleware = LoggingMiddleware(MagicMock())

        assert middleware._get_client_ip(_request("/explain", headers)) == expected

    def test_client_ip_unknown(self) -> None:
        """Should fall back to 'unknown' without client info."""
        middleware = LoggingMiddleware(MagicMock())
        request = _request("/explain")
        request.client = None

        assert middleware._get_client_ip(request) == "unknown"
