"""Text generation client exceptions.

These exceptions are raised by the generation client and caught by the
assist service, which converts them to a generic HTTP 500 response.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for generation client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the generation service cannot be reached.

    Covers connection errors and exhausted retries.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when a generation request times out."""


class LLMResponseError(LLMError):
    """Raised when the generation service returns an error response or
    a body that cannot be parsed."""


class LLMRateLimitError(LLMError):
    """Raised when the generation service rate limits the request."""


class LLMConfigurationError(LLMError):
    """Raised when the generation setup is invalid (missing API key,
    missing prompt template)."""
