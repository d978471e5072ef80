"""Generation client protocol definition.

Defines the interface the assist service depends on, so the HTTP client
can be swapped or faked in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from code_assist.llm.models import LLMCompletionResult


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Protocol for text generation clients."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        stop: list[str] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion for a user prompt.

        Args:
            prompt: User text.
            system: Optional system prompt.
            model: Model override (uses client default if None).
            max_tokens: Output size cap.
            stop: Stop sequences.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: Error response from the service.
            LLMRateLimitError: Request was rate limited.
        """
        ...
