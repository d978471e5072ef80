"""HTTP client for OpenAI-compatible chat completion services.

Talks to ``{base_url}/chat/completions`` with bearer authentication.
Works with OpenAI itself and with any server exposing the same API.
"""

from __future__ import annotations

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from code_assist.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from code_assist.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    LLMCompletionResult,
)
from code_assist.observability.logging import get_logger


logger = get_logger(__name__)


def _encodable(text: str) -> str:
    """Replace lone surrogates, which cannot be sent as UTF-8, with '?'."""
    return text.encode("utf-8", "replace").decode("utf-8")


class OpenAIClient:
    """Async HTTP client for an OpenAI-compatible chat completions API.

    Retries timeouts and connection errors; HTTP error statuses are not
    retried. Requests are paced with a client-side rate limiter.

    Attributes:
        base_url: API base URL.
        model: Default model (e.g., gpt-4o-mini).
        api_key: Bearer token for authentication.
        timeout: HTTP request timeout in seconds.
        max_retries: Maximum retry attempts for transient failures.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        max_retries: int = 2,
        requests_per_minute: float = 600.0,
    ) -> None:
        if not api_key:
            msg = "OPENAI_API_KEY is not set"
            raise LLMConfigurationError(msg)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._http_client: httpx.AsyncClient | None = None
        # Up to requests_per_minute calls in any 60s window, bursts allowed
        self._rate_limiter = AsyncLimiter(requests_per_minute, 60.0)

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
            ),
        )
        logger.info(
            "OpenAIClient initialized",
            model=self.model,
            base_url=self.base_url,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenAIClient shutdown")

    async def _execute_with_retry(
        self,
        request: ChatCompletionRequest,
    ) -> ChatCompletionResponse:
        """Execute request with retry logic for transient failures."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(
                    self.chat_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"Generation service rate limit exceeded, retry after {retry_after}s"
                    raise LLMRateLimitError(msg)

                response.raise_for_status()
                return ChatCompletionResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "Generation request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Generation service timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.error(
                    "Generation request failed",
                    status_code=e.response.status_code,
                    url=self.chat_url,
                    body=e.response.text[:500],
                )
                msg = f"Generation service returned {e.response.status_code}"
                raise LLMResponseError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "Generation service connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to generation service: {e}"
                raise LLMUnavailableError(msg) from e

            except (ValueError, ValidationError) as e:
                msg = f"Malformed response from generation service: {e}"
                raise LLMResponseError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        stop: list[str] | None = None,
    ) -> LLMCompletionResult:
        """Generate a chat completion.

        Args:
            prompt: User message content.
            system: Optional system prompt.
            model: Model to use (defaults to client's default model).
            max_tokens: Maximum tokens to generate.
            stop: Stop sequences.

        Returns:
            LLMCompletionResult with the text of the first choice.

        Raises:
            LLMUnavailableError: If the service cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: If the service returns an error.
            LLMRateLimitError: If the request is rate limited.
        """
        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=_encodable(system)))
        messages.append(ChatMessage(role="user", content=_encodable(prompt)))

        request = ChatCompletionRequest(
            model=model or self.model,
            messages=messages,
            max_completion_tokens=max_tokens,
            stop=stop or None,
        )

        response = await self._execute_with_retry(request)

        if not response.choices:
            msg = "Generation service returned no choices"
            raise LLMResponseError(msg)

        choice = response.choices[0]
        usage = response.usage

        return LLMCompletionResult(
            text=choice.message.content or "",
            model=response.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
            finish_reason=choice.finish_reason,
        )
