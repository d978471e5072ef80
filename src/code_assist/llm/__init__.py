"""Text generation integration.

Provides the OpenAI-compatible chat client and the system prompts used
by each assist route.
"""

from code_assist.llm.client import LLMClientProtocol, OpenAIClient
from code_assist.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from code_assist.llm.models import LLMCompletionResult


__all__ = [
    "LLMClientProtocol",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OpenAIClient",
]
