"""Generation client data models.

Request/response models for the OpenAI-compatible chat completions API,
plus the internal completion result.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str | None = Field(default=None, description="Message content")


class ChatCompletionRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    max_completion_tokens: int | None = Field(
        default=None,
        description="Maximum tokens to generate",
    )
    stop: list[str] | None = Field(
        default=None,
        description="Sequences where generation stops",
    )
    stream: bool = Field(default=False, description="Whether to stream response")


class ChatUsage(BaseModel):
    """Token usage reported by the service."""

    prompt_tokens: int = Field(default=0, description="Input token count")
    completion_tokens: int = Field(default=0, description="Output token count")
    total_tokens: int = Field(default=0, description="Total token count")


class ChatChoice(BaseModel):
    """Single choice in a chat completion response."""

    index: int = Field(default=0, description="Choice index")
    message: ChatMessage = Field(..., description="Generated message")
    finish_reason: str | None = Field(default=None, description="Reason for completion")


class ChatCompletionResponse(BaseModel):
    """Response from the /chat/completions endpoint."""

    id: str | None = Field(default=None, description="Unique response ID")
    model: str = Field(..., description="Model that generated response")
    choices: list[ChatChoice] = Field(default_factory=list)
    usage: ChatUsage | None = Field(default=None, description="Token usage")


class LLMCompletionResult(BaseModel):
    """Internal result of a completion."""

    text: str = Field(..., description="Generated text ('' if the model returned none)")
    model: str = Field(..., description="Model that generated response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )
    finish_reason: str | None = Field(default=None)

    model_config = {"frozen": True}
