"""Generation client implementations."""

from code_assist.llm.client.openai import OpenAIClient
from code_assist.llm.client.protocol import LLMClientProtocol


__all__ = [
    "LLMClientProtocol",
    "OpenAIClient",
]
