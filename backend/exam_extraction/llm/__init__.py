"""LLM client abstraction for Azure OpenAI and OpenAI-compatible endpoints."""

from .factory import create_llm_client
from .client import BaseLLMClient
from .errors import (
    AIServiceError,
    RateLimitError,
    CreditsExhaustedError,
    MalformedResponseError,
)

__all__ = [
    "create_llm_client",
    "BaseLLMClient",
    "AIServiceError",
    "RateLimitError",
    "CreditsExhaustedError",
    "MalformedResponseError",
]
