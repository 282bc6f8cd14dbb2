"""LLM providers for text generation.

The primary interface is LLMExecutor, which routes a model string
(e.g. "google/gemini-2.0-flash") to the matching Agno model class
and walks a fallback chain on failure.
"""

from minicrm.providers.llm.base import (
    AuthenticationError,
    LLMMessage,
    LLMResponse,
    ProviderError,
    RateLimitError,
    TokenUsage,
)
from minicrm.providers.llm.executor import LLMExecutor, create_executor

__all__ = [
    "LLMMessage",
    "LLMResponse",
    "TokenUsage",
    "ProviderError",
    "AuthenticationError",
    "RateLimitError",
    "LLMExecutor",
    "create_executor",
]
