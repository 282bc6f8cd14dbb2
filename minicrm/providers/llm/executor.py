"""LLM Executor - runs text generation through Agno model classes.

Model string format:
    google/gemini-2.0-flash            -> Gemini(id="gemini-2.0-flash")
    openai/gpt-4o-mini                 -> OpenAIChat(id="gpt-4o-mini")
    anthropic/claude-3-haiku-20240307  -> Claude(id="claude-3-haiku-20240307")
    openrouter/meta-llama/llama-3-70b  -> OpenRouter(id="meta-llama/llama-3-70b")
    mock/anything                      -> canned response, no network

API keys are read by the Agno model classes from their usual environment
variables (GOOGLE_API_KEY, OPENAI_API_KEY, ...).
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

from minicrm.observability.logging import get_logger
from minicrm.providers.llm.base import (
    AuthenticationError,
    LLMMessage,
    LLMResponse,
    ProviderError,
    RateLimitError,
    TokenUsage,
)

if TYPE_CHECKING:
    from agno.agent import Agent

    from minicrm.config.models.suggestions import SuggestionsConfig

logger = get_logger(__name__)


class LLMExecutor:
    """Executes LLM calls with a fallback chain of models.

    Example:
        executor = LLMExecutor(
            model="google/gemini-2.0-flash",
            fallback_models=["openai/gpt-4o-mini"],
        )

        response = await executor.generate(
            messages=[LLMMessage(role="user", content="Hello")],
        )
    """

    def __init__(
        self,
        model: str,
        fallback_models: list[str] | None = None,
        timeout: float = 60.0,
        mock_response: str | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            model: Primary model string (e.g., 'google/gemini-2.0-flash')
            fallback_models: Models to try if primary fails
            timeout: Request timeout in seconds
            mock_response: Content returned for mock/* models
        """
        self._model = model
        self._fallback_models = fallback_models or []
        self._timeout = timeout
        self._mock_response = mock_response

        # One Agno agent per model string
        self._agents: dict[str, Agent] = {}

    @property
    def model(self) -> str:
        """Primary model for this executor."""
        return self._model

    async def generate(
        self,
        messages: list[LLMMessage],
        *,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Generate text from messages.

        Uses the primary model, falls back to fallback_models on failure.

        Raises:
            ProviderError: When every model in the chain failed
        """
        models_to_try = [self._model] + self._fallback_models
        last_error: Exception | None = None

        for model in models_to_try:
            try:
                return await self._generate_with_model(
                    model=model,
                    messages=messages,
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
            except RateLimitError as e:
                logger.warning("executor_rate_limited", model=model, error=str(e))
                last_error = e
            except ProviderError as e:
                logger.warning("executor_provider_error", model=model, error=str(e))
                last_error = e

        raise ProviderError(
            f"All models failed. Tried: {models_to_try}. Last error: {last_error}"
        )

    # ========================================================================
    # Internal: Agno-based execution
    # ========================================================================

    def _get_or_create_agent(self, model: str) -> Agent:
        if model in self._agents:
            return self._agents[model]

        from agno.agent import Agent

        agent = Agent(
            model=self._create_agno_model(model),
            markdown=False,
        )
        self._agents[model] = agent
        return agent

    def _create_agno_model(self, model: str) -> Any:
        """Create the Agno model class for a model string."""
        provider_type, api_model = self._parse_model(model)

        if provider_type == "google":
            from agno.models.google import Gemini

            return Gemini(id=api_model)

        if provider_type == "openai":
            from agno.models.openai import OpenAIChat

            return OpenAIChat(id=api_model)

        if provider_type == "anthropic":
            from agno.models.anthropic import Claude

            return Claude(id=api_model)

        if provider_type == "openrouter":
            from agno.models.openrouter import OpenRouter

            return OpenRouter(id=api_model)

        raise ProviderError(f"Unknown model provider '{provider_type}' in '{model}'")

    async def _generate_with_model(
        self,
        model: str,
        messages: list[LLMMessage],
        max_tokens: int,  # noqa: ARG002
        temperature: float,  # noqa: ARG002
    ) -> LLMResponse:
        """Execute generation with a specific model.

        max_tokens and temperature are configured on the Agno model at
        creation time and are not forwarded per call.
        """
        provider_type, _ = self._parse_model(model)
        if provider_type == "mock":
            return self._mock(model)

        system_prompt = next((m.content for m in messages if m.role == "system"), None)
        input_text = "\n\n".join(m.content for m in messages if m.role != "system")

        start_time = time.perf_counter()
        try:
            agent = self._get_or_create_agent(model)
            if system_prompt:
                agent.instructions = [system_prompt]
            run_response = await asyncio.wait_for(agent.arun(input_text), timeout=self._timeout)
        except TimeoutError as e:
            raise ProviderError(f"{model} timed out after {self._timeout}s") from e
        except Exception as e:
            error_msg = str(e).lower()
            if "rate" in error_msg and "limit" in error_msg:
                raise RateLimitError(f"Rate limited: {e}") from e
            if "api key" in error_msg or "api_key" in error_msg:
                raise AuthenticationError(f"{model} rejected credentials: {e}") from e
            raise ProviderError(f"Agno execution failed: {e}") from e

        latency_ms = (time.perf_counter() - start_time) * 1000
        content = str(run_response.content or "")

        logger.debug(
            "executor_generate_complete",
            model=model,
            latency_ms=round(latency_ms, 2),
            content_length=len(content),
        )

        return LLMResponse(
            content=content,
            model=model,
            finish_reason="stop",
            metadata={"latency_ms": latency_ms, "provider": provider_type},
        )

    def _mock(self, model: str) -> LLMResponse:
        return LLMResponse(
            content=self._mock_response or f"Mock response for {model}",
            model=model,
            finish_reason="stop",
            usage=TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
        )

    @staticmethod
    def _parse_model(model: str) -> tuple[str, str]:
        """Split a model string into (provider_type, api_model).

        Examples:
            "google/gemini-2.0-flash" -> ("google", "gemini-2.0-flash")
            "openrouter/meta-llama/llama-3-70b" -> ("openrouter", "meta-llama/llama-3-70b")
        """
        if "/" not in model:
            return "openrouter", model
        provider_type, api_model = model.split("/", 1)
        return provider_type, api_model


def create_executor(config: SuggestionsConfig) -> LLMExecutor:
    """Create an executor from suggestion provider configuration."""
    return LLMExecutor(
        model=config.model,
        fallback_models=config.fallback_models,
        timeout=config.timeout,
    )
