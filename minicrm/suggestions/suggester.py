"""LLM-backed campaign message suggestions.

Asks the configured model for a handful of short message variants for a
campaign objective and audience. Whatever goes wrong with the provider or
its output, callers get the built-in suggestions instead of an error.
"""

import json
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from minicrm.config.models.suggestions import SuggestionsConfig
from minicrm.observability.logging import get_logger
from minicrm.observability.metrics import SUGGESTION_REQUESTS
from minicrm.providers.llm import LLMExecutor, LLMMessage, ProviderError
from minicrm.segments.describe import describe_audience
from minicrm.segments.models import SegmentRule
from minicrm.suggestions.models import MessageSuggestion, MessageTone

logger = get_logger(__name__)

_PROMPT_TEMPLATE_PATH = Path(__file__).parent / "prompts" / "generate_messages.txt"


def fallback_suggestions(audience_description: str) -> list[MessageSuggestion]:
    """Canned suggestions returned when the model cannot be used."""
    return [
        MessageSuggestion(
            id="fallback_1",
            message=(
                "Hi! Special 15% off just for you. Shop now and save on your favorites! "
                "Use code SAVE15. Valid till midnight!"
            ),
            tone=MessageTone.FRIENDLY,
            reasoning=(
                f"Friendly tone works well for customers with {audience_description}, "
                "offering immediate value with urgency."
            ),
        ),
        MessageSuggestion(
            id="fallback_2",
            message=(
                "URGENT: Limited time offer! Get 20% off your next purchase. "
                "Don't miss out - only 24 hours left! Shop now."
            ),
            tone=MessageTone.URGENT,
            reasoning=(
                "Urgent messaging creates immediate action for this audience segment, "
                "emphasizing scarcity."
            ),
        ),
        MessageSuggestion(
            id="fallback_3",
            message=(
                "Exclusive offer for valued customers: Enjoy 10% off + free shipping "
                "on orders above ₹999. Shop premium quality today."
            ),
            tone=MessageTone.PROFESSIONAL,
            reasoning=(
                "Professional tone respects the customer relationship while "
                "highlighting premium value proposition."
            ),
        ),
    ]


class MessageSuggester:
    """Generates campaign message variants with an LLM.

    Provider errors and unusable responses are logged and answered with
    ``fallback_suggestions``; ``suggest`` never raises for them.
    """

    def __init__(
        self,
        llm_executor: LLMExecutor,
        config: SuggestionsConfig | None = None,
        prompt_template: str | None = None,
    ) -> None:
        """Initialize the suggester.

        Args:
            llm_executor: Executor for the generation call
            config: Variant count, sampling parameters, enable switch
            prompt_template: Optional custom prompt template
        """
        self._llm_executor = llm_executor
        self._config = config or SuggestionsConfig()

        if prompt_template:
            self._prompt_template = prompt_template
        else:
            self._prompt_template = _PROMPT_TEMPLATE_PATH.read_text(encoding="utf-8")

    async def suggest(
        self,
        objective: str,
        audience_description: str,
        audience_size: int,
    ) -> list[MessageSuggestion]:
        """Suggest messages for an objective and a described audience."""
        if not self._config.enabled:
            SUGGESTION_REQUESTS.labels(outcome="disabled").inc()
            return fallback_suggestions(audience_description)

        prompt = self.build_prompt(objective, audience_description, audience_size)
        start_time = time.perf_counter()

        try:
            response = await self._llm_executor.generate(
                messages=[LLMMessage(role="user", content=prompt)],
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
            suggestions = self.parse_suggestions(response.content)
        except (ProviderError, ValueError) as e:
            SUGGESTION_REQUESTS.labels(outcome="fallback").inc()
            logger.warning(
                "message_suggestions_fallback",
                error=str(e),
                error_type=type(e).__name__,
            )
            return fallback_suggestions(audience_description)

        SUGGESTION_REQUESTS.labels(outcome="generated").inc()
        logger.info(
            "message_suggestions_generated",
            count=len(suggestions),
            model=response.model,
            elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return suggestions

    async def suggest_for_rules(
        self,
        objective: str,
        clauses: Sequence[SegmentRule],
        audience_size: int,
    ) -> list[MessageSuggestion]:
        """Suggest messages for an audience given as rule clauses."""
        return await self.suggest(objective, describe_audience(clauses), audience_size)

    def build_prompt(self, objective: str, audience_description: str, audience_size: int) -> str:
        return self._prompt_template.format(
            objective=objective,
            audience_description=audience_description,
            audience_size=audience_size,
            count=self._config.max_suggestions,
        )

    def parse_suggestions(self, content: str) -> list[MessageSuggestion]:
        """Parse the model's JSON array into suggestions.

        Raises:
            ValueError: If the content is not a non-empty JSON array of
                valid suggestions
        """
        data: Any = json.loads(_strip_code_fence(content))
        if not isinstance(data, list) or not data:
            raise ValueError("Expected a non-empty JSON array of suggestions")

        stamp = int(time.time() * 1000)
        suggestions = []
        for index, item in enumerate(data[: self._config.max_suggestions]):
            if not isinstance(item, dict):
                raise ValueError(f"Suggestion {index} is not an object")
            suggestions.append(
                MessageSuggestion(
                    id=f"msg_{stamp}_{index}",
                    message=item.get("message", ""),
                    tone=item.get("tone", MessageTone.PROMOTIONAL),
                    reasoning=item.get("reasoning") or "",
                )
            )
        return suggestions


def _strip_code_fence(content: str) -> str:
    content = content.strip()
    if "```json" in content:
        start = content.find("```json") + 7
        end = content.find("```", start)
        if end > start:
            return content[start:end].strip()
    elif "```" in content:
        start = content.find("```") + 3
        end = content.find("```", start)
        if end > start:
            return content[start:end].strip()
    return content
