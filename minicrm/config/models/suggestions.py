"""Message suggestion provider configuration."""

from pydantic import BaseModel, Field


class SuggestionsConfig(BaseModel):
    """LLM-backed message suggestion configuration.

    Model strings use the executor's provider prefixes, e.g.
    'google/gemini-2.0-flash' or 'mock/test'.
    """

    enabled: bool = Field(default=True, description="Call the LLM at all")
    model: str = Field(
        default="google/gemini-2.0-flash",
        description="Primary model string",
    )
    fallback_models: list[str] = Field(
        default_factory=list,
        description="Models to try if the primary fails",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_suggestions: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Number of message variants requested",
    )
    temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, gt=0)
