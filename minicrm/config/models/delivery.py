"""Campaign delivery configuration models."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_MESSAGE_TEMPLATE = "Hi {name}, here's 10% off on your next order!"


class DeliveryConfig(BaseModel):
    """How communication logs are populated for a new campaign."""

    batch_size: int = Field(
        default=50,
        gt=0,
        description="Logs written concurrently per batch; batches run in sequence",
    )
    default_message_template: str = Field(
        default=DEFAULT_MESSAGE_TEMPLATE,
        description="Per-customer message used when no custom message is given",
    )
    run_in_background: bool = Field(
        default=True,
        description="Populate logs in a background task after returning the campaign",
    )

    @field_validator("default_message_template")
    @classmethod
    def _template_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("default_message_template must not be blank")
        return value


class SimulationConfig(BaseModel):
    """Delivery simulation parameters."""

    success_rate: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Probability that a simulated message is SENT",
    )
    seed: int | None = Field(
        default=None,
        description="RNG seed for reproducible simulations",
    )
