"""Customer models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import ConfigDict, Field, field_validator

from minicrm.models import RecordModel, utc_now


class Customer(RecordModel):
    """A customer record.

    Immutable once created; the segmentation pipeline only reads it.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Opaque customer identifier")
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(default="", description="Contact email")
    spend: float = Field(default=0.0, ge=0, description="Total spend")
    visits: int = Field(default=0, ge=0, description="Number of visits")
    last_active: datetime = Field(default_factory=utc_now, description="Last activity timestamp")
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")


class NewCustomer(RecordModel):
    """Input for adding a customer.

    Accepts loosely typed form values: blank or unparsable spend and
    visits become 0, a blank last_active becomes now.
    """

    name: str = Field(..., min_length=1)
    email: str = ""
    spend: float = Field(default=0.0, ge=0)
    visits: int = Field(default=0, ge=0)
    last_active: datetime | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("spend", mode="before")
    @classmethod
    def _coerce_spend(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0.0
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return 0.0
        return value

    @field_validator("visits", mode="before")
    @classmethod
    def _coerce_visits(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        if isinstance(value, str):
            try:
                return int(float(value))
            except (ValueError, OverflowError):
                return 0
        if isinstance(value, float):
            try:
                return int(value)
            except (ValueError, OverflowError):
                # Non-finite; the int field rejects it
                return value
        return value

    @field_validator("last_active", mode="before")
    @classmethod
    def _blank_last_active(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def build(self) -> Customer:
        """Create the immutable Customer record."""
        return Customer(
            name=self.name,
            email=self.email,
            spend=self.spend,
            visits=self.visits,
            last_active=self.last_active or utc_now(),
        )
