"""Segment rule and audience models."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from minicrm.customers.models import Customer
from minicrm.models import RecordModel, utc_now
from minicrm.segments.enums import Connector, RuleField, RuleOperator


class SegmentRule(RecordModel):
    """A single comparison, as snapshotted into a campaign.

    ``value`` stays a string; it is parsed per field at evaluation time.
    """

    model_config = ConfigDict(frozen=True)

    field: RuleField
    operator: RuleOperator
    value: str = Field(default="", description="Raw comparison value")

    @field_validator("value", mode="before")
    @classmethod
    def _number_as_text(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class RuleClause(SegmentRule):
    """A rule as authored, with the connector shown between clauses."""

    connector: Connector | None = Field(
        default=None,
        description="Relation to the next clause (display only)",
    )

    def snapshot(self) -> SegmentRule:
        """Drop the display-only connector."""
        return SegmentRule(field=self.field, operator=self.operator, value=self.value)


class AudienceResult(RecordModel):
    """Customers matching a clause list, in input order."""

    members: list[Customer] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)


class Segment(RecordModel):
    """A named rule set with the audience size it resolved to."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    rules: list[RuleClause] = Field(default_factory=list)
    audience_size: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
