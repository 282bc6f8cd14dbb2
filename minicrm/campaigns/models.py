"""Campaign and communication log models."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import Field, model_validator

from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.models import RecordModel, TimestampedModel
from minicrm.segments.models import SegmentRule


class CampaignDraft(RecordModel):
    """Payload for creating a campaign."""

    name: str = Field(..., min_length=1)
    segment_name: str = Field(..., min_length=1)
    segment_rules: list[SegmentRule] = Field(default_factory=list)
    audience_size: int = Field(..., ge=0)


class Campaign(TimestampedModel):
    """A campaign sent to a resolved segment audience.

    ``segment_rules`` is a snapshot taken at creation and
    ``audience_size`` never changes afterwards. Only the counters,
    status and updated_at move.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    segment_name: str = Field(..., min_length=1)
    segment_rules: list[SegmentRule] = Field(default_factory=list)
    audience_size: int = Field(..., ge=0)
    status: CampaignStatus = CampaignStatus.PENDING
    total_sent: int = Field(default=0, ge=0)
    total_failed: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _counters_within_audience(self) -> "Campaign":
        if self.total_sent + self.total_failed > self.audience_size:
            raise ValueError(
                f"total_sent + total_failed ({self.total_sent + self.total_failed}) "
                f"exceeds audience_size ({self.audience_size})"
            )
        return self

    @property
    def total_processed(self) -> int:
        return self.total_sent + self.total_failed

    @property
    def is_fully_processed(self) -> bool:
        return self.total_processed == self.audience_size


class LogDraft(RecordModel):
    """Payload for creating a communication log."""

    customer_id: UUID
    customer_name: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class CommunicationLog(TimestampedModel):
    """One message to one customer within a campaign."""

    id: UUID = Field(default_factory=uuid4)
    campaign_id: UUID
    customer_id: UUID
    customer_name: str
    message: str
    status: DeliveryStatus = DeliveryStatus.PENDING
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
