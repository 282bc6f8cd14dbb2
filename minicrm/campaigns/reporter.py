"""Delivery progress reporting.

Progress figures are derived from campaign counters only. Callers poll
``DeliveryStatusReporter.snapshot`` at whatever cadence they like; every
call re-reads the store.
"""

from collections import Counter
from collections.abc import Sequence
from uuid import UUID

from pydantic import BaseModel, Field

from minicrm.campaigns.enums import DeliveryStatus
from minicrm.campaigns.models import Campaign, CommunicationLog
from minicrm.campaigns.store import CampaignStore
from minicrm.errors import CampaignNotFoundError


class DeliveryProgress(BaseModel):
    """Percentages derived from one campaign's counters."""

    progress_pct: float = Field(..., ge=0, le=100)
    success_rate_pct: float = Field(..., ge=0, le=100)


class CampaignSnapshot(BaseModel):
    """A campaign, its logs, and derived progress at one point in time."""

    campaign: Campaign
    progress: DeliveryProgress
    logs: list[CommunicationLog] = Field(default_factory=list)
    status_counts: dict[DeliveryStatus, int] = Field(default_factory=dict)


class CampaignTotals(BaseModel):
    """Aggregate figures over a list of campaigns."""

    campaigns: int = 0
    total_audience: int = 0
    total_sent: int = 0
    total_failed: int = 0
    success_rate_pct: float = 0.0


def _percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return 100.0 * part / whole


def compute_progress(campaign: Campaign) -> DeliveryProgress:
    """Compute progress and success rate for a campaign.

    Both are 0 when their denominator is 0, so an empty campaign reports
    0% progress even once COMPLETED.
    """
    return DeliveryProgress(
        progress_pct=_percentage(campaign.total_processed, campaign.audience_size),
        success_rate_pct=_percentage(campaign.total_sent, campaign.total_processed),
    )


def summarize_campaigns(campaigns: Sequence[Campaign]) -> CampaignTotals:
    """Sum counters over campaigns, with the overall success rate."""
    sent = sum(c.total_sent for c in campaigns)
    failed = sum(c.total_failed for c in campaigns)
    return CampaignTotals(
        campaigns=len(campaigns),
        total_audience=sum(c.audience_size for c in campaigns),
        total_sent=sent,
        total_failed=failed,
        success_rate_pct=_percentage(sent, sent + failed),
    )


class DeliveryStatusReporter:
    """Reads campaign state for progress displays."""

    def __init__(self, store: CampaignStore) -> None:
        self._store = store

    async def snapshot(self, campaign_id: UUID) -> CampaignSnapshot:
        """Read the campaign and its logs and derive progress.

        Raises:
            CampaignNotFoundError: Unknown campaign
        """
        campaign = await self._store.get_campaign(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        logs = await self._store.list_logs(campaign_id)

        counts = Counter(log.status for log in logs)
        return CampaignSnapshot(
            campaign=campaign,
            progress=compute_progress(campaign),
            logs=logs,
            status_counts={status: counts.get(status, 0) for status in DeliveryStatus},
        )

    async def totals(self) -> CampaignTotals:
        """Aggregate totals over every stored campaign."""
        return summarize_campaigns(await self._store.list_campaigns())
