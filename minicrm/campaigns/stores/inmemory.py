"""In-memory implementation of CampaignStore."""

import asyncio
from collections import defaultdict
from datetime import datetime
from uuid import UUID

from minicrm.campaigns import lifecycle
from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.campaigns.models import Campaign, CampaignDraft, CommunicationLog, LogDraft
from minicrm.campaigns.store import CampaignStore
from minicrm.errors import CampaignNotFoundError, ConflictError, LogNotFoundError
from minicrm.models import utc_now


class InMemoryCampaignStore(CampaignStore):
    """In-memory implementation of CampaignStore for testing and development.

    Returned records are copies, so callers cannot mutate stored state.
    Mutations of a campaign run under that campaign's asyncio.Lock.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._campaigns: dict[UUID, Campaign] = {}
        self._logs: dict[UUID, dict[UUID, CommunicationLog]] = {}
        self._locks: defaultdict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    # Campaign operations
    async def create_campaign(self, draft: CampaignDraft) -> Campaign:
        """Persist a new PENDING campaign with zero counters."""
        campaign = Campaign(
            name=draft.name,
            segment_name=draft.segment_name,
            segment_rules=list(draft.segment_rules),
            audience_size=draft.audience_size,
        )
        self._campaigns[campaign.id] = campaign
        self._logs[campaign.id] = {}
        return campaign.model_copy(deep=True)

    async def get_campaign(self, campaign_id: UUID) -> Campaign | None:
        """Get a campaign by ID."""
        campaign = self._campaigns.get(campaign_id)
        return campaign.model_copy(deep=True) if campaign else None

    async def list_campaigns(self) -> list[Campaign]:
        """List campaigns, newest first."""
        campaigns = sorted(self._campaigns.values(), key=lambda c: c.created_at, reverse=True)
        return [campaign.model_copy(deep=True) for campaign in campaigns]

    async def update_status(self, campaign_id: UUID, status: CampaignStatus) -> Campaign:
        """Move a campaign to a new status."""
        async with self._locks[campaign_id]:
            campaign = self._require_campaign(campaign_id)
            lifecycle.transition(campaign, status)
            return campaign.model_copy(deep=True)

    # Communication log operations
    async def create_log(self, campaign_id: UUID, draft: LogDraft) -> CommunicationLog:
        """Persist a PENDING log for a campaign."""
        async with self._locks[campaign_id]:
            campaign = self._require_campaign(campaign_id)
            logs = self._logs[campaign_id]

            if any(log.customer_id == draft.customer_id for log in logs.values()):
                raise ConflictError(
                    f"Customer {draft.customer_id} already has a log in campaign {campaign_id}"
                )
            if len(logs) >= campaign.audience_size:
                raise ConflictError(
                    f"Campaign {campaign_id} already has {len(logs)} logs "
                    f"for an audience of {campaign.audience_size}"
                )

            log = CommunicationLog(
                campaign_id=campaign_id,
                customer_id=draft.customer_id,
                customer_name=draft.customer_name,
                message=draft.message,
            )
            logs[log.id] = log
            return log.model_copy(deep=True)

    async def list_logs(self, campaign_id: UUID) -> list[CommunicationLog]:
        """List a campaign's logs in creation order."""
        return [log.model_copy(deep=True) for log in self._logs.get(campaign_id, {}).values()]

    async def finalize_log(
        self,
        campaign_id: UUID,
        log_id: UUID,
        status: DeliveryStatus,
        at: datetime | None = None,
    ) -> Campaign:
        """Mark a PENDING log SENT or FAILED and count it on the campaign."""
        if not status.is_terminal:
            raise ConflictError(f"Cannot finalize log {log_id} as {status.value}")

        async with self._locks[campaign_id]:
            campaign = self._require_campaign(campaign_id)
            log = self._logs[campaign_id].get(log_id)
            if log is None:
                raise LogNotFoundError(campaign_id, log_id)
            if log.status.is_terminal:
                raise ConflictError(f"Log {log_id} is already {log.status.value}")
            if campaign.is_fully_processed:
                raise ConflictError(
                    f"Campaign {campaign_id} counters already cover its audience"
                )

            finalized_at = at or utc_now()
            log.status = status
            if status is DeliveryStatus.SENT:
                log.sent_at = finalized_at
                log.delivered_at = finalized_at
            log.touch()

            lifecycle.apply_outcome(campaign, status)
            return campaign.model_copy(deep=True)

    def _require_campaign(self, campaign_id: UUID) -> Campaign:
        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        return campaign
