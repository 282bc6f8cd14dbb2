"""CampaignStore abstract interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.campaigns.models import Campaign, CampaignDraft, CommunicationLog, LogDraft


class CampaignStore(ABC):
    """Abstract interface for campaign and communication log storage.

    Implementations must make ``finalize_log`` atomic per campaign so that
    concurrent finalizations never lose a counter increment, and must
    raise the StoreError subclasses from minicrm.errors.
    """

    # Campaign operations
    @abstractmethod
    async def create_campaign(self, draft: CampaignDraft) -> Campaign:
        """Persist a new PENDING campaign with zero counters."""
        pass

    @abstractmethod
    async def get_campaign(self, campaign_id: UUID) -> Campaign | None:
        """Get a campaign by ID."""
        pass

    @abstractmethod
    async def list_campaigns(self) -> list[Campaign]:
        """List campaigns, newest first."""
        pass

    @abstractmethod
    async def update_status(self, campaign_id: UUID, status: CampaignStatus) -> Campaign:
        """Move a campaign to a new status.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist
            InvalidTransitionError: If the move would go backwards
        """
        pass

    # Communication log operations
    @abstractmethod
    async def create_log(self, campaign_id: UUID, draft: LogDraft) -> CommunicationLog:
        """Persist a PENDING log for a campaign.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist
            ConflictError: If the customer already has a log in this campaign
        """
        pass

    @abstractmethod
    async def list_logs(self, campaign_id: UUID) -> list[CommunicationLog]:
        """List a campaign's logs in creation order."""
        pass

    @abstractmethod
    async def finalize_log(
        self,
        campaign_id: UUID,
        log_id: UUID,
        status: DeliveryStatus,
        at: datetime | None = None,
    ) -> Campaign:
        """Mark a PENDING log SENT or FAILED and count it on the campaign.

        Returns the updated campaign.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist
            LogNotFoundError: If the log doesn't belong to the campaign
            ConflictError: If the log is already finalized or the campaign's
                counters already cover its audience
        """
        pass
