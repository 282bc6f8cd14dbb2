"""Campaign status transitions.

Status only moves forward:

    PENDING -> SENDING -> COMPLETED
       |          |
       |          +----> FAILED
       +--> COMPLETED (empty audience)
       +--> FAILED

Staying in the same status is a no-op, never an error.
"""

from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.campaigns.models import Campaign
from minicrm.errors import InvalidTransitionError

ALLOWED_TRANSITIONS: dict[CampaignStatus, frozenset[CampaignStatus]] = {
    CampaignStatus.PENDING: frozenset(
        {CampaignStatus.SENDING, CampaignStatus.COMPLETED, CampaignStatus.FAILED}
    ),
    CampaignStatus.SENDING: frozenset({CampaignStatus.COMPLETED, CampaignStatus.FAILED}),
    CampaignStatus.COMPLETED: frozenset(),
    CampaignStatus.FAILED: frozenset(),
}


def can_transition(current: CampaignStatus, target: CampaignStatus) -> bool:
    """Return True if moving from current to target is allowed."""
    return current == target or target in ALLOWED_TRANSITIONS[current]


def transition(campaign: Campaign, target: CampaignStatus) -> bool:
    """Move the campaign to target in place.

    Returns:
        True if the status changed

    Raises:
        InvalidTransitionError: If the move would go backwards
    """
    if campaign.status == target:
        return False
    if not can_transition(campaign.status, target):
        raise InvalidTransitionError(campaign.status.value, target.value)
    campaign.status = target
    campaign.touch()
    return True


def apply_outcome(campaign: Campaign, outcome: DeliveryStatus) -> None:
    """Count one finalized log and advance the status accordingly.

    The first outcome moves PENDING to SENDING; the outcome that covers
    the whole audience moves the campaign to COMPLETED. A FAILED campaign
    still counts outcomes but keeps its status.
    """
    if not outcome.is_terminal:
        raise ValueError(f"Outcome must be SENT or FAILED, got {outcome.value}")

    if outcome is DeliveryStatus.SENT:
        campaign.total_sent += 1
    else:
        campaign.total_failed += 1
    campaign.touch()

    if campaign.status is CampaignStatus.FAILED:
        return
    if campaign.status is CampaignStatus.PENDING:
        transition(campaign, CampaignStatus.SENDING)
    if campaign.is_fully_processed:
        transition(campaign, CampaignStatus.COMPLETED)
