"""Campaigns: creation, communication logs, lifecycle, and progress."""

from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.campaigns.models import Campaign, CampaignDraft, CommunicationLog, LogDraft
from minicrm.campaigns.orchestrator import CampaignOrchestrator, DeliveryReport
from minicrm.campaigns.reporter import (
    CampaignSnapshot,
    CampaignTotals,
    DeliveryProgress,
    DeliveryStatusReporter,
    compute_progress,
    summarize_campaigns,
)
from minicrm.campaigns.store import CampaignStore
from minicrm.campaigns.stores import InMemoryCampaignStore

__all__ = [
    # Enums
    "CampaignStatus",
    "DeliveryStatus",
    # Models
    "Campaign",
    "CampaignDraft",
    "CommunicationLog",
    "LogDraft",
    # Store
    "CampaignStore",
    "InMemoryCampaignStore",
    # Orchestration
    "CampaignOrchestrator",
    "DeliveryReport",
    # Reporting
    "CampaignSnapshot",
    "CampaignTotals",
    "DeliveryProgress",
    "DeliveryStatusReporter",
    "compute_progress",
    "summarize_campaigns",
]
