"""Campaign store implementations."""

from minicrm.campaigns.store import CampaignStore
from minicrm.campaigns.stores.inmemory import InMemoryCampaignStore

__all__ = [
    "CampaignStore",
    "InMemoryCampaignStore",
]
