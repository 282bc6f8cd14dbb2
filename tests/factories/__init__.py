"""Test factories for creating test data."""

from tests.factories.crm import CampaignFactory, ClauseFactory, CustomerFactory

__all__ = [
    "CampaignFactory",
    "ClauseFactory",
    "CustomerFactory",
]
