"""Delivery simulation.

Stands in for an external messaging provider: every PENDING log of a
campaign is finalized as SENT or FAILED through the store, so campaign
counters and status move exactly as they would under real delivery.
"""

import random
from dataclasses import dataclass
from uuid import UUID

from minicrm.campaigns.enums import DeliveryStatus
from minicrm.campaigns.models import Campaign
from minicrm.campaigns.store import CampaignStore
from minicrm.config.models.delivery import SimulationConfig
from minicrm.errors import CampaignNotFoundError
from minicrm.observability.logging import get_logger
from minicrm.observability.metrics import LOG_OUTCOMES

logger = get_logger(__name__)


@dataclass
class SimulationResult:
    """Output of one simulation run."""

    campaign_id: UUID
    sent: int
    failed: int
    campaign: Campaign

    @property
    def finalized(self) -> int:
        return self.sent + self.failed


class DeliverySimulator:
    """Finalizes pending communication logs with a seeded random outcome.

    The same seed over the same logs always yields the same outcomes.
    Logs that are already SENT or FAILED are left alone, so running the
    simulator again after a partial run only finishes the remainder.
    """

    def __init__(
        self,
        store: CampaignStore,
        success_rate: float = 0.9,
        seed: int | None = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            store: Campaign store whose logs are finalized
            success_rate: Probability that a log ends SENT
            seed: RNG seed for reproducible runs
        """
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be within [0, 1], got {success_rate}")
        self._store = store
        self._success_rate = success_rate
        self._rng = random.Random(seed)

    @classmethod
    def from_config(cls, store: CampaignStore, config: SimulationConfig) -> "DeliverySimulator":
        return cls(store, success_rate=config.success_rate, seed=config.seed)

    async def run(self, campaign_id: UUID) -> SimulationResult:
        """Finalize every PENDING log of a campaign.

        Raises:
            CampaignNotFoundError: Unknown campaign
            ConflictError: A log was finalized concurrently by someone else
        """
        campaign = await self._store.get_campaign(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)

        pending = [
            log
            for log in await self._store.list_logs(campaign_id)
            if log.status is DeliveryStatus.PENDING
        ]
        sent = failed = 0

        for log in pending:
            outcome = (
                DeliveryStatus.SENT
                if self._rng.random() < self._success_rate
                else DeliveryStatus.FAILED
            )
            campaign = await self._store.finalize_log(campaign_id, log.id, outcome)
            LOG_OUTCOMES.labels(status=outcome.value).inc()
            if outcome is DeliveryStatus.SENT:
                sent += 1
            else:
                failed += 1

        logger.info(
            "delivery_simulated",
            campaign_id=str(campaign_id),
            sent=sent,
            failed=failed,
            status=campaign.status.value,
        )
        return SimulationResult(
            campaign_id=campaign_id, sent=sent, failed=failed, campaign=campaign
        )
