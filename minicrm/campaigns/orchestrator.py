"""Campaign creation and communication log population.

Creating a campaign resolves its audience, persists the campaign, and
returns it. One PENDING log per audience member is then written in
batches: writes inside a batch run concurrently, batches run strictly one
after another. A failed batch stops delivery without touching the
campaign or the logs already written.
"""

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import pydantic

from minicrm.campaigns.enums import CampaignStatus
from minicrm.campaigns.models import Campaign, CampaignDraft, LogDraft
from minicrm.campaigns.store import CampaignStore
from minicrm.config.models.delivery import DeliveryConfig
from minicrm.customers.models import Customer
from minicrm.customers.store import CustomerDirectory
from minicrm.errors import DeliveryError, PartialDeliveryError, ValidationError
from minicrm.observability.logging import get_logger
from minicrm.observability.metrics import (
    CAMPAIGN_AUDIENCE_SIZE,
    CAMPAIGNS_CREATED,
    DELIVERY_FAILURES,
    LOGS_WRITTEN,
)
from minicrm.segments.models import RuleClause, Segment
from minicrm.segments.resolver import SegmentResolver

logger = get_logger(__name__)

ClauseInput = RuleClause | Mapping[str, Any]


@dataclass
class DeliveryReport:
    """Outcome of populating a campaign's communication logs."""

    campaign_id: UUID
    logs_written: int
    batches: int


class CampaignOrchestrator:
    """Turns a segment definition into a campaign and its communication logs.

    Background deliveries are tracked per campaign so callers can await
    them with ``wait_for_delivery``; their errors are logged once and
    re-raised to whoever awaits them.
    """

    def __init__(
        self,
        directory: CustomerDirectory,
        store: CampaignStore,
        resolver: SegmentResolver | None = None,
        config: DeliveryConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            directory: Source of the full customer set
            store: Campaign and log persistence
            resolver: Segment resolver (default evaluator if omitted)
            config: Batch size, default message, background mode
        """
        self._directory = directory
        self._store = store
        self._resolver = resolver or SegmentResolver()
        self._config = config or DeliveryConfig()
        self._deliveries: dict[UUID, asyncio.Task[DeliveryReport]] = {}

    async def create_campaign(
        self,
        segment_name: str,
        clauses: Sequence[ClauseInput],
        custom_message: str | None = None,
        *,
        wait: bool | None = None,
    ) -> Campaign:
        """Create a campaign for a segment and start populating its logs.

        Args:
            segment_name: Segment display name
            clauses: Rule clauses, as models or plain dicts
            custom_message: Message for every recipient; blank means the
                per-customer default template
            wait: Populate logs before returning instead of in the
                background (defaults to the inverse of run_in_background)

        Returns:
            The campaign as persisted, still PENDING

        Raises:
            ValidationError: Bad segment name or clauses; nothing persisted
            StoreError: The campaign could not be persisted
            DeliveryError: Only when waiting, if log population failed
        """
        segment_name = (segment_name or "").strip()
        if not segment_name:
            raise ValidationError("Segment name is required")
        rules = self.parse_clauses(clauses)

        audience = await self._resolver.resolve(self._directory, rules)

        campaign = await self._store.create_campaign(
            CampaignDraft(
                name=f"Campaign for {segment_name}",
                segment_name=segment_name,
                segment_rules=[rule.snapshot() for rule in rules],
                audience_size=audience.size,
            )
        )
        CAMPAIGNS_CREATED.inc()
        CAMPAIGN_AUDIENCE_SIZE.observe(audience.size)
        logger.info(
            "campaign_created",
            campaign_id=str(campaign.id),
            segment_name=segment_name,
            audience_size=audience.size,
            clauses=len(rules),
        )

        run_inline = (not self._config.run_in_background) if wait is None else wait
        if run_inline:
            await self.deliver(campaign, audience.members, custom_message)
        else:
            self._start_background_delivery(campaign, audience.members, custom_message)

        return campaign

    async def preview_segment(self, segment_name: str, clauses: Sequence[ClauseInput]) -> Segment:
        """Resolve a segment's authoritative audience size without persisting anything."""
        rules = self.parse_clauses(clauses)
        customers = await self._directory.list_customers()
        return self._resolver.build_segment(segment_name, rules, customers)

    async def deliver(
        self,
        campaign: Campaign,
        customers: Sequence[Customer],
        custom_message: str | None = None,
    ) -> DeliveryReport:
        """Write one PENDING log per customer in sequential batches.

        Raises:
            DeliveryError: The first batch failed, nothing was written
            PartialDeliveryError: A batch failed after earlier logs were written
        """
        batch_size = self._config.batch_size
        drafts = [self.build_log(customer, custom_message) for customer in customers]
        written = 0
        batches = 0

        logger.info(
            "campaign_delivery_started",
            campaign_id=str(campaign.id),
            recipients=len(drafts),
            batch_size=batch_size,
        )

        for batch_index, start in enumerate(range(0, len(drafts), batch_size)):
            batch = drafts[start : start + batch_size]
            results = await asyncio.gather(
                *(self._store.create_log(campaign.id, draft) for draft in batch),
                return_exceptions=True,
            )
            errors = [r for r in results if isinstance(r, BaseException)]
            written += len(results) - len(errors)
            LOGS_WRITTEN.inc(len(results) - len(errors))
            batches += 1

            if errors:
                raise self._delivery_error(campaign.id, written, batch_index, errors)

            logger.debug(
                "delivery_batch_written",
                campaign_id=str(campaign.id),
                batch=batch_index,
                logs=len(batch),
            )

        if not drafts:
            await self._store.update_status(campaign.id, CampaignStatus.COMPLETED)

        logger.info(
            "campaign_delivery_finished",
            campaign_id=str(campaign.id),
            logs_written=written,
            batches=batches,
        )
        return DeliveryReport(campaign_id=campaign.id, logs_written=written, batches=batches)

    async def wait_for_delivery(self, campaign_id: UUID) -> DeliveryReport:
        """Await a background delivery, re-raising its error.

        The delivery is forgotten once awaited, so each one can be waited on once.

        Raises:
            KeyError: If no background delivery is pending for the campaign
        """
        task = self._deliveries.pop(campaign_id)
        return await task

    async def fail_campaign(self, campaign_id: UUID, reason: str | None = None) -> Campaign:
        """Mark a campaign FAILED.

        Raises:
            CampaignNotFoundError: Unknown campaign
            InvalidTransitionError: The campaign already COMPLETED
        """
        campaign = await self._store.update_status(campaign_id, CampaignStatus.FAILED)
        logger.warning("campaign_failed", campaign_id=str(campaign_id), reason=reason)
        return campaign

    def build_log(self, customer: Customer, custom_message: str | None = None) -> LogDraft:
        """Build the PENDING log payload for one recipient."""
        if custom_message and custom_message.strip():
            message = custom_message
        else:
            message = self._config.default_message_template.format(name=customer.name)
        return LogDraft(
            customer_id=customer.id,
            customer_name=customer.name,
            message=message,
        )

    @staticmethod
    def parse_clauses(clauses: Sequence[ClauseInput]) -> list[RuleClause]:
        """Coerce clause input into RuleClause models.

        Raises:
            ValidationError: On an unknown field or operator, or a missing value
        """
        rules: list[RuleClause] = []
        for position, clause in enumerate(clauses):
            if isinstance(clause, RuleClause):
                rules.append(clause)
                continue
            try:
                rules.append(RuleClause.model_validate(clause))
            except pydantic.ValidationError as e:
                raise ValidationError(
                    f"Invalid rule clause at position {position}: {e}", cause=e
                ) from e
        return rules

    def _start_background_delivery(
        self,
        campaign: Campaign,
        customers: Sequence[Customer],
        custom_message: str | None,
    ) -> None:
        task = asyncio.create_task(
            self.deliver(campaign, customers, custom_message),
            name=f"campaign-delivery-{campaign.id}",
        )
        task.add_done_callback(self._log_delivery_outcome)
        self._deliveries[campaign.id] = task

    @staticmethod
    def _log_delivery_outcome(task: asyncio.Task[DeliveryReport]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "campaign_delivery_failed",
                task=task.get_name(),
                error=str(error),
                error_type=type(error).__name__,
            )

    @staticmethod
    def _delivery_error(
        campaign_id: UUID,
        written: int,
        batch_index: int,
        errors: list[BaseException],
    ) -> DeliveryError:
        cause = errors[0] if isinstance(errors[0], Exception) else None
        error_cls = PartialDeliveryError if written else DeliveryError
        DELIVERY_FAILURES.labels(error_type=error_cls.__name__).inc()
        return error_cls(
            f"Delivery for campaign {campaign_id} stopped at batch {batch_index}: "
            f"{len(errors)} log write(s) failed, {written} log(s) written",
            campaign_id=campaign_id,
            logs_written=written,
            failed_batch=batch_index,
            cause=cause,
        )
