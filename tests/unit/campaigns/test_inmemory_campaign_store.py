"""Unit tests for InMemoryCampaignStore."""

import asyncio
from uuid import uuid4

import pytest

from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.campaigns.models import CampaignDraft, LogDraft
from minicrm.campaigns.stores.inmemory import InMemoryCampaignStore
from minicrm.errors import (
    CampaignNotFoundError,
    ConflictError,
    InvalidTransitionError,
    LogNotFoundError,
)
from tests.factories.crm import ClauseFactory


def make_draft(audience_size: int = 2, segment_name: str = "Segment") -> CampaignDraft:
    return CampaignDraft(
        name=f"Campaign for {segment_name}",
        segment_name=segment_name,
        segment_rules=[ClauseFactory.spend(">", "100").snapshot()],
        audience_size=audience_size,
    )


def make_log(name: str = "Asha") -> LogDraft:
    return LogDraft(customer_id=uuid4(), customer_name=name, message=f"Hi {name}")


@pytest.fixture
def store() -> InMemoryCampaignStore:
    return InMemoryCampaignStore()


class TestCampaignOperations:
    """Tests for campaign CRUD."""

    @pytest.mark.asyncio
    async def test_create_campaign_defaults(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=5))

        assert campaign.status is CampaignStatus.PENDING
        assert campaign.audience_size == 5
        assert campaign.total_sent == 0
        assert campaign.total_failed == 0
        assert campaign.segment_rules[0].value == "100"

    @pytest.mark.asyncio
    async def test_get_campaign(self, store) -> None:
        created = await store.create_campaign(make_draft())
        assert await store.get_campaign(created.id) == created

    @pytest.mark.asyncio
    async def test_get_missing_campaign(self, store) -> None:
        assert await store.get_campaign(uuid4()) is None

    @pytest.mark.asyncio
    async def test_returned_copies_are_detached(self, store) -> None:
        created = await store.create_campaign(make_draft())
        created.total_sent = 1

        stored = await store.get_campaign(created.id)

        assert stored is not None
        assert stored.total_sent == 0

    @pytest.mark.asyncio
    async def test_list_newest_first(self, store) -> None:
        first = await store.create_campaign(make_draft(segment_name="first"))
        await asyncio.sleep(0.001)
        second = await store.create_campaign(make_draft(segment_name="second"))

        campaigns = await store.list_campaigns()

        assert [c.id for c in campaigns] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_update_status_forward(self, store) -> None:
        campaign = await store.create_campaign(make_draft())

        updated = await store.update_status(campaign.id, CampaignStatus.FAILED)

        assert updated.status is CampaignStatus.FAILED

    @pytest.mark.asyncio
    async def test_update_status_backward_raises(self, store) -> None:
        campaign = await store.create_campaign(make_draft())
        await store.update_status(campaign.id, CampaignStatus.COMPLETED)

        with pytest.raises(InvalidTransitionError):
            await store.update_status(campaign.id, CampaignStatus.SENDING)

    @pytest.mark.asyncio
    async def test_update_status_missing_campaign(self, store) -> None:
        with pytest.raises(CampaignNotFoundError):
            await store.update_status(uuid4(), CampaignStatus.FAILED)


class TestLogOperations:
    """Tests for communication log writes."""

    @pytest.mark.asyncio
    async def test_create_log_is_pending(self, store) -> None:
        campaign = await store.create_campaign(make_draft())

        log = await store.create_log(campaign.id, make_log())

        assert log.status is DeliveryStatus.PENDING
        assert log.campaign_id == campaign.id
        assert log.sent_at is None
        assert await store.list_logs(campaign.id) == [log]

    @pytest.mark.asyncio
    async def test_create_log_unknown_campaign(self, store) -> None:
        with pytest.raises(CampaignNotFoundError):
            await store.create_log(uuid4(), make_log())

    @pytest.mark.asyncio
    async def test_duplicate_customer_rejected(self, store) -> None:
        campaign = await store.create_campaign(make_draft())
        draft = make_log()
        await store.create_log(campaign.id, draft)

        with pytest.raises(ConflictError):
            await store.create_log(campaign.id, draft)

    @pytest.mark.asyncio
    async def test_logs_cannot_exceed_audience(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=1))
        await store.create_log(campaign.id, make_log("one"))

        with pytest.raises(ConflictError):
            await store.create_log(campaign.id, make_log("two"))

    @pytest.mark.asyncio
    async def test_list_logs_unknown_campaign_is_empty(self, store) -> None:
        assert await store.list_logs(uuid4()) == []


class TestFinalizeLog:
    """Tests for finalize_log counters and transitions."""

    @pytest.mark.asyncio
    async def test_sent_sets_timestamps_and_counts(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=2))
        log = await store.create_log(campaign.id, make_log())

        updated = await store.finalize_log(campaign.id, log.id, DeliveryStatus.SENT)

        assert updated.total_sent == 1
        assert updated.status is CampaignStatus.SENDING
        [stored] = await store.list_logs(campaign.id)
        assert stored.status is DeliveryStatus.SENT
        assert stored.sent_at is not None
        assert stored.delivered_at == stored.sent_at

    @pytest.mark.asyncio
    async def test_failed_leaves_timestamps_empty(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=2))
        log = await store.create_log(campaign.id, make_log())

        updated = await store.finalize_log(campaign.id, log.id, DeliveryStatus.FAILED)

        assert updated.total_failed == 1
        [stored] = await store.list_logs(campaign.id)
        assert stored.sent_at is None

    @pytest.mark.asyncio
    async def test_full_coverage_completes(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=2))
        logs = [await store.create_log(campaign.id, make_log(n)) for n in ("a", "b")]

        await store.finalize_log(campaign.id, logs[0].id, DeliveryStatus.SENT)
        updated = await store.finalize_log(campaign.id, logs[1].id, DeliveryStatus.FAILED)

        assert updated.status is CampaignStatus.COMPLETED
        assert updated.total_sent + updated.total_failed == updated.audience_size

    @pytest.mark.asyncio
    async def test_finalize_twice_rejected(self, store) -> None:
        campaign = await store.create_campaign(make_draft(audience_size=2))
        log = await store.create_log(campaign.id, make_log())
        await store.finalize_log(campaign.id, log.id, DeliveryStatus.SENT)

        with pytest.raises(ConflictError):
            await store.finalize_log(campaign.id, log.id, DeliveryStatus.FAILED)

        stored = await store.get_campaign(campaign.id)
        assert stored is not None
        assert stored.total_sent == 1
        assert stored.total_failed == 0

    @pytest.mark.asyncio
    async def test_finalize_as_pending_rejected(self, store) -> None:
        campaign = await store.create_campaign(make_draft())
        log = await store.create_log(campaign.id, make_log())

        with pytest.raises(ConflictError):
            await store.finalize_log(campaign.id, log.id, DeliveryStatus.PENDING)

    @pytest.mark.asyncio
    async def test_unknown_log(self, store) -> None:
        campaign = await store.create_campaign(make_draft())
        with pytest.raises(LogNotFoundError):
            await store.finalize_log(campaign.id, uuid4(), DeliveryStatus.SENT)

    @pytest.mark.asyncio
    async def test_concurrent_finalization_counts_every_log(self, store) -> None:
        size = 40
        campaign = await store.create_campaign(make_draft(audience_size=size))
        logs = [await store.create_log(campaign.id, make_log(f"c{i}")) for i in range(size)]

        await asyncio.gather(
            *(
                store.finalize_log(
                    campaign.id,
                    log.id,
                    DeliveryStatus.SENT if i % 4 else DeliveryStatus.FAILED,
                )
                for i, log in enumerate(logs)
            )
        )

        stored = await store.get_campaign(campaign.id)
        assert stored is not None
        assert stored.total_sent == 30
        assert stored.total_failed == 10
        assert stored.status is CampaignStatus.COMPLETED
