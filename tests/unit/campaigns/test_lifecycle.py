"""Unit tests for campaign status transitions."""

import pytest

from minicrm.campaigns import lifecycle
from minicrm.campaigns.enums import CampaignStatus, DeliveryStatus
from minicrm.errors import InvalidTransitionError
from tests.factories.crm import CampaignFactory


class TestCanTransition:
    """Tests for can_transition."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (CampaignStatus.PENDING, CampaignStatus.SENDING),
            (CampaignStatus.PENDING, CampaignStatus.COMPLETED),
            (CampaignStatus.PENDING, CampaignStatus.FAILED),
            (CampaignStatus.SENDING, CampaignStatus.COMPLETED),
            (CampaignStatus.SENDING, CampaignStatus.FAILED),
            (CampaignStatus.SENDING, CampaignStatus.SENDING),
        ],
    )
    def test_forward_moves_allowed(self, current: CampaignStatus, target: CampaignStatus) -> None:
        assert lifecycle.can_transition(current, target) is True

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (CampaignStatus.SENDING, CampaignStatus.PENDING),
            (CampaignStatus.COMPLETED, CampaignStatus.SENDING),
            (CampaignStatus.COMPLETED, CampaignStatus.FAILED),
            (CampaignStatus.FAILED, CampaignStatus.COMPLETED),
        ],
    )
    def test_backward_moves_rejected(self, current: CampaignStatus, target: CampaignStatus) -> None:
        assert lifecycle.can_transition(current, target) is False


class TestTransition:
    """Tests for transition."""

    def test_changes_status(self) -> None:
        campaign = CampaignFactory.create()
        before = campaign.updated_at

        assert lifecycle.transition(campaign, CampaignStatus.SENDING) is True
        assert campaign.status is CampaignStatus.SENDING
        assert campaign.updated_at >= before

    def test_same_status_is_noop(self) -> None:
        campaign = CampaignFactory.create(status=CampaignStatus.SENDING)
        assert lifecycle.transition(campaign, CampaignStatus.SENDING) is False

    def test_regression_raises(self) -> None:
        campaign = CampaignFactory.create(status=CampaignStatus.COMPLETED)

        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.transition(campaign, CampaignStatus.PENDING)

        assert exc_info.value.current == "COMPLETED"
        assert exc_info.value.target == "PENDING"
        assert campaign.status is CampaignStatus.COMPLETED


class TestApplyOutcome:
    """Tests for apply_outcome."""

    def test_first_outcome_moves_to_sending(self) -> None:
        campaign = CampaignFactory.create(audience_size=3)

        lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)

        assert campaign.total_sent == 1
        assert campaign.status is CampaignStatus.SENDING

    def test_last_outcome_completes(self) -> None:
        campaign = CampaignFactory.create(audience_size=2)

        lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)
        lifecycle.apply_outcome(campaign, DeliveryStatus.FAILED)

        assert campaign.total_sent == 1
        assert campaign.total_failed == 1
        assert campaign.status is CampaignStatus.COMPLETED

    def test_single_recipient_goes_straight_to_completed(self) -> None:
        campaign = CampaignFactory.create(audience_size=1)
        lifecycle.apply_outcome(campaign, DeliveryStatus.FAILED)
        assert campaign.status is CampaignStatus.COMPLETED

    def test_failed_campaign_keeps_status(self) -> None:
        campaign = CampaignFactory.create(audience_size=2, status=CampaignStatus.FAILED)

        lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)
        lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)

        assert campaign.total_sent == 2
        assert campaign.status is CampaignStatus.FAILED

    def test_pending_outcome_rejected(self) -> None:
        campaign = CampaignFactory.create()
        with pytest.raises(ValueError):
            lifecycle.apply_outcome(campaign, DeliveryStatus.PENDING)

    def test_counters_cannot_exceed_audience(self) -> None:
        campaign = CampaignFactory.create(audience_size=1)
        lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)

        with pytest.raises(ValueError):
            lifecycle.apply_outcome(campaign, DeliveryStatus.SENT)
