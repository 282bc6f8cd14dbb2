"""Enums for campaigns and communication logs."""

from enum import Enum


class CampaignStatus(str, Enum):
    """Campaign delivery state.

    - PENDING: created, no log finalized yet
    - SENDING: at least one log finalized
    - COMPLETED: every log reached SENT or FAILED
    - FAILED: unrecoverable delivery error
    """

    PENDING = "PENDING"
    SENDING = "SENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (CampaignStatus.COMPLETED, CampaignStatus.FAILED)


class DeliveryStatus(str, Enum):
    """Per-customer message state. SENT and FAILED are terminal."""

    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not DeliveryStatus.PENDING
