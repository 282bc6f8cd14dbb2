"""Error hierarchy for the CRM pipeline.

Every error carries a human-readable message and, when it wraps a lower
level failure, the original exception as ``cause``. Store implementations
must translate backend-specific failures into the StoreError subclasses.
"""

from uuid import UUID


class CRMError(Exception):
    """Base exception for all CRM pipeline errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(CRMError):
    """Raised on invalid input, before anything is persisted.

    Examples:
        - Blank segment name
        - Rule clause with an unknown field or operator
        - Negative customer spend
    """

    pass


class UnsupportedFieldError(ValidationError):
    """Raised by a strict evaluator for a field it cannot evaluate."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Rule field '{field}' is not supported by the evaluator")
        self.field = field


# ============================================================================
# Store errors
# ============================================================================


class StoreError(CRMError):
    """Base exception for all store errors."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the backing store cannot be reached."""

    pass


class NotFoundError(StoreError):
    """Raised when a specific entity lookup fails.

    Not raised for empty list results.
    """

    pass


class CampaignNotFoundError(NotFoundError):
    """Raised when campaign_id doesn't exist."""

    def __init__(self, campaign_id: UUID) -> None:
        super().__init__(f"Campaign not found: {campaign_id}")
        self.campaign_id = campaign_id


class LogNotFoundError(NotFoundError):
    """Raised when a communication log doesn't exist for the campaign."""

    def __init__(self, campaign_id: UUID, log_id: UUID) -> None:
        super().__init__(f"Communication log {log_id} not found in campaign {campaign_id}")
        self.campaign_id = campaign_id
        self.log_id = log_id


class ConflictError(StoreError):
    """Raised when a write would break a store invariant.

    Examples:
        - Second log for the same (campaign, customer) pair
        - Finalizing a log that is already SENT or FAILED
        - Counters exceeding the campaign audience size
    """

    pass


class InvalidTransitionError(CRMError):
    """Raised when a campaign status would move backwards."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot move campaign status from {current} to {target}")
        self.current = current
        self.target = target


# ============================================================================
# Delivery errors
# ============================================================================


class DeliveryError(CRMError):
    """Raised when communication logs for a campaign cannot be written."""

    def __init__(
        self,
        message: str,
        campaign_id: UUID,
        logs_written: int = 0,
        failed_batch: int = 0,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.campaign_id = campaign_id
        self.logs_written = logs_written
        self.failed_batch = failed_batch


class PartialDeliveryError(DeliveryError):
    """Raised when a batch fails after earlier logs were already written.

    The campaign and the logs already written stay in place; the campaign
    keeps ``total_sent + total_failed < audience_size`` until resumed.
    """

    pass
