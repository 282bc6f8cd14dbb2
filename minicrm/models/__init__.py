"""Shared base models."""

from minicrm.models.base import RecordModel, TimestampedModel, utc_now

__all__ = [
    "RecordModel",
    "TimestampedModel",
    "utc_now",
]
