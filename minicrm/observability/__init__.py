"""Observability: structured logging and Prometheus metrics."""

from minicrm.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
