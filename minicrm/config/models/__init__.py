"""Configuration model exports.

    from minicrm.config.models import DeliveryConfig, SuggestionsConfig
"""

from minicrm.config.models.delivery import DeliveryConfig, SimulationConfig
from minicrm.config.models.observability import (
    LoggingConfig,
    ObservabilityConfig,
)
from minicrm.config.models.segments import SegmentsConfig
from minicrm.config.models.suggestions import SuggestionsConfig

__all__ = [
    "DeliveryConfig",
    "SimulationConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "SegmentsConfig",
    "SuggestionsConfig",
]
