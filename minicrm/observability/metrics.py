"""Prometheus metrics for minicrm."""

from prometheus_client import Counter, Histogram

# Campaign metrics
CAMPAIGNS_CREATED = Counter(
    "minicrm_campaigns_created_total",
    "Total number of campaigns created",
)

CAMPAIGN_AUDIENCE_SIZE = Histogram(
    "minicrm_campaign_audience_size",
    "Resolved audience size per campaign",
    buckets=(0, 1, 10, 50, 100, 500, 1000, 5000, 10000, 50000),
)

SEGMENT_RESOLUTION_LATENCY = Histogram(
    "minicrm_segment_resolution_latency_seconds",
    "Time spent evaluating segment rules over the customer set",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

# Delivery metrics
LOGS_WRITTEN = Counter(
    "minicrm_communication_logs_written_total",
    "Total communication logs written during campaign initiation",
)

DELIVERY_FAILURES = Counter(
    "minicrm_delivery_failures_total",
    "Campaign deliveries that stopped on a failed batch",
    labelnames=["error_type"],
)

LOG_OUTCOMES = Counter(
    "minicrm_log_outcomes_total",
    "Communication logs finalized, by terminal status",
    labelnames=["status"],
)

# Suggestion metrics
SUGGESTION_REQUESTS = Counter(
    "minicrm_suggestion_requests_total",
    "Message suggestion requests by outcome",
    labelnames=["outcome"],
)
