"""Segment audience resolution."""

import time
from collections.abc import Sequence

from minicrm.customers.models import Customer
from minicrm.customers.store import CustomerDirectory
from minicrm.observability.logging import get_logger
from minicrm.observability.metrics import SEGMENT_RESOLUTION_LATENCY
from minicrm.segments.evaluator import RuleEvaluator
from minicrm.segments.models import AudienceResult, RuleClause, Segment, SegmentRule

logger = get_logger(__name__)


class SegmentResolver:
    """Applies a clause list to a customer set.

    A customer is a member when it satisfies every clause. Connectors are
    ignored. Results keep the input order, so the same customers and
    clauses always give the same audience.
    """

    def __init__(self, evaluator: RuleEvaluator | None = None) -> None:
        self._evaluator = evaluator or RuleEvaluator()

    @property
    def evaluator(self) -> RuleEvaluator:
        return self._evaluator

    def matches(self, customer: Customer, clauses: Sequence[SegmentRule]) -> bool:
        """Return True if the customer satisfies every clause."""
        return all(self._evaluator.evaluate(customer, clause) for clause in clauses)

    def resolve_audience(
        self,
        customers: Sequence[Customer],
        clauses: Sequence[SegmentRule],
    ) -> AudienceResult:
        """Return the matching customers in input order."""
        start_time = time.perf_counter()
        self._evaluator.check_supported(list(clauses))

        members = [customer for customer in customers if self.matches(customer, clauses)]

        elapsed = time.perf_counter() - start_time
        SEGMENT_RESOLUTION_LATENCY.observe(elapsed)
        logger.debug(
            "audience_resolved",
            customers=len(customers),
            clauses=len(clauses),
            audience_size=len(members),
            elapsed_ms=round(elapsed * 1000, 3),
        )
        return AudienceResult(members=members)

    async def resolve(
        self,
        directory: CustomerDirectory,
        clauses: Sequence[SegmentRule],
    ) -> AudienceResult:
        """Resolve against the directory's full current customer set."""
        customers = await directory.list_customers()
        return self.resolve_audience(customers, clauses)

    def build_segment(
        self,
        name: str,
        clauses: Sequence[RuleClause],
        customers: Sequence[Customer],
    ) -> Segment:
        """Resolve and freeze a named segment."""
        audience = self.resolve_audience(customers, clauses)
        return Segment(name=name, rules=list(clauses), audience_size=audience.size)
