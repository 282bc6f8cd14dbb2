"""Rule clause evaluation against a single customer.

Numeric fields are compared after parsing the clause value as a float.
An unparsable value becomes NaN, which fails every comparison except
``!=``. Fields without a handler are resolved by UnknownFieldPolicy.
"""

import math
import operator
from collections.abc import Callable

from minicrm.customers.models import Customer
from minicrm.errors import UnsupportedFieldError
from minicrm.segments.enums import RuleField, RuleOperator, UnknownFieldPolicy
from minicrm.segments.models import SegmentRule

FieldAccessor = Callable[[Customer], float]

COMPARATORS: dict[RuleOperator, Callable[[float, float], bool]] = {
    RuleOperator.GT: operator.gt,
    RuleOperator.LT: operator.lt,
    RuleOperator.GTE: operator.ge,
    RuleOperator.LTE: operator.le,
    RuleOperator.EQ: operator.eq,
    RuleOperator.NE: operator.ne,
}

# Enforced fields; missing attributes count as 0
FIELD_ACCESSORS: dict[RuleField, FieldAccessor] = {
    RuleField.SPEND: lambda customer: float(customer.spend or 0),
    RuleField.VISITS: lambda customer: float(customer.visits or 0),
}


def parse_numeric(value: str) -> float:
    """Parse a clause value as a number, NaN when it is not one."""
    try:
        return float(value.strip())
    except (AttributeError, ValueError):
        return math.nan


def compare(actual: float, op: RuleOperator, target: float) -> bool:
    """Apply a comparison operator.

    A NaN target only satisfies ``!=``.
    """
    if math.isnan(target):
        return op is RuleOperator.NE
    return COMPARATORS[op](actual, target)


class RuleEvaluator:
    """Decides whether one customer satisfies one rule clause."""

    def __init__(
        self,
        unknown_field_policy: UnknownFieldPolicy = UnknownFieldPolicy.PERMISSIVE,
    ) -> None:
        self._policy = unknown_field_policy

    @property
    def unknown_field_policy(self) -> UnknownFieldPolicy:
        return self._policy

    @property
    def supported_fields(self) -> frozenset[RuleField]:
        """Fields this evaluator actually enforces."""
        return frozenset(FIELD_ACCESSORS)

    def evaluate(self, customer: Customer, clause: SegmentRule) -> bool:
        """Return True if the customer satisfies the clause.

        Raises:
            UnsupportedFieldError: If the field has no handler and the
                policy is STRICT
        """
        accessor = FIELD_ACCESSORS.get(clause.field)
        if accessor is None:
            if self._policy is UnknownFieldPolicy.STRICT:
                raise UnsupportedFieldError(clause.field.value)
            return True

        return compare(accessor(customer), clause.operator, parse_numeric(clause.value))

    def check_supported(self, clauses: list[SegmentRule]) -> None:
        """Reject unsupported fields up front under the STRICT policy."""
        if self._policy is not UnknownFieldPolicy.STRICT:
            return
        for clause in clauses:
            if clause.field not in FIELD_ACCESSORS:
                raise UnsupportedFieldError(clause.field.value)
