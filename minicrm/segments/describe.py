"""Plain-language rendering of rule clauses."""

from collections.abc import Sequence

from minicrm.segments.enums import RuleField, RuleOperator
from minicrm.segments.models import SegmentRule

FIELD_LABELS: dict[RuleField, str] = {
    RuleField.SPEND: "total spend",
    RuleField.VISITS: "page visits",
    RuleField.LAST_ACTIVE: "days since last active",
    RuleField.AGE: "age",
    RuleField.ORDERS: "total orders",
    RuleField.LOCATION: "location",
}

OPERATOR_LABELS: dict[RuleOperator, str] = {
    RuleOperator.GT: "greater than",
    RuleOperator.LT: "less than",
    RuleOperator.GTE: "at least",
    RuleOperator.LTE: "at most",
    RuleOperator.EQ: "equal to",
    RuleOperator.NE: "not equal to",
}

CURRENCY_SYMBOL = "₹"


def describe_clause(clause: SegmentRule) -> str:
    """Render one clause, e.g. 'total spend greater than ₹10000'."""
    value = f"{CURRENCY_SYMBOL}{clause.value}" if clause.field is RuleField.SPEND else clause.value
    return f"{FIELD_LABELS[clause.field]} {OPERATOR_LABELS[clause.operator]} {value}"


def describe_audience(clauses: Sequence[SegmentRule]) -> str:
    """Render a clause list joined with 'and'; 'all customers' when empty."""
    if not clauses:
        return "all customers"
    return " and ".join(describe_clause(clause) for clause in clauses)
