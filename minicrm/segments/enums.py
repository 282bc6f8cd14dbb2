"""Enums for segment rules."""

from enum import Enum


class RuleField(str, Enum):
    """Customer attributes a rule clause can target.

    Only SPEND and VISITS are enforced by the evaluator; the others are
    accepted for authoring and handled by UnknownFieldPolicy.
    """

    SPEND = "spend"
    VISITS = "visits"
    LAST_ACTIVE = "lastActive"
    AGE = "age"
    ORDERS = "orders"
    LOCATION = "location"


class RuleOperator(str, Enum):
    """Comparison operators for rule clauses."""

    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    EQ = "="
    NE = "!="


class Connector(str, Enum):
    """Logical relation to the next clause.

    Display-only: clauses are always combined with AND.
    """

    AND = "AND"
    OR = "OR"


class UnknownFieldPolicy(str, Enum):
    """What the evaluator does with a clause on a field it cannot evaluate.

    - PERMISSIVE: the clause passes for every customer
    - STRICT: evaluation raises UnsupportedFieldError
    """

    PERMISSIVE = "permissive"
    STRICT = "strict"
