"""Unit tests for plain-language clause rendering."""

from minicrm.segments.describe import describe_audience, describe_clause
from minicrm.segments.enums import RuleField
from tests.factories.crm import ClauseFactory


def test_describe_spend_clause_adds_currency() -> None:
    assert describe_clause(ClauseFactory.spend(">", "10000")) == "total spend greater than ₹10000"


def test_describe_visits_clause() -> None:
    assert describe_clause(ClauseFactory.visits("<=", "3")) == "page visits at most 3"


def test_describe_unenforced_field() -> None:
    clause = ClauseFactory.create(RuleField.LAST_ACTIVE, "!=", "30")
    assert describe_clause(clause) == "days since last active not equal to 30"


def test_describe_audience_joins_with_and() -> None:
    clauses = [ClauseFactory.spend(">", "10000"), ClauseFactory.visits("<", "3")]

    assert describe_audience(clauses) == "total spend greater than ₹10000 and page visits less than 3"


def test_describe_empty_audience() -> None:
    assert describe_audience([]) == "all customers"
