"""Segments: rule clauses, their evaluation, and audience resolution."""

from minicrm.segments.describe import describe_audience, describe_clause
from minicrm.segments.enums import Connector, RuleField, RuleOperator, UnknownFieldPolicy
from minicrm.segments.evaluator import RuleEvaluator, compare, parse_numeric
from minicrm.segments.models import AudienceResult, RuleClause, Segment, SegmentRule
from minicrm.segments.resolver import SegmentResolver

__all__ = [
    # Enums
    "Connector",
    "RuleField",
    "RuleOperator",
    "UnknownFieldPolicy",
    # Models
    "AudienceResult",
    "RuleClause",
    "Segment",
    "SegmentRule",
    # Evaluation
    "RuleEvaluator",
    "SegmentResolver",
    "compare",
    "parse_numeric",
    "describe_audience",
    "describe_clause",
]
