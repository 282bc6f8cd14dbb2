"""Segment rule evaluation configuration."""

from typing import Literal

from pydantic import BaseModel, Field

UnknownFieldPolicyName = Literal["permissive", "strict"]


class SegmentsConfig(BaseModel):
    """Rule evaluator configuration."""

    unknown_field_policy: UnknownFieldPolicyName = Field(
        default="permissive",
        description="'permissive' lets clauses on unenforced fields pass, 'strict' rejects them",
    )
