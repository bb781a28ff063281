"""
Rule types for Formsmith IR.

Rules attach conditional behaviour to fields. Only VISIBILITY rules are
evaluated by the engine; VALIDATION and COMPUTED are carried as data.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from .base import SchemaModel


class RuleType(str, Enum):
    """Kinds of rules a document can carry."""

    VISIBILITY = "VISIBILITY"
    VALIDATION = "VALIDATION"
    COMPUTED = "COMPUTED"


class MatchType(str, Enum):
    """How the conditions of a rule are combined."""

    AND = "AND"
    OR = "OR"


class Operator(str, Enum):
    """Comparison operators for rule conditions."""

    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    CONTAINS = "CONTAINS"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    IS_EMPTY = "IS_EMPTY"
    IS_NOT_EMPTY = "IS_NOT_EMPTY"


class RuleEffect(str, Enum):
    """What happens to the target field when a rule matches."""

    HIDE = "HIDE"


class RuleCondition(SchemaModel):
    """
    A single comparison inside a rule.

    Unknown operator strings are kept as plain strings so that a document
    written for a newer engine still loads; such conditions evaluate to false.

    Examples:
        - RuleCondition(field_id="status", operator=Operator.EQUALS, value="draft")
        - RuleCondition(field_id="notes", operator=Operator.IS_EMPTY)
    """

    field_id: str
    operator: Operator | str = Field(union_mode="left_to_right")
    value: Any = None


class RuleDefinition(SchemaModel):
    """
    Conditional rule targeting one field.

    Attributes:
        id: Rule identifier
        type: Rule kind (only VISIBILITY is evaluated)
        target_field_id: Field affected when the rule matches
        conditions: Conditions combined according to match_type
        match_type: AND (all true) or OR (any true)
        effect: Effect applied on match; HIDE is the only effect today
    """

    id: str
    type: RuleType = RuleType.VISIBILITY
    target_field_id: str
    conditions: list[RuleCondition] = Field(default_factory=list)
    match_type: MatchType = MatchType.AND
    effect: RuleEffect = RuleEffect.HIDE
