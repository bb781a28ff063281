"""
Rule evaluation engine.

Evaluates VISIBILITY rules against the current value map and returns the set
of field ids to hide. Pure functions: no I/O, no shared state, safe to call
on every value change.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from formsmith.core.ir.fields import FieldDefinition
from formsmith.core.ir.rules import (
    MatchType,
    Operator,
    RuleCondition,
    RuleDefinition,
    RuleEffect,
    RuleType,
)
from formsmith.core.ir.values import wrap

from .coercion_rules import is_empty, loose_equals, to_number, to_text

logger = logging.getLogger(__name__)


def check_condition(condition: RuleCondition, values: Mapping[str, Any]) -> bool:
    """
    Evaluate one condition against the value map.

    A field with no entry in ``values`` reads as missing, which every operator
    except IS_EMPTY treats as non-matching. Unknown operators are false.

    Examples:
        >>> check_condition(RuleCondition(field_id="a", operator="EQUALS", value=5), {"a": "5"})
        True
        >>> check_condition(RuleCondition(field_id="a", operator="IS_EMPTY"), {"a": 0})
        False
    """
    raw = values.get(condition.field_id)
    operator = condition.operator

    if operator == Operator.EQUALS:
        return loose_equals(wrap(raw), wrap(condition.value))
    if operator == Operator.NOT_EQUALS:
        return not loose_equals(wrap(raw), wrap(condition.value))
    if operator == Operator.CONTAINS:
        return to_text(wrap(condition.value)) in to_text(wrap(raw))
    if operator == Operator.IS_EMPTY:
        return is_empty(raw)
    if operator == Operator.IS_NOT_EMPTY:
        return not is_empty(raw)
    if operator in (Operator.GREATER_THAN, Operator.LESS_THAN):
        left = to_number(wrap(raw))
        right = to_number(wrap(condition.value))
        if math.isnan(left) or math.isnan(right):
            return False
        return left > right if operator == Operator.GREATER_THAN else left < right

    logger.debug("Unknown operator %r on field %s", operator, condition.field_id)
    return False


def rule_matches(rule: RuleDefinition, values: Mapping[str, Any]) -> bool:
    """Combine a rule's conditions according to its match type."""
    results = (check_condition(c, values) for c in rule.conditions)
    if rule.match_type == MatchType.OR:
        return any(results)
    return all(results)


def evaluate_visibility(rules: Iterable[RuleDefinition], values: Mapping[str, Any]) -> set[str]:
    """
    Compute the hidden-field set.

    Only VISIBILITY rules are considered. A matching rule hides its target
    field; there is no "show when" effect.

    Args:
        rules: Rule definitions of one document
        values: Current value map, keyed the way the conditions reference fields

    Returns:
        Ids of fields that must not be rendered or required
    """
    hidden: set[str] = set()
    for rule in rules:
        if rule.type != RuleType.VISIBILITY:
            continue
        if rule.effect != RuleEffect.HIDE:
            continue
        if rule_matches(rule, values):
            hidden.add(rule.target_field_id)
    return hidden


def evaluate_row_visibility(
    rules: Sequence[RuleDefinition], rows: Sequence[Mapping[str, Any]]
) -> list[set[str]]:
    """
    Per-row pass for table lines.

    Each row is evaluated in isolation against the same rule list; the result
    is aligned with ``rows``.
    """
    return [evaluate_visibility(rules, row) for row in rows]


def visible_fields(fields: Iterable[FieldDefinition], hidden: set[str]) -> list[FieldDefinition]:
    """Drop hidden fields, preserving order."""
    return [f for f in fields if f.id not in hidden]
