"""Tests for the rule evaluation engine."""

from typing import Any

import pytest

from formsmith.core.ir import (
    FieldDefinition,
    MatchType,
    Operator,
    RuleCondition,
    RuleDefinition,
    RuleType,
)
from formsmith.engine.visibility import (
    check_condition,
    evaluate_row_visibility,
    evaluate_visibility,
    rule_matches,
    visible_fields,
)


def hide_rule(target: str, *conditions: RuleCondition, match_type: MatchType = MatchType.AND) -> RuleDefinition:
    return RuleDefinition(
        id=f"hide_{target}",
        target_field_id=target,
        conditions=list(conditions),
        match_type=match_type,
    )


class TestCheckCondition:
    """Tests for single-condition operator semantics."""

    @pytest.mark.parametrize(
        ("operator", "expected_value", "values", "expected"),
        [
            (Operator.EQUALS, 5, {"a": "5"}, True),
            (Operator.EQUALS, "X", {"a": "Y"}, False),
            (Operator.EQUALS, "X", {}, False),
            (Operator.NOT_EQUALS, 5, {"a": "6"}, True),
            (Operator.NOT_EQUALS, 5, {"a": 5}, False),
            (Operator.CONTAINS, "ell", {"a": "hello"}, True),
            (Operator.CONTAINS, "5", {"a": 15}, True),
            (Operator.CONTAINS, "x", {"a": "hello"}, False),
            (Operator.CONTAINS, "x", {}, False),
            (Operator.CONTAINS, "def", {}, False),
            (Operator.GREATER_THAN, 10, {"a": "11"}, True),
            (Operator.GREATER_THAN, 10, {"a": 10}, False),
            (Operator.LESS_THAN, 10, {"a": "9.5"}, True),
            (Operator.LESS_THAN, 10, {"a": "abc"}, False),
            (Operator.GREATER_THAN, 10, {"a": "abc"}, False),
            (Operator.GREATER_THAN, 0, {}, False),
        ],
    )
    def test_operator_table(
        self, operator: Operator, expected_value: Any, values: dict[str, Any], expected: bool
    ) -> None:
        condition = RuleCondition(field_id="a", operator=operator, value=expected_value)
        assert check_condition(condition, values) is expected

    def test_equals_is_loose(self) -> None:
        """A numeric rule value matches the same number stored as a string."""
        condition = RuleCondition(field_id="a", operator="EQUALS", value=5)
        assert check_condition(condition, {"a": "5"}) is True

    @pytest.mark.parametrize("raw", ["", None])
    def test_is_empty_true(self, raw: Any) -> None:
        condition = RuleCondition(field_id="a", operator=Operator.IS_EMPTY)
        assert check_condition(condition, {"a": raw}) is True

    def test_is_empty_missing_field(self) -> None:
        condition = RuleCondition(field_id="a", operator=Operator.IS_EMPTY)
        assert check_condition(condition, {}) is True

    @pytest.mark.parametrize("raw", [0, False])
    def test_is_empty_false_for_zero_and_false(self, raw: Any) -> None:
        condition = RuleCondition(field_id="a", operator=Operator.IS_EMPTY)
        assert check_condition(condition, {"a": raw}) is False

    def test_is_not_empty(self) -> None:
        condition = RuleCondition(field_id="a", operator=Operator.IS_NOT_EMPTY)
        assert check_condition(condition, {"a": 0}) is True
        assert check_condition(condition, {"a": ""}) is False

    def test_unknown_operator_is_false(self) -> None:
        condition = RuleCondition(field_id="a", operator="MATCHES", value="x")
        assert condition.operator == "MATCHES"
        assert check_condition(condition, {"a": "x"}) is False


class TestRuleMatches:
    """Tests for combining conditions."""

    def test_and_requires_all(self) -> None:
        rule = hide_rule(
            "b",
            RuleCondition(field_id="a", operator=Operator.EQUALS, value="X"),
            RuleCondition(field_id="c", operator=Operator.IS_NOT_EMPTY),
        )
        assert rule_matches(rule, {"a": "X", "c": "1"})
        assert not rule_matches(rule, {"a": "X"})

    def test_or_requires_any(self) -> None:
        rule = hide_rule(
            "b",
            RuleCondition(field_id="a", operator=Operator.EQUALS, value="X"),
            RuleCondition(field_id="c", operator=Operator.IS_NOT_EMPTY),
            match_type=MatchType.OR,
        )
        assert rule_matches(rule, {"a": "Y", "c": "1"})
        assert not rule_matches(rule, {"a": "Y"})


class TestEvaluateVisibility:
    """Tests for hidden-set computation."""

    def test_matching_rule_hides_target(self) -> None:
        rules = [hide_rule("b", RuleCondition(field_id="a", operator=Operator.EQUALS, value="X"))]
        assert evaluate_visibility(rules, {"a": "X"}) == {"b"}
        assert evaluate_visibility(rules, {"a": "Y"}) == set()

    def test_non_visibility_rules_are_ignored(self) -> None:
        rule = RuleDefinition(
            id="r",
            type=RuleType.VALIDATION,
            target_field_id="b",
            conditions=[RuleCondition(field_id="a", operator=Operator.IS_EMPTY)],
        )
        assert evaluate_visibility([rule], {}) == set()

    def test_dangling_references_do_not_raise(self) -> None:
        rules = [hide_rule("ghost", RuleCondition(field_id="nowhere", operator=Operator.GREATER_THAN, value=1))]
        assert evaluate_visibility(rules, {"a": 1}) == set()

    def test_is_pure(self) -> None:
        rules = [
            hide_rule("b", RuleCondition(field_id="a", operator=Operator.CONTAINS, value="x")),
            hide_rule("c", RuleCondition(field_id="a", operator=Operator.IS_EMPTY)),
        ]
        values = {"a": "xyz"}
        first = evaluate_visibility(rules, values)
        second = evaluate_visibility(rules, values)
        assert first == second == {"b"}
        assert values == {"a": "xyz"}

    def test_rules_parse_from_wire_shape(self) -> None:
        rule = RuleDefinition.model_validate(
            {
                "id": "r1",
                "type": "VISIBILITY",
                "targetFieldId": "b",
                "matchType": "OR",
                "conditions": [{"fieldId": "a", "operator": "EQUALS", "value": "X"}],
            }
        )
        assert evaluate_visibility([rule], {"a": "X"}) == {"b"}


class TestRowVisibility:
    """Tests for the per-row pass."""

    def test_rows_are_evaluated_independently(self) -> None:
        rules = [hide_rule("credit", RuleCondition(field_id="debit", operator=Operator.GREATER_THAN, value=0))]
        rows = [{"debit": 10}, {"debit": 0}, {}]
        assert evaluate_row_visibility(rules, rows) == [{"credit"}, set(), set()]

    def test_visible_fields_keeps_order(self) -> None:
        fields = [FieldDefinition(id=i, name=i) for i in ("a", "b", "c")]
        assert [f.id for f in visible_fields(fields, {"b"})] == ["a", "c"]
