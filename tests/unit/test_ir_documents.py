"""Tests for document definition helpers."""

from formsmith.core.ir import FormDefinition, RuleCondition, RuleDefinition, SectionDefinition


class TestFieldLookup:
    """Tests for looking fields up by id and by name."""

    def test_field_by_id(self, signup_form: FormDefinition) -> None:
        field = signup_form.field_by_id("f_age")
        assert field is not None
        assert field.name == "age"
        assert signup_form.field_by_id("age") is None

    def test_field_by_name(self, signup_form: FormDefinition) -> None:
        field = signup_form.field_by_name("email")
        assert field is not None
        assert field.id == "f_email"
        assert signup_form.field_by_name("f_email") is None


class TestUnresolvedReferences:
    """Tests for dangling reference diagnostics."""

    def test_clean_form(self, signup_form: FormDefinition) -> None:
        assert signup_form.unresolved_references() == []

    def test_conditions_resolve_by_id_or_name(self, signup_form: FormDefinition) -> None:
        rule = RuleDefinition(
            id="r",
            target_field_id="f_start",
            conditions=[
                RuleCondition(field_id="f_age", operator="IS_EMPTY"),
                RuleCondition(field_id="age", operator="IS_EMPTY"),
            ],
        )
        form = signup_form.model_copy(update={"rules": [rule]})
        assert form.unresolved_references() == []

    def test_dangling_references_are_listed(self, signup_form: FormDefinition) -> None:
        rule = RuleDefinition(
            id="r",
            target_field_id="ghost",
            conditions=[RuleCondition(field_id="nowhere", operator="IS_EMPTY")],
        )
        form = signup_form.model_copy(
            update={"rules": [rule], "sections": [SectionDefinition(id="main", field_ids=["f_name", "missing"])]}
        )
        assert form.unresolved_references() == [
            "section main -> missing",
            "rule r target -> ghost",
            "rule r condition -> nowhere",
        ]
