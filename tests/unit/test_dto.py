"""Tests for the value coercion mapper."""

import math
from datetime import datetime, timezone

from formsmith.core.ir import FieldDefinition, FieldType, FormDefinition, VoucherTypeDefinition
from formsmith.engine.coercion_rules import INVALID_DATE
from formsmith.engine.dto import coerce_value, map_values_to_dto, map_voucher_to_dto


def field(name: str, field_type: FieldType) -> FieldDefinition:
    return FieldDefinition(id=name, name=name, type=field_type)


class TestMapValuesToDto:
    """Tests for field-type driven coercion."""

    def test_checkbox_string_false_is_true(self) -> None:
        assert map_values_to_dto([field("flag", FieldType.CHECKBOX)], {"flag": "false"}) == {"flag": True}

    def test_checkbox_booleans(self) -> None:
        flag = field("flag", FieldType.CHECKBOX)
        assert coerce_value(flag, False) is False
        assert coerce_value(flag, 0) is False
        assert coerce_value(flag, "on") is True

    def test_empty_and_missing_become_none(self) -> None:
        fields = [field("n", FieldType.NUMBER), field("d", FieldType.DATE), field("c", FieldType.CHECKBOX)]
        assert map_values_to_dto(fields, {"n": "", "c": ""}) == {"n": None, "d": None, "c": None}

    def test_number_coercion(self) -> None:
        n = field("n", FieldType.NUMBER)
        assert coerce_value(n, "42") == 42.0
        assert coerce_value(n, " 1e2 ") == 100.0
        assert coerce_value(n, True) == 1.0
        assert math.isnan(coerce_value(n, "12abc"))

    def test_date_coercion(self) -> None:
        d = field("d", FieldType.DATE)
        assert coerce_value(d, "2024-03-01") == "2024-03-01T00:00:00.000Z"
        assert coerce_value(d, datetime(2024, 3, 1, 12, tzinfo=timezone.utc)) == "2024-03-01T12:00:00.000Z"
        assert coerce_value(d, "garbage") == INVALID_DATE

    def test_partial_dates_are_stable(self) -> None:
        fields = [field("a", FieldType.DATE), field("b", FieldType.DATE)]
        values = {"a": "March 5", "b": "5pm"}
        dto = map_values_to_dto(fields, values)
        assert dto == {"a": "2001-03-05T00:00:00.000Z", "b": "2001-01-01T17:00:00.000Z"}
        assert map_values_to_dto(fields, values) == dto

    def test_other_types_pass_through(self) -> None:
        values = {"t": "text", "s": 3, "r": {"id": "acc-1"}, "a": "  spaced  "}
        fields = [
            field("t", FieldType.TEXT),
            field("s", FieldType.SELECT),
            field("r", FieldType.RELATION),
            field("a", FieldType.TEXTAREA),
        ]
        assert map_values_to_dto(fields, values) == values

    def test_only_declared_fields_are_emitted(self) -> None:
        assert map_values_to_dto([field("a", FieldType.TEXT)], {"a": "x", "extra": 1}) == {"a": "x"}

    def test_form_fields(self, signup_form: FormDefinition) -> None:
        dto = map_values_to_dto(
            signup_form.fields,
            {"name": "Ada", "age": "36", "newsletter": "false", "start": "2024-01-31"},
        )
        assert dto == {
            "name": "Ada",
            "age": 36.0,
            "email": None,
            "newsletter": True,
            "start": "2024-01-31T00:00:00.000Z",
        }


class TestMapVoucherToDto:
    """Tests for header + lines DTOs."""

    def test_rows_under_table_name(self, payment_voucher: VoucherTypeDefinition) -> None:
        dto = map_voucher_to_dto(
            payment_voucher,
            {"date": "2024-02-01", "payee": "ACME"},
            [{"account": "1000", "amount": "12.5"}, {"account": "2000", "amount": ""}],
        )
        assert dto == {
            "date": "2024-02-01T00:00:00.000Z",
            "payee": "ACME",
            "lines": [
                {"account": "1000", "amount": 12.5},
                {"account": "2000", "amount": None},
            ],
        }
