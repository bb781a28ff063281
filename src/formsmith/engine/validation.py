"""
Validation engine.

Walks a document definition and a value map and produces a map of field name
to error message. Validation results are data, never exceptions; the only
exception is ``PatternError`` for a pattern that does not compile, which is
an authoring defect.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from formsmith.core.errors import PatternError
from formsmith.core.ir.documents import FormDefinition, TableDefinition, VoucherTypeDefinition
from formsmith.core.ir.fields import FieldDefinition, FieldType
from formsmith.core.ir.values import wrap

from .coercion_rules import format_number, is_empty, to_number, to_text

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid format"


def required_message(field: FieldDefinition) -> str:
    return f"{field.display_label} is required"


def min_message(minimum: float) -> str:
    return f"Value must be at least {format_number(minimum)}"


def max_message(maximum: float) -> str:
    return f"Value must be at most {format_number(maximum)}"


def _compile_pattern(field_name: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(field_name, pattern, str(exc)) from exc


def validate_field(field: FieldDefinition, raw: Any) -> str | None:
    """
    Validate one field value.

    Checks run in a fixed order: required, then NUMBER bounds (a max failure
    overwrites a min failure), then pattern.

    Returns:
        The error message, or None when the value is acceptable
    """
    if is_empty(raw):
        return required_message(field) if field.required else None

    error: str | None = None
    value = wrap(raw)

    if field.type == FieldType.NUMBER:
        number = to_number(value)
        if field.min is not None and not math.isnan(number) and number < field.min:
            error = min_message(field.min)
        if field.max is not None and not math.isnan(number) and number > field.max:
            error = max_message(field.max)

    if field.pattern:
        if not _compile_pattern(field.name, field.pattern).search(to_text(value)):
            error = INVALID_FORMAT_MESSAGE

    return error


def validate_fields(
    fields: Iterable[FieldDefinition],
    values: Mapping[str, Any],
    *,
    hidden: set[str] | None = None,
) -> dict[str, str]:
    """Validate a field list in declaration order; errors keyed by field name."""
    errors: dict[str, str] = {}
    for field in fields:
        if hidden and field.id in hidden:
            continue
        message = validate_field(field, values.get(field.name))
        if message is not None:
            errors[field.name] = message
    return errors


def validate_form(
    definition: FormDefinition,
    values: Mapping[str, Any],
    *,
    hidden: set[str] | None = None,
) -> dict[str, str]:
    """
    Validate a form's value map.

    Args:
        definition: Form definition
        values: Value map keyed by field name
        hidden: Optional hidden-field ids (from ``evaluate_visibility``); hidden
            fields are neither required nor checked

    Returns:
        Field name -> error message; empty when the form is valid

    Raises:
        PatternError: If a field's pattern is not a valid regular expression
    """
    return validate_fields(definition.fields, values, hidden=hidden)


def validate_row_count(table: TableDefinition, row_count: int) -> str | None:
    """Check a row count against the table's limits."""
    if table.min_rows is not None and row_count < table.min_rows:
        return f"At least {table.min_rows} row(s) required"
    if table.max_rows is not None and row_count > table.max_rows:
        return f"At most {table.max_rows} row(s) allowed"
    return None


def validate_rows(
    table: TableDefinition,
    rows: Sequence[Mapping[str, Any]],
    *,
    hidden_per_row: Sequence[set[str]] | None = None,
) -> dict[int, dict[str, str]]:
    """
    Validate each table row against the table's columns.

    Rows are independent passes; only rows with errors appear in the result.

    Returns:
        Row index -> (column name -> error message)
    """
    results: dict[int, dict[str, str]] = {}
    for index, row in enumerate(rows):
        hidden = hidden_per_row[index] if hidden_per_row is not None and index < len(hidden_per_row) else None
        errors = validate_fields(table.columns, row, hidden=hidden)
        if errors:
            results[index] = errors
    return results


class VoucherValidationResult(BaseModel):
    """Outcome of validating a voucher's header and lines."""

    header: dict[str, str] = Field(default_factory=dict)
    rows: dict[int, dict[str, str]] = Field(default_factory=dict)
    table: str | None = None

    @property
    def is_valid(self) -> bool:
        return not self.header and not self.rows and self.table is None


def validate_voucher(
    voucher: VoucherTypeDefinition,
    header_values: Mapping[str, Any],
    rows: Sequence[Mapping[str, Any]],
    *,
    header_hidden: set[str] | None = None,
) -> VoucherValidationResult:
    """
    Validate a voucher document: the header form and every line row.

    The header and the rows are isolated passes and may run in any order.
    """
    result = VoucherValidationResult(
        header=validate_form(voucher.header, header_values, hidden=header_hidden),
        rows=validate_rows(voucher.lines, rows),
        table=validate_row_count(voucher.lines, len(rows)),
    )
    if not result.is_valid:
        logger.debug(
            "Voucher %s invalid: %d header error(s), %d row(s) with errors",
            voucher.id,
            len(result.header),
            len(result.rows),
        )
    return result
