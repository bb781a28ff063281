"""
Formsmith runtime engine.

Pure functions a renderer calls on every value change or submission:
- Rule evaluation (visibility.py)
- Validation (validation.py)
- Value coercion to DTOs (dto.py)
- Line-items table helpers (tables.py)
"""

from formsmith.engine.coercion_rules import (
    INVALID_DATE,
    format_number,
    is_empty,
    is_truthy,
    loose_equals,
    to_iso_timestamp,
    to_number,
    to_text,
)
from formsmith.engine.dto import coerce_value, map_values_to_dto, map_voucher_to_dto
from formsmith.engine.tables import (
    STANDARD_COLUMNS,
    ResolvedColumn,
    add_row,
    new_row,
    remove_row,
    resolve_table_columns,
)
from formsmith.engine.validation import (
    VoucherValidationResult,
    validate_field,
    validate_form,
    validate_row_count,
    validate_rows,
    validate_voucher,
)
from formsmith.engine.visibility import (
    check_condition,
    evaluate_row_visibility,
    evaluate_visibility,
    rule_matches,
    visible_fields,
)

__all__ = [
    # Rule evaluation
    "check_condition",
    "rule_matches",
    "evaluate_visibility",
    "evaluate_row_visibility",
    "visible_fields",
    # Validation
    "validate_field",
    "validate_form",
    "validate_rows",
    "validate_row_count",
    "validate_voucher",
    "VoucherValidationResult",
    # DTO mapping
    "coerce_value",
    "map_values_to_dto",
    "map_voucher_to_dto",
    # Tables
    "STANDARD_COLUMNS",
    "ResolvedColumn",
    "resolve_table_columns",
    "new_row",
    "add_row",
    "remove_row",
    # Coercion rules
    "INVALID_DATE",
    "is_empty",
    "is_truthy",
    "to_number",
    "to_text",
    "format_number",
    "loose_equals",
    "to_iso_timestamp",
]
