"""
Value coercion mapper.

Turns the raw value map of a submitted form into a DTO whose values carry
the declared field types: numbers as floats, checkboxes as booleans and
dates as UTC ISO timestamps.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from formsmith.core.ir.documents import VoucherTypeDefinition
from formsmith.core.ir.fields import FieldDefinition, FieldType
from formsmith.core.ir.values import wrap

from .coercion_rules import is_empty, is_truthy, to_iso_timestamp, to_number


def coerce_value(field: FieldDefinition, raw: Any) -> Any:
    """
    Coerce one raw value according to its field type.

    Examples:
        >>> coerce_value(FieldDefinition(id="a", name="a", type="NUMBER"), "42")
        42.0
        >>> coerce_value(FieldDefinition(id="c", name="c", type="CHECKBOX"), "false")
        True
    """
    if is_empty(raw):
        return None
    if field.type == FieldType.NUMBER:
        return to_number(wrap(raw))
    if field.type == FieldType.CHECKBOX:
        return is_truthy(wrap(raw))
    if field.type == FieldType.DATE:
        return to_iso_timestamp(raw)
    return raw


def map_values_to_dto(fields: Iterable[FieldDefinition], values: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build the submission DTO for a field list.

    Only declared fields are emitted, keyed by field name. Missing values and
    the empty string map to None. Unparsable numbers become NaN and
    unparsable dates become ``"Invalid Date"``; nothing here raises.

    Args:
        fields: Field definitions in declaration order
        values: Raw value map keyed by field name

    Returns:
        Field name -> coerced value
    """
    return {field.name: coerce_value(field, values.get(field.name)) for field in fields}


def map_voucher_to_dto(
    voucher: VoucherTypeDefinition,
    header_values: Mapping[str, Any],
    rows: Sequence[Mapping[str, Any]],
) -> dict[str, Any]:
    """
    Build the DTO of a voucher: header fields plus the coerced line rows.

    The rows are stored under the table's ``name`` key.
    """
    dto = map_values_to_dto(voucher.header.fields, header_values)
    dto[voucher.lines.name] = [map_values_to_dto(voucher.lines.columns, row) for row in rows]
    return dto
