"""
Line-items table helpers.

Resolves the designer's column choices into field definitions and provides
immutable row operations that honour a table's row limits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from formsmith.core.errors import ErrorContext, TableRowLimitError
from formsmith.core.ir.documents import TableDefinition
from formsmith.core.ir.fields import FieldDefinition, FieldType, SelectOption
from formsmith.core.ir.wizard import TableColumnConfig

logger = logging.getLogger(__name__)

ROW_ID_KEY = "id"


def _standard(field_id: str, label: str, field_type: FieldType, **extra: Any) -> FieldDefinition:
    return FieldDefinition(id=field_id, name=field_id, label=label, type=field_type, **extra)


STANDARD_COLUMNS: dict[str, FieldDefinition] = {
    "account": _standard("account", "Account", FieldType.RELATION, required=True, relation_target="account"),
    "debit": _standard("debit", "Debit", FieldType.NUMBER),
    "credit": _standard("credit", "Credit", FieldType.NUMBER),
    "description": _standard("description", "Description", FieldType.TEXT),
    "notes": _standard("notes", "Notes", FieldType.TEXTAREA),
    "amount": _standard("amount", "Amount", FieldType.NUMBER, required=True),
    "currency": _standard(
        "currency",
        "Currency",
        FieldType.SELECT,
        options=[SelectOption(label=code, value=code) for code in ("USD", "EUR", "TRY")],
    ),
    "exchangeRate": _standard("exchangeRate", "Rate", FieldType.NUMBER),
}


@dataclass(frozen=True)
class ResolvedColumn:
    """A line-items column: its field definition plus the CSS width to render it at."""

    field: FieldDefinition
    width: str | None = None


def _resolve_field(column_id: str, header_fields: Sequence[FieldDefinition]) -> FieldDefinition:
    for field in header_fields:
        if field.id == column_id or field.name == column_id:
            return field
    standard = STANDARD_COLUMNS.get(column_id)
    if standard is not None:
        return standard
    logger.debug("Column %s not in header fields or standard registry, using text", column_id)
    label = column_id[:1].upper() + column_id[1:]
    return FieldDefinition(id=column_id, name=column_id, label=label, type=FieldType.TEXT)


def resolve_table_columns(
    columns: Iterable[TableColumnConfig],
    header_fields: Sequence[FieldDefinition] = (),
) -> list[ResolvedColumn]:
    """
    Resolve configured column ids into field definitions.

    Lookup order: the form's header fields (by id, then name), the standard
    column registry, and finally a plain TEXT field labelled after the id.
    Columns with an explicit ``order`` are sorted by it; the others keep their
    list position as their order.

    Args:
        columns: Designer column configuration
        header_fields: Fields already defined on the form

    Returns:
        Resolved columns in display order
    """
    indexed = list(enumerate(columns))
    indexed.sort(key=lambda item: item[1].order if item[1].order is not None else item[0])

    resolved: list[ResolvedColumn] = []
    for _, config in indexed:
        field = _resolve_field(config.id, header_fields)
        if config.label_override:
            field = field.model_copy(update={"label": config.label_override})
        resolved.append(ResolvedColumn(field=field, width=config.width))
    return resolved


# =============================================================================
# Row operations
# =============================================================================


def new_row(table: TableDefinition, row_id: str) -> dict[str, Any]:
    """A blank row: every column at its default value, plus the row id."""
    row: dict[str, Any] = {ROW_ID_KEY: row_id}
    for column in table.columns:
        row[column.name] = column.default_value
    return row


def add_row(table: TableDefinition, rows: Sequence[dict[str, Any]], row_id: str) -> list[dict[str, Any]]:
    """
    Append a blank row.

    Raises:
        TableRowLimitError: If the table already holds ``max_rows`` rows
    """
    if table.max_rows is not None and len(rows) >= table.max_rows:
        raise TableRowLimitError(
            f"Cannot add row: table allows at most {table.max_rows} row(s)",
            ErrorContext(document=table.id),
        )
    return [*rows, new_row(table, row_id)]


def remove_row(table: TableDefinition, rows: Sequence[dict[str, Any]], index: int) -> list[dict[str, Any]]:
    """
    Remove the row at ``index``.

    Raises:
        TableRowLimitError: If the table would drop below ``min_rows``
        IndexError: If ``index`` is out of range
    """
    if not 0 <= index < len(rows):
        raise IndexError(f"Row index {index} out of range for {len(rows)} row(s)")
    if table.min_rows is not None and len(rows) <= table.min_rows:
        raise TableRowLimitError(
            f"Cannot remove row: table requires at least {table.min_rows} row(s)",
            ErrorContext(document=table.id),
        )
    return [row for i, row in enumerate(rows) if i != index]
