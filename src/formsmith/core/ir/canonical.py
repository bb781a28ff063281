"""
Canonical voucher document types.

The canonical document is the persisted, versioned representation of a
voucher form (schemaVersion 2). It carries business flags derived from the
designer's toggles; the storage medium is outside this package.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from .base import SchemaModel

CANONICAL_SCHEMA_VERSION = 2


class CanonicalLayoutField(SchemaModel):
    """Persisted placement of one field."""

    field_id: str
    row: int = 0
    col: int = 0
    col_span: int = 12
    label: str | None = None
    category: str | None = None
    mandatory: bool | None = None


class CanonicalSection(SchemaModel):
    """Persisted section: order plus placements."""

    order: int = 0
    fields: list[CanonicalLayoutField] = Field(default_factory=list)


class CanonicalLayout(SchemaModel):
    """Persisted layout of one UI mode, keyed by section name."""

    sections: dict[str, CanonicalSection] = Field(default_factory=dict)


class CanonicalModeLayouts(SchemaModel):
    """Persisted layouts of both UI modes."""

    classic: CanonicalLayout = Field(default_factory=CanonicalLayout)
    windows: CanonicalLayout = Field(default_factory=CanonicalLayout)


class CanonicalHeaderField(SchemaModel):
    """Header field entry required by the persistence validator."""

    id: str
    name: str
    label: str
    type: str
    required: bool = False
    read_only: bool = False
    is_posting: bool = False
    posting_role: str | None = None
    schema_version: int = CANONICAL_SCHEMA_VERSION


class CanonicalTableColumn(SchemaModel):
    """Persisted line-items column."""

    field_id: str
    width: str | None = None
    label_override: str | None = None


class CanonicalVoucherType(SchemaModel):
    """
    Persisted voucher type definition.

    Attributes:
        schema_version: Always 2; no migration logic exists here
        requires_approval: Derived from the ``require_approval`` toggle
        prevent_negative_cash: Derived from the ``prevent_negative_cash`` toggle
        allow_future_dates: Derived from the ``allow_future_date`` toggle
        mandatory_attachments: Derived from the ``mandatory_attachments`` toggle
        enabled_actions: Types of the enabled action buttons
    """

    id: str
    code: str
    module: str = "accounting"
    name: str
    schema_version: Literal[2] = CANONICAL_SCHEMA_VERSION
    prefix: str = ""
    next_number: int = 1
    enabled: bool = True
    is_system_default: bool = False
    in_use: bool = False

    layout: CanonicalModeLayouts = Field(default_factory=CanonicalModeLayouts)
    header_fields: list[CanonicalHeaderField] = Field(default_factory=list)

    is_multi_line: bool = True
    table_columns: list[CanonicalTableColumn] = Field(default_factory=list)
    table_style: str = "web"

    requires_approval: bool | None = None
    prevent_negative_cash: bool | None = None
    allow_future_dates: bool | None = None
    mandatory_attachments: bool | None = None

    enabled_actions: list[str] = Field(default_factory=list)
    base_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    company_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    updated_by: str | None = None
