"""
Voucher designer configuration types (UI-only).

These types carry the designer's choices: which fields are offered, which
rule toggles and actions are enabled, and the two-mode layout. They hold no
accounting logic; the canonical mapper turns them into a persisted shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .base import SchemaModel
from .layout import SectionType, UIModeOverrides


class FieldCategory(str, Enum):
    """Catalog category of an offered field."""

    CORE = "core"  # Mandatory, always placed
    SHARED = "shared"  # Optional, system-defined
    SYSTEM_METADATA = "systemMetadata"  # Auto-managed


class AvailableFieldType(str, Enum):
    """Input types the designer catalog knows about."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    TABLE = "table"
    TEXTAREA = "textarea"
    SYSTEM = "system"
    ACCOUNT_SELECTOR = "account-selector"
    CHECKBOX = "checkbox"


class AvailableField(SchemaModel):
    """
    A field the designer can place.

    Attributes:
        id: Field id used in layouts
        label: Default label
        type: Catalog input type
        section_hint: Section the auto-placement puts the field in
        category: core, shared or systemMetadata
        mandatory: Always selected when allowed for the base type
        supported_types: Only offered for these voucher base types
        excluded_types: Never offered for these voucher base types
    """

    id: str
    label: str
    type: AvailableFieldType = AvailableFieldType.TEXT
    section_hint: SectionType = SectionType.HEADER
    category: FieldCategory | None = None
    mandatory: bool = False
    auto_managed: bool = False
    supported_types: list[str] | None = None
    excluded_types: list[str] | None = None

    def is_allowed_for(self, base_type: str | None) -> bool:
        """Whether the field is offered for a voucher base type."""
        if not base_type:
            return True
        if self.supported_types and base_type not in self.supported_types:
            return False
        if self.excluded_types and base_type in self.excluded_types:
            return False
        return True

    @property
    def is_core(self) -> bool:
        """Core fields are always part of the selection."""
        return self.category == FieldCategory.CORE or self.mandatory


class VoucherRule(SchemaModel):
    """A business-rule toggle shown in the designer."""

    id: str
    label: str
    enabled: bool = False
    description: str | None = None


class VoucherActionType(str, Enum):
    """Action buttons a voucher form can offer."""

    PRINT = "print"
    EMAIL = "email"
    DOWNLOAD_PDF = "download_pdf"
    DOWNLOAD_EXCEL = "download_excel"
    IMPORT_CSV = "import_csv"
    EXPORT_JSON = "export_json"


ACTION_FIELD_PREFIX = "action_"


class VoucherAction(SchemaModel):
    """An action button and whether it is enabled."""

    type: VoucherActionType
    label: str
    enabled: bool = False

    @property
    def field_id(self) -> str:
        """Layout field id of the action button."""
        return f"{ACTION_FIELD_PREFIX}{self.type.value}"


class TableColumnConfig(SchemaModel):
    """Designer choice for one line-items column."""

    id: str
    label_override: str | None = None
    order: int | None = None
    width: str | None = None  # CSS width, e.g. "100px", "20%", "auto"


class TableStyle(str, Enum):
    """Line-items table presentation."""

    WEB = "web"
    CLASSIC = "classic"


class VoucherFormConfig(SchemaModel):
    """
    Complete designer output for one voucher form.

    Contains UI choices only; ``ui_to_canonical`` produces the persisted
    document.
    """

    id: str
    name: str
    code: str | None = None
    prefix: str = ""
    module: str | None = None
    start_number: int = 1
    rules: list[VoucherRule] = Field(default_factory=list)
    is_multi_line: bool = True
    default_currency: str | None = None
    table_columns: list[TableColumnConfig] = Field(default_factory=list)
    table_style: TableStyle = TableStyle.WEB
    actions: list[VoucherAction] = Field(default_factory=list)
    ui_mode_overrides: UIModeOverrides = Field(default_factory=UIModeOverrides)

    enabled: bool | None = None
    is_system_default: bool | None = None
    is_locked: bool | None = None
    in_use: bool | None = None
    base_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("table_columns", mode="before")
    @classmethod
    def expand_column_ids(cls, v: Any) -> Any:
        """Accept bare column ids alongside column objects."""
        if isinstance(v, list):
            return [{"id": c} if isinstance(c, str) else c for c in v]
        return v

    @property
    def is_read_only(self) -> bool:
        """System defaults and locked forms cannot be edited."""
        return bool(self.is_locked or self.is_system_default)

    def rule_enabled(self, rule_id: str) -> bool:
        """Whether a rule toggle is present and enabled."""
        return any(r.id == rule_id and r.enabled for r in self.rules)

    def enabled_actions(self) -> list[VoucherAction]:
        """Actions switched on, in declaration order."""
        return [a for a in self.actions if a.enabled]
