"""
Formsmith Intermediate Representation (IR) types.

This package contains the Schema Model: field, rule and document
definitions, grid layouts, the voucher designer configuration and the
canonical persisted document. Types are pure data with no engine logic.

All types are re-exported from this package.
"""

# Base
from .base import SchemaModel

# Canonical document
from .canonical import (
    CANONICAL_SCHEMA_VERSION,
    CanonicalHeaderField,
    CanonicalLayout,
    CanonicalLayoutField,
    CanonicalModeLayouts,
    CanonicalSection,
    CanonicalTableColumn,
    CanonicalVoucherType,
)

# Documents
from .documents import (
    FormDefinition,
    SectionDefinition,
    TableDefinition,
    VoucherTypeDefinition,
)

# Fields
from .fields import (
    FieldDefinition,
    FieldType,
    FieldWidth,
    SelectOption,
)

# Layout
from .layout import (
    DEFAULT_SECTION_ORDER,
    GRID_COLUMNS,
    FieldLayout,
    SectionLayout,
    SectionType,
    UIMode,
    UIModeOverrides,
    VoucherLayoutConfig,
    default_sections,
)

# Rules
from .rules import (
    MatchType,
    Operator,
    RuleCondition,
    RuleDefinition,
    RuleEffect,
    RuleType,
)

# Values
from .values import (
    BoolValue,
    DateValue,
    FieldValue,
    ListValue,
    NumberValue,
    TextValue,
    wrap,
)

# Designer configuration
from .wizard import (
    ACTION_FIELD_PREFIX,
    AvailableField,
    AvailableFieldType,
    FieldCategory,
    TableColumnConfig,
    TableStyle,
    VoucherAction,
    VoucherActionType,
    VoucherFormConfig,
    VoucherRule,
)

__all__ = [
    # Base
    "SchemaModel",
    # Fields
    "FieldDefinition",
    "FieldType",
    "FieldWidth",
    "SelectOption",
    # Rules
    "MatchType",
    "Operator",
    "RuleCondition",
    "RuleDefinition",
    "RuleEffect",
    "RuleType",
    # Documents
    "FormDefinition",
    "SectionDefinition",
    "TableDefinition",
    "VoucherTypeDefinition",
    # Layout
    "GRID_COLUMNS",
    "DEFAULT_SECTION_ORDER",
    "FieldLayout",
    "SectionLayout",
    "SectionType",
    "UIMode",
    "UIModeOverrides",
    "VoucherLayoutConfig",
    "default_sections",
    # Designer configuration
    "ACTION_FIELD_PREFIX",
    "AvailableField",
    "AvailableFieldType",
    "FieldCategory",
    "TableColumnConfig",
    "TableStyle",
    "VoucherAction",
    "VoucherActionType",
    "VoucherFormConfig",
    "VoucherRule",
    # Canonical document
    "CANONICAL_SCHEMA_VERSION",
    "CanonicalHeaderField",
    "CanonicalLayout",
    "CanonicalLayoutField",
    "CanonicalModeLayouts",
    "CanonicalSection",
    "CanonicalTableColumn",
    "CanonicalVoucherType",
    # Values
    "BoolValue",
    "DateValue",
    "FieldValue",
    "ListValue",
    "NumberValue",
    "TextValue",
    "wrap",
]
