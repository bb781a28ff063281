"""
Canonical mapper.

Converts between the designer's ``VoucherFormConfig`` (UI choices only) and
the persisted ``CanonicalVoucherType`` (schemaVersion 2). Rule toggles
become business flags, enabled actions become a type list and every layout
placement is annotated with its catalog category.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from formsmith.core.ir import (
    CANONICAL_SCHEMA_VERSION,
    AvailableFieldType,
    CanonicalHeaderField,
    CanonicalLayout,
    CanonicalLayoutField,
    CanonicalModeLayouts,
    CanonicalSection,
    CanonicalTableColumn,
    CanonicalVoucherType,
    FieldCategory,
    FieldLayout,
    SectionLayout,
    TableColumnConfig,
    UIMode,
    VoucherFormConfig,
    VoucherLayoutConfig,
)
from formsmith.ui.layout_engine.catalog import DEFAULT_ACTIONS, DEFAULT_CATALOG, DEFAULT_RULES, FieldCatalog

logger = logging.getLogger(__name__)

# Designer rule toggle id -> canonical business flag
RULE_FLAGS: dict[str, str] = {
    "require_approval": "requires_approval",
    "prevent_negative_cash": "prevent_negative_cash",
    "allow_future_date": "allow_future_dates",
    "mandatory_attachments": "mandatory_attachments",
}

# Catalog input type -> persisted field type
FIELD_TYPE_MAP: dict[AvailableFieldType, str] = {
    AvailableFieldType.NUMBER: "NUMBER",
    AvailableFieldType.DATE: "DATE",
    AvailableFieldType.CHECKBOX: "BOOLEAN",
    AvailableFieldType.SELECT: "SELECT",
    AvailableFieldType.ACCOUNT_SELECTOR: "REFERENCE",
}
DEFAULT_FIELD_TYPE = "STRING"


# =============================================================================
# UI -> canonical
# =============================================================================


def map_field_type(field_type: AvailableFieldType) -> str:
    return FIELD_TYPE_MAP.get(field_type, DEFAULT_FIELD_TYPE)


def _transform_layout(layout: VoucherLayoutConfig, catalog: FieldCatalog) -> CanonicalLayout:
    sections: dict[str, CanonicalSection] = {}
    for section_type, section in layout.sections.items():
        fields = []
        for placement in section.fields:
            entry = catalog.get(placement.field_id)
            fields.append(
                CanonicalLayoutField(
                    field_id=placement.field_id,
                    row=placement.row,
                    col=placement.col,
                    col_span=placement.col_span,
                    label=placement.label_override,
                    category=entry.category.value if entry and entry.category else None,
                    mandatory=entry.mandatory if entry else None,
                )
            )
        sections[section_type.value] = CanonicalSection(order=section.order, fields=fields)
    return CanonicalLayout(sections=sections)


def _collect_header_fields(config: VoucherFormConfig, catalog: FieldCatalog) -> list[CanonicalHeaderField]:
    """Header field entries of every placed catalog field; the classic layout is read first."""
    collected: dict[str, CanonicalHeaderField] = {}
    for mode in (UIMode.CLASSIC, UIMode.WINDOWS):
        for _, section in config.ui_mode_overrides.for_mode(mode).sections.items():
            for placement in section.fields:
                if placement.field_id in collected:
                    continue
                entry = catalog.get(placement.field_id)
                if entry is None:
                    continue
                collected[placement.field_id] = CanonicalHeaderField(
                    id=placement.field_id,
                    name=placement.field_id,
                    label=placement.label_override or entry.label,
                    type=map_field_type(entry.type),
                    required=entry.mandatory,
                    read_only=entry.type == AvailableFieldType.SYSTEM,
                )
    return list(collected.values())


def _shared_field_ids(config: VoucherFormConfig, catalog: FieldCatalog) -> list[str]:
    shared: dict[str, None] = {}
    for mode in (UIMode.CLASSIC, UIMode.WINDOWS):
        for field_id in config.ui_mode_overrides.for_mode(mode).field_ids():
            entry = catalog.get(field_id)
            if entry is not None and entry.category == FieldCategory.SHARED:
                shared[field_id] = None
    return list(shared)


def ui_to_canonical(
    config: VoucherFormConfig,
    company_id: str,
    user_id: str,
    *,
    is_edit: bool = False,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    now: datetime | None = None,
) -> CanonicalVoucherType:
    """
    Build the persisted voucher type from a designer configuration.

    Args:
        config: Designer output
        company_id: Owning company
        user_id: User saving the form
        is_edit: When False, creation stamps are set as well
        catalog: Field catalog supplying labels, types and categories
        now: Timestamp to stamp (defaults to the current UTC time)

    Returns:
        Canonical voucher type with ``schema_version == 2``
    """
    now = now or datetime.now(timezone.utc)
    flags = {flag: config.rule_enabled(rule_id) for rule_id, flag in RULE_FLAGS.items()}

    canonical = CanonicalVoucherType(
        id=config.id,
        code=config.id,
        name=config.name,
        schema_version=CANONICAL_SCHEMA_VERSION,
        prefix=config.prefix,
        next_number=config.start_number,
        enabled=config.enabled if config.enabled is not None else True,
        is_system_default=bool(config.is_system_default),
        in_use=bool(config.in_use),
        layout=CanonicalModeLayouts(
            classic=_transform_layout(config.ui_mode_overrides.classic, catalog),
            windows=_transform_layout(config.ui_mode_overrides.windows, catalog),
        ),
        header_fields=_collect_header_fields(config, catalog),
        is_multi_line=config.is_multi_line,
        table_columns=[
            CanonicalTableColumn(field_id=c.id, width=c.width, label_override=c.label_override)
            for c in config.table_columns
        ],
        table_style=config.table_style.value,
        enabled_actions=[a.type.value for a in config.enabled_actions()],
        base_type=config.base_type or config.id,
        metadata={**config.metadata, "sharedFields": _shared_field_ids(config, catalog)},
        company_id=company_id,
        updated_at=now,
        updated_by=user_id,
        **flags,
    )
    if not is_edit:
        canonical.created_at = now
        canonical.created_by = user_id

    logger.debug(
        "Mapped form %s to canonical: %d header field(s), actions=%s",
        config.id,
        len(canonical.header_fields),
        canonical.enabled_actions,
    )
    return canonical


# =============================================================================
# Canonical -> UI
# =============================================================================


def _rule_enabled(canonical: CanonicalVoucherType, rule_id: str) -> bool:
    value = getattr(canonical, RULE_FLAGS[rule_id])
    if rule_id == "allow_future_date":
        return True if value is None else value
    return bool(value)


def _transform_canonical_layout(layout: CanonicalLayout) -> VoucherLayoutConfig:
    sections = {
        name: SectionLayout(
            order=section.order,
            fields=[
                FieldLayout(
                    field_id=f.field_id,
                    row=f.row,
                    col=f.col,
                    col_span=f.col_span,
                    label_override=f.label,
                )
                for f in section.fields
            ],
        )
        for name, section in layout.sections.items()
    }
    # Unknown section names are dropped and missing ones materialised by the model
    return VoucherLayoutConfig(sections=sections)


def canonical_to_ui(canonical: CanonicalVoucherType) -> VoucherFormConfig:
    """
    Load a persisted voucher type back into the designer.

    Rule toggles are re-derived from the business flags
    (``allow_future_dates`` defaults to enabled) and every known action is
    listed, enabled when its type appears in ``enabled_actions``.
    """
    rules = [r.model_copy(update={"enabled": _rule_enabled(canonical, r.id)}) for r in DEFAULT_RULES]
    enabled = set(canonical.enabled_actions)
    actions = [a.model_copy(update={"enabled": a.type.value in enabled}) for a in DEFAULT_ACTIONS]

    return VoucherFormConfig(
        id=canonical.id,
        name=canonical.name,
        code=canonical.code,
        prefix=canonical.prefix,
        module=canonical.module,
        start_number=canonical.next_number,
        rules=rules,
        is_multi_line=canonical.is_multi_line,
        table_columns=[
            TableColumnConfig(id=c.field_id, width=c.width, label_override=c.label_override or "")
            for c in canonical.table_columns
        ],
        table_style=canonical.table_style,
        actions=actions,
        ui_mode_overrides={
            "classic": _transform_canonical_layout(canonical.layout.classic),
            "windows": _transform_canonical_layout(canonical.layout.windows),
        },
        enabled=canonical.enabled,
        is_system_default=canonical.is_system_default,
        is_locked=canonical.is_system_default,
        in_use=canonical.in_use,
        base_type=canonical.base_type or canonical.code or canonical.id,
        metadata=dict(canonical.metadata),
    )


# =============================================================================
# Validation
# =============================================================================


def validate_ui_config(config: VoucherFormConfig) -> list[str]:
    """
    Check a designer configuration before mapping it.

    Returns:
        Error messages; empty when the configuration can be saved
    """
    errors: list[str] = []
    if not config.id.strip():
        errors.append("Form ID is required")
    if not config.name.strip():
        errors.append("Form name is required")
    if not config.prefix.strip():
        errors.append("Prefix is required")
    if config.start_number < 1:
        errors.append("Start number must be at least 1")
    return errors
