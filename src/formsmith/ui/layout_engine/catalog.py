"""
Field catalog for the voucher designer.

The catalog lists the fields a designer can place (system fields are always
placed; available fields are selected per form) together with the default
rule toggles and action buttons of a new voucher form.
"""

from dataclasses import dataclass

from formsmith.core.ir import (
    AvailableField,
    AvailableFieldType,
    FieldCategory,
    SectionType,
    TableColumnConfig,
    VoucherAction,
    VoucherActionType,
    VoucherFormConfig,
    VoucherRule,
)


def _system(field_id: str, label: str) -> AvailableField:
    return AvailableField(
        id=field_id,
        label=label,
        type=AvailableFieldType.SYSTEM,
        section_hint=SectionType.HEADER,
        category=FieldCategory.SYSTEM_METADATA,
        auto_managed=True,
    )


SYSTEM_FIELDS: tuple[AvailableField, ...] = (
    _system("voucherNumber", "Voucher #"),
    _system("status", "Status"),
    _system("createdBy", "Created By"),
    _system("createdAt", "Created At"),
)

_HEADER = SectionType.HEADER
_CORE = FieldCategory.CORE
_SHARED = FieldCategory.SHARED

AVAILABLE_FIELDS: tuple[AvailableField, ...] = (
    AvailableField(id="date", label="Voucher Date", type="date", section_hint=_HEADER, category=_CORE, mandatory=True),
    AvailableField(id="payee", label="Payee / Customer", type="text", section_hint=_HEADER, category=_SHARED),
    AvailableField(id="reference", label="Reference Doc", type="text", section_hint=_HEADER, category=_SHARED),
    AvailableField(id="description", label="Description", type="text", section_hint=_HEADER, category=_CORE),
    AvailableField(
        id="currency", label="Currency", type="select", section_hint=_HEADER, category=_CORE, mandatory=True
    ),
    AvailableField(
        id="exchangeRate",
        label="Exchange Rate",
        type="number",
        section_hint=_HEADER,
        category=_SHARED,
        supported_types=["payment_voucher", "receipt_voucher", "transfer_voucher"],
    ),
    AvailableField(
        id="paymentMethod",
        label="Payment Method",
        type="select",
        section_hint=_HEADER,
        category=_SHARED,
        supported_types=["payment_voucher"],
    ),
    AvailableField(id="branch", label="Branch / Dept", type="select", section_hint=_HEADER, category=_SHARED),
    AvailableField(
        id="currencyExchange", label="Exchange Rate (Smart)", type="number", section_hint=_HEADER, category=_SHARED
    ),
    AvailableField(
        id="account", label="Account (Header)", type="account-selector", section_hint=_HEADER, category=_SHARED
    ),
    AvailableField(
        id="lineItems",
        label="Line Items Table",
        type="table",
        section_hint=SectionType.BODY,
        category=_CORE,
        mandatory=True,
    ),
    AvailableField(id="notes", label="Internal Notes", type="textarea", section_hint=SectionType.EXTRA, category=_SHARED),
    AvailableField(id="attachments", label="Attachments", type="text", section_hint=SectionType.EXTRA, category=_SHARED),
)


@dataclass(frozen=True)
class FieldCatalog:
    """System fields plus the fields a designer may select."""

    system_fields: tuple[AvailableField, ...] = SYSTEM_FIELDS
    available_fields: tuple[AvailableField, ...] = AVAILABLE_FIELDS

    def get(self, field_id: str) -> AvailableField | None:
        """Catalog entry for ``field_id``, system fields first."""
        for field in (*self.system_fields, *self.available_fields):
            if field.id == field_id:
                return field
        return None

    def is_system(self, field_id: str) -> bool:
        return any(f.id == field_id for f in self.system_fields)


DEFAULT_CATALOG = FieldCatalog()


def core_field_ids(catalog: FieldCatalog = DEFAULT_CATALOG, base_type: str | None = None) -> list[str]:
    """
    Ids of the fields always selected for a voucher base type.

    Examples:
        >>> core_field_ids()
        ['date', 'description', 'currency', 'lineItems']
    """
    return [f.id for f in catalog.available_fields if f.is_core and f.is_allowed_for(base_type)]


def is_field_allowed(
    field_id: str, base_type: str | None = None, catalog: FieldCatalog = DEFAULT_CATALOG
) -> bool:
    """Whether a field may be selected; ids outside the available list are allowed."""
    for field in catalog.available_fields:
        if field.id == field_id:
            return field.is_allowed_for(base_type)
    return True


# =============================================================================
# Defaults for a new voucher form
# =============================================================================

DEFAULT_RULES: tuple[VoucherRule, ...] = (
    VoucherRule(
        id="require_approval",
        label="Require Approval Workflow",
        enabled=True,
        description="Vouchers must be approved by a supervisor.",
    ),
    VoucherRule(
        id="prevent_negative_cash",
        label="Prevent Negative Cash",
        enabled=False,
        description="Block saving if cash accounts go negative.",
    ),
    VoucherRule(
        id="allow_future_date",
        label="Allow Future Posting Dates",
        enabled=True,
        description="Users can select dates in the future.",
    ),
    VoucherRule(
        id="mandatory_attachments",
        label="Mandatory Attachments",
        enabled=False,
        description="Require at least one file upload.",
    ),
)

DEFAULT_ACTIONS: tuple[VoucherAction, ...] = (
    VoucherAction(type=VoucherActionType.PRINT, label="Print Voucher", enabled=True),
    VoucherAction(type=VoucherActionType.EMAIL, label="Email PDF", enabled=True),
    VoucherAction(type=VoucherActionType.DOWNLOAD_PDF, label="Download PDF", enabled=True),
    VoucherAction(type=VoucherActionType.DOWNLOAD_EXCEL, label="Download Excel", enabled=False),
    VoucherAction(type=VoucherActionType.IMPORT_CSV, label="Import Lines (CSV)", enabled=True),
    VoucherAction(type=VoucherActionType.EXPORT_JSON, label="Export JSON", enabled=False),
)

DEFAULT_TABLE_COLUMNS: tuple[str, ...] = ("account", "debit", "credit", "notes")


def default_rules() -> list[VoucherRule]:
    """Fresh copies of the default rule toggles."""
    return [r.model_copy() for r in DEFAULT_RULES]


def default_actions() -> list[VoucherAction]:
    """Fresh copies of the default action buttons."""
    return [a.model_copy() for a in DEFAULT_ACTIONS]


def new_form_config(form_id: str = "new_voucher_form", name: str = "New Voucher Form") -> VoucherFormConfig:
    """Starting configuration of the designer for a blank form."""
    return VoucherFormConfig(
        id=form_id,
        name=name,
        prefix="V-",
        start_number=1000,
        rules=default_rules(),
        table_columns=[
            TableColumnConfig(id=column_id, label_override=column_id.capitalize())
            for column_id in DEFAULT_TABLE_COLUMNS
        ],
        actions=default_actions(),
    )
