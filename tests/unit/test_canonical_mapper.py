"""Tests for the canonical mapper."""

from datetime import datetime, timezone

import pytest

from formsmith.canonical import canonical_to_ui, map_field_type, ui_to_canonical, validate_ui_config
from formsmith.core.ir import (
    AvailableFieldType,
    CanonicalVoucherType,
    SectionType,
    UIMode,
    VoucherFormConfig,
)
from formsmith.ui.layout_engine import ResizeField, apply_mode_command, auto_place_config, new_form_config

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def config() -> VoucherFormConfig:
    return auto_place_config(new_form_config("pv", "Payment Voucher"), ["date", "payee", "notes", "lineItems"])


class TestUiToCanonical:
    """Tests for building the persisted document."""

    def test_identity_and_version(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        assert canonical.schema_version == 2
        assert canonical.code == canonical.id == "pv"
        assert canonical.next_number == 1000
        assert canonical.prefix == "V-"
        assert canonical.enabled is True
        assert canonical.base_type == "pv"
        assert canonical.company_id == "c1"

    def test_rule_flags(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        assert canonical.requires_approval is True
        assert canonical.prevent_negative_cash is False
        assert canonical.allow_future_dates is True
        assert canonical.mandatory_attachments is False

    def test_missing_rule_is_disabled(self, config: VoucherFormConfig) -> None:
        bare = config.model_copy(update={"rules": []})
        canonical = ui_to_canonical(bare, "c1", "u1", now=NOW)
        assert canonical.requires_approval is False
        assert canonical.allow_future_dates is False

    def test_enabled_actions(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        assert canonical.enabled_actions == ["print", "email", "download_pdf", "import_csv"]

    def test_create_stamps(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        assert canonical.created_at == canonical.updated_at == NOW
        assert canonical.created_by == canonical.updated_by == "u1"

    def test_edit_stamps(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u2", is_edit=True, now=NOW)
        assert canonical.created_at is None
        assert canonical.created_by is None
        assert canonical.updated_by == "u2"

    def test_layout_fields_carry_category(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        header = {f.field_id: f for f in canonical.layout.windows.sections["HEADER"].fields}
        assert header["voucherNumber"].category == "systemMetadata"
        assert header["date"].category == "core"
        assert header["date"].mandatory is True
        assert header["payee"].category == "shared"
        actions = canonical.layout.windows.sections["ACTIONS"].fields
        assert actions[0].field_id == "action_print"
        assert actions[0].category is None

    def test_header_fields(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        by_id = {f.id: f for f in canonical.header_fields}
        assert by_id["date"].type == "DATE"
        assert by_id["date"].required is True
        assert by_id["payee"].label == "Payee / Customer"
        assert by_id["voucherNumber"].read_only is True
        assert by_id["lineItems"].type == "STRING"
        assert "action_print" not in by_id
        assert len(by_id) == len(canonical.header_fields)

    def test_shared_fields_metadata(self, config: VoucherFormConfig) -> None:
        canonical = ui_to_canonical(config, "c1", "u1", now=NOW)
        assert canonical.metadata["sharedFields"] == ["payee", "notes"]

    def test_wire_shape(self, config: VoucherFormConfig) -> None:
        wire = ui_to_canonical(config, "c1", "u1", now=NOW).to_wire()
        assert wire["schemaVersion"] == 2
        assert wire["nextNumber"] == 1000
        assert "colSpan" in wire["layout"]["windows"]["sections"]["HEADER"]["fields"][0]
        assert wire["createdAt"].startswith("2024-05-01T09:30:00")

    @pytest.mark.parametrize(
        ("field_type", "expected"),
        [
            (AvailableFieldType.NUMBER, "NUMBER"),
            (AvailableFieldType.CHECKBOX, "BOOLEAN"),
            (AvailableFieldType.ACCOUNT_SELECTOR, "REFERENCE"),
            (AvailableFieldType.TEXTAREA, "STRING"),
            (AvailableFieldType.SYSTEM, "STRING"),
        ],
    )
    def test_field_type_map(self, field_type: AvailableFieldType, expected: str) -> None:
        assert map_field_type(field_type) == expected


class TestCanonicalToUi:
    """Tests for loading a persisted document back into the designer."""

    def test_round_trip_keeps_designer_choices(self, config: VoucherFormConfig) -> None:
        edited = config.model_copy(
            update={
                "ui_mode_overrides": apply_mode_command(
                    config.ui_mode_overrides, UIMode.WINDOWS, ResizeField("HEADER", "date", 6)
                )
            }
        )
        restored = canonical_to_ui(ui_to_canonical(edited, "c1", "u1", now=NOW))
        assert restored.ui_mode_overrides == edited.ui_mode_overrides
        assert restored.rules == edited.rules
        assert restored.actions == edited.actions
        assert restored.table_columns == edited.table_columns
        assert restored.start_number == edited.start_number

    def test_missing_flags(self) -> None:
        canonical = CanonicalVoucherType(id="x", code="x", name="X")
        restored = canonical_to_ui(canonical)
        enabled = {r.id: r.enabled for r in restored.rules}
        assert enabled == {
            "require_approval": False,
            "prevent_negative_cash": False,
            "allow_future_date": True,
            "mandatory_attachments": False,
        }
        assert not any(a.enabled for a in restored.actions)
        assert restored.base_type == "x"

    def test_system_default_is_locked(self) -> None:
        canonical = CanonicalVoucherType(id="x", code="x", name="X", is_system_default=True)
        restored = canonical_to_ui(canonical)
        assert restored.is_locked is True
        assert restored.is_read_only

    def test_sections_are_materialised(self) -> None:
        canonical = CanonicalVoucherType.model_validate(
            {
                "id": "x",
                "code": "x",
                "name": "X",
                "layout": {
                    "windows": {
                        "sections": {
                            "HEADER": {"order": 0, "fields": [{"fieldId": "date", "colSpan": 4, "label": "When"}]},
                            "SIDEBAR": {"order": 9},
                        }
                    }
                },
            }
        )
        windows = canonical_to_ui(canonical).ui_mode_overrides.windows
        assert set(windows.sections) == set(SectionType)
        placement = windows.section("HEADER").find("date")
        assert placement is not None
        assert placement.label_override == "When"
        assert placement.col_span == 4

    def test_column_label_defaults_to_empty(self) -> None:
        canonical = CanonicalVoucherType.model_validate(
            {"id": "x", "code": "x", "name": "X", "tableColumns": [{"fieldId": "debit"}]}
        )
        [column] = canonical_to_ui(canonical).table_columns
        assert column.id == "debit"
        assert column.label_override == ""


class TestValidateUiConfig:
    """Tests for pre-save checks."""

    def test_valid(self, config: VoucherFormConfig) -> None:
        assert validate_ui_config(config) == []

    def test_all_problems_reported(self) -> None:
        bad = VoucherFormConfig(id=" ", name="", prefix="", start_number=0)
        assert validate_ui_config(bad) == [
            "Form ID is required",
            "Form name is required",
            "Prefix is required",
            "Start number must be at least 1",
        ]
