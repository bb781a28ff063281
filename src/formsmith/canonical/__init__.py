"""Mapping between designer configurations and persisted canonical voucher types."""

from formsmith.canonical.mapper import (
    FIELD_TYPE_MAP,
    RULE_FLAGS,
    canonical_to_ui,
    map_field_type,
    ui_to_canonical,
    validate_ui_config,
)

__all__ = [
    "ui_to_canonical",
    "canonical_to_ui",
    "validate_ui_config",
    "map_field_type",
    "RULE_FLAGS",
    "FIELD_TYPE_MAP",
]
