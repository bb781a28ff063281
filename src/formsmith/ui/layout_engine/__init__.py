"""
Formsmith Grid Layout Engine.

Assigns each selected field a (row, col, col_span) placement on a 12-column
grid, for the windows and classic UI modes, and applies interactive edits.

Key components:
- Field catalog and designer defaults (catalog.py)
- Auto-placement (placement.py)
- Key-indexed layout arena (arena.py)
- Edit commands and reducer (commands.py)
"""

from formsmith.ui.layout_engine.arena import LayoutArena, parse_section
from formsmith.ui.layout_engine.catalog import (
    AVAILABLE_FIELDS,
    DEFAULT_ACTIONS,
    DEFAULT_CATALOG,
    DEFAULT_RULES,
    SYSTEM_FIELDS,
    FieldCatalog,
    core_field_ids,
    default_actions,
    default_rules,
    is_field_allowed,
    new_form_config,
)
from formsmith.ui.layout_engine.commands import (
    LayoutCommand,
    MoveField,
    MoveFieldToSection,
    MoveSection,
    ReorderSection,
    ResizeField,
    UpdateFieldProperties,
    apply_command,
    apply_commands,
    apply_mode_command,
    clamp_span,
    resize_span_from_drag,
)
from formsmith.ui.layout_engine.placement import (
    auto_place_config,
    packed_row_widths,
    run_auto_placement,
    selection_from_config,
)

__all__ = [
    # Auto-placement
    "run_auto_placement",
    "auto_place_config",
    "selection_from_config",
    "packed_row_widths",
    # Catalog
    "FieldCatalog",
    "DEFAULT_CATALOG",
    "SYSTEM_FIELDS",
    "AVAILABLE_FIELDS",
    "DEFAULT_RULES",
    "DEFAULT_ACTIONS",
    "core_field_ids",
    "is_field_allowed",
    "default_rules",
    "default_actions",
    "new_form_config",
    # Edit commands
    "LayoutCommand",
    "MoveField",
    "ResizeField",
    "ReorderSection",
    "MoveSection",
    "UpdateFieldProperties",
    "MoveFieldToSection",
    "apply_command",
    "apply_commands",
    "apply_mode_command",
    "resize_span_from_drag",
    "clamp_span",
    # Arena
    "LayoutArena",
    "parse_section",
]
