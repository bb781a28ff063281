"""
Layout edit commands.

Every interactive edit of the visual designer is a command object applied by
a single reducer, ``apply_command``. The reducer returns a new layout and
leaves its input untouched, so each edit can be tested without a browser.

Commands whose field cannot be found leave the layout unchanged. Commands
naming an unknown section, or coordinates outside the grid, raise
``LayoutError``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from formsmith.core.errors import make_layout_error
from formsmith.core.ir import GRID_COLUMNS, SectionType, UIMode, UIModeOverrides, VoucherLayoutConfig
from formsmith.core.manifest import LayoutSettings

from .arena import LayoutArena, parse_section

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class MoveField:
    """Drop a field at a grid cell, possibly in another section."""

    field_id: str
    source_section: SectionType | str
    target_section: SectionType | str
    target_row: int
    target_col: int


@dataclass(frozen=True)
class ResizeField:
    """Set a field's column span; the span is clamped to the grid."""

    section: SectionType | str
    field_id: str
    new_span: int


@dataclass(frozen=True)
class ReorderSection:
    """Swap the rendering order of two sections."""

    a: SectionType | str
    b: SectionType | str


@dataclass(frozen=True)
class MoveSection:
    """Give a section a new order, swapping with the section that holds it."""

    section: SectionType | str
    new_order: int


@dataclass(frozen=True)
class UpdateFieldProperties:
    """
    Edit a placement from the properties panel.

    ``None`` leaves a property unchanged; an empty ``label_override`` clears it.
    """

    section: SectionType | str
    field_id: str
    label_override: str | None = None
    col_span: int | None = None


@dataclass(frozen=True)
class MoveFieldToSection:
    """Move a field to the start of a new row at the end of another section."""

    field_id: str
    source_section: SectionType | str
    target_section: SectionType | str


LayoutCommand = MoveField | ResizeField | ReorderSection | MoveSection | UpdateFieldProperties | MoveFieldToSection


# =============================================================================
# Helpers
# =============================================================================


def clamp_span(span: int) -> int:
    """Clamp a column span to ``[1, 12]``."""
    return max(1, min(GRID_COLUMNS, span))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def resize_span_from_drag(
    start_span: int,
    delta_px: float,
    container_width: float | None = None,
    settings: LayoutSettings | None = None,
) -> int:
    """
    Column span after dragging a field's right edge by ``delta_px`` pixels.

    Examples:
        >>> resize_span_from_drag(4, 250, 1000)
        7
        >>> resize_span_from_drag(2, -500, 1000)
        1
    """
    settings = settings or LayoutSettings()
    width = container_width if container_width and container_width > 0 else settings.default_container_width
    column_width = width / settings.grid_columns
    return clamp_span(start_span + round_half_up(delta_px / column_width))


def _check_cell(row: int, col: int, field_id: str) -> None:
    if row < 0 or not 0 <= col < GRID_COLUMNS:
        raise make_layout_error(f"Cell ({row}, {col}) is outside the grid", field=field_id)


# =============================================================================
# Reducer
# =============================================================================


def _apply_to_arena(arena: LayoutArena, command: LayoutCommand) -> bool:
    """Mutate the arena; returns False when the command did nothing."""
    if isinstance(command, MoveField):
        source = parse_section(command.source_section)
        target = parse_section(command.target_section)
        _check_cell(command.target_row, command.target_col, command.field_id)
        key = arena.find(source, command.field_id)
        if key is None:
            logger.debug("MoveField: %s not found in %s", command.field_id, source.value)
            return False
        arena.detach(source, key)
        arena.update(key, row=command.target_row, col=command.target_col)
        arena.attach(target, key)
        return True

    if isinstance(command, ResizeField):
        section = parse_section(command.section)
        key = arena.find(section, command.field_id)
        if key is None:
            logger.debug("ResizeField: %s not found in %s", command.field_id, section.value)
            return False
        arena.update(key, col_span=clamp_span(command.new_span))
        return True

    if isinstance(command, ReorderSection):
        a, b = parse_section(command.a), parse_section(command.b)
        arena.swap_orders(a, b)
        return True

    if isinstance(command, MoveSection):
        section = parse_section(command.section)
        holder = arena.section_with_order(command.new_order)
        if holder is None:
            logger.debug("MoveSection: no section holds order %d", command.new_order)
            return False
        arena.swap_orders(section, holder)
        return True

    if isinstance(command, UpdateFieldProperties):
        section = parse_section(command.section)
        key = arena.find(section, command.field_id)
        if key is None:
            logger.debug("UpdateFieldProperties: %s not found in %s", command.field_id, section.value)
            return False
        if command.label_override is not None:
            arena.update(key, label_override=command.label_override or None)
        if command.col_span is not None:
            arena.update(key, col_span=clamp_span(command.col_span))
        return True

    if isinstance(command, MoveFieldToSection):
        source = parse_section(command.source_section)
        target = parse_section(command.target_section)
        key = arena.find(source, command.field_id)
        if key is None:
            logger.debug("MoveFieldToSection: %s not found in %s", command.field_id, source.value)
            return False
        arena.detach(source, key)
        arena.update(key, row=arena.section_length(target), col=0)
        arena.attach(target, key)
        return True

    raise make_layout_error(f"Unsupported layout command: {type(command).__name__}")


def apply_command(config: VoucherLayoutConfig, command: LayoutCommand) -> VoucherLayoutConfig:
    """
    Apply one edit command.

    Args:
        config: Layout of one UI mode (not modified)
        command: Edit to apply

    Returns:
        The edited layout; ``config`` itself when the command changed nothing

    Raises:
        LayoutError: On an unknown section, an off-grid target cell or an
            unsupported command type
    """
    arena = LayoutArena.from_config(config)
    if not _apply_to_arena(arena, command):
        return config
    return arena.to_config()


def apply_commands(config: VoucherLayoutConfig, commands: Iterable[LayoutCommand]) -> VoucherLayoutConfig:
    """Apply a sequence of commands in order."""
    for command in commands:
        config = apply_command(config, command)
    return config


def apply_mode_command(overrides: UIModeOverrides, mode: UIMode | str, command: LayoutCommand) -> UIModeOverrides:
    """Apply a command to one UI mode; the other mode is carried over unchanged."""
    layout = apply_command(overrides.for_mode(mode), command)
    return overrides.with_mode(mode, layout)
