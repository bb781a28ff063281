"""
Auto-placement algorithm.

Turns a field selection plus the enabled actions into concrete grid
placements for both UI modes. Placement is a full recompute: previous
layouts are discarded.

Algorithm per mode:
1. System fields first (windows: packed side by side; classic: one per row)
2. HEADER fields (windows: column cursor, wrap at the grid edge; classic:
   one per row after the system rows)
3. BODY fields, one full-width block per row starting at row 0
4. EXTRA fields, one full-width row each in selection order
5. Enabled actions (windows: up to four per row sharing the grid evenly;
   classic: one per row)
"""

import logging
from collections.abc import Iterable, Sequence

from formsmith.core.ir import (
    ACTION_FIELD_PREFIX,
    DEFAULT_SECTION_ORDER,
    FieldLayout,
    SectionLayout,
    SectionType,
    UIMode,
    UIModeOverrides,
    VoucherAction,
    VoucherFormConfig,
    VoucherLayoutConfig,
)
from formsmith.core.manifest import LayoutSettings

from .catalog import DEFAULT_CATALOG, FieldCatalog, core_field_ids, is_field_allowed

logger = logging.getLogger(__name__)


# =============================================================================
# Packing primitives
# =============================================================================


def pack_rows(field_ids: Sequence[str], span: int, per_row: int, start_row: int = 0) -> list[FieldLayout]:
    """
    Pack fields left to right, ``per_row`` to a row, each ``span`` wide.

    Examples:
        >>> [(p.row, p.col) for p in pack_rows(["a", "b", "c"], span=6, per_row=2)]
        [(0, 0), (0, 6), (1, 0)]
    """
    return [
        FieldLayout(field_id=field_id, row=start_row + i // per_row, col=(i % per_row) * span, col_span=span)
        for i, field_id in enumerate(field_ids)
    ]


def stack_rows(field_ids: Sequence[str], span: int, start_row: int = 0) -> list[FieldLayout]:
    """One field per row, each starting at column 0."""
    return [FieldLayout(field_id=field_id, row=start_row + i, col=0, col_span=span) for i, field_id in enumerate(field_ids)]


def flow_rows(field_ids: Sequence[str], span: int, grid_columns: int, start_row: int = 0) -> list[FieldLayout]:
    """
    Place fields with a column cursor, wrapping to a new row when the next
    field would cross the grid edge.
    """
    placements: list[FieldLayout] = []
    row, col = start_row, 0
    for field_id in field_ids:
        if col + span > grid_columns:
            row += 1
            col = 0
        placements.append(FieldLayout(field_id=field_id, row=row, col=col, col_span=span))
        col += span
    return placements


def next_row(placements: Iterable[FieldLayout]) -> int:
    """First row below every placement."""
    return max((p.row + 1 for p in placements), default=0)


def packed_row_widths(section: SectionLayout) -> dict[int, int]:
    """Sum of ``col_span`` per row; auto-placement keeps every value within the grid."""
    widths: dict[int, int] = {}
    for placement in section.fields:
        widths[placement.row] = widths.get(placement.row, 0) + placement.col_span
    return widths


# =============================================================================
# Selection
# =============================================================================


def _partition_selection(
    selected_field_ids: Iterable[str], catalog: FieldCatalog, base_type: str | None
) -> dict[SectionType, list[str]]:
    by_section: dict[SectionType, list[str]] = {section: [] for section in SectionType}
    seen: set[str] = set()
    for field_id in selected_field_ids:
        if field_id in seen:
            continue
        seen.add(field_id)
        if catalog.is_system(field_id):
            continue  # Always placed
        entry = catalog.get(field_id)
        if entry is None:
            logger.debug("Skipping unknown field %s during auto-placement", field_id)
            continue
        if not is_field_allowed(field_id, base_type, catalog):
            logger.debug("Skipping field %s: not offered for base type %s", field_id, base_type)
            continue
        by_section[entry.section_hint].append(field_id)
    return by_section


def selection_from_config(config: VoucherFormConfig, catalog: FieldCatalog = DEFAULT_CATALOG) -> list[str]:
    """
    Recover the field selection of an existing form.

    Collects the placed, allowed, non-action, non-system field ids of both
    modes and adds the core fields of the form's base type.
    """
    selected: dict[str, None] = {}
    for mode in UIMode:
        for field_id in config.ui_mode_overrides.for_mode(mode).field_ids():
            if field_id.startswith(ACTION_FIELD_PREFIX) or catalog.is_system(field_id):
                continue
            if is_field_allowed(field_id, config.base_type, catalog):
                selected[field_id] = None
    for field_id in core_field_ids(catalog, config.base_type):
        selected[field_id] = None
    return list(selected)


# =============================================================================
# Placement
# =============================================================================


def place_mode(
    mode: UIMode,
    by_section: dict[SectionType, list[str]],
    action_ids: Sequence[str],
    system_ids: Sequence[str],
    settings: LayoutSettings,
) -> VoucherLayoutConfig:
    """Compute the layout of one UI mode from an already partitioned selection."""
    grid = settings.grid_columns

    if mode == UIMode.WINDOWS:
        per_row = max(1, grid // settings.windows_system_span)
        header = pack_rows(system_ids, settings.windows_system_span, per_row)
        header += flow_rows(by_section[SectionType.HEADER], settings.windows_field_span, grid, next_row(header))
    else:
        header = stack_rows(system_ids, grid)
        header += stack_rows(by_section[SectionType.HEADER], grid, next_row(header))

    body = stack_rows(by_section[SectionType.BODY], grid)
    extra = stack_rows(by_section[SectionType.EXTRA], grid)

    if mode == UIMode.WINDOWS and action_ids:
        per_row = min(settings.max_actions_per_row, len(action_ids))
        actions = pack_rows(action_ids, grid // per_row, per_row)
    else:
        actions = stack_rows(action_ids, grid)

    placed = {
        SectionType.HEADER: header,
        SectionType.BODY: body,
        SectionType.EXTRA: extra,
        SectionType.ACTIONS: actions,
    }
    return VoucherLayoutConfig(
        sections={
            section: SectionLayout(order=DEFAULT_SECTION_ORDER[section], fields=placed[section])
            for section in SectionType
        }
    )


def run_auto_placement(
    selected_field_ids: Iterable[str],
    actions: Iterable[VoucherAction],
    *,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    settings: LayoutSettings | None = None,
    base_type: str | None = None,
) -> UIModeOverrides:
    """
    Compute fresh layouts for both UI modes.

    Args:
        selected_field_ids: Selected catalog field ids, in selection order;
            duplicates, system ids and unknown ids are ignored
        actions: Action buttons; only enabled ones are placed
        catalog: Field catalog supplying section hints and system fields
        settings: Grid settings (defaults from ``LayoutSettings``)
        base_type: Voucher base type used to filter the selection

    Returns:
        Layouts of the classic and windows modes

    Examples:
        >>> overrides = run_auto_placement(["date"], [])
        >>> [(p.field_id, p.row, p.col) for p in overrides.windows.section("HEADER").fields][-1]
        ('date', 1, 0)
    """
    settings = settings or LayoutSettings()
    by_section = _partition_selection(selected_field_ids, catalog, base_type)
    action_ids = [a.field_id for a in actions if a.enabled]
    system_ids = [f.id for f in catalog.system_fields]

    logger.debug(
        "Auto-placing %d field(s) and %d action(s)",
        sum(len(ids) for ids in by_section.values()),
        len(action_ids),
    )
    return UIModeOverrides(
        classic=place_mode(UIMode.CLASSIC, by_section, action_ids, system_ids, settings),
        windows=place_mode(UIMode.WINDOWS, by_section, action_ids, system_ids, settings),
    )


def auto_place_config(
    config: VoucherFormConfig,
    selected_field_ids: Iterable[str] | None = None,
    *,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    settings: LayoutSettings | None = None,
) -> VoucherFormConfig:
    """
    Copy of ``config`` with both layouts recomputed.

    Without an explicit selection, the selection already present in the
    form's layouts (plus its core fields) is used.
    """
    if selected_field_ids is None:
        selected_field_ids = selection_from_config(config, catalog)
    overrides = run_auto_placement(
        selected_field_ids,
        config.actions,
        catalog=catalog,
        settings=settings,
        base_type=config.base_type,
    )
    return config.model_copy(update={"ui_mode_overrides": overrides})
