"""Tests for layout edit commands."""

import pytest

from formsmith.core.errors import LayoutError
from formsmith.core.ir import FieldLayout, SectionLayout, SectionType, UIMode, UIModeOverrides, VoucherLayoutConfig
from formsmith.core.manifest import LayoutSettings
from formsmith.ui.layout_engine import (
    LayoutArena,
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


@pytest.fixture
def layout() -> VoucherLayoutConfig:
    return VoucherLayoutConfig(
        sections={
            SectionType.HEADER: SectionLayout(
                order=0,
                fields=[
                    FieldLayout(field_id="date", row=0, col=0, col_span=4),
                    FieldLayout(field_id="payee", row=0, col=4, col_span=4),
                ],
            ),
            SectionType.BODY: SectionLayout(order=1, fields=[FieldLayout(field_id="lineItems")]),
            SectionType.EXTRA: SectionLayout(order=2, fields=[FieldLayout(field_id="notes")]),
            SectionType.ACTIONS: SectionLayout(order=3),
        }
    )


def placement(config: VoucherLayoutConfig, section: SectionType, field_id: str) -> FieldLayout:
    found = config.section(section).find(field_id)
    assert found is not None
    return found


class TestMoveField:
    """Tests for drag-and-drop moves."""

    def test_move_within_section(self, layout: VoucherLayoutConfig) -> None:
        moved = apply_command(layout, MoveField("payee", "HEADER", "HEADER", 2, 6))
        target = placement(moved, SectionType.HEADER, "payee")
        assert (target.row, target.col, target.col_span) == (2, 6, 4)

    def test_move_across_sections(self, layout: VoucherLayoutConfig) -> None:
        moved = apply_command(layout, MoveField("date", SectionType.HEADER, SectionType.EXTRA, 1, 0))
        assert moved.section(SectionType.HEADER).find("date") is None
        assert [p.field_id for p in moved.section(SectionType.EXTRA).fields] == ["notes", "date"]
        assert placement(moved, SectionType.EXTRA, "date").row == 1

    def test_input_is_unchanged(self, layout: VoucherLayoutConfig) -> None:
        before = layout.model_dump()
        apply_command(layout, MoveField("date", "HEADER", "BODY", 3, 3))
        assert layout.model_dump() == before

    def test_missing_field_returns_same_layout(self, layout: VoucherLayoutConfig) -> None:
        assert apply_command(layout, MoveField("ghost", "HEADER", "BODY", 0, 0)) is layout

    def test_unknown_section_raises(self, layout: VoucherLayoutConfig) -> None:
        with pytest.raises(LayoutError):
            apply_command(layout, MoveField("date", "FOOTER", "HEADER", 0, 0))

    @pytest.mark.parametrize(("row", "col"), [(-1, 0), (0, 12), (0, -1)])
    def test_off_grid_target_raises(self, layout: VoucherLayoutConfig, row: int, col: int) -> None:
        with pytest.raises(LayoutError):
            apply_command(layout, MoveField("date", "HEADER", "HEADER", row, col))


class TestResize:
    """Tests for span changes."""

    @pytest.mark.parametrize(("requested", "expected"), [(6, 6), (0, 1), (-3, 1), (20, 12), (12, 12)])
    def test_span_is_clamped(self, layout: VoucherLayoutConfig, requested: int, expected: int) -> None:
        resized = apply_command(layout, ResizeField("HEADER", "date", requested))
        assert placement(resized, SectionType.HEADER, "date").col_span == expected

    def test_clamp_span(self) -> None:
        assert [clamp_span(s) for s in (-1, 1, 7, 13)] == [1, 1, 7, 12]

    @pytest.mark.parametrize(
        ("start", "delta", "width", "expected"),
        [
            (4, 250, 1000, 7),
            (2, -500, 1000, 1),
            (4, 0, 1000, 4),
            (10, 900, 1000, 12),
            (4, 125, 1200, 5),
            (4, 250, 0, 7),
            (4, 250, None, 7),
        ],
    )
    def test_resize_from_drag(self, start: int, delta: float, width: float | None, expected: int) -> None:
        assert resize_span_from_drag(start, delta, width) == expected

    def test_halves_round_up(self) -> None:
        # 1000 / 12 px per column; half a column rounds away from the start span
        assert resize_span_from_drag(4, 1000 / 24, 1000) == 5
        assert resize_span_from_drag(4, -1000 / 24, 1000) == 4

    def test_custom_default_width(self) -> None:
        settings = LayoutSettings(default_container_width=600)
        assert resize_span_from_drag(4, 100, None, settings) == 6


class TestSectionOrder:
    """Tests for section reordering."""

    def test_reorder_swaps(self, layout: VoucherLayoutConfig) -> None:
        reordered = apply_command(layout, ReorderSection("HEADER", "ACTIONS"))
        assert reordered.section(SectionType.HEADER).order == 3
        assert reordered.section(SectionType.ACTIONS).order == 0
        assert [s for s, _ in reordered.ordered_sections()][0] == SectionType.ACTIONS

    def test_move_section_swaps_with_holder(self, layout: VoucherLayoutConfig) -> None:
        moved = apply_command(layout, MoveSection(SectionType.EXTRA, 0))
        assert moved.section(SectionType.EXTRA).order == 0
        assert moved.section(SectionType.HEADER).order == 2

    def test_move_section_without_holder_is_noop(self, layout: VoucherLayoutConfig) -> None:
        assert apply_command(layout, MoveSection(SectionType.EXTRA, 9)) is layout

    def test_orders_stay_distinct(self, layout: VoucherLayoutConfig) -> None:
        edited = apply_commands(
            layout,
            [ReorderSection("BODY", "EXTRA"), MoveSection("ACTIONS", 1), ReorderSection("HEADER", "BODY")],
        )
        assert sorted(s.order for s in edited.sections.values()) == [0, 1, 2, 3]


class TestProperties:
    """Tests for properties-panel edits."""

    def test_label_and_span(self, layout: VoucherLayoutConfig) -> None:
        edited = apply_command(layout, UpdateFieldProperties("HEADER", "date", label_override="When", col_span=15))
        target = placement(edited, SectionType.HEADER, "date")
        assert target.label_override == "When"
        assert target.col_span == 12

    def test_empty_label_clears(self, layout: VoucherLayoutConfig) -> None:
        labelled = apply_command(layout, UpdateFieldProperties("HEADER", "date", label_override="When"))
        cleared = apply_command(labelled, UpdateFieldProperties("HEADER", "date", label_override=""))
        assert placement(cleared, SectionType.HEADER, "date").label_override is None

    def test_none_leaves_properties(self, layout: VoucherLayoutConfig) -> None:
        edited = apply_command(layout, UpdateFieldProperties("HEADER", "payee"))
        assert placement(edited, SectionType.HEADER, "payee") == placement(layout, SectionType.HEADER, "payee")

    def test_missing_field_is_noop(self, layout: VoucherLayoutConfig) -> None:
        assert apply_command(layout, UpdateFieldProperties("BODY", "date", col_span=3)) is layout


class TestMoveFieldToSection:
    """Tests for moving a field to the end of another section."""

    def test_appends_new_row(self, layout: VoucherLayoutConfig) -> None:
        moved = apply_command(layout, MoveFieldToSection("payee", "HEADER", "EXTRA"))
        target = placement(moved, SectionType.EXTRA, "payee")
        assert (target.row, target.col, target.col_span) == (1, 0, 4)
        assert moved.section(SectionType.HEADER).find("payee") is None

    def test_same_section_counts_after_removal(self, layout: VoucherLayoutConfig) -> None:
        moved = apply_command(layout, MoveFieldToSection("date", "HEADER", "HEADER"))
        assert placement(moved, SectionType.HEADER, "date").row == 1

    def test_missing_field_is_noop(self, layout: VoucherLayoutConfig) -> None:
        assert apply_command(layout, MoveFieldToSection("ghost", "BODY", "EXTRA")) is layout


class TestModeCommands:
    """Tests for per-mode application and the arena."""

    def test_other_mode_untouched(self, layout: VoucherLayoutConfig) -> None:
        overrides = UIModeOverrides(classic=layout, windows=layout)
        edited = apply_mode_command(overrides, UIMode.WINDOWS, ResizeField("HEADER", "date", 8))
        assert placement(edited.windows, SectionType.HEADER, "date").col_span == 8
        assert edited.classic == overrides.classic

    def test_arena_round_trip(self, layout: VoucherLayoutConfig) -> None:
        assert LayoutArena.from_config(layout).to_config() == layout

    def test_unsupported_command_raises(self, layout: VoucherLayoutConfig) -> None:
        with pytest.raises(LayoutError):
            apply_command(layout, "resize")  # type: ignore[arg-type]
