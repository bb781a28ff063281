"""
Grid layout types for Formsmith IR.

A voucher layout is a fixed set of four sections per UI mode, each holding
an unordered bag of field placements on a 12-column grid.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator, model_validator

from .base import SchemaModel

GRID_COLUMNS = 12


class SectionType(str, Enum):
    """Fixed sections of a voucher layout."""

    HEADER = "HEADER"
    BODY = "BODY"
    EXTRA = "EXTRA"
    ACTIONS = "ACTIONS"


class UIMode(str, Enum):
    """Layout presentations maintained in parallel for the same field set."""

    CLASSIC = "classic"  # Stacked single column
    WINDOWS = "windows"  # Dense multi-column grid


DEFAULT_SECTION_ORDER: dict[SectionType, int] = {
    SectionType.HEADER: 0,
    SectionType.BODY: 1,
    SectionType.EXTRA: 2,
    SectionType.ACTIONS: 3,
}


class FieldLayout(SchemaModel):
    """
    Placement of one field on the grid.

    ``col + col_span <= 12`` holds for placements produced by the layout
    engine; direct mutation can break it.
    """

    field_id: str
    row: int = Field(default=0, ge=0)
    col: int = Field(default=0, ge=0, le=GRID_COLUMNS - 1)
    col_span: int = Field(default=GRID_COLUMNS, ge=1, le=GRID_COLUMNS)
    row_span: int | None = None
    label_override: str | None = None
    type_override: str | None = None


class SectionLayout(SchemaModel):
    """Rendering order of a section plus its field placements."""

    order: int = 0
    fields: list[FieldLayout] = Field(default_factory=list)

    def find(self, field_id: str) -> FieldLayout | None:
        """First placement of ``field_id`` in this section."""
        for placement in self.fields:
            if placement.field_id == field_id:
                return placement
        return None


def default_sections() -> dict[SectionType, SectionLayout]:
    """Four empty sections in default order."""
    return {section: SectionLayout(order=order) for section, order in DEFAULT_SECTION_ORDER.items()}


class VoucherLayoutConfig(SchemaModel):
    """Layout of one UI mode: all four sections, keyed by section type."""

    sections: dict[SectionType, SectionLayout] = Field(default_factory=default_sections)

    @field_validator("sections", mode="before")
    @classmethod
    def drop_unknown_sections(cls, v: object) -> object:
        """Ignore section keys outside the fixed set."""
        if isinstance(v, dict):
            known = {s.value for s in SectionType}
            return {k: s for k, s in v.items() if (k.value if isinstance(k, SectionType) else k) in known}
        return v

    @model_validator(mode="after")
    def fill_missing_sections(self) -> VoucherLayoutConfig:
        """Materialise any of the four sections the input left out."""
        for section, order in DEFAULT_SECTION_ORDER.items():
            if section not in self.sections:
                self.sections[section] = SectionLayout(order=order)
        return self

    def section(self, section: SectionType | str) -> SectionLayout:
        """Return a section by enum or name."""
        return self.sections[SectionType(section)]

    def ordered_sections(self) -> list[tuple[SectionType, SectionLayout]]:
        """Sections sorted by their ``order`` value."""
        return sorted(self.sections.items(), key=lambda item: item[1].order)

    def field_ids(self) -> list[str]:
        """All placed field ids, in section order."""
        return [p.field_id for _, section in self.ordered_sections() for p in section.fields]


class UIModeOverrides(SchemaModel):
    """The classic and windows layouts of one voucher form."""

    classic: VoucherLayoutConfig = Field(default_factory=VoucherLayoutConfig)
    windows: VoucherLayoutConfig = Field(default_factory=VoucherLayoutConfig)

    def for_mode(self, mode: UIMode | str) -> VoucherLayoutConfig:
        """Return the layout of one UI mode."""
        return getattr(self, UIMode(mode).value)

    def with_mode(self, mode: UIMode | str, layout: VoucherLayoutConfig) -> UIModeOverrides:
        """Copy with one mode's layout replaced."""
        return self.model_copy(update={UIMode(mode).value: layout})
