"""
Key-indexed working copy of a voucher layout.

Layout edits address placements by a stable integer key instead of by
position in a section's list, so a move never invalidates the handle of
another placement. The arena is built from a ``VoucherLayoutConfig``,
mutated by the command reducer and turned back into a fresh config; the
source config is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from formsmith.core.errors import make_layout_error
from formsmith.core.ir import FieldLayout, SectionLayout, SectionType, VoucherLayoutConfig


def parse_section(section: SectionType | str) -> SectionType:
    """
    Resolve a section name.

    Raises:
        LayoutError: If the name is not one of the four fixed sections
    """
    try:
        return SectionType(section)
    except ValueError:
        raise make_layout_error(f"Unknown section '{section}'", section=str(section)) from None


@dataclass
class LayoutArena:
    """
    Mutable layout with placements stored by key.

    Attributes:
        placements: Key -> placement (copies owned by the arena)
        members: Section -> ordered placement keys
        orders: Section -> rendering order
    """

    placements: dict[int, FieldLayout] = field(default_factory=dict)
    members: dict[SectionType, list[int]] = field(default_factory=dict)
    orders: dict[SectionType, int] = field(default_factory=dict)
    _next_key: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_config(cls, config: VoucherLayoutConfig) -> LayoutArena:
        arena = cls()
        for section_type, section in config.sections.items():
            arena.orders[section_type] = section.order
            arena.members[section_type] = []
            for placement in section.fields:
                arena.insert(section_type, placement.model_copy())
        return arena

    def to_config(self) -> VoucherLayoutConfig:
        sections = {
            section_type: SectionLayout(
                order=self.orders[section_type],
                fields=[self.placements[key].model_copy() for key in keys],
            )
            for section_type, keys in self.members.items()
        }
        return VoucherLayoutConfig(sections=sections)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find(self, section: SectionType, field_id: str) -> int | None:
        """Key of the first placement of ``field_id`` in ``section``."""
        for key in self.members[section]:
            if self.placements[key].field_id == field_id:
                return key
        return None

    def section_length(self, section: SectionType) -> int:
        return len(self.members[section])

    def section_with_order(self, order: int) -> SectionType | None:
        for section_type, value in self.orders.items():
            if value == order:
                return section_type
        return None

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, section: SectionType, placement: FieldLayout) -> int:
        """Append a placement to a section and return its key."""
        key = self._next_key
        self._next_key += 1
        self.placements[key] = placement
        self.members[section].append(key)
        return key

    def detach(self, section: SectionType, key: int) -> None:
        """Remove a key from a section's list; the placement stays addressable."""
        self.members[section].remove(key)

    def attach(self, section: SectionType, key: int) -> None:
        """Append an existing key to a section's list."""
        self.members[section].append(key)

    def update(self, key: int, **changes: Any) -> None:
        """Replace a placement with a copy carrying ``changes``."""
        self.placements[key] = self.placements[key].model_copy(update=changes)

    def swap_orders(self, a: SectionType, b: SectionType) -> None:
        self.orders[a], self.orders[b] = self.orders[b], self.orders[a]
