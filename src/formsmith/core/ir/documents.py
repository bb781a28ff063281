"""
Document definitions for Formsmith IR.

This module contains the two document shapes (flat forms and header+lines
vouchers) together with the section and table types they are built from.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator

from .base import SchemaModel
from .fields import FieldDefinition
from .rules import RuleDefinition

logger = logging.getLogger(__name__)


class SectionDefinition(SchemaModel):
    """
    Named, ordered grouping of fields within a document.

    Dangling ids in ``field_ids`` are tolerated and dropped when the section is
    resolved against the document's fields.
    """

    id: str
    title: str | None = None
    field_ids: list[str] = Field(default_factory=list)

    @field_validator("field_ids")
    @classmethod
    def validate_no_duplicates(cls, v: list[str]) -> list[str]:
        """A field may appear at most once in a section."""
        seen: set[str] = set()
        for field_id in v:
            if field_id in seen:
                raise ValueError(f"Duplicate field id in section: {field_id}")
            seen.add(field_id)
        return v

    def resolve_fields(self, fields: list[FieldDefinition]) -> list[FieldDefinition]:
        """Return the referenced fields in section order, skipping unknown ids."""
        by_id = {f.id: f for f in fields}
        resolved = []
        for field_id in self.field_ids:
            field = by_id.get(field_id)
            if field is None:
                logger.debug("Section %s references unknown field %s", self.id, field_id)
                continue
            resolved.append(field)
        return resolved


class TableDefinition(SchemaModel):
    """
    Repeating group of rows, each row keyed by the column field names.

    Attributes:
        id: Table identifier
        name: Data key holding the row list
        columns: Column definitions (each a full field definition)
        add_label: Label of the "add row" action
        remove_label: Label of the "remove row" action
        min_rows: Optional lower bound on row count
        max_rows: Optional upper bound on row count
    """

    id: str
    name: str
    columns: list[FieldDefinition] = Field(default_factory=list)
    add_label: str = "Add row"
    remove_label: str = "Remove"
    min_rows: int | None = Field(default=None, ge=0)
    max_rows: int | None = Field(default=None, ge=0)


class FormDefinition(SchemaModel):
    """
    Flat form: a field list, its sections and its rules.

    Every section ``field_ids`` entry and every rule reference *should*
    resolve into ``fields``; unresolved references are ignored by the engine.
    """

    id: str
    name: str
    module: str = ""
    version: int = 1
    fields: list[FieldDefinition] = Field(default_factory=list)
    sections: list[SectionDefinition] = Field(default_factory=list)
    rules: list[RuleDefinition] = Field(default_factory=list)

    def field_by_id(self, field_id: str) -> FieldDefinition | None:
        """Look up a field by its stable id."""
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def field_by_name(self, name: str) -> FieldDefinition | None:
        """Look up a field by its data key."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def unresolved_references(self) -> list[str]:
        """
        List references that do not resolve into ``fields``.

        Returns:
            Human-readable descriptions, e.g. "section main -> missing_field"
        """
        known = {f.id for f in self.fields}
        # Conditions read the value map, which is keyed by field name
        value_keys = known | {f.name for f in self.fields}
        problems: list[str] = []
        for section in self.sections:
            for field_id in section.field_ids:
                if field_id not in known:
                    problems.append(f"section {section.id} -> {field_id}")
        for rule in self.rules:
            if rule.target_field_id not in known:
                problems.append(f"rule {rule.id} target -> {rule.target_field_id}")
            for condition in rule.conditions:
                if condition.field_id not in value_keys:
                    problems.append(f"rule {rule.id} condition -> {condition.field_id}")
        return problems


class VoucherTypeDefinition(SchemaModel):
    """
    Header + lines document.

    The header is a form in its own right; the lines table is validated row by
    row in a separate pass.
    """

    id: str
    name: str
    code: str = ""
    header: FormDefinition
    lines: TableDefinition
    summary_fields: list[FieldDefinition] = Field(default_factory=list)
