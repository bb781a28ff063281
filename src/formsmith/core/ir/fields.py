"""
Field definitions for Formsmith IR.

This module contains the field type system: field types, layout width hints,
select options, and the field definition itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .base import SchemaModel


class FieldType(str, Enum):
    """Enumeration of supported input types."""

    TEXT = "TEXT"
    NUMBER = "NUMBER"
    DATE = "DATE"
    SELECT = "SELECT"
    CHECKBOX = "CHECKBOX"
    TEXTAREA = "TEXTAREA"
    RELATION = "RELATION"  # Reference to another record, rendered as text for now


class FieldWidth(str, Enum):
    """Layout width hint for a field inside a section."""

    FULL = "full"
    HALF = "1/2"
    THIRD = "1/3"
    QUARTER = "1/4"


class SelectOption(SchemaModel):
    """A single option of a SELECT field."""

    label: str
    value: str | int | float | bool


class FieldDefinition(SchemaModel):
    """
    Definition of a single data-entry field.

    Attributes:
        id: Stable identifier, referenced by sections and rules
        name: Data key in the value map (unique within the owning document)
        label: Human-readable label
        type: Input type
        width: Layout width hint
        required: Whether an empty value is a validation error
        min: Lower bound for NUMBER fields
        max: Upper bound for NUMBER fields
        pattern: Regular expression source the stringified value must match
        options: Choices for SELECT fields
        relation_target: Target entity for RELATION fields
        default_value: Initial value for new documents and table rows
    """

    id: str
    name: str
    label: str = ""
    type: FieldType = FieldType.TEXT
    width: FieldWidth = FieldWidth.FULL

    # Validation hints
    required: bool = False
    min: float | None = None
    max: float | None = None
    pattern: str | None = None

    # Type-specific data
    options: list[SelectOption] = Field(default_factory=list)
    relation_target: str | None = None
    default_value: Any = None

    placeholder: str | None = None
    read_only: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the name can be used as a value-map key."""
        if not v or v != v.strip():
            raise ValueError(f"Field name must be a non-empty key without surrounding whitespace, got: {v!r}")
        return v

    @property
    def display_label(self) -> str:
        """Label to show, falling back to the data key."""
        return self.label or self.name
