"""
Shared pydantic base for Formsmith IR types.

Schema documents are authored in camelCase (``fieldIds``, ``targetFieldId``,
``colSpan``); IR attributes are snake_case. Both spellings are accepted on
input and ``model_dump(by_alias=True)`` produces the camelCase wire shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SchemaModel(BaseModel):
    """Base model for all schema and layout types."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Serialize to the camelCase JSON-compatible shape."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
