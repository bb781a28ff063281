"""
Error types for Formsmith schema loading, validation and layout editing.

Malformed *data* (dangling references, unparsable dates, non-numeric strings)
never raises; these exceptions cover authoring defects and bad inputs only.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FormsmithError(Exception):
    """Base exception for all Formsmith errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SchemaError(FormsmithError):
    """
    Raised when a schema or value file cannot be loaded.

    Examples:
    - Unsupported file extension
    - Invalid JSON/YAML syntax
    - Document failing model validation
    """

    pass


class PatternError(FormsmithError):
    """
    Raised when a field's validation pattern is not a valid regular expression.

    This is a rule-authoring defect, so it propagates out of validation
    instead of being reported as a per-field message.
    """

    def __init__(self, field_name: str, pattern: str, reason: str):
        self.field_name = field_name
        self.pattern = pattern
        super().__init__(
            f"Invalid pattern {pattern!r} on field '{field_name}': {reason}",
            ErrorContext(field=field_name),
        )


class LayoutError(FormsmithError):
    """
    Raised when a layout command cannot be applied.

    Examples:
    - Unknown section name
    - Unknown UI mode
    - Unsupported command type
    """

    pass


class TableRowLimitError(FormsmithError):
    """Raised when adding or removing a row would break a table's row limits."""

    pass


class ConfigError(FormsmithError):
    """Raised when formsmith.toml contains invalid settings."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a document definition.

    Attributes:
        file: Optional path to the file the document was loaded from
        document: Optional form/voucher id
        section: Optional section id or section type
        field: Optional field name or id
    """

    file: Path | None = None
    document: str | None = None
    section: str | None = None
    field: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "schema.json: document=payment section=HEADER field=amount"
        """
        parts = []
        if self.document:
            parts.append(f"document={self.document}")
        if self.section:
            parts.append(f"section={self.section}")
        if self.field:
            parts.append(f"field={self.field}")
        location = " ".join(parts)
        if self.file:
            return f"{self.file}: {location}" if location else str(self.file)
        return location


def make_schema_error(message: str, file: Path | None = None, document: str | None = None) -> SchemaError:
    """
    Helper to create a SchemaError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        document: Optional document id

    Returns:
        SchemaError with context if location provided
    """
    if file or document:
        return SchemaError(message, ErrorContext(file=file, document=document))
    return SchemaError(message)


def make_layout_error(message: str, section: str | None = None, field: str | None = None) -> LayoutError:
    """
    Helper to create a LayoutError with optional context.

    Args:
        message: Error description
        section: Optional section name
        field: Optional field id

    Returns:
        LayoutError with context if location provided
    """
    if section or field:
        return LayoutError(message, ErrorContext(section=section, field=field))
    return LayoutError(message)
