"""Core Formsmith functionality: IR, errors, settings and schema loading."""

from . import ir
from .errors import (
    ConfigError,
    ErrorContext,
    FormsmithError,
    LayoutError,
    PatternError,
    SchemaError,
    TableRowLimitError,
)
from .manifest import FormsmithManifest, LayoutSettings, find_manifest, load_manifest, load_settings
from .schema_loader import load_canonical, load_document, load_form_config, load_values

__all__ = [
    "ir",
    "FormsmithError",
    "SchemaError",
    "PatternError",
    "LayoutError",
    "TableRowLimitError",
    "ConfigError",
    "ErrorContext",
    "FormsmithManifest",
    "LayoutSettings",
    "load_manifest",
    "find_manifest",
    "load_settings",
    "load_document",
    "load_form_config",
    "load_canonical",
    "load_values",
]
