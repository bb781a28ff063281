"""
Formsmith - definition and layout engine for data-entry forms and vouchers.

Declarative document schemas in, renderer-ready structures out: hidden-field
sets, validation messages, coerced DTOs and 12-column grid placements.
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import get_version
from .core import ir
from .core.errors import ConfigError, FormsmithError, LayoutError, PatternError, SchemaError
from .engine import evaluate_visibility, map_values_to_dto, validate_form

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "FormsmithError",
    "SchemaError",
    "PatternError",
    "LayoutError",
    "ConfigError",
    "evaluate_visibility",
    "validate_form",
    "map_values_to_dto",
]
