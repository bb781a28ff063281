"""
Schema file loading.

Reads document definitions, designer configurations and value maps from
JSON or YAML files into the IR models. Files use the camelCase wire shape
(``targetFieldId``, ``colSpan``); snake_case keys are accepted as well.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .errors import make_schema_error
from .ir.canonical import CanonicalVoucherType
from .ir.documents import FormDefinition, VoucherTypeDefinition
from .ir.wizard import VoucherFormConfig

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}

ModelT = TypeVar("ModelT", bound=BaseModel)


# =============================================================================
# Raw data
# =============================================================================


def read_data(path: Path) -> Any:
    """
    Read a JSON or YAML file into plain Python data.

    Raises:
        SchemaError: If the file is missing, has an unsupported extension or
            does not parse
    """
    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES | YAML_SUFFIXES:
        raise make_schema_error(f"Unsupported file type '{suffix}', expected .json, .yaml or .yml", file=path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_schema_error(f"Cannot read file: {e}", file=path) from e

    try:
        if suffix in JSON_SUFFIXES:
            return json.loads(content)
        return yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise make_schema_error(f"Invalid JSON: {e}", file=path) from e
    except yaml.YAMLError as e:
        raise make_schema_error(f"Invalid YAML: {e}", file=path) from e


def _validate(model: type[ModelT], data: Any, path: Path) -> ModelT:
    if not isinstance(data, dict):
        raise make_schema_error(f"Expected a mapping at the top level, got {type(data).__name__}", file=path)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise make_schema_error(f"Invalid {model.__name__}: {e}", file=path, document=data.get("id")) from e


# =============================================================================
# Documents
# =============================================================================


def is_voucher_data(data: dict[str, Any]) -> bool:
    """A document with a header form and a lines table is a voucher."""
    return "header" in data and "lines" in data


def load_document(path: Path) -> FormDefinition | VoucherTypeDefinition:
    """
    Load a form or voucher definition.

    Returns:
        ``VoucherTypeDefinition`` when the file has ``header`` and ``lines``,
        ``FormDefinition`` otherwise
    """
    data = read_data(path)
    if isinstance(data, dict) and is_voucher_data(data):
        document: FormDefinition | VoucherTypeDefinition = _validate(VoucherTypeDefinition, data, path)
    else:
        document = _validate(FormDefinition, data, path)

    header = document.header if isinstance(document, VoucherTypeDefinition) else document
    for problem in header.unresolved_references():
        logger.debug("%s: unresolved reference %s", path, problem)
    return document


def load_form_config(path: Path) -> VoucherFormConfig:
    """Load a voucher designer configuration."""
    return _validate(VoucherFormConfig, read_data(path), path)


def load_canonical(path: Path) -> CanonicalVoucherType:
    """Load a persisted canonical voucher type."""
    return _validate(CanonicalVoucherType, read_data(path), path)


# =============================================================================
# Values
# =============================================================================


def load_values(path: Path) -> dict[str, Any]:
    """
    Load a value map.

    For vouchers, line rows are read from the table's ``name`` key of the same
    mapping; see ``split_voucher_values``.
    """
    data = read_data(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise make_schema_error("Value file must contain a mapping of field name to value", file=path)
    return data


def split_voucher_values(
    voucher: VoucherTypeDefinition, values: dict[str, Any]
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Separate header values from the line rows stored under the table's name."""
    header = {k: v for k, v in values.items() if k != voucher.lines.name}
    rows = values.get(voucher.lines.name) or []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise make_schema_error(f"'{voucher.lines.name}' must be a list of row mappings", document=voucher.id)
    return header, rows
