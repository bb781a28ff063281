"""
Project settings loaded from formsmith.toml.

Example:

    [project]
    name = "acme-vouchers"

    [layout]
    windows_field_span = 4
    windows_system_span = 3
    max_actions_per_row = 4
    default_container_width = 1000
"""

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

from .errors import ConfigError, ErrorContext
from .ir.layout import GRID_COLUMNS

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "formsmith.toml"


@dataclass(frozen=True)
class LayoutSettings:
    """Tunables of the auto-placement and drag-resize algorithms."""

    grid_columns: int = GRID_COLUMNS
    windows_field_span: int = 4  # Header fields per row in windows mode = grid / span
    windows_system_span: int = 3
    max_actions_per_row: int = 4
    default_container_width: int = 1000  # Pixels, used when the renderer reports none


@dataclass
class FormsmithManifest:
    """
    Settings loaded from formsmith.toml.

    A project without a manifest uses the defaults.
    """

    name: str | None = None
    layout: LayoutSettings = field(default_factory=LayoutSettings)
    path: Path | None = None


def _parse_layout(data: dict, path: Path) -> LayoutSettings:
    known = {f.name for f in fields(LayoutSettings)}
    values: dict[str, int] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown [layout] setting %r in %s", key, path)
            continue
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(
                f"[layout] {key} must be a positive integer, got {value!r}",
                ErrorContext(file=path),
            )
        values[key] = value

    settings = LayoutSettings(**values)
    if settings.grid_columns > GRID_COLUMNS:
        raise ConfigError(
            f"[layout] grid_columns cannot exceed {GRID_COLUMNS}, got {settings.grid_columns}",
            ErrorContext(file=path),
        )
    for key in ("windows_field_span", "windows_system_span"):
        if getattr(settings, key) > settings.grid_columns:
            raise ConfigError(
                f"[layout] {key} cannot exceed grid_columns ({settings.grid_columns})",
                ErrorContext(file=path),
            )
    return settings


def load_manifest(path: Path) -> FormsmithManifest:
    """
    Load formsmith.toml.

    Args:
        path: Path to the manifest file

    Returns:
        Parsed manifest; defaults when the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid settings
    """
    if not path.exists():
        logger.debug("No manifest at %s, using defaults", path)
        return FormsmithManifest()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path)) from e

    project = data.get("project", {})
    if not isinstance(project, dict):
        raise ConfigError("[project] must be a table", ErrorContext(file=path))
    layout_data = data.get("layout", {})
    if not isinstance(layout_data, dict):
        raise ConfigError("[layout] must be a table", ErrorContext(file=path))

    return FormsmithManifest(
        name=project.get("name"),
        layout=_parse_layout(layout_data, path),
        path=path,
    )


def find_manifest(start: Path) -> Path | None:
    """
    Walk up from ``start`` looking for formsmith.toml.

    Returns:
        Path to the nearest manifest, or None if no ancestor has one
    """
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_settings(start: Path | None = None) -> LayoutSettings:
    """Layout settings of the project containing ``start`` (default: cwd)."""
    manifest_path = find_manifest(start or Path.cwd())
    if manifest_path is None:
        return LayoutSettings()
    return load_manifest(manifest_path).layout
