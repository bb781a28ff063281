"""
Formsmith CLI.

Commands:
- validate: evaluate rules and validation for a value file
- dto: print the coerced submission DTO of a value file
- layout: run auto-placement and print the grid per section
- canonical: map a designer configuration to its persisted shape
"""

from __future__ import annotations

import json
import logging
import math
import platform
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from formsmith._version import get_version
from formsmith.canonical import ui_to_canonical, validate_ui_config
from formsmith.core.errors import FormsmithError
from formsmith.core.ir import (
    FieldDefinition,
    FormDefinition,
    UIMode,
    VoucherAction,
    VoucherActionType,
    VoucherLayoutConfig,
    VoucherTypeDefinition,
)
from formsmith.core.manifest import load_settings
from formsmith.core.schema_loader import load_document, load_form_config, load_values, split_voucher_values
from formsmith.engine import (
    evaluate_visibility,
    map_values_to_dto,
    map_voucher_to_dto,
    validate_form,
    validate_voucher,
)
from formsmith.ui.layout_engine import DEFAULT_ACTIONS, auto_place_config, packed_row_widths, run_auto_placement

console = Console()

app = typer.Typer(
    help="Formsmith - form and voucher definition & layout engine",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"Formsmith {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version information"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Formsmith CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(error: FormsmithError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(code=1)


# =============================================================================
# Runtime commands
# =============================================================================


@app.command(name="validate")
def validate_command(
    schema: Annotated[Path, typer.Argument(help="Form or voucher definition (.json/.yaml)")],
    values: Annotated[Path, typer.Argument(help="Value file (.json/.yaml)")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Evaluate visibility rules and validate a value file."""
    try:
        document = load_document(schema)
        data = load_values(values)
        if isinstance(document, VoucherTypeDefinition):
            header_values, rows = split_voucher_values(document, data)
            hidden = evaluate_visibility(document.header.rules, header_values)
            result = validate_voucher(document, header_values, rows, header_hidden=hidden)
            report: dict[str, Any] = {
                "hidden": sorted(hidden),
                "errors": result.header,
                "rowErrors": {str(i): e for i, e in result.rows.items()},
                "tableError": result.table,
            }
            has_errors = not result.is_valid
        else:
            hidden = evaluate_visibility(document.rules, data)
            errors = validate_form(document, data, hidden=hidden)
            report = {"hidden": sorted(hidden), "errors": errors}
            has_errors = bool(errors)
    except FormsmithError as e:
        raise _fail(e) from e

    if output_json:
        typer.echo(json.dumps(report, indent=2))
    else:
        _print_report(document, report)

    if has_errors:
        raise typer.Exit(code=1)


def _field_caption(field: FieldDefinition | None, key: str) -> str:
    if field is None or not field.label:
        return escape(key)
    return escape(f"{field.label} ({key})")


def _print_report(document: FormDefinition | VoucherTypeDefinition, report: dict[str, Any]) -> None:
    form = document.header if isinstance(document, VoucherTypeDefinition) else document
    console.print(f"[bold]{escape(document.name)}[/bold] ({escape(document.id)})")
    if report["hidden"]:
        hidden = [_field_caption(form.field_by_id(field_id), field_id) for field_id in report["hidden"]]
        console.print(f"Hidden: {', '.join(hidden)}")

    errors: dict[str, str] = report["errors"]
    row_errors: dict[str, dict[str, str]] = report.get("rowErrors", {})
    if not errors and not row_errors and not report.get("tableError"):
        console.print("[green]✓ Valid[/green]")
        return

    table = Table(title="Validation errors")
    table.add_column("Row", style="dim")
    table.add_column("Field")
    table.add_column("Message", style="red")
    for name, message in errors.items():
        table.add_row("", _field_caption(form.field_by_name(name), name), message)
    for row, messages in row_errors.items():
        for name, message in messages.items():
            table.add_row(row, name, message)
    if report.get("tableError"):
        table.add_row("", "(rows)", report["tableError"])
    console.print(table)


@app.command(name="dto")
def dto_command(
    schema: Annotated[Path, typer.Argument(help="Form or voucher definition (.json/.yaml)")],
    values: Annotated[Path, typer.Argument(help="Value file (.json/.yaml)")],
) -> None:
    """Print the coerced submission DTO of a value file."""
    try:
        document = load_document(schema)
        data = load_values(values)
        if isinstance(document, VoucherTypeDefinition):
            header_values, rows = split_voucher_values(document, data)
            dto = map_voucher_to_dto(document, header_values, rows)
        else:
            dto = map_values_to_dto(document.fields, data)
    except FormsmithError as e:
        raise _fail(e) from e

    typer.echo(json.dumps(_json_ready(dto), indent=2))


def _json_ready(value: Any) -> Any:
    """Replace NaN and infinities, which JSON cannot carry, with null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_ready(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_ready(v) for v in value]
    return value


# =============================================================================
# Designer commands
# =============================================================================


@app.command(name="layout")
def layout_command(
    fields: Annotated[
        list[str] | None, typer.Option("--field", "-f", help="Selected field id (repeatable)")
    ] = None,
    actions: Annotated[
        list[str] | None, typer.Option("--action", "-a", help="Enabled action type (repeatable)")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Designer configuration to re-place")
    ] = None,
    mode: Annotated[UIMode, typer.Option("--mode", "-m", help="UI mode to print")] = UIMode.WINDOWS,
    base_type: Annotated[str | None, typer.Option("--base-type", help="Voucher base type")] = None,
) -> None:
    """Run auto-placement and print the resulting grid."""
    try:
        settings = load_settings()
        if config is not None:
            form_config = auto_place_config(load_form_config(config), fields or None, settings=settings)
            overrides = form_config.ui_mode_overrides
        else:
            if actions is None:
                enabled = list(DEFAULT_ACTIONS)
            else:
                enabled = [
                    VoucherAction(type=VoucherActionType(a), label=a, enabled=True) for a in actions
                ]
            overrides = run_auto_placement(fields or [], enabled, settings=settings, base_type=base_type)
    except FormsmithError as e:
        raise _fail(e) from e
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _print_layout(overrides.for_mode(mode), mode)


def _print_layout(layout: VoucherLayoutConfig, mode: UIMode) -> None:
    for section_type, section in layout.ordered_sections():
        table = Table(title=f"{section_type.value} ({mode.value})")
        table.add_column("Field")
        table.add_column("Row", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Span", justify="right")
        for placement in sorted(section.fields, key=lambda p: (p.row, p.col)):
            table.add_row(placement.field_id, str(placement.row), str(placement.col), str(placement.col_span))
        console.print(table)
        widths = packed_row_widths(section)
        if widths:
            console.print(f"[dim]Row widths: {dict(sorted(widths.items()))}[/dim]")


@app.command(name="canonical")
def canonical_command(
    config: Annotated[Path, typer.Argument(help="Designer configuration (.json/.yaml)")],
    company: Annotated[str, typer.Option("--company", help="Owning company id")],
    user: Annotated[str, typer.Option("--user", help="Saving user id")],
    edit: Annotated[bool, typer.Option("--edit", help="Keep creation stamps unset")] = False,
) -> None:
    """Map a designer configuration to the persisted canonical document."""
    try:
        form_config = load_form_config(config)
    except FormsmithError as e:
        raise _fail(e) from e

    problems = validate_ui_config(form_config)
    if problems:
        for problem in problems:
            console.print(f"[red]✗[/red] {escape(problem)}")
        raise typer.Exit(code=1)

    canonical = ui_to_canonical(form_config, company, user, is_edit=edit)
    typer.echo(json.dumps(canonical.to_wire(), indent=2))


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
