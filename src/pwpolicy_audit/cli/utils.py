"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import BaseModel
from rich.console import Console

from pwpolicy_audit.utils.config import get_config
from pwpolicy_audit.utils.errors import PwPolicyAuditError, ValidationError, validate_version_string

# Shared console instance
console = Console()

OUTPUT_FORMATS = ("terminal", "json")


def fail(error: PwPolicyAuditError, error_message: str = "Operation failed") -> NoReturn:
    """Report an error and exit with status 1.

    Args:
        error: The error raised by the library
        error_message: Message to display before the error detail
    """
    console.print(f"[red]Error:[/red] {error_message}")
    audit_error = error.to_audit_error()
    console.print(f"  {audit_error}", markup=False)
    for line in audit_error.detail_lines():
        console.print(f"    {line}", style="dim", markup=False)
    raise typer.Exit(1)


def resolve_version(version: str | None) -> str:
    """Use the given version, else the configured default.

    Exits with status 1 if neither is set or the version is malformed.
    """
    version = version or get_config().defaults.version
    if not version:
        console.print(
            "[red]Error:[/red] No version given and no defaults.version configured"
        )
        raise typer.Exit(1)

    try:
        validate_version_string(version)
    except ValidationError as e:
        fail(e, "Invalid version")
    return version


def resolve_format(format: str | None) -> str:
    """Use the given output format, else the configured default."""
    format = format or get_config().output.default_format
    if format not in OUTPUT_FORMATS:
        fail(
            ValidationError(
                f"Output format must be one of {', '.join(OUTPUT_FORMATS)}, got: {format}",
                field="format",
            ),
            "Invalid output format",
        )
    return format


def output_json(
data: dict[str, Any] | BaseModel, output: Path | None = None) -> None:
    """Output data as JSON to stdout or file.

    Args:
        data: Data to output (dict or Pydantic model)
        output: Optional output file path
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    json_str = json.dumps(data, indent=2, default=str)

    if output:
        output.write_text(json_str, encoding="utf-8")
        console.print(f"Report written to {output}")
    else:
        typer.echo(json_str)


def format_value(value: Any) -> str:
    """Format a policy value for a table cell."""
    if value is None:
        return "-"
    if value == "":
        return '""'
    return str(value)


def status_icon(success: bool) -> str:
    """Get a colored status marker."""
    return "[green]OK[/green]" if success else "[red]DRIFT[/red]"
