"""CLI commands for default password policies and configuration files."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from pwpolicy_audit.cli.utils import (
    console,
    fail,
    format_value,
    output_json,
    resolve_format,
    resolve_version,
)
from pwpolicy_audit.models.policy import Component, PolicyCategory
from pwpolicy_audit.utils.errors import PwPolicyAuditError


def versions_cmd() -> None:
    """
    List the suite versions with a default policy table.

    Example:
        pwpolicy-audit versions
    """
    from pwpolicy_audit.core.resolver import get_default_resolver

    for version in get_default_resolver().supported_versions():
        console.print(version)


def defaults_cmd(
    version: Optional[str] = typer.Argument(None, help="Suite version, e.g. 5.1.0.0"),
    component: Optional[Component] = typer.Option(
        None,
        "--component",
        "-c",
        help="Only show this component",
    ),
    category: Optional[PolicyCategory] = typer.Option(
        None,
        "--category",
        "-k",
        help="Only show this policy category",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json); defaults to output.default_format",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (json only)",
    ),
) -> None:
    """
    Show the out-of-the-box password policies of a release.

    Example:
        pwpolicy-audit defaults 5.1.0.0 --component sso
    """
    from pwpolicy_audit.core.config_file import dump_policy_document
    from pwpolicy_audit.core.resolver import get_default_resolver

    version = resolve_version(version)
    format = resolve_format(format)

    try:
        policy_sets = get_default_resolver().get_defaults(version)
    except PwPolicyAuditError as e:
        fail(e, "Failed to resolve default policies")

    if component:
        policy_sets = [s for s in policy_sets if s.component == component]
    if category:
        policy_sets = [s for s in policy_sets if s.category == category]

    if format == "json":
        output_json(dump_policy_document(version, policy_sets), output)
        return

    if not policy_sets:
        console.print(f"[yellow]No default policies match for {version}[/yellow]")
        return

    table = Table(title=f"Default Password Policies ({version})")
    table.add_column("Component", style="bold")
    table.add_column("Category", style="dim")
    table.add_column("Field")
    table.add_column("Value")

    for policy_set in policy_sets:
        for field, value in policy_set.to_fields().items():
            table.add_row(
                policy_set.component.value,
                policy_set.category.value,
                field,
                format_value(value),
            )

    console.print(table)


def generate_cmd(
    version: Optional[str] = typer.Argument(None, help="Suite version, e.g. 5.1.0.0"),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Policy configuration file to write",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite the file if it already exists",
    ),
) -> None:
    """
    Generate a policy configuration file from the defaults of a release.

    The file can be edited and used as a baseline for drift checks.

    Example:
        pwpolicy-audit generate 5.1.0.0 --output policy.json
    """
    from pwpolicy_audit.core.resolver import get_default_resolver

    version = resolve_version(version)

    try:
        path = get_default_resolver().generate_config_file(version, output, overwrite=force)
    except PwPolicyAuditError as e:
        fail(e, "Failed to generate policy configuration file")

    console.print(f"Policy configuration for {version} written to {path}")


def validate_cmd(
    path: Path = typer.Argument(..., help="Policy configuration file to check"),
    version: Optional[str] = typer.Option(
        None,
        "--version",
        "-V",
        help="Version block to check",
    ),
) -> None:
    """
    Check that a policy configuration file is usable as a baseline.

    Example:
        pwpolicy-audit validate policy.json --version 5.1.0.0
    """
    from pwpolicy_audit.core.config_file import read_policy_file

    version = resolve_version(version)

    try:
        policy_sets = read_policy_file(path, version)
    except PwPolicyAuditError as e:
        fail(e, f"{path} is not a valid baseline for {version}")

    components = sorted({s.component.value for s in policy_sets})
    console.print(
        f"[green]OK[/green] {path}: {len(policy_sets)} policy sets for {version} "
        f"({', '.join(components) or 'no components'})"
    )
