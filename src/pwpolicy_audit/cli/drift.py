"""CLI command for password policy drift detection."""

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from pwpolicy_audit.cli.utils import (
    console,
    fail,
    format_value,
    output_json,
    resolve_format,
    resolve_version,
    status_icon,
)
from pwpolicy_audit.models.drift import DriftReport
from pwpolicy_audit.models.policy import Component, PolicyCategory
from pwpolicy_audit.utils.config import get_config
from pwpolicy_audit.utils.errors import PwPolicyAuditError

DRIFT_EXIT_CODE = 2


def drift_cmd(
    current: Path = typer.Option(
        ...,
        "--current",
        "-c",
        help="JSON snapshot of the policies observed on the environment",
    ),
    version: Optional[str] = typer.Option(
        None,
        "--version",
        "-V",
        help="Suite version of the environment, e.g. 5.1.0.0",
    ),
    baseline: Optional[Path] = typer.Option(
        None,
        "--baseline",
        "-b",
        help="Policy configuration file to compare against instead of the defaults",
    ),
    component: Optional[Component] = typer.Option(
        None,
        "--component",
        help="Only report this component",
    ),
    category: Optional[PolicyCategory] = typer.Option(
        None,
        "--category",
        "-k",
        help="Only report this policy category",
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
    drift_only: bool = typer.Option(
        False,
        "--drift-only",
        help="Only list fields that drifted",
    ),
    fail_on_drift: Optional[bool] = typer.Option(
        None,
        "--fail-on-drift/--no-fail-on-drift",
        help="Exit with status 2 when drift is found",
    ),
) -> None:
    """
    Compare observed password policies with defaults or a baseline.

    Example:
        pwpolicy-audit drift --current observed.json --version 5.1.0.0
        pwpolicy-audit drift -c observed.json -V 5.1.0.0 --baseline policy.json
    """
    from pwpolicy_audit.core.drift import DriftComparator
    from pwpolicy_audit.core.sources import SnapshotPolicySource

    config = get_config()
    version = resolve_version(version)
    format = resolve_format(format)
    if baseline is None and config.defaults.baseline:
        baseline = Path(config.defaults.baseline)
    if fail_on_drift is None:
        fail_on_drift = config.drift.fail_on_drift

    try:
        source = SnapshotPolicySource.from_file(current)
        current_sets = [
            s
            for s in source.fetch_all()
            if (component is None or s.component == component)
            and (category is None or s.category == category)
        ]
        with console.status("Comparing policies..."):
            report = DriftComparator().evaluate(version, current_sets, baseline=baseline)
    except PwPolicyAuditError as e:
        fail(e, "Failed to evaluate drift")

    if format == "json":
        data = report.model_dump(mode="json")
        data["summary"] = {
            "total_fields": report.total_fields,
            "drift_count": report.drift_count,
            "has_drift": report.has_drift,
        }
        output_json(data, output)
    else:
        show_matches = config.drift.show_matches and not drift_only
        _print_terminal_report(report, show_matches)

    if report.has_drift and fail_on_drift:
        raise typer.Exit(DRIFT_EXIT_CODE)


def _print_terminal_report(report: DriftReport, show_matches: bool) -> None:
    """Print a rich terminal report."""
    console.print()
    console.print(
        Panel(
            f"[bold]Version:[/bold] {report.version}\n"
            f"[bold]Expected:[/bold] {report.source}",
            title="Password Policy Drift Report",
        )
    )

    console.print()
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Count")
    table.add_row("Policy Sets", str(len(report.results)))
    table.add_row("Fields Compared", str(report.total_fields))
    table.add_row("Drifted Fields", f"[red]{report.drift_count}[/red]" if report.has_drift else "0")
    table.add_row("Not Applicable", str(len(report.not_applicable)))
    console.print(table)

    for result in report.results:
        entries = result.entries if show_matches else result.mismatches
        if not entries:
            continue

        console.print()
        table = Table(title=f"{result.component.value} / {result.category.value}")
        table.add_column("Field")
        table.add_column("Current", max_width=40)
        table.add_column("Expected", max_width=40)
        table.add_column("Status")

        for entry in entries:
            table.add_row(
                entry.field_name,
                format_value(entry.current_value),
                format_value(entry.expected_value),
                status_icon(entry.is_match),
            )

        console.print(table)

    if report.not_applicable:
        console.print()
        console.print("[dim]No expected policy for: " + ", ".join(report.not_applicable) + "[/dim]")

    if not report.has_drift:
        console.print()
        console.print("[green]No drift detected[/green]")
