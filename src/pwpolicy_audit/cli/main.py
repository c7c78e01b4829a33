"""Main CLI entry point for pwpolicy-audit."""

from pathlib import Path
from typing import Optional

import typer

from pwpolicy_audit.cli import defaults, drift
from pwpolicy_audit.cli.utils import console

app = typer.Typer(
    name="pwpolicy-audit",
    help="Default password policies and drift detection for VMware Cloud Foundation components.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register subcommands
app.command(name="versions")(defaults.versions_cmd)
app.command(name="defaults")(defaults.defaults_cmd)
app.command(name="generate")(defaults.generate_cmd)
app.command(name="validate")(defaults.validate_cmd)
app.command(name="drift")(drift.drift_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (searched for in the usual places if omitted)",
    ),
) -> None:
    """
    pwpolicy-audit: password policy defaults and drift for VCF components.

    - [bold]versions[/bold]: List supported suite versions
    - [bold]defaults[/bold]: Show the default policies of a release
    - [bold]generate[/bold]: Write a policy configuration file from the defaults
    - [bold]validate[/bold]: Check a policy configuration file
    - [bold]drift[/bold]: Compare observed policies with defaults or a baseline
    """
    from pwpolicy_audit.utils.config import get_config, load_config, set_config
    from pwpolicy_audit.utils.errors import ConfigurationError
    from pwpolicy_audit.utils.logging import configure_logging

    try:
        config = load_config(config_file) if config_file is not None else get_config()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    set_config(config)

    if not config.output.color:
        console.no_color = True

    if verbose or (config.output.verbose and not quiet):
        configure_logging(level="DEBUG", structured=True)
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")


@app.command()
def version() -> None:
    """Show the pwpolicy-audit version."""
    from pwpolicy_audit import __version__

    console.print(f"pwpolicy-audit version {__version__}")


if __name__ == "__main__":
    app()
