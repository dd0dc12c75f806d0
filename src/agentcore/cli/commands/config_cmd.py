"""Settings file commands for the agentcore CLI.

Subcommands:
- `agentcore config show FILE` - validate a YAML settings file and display it
"""

from __future__ import annotations

import json
from pathlib import Path

import pydantic
import typer
import yaml

from agentcore.core.config import load_config_file

from ..output import console, create_settings_table, flatten, output_error

config_app = typer.Typer(
    name="config",
    help="Inspect agentcore settings files.",
    invoke_without_command=True,
)


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    """Inspect agentcore settings files."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


@config_app.command()
def show(
    config_file: Path = typer.Argument(..., help="Path to a YAML settings file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Validate a settings file and show the effective values.

    Sections missing from the file are shown with their defaults.

    Examples:
        agentcore config show agentcore.yaml
    """
    if not config_file.exists():
        output_error(f"Settings file not found: {config_file}")
        raise typer.Exit(1)

    try:
        settings = load_config_file(config_file)
    except (ValueError, yaml.YAMLError, pydantic.ValidationError) as e:
        output_error(f"Error loading settings: {e}")
        raise typer.Exit(1) from None

    data = settings.model_dump(mode="json")
    if json_output:
        typer.echo(json.dumps(data, indent=2))
        return

    console.print(f"\nagentcore settings - [dim]{config_file}[/dim]\n")
    table = create_settings_table()
    for key, value in flatten(data).items():
        table.add_row(key, str(value))
    console.print(table)
