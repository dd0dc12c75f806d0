"""agentcore CLI.

Built with Typer and organized into command modules:

    cli/
    ├── __init__.py       # app assembly and global options
    ├── output.py         # Rich formatting
    └── commands/
        ├── schedule.py   # schedule command
        └── config_cmd.py # config show
"""

from __future__ import annotations

from typing import Annotated

import pydantic
import typer

from agentcore import __version__
from agentcore.core.config import LogConfig
from agentcore.core.logging import configure_logging_from

from .commands import config_app, schedule
from .output import console, output_error

app = typer.Typer(
    name="agentcore",
    help="Execution core for LLM-backed agent workflows",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"agentcore v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            "-L",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="AGENTCORE_LOG_LEVEL",
        ),
    ] = "WARNING",
    log_format: Annotated[
        str,
        typer.Option(
            "--log-format",
            help="Log format: json or console",
            envvar="AGENTCORE_LOG_FORMAT",
        ),
    ] = "console",
) -> None:
    """agentcore - retry, timeout and execution logging for agent graphs."""
    try:
        log_config = LogConfig(level=log_level, format=log_format)
    except pydantic.ValidationError as e:
        output_error(f"Logging configuration error: {e}")
        raise typer.Exit(1) from None
    configure_logging_from(log_config)


app.command()(schedule)
app.add_typer(config_app)


__all__ = ["app", "main", "console"]
