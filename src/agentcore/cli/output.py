"""Rich output formatting for the agentcore CLI.

Centralizes the shared console, table builders and error output so
command modules print with consistent styling.
"""

from __future__ import annotations

from typing import Any, Literal

from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Commands print through this console; Rich resolves stdout at print time.
console = Console()


def format_ms(value: float | None) -> str:
    """Format a millisecond duration for display.

    Args:
        value: Duration in milliseconds, or None.

    Returns:
        Human-readable string (e.g., "250ms", "4.0s", "2m 5s").
    """
    if value is None:
        return "N/A"
    if value < 1000:
        return f"{value:g}ms"
    seconds = value / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds % 60)}s"


def create_schedule_table(title: str | None = None) -> Table:
    """Create a styled table for a retry schedule."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Retry", justify="right", style="cyan", width=6)
    table.add_column("Delay", justify="right", style="green")
    table.add_column("Cumulative wait", justify="right")
    return table


def create_settings_table() -> Table:
    """Create a styled key/value table for settings display."""
    table = Table(show_header=True, header_style="bold cyan", padding=(0, 1))
    table.add_column("Key", style="white", min_width=28)
    table.add_column("Value", style="green")
    return table


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten a nested dict into dot-notation keys."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            result.update(flatten(value, full_key))
        else:
            result[full_key] = value
    return result


def output_error(
    message: str,
    *,
    hints: list[str] | None = None,
    severity: Literal["error", "warning"] = "error",
    console_instance: Console | None = None,
) -> None:
    """Print a colored error/warning line followed by optional hints."""
    out = console_instance or console
    color = "red" if severity == "error" else "yellow"
    label = "Error" if severity == "error" else "Warning"
    out.print(f"[{color}]{label}:[/{color}] {escape(message)}")

    if hints:
        out.print()
        out.print("[dim]Hints:[/dim]")
        for hint in hints:
            out.print(f"  - {escape(hint)}")


__all__ = [
    "console",
    "create_schedule_table",
    "create_settings_table",
    "flatten",
    "format_ms",
    "output_error",
]
