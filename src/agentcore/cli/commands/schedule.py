"""Retry schedule preview for the agentcore CLI.

Shows the delays ``with_retry`` would sleep between attempts for a given
retry policy, so policies can be tuned before they ship.
"""

from __future__ import annotations

import json
from pathlib import Path

import pydantic
import typer
import yaml

from agentcore.core.config import DEFAULT_RETRY_CONFIG, RetryConfig, load_config_file
from agentcore.execution.retry import backoff_delay

from ..output import console, create_schedule_table, format_ms, output_error


def compute_schedule(config: RetryConfig) -> list[tuple[int, float, float]]:
    """Return ``(retry number, delay ms, cumulative wait ms)`` for each retry."""
    rows: list[tuple[int, float, float]] = []
    cumulative = 0.0
    for attempt in range(config.max_retries):
        delay = backoff_delay(attempt, config)
        cumulative += delay
        rows.append((attempt + 1, delay, cumulative))
    return rows


def _build_config(
    config_file: Path | None,
    overrides: dict[str, float | int | None],
) -> RetryConfig:
    base = load_config_file(config_file).retry if config_file else DEFAULT_RETRY_CONFIG
    updates = {key: value for key, value in overrides.items() if value is not None}
    return RetryConfig.model_validate({**base.model_dump(), **updates})


def schedule(
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file whose retry section is used as the base policy",
    ),
    max_retries: int | None = typer.Option(
        None, "--max-retries", help="Retries after the first attempt",
    ),
    initial_delay_ms: float | None = typer.Option(
        None, "--initial-delay-ms", help="Delay before the first retry (ms)",
    ),
    max_delay_ms: float | None = typer.Option(
        None, "--max-delay-ms", help="Upper bound for any backoff delay (ms)",
    ),
    multiplier: float | None = typer.Option(
        None, "--multiplier", help="Backoff multiplier between retries",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the schedule as JSON",
    ),
) -> None:
    """Preview the backoff schedule of a retry policy.

    Rate-limit failures carrying a retry-after hint wait that long instead.

    Examples:
        agentcore schedule
        agentcore schedule --max-retries 5 --initial-delay-ms 500
        agentcore schedule --config agentcore.yaml --json
    """
    try:
        config = _build_config(
            config_file,
            {
                "max_retries": max_retries,
                "initial_delay_ms": initial_delay_ms,
                "max_delay_ms": max_delay_ms,
                "backoff_multiplier": multiplier,
            },
        )
    except (OSError, ValueError, yaml.YAMLError, pydantic.ValidationError) as e:
        output_error(f"Invalid retry policy: {e}")
        raise typer.Exit(1) from None

    rows = compute_schedule(config)

    if json_output:
        typer.echo(json.dumps({
            "max_retries": config.max_retries,
            "total_attempts": config.max_retries + 1,
            "delays_ms": [delay for _, delay, _ in rows],
            "total_wait_ms": rows[-1][2] if rows else 0.0,
        }, indent=2))
        return

    table = create_schedule_table(title="Retry schedule")
    for retry, delay, cumulative in rows:
        table.add_row(str(retry), format_ms(delay), format_ms(cumulative))

    console.print(table)
    console.print(
        f"[bold]Total attempts:[/bold] {config.max_retries + 1}  "
        f"[bold]Worst-case wait:[/bold] {format_ms(rows[-1][2] if rows else 0.0)}"
    )
