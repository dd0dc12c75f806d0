"""Tests for the agentcore CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from typer.testing import CliRunner

from agentcore import __version__
from agentcore.cli import app
from agentcore.cli.commands.schedule import compute_schedule
from agentcore.cli.output import format_ms
from agentcore.core.config import RetryConfig

runner = CliRunner()


class TestGlobalOptions:
    """Tests for options handled by the app callback."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"agentcore v{__version__}" in result.output

    def test_invalid_log_level(self) -> None:
        result = runner.invoke(app, ["--log-level", "loud", "schedule"])
        assert result.exit_code == 1
        assert "Logging configuration error" in result.output

    def test_log_level_from_environment(self) -> None:
        result = runner.invoke(app, ["schedule", "--json"], env={"AGENTCORE_LOG_LEVEL": "debug"})
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG


class TestSchedule:
    """Tests for `agentcore schedule`."""

    def test_default_table(self) -> None:
        result = runner.invoke(app, ["schedule"])
        assert result.exit_code == 0
        assert "Retry schedule" in result.output
        for delay in ("1.0s", "2.0s", "4.0s"):
            assert delay in result.output
        assert "Total attempts: 4" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["schedule", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["delays_ms"] == [1000.0, 2000.0, 4000.0]
        assert data["total_attempts"] == 4
        assert data["total_wait_ms"] == 7000.0

    def test_overrides(self) -> None:
        result = runner.invoke(app, [
            "schedule", "--json", "--max-retries", "4",
            "--initial-delay-ms", "500", "--max-delay-ms", "2000", "--multiplier", "3",
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["delays_ms"] == [500.0, 1500.0, 2000.0, 2000.0]

    def test_zero_retries(self) -> None:
        result = runner.invoke(app, ["schedule", "--json", "--max-retries", "0"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["delays_ms"] == []
        assert data["total_attempts"] == 1
        assert data["total_wait_ms"] == 0.0

    def test_config_file_is_base(self, settings_file: Path) -> None:
        result = runner.invoke(app, ["schedule", "--json", "--config", str(settings_file)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["delays_ms"] == [100.0, 200.0]

    def test_invalid_policy(self) -> None:
        result = runner.invoke(app, ["schedule", "--max-retries=-1"])
        assert result.exit_code == 1
        assert "Invalid retry policy" in result.output

    def test_compute_schedule(self) -> None:
        config = RetryConfig(max_retries=2, initial_delay_ms=10, max_delay_ms=100)
        assert compute_schedule(config) == [(1, 10, 10), (2, 20, 30)]


class TestConfigShow:
    """Tests for `agentcore config show`."""

    def test_table(self, settings_file: Path) -> None:
        result = runner.invoke(app, ["config", "show", str(settings_file)])
        assert result.exit_code == 0
        assert "retry.max_retries" in result.output
        assert "logging.level" in result.output

    def test_json(self, settings_file: Path) -> None:
        result = runner.invoke(app, ["config", "show", "--json", str(settings_file)])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["retry"]["max_retries"] == 2
        assert data["logging"]["level"] == "DEBUG"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["config", "show", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("retry:\n  max_retries: -1\n")

        result = runner.invoke(app, ["config", "show", str(path)])
        assert result.exit_code == 1
        assert "Error loading settings" in result.output

    def test_no_subcommand_shows_help(self) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "show" in result.output


def test_format_ms() -> None:
    assert format_ms(None) == "N/A"
    assert format_ms(250) == "250ms"
    assert format_ms(4000) == "4.0s"
    assert format_ms(125000) == "2m 5s"
