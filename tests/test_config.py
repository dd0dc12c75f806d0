"""Tests for retry/logging configuration models and settings loading."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from agentcore.core.config import (
    DEFAULT_RETRY_CONFIG,
    AgentCoreSettings,
    LogConfig,
    RetryConfig,
    load_config_file,
    resolve_retry_config,
)


class TestRetryConfig:
    """Tests for RetryConfig validation."""

    def test_defaults(self) -> None:
        config = RetryConfig()
        assert config.max_retries == 3
        assert config.initial_delay_ms == 1000
        assert config.max_delay_ms == 30000
        assert config.backoff_multiplier == 2
        assert config.retryable_codes == {"LLM_ERROR", "TIMEOUT_ERROR", "RATE_LIMIT_ERROR"}

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RetryConfig(max_retries=-1)

    def test_initial_above_max_allowed(self) -> None:
        config = RetryConfig(initial_delay_ms=5000, max_delay_ms=1000)
        assert config.initial_delay_ms == 5000

    def test_non_positive_multiplier_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RetryConfig(backoff_multiplier=0)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RetryConfig(retries=3)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        config = RetryConfig()
        with pytest.raises(pydantic.ValidationError):
            config.max_retries = 5  # type: ignore[misc]


class TestResolveRetryConfig:
    """Tests for merging partial overrides."""

    def test_none_returns_defaults(self) -> None:
        assert resolve_retry_config(None) is DEFAULT_RETRY_CONFIG

    def test_full_config_returned_as_is(self) -> None:
        config = RetryConfig(max_retries=1)
        assert resolve_retry_config(config) is config

    def test_partial_override(self) -> None:
        config = resolve_retry_config({"max_retries": 0})
        assert config.max_retries == 0
        assert config.initial_delay_ms == DEFAULT_RETRY_CONFIG.initial_delay_ms

    def test_custom_base(self) -> None:
        base = RetryConfig(max_retries=7)
        assert resolve_retry_config({"initial_delay_ms": 10}, base).max_retries == 7

    def test_initial_override_above_default_cap(self) -> None:
        config = resolve_retry_config({"initial_delay_ms": 60000})
        assert config.initial_delay_ms == 60000
        assert config.max_delay_ms == DEFAULT_RETRY_CONFIG.max_delay_ms

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            resolve_retry_config({"max_retries": -2})


class TestLogConfig:
    """Tests for LogConfig."""

    def test_level_is_case_insensitive(self) -> None:
        assert LogConfig(level="debug").level == "DEBUG"  # type: ignore[arg-type]

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            LogConfig(level="loud")  # type: ignore[arg-type]


class TestLoadConfigFile:
    """Tests for YAML settings loading."""

    def test_loads_sections(self, settings_file: Path) -> None:
        settings = load_config_file(settings_file)

        assert isinstance(settings, AgentCoreSettings)
        assert settings.retry.max_retries == 2
        assert settings.retry.initial_delay_ms == 100
        assert settings.retry.max_delay_ms == 30000
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "json"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        settings = load_config_file(path)

        assert settings.retry == DEFAULT_RETRY_CONFIG
        assert settings.logging.level == "INFO"

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config_file(path)

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("retry:\n  max_retries: -1\n")

        with pytest.raises(pydantic.ValidationError):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config_file(tmp_path / "missing.yaml")
