"""Pytest fixtures for agentcore tests."""

import logging
from collections.abc import Generator

import pytest
import structlog

from agentcore.core.config import RetryConfig


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging state before and after each test.

    This ensures test isolation for logging configuration.
    """
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers[:]
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def fast_retry() -> RetryConfig:
    """Retry policy with millisecond delays so retry tests stay fast."""
    return RetryConfig(max_retries=3, initial_delay_ms=1, max_delay_ms=5)


@pytest.fixture
def settings_file(tmp_path):
    """Write a YAML settings file and return its path."""
    path = tmp_path / "agentcore.yaml"
    path.write_text(
        "retry:\n"
        "  max_retries: 2\n"
        "  initial_delay_ms: 100\n"
        "logging:\n"
        "  level: debug\n"
        "  format: json\n"
    )
    return path
