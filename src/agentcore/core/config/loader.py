"""YAML settings loading.

A settings file may contain a ``retry:`` section (RetryConfig fields) and
a ``logging:`` section (LogConfig fields); both are optional.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from agentcore.core.config.execution import DEFAULT_RETRY_CONFIG, RetryConfig
from agentcore.core.config.logging import LogConfig


class AgentCoreSettings(BaseModel):
    """Top-level settings document."""

    retry: RetryConfig = Field(default_factory=lambda: DEFAULT_RETRY_CONFIG)
    logging: LogConfig = Field(default_factory=LogConfig)


def load_config_file(path: Path) -> AgentCoreSettings:
    """Load and validate a YAML settings file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated settings; missing sections take their defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If a section has invalid values.
    """
    with open(path) as f:
        data: Any = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return AgentCoreSettings.model_validate(data)
