"""Configuration models for agentcore.

Pydantic models for retry policy and logging, re-exported so callers can
use ``from agentcore.core.config import ...``.
"""

from agentcore.core.config.execution import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    RetryConfigLike,
    resolve_retry_config,
)
from agentcore.core.config.logging import LogConfig
from agentcore.core.config.loader import AgentCoreSettings, load_config_file

__all__ = [
    "AgentCoreSettings",
    "DEFAULT_RETRY_CONFIG",
    "LogConfig",
    "RetryConfig",
    "RetryConfigLike",
    "load_config_file",
    "resolve_retry_config",
]
