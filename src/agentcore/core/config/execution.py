"""Retry configuration models.

Defines the immutable retry policy consumed by the retry engine and the
node wrapper, plus the helper that merges partial overrides over the
global defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from agentcore.core.constants import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_DELAY_MS,
    DEFAULT_MAX_DELAY_MS,
    DEFAULT_MAX_RETRIES,
)
from agentcore.core.errors import RETRYABLE_CODES


class RetryConfig(BaseModel):
    """Configuration for retry behavior of a node or a single call.

    All delays are in milliseconds. ``retryable_codes`` is informational:
    whether a failure is retried comes from the failure's own
    ``retryable`` flag.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        ge=0,
        description="Retries allowed after the first attempt (0 = single attempt)",
    )
    initial_delay_ms: float = Field(
        default=DEFAULT_INITIAL_DELAY_MS,
        ge=0,
        description="Delay before the first retry",
    )
    max_delay_ms: float = Field(
        default=DEFAULT_MAX_DELAY_MS,
        ge=0,
        description="Cap applied to every computed backoff delay, including the first",
    )
    backoff_multiplier: float = Field(
        default=DEFAULT_BACKOFF_MULTIPLIER,
        gt=0,
        description="Exponential backoff growth factor",
    )
    retryable_codes: frozenset[str] = Field(
        default_factory=lambda: frozenset(code.value for code in RETRYABLE_CODES),
        description="Codes expected to be retryable (informational only)",
    )


DEFAULT_RETRY_CONFIG = RetryConfig()
"""Policy used when a node or call specifies none."""


RetryConfigLike = RetryConfig | Mapping[str, Any] | None


def resolve_retry_config(
    config: RetryConfigLike = None,
    base: RetryConfig = DEFAULT_RETRY_CONFIG,
) -> RetryConfig:
    """Merge a full or partial retry configuration over ``base``.

    Args:
        config: A complete RetryConfig (returned as-is), a mapping of field
            overrides (e.g. ``{"max_retries": 0}``), or None for ``base``.
        base: Configuration supplying every field not overridden.

    Returns:
        A validated, immutable RetryConfig.

    Raises:
        pydantic.ValidationError: If the merged values are invalid.
    """
    if config is None:
        return base
    if isinstance(config, RetryConfig):
        return config
    return RetryConfig.model_validate({**base.model_dump(), **dict(config)})
