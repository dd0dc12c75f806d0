"""Failure taxonomy and classification.

Re-exports all public symbols so callers can import from
``agentcore.core.errors`` directly.
"""

from agentcore.core.errors.codes import RETRYABLE_CODES, ErrorCode
from agentcore.core.errors.models import (
    AgentError,
    AgentTimeoutError,
    LLMError,
    RateLimitError,
    StateError,
    ValidationError,
)
from agentcore.core.errors.classifier import (
    is_agent_error,
    is_retryable_error,
    normalize_error,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "AgentError",
    "AgentTimeoutError",
    "LLMError",
    "RateLimitError",
    "StateError",
    "ValidationError",
    "is_agent_error",
    "is_retryable_error",
    "normalize_error",
]
