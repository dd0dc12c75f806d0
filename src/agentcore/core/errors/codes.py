"""Error codes for the agentcore failure taxonomy.

Error Code Taxonomy
===================

Every failure raised or produced by agentcore carries a stable,
machine-readable code. Codes split into caller-recoverable failures
(retryable by default) and caller-must-fix failures (not retryable).

    | Code | Raised by | Retryable default |
    |------|-----------|-------------------|
    | LLM_ERROR | LLM/provider calls inside nodes | Yes |
    | TIMEOUT_ERROR | with_timeout | Yes |
    | RATE_LIMIT_ERROR | provider throttling | Yes |
    | VALIDATION_ERROR | input/output validation | No |
    | STATE_ERROR | invalid workflow/logger state | No |
    | UNKNOWN_ERROR | normalize_error catch-all | No |
    | EXECUTION_ERROR | aggregated node failures in execute_graph | No |

Callers that build a plain ``AgentError`` may supply any other code
string; retryability then comes only from the explicit flag.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes used throughout agentcore."""

    LLM_ERROR = "LLM_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STATE_ERROR = "STATE_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    EXECUTION_ERROR = "EXECUTION_ERROR"

    @property
    def default_retryable(self) -> bool:
        """Whether failures with this code are retried unless told otherwise."""
        return self in RETRYABLE_CODES


RETRYABLE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.LLM_ERROR,
    ErrorCode.TIMEOUT_ERROR,
    ErrorCode.RATE_LIMIT_ERROR,
})
"""Codes whose specializations default to retryable=True."""
