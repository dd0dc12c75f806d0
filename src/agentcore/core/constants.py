"""Global constants for agentcore.

Centralizes the numbers that define default retry behaviour and log
filtering, making them discoverable and consistent.
"""

# =============================================================================
# Retry Defaults (milliseconds)
# =============================================================================

DEFAULT_MAX_RETRIES = 3
"""Retries allowed after the first attempt when a node specifies none."""

DEFAULT_INITIAL_DELAY_MS = 1000.0
"""Delay before the first retry."""

DEFAULT_MAX_DELAY_MS = 30000.0
"""Upper bound for any computed backoff delay."""

DEFAULT_BACKOFF_MULTIPLIER = 2.0
"""Growth factor applied per retry attempt."""

# =============================================================================
# Execution Logger
# =============================================================================

LOG_LEVEL_PRIORITY: dict[str, int] = {
    "debug": 0,
    "info": 1,
    "warn": 2,
    "error": 3,
}
"""Ordering used for minimum-level filtering of execution log entries."""

EXECUTION_ID_SUFFIX_LENGTH = 9
"""Number of random base36 characters at the end of an execution id."""

UNKNOWN_USER_ID = "unknown"
"""User id recorded when a node runs without a configured user."""

INITIAL_STEP = "init"
"""current_step value of a freshly built workflow state."""
