"""Execution policies (retry, timeout) and the per-run execution logger."""

from agentcore.execution.execution_logger import (
    ExecutionLogger,
    ExecutionRecord,
    ExecutionStatus,
    LogEntry,
    LogLevel,
    create_execution_logger,
    generate_execution_id,
)
from agentcore.execution.retry import (
    RetryResult,
    backoff_delay,
    retry_delay,
    should_retry,
    with_retry,
)
from agentcore.execution.timeout import with_retry_and_timeout, with_timeout

__all__ = [
    "ExecutionLogger",
    "ExecutionRecord",
    "ExecutionStatus",
    "LogEntry",
    "LogLevel",
    "RetryResult",
    "backoff_delay",
    "create_execution_logger",
    "generate_execution_id",
    "retry_delay",
    "should_retry",
    "with_retry",
    "with_retry_and_timeout",
    "with_timeout",
]
