"""agentcore - execution core for LLM-backed agent workflows.

Provides the failure taxonomy, retry and timeout policies, the per-run
execution logger, and the node wrapper / graph executor used to run
agent graphs.
"""

from agentcore.core.config import DEFAULT_RETRY_CONFIG, RetryConfig
from agentcore.core.errors import (
    AgentError,
    AgentTimeoutError,
    ErrorCode,
    LLMError,
    RateLimitError,
    StateError,
    ValidationError,
    is_agent_error,
    is_retryable_error,
    normalize_error,
)
from agentcore.execution import (
    ExecutionLogger,
    ExecutionRecord,
    LogEntry,
    RetryResult,
    create_execution_logger,
    with_retry,
    with_retry_and_timeout,
    with_timeout,
)
from agentcore.graph import (
    BaseState,
    GraphContext,
    GraphExecutionConfig,
    GraphExecutionResult,
    NodeDefinition,
    create_wrapped_node,
    execute_graph,
    initial_state,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AgentError",
    "AgentTimeoutError",
    "BaseState",
    "DEFAULT_RETRY_CONFIG",
    "ErrorCode",
    "ExecutionLogger",
    "ExecutionRecord",
    "GraphContext",
    "GraphExecutionConfig",
    "GraphExecutionResult",
    "LLMError",
    "LogEntry",
    "NodeDefinition",
    "RateLimitError",
    "RetryConfig",
    "RetryResult",
    "StateError",
    "ValidationError",
    "create_execution_logger",
    "create_wrapped_node",
    "execute_graph",
    "initial_state",
    "is_agent_error",
    "is_retryable_error",
    "normalize_error",
    "with_retry",
    "with_retry_and_timeout",
    "with_timeout",
]
