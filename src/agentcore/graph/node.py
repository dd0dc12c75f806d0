"""Node wrapper adding logging, retry and failure capture to graph nodes.

A ``NodeDefinition`` describes one unit of business logic. Wrapping it
with ``create_wrapped_node`` produces a function with the graph engine's
node signature, ``(state, config) -> partial state``, that:

1. Resolves the run's ExecutionLogger from ``config["configurable"]``
   (or creates one scoped to the node).
2. Runs ``execute`` under the node's retry policy (and timeout, if set).
3. On success returns the node's partial state with ``current_step`` set.
4. On exhausted failure appends the failure message to ``errors`` and
   returns that instead of raising, so the graph can route on it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from agentcore.core.config import RetryConfigLike, resolve_retry_config
from agentcore.core.constants import UNKNOWN_USER_ID
from agentcore.core.errors import normalize_error
from agentcore.core.logging import get_logger
from agentcore.execution.execution_logger import ExecutionLogger, create_execution_logger
from agentcore.execution.retry import with_retry
from agentcore.execution.timeout import with_timeout
from agentcore.graph.state import state_errors

_logger = get_logger("graph.node")


@dataclass(frozen=True)
class GraphContext:
    """Per-invocation context handed to a node's ``execute``.

    Attributes:
        logger: The run's ExecutionLogger.
        user_id: User the run is performed for.
        config: The raw run configuration the graph engine passed in.
    """

    logger: ExecutionLogger
    user_id: str
    config: Mapping[str, Any] | None = None

    @property
    def configurable(self) -> Mapping[str, Any]:
        """The ``configurable`` bag of the run configuration."""
        return _configurable(self.config)


NodeFunction = Callable[[Any, GraphContext], Awaitable[Mapping[str, Any]] | Mapping[str, Any]]
WrappedNode = Callable[..., Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class NodeDefinition:
    """One named unit of business logic in an agent graph.

    Attributes:
        name: Node name; also written to ``current_step``.
        description: Human-readable purpose of the node.
        execute: ``(state, context) -> partial state``, sync or async.
        retry_config: Full RetryConfig or partial overrides; defaults if None.
        timeout_ms: Optional per-attempt time budget.
    """

    name: str
    description: str
    execute: NodeFunction
    retry_config: RetryConfigLike = None
    timeout_ms: float | None = None


def _configurable(config: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not config:
        return {}
    return config.get("configurable") or {}


def create_wrapped_node(node: NodeDefinition) -> WrappedNode:
    """Wrap a node definition with step logging, retry and failure capture.

    Args:
        node: The node to wrap.

    Returns:
        An async ``(state, config=None) -> partial state`` function. Node
        failures never raise; they are returned as an ``errors`` entry.
    """
    retry_config = resolve_retry_config(node.retry_config)

    async def wrapped(state: Any, config: Mapping[str, Any] | None = None) -> dict[str, Any]:
        configurable = _configurable(config)
        user_id = configurable.get("user_id") or UNKNOWN_USER_ID
        logger = configurable.get("logger")
        if logger is None:
            logger = create_execution_logger(node.name, user_id, state)

        context = GraphContext(logger=logger, user_id=user_id, config=config)
        logger.enter_step(node.name)

        def attempt() -> Any:
            if node.timeout_ms is not None:
                return with_timeout(lambda: node.execute(state, context), node.timeout_ms)
            return node.execute(state, context)

        result = await with_retry(attempt, retry_config)

        if not result.success:
            error = normalize_error(result.error)
            logger.error(
                f"Node failed after {result.attempts} attempts",
                {"error": error.message, "code": error.code, "attempts": result.attempts},
            )
            _logger.warning(
                "node.failed",
                node=node.name,
                attempts=result.attempts,
                error_code=error.code,
                execution_id=logger.execution_id,
            )
            return {
                "errors": [*state_errors(state), error.message],
                "current_step": node.name,
            }

        logger.exit_step(node.name, result.data)
        return {**dict(result.data or {}), "current_step": node.name}

    wrapped.__name__ = f"wrapped_{node.name}"
    wrapped.__doc__ = node.description
    return wrapped


__all__ = [
    "GraphContext",
    "NodeDefinition",
    "NodeFunction",
    "WrappedNode",
    "create_wrapped_node",
]
