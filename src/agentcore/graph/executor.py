"""Graph executor: run a compiled workflow and report a uniform result.

The compiled graph is an external collaborator (e.g. a LangGraph
``CompiledStateGraph``). Anything exposing ``ainvoke(state, config)`` or
``invoke(state, config)`` works; a synchronous ``invoke`` result is used
as-is and an awaitable one is awaited.

Terminal run failure is either the invocation raising, or the graph
returning normally with node errors accumulated in ``errors``. Partial
failure is never reported as success.

Example usage:
    result = await execute_graph(
        compiled,
        initial_state(campaign_id="c-1"),
        "campaign-optimizer",
        GraphExecutionConfig(user_id="user-123", on_complete=repository.save),
    )
    if not result.success:
        notify(result.error.message)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from agentcore.core.errors import AgentError, ErrorCode, normalize_error
from agentcore.core.logging import get_logger
from agentcore.execution.execution_logger import (
    LogLevel,
    OnExecutionComplete,
    OnLog,
    create_execution_logger,
)
from agentcore.graph.state import state_errors
from agentcore.utils.tasks import call_maybe_async

_logger = get_logger("graph.executor")


class CompiledGraph(Protocol):
    """The part of a compiled workflow the executor relies on."""

    def invoke(self, state: Any, config: Mapping[str, Any] | None = None) -> Any: ...


@dataclass
class GraphExecutionConfig:
    """Options for one ``execute_graph`` run.

    Attributes:
        user_id: User the run is performed for (required).
        on_log: Synchronous sink called with every emitted LogEntry.
        on_complete: Persistence callback receiving the ExecutionRecord.
        min_level: Minimum execution log level to collect.
        configurable: Extra values placed in ``config["configurable"]`` for nodes.
    """

    user_id: str
    on_log: OnLog | None = None
    on_complete: OnExecutionComplete | None = None
    min_level: LogLevel = "info"
    configurable: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphExecutionResult:
    """Uniform outcome of a graph run.

    ``result`` holds the final workflow state whenever the graph returned,
    including runs that failed because of accumulated node errors.
    """

    success: bool
    result: Any = None
    error: AgentError | None = None


def aggregate_errors(errors: list[str]) -> AgentError:
    """Build one failure whose message contains every collected error, one per line."""
    return AgentError(
        "\n".join(errors),
        ErrorCode.EXECUTION_ERROR,
        retryable=False,
        metadata={"errors": list(errors), "error_count": len(errors)},
    )


async def _invoke(compiled_graph: Any, state: Any, run_config: dict[str, Any]) -> Any:
    ainvoke = getattr(compiled_graph, "ainvoke", None)
    if ainvoke is not None:
        return await ainvoke(state, run_config)
    return await call_maybe_async(lambda: compiled_graph.invoke(state, run_config))


async def execute_graph(
    compiled_graph: CompiledGraph,
    initial_state: Any,
    agent_type: str,
    config: GraphExecutionConfig,
) -> GraphExecutionResult:
    """Invoke a compiled graph and convert its terminal state into a result.

    Args:
        compiled_graph: Object exposing ``ainvoke`` or ``invoke``.
        initial_state: State the run starts from; also recorded as the run input.
        agent_type: Kind of agent, used for the execution id and record.
        config: Run options (user, callbacks, extra configurable values).

    Returns:
        GraphExecutionResult. Never raises for graph or node failures.
    """
    logger = create_execution_logger(
        agent_type,
        config.user_id,
        initial_state,
        min_level=config.min_level,
        on_log=config.on_log,
        on_execution_complete=config.on_complete,
    )
    run_config: dict[str, Any] = {
        "configurable": {
            **config.configurable,
            "logger": logger,
            "user_id": config.user_id,
        },
    }

    try:
        result = await _invoke(compiled_graph, initial_state, run_config)
    except Exception as exc:
        error = normalize_error(exc, f"Graph execution failed: {agent_type}")
        _logger.error(
            "graph.execution_failed",
            agent_type=agent_type,
            execution_id=logger.execution_id,
            error_code=error.code,
            error=error.message,
        )
        await logger.fail(error)
        return GraphExecutionResult(success=False, error=error)

    errors = state_errors(result)
    if errors:
        error = aggregate_errors(errors)
        _logger.warning(
            "graph.completed_with_errors",
            agent_type=agent_type,
            execution_id=logger.execution_id,
            error_count=len(errors),
        )
        await logger.fail(error)
        return GraphExecutionResult(success=False, result=result, error=error)

    output = result.get("output") if isinstance(result, Mapping) else None
    await logger.complete(output if output is not None else result)
    return GraphExecutionResult(success=True, result=result)


__all__ = [
    "CompiledGraph",
    "GraphExecutionConfig",
    "GraphExecutionResult",
    "aggregate_errors",
    "execute_graph",
]
