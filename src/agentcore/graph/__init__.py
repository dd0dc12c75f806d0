"""Graph integration: workflow state, node wrapper and graph executor."""

from agentcore.graph.executor import (
    CompiledGraph,
    GraphExecutionConfig,
    GraphExecutionResult,
    aggregate_errors,
    execute_graph,
)
from agentcore.graph.node import GraphContext, NodeDefinition, create_wrapped_node
from agentcore.graph.state import BaseState, initial_state, state_errors

__all__ = [
    "BaseState",
    "CompiledGraph",
    "GraphContext",
    "GraphExecutionConfig",
    "GraphExecutionResult",
    "NodeDefinition",
    "aggregate_errors",
    "create_wrapped_node",
    "execute_graph",
    "initial_state",
    "state_errors",
]
