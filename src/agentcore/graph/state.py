"""Workflow state shape shared by wrapped nodes and the graph executor.

Every agent graph's state extends ``BaseState``. The node wrapper and
executor only read and write ``errors`` and ``current_step``; all other
keys pass through untouched.

``errors`` is replaced, not concatenated, when a node returns it: the
wrapper always returns the full existing list plus its own entry. Graph
engines with per-channel reducers should use last-value semantics for it.
"""

from __future__ import annotations

from typing import Any, TypedDict

from agentcore.core.constants import INITIAL_STEP


class BaseState(TypedDict):
    """Minimum state every workflow carries."""

    errors: list[str]
    current_step: str


def initial_state(**fields: Any) -> dict[str, Any]:
    """Build a fresh workflow state with empty errors and the initial step.

    Args:
        **fields: Extra workflow-specific keys (may also override the defaults).

    Returns:
        A new state dict.
    """
    return {"errors": [], "current_step": INITIAL_STEP, **fields}


def state_errors(state: Any) -> list[str]:
    """Return the errors recorded in ``state`` (empty if absent or None)."""
    if state is None:
        return []
    errors = state.get("errors") if hasattr(state, "get") else getattr(state, "errors", None)
    return list(errors or [])


__all__ = ["BaseState", "initial_state", "state_errors"]
