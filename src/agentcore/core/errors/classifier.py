"""Failure classification and normalization.

Every ``except`` site in agentcore passes what it caught through
``normalize_error`` before inspecting it, so the rest of the system only
ever branches on ``AgentError`` codes and flags, never on ad-hoc
exception types.
"""

from __future__ import annotations

import traceback
from typing import Any

from .codes import ErrorCode
from .models import AgentError


def is_agent_error(value: Any) -> bool:
    """Return True if ``value`` is one of the taxonomy's failure types."""
    return isinstance(value, AgentError)


def is_retryable_error(value: Any) -> bool:
    """Return the failure's retryable flag; anything outside the taxonomy is False."""
    return isinstance(value, AgentError) and value.retryable


def _with_context(message: str, context: str | None) -> str:
    return f"{context}: {message}" if context else message


def normalize_error(value: Any, context: str | None = None) -> AgentError:
    """Convert any caught value into an ``AgentError``.

    Taxonomy values are returned unchanged (same object). Native exceptions
    are wrapped with code ``UNKNOWN_ERROR`` and ``retryable=False``, keeping
    their message, type name and formatted traceback. Any other value is
    stringified.

    Args:
        value: The caught exception or arbitrary raised value.
        context: Optional prefix describing where the failure happened.

    Returns:
        An AgentError describing the failure.
    """
    if isinstance(value, AgentError):
        return value

    if isinstance(value, BaseException):
        stack = "".join(
            traceback.format_exception(type(value), value, value.__traceback__)
        )
        return AgentError(
            _with_context(str(value), context),
            ErrorCode.UNKNOWN_ERROR,
            retryable=False,
            metadata={"original_error": type(value).__name__, "stack": stack},
        )

    return AgentError(
        _with_context(str(value), context),
        ErrorCode.UNKNOWN_ERROR,
        retryable=False,
    )
