"""Shared utilities for asyncio.Task lifecycle.

Provides ``log_task_exception`` to extract and log exceptions from
completed tasks, used by done-callbacks on work that was abandoned by a
timeout race so late failures are retrieved instead of lost, and
``call_maybe_async`` for callables that may or may not be coroutines.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


def log_task_exception(
    task: asyncio.Task[Any],
    logger: Any,
    event: str,
    *,
    level: str = "error",
) -> BaseException | None:
    """Extract and log an exception from a completed task.

    Call this at the top of any ``add_done_callback`` handler to
    consistently surface exceptions from background tasks.

    Args:
        task: The completed task to inspect.
        logger: A structlog or agentcore logger with ``.error()``/``.debug()`` methods.
        event: Structlog-style event name (e.g. ``"timeout.late_failure"``).
        level: Log method name, ``"error"`` (default) or any other level.

    Returns:
        The exception if one was found, ``None`` if the task completed
        normally or was cancelled.
    """
    if task.cancelled():
        return None
    exc = task.exception()
    if exc is not None:
        log_fn = getattr(logger, level, logger.error)
        log_fn(event, error=str(exc), task_name=task.get_name())
    return exc


async def call_maybe_async(fn: Callable[[], Awaitable[T] | T]) -> T:
    """Call ``fn`` and await its result when it returns an awaitable.

    Lets node functions, attempts and graph invocations be written either
    as coroutine functions or as plain callables.
    """
    result = fn()
    if inspect.isawaitable(result):
        return await result
    return result
