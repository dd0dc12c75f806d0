"""Timeout racing for units of asynchronous work.

``with_timeout`` races the work against a timer. When the timer wins the
work is abandoned, not cancelled (unless ``cancel=True``): it may keep
running in the background, but whatever it eventually returns or raises
is retrieved and discarded. A strong reference to abandoned tasks is
held until they settle so they are not garbage-collected mid-flight.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from agentcore.core.config import RetryConfigLike
from agentcore.core.errors import AgentTimeoutError
from agentcore.core.logging import get_logger
from agentcore.execution.retry import RetryResult, with_retry
from agentcore.utils.tasks import call_maybe_async, log_task_exception

T = TypeVar("T")

_logger = get_logger("timeout")

_abandoned_tasks: set[asyncio.Task[Any]] = set()


def _discard_late_result(task: asyncio.Task[Any]) -> None:
    _abandoned_tasks.discard(task)
    log_task_exception(task, _logger, "timeout.late_failure_discarded", level="debug")


async def with_timeout(
    fn: Callable[[], Awaitable[T] | T],
    timeout_ms: float,
    *,
    cancel: bool = False,
) -> T:
    """Run ``fn`` and give up waiting after ``timeout_ms`` milliseconds.

    Args:
        fn: Zero-argument callable performing the work.
        timeout_ms: Time budget in milliseconds.
        cancel: Cancel the work when the timer wins instead of abandoning it.

    Returns:
        Whatever ``fn`` returned, when it settled first.

    Raises:
        AgentTimeoutError: If the timer elapsed first (carries ``timeout_ms``).
        Exception: Whatever ``fn`` raised, when it settled first.
    """
    task: asyncio.Task[T] = asyncio.ensure_future(call_maybe_async(fn))
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000.0)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    if cancel:
        task.cancel()
    _abandoned_tasks.add(task)
    task.add_done_callback(_discard_late_result)
    _logger.debug("timeout.expired", timeout_ms=timeout_ms, cancelled=cancel)
    raise AgentTimeoutError(f"Operation timed out after {timeout_ms}ms", timeout_ms)


async def with_retry_and_timeout(
    fn: Callable[[], Awaitable[T] | T],
    timeout_ms: float,
    config: RetryConfigLike = None,
) -> RetryResult[T]:
    """Retry ``fn`` with every attempt independently bounded by ``timeout_ms``.

    A timed-out attempt is an ``AgentTimeoutError``, which is retryable, so
    it consumes one retry like any other transient failure. A retry does not
    assume the previous timed-out attempt has stopped running.
    """
    return await with_retry(lambda: with_timeout(fn, timeout_ms), config)


__all__ = ["with_retry_and_timeout", "with_timeout"]
