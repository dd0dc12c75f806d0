"""Retry engine with bounded exponential backoff.

Pure functions decide whether a failure should be retried and how long to
wait; ``with_retry`` drives a unit of work through that policy.

Backoff schedule (zero-based attempt, defaults):
    attempt 0 -> 1000ms, 1 -> 2000ms, 2 -> 4000ms, 3 -> 8000ms, ... capped at 30000ms

Rate limits carrying a server-provided ``retry_after_ms`` bypass the
schedule: the server's wait is used verbatim.

Example usage:
    from agentcore.execution.retry import with_retry

    result = await with_retry(lambda: client.generate(prompt), {"max_retries": 2})
    if result.success:
        use(result.data)
    else:
        logger.error("generation_failed", code=result.error.code)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from agentcore.core.config import RetryConfig, RetryConfigLike, resolve_retry_config
from agentcore.core.errors import (
    AgentError,
    RateLimitError,
    is_retryable_error,
    normalize_error,
)
from agentcore.core.logging import get_logger
from agentcore.utils.tasks import call_maybe_async
from agentcore.utils.time import monotonic_ms

T = TypeVar("T")

# Module-level logger
_logger = get_logger("retry")


@dataclass
class RetryResult(Generic[T]):
    """Outcome of one ``with_retry`` invocation.

    Attributes:
        success: Whether some attempt succeeded.
        data: The successful attempt's value (None on failure).
        error: The last normalized failure (None on success).
        attempts: Calls made to the wrapped function, including the first.
        total_time_ms: Wall time from the first call to final settlement.
    """

    success: bool
    data: T | None = None
    error: AgentError | None = None
    attempts: int = 0
    total_time_ms: float = 0.0

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for logging/serialization."""
        return {
            "success": self.success,
            "attempts": self.attempts,
            "total_time_ms": round(self.total_time_ms, 2),
            "error": self.error.to_dict() if self.error else None,
        }


def backoff_delay(attempt: int, config: RetryConfig) -> float:
    """Exponential backoff delay in ms for a zero-based attempt, capped at max_delay_ms.

    Holds for arbitrarily large attempts: growth that leaves float range is
    treated as exceeding the cap.
    """
    if config.initial_delay_ms == 0:
        return 0.0
    try:
        delay = config.initial_delay_ms * (config.backoff_multiplier ** attempt)
    except OverflowError:
        return config.max_delay_ms
    return min(delay, config.max_delay_ms)


def should_retry(error: Any, attempts_so_far: int, config: RetryConfig) -> bool:
    """Decide whether another attempt is allowed.

    Args:
        error: The failure from the latest attempt.
        attempts_so_far: Retries already performed (0 after the first failure).
        config: Retry policy in effect.

    Returns:
        False once the retry budget is spent, otherwise the failure's
        retryability. Values outside the taxonomy are never retried.
    """
    if attempts_so_far >= config.max_retries:
        return False
    return is_retryable_error(error)


def retry_delay(error: Any, attempt: int, config: RetryConfig) -> float:
    """Delay in ms before the next attempt; a rate limit's retry_after_ms wins."""
    if isinstance(error, RateLimitError) and error.retry_after_ms is not None:
        return error.retry_after_ms
    return backoff_delay(attempt, config)


async def sleep(delay_ms: float) -> None:
    """Suspend the current task for ``delay_ms`` milliseconds."""
    await asyncio.sleep(max(delay_ms, 0) / 1000.0)


async def with_retry(
    fn: Callable[[], Awaitable[T] | T],
    config: RetryConfigLike = None,
) -> RetryResult[T]:
    """Run ``fn`` until it succeeds or the retry policy gives up.

    ``fn`` may be a coroutine function or a plain callable. Attempts are
    strictly sequential: the next one starts only after the previous
    failure was classified and its delay fully elapsed. Total calls never
    exceed ``max_retries + 1``.

    Args:
        fn: Zero-argument callable performing one attempt.
        config: RetryConfig, partial overrides mapping, or None for defaults.

    Returns:
        RetryResult describing the final outcome. Failures are never raised;
        task cancellation is not a failure and propagates.
    """
    final_config = resolve_retry_config(config)
    started = monotonic_ms()
    attempts = 0

    while True:
        attempts += 1
        try:
            data = await call_maybe_async(fn)
        except Exception as exc:
            error = normalize_error(exc)
            retries_done = attempts - 1
            if not should_retry(error, retries_done, final_config):
                if error.retryable:
                    _logger.warning(
                        "retry.exhausted",
                        attempts=attempts,
                        error_code=error.code,
                        error=error.message,
                    )
                return RetryResult(
                    success=False,
                    error=error,
                    attempts=attempts,
                    total_time_ms=monotonic_ms() - started,
                )

            delay = retry_delay(error, retries_done, final_config)
            _logger.info(
                "retry.scheduled",
                attempt=attempts,
                max_retries=final_config.max_retries,
                delay_ms=round(delay, 2),
                error_code=error.code,
                error=error.message,
            )
            await sleep(delay)
            continue

        return RetryResult(
            success=True,
            data=data,
            attempts=attempts,
            total_time_ms=monotonic_ms() - started,
        )


__all__ = [
    "RetryResult",
    "backoff_delay",
    "retry_delay",
    "should_retry",
    "sleep",
    "with_retry",
]
