"""Tests for the retry engine."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from agentcore.core.config import DEFAULT_RETRY_CONFIG, RetryConfig
from agentcore.core.errors import LLMError, RateLimitError, ValidationError
from agentcore.execution.retry import (
    RetryResult,
    backoff_delay,
    retry_delay,
    should_retry,
    with_retry,
)


class TestBackoffDelay:
    """Tests for the exponential backoff schedule."""

    def test_default_schedule(self) -> None:
        delays = [backoff_delay(attempt, DEFAULT_RETRY_CONFIG) for attempt in range(4)]
        assert delays == [1000, 2000, 4000, 8000]

    def test_capped_at_max_delay(self) -> None:
        assert backoff_delay(10, DEFAULT_RETRY_CONFIG) == 30000

    def test_capped_for_huge_attempts(self) -> None:
        assert backoff_delay(2000, DEFAULT_RETRY_CONFIG) == 30000
        assert backoff_delay(5000, DEFAULT_RETRY_CONFIG) == 30000

    def test_initial_above_max_is_capped(self) -> None:
        config = RetryConfig(initial_delay_ms=5000, max_delay_ms=1000)
        assert backoff_delay(0, config) == 1000

    def test_zero_initial_delay(self) -> None:
        config = RetryConfig(initial_delay_ms=0)
        assert backoff_delay(5000, config) == 0

    def test_custom_multiplier(self) -> None:
        config = RetryConfig(initial_delay_ms=100, backoff_multiplier=3, max_delay_ms=1000)
        assert [backoff_delay(a, config) for a in range(4)] == [100, 300, 900, 1000]


class TestShouldRetry:
    """Tests for the retry decision."""

    def test_retryable_within_budget(self) -> None:
        assert should_retry(LLMError("x", provider="p"), 0, DEFAULT_RETRY_CONFIG)
        assert should_retry(LLMError("x", provider="p"), 2, DEFAULT_RETRY_CONFIG)

    def test_budget_exhausted(self) -> None:
        assert not should_retry(LLMError("x", provider="p"), 3, DEFAULT_RETRY_CONFIG)

    def test_non_retryable(self) -> None:
        assert not should_retry(ValidationError("x"), 0, DEFAULT_RETRY_CONFIG)

    def test_native_exception_never_retried(self) -> None:
        assert not should_retry(ValueError("x"), 0, DEFAULT_RETRY_CONFIG)


class TestRetryDelay:
    """Tests for the per-failure delay."""

    def test_rate_limit_hint_used_verbatim(self) -> None:
        err = RateLimitError("slow down", retry_after_ms=45000)
        assert retry_delay(err, 0, DEFAULT_RETRY_CONFIG) == 45000

    def test_rate_limit_without_hint_uses_backoff(self) -> None:
        assert retry_delay(RateLimitError("slow down"), 1, DEFAULT_RETRY_CONFIG) == 2000

    def test_other_failures_use_backoff(self) -> None:
        assert retry_delay(LLMError("x", provider="p"), 2, DEFAULT_RETRY_CONFIG) == 4000


class TestWithRetry:
    """Tests for with_retry."""

    @pytest.mark.asyncio
    async def test_first_attempt_success(self) -> None:
        fn = AsyncMock(return_value="ok")

        result = await with_retry(fn)

        assert isinstance(result, RetryResult)
        assert result.success is True
        assert result.data == "ok"
        assert result.error is None
        assert result.attempts == 1
        fn.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sync_callable(self) -> None:
        result = await with_retry(lambda: 42)
        assert result.success is True
        assert result.data == 42

    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failures(self, fast_retry: RetryConfig) -> None:
        fn = AsyncMock(side_effect=[
            LLMError("overloaded", provider="p"),
            LLMError("overloaded", provider="p"),
            "done",
        ])

        result = await with_retry(fn, fast_retry)

        assert result.success is True
        assert result.data == "done"
        assert result.attempts == 3

    @pytest.mark.asyncio
    async def test_non_retryable_fails_immediately(self, fast_retry: RetryConfig) -> None:
        error = ValidationError("bad input")
        fn = AsyncMock(side_effect=error)

        result = await with_retry(fn, fast_retry)

        assert result.success is False
        assert result.error is error
        assert result.attempts == 1
        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_exhausts_retry_budget(self) -> None:
        fn = AsyncMock(side_effect=LLMError("down", provider="p"))

        result = await with_retry(
            fn, {"max_retries": 2, "initial_delay_ms": 1, "max_delay_ms": 1},
        )

        assert result.success is False
        assert result.attempts == 3
        assert fn.await_count == 3
        assert result.error is not None
        assert result.error.code == "LLM_ERROR"

    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self) -> None:
        fn = AsyncMock(side_effect=LLMError("down", provider="p"))

        result = await with_retry(fn, {"max_retries": 0})

        assert result.success is False
        assert result.attempts == 1
        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_native_exception_is_normalized(self, fast_retry: RetryConfig) -> None:
        fn = MagicMock(side_effect=KeyError("missing"))

        result = await with_retry(fn, fast_retry)

        assert result.success is False
        assert result.attempts == 1
        assert result.error is not None
        assert result.error.code == "UNKNOWN_ERROR"
        assert result.error.metadata["original_error"] == "KeyError"

    @pytest.mark.asyncio
    async def test_sleeps_follow_backoff_schedule(self) -> None:
        fn = AsyncMock(side_effect=LLMError("down", provider="p"))

        with patch("agentcore.execution.retry.sleep", new=AsyncMock()) as sleep:
            result = await with_retry(fn)

        assert result.attempts == 4
        assert [c.args[0] for c in sleep.await_args_list] == [1000, 2000, 4000]

    @pytest.mark.asyncio
    async def test_rate_limit_hint_overrides_backoff(self) -> None:
        fn = AsyncMock(side_effect=[RateLimitError("slow down", retry_after_ms=45000), "ok"])

        with patch("agentcore.execution.retry.sleep", new=AsyncMock()) as sleep:
            result = await with_retry(fn)

        assert result.success is True
        sleep.assert_awaited_once_with(45000)

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, fast_retry: RetryConfig) -> None:
        fn = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await with_retry(fn, fast_retry)

        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_initial_delay_above_default_cap(self) -> None:
        fn = AsyncMock(side_effect=[LLMError("down", provider="p"), "ok"])

        with patch("agentcore.execution.retry.sleep", new=AsyncMock()) as sleep:
            result = await with_retry(fn, {"initial_delay_ms": 60000})

        assert result.success is True
        sleep.assert_awaited_once_with(30000)

    @pytest.mark.asyncio
    async def test_result_to_dict(self, fast_retry: RetryConfig) -> None:
        result = await with_retry(AsyncMock(side_effect=ValidationError("bad")), fast_retry)

        data = result.to_dict()
        assert data["success"] is False
        assert data["attempts"] == 1
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert result.total_time_ms >= 0
