"""Failure types for the agentcore error taxonomy.

This module provides:
- AgentError: Base failure with code, retryability and metadata
- LLMError: LLM/provider call failed (retryable)
- ValidationError: Input or output did not validate (not retryable)
- StateError: Workflow or logger state machine misuse (not retryable)
- AgentTimeoutError: An operation lost its timeout race (retryable)
- RateLimitError: Provider throttled us, optionally saying for how long (retryable)

All failures are immutable after construction: attributes are read-only
and metadata is exposed through a read-only mapping view.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .codes import ErrorCode


class AgentError(Exception):
    """Base failure carrying a stable code and a retryability flag.

    Example:
    ```python
    raise AgentError("Campaign sync failed", "SYNC_ERROR", retryable=True,
                     metadata={"campaign_id": "c-1"})
    ```

    Attributes:
        message: Human-readable description.
        code: Machine-readable identifier (e.g. "LLM_ERROR").
        retryable: Whether the retry engine may try again.
        metadata: Free-form contextual information.
    """

    def __init__(
        self,
        message: str,
        code: str | ErrorCode,
        retryable: bool = False,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._code = code.value if isinstance(code, ErrorCode) else str(code)
        self._retryable = retryable
        self._metadata: Mapping[str, Any] = MappingProxyType(dict(metadata or {}))

    @property
    def name(self) -> str:
        """Class name of the failure (e.g. "LLMError")."""
        return type(self).__name__

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> str:
        return self._code

    @property
    def retryable(self) -> bool:
        return self._retryable

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "metadata": dict(self.metadata),
        }

    def __repr__(self) -> str:
        return f"{self.name}(code={self.code!r}, message={self.message!r}, retryable={self.retryable})"


class LLMError(AgentError):
    """An LLM or model provider call failed."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.LLM_ERROR,
            retryable=True,
            metadata={**(metadata or {}), "provider": provider, "status_code": status_code},
        )
        self._provider = provider
        self._status_code = status_code

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def status_code(self) -> int | None:
        return self._status_code


class ValidationError(AgentError):
    """Input or output failed validation; retrying will not help."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            retryable=False,
            metadata={**(metadata or {}), "field": field},
        )
        self._field = field

    @property
    def field(self) -> str | None:
        return self._field


class StateError(AgentError):
    """The workflow reached a state it cannot continue from."""

    def __init__(
        self,
        message: str,
        current_step: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.STATE_ERROR,
            retryable=False,
            metadata={**(metadata or {}), "current_step": current_step},
        )
        self._current_step = current_step

    @property
    def current_step(self) -> str:
        return self._current_step


class AgentTimeoutError(AgentError):
    """An operation did not settle within its time budget."""

    def __init__(
        self,
        message: str,
        timeout_ms: float,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TIMEOUT_ERROR,
            retryable=True,
            metadata={**(metadata or {}), "timeout_ms": timeout_ms},
        )
        self._timeout_ms = timeout_ms

    @property
    def timeout_ms(self) -> float:
        return self._timeout_ms


class RateLimitError(AgentError):
    """A provider rejected the call because of rate limiting.

    When the provider says how long to wait (e.g. a Retry-After header),
    ``retry_after_ms`` overrides the locally computed backoff delay.
    """

    def __init__(
        self,
        message: str,
        retry_after_ms: float | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.RATE_LIMIT_ERROR,
            retryable=True,
            metadata={**(metadata or {}), "retry_after_ms": retry_after_ms},
        )
        self._retry_after_ms = retry_after_ms

    @property
    def retry_after_ms(self) -> float | None:
        return self._retry_after_ms
