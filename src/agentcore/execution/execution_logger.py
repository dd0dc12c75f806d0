"""Per-run execution log collector.

One ``ExecutionLogger`` belongs to exactly one workflow run. It collects
ordered log entries, tracks step boundaries and token usage, and on
finalize produces an immutable ``ExecutionRecord`` that is handed to an
optional persistence callback.

State transitions:
- RUNNING -> COMPLETED via ``complete(output)``
- RUNNING -> FAILED via ``fail(error)``

Both terminal states are final; finalizing twice raises ``StateError``.

Example usage:
    logger = create_execution_logger(
        "campaign-optimizer", "user-123", {"campaign_id": "c-1"},
        on_execution_complete=repository.save,
    )
    logger.enter_step("analyze")
    logger.add_tokens(812)
    logger.exit_step("analyze", {"score": 0.7})
    record = await logger.complete({"recommendation": "raise budget"})
"""

from __future__ import annotations

import inspect
import secrets
import traceback
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from agentcore.core.constants import EXECUTION_ID_SUFFIX_LENGTH, LOG_LEVEL_PRIORITY
from agentcore.core.errors import AgentError, StateError, normalize_error
from agentcore.core.logging import get_logger
from agentcore.utils.time import epoch_ms, monotonic_ms, to_base36, utc_now

LogLevel = Literal["debug", "info", "warn", "error"]

OnLog = Callable[["LogEntry"], None]
OnExecutionComplete = Callable[["ExecutionRecord"], Awaitable[None] | None]

_logger = get_logger("execution_logger")

# structlog level for each execution log level
_AMBIENT_LEVELS: dict[str, str] = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "error": "error",
}


class ExecutionStatus(str, Enum):
    """Lifecycle status of one workflow run."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class LogEntry:
    """A single entry in an execution's log. Never mutated after append."""

    level: LogLevel
    message: str
    timestamp: datetime
    execution_id: str
    step: str | None = None
    metadata: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "level": self.level,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "execution_id": self.execution_id,
            "step": self.step,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }


@dataclass(frozen=True)
class ExecutionRecord:
    """Finalized, immutable summary of one workflow run.

    Attributes:
        id: The execution id.
        agent_type: Kind of agent/workflow that ran.
        user_id: User the run was performed for.
        input: Initial input/state of the run.
        output: Produced output (None for failed runs).
        status: COMPLETED or FAILED.
        tokens_used: Total tokens accounted via ``add_tokens``.
        duration_ms: Milliseconds between construction and finalize.
        created_at: When the logger was constructed (UTC).
        completed_at: When the run was finalized (UTC).
        error: Failure message for failed runs.
        logs: Every entry collected during the run.
    """

    id: str
    agent_type: str
    user_id: str
    input: Any
    output: Any
    status: ExecutionStatus
    tokens_used: int
    duration_ms: int
    created_at: datetime
    completed_at: datetime
    error: str | None = None
    logs: tuple[LogEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for persistence; input/output are passed through."""
        return {
            "id": self.id,
            "agent_type": self.agent_type,
            "user_id": self.user_id,
            "input": self.input,
            "output": self.output,
            "status": self.status.value,
            "tokens_used": self.tokens_used,
            "duration_ms": self.duration_ms,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "error": self.error,
            "logs": [entry.to_dict() for entry in self.logs],
        }


def _format_stack(error: Any, failure: AgentError) -> str | None:
    stack = failure.metadata.get("stack")
    if stack is None and isinstance(error, BaseException) and error.__traceback__ is not None:
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return stack


def generate_execution_id(agent_type: str) -> str:
    """Build ``{agent_type}_{base36 ms timestamp}_{random base36 suffix}``."""
    suffix = "".join(
        secrets.choice("0123456789abcdefghijklmnopqrstuvwxyz")
        for _ in range(EXECUTION_ID_SUFFIX_LENGTH)
    )
    return f"{agent_type}_{to_base36(epoch_ms())}_{suffix}"


class ExecutionLogger:
    """Collects the log of a single workflow run and finalizes it.

    Single-writer: only the execution path that owns the logger appends
    entries or tokens, so no locking is needed.
    """

    def __init__(
        self,
        agent_type: str,
        user_id: str,
        input: Any,  # noqa: A002
        *,
        min_level: LogLevel = "info",
        on_log: OnLog | None = None,
        on_execution_complete: OnExecutionComplete | None = None,
    ) -> None:
        if min_level not in LOG_LEVEL_PRIORITY:
            raise ValueError(f"min_level must be one of {sorted(LOG_LEVEL_PRIORITY)}, got {min_level!r}")

        self.agent_type = agent_type
        self.user_id = user_id
        self.input = input
        self.min_level: LogLevel = min_level
        self._on_log = on_log
        self._on_execution_complete = on_execution_complete

        self._execution_id = generate_execution_id(agent_type)
        self._created_at = utc_now()
        self._started_ms = monotonic_ms()
        self._logs: list[LogEntry] = []
        self._tokens_used = 0
        self._status = ExecutionStatus.RUNNING
        self._current_step: str | None = None
        self._last_error: BaseException | AgentError | None = None
        self._ambient = _logger.bind(execution_id=self._execution_id, agent_type=agent_type)

        self.info(f"Starting execution: {agent_type}", {"input": input})

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def execution_id(self) -> str:
        return self._execution_id

    @property
    def tokens_used(self) -> int:
        return self._tokens_used

    @property
    def status(self) -> ExecutionStatus:
        return self._status

    @property
    def current_step(self) -> str | None:
        return self._current_step

    @property
    def last_error(self) -> BaseException | AgentError | None:
        """The error passed to ``fail()``, if the run failed."""
        return self._last_error

    def get_logs(self) -> list[LogEntry]:
        """Return a copy of the collected entries, in append order."""
        return list(self._logs)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def _log(self, level: LogLevel, message: str, metadata: Mapping[str, Any] | None) -> None:
        if LOG_LEVEL_PRIORITY[level] < LOG_LEVEL_PRIORITY[self.min_level]:
            return

        entry = LogEntry(
            level=level,
            message=message,
            timestamp=utc_now(),
            execution_id=self._execution_id,
            step=self._current_step,
            metadata=MappingProxyType(dict(metadata)) if metadata is not None else None,
        )
        self._logs.append(entry)

        self._ambient.log(
            _AMBIENT_LEVELS[level], "execution_logger.entry", message=message, step=entry.step,
        )

        if self._on_log is not None:
            try:
                self._on_log(entry)
            except Exception as exc:
                self._ambient.error("execution_logger.on_log_failed", error=str(exc))

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self._log("debug", message, metadata)

    def info(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self._log("info", message, metadata)

    def warn(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self._log("warn", message, metadata)

    warning = warn

    def error(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self._log("error", message, metadata)

    def enter_step(self, name: str) -> None:
        """Record the start of a workflow step; later entries carry its name."""
        self._current_step = name
        self.info(f"Entering step: {name}", {"step": name})

    def exit_step(self, name: str, result: Any = None) -> None:
        """Record the end of a workflow step with its result payload."""
        self.info(f"Completed step: {name}", {"step": name, "result": result})

    def add_tokens(self, count: int) -> None:
        """Add ``count`` to the run's token usage."""
        self._tokens_used += count
        self.debug(
            f"Added {count} tokens (total: {self._tokens_used})",
            {"added": count, "total": self._tokens_used},
        )

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------

    async def complete(self, output: Any) -> ExecutionRecord:
        """Finalize the run as COMPLETED and hand the record to persistence."""
        self._finalize_status(ExecutionStatus.COMPLETED)
        self.info("Execution completed", {"output": output, "tokens_used": self._tokens_used})
        return await self._build_and_persist(output=output, error=None)

    async def fail(self, error: BaseException | AgentError | Any) -> ExecutionRecord:
        """Finalize the run as FAILED and hand the record to persistence."""
        self._finalize_status(ExecutionStatus.FAILED)
        self._last_error = error
        failure = normalize_error(error)
        self.error(
            f"Execution failed: {failure.message}",
            {
                "code": failure.code,
                "error": failure.message,
                "stack": _format_stack(error, failure),
            },
        )
        return await self._build_and_persist(output=None, error=failure.message)

    def _finalize_status(self, status: ExecutionStatus) -> None:
        if self._status is not ExecutionStatus.RUNNING:
            raise StateError(
                f"Execution {self._execution_id} already finalized as {self._status.value}",
                current_step=self._current_step or "",
            )
        self._status = status

    async def _build_and_persist(self, output: Any, error: str | None) -> ExecutionRecord:
        record = ExecutionRecord(
            id=self._execution_id,
            agent_type=self.agent_type,
            user_id=self.user_id,
            input=self.input,
            output=output,
            status=self._status,
            tokens_used=self._tokens_used,
            duration_ms=round(monotonic_ms() - self._started_ms),
            created_at=self._created_at,
            completed_at=utc_now(),
            error=error,
            logs=tuple(self._logs),
        )

        if self._on_execution_complete is not None:
            try:
                outcome = self._on_execution_complete(record)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as exc:
                self._ambient.error(
                    "execution_logger.persist_failed",
                    status=record.status.value,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )

        return record


def create_execution_logger(
    agent_type: str,
    user_id: str,
    input: Any,  # noqa: A002
    *,
    min_level: LogLevel = "info",
    on_log: OnLog | None = None,
    on_execution_complete: OnExecutionComplete | None = None,
) -> ExecutionLogger:
    """Create an ExecutionLogger for a new workflow run."""
    return ExecutionLogger(
        agent_type,
        user_id,
        input,
        min_level=min_level,
        on_log=on_log,
        on_execution_complete=on_execution_complete,
    )


__all__ = [
    "ExecutionLogger",
    "ExecutionRecord",
    "ExecutionStatus",
    "LogEntry",
    "LogLevel",
    "create_execution_logger",
    "generate_execution_id",
]
