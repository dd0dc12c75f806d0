"""Structured logging infrastructure for agentcore.

agentcore emits its own diagnostics (retry decisions, timeout races,
persistence callback failures) through structlog. This is the ambient
side channel; the per-run audit trail lives in
``agentcore.execution.execution_logger``.

Example usage:
    from agentcore.core.logging import get_logger, configure_logging

    configure_logging(level="DEBUG", format="console")

    logger = get_logger("retry")
    logger.info("retry.scheduled", attempt=2, delay_ms=2000)

    run_logger = logger.bind(execution_id="campaign-agent_lx1abc_4k2j9d8s1")
    run_logger.debug("node.entered", node="analyze")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from agentcore.core.config.logging import LogConfig

LevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

REDACTED = "[REDACTED]"

# Key fragments whose values never reach a log sink. Plain "token" is
# deliberately absent so usage counters like tokens_used stay visible.
SENSITIVE_PATTERNS = frozenset({
    "api_key",
    "apikey",
    "api-key",
    "access_token",
    "refresh_token",
    "secret",
    "password",
    "credential",
    "bearer",
    "authorization",
})


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(pattern in lowered for pattern in SENSITIVE_PATTERNS)


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: REDACTED if _is_sensitive(k) else _redact(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_redact(item) for item in value]
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor replacing sensitive values at any nesting depth."""
    return _redact(event_dict)


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class AgentCoreLogger:
    """Component-scoped logger delegating to structlog.

    The structlog logger is resolved on every call, so module-level
    instances created at import time follow a later configure_logging().
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    @property
    def component(self) -> str:
        return self._component

    def bind(self, **context: Any) -> AgentCoreLogger:
        """Return a new logger carrying extra context; the component is fixed."""
        merged = {**self._context, **context}
        merged.pop("component", None)
        return AgentCoreLogger(self._component, **merged)

    def log(self, level: str, event: str, **kw: Any) -> None:
        """Emit ``event`` at a level given by name ("debug", "warning", ...)."""
        bound = structlog.get_logger().bind(**self._context)
        getattr(bound, level)(event, **kw)

    def debug(self, event: str, **kw: Any) -> None:
        self.log("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self.log("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self.log("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self.log("error", event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log at error level with the active exception's traceback."""
        self.log("exception", event, **kw)


def _get_processors(
    format: Literal["json", "console"],  # noqa: A002
    include_timestamps: bool,
) -> list[Processor]:
    chain: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]
    if include_timestamps:
        chain.append(_add_timestamp)
    chain += [
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    chain.append(renderer)
    return chain


def _build_handlers(file_path: Path | None, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
    return handlers


def configure_logging(
    level: LevelName = "INFO",
    format: Literal["json", "console"] = "console",  # noqa: A002
    file_path: Path | None = None,
    include_timestamps: bool = True,
) -> None:
    """Route agentcore logging through structlog and the stdlib root logger.

    Replaces any handlers already on the root logger. Host applications
    that configure structlog themselves can skip this.

    Args:
        level: Minimum level to emit.
        format: "json" for machine-readable lines, "console" for humans.
        file_path: Optional file that receives a copy of every line.
        include_timestamps: Add an ISO8601 UTC ``timestamp`` field.
    """
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in _build_handlers(file_path, numeric_level):
        root.addHandler(handler)
    root.setLevel(numeric_level)

    structlog.configure(
        processors=_get_processors(format, include_timestamps),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers exist before configuration runs
        cache_logger_on_first_use=False,
    )


def configure_logging_from(config: LogConfig) -> None:
    """Apply a LogConfig, e.g. the ``logging:`` section of a settings file."""
    configure_logging(
        level=config.level,
        format=config.format,
        file_path=config.file_path,
        include_timestamps=config.include_timestamps,
    )


def get_logger(component: str, **initial_context: Any) -> AgentCoreLogger:
    """Return a logger for ``component`` (e.g. "retry", "graph.node")."""
    return AgentCoreLogger(component, **initial_context)


__all__ = [
    "AgentCoreLogger",
    "REDACTED",
    "SENSITIVE_PATTERNS",
    "configure_logging",
    "configure_logging_from",
    "get_logger",
]
