"""Logging configuration model.

Controls the ambient structlog output (level, format, optional file)
used by ``agentcore.core.logging.configure_logging``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class LogConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable",
    )
    file_path: Path | None = Field(
        default=None,
        description="Optional file receiving log output in addition to stderr",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include ISO8601 UTC timestamps in log entries",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_level(cls, data: object) -> object:
        if isinstance(data, dict) and isinstance(data.get("level"), str):
            data = {**data, "level": data["level"].upper()}
        return data
