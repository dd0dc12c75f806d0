"""CLI command modules for agentcore."""

from .config_cmd import config_app
from .schedule import schedule

__all__ = ["config_app", "schedule"]
