"""Utility modules for agentcore."""

from agentcore.utils.time import epoch_ms, monotonic_ms, to_base36, utc_now

__all__ = ["epoch_ms", "monotonic_ms", "to_base36", "utc_now"]
