"""Utility helpers for SQL Monitor."""

from .logging import configure_agent_logging, configure_runtime_logging, demote_driver_logging  # noqa: F401

__all__ = [
    "configure_agent_logging",
    "configure_runtime_logging",
    "demote_driver_logging",
]
