"""
SQL Monitor query discovery package.

This module exposes high-level entry points lazily. Nothing below imports
SQLAlchemy until a query actually runs through ``SqlAlchemyDataAccess``, so
discovery and the result types can be used without the database stack.
"""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "ComponentData",
    "QueryDescriptor",
    "QueryLocator",
    "QueryResult",
    "SqlAlchemyDataAccess",
    "prepare_queries",
    "sql_monitor_query",
    "__version__",
]


try:
    __version__ = version("sqlmonitor-core")
except PackageNotFoundError:
    __version__ = "0.0.0"


_LAZY_TARGETS = {
    "ComponentData": ("sqlmonitor.core.entities", "ComponentData"),
    "QueryDescriptor": ("sqlmonitor.core.entities", "QueryDescriptor"),
    "QueryLocator": ("sqlmonitor.core.locator", "QueryLocator"),
    "QueryResult": ("sqlmonitor.core.entities", "QueryResult"),
    "SqlAlchemyDataAccess": ("sqlmonitor.core.data_access", "SqlAlchemyDataAccess"),
    "prepare_queries": ("sqlmonitor.core.locator", "prepare_queries"),
    "sql_monitor_query": ("sqlmonitor.core.registration", "sql_monitor_query"),
}


def __getattr__(name: str):
    """Dynamically load public symbols to avoid importing optional deps early."""
    target = _LAZY_TARGETS.get(name)
    if target is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

    module_name, attribute = target
    module = import_module(module_name)
    value = getattr(module, attribute)
    globals()[name] = value  # cache for subsequent lookups
    return value
