"""
Declarative query registrations.

A result type advertises the SQL it is filled from with one or more
``@sql_monitor_query`` decorators::

    @sql_monitor_query("CpuUsage.sql")
    @sql_monitor_query("CpuUsageHistory.sql", enabled=False)
    class CpuUsage(QueryResult):
        ...

Registrations are kept in a module-level table populated at import time,
so scanning a scope is an iteration over that table instead of reflection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, TypeVar

T = TypeVar("T", bound=type)

_REGISTRATIONS_ATTR = "__sqlmonitor_queries__"


@dataclass(frozen=True)
class SqlMonitorQuery:
    """Where to find the SQL for a query and whether it runs."""

    resource_name: str
    enabled: bool = True
    query_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.resource_name, str) or not self.resource_name.strip():
            raise ValueError("Query resource name must be a non-empty string.")
        if self.query_name is not None and (not isinstance(self.query_name, str) or not self.query_name.strip()):
            raise ValueError("Query name override must be a non-blank string.")

    def display_name(self, query_type: type) -> str:
        return self.query_name or query_type.__name__


_QUERY_REGISTRY: Dict[type, Tuple[SqlMonitorQuery, ...]] = {}


def sql_monitor_query(
    resource_name: str,
    *,
    enabled: bool = True,
    query_name: Optional[str] = None,
) -> Callable[[T], T]:
    """
    Attach a query registration to the decorated class.

    Args:
        resource_name: Fully-qualified, partial or bare file name of the
            bundled SQL resource.
        enabled: Disabled registrations are skipped by the locator.
        query_name: Display name override; defaults to the class name.

    Decorators apply bottom-up, so each new registration is prepended to
    keep the order in which they are written on the class.
    """
    registration = SqlMonitorQuery(resource_name=resource_name, enabled=enabled, query_name=query_name)

    def decorator(cls: T) -> T:
        if not isinstance(cls, type):
            raise TypeError("@sql_monitor_query can only decorate classes.")
        # vars() so a subclass never inherits its base's registrations
        existing = vars(cls).get(_REGISTRATIONS_ATTR, ())
        registrations = (registration,) + tuple(existing)
        setattr(cls, _REGISTRATIONS_ATTR, registrations)
        _QUERY_REGISTRY[cls] = registrations
        return cls

    return decorator


def get_registrations(cls: type) -> Tuple[SqlMonitorQuery, ...]:
    """Return the registrations declared on ``cls`` itself, in declaration order."""
    return _QUERY_REGISTRY.get(cls, ())


def registered_types() -> tuple[type, ...]:
    """Return every registered class in registration order."""
    return tuple(_QUERY_REGISTRY)


def unregister_query_type(cls: type) -> None:
    """Drop ``cls`` from the registry; silently returns when it is unknown."""
    _QUERY_REGISTRY.pop(cls, None)
    if _REGISTRATIONS_ATTR in vars(cls):
        delattr(cls, _REGISTRATIONS_ATTR)


__all__ = [
    "SqlMonitorQuery",
    "sql_monitor_query",
    "get_registrations",
    "registered_types",
    "unregister_query_type",
]
