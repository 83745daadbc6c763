"""
Core package for SQL Monitor query discovery.

Re-exports the primary entry points so callers can simply do::

    from sqlmonitor.core import QueryLocator, sql_monitor_query
"""

from __future__ import annotations

from sqlmonitor.core.entities import ComponentData, QueryDescriptor, QueryResult
from sqlmonitor.core.errors import AmbiguousResource, InvalidQueryType, ResourceNotFound
from sqlmonitor.core.locator import QueryLocator, prepare_queries
from sqlmonitor.core.registration import SqlMonitorQuery, sql_monitor_query

__all__ = [
    "AmbiguousResource",
    "ComponentData",
    "InvalidQueryType",
    "QueryDescriptor",
    "QueryLocator",
    "QueryResult",
    "ResourceNotFound",
    "SqlMonitorQuery",
    "prepare_queries",
    "sql_monitor_query",
]
