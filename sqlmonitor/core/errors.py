"""
Exceptions raised while discovering and preparing monitor queries.

All of them signal a packaging or configuration defect, so the locator
raises them synchronously and never retries.
"""

from __future__ import annotations

from typing import Iterable, Tuple


class QueryDiscoveryError(Exception):
    """Base class for query discovery failures."""


class InvalidQueryType(QueryDiscoveryError, TypeError):
    """A type carries a query registration but cannot fold rows into metrics."""

    def __init__(self, query_type: type) -> None:
        self.query_type = query_type
        name = getattr(query_type, "__qualname__", repr(query_type))
        super().__init__(
            f"Query type '{name}' is registered with @sql_monitor_query but does not "
            "implement add_metrics(component_data)."
        )


class ResourceResolutionError(QueryDiscoveryError, LookupError):
    """Base class for resource name resolution failures."""

    def __init__(self, identifier: str, message: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class ResourceNotFound(ResourceResolutionError):
    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"No query resource matches '{identifier}'.")


class AmbiguousResource(ResourceResolutionError):
    def __init__(self, identifier: str, candidates: Iterable[str]) -> None:
        self.candidates: Tuple[str, ...] = tuple(sorted(candidates))
        super().__init__(
            identifier,
            f"Query resource '{identifier}' is ambiguous; candidates: {', '.join(self.candidates)}",
        )


__all__ = [
    "QueryDiscoveryError",
    "InvalidQueryType",
    "ResourceResolutionError",
    "ResourceNotFound",
    "AmbiguousResource",
]
