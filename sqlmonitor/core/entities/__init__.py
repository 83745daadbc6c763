"""
Domain entities shared by the locator, the bundled queries and schedulers.
"""

from .metrics import ComponentData, QueryResult, has_result_capability  # noqa: F401
from .query import QueryDescriptor  # noqa: F401

__all__ = [
    "ComponentData",
    "QueryResult",
    "QueryDescriptor",
    "has_result_capability",
]
