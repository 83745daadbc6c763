"""
Result contract for query types and the metrics payload they fold into.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

Number = Union[int, float]


class ComponentData:
    """Aggregate metrics payload for one collection cycle of one component."""

    def __init__(self, name: str, guid: Optional[str] = None, duration: int = 60):
        self.name = name
        self.guid = guid
        self.duration = duration
        self.metrics: "OrderedDict[str, Number]" = OrderedDict()

    def add_metric(self, name: str, value: Number) -> None:
        """Record ``value`` under ``name``; a later value for the same name wins."""
        if not name:
            raise ValueError("Metric name must be a non-empty string.")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Metric '{name}' must be numeric, got {type(value).__name__}")
        self.metrics[name] = value

    def __len__(self) -> int:
        return len(self.metrics)

    def __iter__(self) -> Iterator[Tuple[str, Number]]:
        return iter(self.metrics.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "guid": self.guid,
            "duration": self.duration,
            "metrics": dict(self.metrics),
        }


class QueryResult(ABC):
    """
    Base class for the row types produced by monitor queries.

    Each row returned for a query becomes one instance through
    :meth:`from_row`; the scheduler then calls :meth:`add_metrics` so the
    row can contribute its values to the cycle's :class:`ComponentData`.
    """

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "QueryResult":
        """Build an instance with one attribute per column of ``row``."""
        instance = cls.__new__(cls)
        for column, value in row.items():
            setattr(instance, column, value)
        return instance

    @abstractmethod
    def add_metrics(self, component_data: ComponentData) -> None:
        """Fold this row into ``component_data``."""


def has_result_capability(query_type: type) -> bool:
    """True if ``query_type`` exposes a callable ``add_metrics``."""
    if not isinstance(query_type, type):
        return False
    if issubclass(query_type, QueryResult):
        return True
    return callable(getattr(query_type, "add_metrics", None))
