"""
Prepared, invocable monitor queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

if TYPE_CHECKING:
    from sqlmonitor.core.data_access import DataAccess


@dataclass(frozen=True)
class QueryDescriptor:
    """
    A query whose SQL has been resolved and bound to a data-access collaborator.

    Calling the descriptor runs the SQL through ``data_access`` and returns
    one ``result_type`` instance per row. The descriptor keeps no connection
    state, so it may be invoked any number of times, from any thread.
    """

    query: str
    resource_name: str
    resolved_name: str
    query_name: str
    result_type: type
    data_access: Optional["DataAccess"] = field(default=None, repr=False, compare=False)

    @property
    def result_type_name(self) -> str:
        return self.result_type.__name__

    def invoke(self, connection: Any, parameters: Optional[Mapping[str, Any]] = None) -> List[Any]:
        if self.data_access is None:
            raise RuntimeError(f"Query '{self.query_name}' is not bound to a data-access collaborator.")

        rows = self.data_access.query(connection, self.query, parameters)
        from_row = getattr(self.result_type, "from_row", None)
        if from_row is None:
            return list(rows or ())
        return [from_row(row) for row in rows or ()]

    __call__ = invoke
