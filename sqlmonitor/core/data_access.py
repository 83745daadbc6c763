"""
Data-access collaborators that execute monitor query text.

SQLAlchemy is imported when :class:`SqlAlchemyDataAccess` is used, not when
this module is, so discovery and result types work without the database
stack loaded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.elements import TextClause

logger = logging.getLogger(__name__)


@runtime_checkable
class DataAccess(Protocol):
    """Executes query text and returns the rows as mappings."""

    def query(
        self,
        connection: Any,
        sql: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Sequence[Mapping[str, Any]]:
        ...


class SqlAlchemyDataAccess:
    """
    Runs query text through SQLAlchemy.

    ``connection`` may be an open :class:`~sqlalchemy.engine.Connection` or an
    :class:`~sqlalchemy.engine.Engine`, in which case a connection is opened
    for the duration of the call. Errors raised by the driver are not caught.

    ``execution_options`` are attached to every statement; driver level
    timeouts belong on the engine the caller creates.
    """

    def __init__(self, *, execution_options: Optional[Dict[str, Any]] = None):
        self.execution_options: Dict[str, Any] = dict(execution_options or {})

    def statement(self, sql: str) -> "TextClause":
        """Build the executable clause for ``sql`` with the configured options."""
        from sqlalchemy import text

        clause = text(sql)
        if self.execution_options:
            clause = clause.execution_options(**self.execution_options)
        return clause

    def query(
        self,
        connection: Union["Connection", "Engine"],
        sql: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> List[Mapping[str, Any]]:
        from sqlalchemy.engine import Engine

        if isinstance(connection, Engine):
            with connection.connect() as conn:
                return self._execute(conn, sql, parameters)
        return self._execute(connection, sql, parameters)

    def _execute(
        self,
        connection: "Connection",
        sql: str,
        parameters: Optional[Mapping[str, Any]],
    ) -> List[Mapping[str, Any]]:
        result = connection.execute(self.statement(sql), dict(parameters or {}))
        if not result.returns_rows:
            return []
        rows = [dict(row) for row in result.mappings().all()]
        logger.debug("Query returned %d row(s)", len(rows))
        return rows


__all__ = ["DataAccess", "SqlAlchemyDataAccess"]
