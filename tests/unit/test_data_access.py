import subprocess
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError

from sqlmonitor.core.data_access import DataAccess, SqlAlchemyDataAccess


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE sessions (database_name TEXT, connection_count INTEGER)"))
        conn.execute(
            text("INSERT INTO sessions VALUES (:name, :count)"),
            [{"name": "master", "count": 3}, {"name": "tempdb", "count": 1}],
        )
    try:
        yield engine
    finally:
        engine.dispose()


def test_satisfies_protocol():
    assert isinstance(SqlAlchemyDataAccess(), DataAccess)


def test_query_with_connection_returns_mappings(engine):
    access = SqlAlchemyDataAccess()

    with engine.connect() as conn:
        rows = access.query(conn, "SELECT database_name, connection_count FROM sessions ORDER BY database_name")

    assert rows == [
        {"database_name": "master", "connection_count": 3},
        {"database_name": "tempdb", "connection_count": 1},
    ]


def test_query_with_engine_and_parameters(engine):
    access = SqlAlchemyDataAccess()

    rows = access.query(engine, "SELECT connection_count FROM sessions WHERE database_name = :db", {"db": "tempdb"})

    assert rows == [{"connection_count": 1}]


def test_query_without_rows_is_empty(engine):
    access = SqlAlchemyDataAccess()

    assert access.query(engine, "SELECT * FROM sessions WHERE 1 = 0") == []


def test_statement_without_result_set_is_empty(engine):
    access = SqlAlchemyDataAccess()

    with engine.connect() as conn:
        assert access.query(conn, "UPDATE sessions SET connection_count = 0 WHERE 1 = 0") == []


def test_statement_carries_execution_options():
    access = SqlAlchemyDataAccess(execution_options={"query_name": "row_count"})

    assert access.statement("SELECT 1").get_execution_options()["query_name"] == "row_count"
    assert "query_name" not in SqlAlchemyDataAccess().statement("SELECT 1").get_execution_options()


def test_execution_options_reach_the_cursor(engine):
    seen = []

    def record(conn, cursor, statement, parameters, context, executemany):
        seen.append(context.execution_options.get("query_name"))

    event.listen(engine, "before_cursor_execute", record)
    try:
        access = SqlAlchemyDataAccess(execution_options={"query_name": "row_count"})
        assert access.query(engine, "SELECT COUNT(*) AS n FROM sessions") == [{"n": 2}]
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert seen == ["row_count"]


def test_importing_discovery_does_not_load_sqlalchemy():
    code = (
        "import sys; import sqlmonitor; sqlmonitor.ComponentData; sqlmonitor.QueryLocator; "
        "import sqlmonitor.core.data_access; "
        "assert 'sqlalchemy' not in sys.modules, sorted(m for m in sys.modules if m.startswith('sqlalchemy'))"
    )
    root = Path(__file__).resolve().parents[2]

    completed = subprocess.run([sys.executable, "-c", code], cwd=root, capture_output=True, text=True)

    assert completed.returncode == 0, completed.stderr


def test_driver_errors_propagate(engine):
    access = SqlAlchemyDataAccess()

    with pytest.raises(OperationalError):
        access.query(engine, "SELECT * FROM missing_table")
