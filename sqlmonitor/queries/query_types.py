"""
Result types for the bundled SQL Server monitor queries.
"""

from __future__ import annotations

from sqlmonitor.core.entities import ComponentData, QueryResult
from sqlmonitor.core.registration import sql_monitor_query


def _value(row: QueryResult, column: str, default=0):
    value = getattr(row, column, None)
    return default if value is None else value


@sql_monitor_query("CpuUsage.sql")
class SqlCpuUsage(QueryResult):
    """CPU split between SQL Server, other processes and idle time."""

    def add_metrics(self, component_data: ComponentData) -> None:
        component_data.add_metric("CPU/SQL Server Process Utilization", _value(self, "sql_process_utilization"))
        component_data.add_metric("CPU/Other Process Utilization", _value(self, "other_process_utilization"))
        component_data.add_metric("CPU/System Idle", _value(self, "system_idle"))


@sql_monitor_query("queries.MemoryView.sql")
class MemoryView(QueryResult):
    def add_metrics(self, component_data: ComponentData) -> None:
        component_data.add_metric("Memory/Page Life Expectancy", _value(self, "page_life_expectancy"))
        base = _value(self, "buffer_cache_hit_ratio_base")
        ratio = _value(self, "buffer_cache_hit_ratio") * 100.0 / base if base else 0.0
        component_data.add_metric("Memory/Buffer Cache Hit Ratio", ratio)


@sql_monitor_query("sqlmonitor.queries.Connections.sql")
class Connections(QueryResult):
    def add_metrics(self, component_data: ComponentData) -> None:
        database = _value(self, "database_name", "unknown")
        component_data.add_metric(f"Connections/{database}", _value(self, "connection_count"))


@sql_monitor_query("storage.FileIoView.sql", query_name="FileIoView")
@sql_monitor_query("FileIoLatency.sql", query_name="FileIoLatency")
class FileIo(QueryResult):
    """
    Per-database file I/O. Rows come from either query, so only the columns
    present on the row are reported.
    """

    _COLUMNS = {
        "bytes_read": "Bytes Read",
        "bytes_written": "Bytes Written",
        "reads": "Reads",
        "writes": "Writes",
        "io_stall_read_ms": "Read Stall (ms)",
        "io_stall_write_ms": "Write Stall (ms)",
    }

    def add_metrics(self, component_data: ComponentData) -> None:
        database = _value(self, "database_name", "unknown")
        for column, label in self._COLUMNS.items():
            if hasattr(self, column):
                component_data.add_metric(f"IO/{database}/{label}", _value(self, column))


# Off by default: the count is only meaningful with a short polling interval.
@sql_monitor_query("BlockedSessions.sql", enabled=False)
class BlockedSessions(QueryResult):
    def add_metrics(self, component_data: ComponentData) -> None:
        component_data.add_metric("Sessions/Blocked", _value(self, "blocked_sessions"))
