"""
Bundled monitor queries.

Each result type below is registered with the SQL file(s) that fill it; the
``.sql`` files live next to this module and are catalogued as
``sqlmonitor.queries.<path>``.
"""

from .query_types import (  # noqa: F401
    BlockedSessions,
    Connections,
    FileIo,
    MemoryView,
    SqlCpuUsage,
)

__all__ = [
    "BlockedSessions",
    "Connections",
    "FileIo",
    "MemoryView",
    "SqlCpuUsage",
]
