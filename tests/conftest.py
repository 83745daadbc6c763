"""
Shared pytest fixtures.
"""

from __future__ import annotations

import logging

import pytest

from sqlmonitor.core.config import reset_query_config

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s", force=True)
logging.getLogger("sqlmonitor").setLevel(logging.DEBUG)


class RecordingDataAccess:
    """Fake data-access collaborator returning canned rows and recording calls."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.calls = []

    def query(self, connection, sql, parameters=None):
        self.calls.append((connection, sql, parameters))
        return list(self.rows)


@pytest.fixture(autouse=True)
def clear_query_config(monkeypatch, tmp_path):
    """Keep a developer's sqlmonitor.yaml or SQLMONITOR_CONFIG out of the tests."""
    monkeypatch.delenv("SQLMONITOR_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_query_config()
    yield
    reset_query_config()


@pytest.fixture
def data_access():
    return RecordingDataAccess()
