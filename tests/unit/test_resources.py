from pathlib import Path

import pytest

from sqlmonitor.core.errors import AmbiguousResource, ResourceNotFound
from sqlmonitor.core.resources import (
    DirectoryResourceCatalog,
    MappingResourceCatalog,
    PackageResourceCatalog,
    file_name,
    resolve_resource,
    resolve_resource_name,
)

NAMES = {
    "NS.Core.ExampleEmbeddedFile.sql",
    "NS.Queries.ExampleEmbeddedFile.sql",
    "NS.Queries.AnotherQuery.sql",
}


def test_exact_name_wins():
    assert resolve_resource_name(NAMES, "NS.Core.ExampleEmbeddedFile.sql") == "NS.Core.ExampleEmbeddedFile.sql"


def test_partial_name_matches_unique_suffix():
    assert resolve_resource_name(NAMES, "Queries.ExampleEmbeddedFile.sql") == "NS.Queries.ExampleEmbeddedFile.sql"


def test_file_name_matches_unique_entry():
    assert resolve_resource_name(NAMES, "AnotherQuery.sql") == "NS.Queries.AnotherQuery.sql"


def test_ambiguous_suffix_is_rejected():
    with pytest.raises(AmbiguousResource) as excinfo:
        resolve_resource_name(NAMES, "ExampleEmbeddedFile.sql")

    assert excinfo.value.candidates == (
        "NS.Core.ExampleEmbeddedFile.sql",
        "NS.Queries.ExampleEmbeddedFile.sql",
    )
    assert isinstance(excinfo.value, LookupError)


def test_missing_resource_is_reported():
    with pytest.raises(ResourceNotFound) as excinfo:
        resolve_resource_name(NAMES, "Foo.sql")

    assert excinfo.value.identifier == "Foo.sql"


def test_resolution_is_case_sensitive():
    with pytest.raises(ResourceNotFound):
        resolve_resource_name(NAMES, "anotherquery.sql")


def test_suffix_must_align_with_a_segment():
    with pytest.raises(ResourceNotFound):
        resolve_resource_name({"NS.Queries.MyAnotherQuery.sql"}, "AnotherQuery.sql")


def test_file_name_finds_path_style_names():
    names = {"reports/daily/Locks.sql", "NS.Queries.AnotherQuery.sql"}

    assert resolve_resource_name(names, "Locks.sql") == "reports/daily/Locks.sql"


def test_ambiguous_path_style_file_name_is_rejected():
    with pytest.raises(AmbiguousResource) as excinfo:
        resolve_resource_name({"a/Locks.sql", "b/Locks.sql"}, "Locks.sql")

    assert excinfo.value.candidates == ("a/Locks.sql", "b/Locks.sql")


def test_suffix_match_takes_precedence_over_file_name():
    names = {"NS.Queries.Locks.sql", "reports/Locks.sql"}

    assert resolve_resource_name(names, "Locks.sql") == "NS.Queries.Locks.sql"


def test_namespaced_identifier_skips_file_name_strategy():
    with pytest.raises(ResourceNotFound):
        resolve_resource_name({"reports/Locks.sql"}, "daily.Locks.sql")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("NS.Queries.AnotherQuery.sql", "AnotherQuery.sql"),
        ("AnotherQuery.sql", "AnotherQuery.sql"),
        ("reports/daily/Locks.sql", "Locks.sql"),
        ("README", "README"),
    ],
)
def test_file_name(name, expected):
    assert file_name(name) == expected


def test_resolve_resource_returns_text():
    catalog = MappingResourceCatalog({"NS.Queries.AnotherQuery.sql": "SELECT 1"})

    assert resolve_resource(catalog, "AnotherQuery.sql") == "SELECT 1"


def test_mapping_catalog_unknown_name():
    catalog = MappingResourceCatalog({})

    assert catalog.list_resource_names() == frozenset()
    with pytest.raises(ResourceNotFound):
        catalog.get_resource_text("Foo.sql")


def test_directory_catalog_walks_subdirectories(tmp_path: Path):
    (tmp_path / "storage").mkdir()
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / "CpuUsage.sql").write_text("SELECT 1", encoding="utf-8")
    (tmp_path / "storage" / "FileIoView.sql").write_text("SELECT 2", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "__pycache__" / "stale.sql").write_text("ignored", encoding="utf-8")

    catalog = DirectoryResourceCatalog(tmp_path, namespace="agent.queries")

    assert catalog.list_resource_names() == {
        "agent.queries.CpuUsage.sql",
        "agent.queries.storage.FileIoView.sql",
    }
    assert resolve_resource(catalog, "storage.FileIoView.sql") == "SELECT 2"


def test_directory_catalog_requires_directory(tmp_path: Path):
    with pytest.raises(ValueError):
        DirectoryResourceCatalog(tmp_path / "missing")


def test_directory_catalog_sees_updated_files(tmp_path: Path):
    catalog = DirectoryResourceCatalog(tmp_path)
    with pytest.raises(ResourceNotFound):
        resolve_resource(catalog, "Late.sql")

    (tmp_path / "Late.sql").write_text("SELECT 3", encoding="utf-8")

    assert resolve_resource(catalog, "Late.sql") == "SELECT 3"


def test_package_catalog_lists_bundled_queries():
    catalog = PackageResourceCatalog("sqlmonitor")
    names = catalog.list_resource_names()

    assert "sqlmonitor.queries.CpuUsage.sql" in names
    assert "sqlmonitor.queries.storage.FileIoView.sql" in names
    assert all(name.endswith(".sql") for name in names)
    assert "sys.dm_os_ring_buffers" in catalog.get_resource_text("sqlmonitor.queries.CpuUsage.sql")


def test_snapshot_keeps_names_and_text_from_one_walk(tmp_path: Path):
    (tmp_path / "CpuUsage.sql").write_text("SELECT 1", encoding="utf-8")
    catalog = DirectoryResourceCatalog(tmp_path, namespace="agent")

    snapshot = catalog.snapshot()
    (tmp_path / "Late.sql").write_text("SELECT 2", encoding="utf-8")

    assert snapshot.list_resource_names() == {"agent.CpuUsage.sql"}
    assert snapshot.get_resource_text("agent.CpuUsage.sql") == "SELECT 1"
    with pytest.raises(ResourceNotFound):
        snapshot.get_resource_text("agent.Late.sql")
    assert "agent.Late.sql" in catalog.list_resource_names()


def test_mapping_catalog_snapshot_is_itself():
    catalog = MappingResourceCatalog({"a.Q.sql": "SELECT 1"})

    assert catalog.snapshot() is catalog


class CountingPackageCatalog(PackageResourceCatalog):
    walks = 0

    def _files(self):
        self.walks += 1
        return super()._files()


def test_locator_walks_catalog_once_per_preparation():
    from sqlmonitor.core.config import QueryConfig
    from sqlmonitor.core.locator import QueryLocator
    from sqlmonitor.queries import FileIo, MemoryView, SqlCpuUsage

    catalog = CountingPackageCatalog("sqlmonitor")
    locator = QueryLocator(None, catalog=catalog, config=QueryConfig())

    queries = locator.prepare_queries([SqlCpuUsage, MemoryView, FileIo])

    assert len(queries) == 4
    assert catalog.walks == 1
