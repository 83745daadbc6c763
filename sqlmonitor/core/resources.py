"""
Resource catalogs holding query text and resolution of short resource names.

Resource names are fully-qualified and dot-separated, mirroring the package
the file ships in: ``sqlmonitor/queries/CpuUsage.sql`` is catalogued as
``sqlmonitor.queries.CpuUsage.sql``. A query type may refer to its SQL by the
full name, by any trailing part of it (``queries.CpuUsage.sql``) or by the
bare file name (``CpuUsage.sql``).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple, Union

from sqlmonitor.core.errors import AmbiguousResource, ResourceNotFound

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES: Tuple[str, ...] = (".sql",)
_SKIPPED_DIRS = {"__pycache__"}


class ResourceCatalog(ABC):
    """Read-only set of text resources keyed by fully-qualified name."""

    @abstractmethod
    def list_resource_names(self) -> FrozenSet[str]:
        """Return every fully-qualified resource name in the catalog."""

    @abstractmethod
    def get_resource_text(self, name: str) -> str:
        """Return the text of ``name``; raises :class:`ResourceNotFound` if absent."""

    def snapshot(self) -> "ResourceCatalog":
        """Return a view whose names stay fixed for one discovery pass."""
        return self


class MappingResourceCatalog(ResourceCatalog):
    """Catalog backed by an in-memory ``{name: text}`` mapping."""

    def __init__(self, entries: Mapping[str, str]):
        self._entries: Dict[str, str] = dict(entries)

    def list_resource_names(self) -> FrozenSet[str]:
        return frozenset(self._entries)

    def get_resource_text(self, name: str) -> str:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise ResourceNotFound(name) from exc


class _TraversableCatalog(ResourceCatalog):
    """Shared walk for package and directory catalogs."""

    def __init__(self, namespace: str, suffixes: Sequence[str]):
        self.namespace = namespace.strip(".")
        self.suffixes = tuple(suffixes)

    @abstractmethod
    def _root(self):
        """Return the ``Traversable`` (or ``Path``) the catalog is rooted at."""

    def _qualify(self, parts: Iterable[str]) -> str:
        relative = ".".join(parts)
        return f"{self.namespace}.{relative}" if self.namespace else relative

    def _walk(self, node, parts: List[str]):
        for child in node.iterdir():
            if child.is_dir():
                if child.name in _SKIPPED_DIRS or child.name.startswith("."):
                    continue
                yield from self._walk(child, parts + [child.name])
            elif child.is_file() and child.name.endswith(self.suffixes):
                yield self._qualify(parts + [child.name]), child

    def _files(self) -> Dict[str, object]:
        return dict(self._walk(self._root(), []))

    def list_resource_names(self) -> FrozenSet[str]:
        return frozenset(self._files())

    def get_resource_text(self, name: str) -> str:
        return _read(self._files(), name)

    def snapshot(self) -> ResourceCatalog:
        return _CatalogSnapshot(self._files())


def _read(files: Mapping[str, object], name: str) -> str:
    node = files.get(name)
    if node is None:
        raise ResourceNotFound(name)
    return node.read_text(encoding="utf-8")


class _CatalogSnapshot(ResourceCatalog):
    """Files found by a single walk; text is read from those same nodes."""

    def __init__(self, files: Mapping[str, object]):
        self._files = dict(files)

    def list_resource_names(self) -> FrozenSet[str]:
        return frozenset(self._files)

    def get_resource_text(self, name: str) -> str:
        return _read(self._files, name)


class PackageResourceCatalog(_TraversableCatalog):
    """Query files bundled inside an importable package."""

    def __init__(self, package: str, suffixes: Sequence[str] = DEFAULT_SUFFIXES):
        super().__init__(package, suffixes)
        self.package = package

    def _root(self):
        return resources.files(self.package)

    def __repr__(self) -> str:
        return f"PackageResourceCatalog({self.package!r})"


class DirectoryResourceCatalog(_TraversableCatalog):
    """Query files under a directory on disk, qualified with ``namespace``."""

    def __init__(
        self,
        root: Union[str, Path],
        namespace: str = "",
        suffixes: Sequence[str] = DEFAULT_SUFFIXES,
    ):
        super().__init__(namespace, suffixes)
        self.root = Path(root).expanduser()
        if not self.root.is_dir():
            raise ValueError(f"Resource directory '{self.root}' does not exist.")

    def _root(self):
        return self.root

    def __repr__(self) -> str:
        return f"DirectoryResourceCatalog({str(self.root)!r}, namespace={self.namespace!r})"


def file_name(qualified_name: str) -> str:
    """
    Return the final path segment of a resource name.

    Path-style names (``reports/daily/Locks.sql``) end at the last ``/``;
    dotted names end with the last dotted stem plus its extension.
    """
    if "/" in qualified_name:
        return qualified_name.rpartition("/")[2]
    stem, dot, extension = qualified_name.rpartition(".")
    if not dot:
        return qualified_name
    return f"{stem.rpartition('.')[2]}.{extension}"


def _unique(identifier: str, matches: List[str]) -> str | None:
    if len(matches) > 1:
        raise AmbiguousResource(identifier, matches)
    return matches[0] if matches else None


def resolve_resource_name(names: Iterable[str], identifier: str) -> str:
    """
    Resolve ``identifier`` to exactly one fully-qualified name in ``names``.

    Strategies are tried in order and the first one with a match wins:

    1. exact name;
    2. unique name ending with ``"." + identifier``;
    3. for identifiers without a namespace, unique name whose file name
       equals ``identifier``; this is what finds path-style names such as
       ``reports/Locks.sql`` from ``Locks.sql``.

    Raises:
        AmbiguousResource: A strategy matched more than one name.
        ResourceNotFound: No strategy matched.
    """
    available = frozenset(names)
    if identifier in available:
        return identifier

    suffix = f".{identifier}"
    match = _unique(identifier, sorted(name for name in available if name.endswith(suffix)))
    if match is not None:
        return match

    if "/" not in identifier and identifier.count(".") <= 1:
        match = _unique(identifier, sorted(name for name in available if file_name(name) == identifier))
        if match is not None:
            return match

    raise ResourceNotFound(identifier)


def resolve_resource(catalog: ResourceCatalog, identifier: str) -> str:
    """Resolve ``identifier`` against ``catalog`` and return the resource text."""
    name = resolve_resource_name(catalog.list_resource_names(), identifier)
    logger.debug("Resolved query resource %s -> %s", identifier, name)
    return catalog.get_resource_text(name)


__all__ = [
    "DEFAULT_SUFFIXES",
    "ResourceCatalog",
    "MappingResourceCatalog",
    "PackageResourceCatalog",
    "DirectoryResourceCatalog",
    "file_name",
    "resolve_resource_name",
    "resolve_resource",
]
