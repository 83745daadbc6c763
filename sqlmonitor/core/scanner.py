"""
Discovery of registered query types within a module scope.
"""

from __future__ import annotations

import logging
import pkgutil
from importlib import import_module
from types import ModuleType
from typing import Iterator, Optional, Tuple, Union

from sqlmonitor.core.registration import SqlMonitorQuery, get_registrations, registered_types

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "sqlmonitor"

Scope = Union[str, ModuleType]


def scope_name(scope: Optional[Scope]) -> str:
    if scope is None:
        return DEFAULT_SCOPE
    if isinstance(scope, ModuleType):
        return scope.__name__
    name = str(scope).strip()
    if not name:
        raise ValueError("Scan scope must be a module or a non-empty module name.")
    return name


def _load_scope(name: str) -> None:
    """Import ``name`` and, for packages, every submodule so decorators have run."""
    module = import_module(name)
    path = getattr(module, "__path__", None)
    if path is None:
        return
    for info in pkgutil.walk_packages(path, prefix=f"{name}."):
        import_module(info.name)


def _in_scope(cls: type, name: str) -> bool:
    module = getattr(cls, "__module__", "") or ""
    return module == name or module.startswith(f"{name}.")


def scan(scope: Optional[Scope] = None) -> Iterator[Tuple[type, Tuple[SqlMonitorQuery, ...]]]:
    """
    Yield ``(query_type, registrations)`` for every registered type in ``scope``.

    ``scope`` is a module or dotted module name, defaulting to the
    ``sqlmonitor`` package. Each call rescans; nothing is cached.
    """
    name = scope_name(scope)
    _load_scope(name)

    found = 0
    for cls in registered_types():
        if not _in_scope(cls, name):
            continue
        registrations = get_registrations(cls)
        if not registrations:
            continue
        found += 1
        yield cls, registrations

    logger.debug("Scanned scope %s: %d query type(s)", name, found)


__all__ = ["DEFAULT_SCOPE", "Scope", "scan", "scope_name"]
