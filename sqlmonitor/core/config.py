"""Configuration helpers for SQL Monitor.

This module loads optional YAML configuration files used to switch bundled
queries off at runtime without touching their registrations. Configuration
precedence:

1. Environment variable ``SQLMONITOR_CONFIG`` pointing to a YAML file.
2. ``sqlmonitor.yaml`` in the current working directory.
3. Built-in defaults bundled with the package (``config/default.yaml``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

import yaml

__all__ = [
    "QueryConfig",
    "QueryOverride",
    "get_query_config",
    "reset_query_config",
]


_ENV_VAR = "SQLMONITOR_CONFIG"
_CWD_FILE = "sqlmonitor.yaml"


@dataclass
class QueryOverride:
    name: str
    enabled: bool = True


@dataclass
class QueryConfig:
    overrides: List[QueryOverride] = field(default_factory=list)
    log_level: int = logging.INFO

    @property
    def disabled_queries(self) -> FrozenSet[str]:
        return frozenset(entry.name for entry in self.overrides if not entry.enabled)

    def is_disabled(self, *names: str) -> bool:
        disabled = self.disabled_queries
        return any(name in disabled for name in names)


_query_config: Optional[QueryConfig] = None


def _resolve_config_path() -> Optional[Path]:
    env_path = os.environ.get(_ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate

    cwd_file = Path.cwd() / _CWD_FILE
    if cwd_file.is_file():
        return cwd_file
    return None


def _load_yaml_dict() -> Dict[str, object]:
    path = _resolve_config_path()
    if path is not None:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}

    # Fallback to bundled default configuration
    from importlib import resources

    default = resources.files("sqlmonitor.config").joinpath("default.yaml")
    return yaml.safe_load(default.read_text(encoding="utf-8")) or {}


def _coerce_override(raw: Dict[str, object]) -> QueryOverride:
    name = str(raw.get("name", "")).strip()
    if not name:
        raise ValueError("Query override requires a non-empty 'name'")
    enabled = bool(raw.get("enabled", True))
    return QueryOverride(name=name, enabled=enabled)


def _coerce_log_level(raw: object) -> int:
    if isinstance(raw, int):
        return raw
    level = logging.getLevelName(str(raw).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level '{raw}'")
    return level


def _build_query_config(data: Dict[str, object]) -> QueryConfig:
    raw_entries = data.get("queries", [])
    overrides: List[QueryOverride] = []

    if isinstance(raw_entries, list):
        for item in raw_entries:
            if not isinstance(item, dict):
                raise ValueError("Each query override must be a mapping")
            overrides.append(_coerce_override(item))
    elif raw_entries:
        raise ValueError("'queries' must be a list of mappings")

    node = data.get("logging", {}) or {}
    if not isinstance(node, dict):
        raise ValueError("'logging' section must be a mapping")
    log_level = _coerce_log_level(node.get("level", "INFO"))

    return QueryConfig(overrides=overrides, log_level=log_level)


def get_query_config() -> QueryConfig:
    global _query_config
    if _query_config is None:
        _query_config = _build_query_config(_load_yaml_dict())
    return _query_config


def reset_query_config() -> None:
    """Reset cached query configuration (intended for tests)."""
    global _query_config
    _query_config = None
