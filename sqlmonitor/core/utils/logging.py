"""Logging utilities for SQL Monitor components."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from sqlmonitor.core.config import QueryConfig, get_query_config

_HANDLER_NAME = "_sqlmonitor_stream_handler"
_DRIVER_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")
DEFAULT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def _agent_handler(root: logging.Logger) -> Optional[logging.Handler]:
    return next((h for h in root.handlers if getattr(h, _HANDLER_NAME, False)), None)


def configure_runtime_logging(level: int = logging.INFO, formatter: Optional[logging.Formatter] = None) -> logging.Handler:
    """
    Route agent logs to stdout through a single tagged handler.

    Repeated calls reuse the handler and only update its level and format.
    The root logger is lowered to ``level`` when it would otherwise filter
    records out, never raised.
    """
    root = logging.getLogger()
    handler = _agent_handler(root)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        setattr(handler, _HANDLER_NAME, True)
        root.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(formatter or logging.Formatter(DEFAULT_FORMAT, datefmt="%H:%M:%S"))

    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)
    return handler


def demote_driver_logging(level: int = logging.WARNING) -> None:
    """Quiet SQLAlchemy's engine and pool loggers below ``level``."""
    for name in _DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(level)


def configure_agent_logging(config: Optional[QueryConfig] = None) -> logging.Handler:
    """
    Apply the ``logging.level`` of the agent configuration.

    Driver loggers stay at WARNING unless the configured level is stricter,
    so DEBUG output shows query preparation without per-statement echo.
    """
    config = config if config is not None else get_query_config()
    handler = configure_runtime_logging(config.log_level)
    demote_driver_logging(max(config.log_level, logging.WARNING))
    return handler
