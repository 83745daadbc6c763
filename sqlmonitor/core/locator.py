"""
Query locator: turns registered query types into prepared descriptors.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlmonitor.core.config import QueryConfig, get_query_config
from sqlmonitor.core.data_access import DataAccess
from sqlmonitor.core.entities import QueryDescriptor, has_result_capability
from sqlmonitor.core.errors import InvalidQueryType, QueryDiscoveryError
from sqlmonitor.core.registration import SqlMonitorQuery, get_registrations
from sqlmonitor.core.resources import PackageResourceCatalog, ResourceCatalog, resolve_resource_name
from sqlmonitor.core.scanner import Scope, scan, scope_name

logger = logging.getLogger(__name__)

Candidate = Tuple[type, Tuple[SqlMonitorQuery, ...]]


class QueryLocator:
    """
    Finds every ``@sql_monitor_query`` type in a scope and prepares its queries.

    Preparation is all-or-nothing: an invalid type or an unresolvable resource
    on any enabled registration aborts the whole call, so a collection cycle
    never runs with a silently shortened query list.
    """

    def __init__(
        self,
        data_access: Optional[DataAccess],
        scope: Optional[Scope] = None,
        exclude_types: Iterable[type] = (),
        *,
        catalog: Optional[ResourceCatalog] = None,
        config: Optional[QueryConfig] = None,
    ) -> None:
        self.data_access = data_access
        self.scope = scope_name(scope)
        self.exclude_types = frozenset(exclude_types)
        self._catalog = catalog
        self._config = config

    @property
    def catalog(self) -> ResourceCatalog:
        if self._catalog is None:
            # Resources ship in the top-level package of the scanned scope.
            self._catalog = PackageResourceCatalog(self.scope.split(".", 1)[0])
        return self._catalog

    @property
    def config(self) -> QueryConfig:
        return self._config if self._config is not None else get_query_config()

    def _candidates(self, query_types: Optional[Sequence[type]]) -> List[Candidate]:
        if query_types is None:
            return [(cls, regs) for cls, regs in scan(self.scope) if cls not in self.exclude_types]
        return [(cls, get_registrations(cls)) for cls in query_types if get_registrations(cls)]

    def prepare_queries(self, query_types: Optional[Sequence[type]] = None) -> List[QueryDescriptor]:
        """
        Build one descriptor per enabled registration.

        Args:
            query_types: Explicit candidate types, replacing the scope scan.

        Raises:
            InvalidQueryType: A registered type has no ``add_metrics``.
            ResourceNotFound: An enabled registration's resource is missing.
            AmbiguousResource: An enabled registration matches several resources.
        """
        try:
            return self._prepare(self._candidates(query_types))
        except QueryDiscoveryError as exc:
            logger.error("Query preparation for scope %s failed: %s", self.scope, exc)
            raise

    def _prepare(self, candidates: List[Candidate]) -> List[QueryDescriptor]:
        for cls, _ in candidates:
            if not has_result_capability(cls):
                raise InvalidQueryType(cls)

        catalog = self.catalog.snapshot()
        names = catalog.list_resource_names()
        config = self.config

        descriptors: List[QueryDescriptor] = []
        skipped = 0
        for cls, registrations in candidates:
            for registration in registrations:
                query_name = registration.display_name(cls)
                if not registration.enabled or config.is_disabled(query_name, cls.__name__):
                    skipped += 1
                    logger.debug("Skipping disabled query %s (%s)", query_name, registration.resource_name)
                    continue

                resolved = resolve_resource_name(names, registration.resource_name)
                descriptor = QueryDescriptor(
                    query=catalog.get_resource_text(resolved),
                    resource_name=registration.resource_name,
                    resolved_name=resolved,
                    query_name=query_name,
                    result_type=cls,
                    data_access=self.data_access,
                )
                logger.debug("Prepared query %s from %s", query_name, resolved)
                descriptors.append(descriptor)

        logger.info(
            "Prepared %d quer%s from scope %s (%d disabled)",
            len(descriptors),
            "y" if len(descriptors) == 1 else "ies",
            self.scope,
            skipped,
        )
        return descriptors


def prepare_queries(data_access: Optional[DataAccess], **kwargs) -> List[QueryDescriptor]:
    """Prepare the queries of the default scope; ``kwargs`` go to :class:`QueryLocator`."""
    return QueryLocator(data_access, **kwargs).prepare_queries()


__all__ = ["QueryLocator", "prepare_queries"]
