"""Narrow the provider catalog to what a caller asked for."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .catalog import Catalog, SourceDescriptor
from .flags import Family, Protocol, SourceId
from .logging_utils import get_logger


@dataclass(frozen=True)
class SourceFilter:
    """Caller constraints. A zero flag leaves that axis unconstrained."""

    source_id: SourceId = SourceId(0)
    protocols: Protocol = Protocol(0)
    families: Family = Family(0)

    @property
    def is_empty(self) -> bool:
        return not (self.source_id or self.protocols or self.families)


def narrow_source(
    source: SourceDescriptor, source_filter: SourceFilter
) -> SourceDescriptor | None:
    """Intersect one source with the filter, or return None when it is excluded."""
    if source_filter.protocols and not source.protocols & source_filter.protocols:
        return None
    if source_filter.families and not source.families & source_filter.families:
        return None
    if source_filter.source_id and not source.source_id & source_filter.source_id:
        return None

    protocols = source.protocols
    if source_filter.protocols:
        protocols = source.protocols & source_filter.protocols
    families = source.families
    address = source.address
    if source_filter.families:
        families = source.families & source_filter.families
        address = source.address_for(families)

    return replace(
        source,
        address=address,
        protocols=protocols,
        families=families,
    )


def narrow(
    catalog: Catalog,
    source_filter: SourceFilter | None,
    *,
    logger: logging.Logger | None = None,
) -> Catalog:
    """Return the catalog entries eligible under ``source_filter``.

    Without a filter the catalog itself is returned. Otherwise each surviving
    entry keeps its key and catalog position but advertises only the
    protocols and families the filter allows. The result may be empty.
    """
    if source_filter is None:
        return catalog

    logger = logger or get_logger()
    candidates: dict[SourceId, SourceDescriptor] = {}
    for key, source in catalog.items():
        narrowed = narrow_source(source, source_filter)
        if narrowed is None:
            continue
        logger.debug("Adding valid source: %s", narrowed)
        candidates[key] = narrowed
    return candidates
