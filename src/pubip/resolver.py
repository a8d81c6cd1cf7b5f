"""Walk the candidate sources and return the first address one reports."""

from __future__ import annotations

import logging

from .catalog import Catalog, SourceDescriptor, build_catalog
from .config import LookupConfig
from .filtering import SourceFilter, narrow
from .flags import DNS_PROTOCOLS, Protocol
from .logging_utils import get_logger
from .models import AddressRecord, DnsQuerier, HttpGetter, ResolvedResult, TextRecord
from .transport import DnsFetcher, HttpFetcher, make_session
from .validation import IPAddress, parse_ip_literal

WEB_ATTEMPT_ORDER = ((Protocol.HTTPS, "https"), (Protocol.HTTP, "http"))


def fetch_dns(
    source: SourceDescriptor, *, dns_fetcher: DnsQuerier, logger: logging.Logger
) -> IPAddress | None:
    """Ask the source's DNS server and interpret the first answer record."""
    logger.info("Fetching from %s", source.server)
    # server is required for DNS protocols
    answers = dns_fetcher.query(source.address, source.server)  # type: ignore[arg-type]
    if not answers:
        logger.debug("Empty DNS answer for %s from %s", source.address, source.server)
        return None
    first = answers[0]
    if isinstance(first, AddressRecord):
        return parse_ip_literal(first.address)
    if isinstance(first, TextRecord):
        return parse_ip_literal(first.text)
    logger.debug("Unusable %s answer from %s", first.rdtype, source.server)
    return None


def fetch_source(
    source: SourceDescriptor,
    *,
    http_fetcher: HttpGetter,
    dns_fetcher: DnsQuerier,
    logger: logging.Logger,
) -> IPAddress | None:
    """Try each protocol the source supports: HTTPS, then HTTP, then DNS."""
    for protocol, scheme in WEB_ATTEMPT_ORDER:
        if protocol not in source.protocols:
            continue
        url = f"{scheme}://{source.address}"
        logger.info("Fetching from %s", url)
        address = parse_ip_literal(http_fetcher.fetch(url))
        if address is not None:
            return address
        logger.debug("No IP address in response from %s", url)

    if source.protocols & DNS_PROTOCOLS:
        return fetch_dns(source, dns_fetcher=dns_fetcher, logger=logger)
    return None


def resolve(
    candidates: Catalog,
    *,
    http_fetcher: HttpGetter,
    dns_fetcher: DnsQuerier,
    logger: logging.Logger,
) -> ResolvedResult:
    """Return the first address any candidate reports, in candidate order."""
    for source in candidates.values():
        address = fetch_source(
            source, http_fetcher=http_fetcher, dns_fetcher=dns_fetcher, logger=logger
        )
        if address is not None:
            logger.debug("Resolved %s via %s", address, source.source_id.name)
            return ResolvedResult(address=address)
    return ResolvedResult()


def lookup(
    source_filter: SourceFilter | None = None,
    *,
    config: LookupConfig | None = None,
    catalog: Catalog | None = None,
    logger: logging.Logger | None = None,
) -> ResolvedResult:
    """Build concrete clients, narrow the catalog and resolve the public address."""
    config = config or LookupConfig()
    logger = logger or get_logger()
    candidates = narrow(
        catalog if catalog is not None else build_catalog(), source_filter, logger=logger
    )
    if not candidates:
        logger.debug("No source matches the filter.")
        return ResolvedResult()

    session = make_session(config.user_agent)
    try:
        return resolve(
            candidates,
            http_fetcher=HttpFetcher(
                session=session, timeout=config.http_timeout, logger=logger
            ),
            dns_fetcher=DnsFetcher(
                timeout=config.dns_timeout, port=config.dns_port, logger=logger
            ),
            logger=logger,
        )
    finally:
        session.close()
