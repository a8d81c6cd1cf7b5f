"""Static catalog of public IP lookup providers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import ConfigError
from .flags import ANY_FAMILY, DNS_PROTOCOLS, WEB_PROTOCOLS, Family, Protocol, SourceId

Catalog = Mapping[SourceId, "SourceDescriptor"]


@dataclass(frozen=True)
class SourceDescriptor:
    """What one provider can do and where to reach it.

    ``address`` is a hostname, optionally followed by a path. The family
    specific overrides are used instead of it when a lookup is narrowed to a
    single address family. ``server`` names the DNS server to ask and is
    required for the DNS protocols.
    """

    source_id: SourceId
    address: str
    protocols: Protocol
    families: Family
    address_ipv4: str | None = None
    address_ipv6: str | None = None
    server: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.source_id, SourceId) or self.source_id.value.bit_count() != 1:
            raise ConfigError(f"Source must name exactly one provider: {self.source_id!r}")
        if not self.address:
            raise ConfigError(f"{self.source_id.name} has no address.")
        if not self.protocols:
            raise ConfigError(f"{self.source_id.name} advertises no protocol.")
        if not self.families:
            raise ConfigError(f"{self.source_id.name} advertises no address family.")
        if self.protocols & DNS_PROTOCOLS and not self.server:
            raise ConfigError(f"{self.source_id.name} uses DNS but has no server.")

    def address_for(self, families: Family) -> str:
        """Return the address to query when answers are limited to ``families``."""
        if families == Family.IPV4 and self.address_ipv4:
            return self.address_ipv4
        if families == Family.IPV6 and self.address_ipv6:
            return self.address_ipv6
        return self.address


def build_catalog() -> Catalog:
    """Return the read-only provider table in lookup order."""
    sources = (
        SourceDescriptor(
            source_id=SourceId.ICANHAZIP,
            address="icanhazip.com",
            address_ipv4="ipv4.icanhazip.com",
            address_ipv6="ipv6.icanhazip.com",
            protocols=WEB_PROTOCOLS,
            families=ANY_FAMILY,
        ),
        SourceDescriptor(
            source_id=SourceId.IFCONFIGME,
            address="ifconfig.me/ip",
            protocols=WEB_PROTOCOLS,
            families=Family.IPV4,
        ),
        SourceDescriptor(
            source_id=SourceId.IPIFY,
            address="api.ipify.org",
            address_ipv4="api.ipify.org",
            address_ipv6="api64.ipify.org",
            protocols=WEB_PROTOCOLS,
            families=ANY_FAMILY,
        ),
        SourceDescriptor(
            source_id=SourceId.OPENDNS,
            address="myip.opendns.com",
            server="resolver1.opendns.com",
            protocols=Protocol.DNS,
            families=ANY_FAMILY,
        ),
        SourceDescriptor(
            source_id=SourceId.GOOGLEDNSTXT,
            address="o-o.myaddr.l.google.com",
            server="ns1.google.com",
            protocols=Protocol.DNS_TXT,
            families=ANY_FAMILY,
        ),
    )
    return MappingProxyType({source.source_id: source for source in sources})
