"""Closed flag sets describing source capabilities and filter constraints."""

from __future__ import annotations

from enum import Flag, auto


class Protocol(Flag):
    """Transport a source can be queried over."""

    HTTP = auto()
    HTTPS = auto()
    DNS = auto()
    DNS_TXT = auto()


class Family(Flag):
    """Address family a source can answer with."""

    IPV4 = auto()
    IPV6 = auto()


class SourceId(Flag):
    """One member per known lookup provider."""

    ICANHAZIP = auto()
    IFCONFIGME = auto()
    IPIFY = auto()
    OPENDNS = auto()
    GOOGLEDNSTXT = auto()


WEB_PROTOCOLS = Protocol.HTTP | Protocol.HTTPS
DNS_PROTOCOLS = Protocol.DNS | Protocol.DNS_TXT
ANY_FAMILY = Family.IPV4 | Family.IPV6
