"""Human-readable rendering of flag values for the command line."""

from __future__ import annotations

from enum import Flag

from .catalog import SourceDescriptor
from .flags import Family, Protocol, SourceId

DISPLAY_NAMES: dict[Flag, str] = {
    Protocol.HTTP: "HTTP",
    Protocol.HTTPS: "HTTPS",
    Protocol.DNS: "DNS",
    Protocol.DNS_TXT: "DNS (TXT)",
    Family.IPV4: "IPv4",
    Family.IPV6: "IPv6",
}

PROTOCOL_ARGUMENTS = {
    "http": Protocol.HTTP,
    "https": Protocol.HTTPS,
    "dns": Protocol.DNS,
    "dns-txt": Protocol.DNS_TXT,
}


def format_flags(value: Flag) -> str:
    """Render a flag value as ``"IPv4|IPv6"``; the empty value renders as ``-``."""
    names = [
        DISPLAY_NAMES.get(member, str(member.name))
        for member in type(value)
        if member in value
    ]
    return "|".join(names) or "-"


def parse_source_id(name: str) -> SourceId:
    """Look up a provider by name, ignoring case."""
    try:
        return SourceId[name.strip().upper()]
    except KeyError:
        raise ValueError(f"unknown provider: {name!r}") from None


def parse_protocol(name: str) -> Protocol:
    try:
        return PROTOCOL_ARGUMENTS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown protocol: {name!r}") from None


def describe_source(source: SourceDescriptor) -> str:
    """One catalog line: id, address, protocols, families and DNS server."""
    parts = [
        f"{source.source_id.name:<13}",
        f"{source.address:<26}",
        f"{format_flags(source.protocols):<11}",
        format_flags(source.families),
    ]
    if source.server:
        parts.append(f"via {source.server}")
    return " ".join(parts)
