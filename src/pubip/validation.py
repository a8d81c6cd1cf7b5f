"""Validation and runtime guardrails."""

from __future__ import annotations

import ipaddress

from .errors import ConfigError

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def parse_ip_literal(text: str) -> IPAddress | None:
    """Return the IPv4 or IPv6 address spelled by ``text``, or None."""
    value = text.strip()
    # scoped literals (fe80::1%eth0) are never a public address
    if not value or "%" in value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def validate_runtime_constraints(
    *,
    user_agent: str,
    http_timeout: float,
    dns_timeout: float,
    dns_port: int,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if not user_agent.strip():
        raise ConfigError("--user-agent must not be empty.")
    if http_timeout <= 0:
        raise ConfigError("--http-timeout must be > 0.")
    if dns_timeout <= 0:
        raise ConfigError("--dns-timeout must be > 0.")
    if not 1 <= dns_port <= 65535:
        raise ConfigError("DNS port must be between 1 and 65535.")
