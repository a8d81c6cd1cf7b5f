"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = "pubip/1.0 (+https://pypi.org/project/pubip/)"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_DNS_TIMEOUT = 5.0
DEFAULT_DNS_PORT = 53


@dataclass(frozen=True)
class LookupConfig:
    """Validated settings for the network clients used by a lookup."""

    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    dns_timeout: float = DEFAULT_DNS_TIMEOUT
    dns_port: int = DEFAULT_DNS_PORT

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            user_agent=self.user_agent,
            http_timeout=self.http_timeout,
            dns_timeout=self.dns_timeout,
            dns_port=self.dns_port,
        )
