"""CLI entrypoint for pubip."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from .catalog import build_catalog
from .config import DEFAULT_DNS_TIMEOUT, DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT, LookupConfig
from .errors import ConfigError
from .filtering import SourceFilter, narrow
from .flags import Family, Protocol, SourceId
from .formatting import PROTOCOL_ARGUMENTS, describe_source, parse_protocol, parse_source_id
from .logging_utils import configure_logging, get_logger
from .resolver import lookup


def _provider_argument(value: str) -> SourceId:
    try:
        return parse_source_id(value)
    except ValueError as exc:
        choices = ", ".join(member.name for member in SourceId)
        raise argparse.ArgumentTypeError(f"{exc} (choose from {choices})") from None


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Print this host's public IP address as reported by third-party services."
    )
    parser.add_argument("-4", dest="ipv4", action="store_true", help="Filter on IPv4.")
    parser.add_argument("-6", dest="ipv6", action="store_true", help="Filter on IPv6.")
    parser.add_argument(
        "-i",
        "--id",
        dest="provider",
        type=_provider_argument,
        help="Id of a specific provider to use (case-insensitive).",
    )
    parser.add_argument(
        "-p",
        "--protocol",
        dest="protocols",
        action="append",
        choices=sorted(PROTOCOL_ARGUMENTS),
        help="Only use this protocol. May be repeated.",
    )
    parser.add_argument(
        "--list", action="store_true", help="List the matching providers and exit."
    )
    parser.add_argument(
        "--http-timeout",
        type=float,
        default=DEFAULT_HTTP_TIMEOUT,
        help="Seconds to wait for each HTTP(S) response.",
    )
    parser.add_argument(
        "--dns-timeout",
        type=float,
        default=DEFAULT_DNS_TIMEOUT,
        help="Seconds to wait for each DNS response.",
    )
    parser.add_argument(
        "--user-agent", help="HTTP User-Agent (or set PUBIP_USER_AGENT env var)."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def namespace_to_filter(args: argparse.Namespace) -> SourceFilter | None:
    """Build a SourceFilter from the filtering flags, or None when none was given."""
    families = Family(0)
    if args.ipv4:
        families |= Family.IPV4
    if args.ipv6:
        families |= Family.IPV6
    protocols = Protocol(0)
    for name in args.protocols or ():
        protocols |= parse_protocol(name)
    source_filter = SourceFilter(
        source_id=args.provider or SourceId(0), protocols=protocols, families=families
    )
    if source_filter.is_empty:
        return None
    return source_filter


def namespace_to_config(args: argparse.Namespace) -> LookupConfig:
    """Convert CLI args to validated LookupConfig."""
    user_agent = args.user_agent or os.getenv("PUBIP_USER_AGENT") or DEFAULT_USER_AGENT
    return LookupConfig(
        user_agent=user_agent,
        http_timeout=args.http_timeout,
        dns_timeout=args.dns_timeout,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    source_filter = namespace_to_filter(args)
    if args.list:
        for source in narrow(build_catalog(), source_filter, logger=logger).values():
            print(describe_source(source))
        return 0

    result = lookup(source_filter, config=config, logger=logger)
    if not result.found:
        logger.error("Failed to get public ip-address.")
        return 1
    print(result.address)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
