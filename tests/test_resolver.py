import ipaddress
import logging

import pytest

from pubip import resolver
from pubip.catalog import SourceDescriptor, build_catalog
from pubip.filtering import SourceFilter
from pubip.flags import ANY_FAMILY, WEB_PROTOCOLS, Family, Protocol, SourceId
from pubip.models import AddressRecord, AnswerRecord, OtherRecord, ResolvedResult, TextRecord
from pubip.resolver import fetch_source, lookup, resolve


class FakeHttpFetcher:
    def __init__(self, bodies: dict[str, str] | None = None) -> None:
        self._bodies = bodies or {}
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self._bodies.get(url, "")


class FakeDnsFetcher:
    def __init__(self, answers: dict[str, list[AnswerRecord]] | None = None) -> None:
        self._answers = answers or {}
        self.calls: list[tuple[str, str]] = []

    def query(self, target: str, server: str) -> list[AnswerRecord]:
        self.calls.append((target, server))
        return self._answers.get(target, [])


LOGGER = logging.getLogger("test")


def _web_source(source_id: SourceId, address: str) -> SourceDescriptor:
    return SourceDescriptor(
        source_id=source_id, address=address, protocols=WEB_PROTOCOLS, families=ANY_FAMILY
    )


def _txt_source() -> SourceDescriptor:
    return SourceDescriptor(
        source_id=SourceId.GOOGLEDNSTXT,
        address="o-o.myaddr.l.google.com",
        server="ns1.google.com",
        protocols=Protocol.DNS_TXT,
        families=ANY_FAMILY,
    )


def test_resolve_empty_candidates_is_not_found() -> None:
    http = FakeHttpFetcher()
    dns_fetcher = FakeDnsFetcher()
    result = resolve({}, http_fetcher=http, dns_fetcher=dns_fetcher, logger=LOGGER)
    assert result == ResolvedResult()
    assert result.found is False
    assert http.calls == []
    assert dns_fetcher.calls == []


def test_https_success_short_circuits() -> None:
    http = FakeHttpFetcher({"https://api.ipify.org": "203.0.113.7"})
    dns_fetcher = FakeDnsFetcher()
    candidates = {
        SourceId.IPIFY: _web_source(SourceId.IPIFY, "api.ipify.org"),
        SourceId.GOOGLEDNSTXT: _txt_source(),
    }
    result = resolve(candidates, http_fetcher=http, dns_fetcher=dns_fetcher, logger=LOGGER)
    assert result.found is True
    assert result.address == ipaddress.ip_address("203.0.113.7")
    assert http.calls == ["https://api.ipify.org"]
    assert dns_fetcher.calls == []


def test_falls_back_from_https_to_http() -> None:
    http = FakeHttpFetcher({"http://icanhazip.com": "198.51.100.4"})
    source = _web_source(SourceId.ICANHAZIP, "icanhazip.com")
    address = fetch_source(
        source, http_fetcher=http, dns_fetcher=FakeDnsFetcher(), logger=LOGGER
    )
    assert address == ipaddress.ip_address("198.51.100.4")
    assert http.calls == ["https://icanhazip.com", "http://icanhazip.com"]


def test_dns_txt_segments_are_concatenated() -> None:
    dns_fetcher = FakeDnsFetcher(
        {"o-o.myaddr.l.google.com": [TextRecord(segments=("2001:db8::", "1"))]}
    )
    http = FakeHttpFetcher()
    result = resolve(
        {SourceId.GOOGLEDNSTXT: _txt_source()},
        http_fetcher=http,
        dns_fetcher=dns_fetcher,
        logger=LOGGER,
    )
    assert result.found is True
    assert result.address == ipaddress.ip_address("2001:db8::1")
    assert http.calls == []
    assert dns_fetcher.calls == [("o-o.myaddr.l.google.com", "ns1.google.com")]


def test_dns_address_record_is_used_directly() -> None:
    source = build_catalog()[SourceId.OPENDNS]
    dns_fetcher = FakeDnsFetcher(
        {"myip.opendns.com": [AddressRecord(address="192.0.2.1"), TextRecord(("x",))]}
    )
    address = fetch_source(
        source, http_fetcher=FakeHttpFetcher(), dns_fetcher=dns_fetcher, logger=LOGGER
    )
    assert address == ipaddress.ip_address("192.0.2.1")


@pytest.mark.parametrize(
    "answers",
    [
        [],
        [OtherRecord(rdtype="CNAME"), AddressRecord(address="192.0.2.1")],
        [TextRecord(segments=("not", "an", "ip"))],
    ],
)
def test_unusable_dns_answers_fail_the_attempt(answers: list[AnswerRecord]) -> None:
    dns_fetcher = FakeDnsFetcher({"o-o.myaddr.l.google.com": answers})
    address = fetch_source(
        _txt_source(), http_fetcher=FakeHttpFetcher(), dns_fetcher=dns_fetcher, logger=LOGGER
    )
    assert address is None


def test_non_ip_body_and_failed_http_is_not_found() -> None:
    http = FakeHttpFetcher({"https://ifconfig.me/ip": "rate limited"})
    result = resolve(
        {SourceId.IFCONFIGME: _web_source(SourceId.IFCONFIGME, "ifconfig.me/ip")},
        http_fetcher=http,
        dns_fetcher=FakeDnsFetcher(),
        logger=LOGGER,
    )
    assert result.found is False
    assert result.address is None
    assert http.calls == ["https://ifconfig.me/ip", "http://ifconfig.me/ip"]


def test_next_source_is_tried_after_failure() -> None:
    http = FakeHttpFetcher({"https://api.ipify.org": "203.0.113.9"})
    candidates = {
        SourceId.ICANHAZIP: _web_source(SourceId.ICANHAZIP, "icanhazip.com"),
        SourceId.IPIFY: _web_source(SourceId.IPIFY, "api.ipify.org"),
    }
    result = resolve(
        candidates, http_fetcher=http, dns_fetcher=FakeDnsFetcher(), logger=LOGGER
    )
    assert result.address == ipaddress.ip_address("203.0.113.9")
    assert http.calls == [
        "https://icanhazip.com",
        "http://icanhazip.com",
        "https://api.ipify.org",
    ]


def test_only_narrowed_protocols_are_attempted() -> None:
    source = SourceDescriptor(
        source_id=SourceId.IPIFY,
        address="api.ipify.org",
        protocols=Protocol.HTTP,
        families=Family.IPV4,
    )
    http = FakeHttpFetcher()
    fetch_source(source, http_fetcher=http, dns_fetcher=FakeDnsFetcher(), logger=LOGGER)
    assert http.calls == ["http://api.ipify.org"]


def test_lookup_narrows_and_uses_concrete_clients(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_resolve(candidates, *, http_fetcher, dns_fetcher, logger):
        seen["candidates"] = dict(candidates)
        seen["http"] = http_fetcher
        seen["dns"] = dns_fetcher
        return ResolvedResult(address=ipaddress.ip_address("192.0.2.10"))

    monkeypatch.setattr(resolver, "resolve", fake_resolve)
    result = lookup(SourceFilter(families=Family.IPV6, protocols=Protocol.HTTPS), logger=LOGGER)
    assert result.found is True
    candidates = seen["candidates"]
    assert isinstance(candidates, dict)
    assert list(candidates) == [SourceId.ICANHAZIP, SourceId.IPIFY]
    assert candidates[SourceId.IPIFY].address == "api64.ipify.org"
    assert isinstance(seen["http"], resolver.HttpFetcher)
    assert isinstance(seen["dns"], resolver.DnsFetcher)


def test_lookup_with_empty_candidate_set_skips_network(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_resolve(*_args: object, **_kwargs: object) -> ResolvedResult:
        raise AssertionError("resolve should not run")

    monkeypatch.setattr(resolver, "resolve", fail_resolve)
    result = lookup(
        SourceFilter(source_id=SourceId.IFCONFIGME, families=Family.IPV6), logger=LOGGER
    )
    assert result.found is False
