"""HTTP and DNS clients used for individual lookup attempts."""

from __future__ import annotations

import logging
import socket

import dns.exception
import dns.message
import dns.query
import dns.rdatatype
from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from .models import AddressRecord, AnswerRecord, OtherRecord, TextRecord


def make_session(user_agent: str) -> Session:
    """Create a requests session that follows redirects but never retries."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    retry = Retry(total=None, connect=0, read=0, status=0, other=0, redirect=5)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HttpFetcher:
    """Requests-based plain-text fetcher."""

    def __init__(self, *, session: Session, timeout: float, logger: logging.Logger) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger

    def fetch(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            return str(response.text).strip()
        except RequestException as exc:
            self._logger.debug("Requests fetch failed for %s: %s", url, exc)
            return ""


def _to_record(rdata: object) -> AnswerRecord:
    rdtype = getattr(rdata, "rdtype", None)
    if rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
        return AddressRecord(address=str(rdata.address))  # type: ignore[attr-defined]
    if rdtype == dns.rdatatype.TXT:
        segments = tuple(
            chunk.decode("utf-8", errors="replace")
            for chunk in rdata.strings  # type: ignore[attr-defined]
        )
        return TextRecord(segments=segments)
    return OtherRecord(rdtype=dns.rdatatype.to_text(rdtype) if rdtype is not None else "")


class DnsFetcher:
    """dnspython client sending one ANY query per lookup."""

    def __init__(self, *, timeout: float, port: int, logger: logging.Logger) -> None:
        self._timeout = timeout
        self._port = port
        self._logger = logger

    def resolve_server(self, server: str) -> str | None:
        """Return the first address ``server`` resolves to."""
        try:
            infos = socket.getaddrinfo(server, self._port, type=socket.SOCK_DGRAM)
        except OSError as exc:
            self._logger.debug("Could not resolve DNS server %s: %s", server, exc)
            return None
        if not infos:
            return None
        return str(infos[0][4][0])

    def query(self, target: str, server: str) -> list[AnswerRecord]:
        where = self.resolve_server(server)
        if where is None:
            return []
        self._logger.info("Doing dns-query against %s port %d", where, self._port)
        request = dns.message.make_query(target, dns.rdatatype.ANY)
        try:
            response = dns.query.udp(request, where, timeout=self._timeout, port=self._port)
        except (dns.exception.DNSException, OSError) as exc:
            self._logger.debug("DNS query for %s at %s failed: %s", target, where, exc)
            return []
        return [_to_record(rdata) for rrset in response.answer for rdata in rrset]
