"""Protocols and lightweight model types."""

from __future__ import annotations

import typing
from dataclasses import dataclass

from .validation import IPAddress


@dataclass(frozen=True)
class AddressRecord:
    """An A or AAAA answer."""

    address: str


@dataclass(frozen=True)
class TextRecord:
    """A TXT answer, one entry per character-string."""

    segments: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(self.segments)


@dataclass(frozen=True)
class OtherRecord:
    """Any answer type the lookup does not interpret."""

    rdtype: str


AnswerRecord = AddressRecord | TextRecord | OtherRecord


class HttpGetter(typing.Protocol):
    """Contract for plain-text HTTP lookups."""

    def fetch(self, url: str) -> str:
        """Return the stripped response body or an empty string."""


class DnsQuerier(typing.Protocol):
    """Contract for single-exchange DNS lookups."""

    def query(self, target: str, server: str) -> list[AnswerRecord]:
        """Return answer records for an ANY query of ``target`` at ``server``."""


@dataclass(frozen=True)
class ResolvedResult:
    """Outcome of one lookup."""

    address: IPAddress | None = None

    @property
    def found(self) -> bool:
        return self.address is not None
