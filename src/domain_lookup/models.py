"""
Data models for the domain lookup system.

This module defines the result structures passed between the WHOIS,
DNS, classification and scanning components and returned to callers.
None of them are persisted.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import WHOIS_PORT
from .enums import (
    AvailabilityBasis,
    DNSRecordType,
    DNSStatus,
    ReferralSource,
    WordlistSource,
)


@dataclass(frozen=True)
class WhoisServer:
    """A WHOIS endpoint: hostname plus the fixed protocol port."""

    host: str
    port: int = WHOIS_PORT

    def __str__(self) -> str:
        return self.host


@dataclass
class DNSRecordCheck:
    """Result of one DNS existence lookup."""

    name: str
    record_type: DNSRecordType
    status: DNSStatus
    error: Optional[str] = None

    @property
    def present(self) -> bool:
        """True only when the resolver returned an answer for the type."""
        return self.status == DNSStatus.PRESENT


@dataclass
class AvailabilityResult:
    """
    Availability verdict for a single domain.

    `available` is always a concrete boolean. It is a heuristic: a WHOIS
    absence pattern, or failing that the absence of A/NS records, is taken
    as a sign the domain can be registered. It is not authoritative.
    """

    domain: str
    dns_resolves: bool
    whois_text: str
    available: bool
    has_a: bool = False
    has_ns: bool = False
    basis: AvailabilityBasis = AvailabilityBasis.DNS_FALLBACK
    matched_pattern: Optional[str] = None
    whois_server: Optional[str] = None
    referral_source: ReferralSource = ReferralSource.NONE

    def to_dict(self, include_whois: bool = True) -> dict:
        data = {
            "domain": self.domain,
            "dns_resolves": self.dns_resolves,
            "available": self.available,
            "has_a": self.has_a,
            "has_ns": self.has_ns,
            "basis": self.basis.value,
            "matched_pattern": self.matched_pattern,
            "whois_server": self.whois_server,
            "referral_source": self.referral_source.value,
        }
        if include_whois:
            data["whois_text"] = self.whois_text
        return data


@dataclass
class SubdomainCandidate:
    """DNS probe outcome for one label under a root domain."""

    label: str
    fqdn: str
    has_a: bool
    has_cname: bool
    has_ns: bool

    @property
    def available_guess(self) -> bool:
        """No A, CNAME or NS record was seen (approximate: lookup failures count as absent)."""
        return not (self.has_a or self.has_cname or self.has_ns)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "fqdn": self.fqdn,
            "has_a": self.has_a,
            "has_cname": self.has_cname,
            "has_ns": self.has_ns,
            "available_guess": self.available_guess,
        }


@dataclass(frozen=True)
class Wordlist:
    """Ordered, bounded list of subdomain labels."""

    entries: tuple[str, ...]
    source: WordlistSource
    original_count: int = 0
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass
class LookupReport:
    """Everything a presentation layer needs to render one request."""

    domain: str
    availability: Optional[AvailabilityResult] = None
    # None means no scan was requested; an empty list is a completed scan
    subdomains: Optional[list[SubdomainCandidate]] = None
    wordlist: Optional[Wordlist] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    duration_ms: float = 0.0
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self, include_whois: bool = True) -> dict:
        return {
            "domain": self.domain,
            "availability": (
                self.availability.to_dict(include_whois=include_whois)
                if self.availability
                else None
            ),
            "subdomains": (
                [c.to_dict() for c in self.subdomains]
                if self.subdomains is not None
                else None
            ),
            "wordlist": (
                {
                    "source": self.wordlist.source.value,
                    "entries": len(self.wordlist),
                    "original_count": self.wordlist.original_count,
                    "truncated": self.wordlist.truncated,
                }
                if self.wordlist
                else None
            ),
            "error": self.error,
            "error_code": self.error_code,
            "duration_ms": self.duration_ms,
            "warnings": list(self.warnings),
        }
