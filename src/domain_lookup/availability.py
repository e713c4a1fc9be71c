"""
Availability classification.

Combines a DNS existence probe with the raw WHOIS text of a domain into a
single likely-available / likely-registered verdict:

1. Probe A and NS records; the domain "resolves" if either exists.
2. Fetch the authoritative WHOIS text (may be empty).
3. Test the text against an ordered list of absence patterns; the first
   match marks the domain available.
4. Without a match, fall back to DNS: available if the domain does not
   resolve.

Only absence patterns are checked. There is no positive "registered"
pattern, so a registered domain without DNS records and with an unusual
WHOIS reply is reported available. The verdict is approximate.
"""

import re
from typing import Iterable, Optional

from .config import DEFAULT_AVAILABILITY_PATTERNS, ClassifierConfig
from .dns_probe import DNSProbe
from .enums import AvailabilityBasis, DNSRecordType, LogLevel, ReferralSource
from .models import AvailabilityResult
from .whois_referral import WHOISReferralResolver


class AvailabilityClassifier:
    """Heuristic availability classifier (WHOIS patterns, then DNS)."""

    DNS_RECORD_TYPES = (DNSRecordType.A, DNSRecordType.NS)

    def __init__(
        self,
        resolver: WHOISReferralResolver,
        dns_probe: DNSProbe,
        patterns: Optional[Iterable[str]] = None,
        logger=None,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            resolver: WHOIS referral resolver
            dns_probe: DNS existence probe
            patterns: Ordered absence patterns (case-insensitive regexes)
            logger: Optional AuditLogger
        """
        self._resolver = resolver
        self._dns_probe = dns_probe
        self._patterns: tuple[re.Pattern, ...] = tuple(
            re.compile(pattern, re.IGNORECASE)
            for pattern in (
                patterns if patterns is not None else DEFAULT_AVAILABILITY_PATTERNS
            )
        )
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        config: ClassifierConfig,
        resolver: WHOISReferralResolver,
        dns_probe: DNSProbe,
        logger=None,
    ) -> "AvailabilityClassifier":
        return cls(
            resolver=resolver,
            dns_probe=dns_probe,
            patterns=config.availability_patterns,
            logger=logger,
        )

    @property
    def patterns(self) -> list[str]:
        return [pattern.pattern for pattern in self._patterns]

    def match_pattern(self, whois_text: str) -> Optional[str]:
        """
        Return the first absence pattern found in the text.

        Args:
            whois_text: Raw WHOIS text (may be empty)

        Returns:
            The matching pattern's source, or None
        """
        if not whois_text:
            return None
        for pattern in self._patterns:
            if pattern.search(whois_text):
                return pattern.pattern
        return None

    def infer(
        self, whois_text: str, dns_resolves: bool
    ) -> tuple[bool, AvailabilityBasis, Optional[str]]:
        """
        Decide availability from the two signals.

        Returns:
            Tuple of (available, basis, matched pattern)
        """
        matched = self.match_pattern(whois_text)
        if matched is not None:
            return True, AvailabilityBasis.WHOIS_PATTERN, matched
        return not dns_resolves, AvailabilityBasis.DNS_FALLBACK, None

    async def classify(self, domain: str) -> AvailabilityResult:
        """
        Classify a (pre-validated) domain.

        Args:
            domain: Canonical domain name

        Returns:
            AvailabilityResult with `available` resolved to a boolean
        """
        records = await self._dns_probe.probe(domain, self.DNS_RECORD_TYPES)
        has_a = records.get(DNSRecordType.A, False)
        has_ns = records.get(DNSRecordType.NS, False)
        dns_resolves = has_a or has_ns

        lookup = await self._resolver.lookup(domain)
        whois_text = lookup.text

        available, basis, matched = self.infer(whois_text, dns_resolves)

        result = AvailabilityResult(
            domain=domain,
            dns_resolves=dns_resolves,
            whois_text=whois_text,
            available=available,
            has_a=has_a,
            has_ns=has_ns,
            basis=basis,
            matched_pattern=matched,
            whois_server=lookup.server,
            referral_source=(
                lookup.referral.source if lookup.referral else ReferralSource.NONE
            ),
        )

        self._log(
            LogLevel.INFO,
            f"{domain}: {'likely available' if available else 'likely registered'}",
            {
                "domain": domain,
                "available": available,
                "basis": basis.value,
                "matched_pattern": matched,
                "dns_resolves": dns_resolves,
                "whois_server": lookup.server,
                "whois_chars": len(whois_text),
            },
        )

        return result

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "AvailabilityClassifier", message, data)
