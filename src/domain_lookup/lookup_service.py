"""
Lookup service for the domain lookup system.

This module is the boundary a presentation layer calls. It coordinates:
- Domain validation and normalization
- WHOIS referral resolution and the availability verdict
- Optional subdomain scanning over a bounded wordlist

Invalid input is rejected here, before any network I/O.
"""

import time
from dataclasses import dataclass
from typing import Optional

from .audit_logger import AuditLogger
from .availability import AvailabilityClassifier
from .config import LookupConfig, create_default_config
from .dns_probe import DNSProbe
from .domain_validator import DomainValidator
from .enums import LogLevel
from .models import AvailabilityResult, LookupReport, SubdomainCandidate, Wordlist
from .subdomain_scanner import SubdomainScanner
from .whois_client import WHOISTransport
from .whois_referral import WHOISReferralResolver
from .wordlist import build_wordlist


@dataclass
class LookupRequest:
    """One request as received from the presentation layer."""

    domain: str
    scan_subdomains: bool = False
    wordlist_text: Optional[str] = None
    only_available: bool = False


class LookupService:
    """
    Entry point for availability checks and subdomain scans.

    Components are injected so tests can substitute any of them;
    from_config() wires the real ones.
    """

    def __init__(
        self,
        classifier: AvailabilityClassifier,
        scanner: SubdomainScanner,
        config: Optional[LookupConfig] = None,
        validator: Optional[DomainValidator] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the lookup service.

        Args:
            classifier: Availability classifier
            scanner: Subdomain scanner
            config: Configuration (wordlist location and cap)
            validator: Domain validator
            logger: Optional audit logger
        """
        self._classifier = classifier
        self._scanner = scanner
        self._config = config or create_default_config()
        self._validator = validator or DomainValidator()
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        config: LookupConfig,
        logger: Optional[AuditLogger] = None,
    ) -> "LookupService":
        """Build a service with real transport, resolver and DNS probe."""
        transport = WHOISTransport.from_config(
            config.whois,
            simulation_mode=config.simulation_mode,
            logger=logger,
        )
        resolver = WHOISReferralResolver(transport, config.whois, logger=logger)
        dns_probe = DNSProbe.from_config(
            config.dns,
            simulation_mode=config.simulation_mode,
            logger=logger,
        )
        classifier = AvailabilityClassifier.from_config(
            config.classifier,
            resolver=resolver,
            dns_probe=dns_probe,
            logger=logger,
        )
        scanner = SubdomainScanner(dns_probe, config.scan, logger=logger)
        return cls(
            classifier=classifier,
            scanner=scanner,
            config=config,
            logger=logger,
        )

    async def run(self, request: LookupRequest) -> LookupReport:
        """
        Handle one lookup request.

        1. Validates and normalizes the domain
        2. Classifies its availability
        3. If requested, builds the wordlist and scans subdomains

        Args:
            request: The request to handle

        Returns:
            LookupReport; on invalid input only `error` fields are set
        """
        start_time = time.perf_counter()

        validation = self._validator.validate(request.domain)
        if not validation.valid:
            self._log(
                LogLevel.INFO,
                f"Rejected domain input: {validation.error.message}",
                {"domain": request.domain, "error_code": validation.error.code.value},
            )
            return LookupReport(
                domain=(request.domain or "").strip(),
                error=validation.error.message,
                error_code=validation.error.code.value,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

        domain = validation.canonical_domain
        report = LookupReport(domain=domain)

        report.availability = await self._classifier.classify(domain)

        if request.scan_subdomains:
            wordlist = self.build_wordlist(request.wordlist_text)
            report.wordlist = wordlist
            if wordlist.truncated:
                report.warnings.append(
                    f"Wordlist cut to {len(wordlist)} of {wordlist.original_count} entries"
                )
            report.subdomains = await self._scanner.scan(
                domain,
                wordlist.entries,
                only_available=request.only_available,
            )

        report.duration_ms = (time.perf_counter() - start_time) * 1000
        return report

    async def check(self, domain: str) -> AvailabilityResult:
        """
        Classify a single domain.

        Raises:
            ValidationError: If the domain is not acceptable
        """
        canonical = self._validator.canonicalize(domain)
        return await self._classifier.classify(canonical)

    async def scan(
        self,
        domain: str,
        wordlist_text: Optional[str] = None,
        only_available: bool = False,
    ) -> list[SubdomainCandidate]:
        """
        Scan subdomains of a domain without classifying the domain itself.

        Raises:
            ValidationError: If the domain is not acceptable
        """
        canonical = self._validator.canonicalize(domain)
        wordlist = self.build_wordlist(wordlist_text)
        return await self._scanner.scan(
            canonical, wordlist.entries, only_available=only_available
        )

    def build_wordlist(self, wordlist_text: Optional[str] = None) -> Wordlist:
        return build_wordlist(
            custom_text=wordlist_text,
            default_path=self._config.scan.wordlist_path,
            limit=self._config.scan.max_candidates,
            logger=self._logger,
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "LookupService", message, data)

    @property
    def validator(self) -> DomainValidator:
        """Get the domain validator instance."""
        return self._validator

    @property
    def config(self) -> LookupConfig:
        """Get the configuration."""
        return self._config
