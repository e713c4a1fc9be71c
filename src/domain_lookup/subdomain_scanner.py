"""
Subdomain scanner.

Probes a list of labels under a root domain for A, CNAME and NS records
and guesses which of the resulting names are unused. Candidates are probed
concurrently with a bounded number in flight; results keep input order.

The guess is approximate: a failed or timed-out lookup counts as "no
record", so a name is reported available whenever nothing could be seen.
"""

import asyncio
import time
from typing import Iterable, Optional

from .config import ScanConfig
from .dns_probe import DNSProbe
from .enums import DNSRecordType, LogLevel
from .models import SubdomainCandidate


class SubdomainScanner:
    """DNS-based subdomain availability scanner."""

    RECORD_TYPES = (DNSRecordType.A, DNSRecordType.CNAME, DNSRecordType.NS)

    def __init__(
        self,
        dns_probe: DNSProbe,
        config: Optional[ScanConfig] = None,
        logger=None,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            dns_probe: DNS existence probe
            config: Scan configuration (concurrency bound, candidate cap)
            logger: Optional AuditLogger
        """
        self._dns_probe = dns_probe
        self._config = config or ScanConfig()
        self._logger = logger

    @staticmethod
    def build_fqdn(label: str, root_domain: str) -> str:
        return f"{label}.{root_domain}".lower()

    async def scan(
        self,
        root_domain: str,
        candidates: Iterable[str],
        only_available: bool = False,
    ) -> list[SubdomainCandidate]:
        """
        Probe every non-empty label under the root domain.

        The caller is expected to pass a list already cut to the configured
        cap (see wordlist.build_wordlist); it is not cut again here.

        Args:
            root_domain: Canonical root domain
            candidates: Ordered labels
            only_available: Drop candidates that have any record

        Returns:
            Candidates in input order
        """
        labels = [label.strip() for label in candidates]
        labels = [label for label in labels if label]

        if len(labels) > self._config.max_candidates:
            self._log(
                LogLevel.WARN,
                f"Scanning {len(labels)} candidates, above the cap of {self._config.max_candidates}",
                {"root_domain": root_domain, "candidates": len(labels)},
            )

        start_time = time.perf_counter()
        semaphore = asyncio.Semaphore(self._config.max_concurrency)

        async def probe_label(label: str) -> SubdomainCandidate:
            async with semaphore:
                return await self.probe_candidate(label, root_domain)

        results = await asyncio.gather(*(probe_label(label) for label in labels))

        if only_available:
            results = [candidate for candidate in results if candidate.available_guess]
        else:
            results = list(results)

        self._log(
            LogLevel.INFO,
            f"Scanned {len(labels)} subdomains of {root_domain}",
            {
                "root_domain": root_domain,
                "scanned": len(labels),
                "returned": len(results),
                "only_available": only_available,
                "duration_ms": (time.perf_counter() - start_time) * 1000,
            },
        )

        return results

    async def probe_candidate(self, label: str, root_domain: str) -> SubdomainCandidate:
        """Probe a single label; its three lookups are independent."""
        fqdn = self.build_fqdn(label, root_domain)
        records = await self._dns_probe.probe(fqdn, self.RECORD_TYPES)

        return SubdomainCandidate(
            label=label,
            fqdn=fqdn,
            has_a=records.get(DNSRecordType.A, False),
            has_cname=records.get(DNSRecordType.CNAME, False),
            has_ns=records.get(DNSRecordType.NS, False),
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "SubdomainScanner", message, data)
