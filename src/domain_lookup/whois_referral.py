"""
WHOIS referral resolution.

Finds the authoritative WHOIS server for a domain by asking the IANA root
server about the domain's TLD, then queries that server for the domain.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .config import WHOISConfig
from .enums import LogLevel, ReferralSource
from .models import WhoisServer
from .whois_client import WHOISResponse, WHOISTransport


@dataclass
class WHOISReferral:
    """Which server is authoritative for a TLD, and how that was decided."""

    tld: str
    server: str
    source: ReferralSource
    referral_response: Optional[WHOISResponse] = None


@dataclass
class WHOISLookup:
    """Full record of a referral-based WHOIS lookup."""

    domain: str
    tld: Optional[str]
    referral: Optional[WHOISReferral]
    response: Optional[WHOISResponse]

    @property
    def text(self) -> str:
        """The authoritative server's reply, empty when none was obtained."""
        return self.response.text if self.response else ""

    @property
    def server(self) -> Optional[str]:
        return self.referral.server if self.referral else None


class WHOISReferralResolver:
    """
    Resolves the authoritative WHOIS server via IANA and queries it.

    Resolution order for a TLD:
    1. The first ``whois:`` line of the IANA reply
    2. The configured fallback table
    3. The IANA server itself. Its answer for a domain query is usually
       just a pointer, so this is a knowingly degraded last resort.

    The two queries are sequential; the second depends on the first. The
    resolver never raises: missing data is an empty string.
    """

    REFERRAL_PATTERN = re.compile(r"whois:\s*(\S+)", re.IGNORECASE)

    def __init__(
        self,
        transport: WHOISTransport,
        config: Optional[WHOISConfig] = None,
        logger=None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            transport: Transport used for both queries
            config: WHOIS configuration (IANA server, fallback table)
            logger: Optional AuditLogger
        """
        self._transport = transport
        self._config = config or WHOISConfig()
        self._logger = logger

    @property
    def iana_server(self) -> WhoisServer:
        return WhoisServer(self._config.iana_server, self._config.port)

    @staticmethod
    def extract_tld(domain: str) -> Optional[str]:
        """Rightmost label, or None for names with fewer than two labels."""
        parts = domain.strip().lower().split(".")
        if len(parts) < 2 or not parts[-1]:
            return None
        return parts[-1]

    def parse_referral(self, referral_text: str) -> Optional[str]:
        """Server named on the first ``whois:`` line, if any."""
        match = self.REFERRAL_PATTERN.search(referral_text or "")
        if not match:
            return None
        return match.group(1).strip()

    def fallback_server(self, tld: str) -> Optional[str]:
        return self._config.fallback_servers.get(tld.lower())

    async def resolve_server(self, tld: str) -> WHOISReferral:
        """
        Determine the authoritative WHOIS server for a TLD.

        Args:
            tld: Top-level label without dot

        Returns:
            WHOISReferral naming the server and its source
        """
        tld = tld.lower()
        referral_response = await self._transport.query(self.iana_server, tld)

        server = self.parse_referral(referral_response.text)
        if server:
            source = ReferralSource.REFERRAL
        else:
            server = self.fallback_server(tld)
            if server:
                source = ReferralSource.FALLBACK
            else:
                server = self._config.iana_server
                source = ReferralSource.IANA

        self._log(
            LogLevel.DEBUG,
            f"WHOIS server for .{tld}: {server} ({source.value})",
            {"tld": tld, "server": server, "source": source.value},
        )

        return WHOISReferral(
            tld=tld,
            server=server,
            source=source,
            referral_response=referral_response,
        )

    async def lookup(self, domain: str) -> WHOISLookup:
        """
        Resolve the authoritative server and query it for the domain.

        Malformed input (fewer than two labels) returns an empty lookup
        without any network I/O.
        """
        tld = self.extract_tld(domain)
        if tld is None:
            self._log(
                LogLevel.DEBUG,
                "Skipping WHOIS lookup for name without TLD",
                {"domain": domain},
            )
            return WHOISLookup(domain=domain, tld=None, referral=None, response=None)

        referral = await self.resolve_server(tld)
        response = await self._transport.query(
            WhoisServer(referral.server, self._config.port),
            domain,
        )

        return WHOISLookup(
            domain=domain,
            tld=tld,
            referral=referral,
            response=response,
        )

    async def resolve_and_query(self, domain: str) -> str:
        """Authoritative WHOIS text for a domain ("" when none was obtained)."""
        lookup = await self.lookup(domain)
        return lookup.text

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "WHOISReferralResolver", message, data)
