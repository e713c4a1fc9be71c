"""
DNS existence probe.

Answers "does this name have a record of this type" using the system
resolver configuration. Lookup failures (timeouts, broken resolvers,
malformed names) are reported as absent records and never raised.
"""

import asyncio
from typing import Iterable, Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from .config import DEFAULT_TIMEOUT_SECONDS, DNSConfig
from .enums import DNSRecordType, DNSStatus, LogLevel
from .models import DNSRecordCheck


class DNSProbe:
    """
    Boolean DNS record existence checks for A, NS and CNAME.

    The underlying resolver is created once and only read during lookups,
    so concurrent lookups do not share mutable state.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        lifetime: float = DEFAULT_TIMEOUT_SECONDS,
        nameservers: Iterable[str] = (),
        simulation_mode: bool = False,
        resolver: Optional[dns.asyncresolver.Resolver] = None,
        logger=None,
    ) -> None:
        """
        Initialize the DNS probe.

        Args:
            timeout: Per-server query timeout in seconds
            lifetime: Total time budget for one lookup in seconds
            nameservers: Explicit nameserver IPs; empty uses /etc/resolv.conf
            simulation_mode: If True, no real network requests are made
            resolver: Pre-built resolver (mainly for tests)
            logger: Optional AuditLogger
        """
        self._timeout = timeout
        self._lifetime = lifetime
        self._nameservers = tuple(nameservers)
        self._simulation_mode = simulation_mode
        self._resolver = resolver
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        config: DNSConfig,
        simulation_mode: bool = False,
        logger=None,
    ) -> "DNSProbe":
        return cls(
            timeout=config.timeout,
            lifetime=config.lifetime,
            nameservers=config.nameservers,
            simulation_mode=simulation_mode,
            logger=logger,
        )

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            if self._nameservers:
                resolver = dns.asyncresolver.Resolver(configure=False)
                resolver.nameservers = list(self._nameservers)
            else:
                resolver = dns.asyncresolver.Resolver()
            resolver.timeout = self._timeout
            resolver.lifetime = self._lifetime
            self._resolver = resolver
        return self._resolver

    async def lookup(self, name: str, record_type: DNSRecordType) -> DNSRecordCheck:
        """
        Look up one record type for a name.

        Args:
            name: Fully qualified name (trailing dot optional)
            record_type: Record type to check

        Returns:
            DNSRecordCheck describing the outcome
        """
        if self._simulation_mode:
            return self._get_simulated_check(name, record_type)

        try:
            resolver = self._get_resolver()
            await resolver.resolve(name, record_type.value)
            status, error = DNSStatus.PRESENT, None
        except dns.resolver.NXDOMAIN:
            status, error = DNSStatus.NXDOMAIN, None
        except dns.resolver.NoAnswer:
            status, error = DNSStatus.NO_ANSWER, None
        except dns.exception.Timeout as e:
            status, error = DNSStatus.TIMEOUT, str(e)
        except dns.exception.DNSException as e:
            status, error = DNSStatus.ERROR, f"{type(e).__name__}: {e}"

        if error:
            self._log(
                LogLevel.DEBUG,
                f"{record_type.value} lookup for {name} failed, treating as absent",
                {"name": name, "record_type": record_type.value, "error": error},
            )

        return DNSRecordCheck(
            name=name,
            record_type=record_type,
            status=status,
            error=error,
        )

    async def has_record(self, name: str, record_type: DNSRecordType) -> bool:
        """True when at least one record of the type exists."""
        check = await self.lookup(name, record_type)
        return check.present

    async def probe(
        self, name: str, record_types: Iterable[DNSRecordType]
    ) -> dict[DNSRecordType, bool]:
        """
        Check several record types for one name concurrently.

        Returns:
            Mapping of record type to existence, in the order requested
        """
        record_types = list(record_types)
        checks = await asyncio.gather(
            *(self.lookup(name, record_type) for record_type in record_types)
        )
        return {check.record_type: check.present for check in checks}

    def _get_simulated_check(
        self, name: str, record_type: DNSRecordType
    ) -> DNSRecordCheck:
        """
        Return a simulated check for dry runs.

        Names whose first label starts with 'available-' have no records;
        all others have A and NS records but no CNAME.
        """
        first_label = name.strip().lower().split(".")[0]
        if first_label.startswith("available-"):
            status = DNSStatus.NXDOMAIN
        elif record_type in (DNSRecordType.A, DNSRecordType.NS):
            status = DNSStatus.PRESENT
        else:
            status = DNSStatus.NO_ANSWER

        return DNSRecordCheck(name=name, record_type=record_type, status=status)

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "DNSProbe", message, data)
