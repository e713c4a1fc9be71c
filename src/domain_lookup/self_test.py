"""
Self-test module for the domain lookup system.

Validates the configuration and checks connectivity to the WHOIS servers
and the DNS resolver before lookups are run.
"""

import asyncio
import socket
import time
from dataclasses import dataclass, field
from typing import Optional

from .config import LookupConfig
from .dns_probe import DNSProbe
from .enums import DNSRecordType, LogLevel
from .i18n import get_message
from .wordlist import load_default_wordlist, parse_wordlist


@dataclass
class EndpointTestResult:
    """Result of testing a single endpoint."""

    endpoint: str
    endpoint_type: str  # 'whois', 'dns'
    success: bool
    response_time_ms: float
    error: Optional[str] = None


@dataclass
class ConfigValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class SelfTestResult:
    """Complete self-test result."""

    success: bool
    config_validation: ConfigValidationResult
    endpoint_results: list[EndpointTestResult] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def failed_endpoints(self) -> list[EndpointTestResult]:
        """Return list of failed endpoint tests."""
        return [r for r in self.endpoint_results if not r.success]

    @property
    def successful_endpoints(self) -> list[EndpointTestResult]:
        """Return list of successful endpoint tests."""
        return [r for r in self.endpoint_results if r.success]


class SelfTest:
    """
    Startup self-test for the domain lookup system.

    Performs:
    1. Configuration validation
    2. TCP connectivity tests for the IANA and fallback WHOIS servers
    3. A DNS lookup of the IANA WHOIS host through the configured resolver

    Connectivity tests are skipped in simulation mode.
    """

    # Concurrency above this is allowed but unusual
    HIGH_CONCURRENCY = 100

    def __init__(
        self,
        config: LookupConfig,
        dns_probe: Optional[DNSProbe] = None,
        logger: Optional[object] = None,
    ) -> None:
        """
        Initialize the self-test.

        Args:
            config: Configuration to validate and test
            dns_probe: Optional DNS probe (built from config if omitted)
            logger: Optional logger for output
        """
        self._config = config
        self._dns_probe = dns_probe or DNSProbe.from_config(config.dns)
        self._logger = logger

    async def run(self) -> SelfTestResult:
        """
        Run the complete self-test.

        Returns:
            SelfTestResult with validation and connectivity results
        """
        start_time = time.perf_counter()

        config_result = self.validate_config()

        if not config_result.valid or self._config.simulation_mode:
            return SelfTestResult(
                success=config_result.valid,
                config_validation=config_result,
                endpoint_results=[],
                total_duration_ms=self._elapsed_ms(start_time),
            )

        endpoint_results = await self._test_all_endpoints()

        for endpoint_result in endpoint_results:
            if not endpoint_result.success:
                self._log(
                    LogLevel.WARN,
                    f"Endpoint unreachable: {endpoint_result.endpoint}",
                    {
                        "endpoint": endpoint_result.endpoint,
                        "type": endpoint_result.endpoint_type,
                        "error": endpoint_result.error,
                    },
                )

        return SelfTestResult(
            success=all(r.success for r in endpoint_results),
            config_validation=config_result,
            endpoint_results=endpoint_results,
            total_duration_ms=self._elapsed_ms(start_time),
        )

    def validate_config(self) -> ConfigValidationResult:
        """
        Validate the configuration beyond the range checks done at construction.

        Checks:
        - Fallback table entries name a server
        - A configured wordlist file is readable and not empty
        - Absence patterns are present
        - Timeouts and concurrency are in a sensible range

        Returns:
            ConfigValidationResult with validation status
        """
        errors: list[str] = []
        warnings: list[str] = []

        for tld, server in self._config.whois.fallback_servers.items():
            if not tld:
                errors.append("Fallback table contains an empty TLD")
            if not server:
                errors.append(f"Fallback server for '.{tld}' is empty")

        if not self._config.whois.fallback_servers:
            warnings.append("No WHOIS fallback servers configured")

        if not self._config.classifier.availability_patterns:
            warnings.append(
                "No availability patterns configured - verdicts will rely on DNS only"
            )

        wordlist_path = self._config.scan.wordlist_path
        if wordlist_path is not None:
            if not wordlist_path.is_file():
                errors.append(f"Wordlist file not found: {wordlist_path}")
            elif not parse_wordlist(load_default_wordlist(wordlist_path)):
                warnings.append(f"Wordlist file is empty: {wordlist_path}")
        elif not parse_wordlist(load_default_wordlist()):
            errors.append("Packaged default wordlist is missing or empty")

        if self._config.whois.timeout > 30 or self._config.dns.lifetime > 30:
            warnings.append("Timeouts above 30s make a single lookup very slow")

        if self._config.scan.max_concurrency > self.HIGH_CONCURRENCY:
            warnings.append(
                f"scan.max_concurrency={self._config.scan.max_concurrency} "
                "may overload the resolver"
            )

        return ConfigValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    async def _test_all_endpoints(self) -> list[EndpointTestResult]:
        servers = [self._config.whois.iana_server]
        for server in self._config.whois.fallback_servers.values():
            if server not in servers:
                servers.append(server)

        tasks = [self._test_whois_server(server) for server in servers]
        tasks.append(self._test_dns_resolver(self._config.whois.iana_server))

        return list(await asyncio.gather(*tasks))

    async def _test_whois_server(self, server: str) -> EndpointTestResult:
        """
        Test connectivity to a WHOIS server.

        Attempts to establish a TCP connection to the WHOIS port.
        """
        start_time = time.perf_counter()
        port = self._config.whois.port
        timeout = self._config.whois.timeout

        def _sync_test() -> Optional[str]:
            try:
                with socket.create_connection((server, port), timeout=timeout):
                    return None
            except socket.gaierror as e:
                return f"DNS resolution failed: {e}"
            except socket.timeout:
                return f"Connection timed out after {timeout}s"
            except OSError as e:
                return f"Socket error: {e}"

        loop = asyncio.get_running_loop()
        error = await loop.run_in_executor(None, _sync_test)

        return EndpointTestResult(
            endpoint=f"{server}:{port}",
            endpoint_type="whois",
            success=error is None,
            response_time_ms=self._elapsed_ms(start_time),
            error=error,
        )

    async def _test_dns_resolver(self, hostname: str) -> EndpointTestResult:
        """Resolve a well-known host through the configured resolver."""
        start_time = time.perf_counter()
        check = await self._dns_probe.lookup(hostname, DNSRecordType.A)

        return EndpointTestResult(
            endpoint=f"DNS A {hostname}",
            endpoint_type="dns",
            success=check.present,
            response_time_ms=self._elapsed_ms(start_time),
            error=None if check.present else (check.error or check.status.value),
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "SelfTest", message, data)

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    def print_results(self, result: SelfTestResult, language: str = "de") -> None:
        """
        Print self-test results to stdout.

        Args:
            result: Self-test result to print
            language: Output language ('de' or 'en')
        """
        print(get_message("selftest.header", language))
        print("=" * 60)

        print(f"\n{get_message('selftest.config_validation', language)}")
        if result.config_validation.valid:
            print(f"  ✓ {get_message('selftest.config_valid', language)}")
        else:
            print(f"  ✗ {get_message('selftest.config_invalid', language)}")
            for error in result.config_validation.errors:
                print(f"    - {error}")

        if result.config_validation.warnings:
            print(f"\n  {get_message('selftest.warnings', language)}")
            for warning in result.config_validation.warnings:
                print(f"    - {warning}")

        if self._config.simulation_mode:
            print(f"\n  {get_message('selftest.skipped', language)}")
        elif result.endpoint_results:
            print(f"\n{get_message('selftest.connectivity', language)}")
            for endpoint_result in result.endpoint_results:
                status = "✓" if endpoint_result.success else "✗"
                key = (
                    "selftest.endpoint_ok"
                    if endpoint_result.success
                    else "selftest.endpoint_failed"
                )
                print(
                    f"  {status} {endpoint_result.endpoint_type.upper()}: "
                    f"{get_message(key, language, endpoint=endpoint_result.endpoint)} "
                    f"({endpoint_result.response_time_ms:.0f}ms)"
                )
                if endpoint_result.error:
                    print(f"      Error: {endpoint_result.error}")

        print(f"\n{'-' * 60}")
        if result.success:
            print(f"✓ {get_message('selftest.success', language)}")
        else:
            print(f"✗ {get_message('selftest.failed', language)}")

        print(f"  {get_message('selftest.duration', language)}: {result.total_duration_ms:.0f}ms")


async def run_self_test(
    config: LookupConfig,
    print_output: bool = True,
    language: str = "de",
    logger: Optional[object] = None,
) -> SelfTestResult:
    """
    Convenience function to run self-test.

    Args:
        config: Configuration to test
        print_output: Whether to print results to stdout
        language: Output language
        logger: Optional logger for unreachable endpoints

    Returns:
        SelfTestResult with test outcomes
    """
    self_test = SelfTest(config, logger=logger)
    result = await self_test.run()

    if print_output:
        self_test.print_results(result, language)

    return result
