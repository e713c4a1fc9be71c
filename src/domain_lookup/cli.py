"""
Command-line interface for the domain lookup system.

This module provides the main CLI entry point with commands for:
- check: Check a domain for availability, optionally scanning subdomains
- config: Configuration management
- self-test: Configuration and connectivity check
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from . import __version__
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    LookupConfig,
    create_default_config,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from .enums import AvailabilityBasis, LogLevel
from .exceptions import ConfigurationError
from .i18n import get_message
from .lookup_service import LookupRequest, LookupService
from .models import LookupReport
from .self_test import run_self_test


# Exit codes
EXIT_AVAILABLE = 0
EXIT_TAKEN = 1
EXIT_INPUT_ERROR = 2


def resolve_config(args: argparse.Namespace) -> Optional[LookupConfig]:
    """
    Build the effective configuration for a command.

    Order: config file (or defaults), then DOMAIN_LOOKUP_* environment
    variables, then command-line flags.

    Returns:
        LookupConfig, or None if the configuration could not be loaded
    """
    config = None
    if getattr(args, "config", None):
        config = load_config_from_file(Path(args.config))
        if config is None:
            print(f"Error: Could not load config from {args.config}", file=sys.stderr)
            return None

    try:
        config = load_config_from_env(base=config or create_default_config())

        if getattr(args, "dry_run", False):
            config = replace(config, simulation_mode=True)
        if getattr(args, "language", None):
            config = replace(config, language=args.language)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return None

    return config


def _yes_no(value: bool, language: str) -> str:
    return get_message("common.yes" if value else "common.no", language)


def print_report(report: LookupReport, language: str, show_whois: bool = False) -> None:
    """Print a lookup report in human-readable form."""
    result = report.availability
    status_key = "status.available" if result.available else "status.taken"

    print(get_message("cli.result", language, status=get_message(status_key, language)))
    print(f"  {get_message('check.dns_resolves', language, value=_yes_no(result.dns_resolves, language))}")
    print(f"  {get_message('check.whois_available', language, value=_yes_no(result.available, language))}")
    if result.whois_server:
        print(
            "  "
            + get_message(
                "check.whois_server",
                language,
                server=result.whois_server,
                source=result.referral_source.value,
            )
        )
    if result.basis == AvailabilityBasis.WHOIS_PATTERN:
        print(f"  {get_message('check.basis.whois_pattern', language, pattern=result.matched_pattern)}")
    else:
        print(f"  {get_message('check.basis.dns_fallback', language)}")
    print(f"  {get_message('check.approximate', language)}")

    if show_whois:
        print(f"\n{get_message('check.whois_raw', language)}")
        print(result.whois_text.rstrip() if result.whois_text else get_message("check.whois_empty", language))

    if report.subdomains is None:
        return

    print(f"\n{get_message('scan.header', language, domain=report.domain)}")
    print(get_message("scan.note", language, count=len(report.wordlist or ())))
    if report.wordlist and report.wordlist.truncated:
        print(
            get_message(
                "scan.truncated",
                language,
                count=len(report.wordlist),
                total=report.wordlist.original_count,
            )
        )

    if not report.subdomains:
        print(get_message("scan.no_results", language))
        return

    print(get_message("scan.columns", language))
    for candidate in report.subdomains:
        print(
            "\t".join([
                candidate.label,
                candidate.fqdn,
                _yes_no(candidate.has_a, language),
                _yes_no(candidate.has_cname, language),
                _yes_no(candidate.has_ns, language),
                get_message("scan.likely", language)
                if candidate.available_guess
                else get_message("common.no", language),
            ])
        )


async def check_domain(
    domain: str,
    config: LookupConfig,
    scan: bool = False,
    wordlist_text: Optional[str] = None,
    only_available: bool = False,
    show_whois: bool = False,
    output_file: Optional[Path] = None,
    verbose: bool = False,
) -> int:
    """
    Check a domain and optionally scan its subdomains.

    Args:
        domain: Domain to check
        config: Effective configuration
        scan: Run a subdomain scan as well
        wordlist_text: Custom wordlist text (default list when None)
        only_available: Only report subdomains without records
        show_whois: Print the raw WHOIS text
        output_file: Optional path to write the report as JSON
        verbose: Enable log output

    Returns:
        Exit code (0 likely available, 1 likely registered, 2 input error)
    """
    language = config.language

    if config.simulation_mode:
        print(get_message("simulation.enabled", language))

    logger = None
    if verbose:
        logger = AuditLogger(
            output_format=config.logging.output_format,
            level=LogLevel.DEBUG,
        )

    print(get_message("cli.checking_domain", language, domain=domain.strip()))

    service = LookupService.from_config(config, logger=logger)
    report = await service.run(LookupRequest(
        domain=domain,
        scan_subdomains=scan,
        wordlist_text=wordlist_text,
        only_available=only_available,
    ))

    if not report.ok:
        message = get_message(f"validation.{report.error_code}", language)
        print(get_message("cli.error", language, error=message), file=sys.stderr)
        return EXIT_INPUT_ERROR

    print_report(report, language, show_whois=show_whois)

    if verbose:
        print(f"  Duration: {report.duration_ms:.1f}ms")

    if output_file:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
            print(get_message("cli.results_written", language, path=output_file))
        except OSError as e:
            print(f"Error writing results: {e}", file=sys.stderr)

    return EXIT_AVAILABLE if report.availability.available else EXIT_TAKEN


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    config = resolve_config(args)
    if config is None:
        return EXIT_INPUT_ERROR

    wordlist_text = None
    if args.wordlist:
        try:
            wordlist_text = Path(args.wordlist).read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error reading wordlist: {e}", file=sys.stderr)
            return EXIT_INPUT_ERROR

    output_file = Path(args.output) if args.output else None

    return asyncio.run(check_domain(
        domain=args.domain,
        config=config,
        scan=args.scan or bool(args.wordlist),
        wordlist_text=wordlist_text,
        only_available=args.only_available,
        show_whois=args.show_whois,
        output_file=output_file,
        verbose=args.verbose,
    ))


def cmd_self_test(args: argparse.Namespace) -> int:
    """Handle the 'self-test' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    result = asyncio.run(run_self_test(
        config=config,
        print_output=True,
        language=config.language,
        logger=AuditLogger.from_config(config.logging),
    ))

    return 0 if result.success else 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  Language: {config.language}")
        print(f"  Simulation mode: {config.simulation_mode}")
        print(f"  IANA server: {config.whois.iana_server}")
        print(f"  WHOIS timeout: {config.whois.timeout}s")
        print(
            "  Fallback servers: "
            + ", ".join(f"{tld}={server}" for tld, server in config.whois.fallback_servers.items())
        )
        print(f"  DNS timeout: {config.dns.timeout}s")
        print(f"  Scan limit: {config.scan.max_candidates}")
        print(f"  Scan concurrency: {config.scan.max_concurrency}")
        print(f"  Wordlist: {config.scan.wordlist_path or '(built-in)'}")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        config = create_default_config(language=args.language or "de")
        if save_config_to_file(config, config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="domain-lookup",
        description="WHOIS and DNS based domain availability checker",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command
    check_parser = subparsers.add_parser(
        "check",
        help="Check a domain for availability",
    )
    check_parser.add_argument(
        "domain",
        help="Domain to check (e.g., example.com)",
    )
    check_parser.add_argument(
        "--scan", "-s",
        action="store_true",
        help="Also scan common subdomains",
    )
    check_parser.add_argument(
        "--wordlist", "-w",
        help="File with subdomain labels (newline or comma separated); implies --scan",
    )
    check_parser.add_argument(
        "--only-available", "-a",
        action="store_true",
        help="Only list subdomains without DNS records",
    )
    check_parser.add_argument(
        "--show-whois",
        action="store_true",
        help="Print the raw WHOIS response",
    )
    check_parser.add_argument(
        "--output", "-o",
        help="Path to write the report as JSON",
    )
    check_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulation mode - no real network requests",
    )
    check_parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    check_parser.add_argument(
        "--language", "-l",
        choices=["de", "en"],
        help="Output language (default: from configuration)",
    )
    check_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    check_parser.set_defaults(func=cmd_check)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=["de", "en"],
        help="Default language for new configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    # 'self-test' command
    self_test_parser = subparsers.add_parser(
        "self-test",
        help="Validate configuration and check WHOIS/DNS connectivity",
    )
    self_test_parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    self_test_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration only",
    )
    self_test_parser.add_argument(
        "--language", "-l",
        choices=["de", "en"],
        help="Output language (default: from configuration)",
    )
    self_test_parser.set_defaults(func=cmd_self_test)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
