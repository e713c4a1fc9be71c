"""
Domain Lookup - WHOIS referral and DNS based domain availability checker.

This package resolves the authoritative WHOIS server for a domain through
IANA, infers a likely availability verdict from the WHOIS text and DNS
records, and scans common subdomains for unused names.
"""

__version__ = "0.1.0"
__author__ = "Domain Lookup Team"

from domain_lookup.exceptions import (
    DomainLookupError,
    ValidationError,
    ConfigurationError,
)
from domain_lookup.enums import (
    AvailabilityBasis,
    DNSRecordType,
    DNSStatus,
    DomainValidationErrorCode,
    LogLevel,
    ReferralSource,
    WHOISErrorCode,
    WHOISStatus,
    WordlistSource,
)
from domain_lookup.domain_validator import (
    DomainValidator,
    DomainValidationResult,
    DomainValidationError,
)
from domain_lookup.config import (
    WHOISConfig,
    DNSConfig,
    ScanConfig,
    ClassifierConfig,
    LoggingConfig,
    LookupConfig,
    create_default_config,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from domain_lookup.models import (
    WhoisServer,
    DNSRecordCheck,
    AvailabilityResult,
    SubdomainCandidate,
    Wordlist,
    LookupReport,
)
from domain_lookup.whois_client import (
    WHOISTransport,
    WHOISResponse,
    WHOISError,
)
from domain_lookup.whois_referral import (
    WHOISReferralResolver,
    WHOISReferral,
    WHOISLookup,
)
from domain_lookup.dns_probe import DNSProbe
from domain_lookup.availability import AvailabilityClassifier
from domain_lookup.wordlist import (
    parse_wordlist,
    load_default_wordlist,
    build_wordlist,
)
from domain_lookup.subdomain_scanner import SubdomainScanner
from domain_lookup.lookup_service import (
    LookupService,
    LookupRequest,
)
from domain_lookup.audit_logger import (
    AuditLogger,
    LogEntry,
)
from domain_lookup.i18n import (
    get_message,
    get_all_message_keys,
    has_translation,
    get_missing_translations,
    validate_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from domain_lookup.self_test import (
    SelfTest,
    SelfTestResult,
    EndpointTestResult,
    ConfigValidationResult,
    run_self_test,
)
from domain_lookup.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "DomainLookupError",
    "ValidationError",
    "ConfigurationError",
    # Enums
    "AvailabilityBasis",
    "DNSRecordType",
    "DNSStatus",
    "DomainValidationErrorCode",
    "LogLevel",
    "ReferralSource",
    "WHOISErrorCode",
    "WHOISStatus",
    "WordlistSource",
    # Domain Validator
    "DomainValidator",
    "DomainValidationResult",
    "DomainValidationError",
    # Configuration
    "WHOISConfig",
    "DNSConfig",
    "ScanConfig",
    "ClassifierConfig",
    "LoggingConfig",
    "LookupConfig",
    "create_default_config",
    "load_config_from_env",
    "load_config_from_file",
    "save_config_to_file",
    # Models
    "WhoisServer",
    "DNSRecordCheck",
    "AvailabilityResult",
    "SubdomainCandidate",
    "Wordlist",
    "LookupReport",
    # WHOIS
    "WHOISTransport",
    "WHOISResponse",
    "WHOISError",
    "WHOISReferralResolver",
    "WHOISReferral",
    "WHOISLookup",
    # DNS
    "DNSProbe",
    # Classification
    "AvailabilityClassifier",
    # Wordlist
    "parse_wordlist",
    "load_default_wordlist",
    "build_wordlist",
    # Scanner
    "SubdomainScanner",
    # Service
    "LookupService",
    "LookupRequest",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # I18n
    "get_message",
    "get_all_message_keys",
    "has_translation",
    "get_missing_translations",
    "validate_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # Self-Test
    "SelfTest",
    "SelfTestResult",
    "EndpointTestResult",
    "ConfigValidationResult",
    "run_self_test",
    # CLI
    "cli_main",
    "create_parser",
]
