"""
Enumeration types for the domain lookup system.

These enums provide type-safe constants for status codes, error codes,
and configuration options throughout the system.
"""

from enum import Enum


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class DomainValidationErrorCode(Enum):
    """Error codes for domain validation failures."""

    EMPTY_INPUT = "empty_input"
    FORBIDDEN_CHARS = "forbidden_chars"
    INVALID_FORMAT = "invalid_format"


class WHOISStatus(Enum):
    """Outcome of a single WHOIS exchange."""

    RECEIVED = "received"
    EMPTY = "empty"
    FAILED = "failed"


class WHOISErrorCode(Enum):
    """Error codes for WHOIS transport failures."""

    RESOLUTION_ERROR = "resolution_error"
    CONNECTION_ERROR = "connection_error"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"


class ReferralSource(Enum):
    """Where the authoritative WHOIS server name came from."""

    REFERRAL = "referral"
    FALLBACK = "fallback"
    IANA = "iana"
    NONE = "none"


class DNSRecordType(Enum):
    """DNS resource record types probed for existence."""

    A = "A"
    NS = "NS"
    CNAME = "CNAME"


class DNSStatus(Enum):
    """Outcome of a single DNS existence lookup."""

    PRESENT = "present"
    NO_ANSWER = "no_answer"
    NXDOMAIN = "nxdomain"
    TIMEOUT = "timeout"
    ERROR = "error"


class AvailabilityBasis(Enum):
    """Which signal decided an availability verdict."""

    WHOIS_PATTERN = "whois_pattern"
    DNS_FALLBACK = "dns_fallback"


class WordlistSource(Enum):
    """Origin of a subdomain wordlist."""

    CUSTOM = "custom"
    DEFAULT = "default"
