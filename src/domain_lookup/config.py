"""
Configuration dataclasses for the domain lookup system.

This module defines the configuration structures used throughout the system:
WHOIS transport and referral settings, DNS probing, subdomain scanning,
classification patterns, and logging. All structures are immutable and are
injected into the components at construction, so tests can substitute
fallback tables, patterns, and wordlists.

Configuration can be created from defaults, loaded from a JSON file, or
overridden from environment variables (a local .env file is honoured).
"""

import json
import math
import os
import re
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

from .enums import LogLevel
from .exceptions import ConfigurationError


# WHOIS protocol port (RFC 3912)
WHOIS_PORT = 43

# Root referral server
IANA_WHOIS_SERVER = "whois.iana.org"

# Connect and per-read timeout for WHOIS and DNS lookups
DEFAULT_TIMEOUT_SECONDS = 5.0

# Hard ceiling on subdomain candidates per scan
MAX_WORDLIST_ENTRIES = 200

# Used when the IANA referral carries no "whois:" line
DEFAULT_FALLBACK_SERVERS: Mapping[str, str] = MappingProxyType({
    "com": "whois.verisign-grs.com",
    "net": "whois.verisign-grs.com",
    "org": "whois.pir.org",
})

# Ordered absence patterns; first match wins
DEFAULT_AVAILABILITY_PATTERNS: tuple[str, ...] = (
    r"no match",
    r"not found",
    r"no entries found",
    r"status:\s*available",
    r"domain not found",
)

SUPPORTED_LANGUAGES = ("de", "en")
OUTPUT_FORMATS = ("json", "text", "both")

DEFAULT_CONFIG_PATH = Path.home() / ".domain_lookup" / "config.json"

ENV_PREFIX = "DOMAIN_LOOKUP_"


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(
            code="invalid_value",
            message=f"{name} must be a finite number greater than zero",
            details={"field": name, "value": value},
        )


@dataclass(frozen=True)
class WHOISConfig:
    """WHOIS transport and referral configuration."""

    iana_server: str = IANA_WHOIS_SERVER
    port: int = WHOIS_PORT
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    fallback_servers: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_FALLBACK_SERVERS
    )

    def __post_init__(self) -> None:
        _require_positive("whois.timeout", self.timeout)
        if not 0 < self.port < 65536:
            raise ConfigurationError(
                code="invalid_value",
                message="whois.port must be between 1 and 65535",
                details={"field": "whois.port", "value": self.port},
            )
        if not self.iana_server:
            raise ConfigurationError(
                code="missing_value",
                message="whois.iana_server must not be empty",
            )
        # Freeze a lower-cased copy so callers cannot mutate the table
        object.__setattr__(
            self,
            "fallback_servers",
            MappingProxyType({
                tld.lower().lstrip("."): server
                for tld, server in dict(self.fallback_servers).items()
            }),
        )


@dataclass(frozen=True)
class DNSConfig:
    """DNS probe configuration."""

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    lifetime: float = DEFAULT_TIMEOUT_SECONDS
    nameservers: tuple[str, ...] = ()  # empty: use the system resolver

    def __post_init__(self) -> None:
        _require_positive("dns.timeout", self.timeout)
        _require_positive("dns.lifetime", self.lifetime)
        object.__setattr__(self, "nameservers", tuple(self.nameservers))


@dataclass(frozen=True)
class ScanConfig:
    """Subdomain scan configuration."""

    max_candidates: int = MAX_WORDLIST_ENTRIES
    max_concurrency: int = 20
    wordlist_path: Optional[Path] = None  # None: packaged default wordlist

    def __post_init__(self) -> None:
        if not 0 < self.max_candidates <= MAX_WORDLIST_ENTRIES:
            raise ConfigurationError(
                code="invalid_value",
                message=f"scan.max_candidates must be between 1 and {MAX_WORDLIST_ENTRIES}",
                details={"field": "scan.max_candidates", "value": self.max_candidates},
            )
        if self.max_concurrency < 1:
            raise ConfigurationError(
                code="invalid_value",
                message="scan.max_concurrency must be at least 1",
                details={"field": "scan.max_concurrency", "value": self.max_concurrency},
            )
        if self.wordlist_path is not None and not isinstance(self.wordlist_path, Path):
            object.__setattr__(self, "wordlist_path", Path(self.wordlist_path))


@dataclass(frozen=True)
class ClassifierConfig:
    """Availability classification configuration."""

    availability_patterns: tuple[str, ...] = DEFAULT_AVAILABILITY_PATTERNS

    def __post_init__(self) -> None:
        patterns = tuple(self.availability_patterns)
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ConfigurationError(
                    code="invalid_pattern",
                    message=f"Invalid availability pattern {pattern!r}: {e}",
                    details={"pattern": pattern},
                )
        object.__setattr__(self, "availability_patterns", patterns)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'

    def __post_init__(self) -> None:
        if self.level not in {lvl.value for lvl in LogLevel}:
            raise ConfigurationError(
                code="invalid_value",
                message=f"Unsupported log level: {self.level}",
                details={"field": "logging.level", "value": self.level},
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                code="invalid_value",
                message=f"Unsupported log format: {self.output_format}",
                details={"field": "logging.output_format", "value": self.output_format},
            )


@dataclass(frozen=True)
class LookupConfig:
    """Main configuration combining all sub-configurations."""

    whois: WHOISConfig = field(default_factory=WHOISConfig)
    dns: DNSConfig = field(default_factory=DNSConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    language: str = "de"  # 'de' or 'en'
    simulation_mode: bool = False

    def __post_init__(self) -> None:
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigurationError(
                code="invalid_value",
                message=f"Unsupported language: {self.language}",
                details={"field": "language", "value": self.language},
            )


def create_default_config(
    simulation_mode: bool = False,
    language: str = "de",
) -> LookupConfig:
    """
    Create a default configuration.

    Args:
        simulation_mode: Enable simulation mode (no real network requests)
        language: Output language ('de' or 'en')

    Returns:
        LookupConfig with default settings
    """
    return LookupConfig(language=language, simulation_mode=simulation_mode)


def config_from_dict(data: dict) -> LookupConfig:
    """
    Build a configuration from a plain dictionary (as stored in JSON).

    Missing sections and keys take their default values.

    Raises:
        ConfigurationError: If a value is out of range
        TypeError, ValueError: If a value has the wrong shape
    """
    whois_data = data.get("whois") or {}
    whois = WHOISConfig(
        iana_server=whois_data.get("iana_server", IANA_WHOIS_SERVER),
        port=int(whois_data.get("port", WHOIS_PORT)),
        timeout=float(whois_data.get("timeout", DEFAULT_TIMEOUT_SECONDS)),
        fallback_servers=whois_data.get("fallback_servers", DEFAULT_FALLBACK_SERVERS),
    )

    dns_data = data.get("dns") or {}
    dns = DNSConfig(
        timeout=float(dns_data.get("timeout", DEFAULT_TIMEOUT_SECONDS)),
        lifetime=float(dns_data.get("lifetime", DEFAULT_TIMEOUT_SECONDS)),
        nameservers=tuple(dns_data.get("nameservers", ())),
    )

    scan_data = data.get("scan") or {}
    wordlist_path = scan_data.get("wordlist_path")
    scan = ScanConfig(
        max_candidates=int(scan_data.get("max_candidates", MAX_WORDLIST_ENTRIES)),
        max_concurrency=int(scan_data.get("max_concurrency", 20)),
        wordlist_path=Path(wordlist_path) if wordlist_path else None,
    )

    classifier_data = data.get("classifier") or {}
    classifier = ClassifierConfig(
        availability_patterns=tuple(
            classifier_data.get("availability_patterns", DEFAULT_AVAILABILITY_PATTERNS)
        ),
    )

    logging_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", "info"),
        output_format=logging_data.get("output_format", "text"),
    )

    return LookupConfig(
        whois=whois,
        dns=dns,
        scan=scan,
        classifier=classifier,
        logging=logging_config,
        language=data.get("language", "de"),
        simulation_mode=bool(data.get("simulation_mode", False)),
    )


def config_to_dict(config: LookupConfig) -> dict:
    """Convert a configuration to a JSON-serializable dictionary."""
    return {
        "whois": {
            "iana_server": config.whois.iana_server,
            "port": config.whois.port,
            "timeout": config.whois.timeout,
            "fallback_servers": dict(config.whois.fallback_servers),
        },
        "dns": {
            "timeout": config.dns.timeout,
            "lifetime": config.dns.lifetime,
            "nameservers": list(config.dns.nameservers),
        },
        "scan": {
            "max_candidates": config.scan.max_candidates,
            "max_concurrency": config.scan.max_concurrency,
            "wordlist_path": (
                str(config.scan.wordlist_path) if config.scan.wordlist_path else None
            ),
        },
        "classifier": {
            "availability_patterns": list(config.classifier.availability_patterns),
        },
        "logging": {
            "level": config.logging.level,
            "output_format": config.logging.output_format,
        },
        "language": config.language,
        "simulation_mode": config.simulation_mode,
    }


def load_config_from_file(config_path: Path) -> Optional[LookupConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        LookupConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError("configuration root must be an object")
        return config_from_dict(data)

    except ConfigurationError as e:
        print(f"Error loading config: {e.message}", file=sys.stderr)
        return None
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: LookupConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: LookupConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)
        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def _str_env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(ENV_PREFIX + name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(ENV_PREFIX + name, str(default)))
    except ValueError:
        return default


def load_config_from_env(
    base: Optional[LookupConfig] = None,
    env_file: Optional[Path] = None,
) -> LookupConfig:
    """
    Apply DOMAIN_LOOKUP_* environment variables on top of a configuration.

    A .env file is loaded first (without overriding variables that are
    already set). Unparsable numbers keep the base value.

    Args:
        base: Configuration to start from (defaults to create_default_config())
        env_file: Optional explicit .env path

    Returns:
        New LookupConfig with overrides applied

    Raises:
        ConfigurationError: If an override is out of range
    """
    load_dotenv(dotenv_path=env_file)
    config = base or create_default_config()

    whois = replace(
        config.whois,
        iana_server=_str_env("IANA_SERVER") or config.whois.iana_server,
        timeout=_float_env("WHOIS_TIMEOUT", config.whois.timeout),
    )

    nameservers = _str_env("DNS_NAMESERVERS")
    dns = replace(
        config.dns,
        timeout=_float_env("DNS_TIMEOUT", config.dns.timeout),
        lifetime=_float_env("DNS_LIFETIME", config.dns.lifetime),
        nameservers=(
            tuple(ns.strip() for ns in nameservers.split(",") if ns.strip())
            if nameservers
            else config.dns.nameservers
        ),
    )

    wordlist_path = _str_env("WORDLIST")
    scan = replace(
        config.scan,
        max_candidates=_int_env("SCAN_LIMIT", config.scan.max_candidates),
        max_concurrency=_int_env("SCAN_CONCURRENCY", config.scan.max_concurrency),
        wordlist_path=Path(wordlist_path) if wordlist_path else config.scan.wordlist_path,
    )

    logging_config = replace(
        config.logging,
        level=(_str_env("LOG_LEVEL") or config.logging.level).lower(),
        output_format=(_str_env("LOG_FORMAT") or config.logging.output_format).lower(),
    )

    language = (_str_env("LANGUAGE") or config.language).lower()
    dry_run = _str_env("DRY_RUN")

    return replace(
        config,
        whois=whois,
        dns=dns,
        scan=scan,
        logging=logging_config,
        language=language,
        simulation_mode=(dry_run == "1") if dry_run is not None else config.simulation_mode,
    )
