"""
Domain validation and normalization module.

Checks user input against the accepted domain shape before anything reaches
the lookup core, and converts it to its canonical (lowercase) form.
"""

import re
from dataclasses import dataclass
from typing import Optional

from domain_lookup.enums import DomainValidationErrorCode
from domain_lookup.exceptions import ValidationError


# label(.label)*.tld with a 2+ letter alphabetic TLD
DOMAIN_SHAPE_PATTERN = re.compile(r"^[a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE)

# Whitespace and URL syntax that users paste in by mistake
FORBIDDEN_CHARS_PATTERN = re.compile(
    r'[\x00-\x1f\x7f'           # Control characters
    r'\s'                        # Whitespace
    r'/:@?#]'                    # URL syntax (scheme, path, credentials, query)
)


@dataclass
class DomainValidationError:
    """Structured error information for domain validation failures."""

    code: DomainValidationErrorCode
    message: str
    details: dict


@dataclass
class DomainValidationResult:
    """Result of domain validation operation."""

    valid: bool
    canonical_domain: Optional[str]
    error: Optional[DomainValidationError]


class DomainValidator:
    """
    Validates and normalizes domain names.

    Handles:
    - Rejection of empty input
    - Rejection of whitespace and protocol prefixes (``https://example.com``)
    - The ``label(.label)*.tld`` shape check
    - Conversion to lowercase canonical form

    Internationalized names are not normalized; non-ASCII input fails the
    shape check.
    """

    def validate(self, raw_domain: Optional[str]) -> DomainValidationResult:
        """
        Validate and normalize a domain string.

        Args:
            raw_domain: The raw domain string to validate

        Returns:
            DomainValidationResult with validation status and canonical form or error
        """
        if not raw_domain or not raw_domain.strip():
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.EMPTY_INPUT,
                    message="Domain input is empty",
                    details={"raw_input": raw_domain},
                ),
            )

        domain = raw_domain.strip()

        if FORBIDDEN_CHARS_PATTERN.search(domain):
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.FORBIDDEN_CHARS,
                    message="Domain contains forbidden characters",
                    details={
                        "raw_input": raw_domain,
                        "forbidden_chars": FORBIDDEN_CHARS_PATTERN.findall(domain),
                    },
                ),
            )

        if not DOMAIN_SHAPE_PATTERN.match(domain):
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.INVALID_FORMAT,
                    message="This does not look like a valid domain name",
                    details={"raw_input": raw_domain},
                ),
            )

        return DomainValidationResult(
            valid=True,
            canonical_domain=domain.lower(),
            error=None,
        )

    def canonicalize(self, raw_domain: Optional[str]) -> str:
        """
        Return the canonical form of a domain or raise.

        Raises:
            ValidationError: If the domain is not acceptable
        """
        result = self.validate(raw_domain)
        if not result.valid:
            raise ValidationError(
                code=result.error.code.value,
                message=result.error.message,
                details=result.error.details,
            )
        return result.canonical_domain

    def is_valid(self, raw_domain: Optional[str]) -> bool:
        return self.validate(raw_domain).valid
