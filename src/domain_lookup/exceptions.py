"""
Exception classes for the domain lookup system.

All exceptions inherit from DomainLookupError and provide structured
error information with codes, messages, and optional details.

Network failures inside the lookup core are never raised; they are captured
in the explicit result types and degrade to empty/false defaults. These
exceptions cover the boundaries: user input and configuration.
"""

from typing import Optional


class DomainLookupError(Exception):
    """Base exception for all domain lookup errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainLookupError):
    """Raised when a domain fails input validation."""

    pass


class ConfigurationError(DomainLookupError):
    """Raised when a configuration value is out of range or malformed."""

    pass
