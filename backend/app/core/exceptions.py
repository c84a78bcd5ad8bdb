"""
Custom exceptions for the application.
"""

from enum import Enum
from typing import Any, Optional


class PortfolioError(Exception):
    """Base exception for the portfolio backend."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PortfolioError):
    """Resource not found (unknown or malformed id)."""

    pass


class ValidationError(PortfolioError):
    """Validation error."""

    pass


class ExternalServiceErrorKind(str, Enum):
    """Why a call to the LLM API failed."""

    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUTH_FAILED = "auth_failed"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    GENERIC = "generic"


class ExternalServiceError(PortfolioError):
    """LLM API call failed."""

    def __init__(
        self,
        message: str,
        kind: ExternalServiceErrorKind = ExternalServiceErrorKind.GENERIC,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details={"kind": kind.value, "status_code": status_code})
        self.kind = kind
        self.status_code = status_code

    @property
    def is_throttled(self) -> bool:
        """True when the caller should simply try again later."""
        return self.kind in (
            ExternalServiceErrorKind.RATE_LIMITED,
            ExternalServiceErrorKind.QUOTA_EXCEEDED,
        )


class PersistenceError(PortfolioError):
    """Data store unreachable or a write failed."""

    pass
