"""Exceptions raised by the SX Bet SDK.

Every error carries a human readable ``message`` and, where one input is at
fault, the ``field`` name so callers can prompt for a corrected value.
"""

from typing import Any, Optional


class SXBetError(Exception):
    """Base error for the SDK."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(SXBetError, ValueError):
    """Malformed or out-of-range input (odds, amounts, array lengths)."""


class DomainError(ValidationError):
    """Input outside the mathematical domain of an odds conversion."""


class EncodingError(SXBetError, ValueError):
    """Address, hash or integer that cannot be encoded at its ABI width."""


class SigningError(SXBetError):
    """Missing or malformed signing key, or a failure inside the signer."""


class SXBetAPIError(SXBetError):
    """Non-success response from the SX Bet API."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)
