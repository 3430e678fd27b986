"""SX Bet SDK: build, sign, fill and cancel orders on the SX Bet exchange."""

from .errors import (
    SXBetError,
    ValidationError,
    DomainError,
    EncodingError,
    SigningError,
    SXBetAPIError,
)
from .exchange import *  # noqa: F401,F403
from .exchange import __all__ as _exchange_all
from .router import SXBetRouter, SXBetRouterConfig

__version__ = "0.1.0"

__all__ = [
    "SXBetError",
    "ValidationError",
    "DomainError",
    "EncodingError",
    "SigningError",
    "SXBetAPIError",
    "SXBetRouter",
    "SXBetRouterConfig",
    *_exchange_all,
]
