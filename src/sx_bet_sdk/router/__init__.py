"""Router modules for the SX Bet SDK."""

from .sx_bet import SXBetRouter, SXBetRouterConfig

__all__ = [
    "SXBetRouter",
    "SXBetRouterConfig",
]
