"""Exchange configuration.

Protocol constants that must match the deployed SX Bet contracts. Callers
pass a partial ``ExchangeConfigDict`` of overrides; ``resolve_exchange_config``
fills in the defaults. Private keys are never part of the configuration.
"""

from dataclasses import dataclass, replace
from typing import Optional, TypedDict, Union

from eth_utils import is_address, to_checksum_address

from ..errors import ValidationError
from .odds import ODDS_LADDER_STEP_SIZE
from .utils import (
    DEFAULT_ORDER_EXPIRY,
    EIP712_FILL_HASHER_SX,
    EIP712_FILL_HASHER_TORONTO,
    EXECUTOR_SX,
    USDC_DECIMALS,
    USDC_SX,
)


class ExchangeConfigDict(TypedDict, total=False):
    """Exchange configuration overrides."""

    chain_id: int
    """Chain ID. Default: 4162 (SX Rollup)"""

    fill_hasher: str
    """EIP712FillHasher contract, the fill domain's verifyingContract"""

    fill_domain_name: str
    """Fill domain name. Default: SX Bet"""

    fill_domain_version: str
    """Fill domain version. Default: 6.0"""

    cancel_domain_name: str
    """Cancel domain name. Default: CancelOrderV2SportX"""

    cancel_domain_version: str
    """Cancel domain version. Default: 1.0"""

    base_token: str
    """Settlement token. Default: USDC"""

    base_token_decimals: int
    """Settlement token decimals. Default: 6"""

    executor: str
    """Executor allowed to settle fills for makers"""

    odds_ladder_step: int
    """Odds ladder step in basis points. Default: 25 (0.25%)"""

    order_expiry: int
    """Deprecated order expiry still included in the order hash"""

    api_url: str
    """SX Bet API base URL"""

    chain_version: str
    """chainVersion query parameter for cancellations. Default: SXR"""


@dataclass(frozen=True)
class ExchangeConfig:
    """Resolved exchange configuration with all defaults applied."""

    chain_id: int = 4162
    fill_hasher: str = EIP712_FILL_HASHER_SX
    fill_domain_name: str = "SX Bet"
    fill_domain_version: str = "6.0"
    cancel_domain_name: str = "CancelOrderV2SportX"
    cancel_domain_version: str = "1.0"
    base_token: str = USDC_SX
    base_token_decimals: int = USDC_DECIMALS
    executor: str = EXECUTOR_SX
    odds_ladder_step: int = ODDS_LADDER_STEP_SIZE
    order_expiry: int = DEFAULT_ORDER_EXPIRY
    api_url: str = "https://api.sx.bet"
    chain_version: str = "SXR"

    def __post_init__(self) -> None:
        for field in ("fill_hasher", "base_token", "executor"):
            value = getattr(self, field)
            if not is_address(value):
                raise ValidationError(f"Invalid {field}: {value}", field=field)
            object.__setattr__(self, field, to_checksum_address(value))
        if self.odds_ladder_step <= 0:
            raise ValidationError(
                f"Invalid odds_ladder_step: {self.odds_ladder_step}. Must be positive",
                field="odds_ladder_step",
            )


MAINNET = ExchangeConfig()

TESTNET = ExchangeConfig(
    chain_id=647,
    fill_hasher=EIP712_FILL_HASHER_TORONTO,
    api_url="https://api.toronto.sx.bet",
)


def resolve_exchange_config(
    config: Optional[Union[ExchangeConfig, ExchangeConfigDict]] = None,
    base: ExchangeConfig = MAINNET,
) -> ExchangeConfig:
    """Apply overrides on top of ``base`` (mainnet by default).

    Args:
        config: Resolved config (returned as is), dict of overrides, or None

    Returns:
        ExchangeConfig

    Raises:
        ValidationError: If an override names an unknown setting or holds an
            invalid address
    """
    if config is None:
        return base
    if isinstance(config, ExchangeConfig):
        return config

    unknown = set(config) - set(ExchangeConfigDict.__annotations__)
    if unknown:
        raise ValidationError(f"Unknown exchange settings: {', '.join(sorted(unknown))}")
    return replace(base, **config)
