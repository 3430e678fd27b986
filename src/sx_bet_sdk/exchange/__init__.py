"""SX Bet Exchange Module.

This module provides the deterministic core for trading on SX Bet.

Key components:
- Fixed-point odds math (1e20 percentage odds, ladder snapping, fill sizing)
- Order hashing and maker signatures
- Fill and cancellation signing (EIP-712)
- Salt generation and USDC formatting

Example usage:
    ```python
    from sx_bet_sdk.exchange import (
        build_cancel,
        create_order,
        hash_order,
        parse_usdc,
        snap_to_odds_ladder,
    )

    # Post a 10 USDC order at 50.25% implied odds
    order = create_order(
        market_hash="0x...",
        is_maker_betting_outcome_one=True,
        total_bet_size=parse_usdc("10"),
        percentage_odds=snap_to_odds_ladder(0.5025),
        maker="0x...",
        private_key="0x...",
    )

    # Cancel it again
    cancel = build_cancel(
        order_hashes=[hash_order(order)],
        maker="0x...",
        private_key="0x...",
    )
    ```
"""

from .types import (
    Order,
    FillPayload,
    CancelPayload,
    FILL_ORDER_TYPES,
    CANCEL_ORDER_TYPES,
    FILL_PLACEHOLDER,
)
from .config import (
    ExchangeConfig,
    ExchangeConfigDict,
    MAINNET,
    TESTNET,
    resolve_exchange_config,
)
from .odds import (
    ODDS_PRECISION,
    ODDS_LADDER_STEP_SIZE,
    to_implied_odds,
    to_decimal_odds,
    taker_implied_odds,
    percentage_odds_to_implied,
    implied_odds_to_percentage_odds,
    fill_amount_from_taker_stake,
    remaining_taker_space,
    snap_to_odds_ladder,
    is_on_ladder,
    format_odds,
)
from .salt import SaltGenerator, default_salt_generator, salt_to_hex
from .order_hash import (
    encode_order,
    hash_order,
    sign_order_hash,
    recover_order_signer,
    verify_order_signature,
    create_order,
)
from .signing import (
    create_fill_domain,
    create_cancel_domain,
    build_fill_typed_data,
    build_cancel_typed_data,
    sign_typed_data,
    sign_typed_data_with_signer,
    recover_typed_data_signer,
    verify_typed_data_signature,
    TypedDataSigner,
)
from .fill import build_fill
from .cancel import build_cancel
from .utils import (
    USDC_SX,
    EIP712_FILL_HASHER_SX,
    EXECUTOR_SX,
    ZERO_ADDRESS,
    ZERO_HASH,
    parse_units,
    format_units,
    format_usdc,
    parse_usdc,
    format_order_for_taker,
    group_orders_by_outcome,
)

__all__ = [
    # Types
    "Order",
    "FillPayload",
    "CancelPayload",
    "FILL_ORDER_TYPES",
    "CANCEL_ORDER_TYPES",
    "FILL_PLACEHOLDER",
    "TypedDataSigner",
    # Config
    "ExchangeConfig",
    "ExchangeConfigDict",
    "MAINNET",
    "TESTNET",
    "resolve_exchange_config",
    # Odds
    "ODDS_PRECISION",
    "ODDS_LADDER_STEP_SIZE",
    "to_implied_odds",
    "to_decimal_odds",
    "taker_implied_odds",
    "percentage_odds_to_implied",
    "implied_odds_to_percentage_odds",
    "fill_amount_from_taker_stake",
    "remaining_taker_space",
    "snap_to_odds_ladder",
    "is_on_ladder",
    "format_odds",
    # Salts
    "SaltGenerator",
    "default_salt_generator",
    "salt_to_hex",
    # Orders
    "encode_order",
    "hash_order",
    "sign_order_hash",
    "recover_order_signer",
    "verify_order_signature",
    "create_order",
    # Signing
    "create_fill_domain",
    "create_cancel_domain",
    "build_fill_typed_data",
    "build_cancel_typed_data",
    "sign_typed_data",
    "sign_typed_data_with_signer",
    "recover_typed_data_signer",
    "verify_typed_data_signature",
    # Builders
    "build_fill",
    "build_cancel",
    # Utils
    "USDC_SX",
    "EIP712_FILL_HASHER_SX",
    "EXECUTOR_SX",
    "ZERO_ADDRESS",
    "ZERO_HASH",
    "parse_units",
    "format_units",
    "format_usdc",
    "parse_usdc",
    "format_order_for_taker",
    "group_orders_by_outcome",
]
