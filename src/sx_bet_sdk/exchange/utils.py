"""Utility functions and protocol constants for the SX Bet exchange."""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Sequence, Union

from ..errors import ValidationError
from .odds import remaining_taker_space, taker_implied_odds, to_decimal_odds
from .types import Order

# USDC on SX Network
USDC_SX = "0x6629Ce1Cf35Cc1329ebB4F63202F3f197b3F050B"
USDC_DECIMALS = 6

# EIP712FillHasher, the fill schema's verifying contract
EIP712_FILL_HASHER_SX = "0x845a2Da2D70fEDe8474b1C8518200798c60aC364"
EIP712_FILL_HASHER_TORONTO = "0xC8dbedb008deB9c870E871F7a470f847C67135E9"

# Executor authorized to settle fills on behalf of makers
EXECUTOR_SX = "0x52adf738AAD93c31f798a30b2C74D658e1E9a562"

# Deprecated order expiry, still part of the order hash
DEFAULT_ORDER_EXPIRY = 2209006800

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = "0x" + "00" * 32

Amount = Union[int, float, str, Decimal]
OrderLike = Union[Order, Mapping[str, Any]]


def _to_decimal(amount: Amount, field: str) -> Decimal:
    # str() first so floats convert from their shortest repr (0.1 -> "0.1")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError(f"Invalid {field}: {amount!r}", field=field) from None
    if not value.is_finite():
        raise ValidationError(f"Invalid {field}: {amount!r}", field=field)
    return value


def parse_units(amount: Amount, decimals: int) -> int:
    """Parse a nominal amount into integer base units.

    Args:
        amount: Nominal amount (e.g., "10.5" or 10.5)
        decimals: Token decimals

    Returns:
        Amount in base units (e.g., 10500000 for 6 decimals)

    Raises:
        ValidationError: If the amount is not a number or has more
            fractional digits than the token supports
    """
    scaled = _to_decimal(amount, "amount").scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Too many decimal places in {amount!r} for {decimals} decimals",
            field="amount",
        )
    return int(scaled)


def format_units(value: int, decimals: int) -> str:
    """Format integer base units as a nominal string without trailing zeros."""
    text = format(Decimal(value).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_usdc(amount: int) -> str:
    """Format USDC amount (6 decimals) to human readable string.

    Args:
        amount: USDC amount in 6 decimals (e.g., 1000000 = $1)

    Returns:
        Human readable string (e.g., "1")
    """
    return format_units(amount, USDC_DECIMALS)


def parse_usdc(amount: Amount) -> int:
    """Parse human readable amount to USDC (6 decimals).

    Args:
        amount: Human readable amount (e.g., 1.50)

    Returns:
        USDC amount in 6 decimals (e.g., 1500000)
    """
    return parse_units(amount, USDC_DECIMALS)


def _maker_backs_outcome_one(order: OrderLike) -> bool:
    if isinstance(order, Order):
        return order.is_maker_betting_outcome_one
    return bool(order["isMakerBettingOutcomeOne"])


def format_order_for_taker(
    order: OrderLike, decimals: int = USDC_DECIMALS
) -> Dict[str, Any]:
    """Describe an order from the taker's side of the bet.

    The taker backs the opposite outcome at the complementary odds, and can
    stake at most the order's remaining taker space.

    Args:
        order: ``Order`` (e.g. from ``SXBetRouter.get_active_orders``) or an
            order dict as returned by ``GET /orders`` (camelCase keys)
        decimals: Base token decimals

    Returns:
        Dict with ``orderHash``, ``outcome``, ``impliedOdds``,
        ``impliedOddsFormatted``, ``decimalOdds`` and ``availableBetSize``
    """
    if isinstance(order, Order):
        # order_hash imports this module through config
        from .order_hash import hash_order

        order_hash = hash_order(order)
        percentage_odds = order.percentage_odds
        total_bet_size = order.total_bet_size
        fill_amount = order.fill_amount
    else:
        order_hash = order.get("orderHash")
        percentage_odds = int(order["percentageOdds"])
        total_bet_size = int(order["totalBetSize"])
        fill_amount = int(order.get("fillAmount", 0))

    implied = taker_implied_odds(percentage_odds)
    available = remaining_taker_space(total_bet_size, fill_amount, percentage_odds)
    return {
        "orderHash": order_hash,
        "outcome": 2 if _maker_backs_outcome_one(order) else 1,
        "impliedOdds": implied,
        "impliedOddsFormatted": f"{implied * 100:.2f}%",
        "decimalOdds": f"{to_decimal_odds(implied):.2f}",
        "availableBetSize": format_units(available, decimals),
    }


def group_orders_by_outcome(orders: Sequence[OrderLike]) -> Dict[int, List[OrderLike]]:
    """Group orders by the outcome a taker would be betting on."""
    grouped: Dict[int, List[OrderLike]] = {}
    for order in orders:
        outcome = 2 if _maker_backs_outcome_one(order) else 1
        grouped.setdefault(outcome, []).append(order)
    return grouped
