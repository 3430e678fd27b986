"""Fill requests: a taker consuming one or more maker orders."""

from typing import Optional, Sequence

import structlog

from ..errors import SigningError, ValidationError
from .encoding import normalize_address
from .order_hash import hash_order
from .salt import SaltGenerator, default_salt_generator
from .signing import ConfigLike, build_fill_typed_data, load_account, sign_typed_data
from .types import FillPayload, Order

logger = structlog.get_logger("sx_bet_sdk.fill")


def build_fill(
    orders: Sequence[Order],
    taker_amounts: Sequence[int],
    taker: str,
    private_key: str,
    config: ConfigLike = None,
    salt_generator: Optional[SaltGenerator] = None,
) -> FillPayload:
    """Build and sign a fill for ``POST /orders/fill``.

    ``taker_amounts[i]`` is the maker-side amount filled against
    ``orders[i]`` (see ``odds.fill_amount_from_taker_stake``). Whether it
    still fits the order's remaining space is checked by the exchange.

    Args:
        orders: Orders to fill, as returned by the API (signed by their makers)
        taker_amounts: Maker-side fill amount per order, in base units
        taker: Taker address, must match private_key
        private_key: Taker's private key
        config: Exchange configuration or overrides (default: mainnet)
        salt_generator: Salt source (default: OS CSPRNG)

    Returns:
        FillPayload

    Raises:
        ValidationError: If the arrays are empty or differ in length, an
            amount is not positive, or an order is unsigned
        EncodingError: If an order field or the taker address is malformed
        SigningError: If the key is invalid or does not belong to taker
    """
    if not orders or len(orders) != len(taker_amounts):
        raise ValidationError(
            f"orders and taker_amounts must be non-empty and equal length "
            f"(got {len(orders)} and {len(taker_amounts)})",
            field="taker_amounts",
        )
    for index, amount in enumerate(taker_amounts):
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError(
                f"Invalid taker_amounts[{index}]: {amount!r}. Must be a positive integer",
                field=f"taker_amounts[{index}]",
            )

    taker = normalize_address(taker, "taker")
    if load_account(private_key).address != taker:
        raise SigningError("Signing key does not belong to taker", field="taker")

    fill_salt = (salt_generator or default_salt_generator).next_salt()
    typed_data = build_fill_typed_data(orders, taker_amounts, fill_salt, config)
    taker_sig = sign_typed_data(typed_data, private_key)

    payload = FillPayload(
        order_hashes=[hash_order(order) for order in orders],
        taker_amounts=list(taker_amounts),
        taker=taker,
        taker_sig=taker_sig,
        fill_salt=fill_salt,
    )
    logger.info(
        "fill.built",
        taker=taker,
        order_count=len(orders),
        order_hashes=payload.order_hashes,
    )
    return payload
