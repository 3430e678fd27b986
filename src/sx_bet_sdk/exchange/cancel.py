"""Cancellation requests for a maker's open orders."""

import time
from typing import Optional, Sequence

import structlog

from ..errors import SigningError, ValidationError
from .encoding import bytes32_to_bytes, normalize_address
from .salt import SaltGenerator, default_salt_generator, salt_to_hex
from .signing import ConfigLike, build_cancel_typed_data, load_account, sign_typed_data
from .types import CancelPayload

logger = structlog.get_logger("sx_bet_sdk.cancel")


def build_cancel(
    order_hashes: Sequence[str],
    maker: str,
    private_key: str,
    config: ConfigLike = None,
    salt_generator: Optional[SaltGenerator] = None,
    timestamp: Optional[int] = None,
) -> CancelPayload:
    """Build and sign a cancellation for ``POST /orders/cancel/v2``.

    Args:
        order_hashes: Hashes of the orders to cancel (bytes32 hex strings)
        maker: Maker address, must match private_key
        private_key: Maker's private key
        config: Exchange configuration or overrides (default: mainnet)
        salt_generator: Salt source (default: OS CSPRNG)
        timestamp: Unix seconds to sign (default: now)

    Returns:
        CancelPayload

    Raises:
        ValidationError: If order_hashes is empty
        EncodingError: If a hash or the maker address is malformed
        SigningError: If the key is invalid or does not belong to maker
    """
    if not order_hashes:
        raise ValidationError("order_hashes must not be empty", field="order_hashes")
    for index, order_hash in enumerate(order_hashes):
        bytes32_to_bytes(order_hash, f"order_hashes[{index}]")

    maker = normalize_address(maker, "maker")
    if load_account(private_key).address != maker:
        raise SigningError("Signing key does not belong to maker", field="maker")

    salt = (salt_generator or default_salt_generator).next_salt()
    if timestamp is None:
        timestamp = int(time.time())

    typed_data = build_cancel_typed_data(order_hashes, timestamp, salt, config)
    signature = sign_typed_data(typed_data, private_key)

    logger.info("cancel.built", maker=maker, order_hashes=list(order_hashes), timestamp=timestamp)
    return CancelPayload(
        signature=signature,
        order_hashes=list(order_hashes),
        salt=salt_to_hex(salt),
        maker=maker,
        timestamp=timestamp,
    )
