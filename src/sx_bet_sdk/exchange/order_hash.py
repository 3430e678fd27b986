"""Order hashing and maker signatures for SX Bet.

The order hash is the order's identity on the exchange and the message the
maker signs. It is keccak256 over the tightly packed (``encodePacked``)
order fields, in the order the verifying contract reads them:

    bytes32 marketHash, address baseToken, uint256 totalBetSize,
    uint256 percentageOdds, uint256 expiry, uint256 salt,
    address maker, address executor, bool isMakerBettingOutcomeOne
"""

import time
from typing import Optional

import structlog
from eth_abi.packed import encode_packed
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import keccak, to_hex

from ..errors import SigningError, ValidationError
from .config import resolve_exchange_config
from .encoding import (
    bytes32_to_bytes,
    check_bool,
    check_uint256,
    hex_to_bytes,
    normalize_address,
)
from .odds import is_on_ladder, validate_percentage_odds
from .salt import SaltGenerator, default_salt_generator
from .signing import ConfigLike, load_account
from .types import Order

logger = structlog.get_logger("sx_bet_sdk.order_hash")

ORDER_HASH_TYPES = [
    "bytes32",
    "address",
    "uint256",
    "uint256",
    "uint256",
    "uint256",
    "address",
    "address",
    "bool",
]


def encode_order(order: Order) -> bytes:
    """Packed preimage of the order hash.

    Raises:
        EncodingError: If an address is not 20 bytes, the market hash is not
            32 bytes or an integer field does not fit in a uint256
    """
    return encode_packed(
        ORDER_HASH_TYPES,
        [
            bytes32_to_bytes(order.market_hash, "market_hash"),
            normalize_address(order.base_token, "base_token"),
            check_uint256(order.total_bet_size, "total_bet_size"),
            check_uint256(order.percentage_odds, "percentage_odds"),
            check_uint256(order.expiry, "expiry"),
            check_uint256(order.salt, "salt"),
            normalize_address(order.maker, "maker"),
            normalize_address(order.executor, "executor"),
            check_bool(order.is_maker_betting_outcome_one, "is_maker_betting_outcome_one"),
        ],
    )


def hash_order(order: Order) -> str:
    """Compute the order hash.

    Args:
        order: Order to hash (signature, api_expiry and fill_amount are ignored)

    Returns:
        bytes32 hex string order hash
    """
    return "0x" + keccak(encode_order(order)).hex()


def sign_order_hash(order_hash: str, private_key: str) -> str:
    """Sign an order hash as the maker.

    The maker signs the 32 raw hash bytes as an EIP-191 personal message.

    Args:
        order_hash: bytes32 hex string from ``hash_order``
        private_key: Maker's private key

    Returns:
        65-byte signature as a 0x hex string

    Raises:
        SigningError: If the key is missing or malformed
    """
    account = load_account(private_key)
    signable = encode_defunct(primitive=bytes32_to_bytes(order_hash, "order_hash"))
    try:
        signed = account.sign_message(signable)
    except Exception as exc:
        raise SigningError("Failed to sign order hash") from exc
    return to_hex(signed.signature)


def recover_order_signer(order_hash: str, signature: str) -> str:
    """Recover the address that signed an order hash."""
    signable = encode_defunct(primitive=bytes32_to_bytes(order_hash, "order_hash"))
    try:
        return Account.recover_message(signable, signature=hex_to_bytes(signature, "signature"))
    except Exception as exc:
        raise SigningError("Could not recover signer from order signature") from exc


def verify_order_signature(order: Order) -> bool:
    """Check that an order's signature was made by its maker.

    Returns:
        True if the order is signed by ``order.maker``, False otherwise
    """
    if not order.signature:
        return False
    try:
        recovered = recover_order_signer(hash_order(order), order.signature)
    except (ValueError, SigningError):
        return False
    return recovered.lower() == order.maker.lower()


def create_order(
    market_hash: str,
    is_maker_betting_outcome_one: bool,
    total_bet_size: int,
    percentage_odds: int,
    maker: str,
    private_key: str,
    config: ConfigLike = None,
    salt_generator: Optional[SaltGenerator] = None,
    api_expiry_seconds: int = 3600,
    strict_ladder: bool = True,
    now: Optional[int] = None,
) -> Order:
    """Create and sign a new maker order.

    Args:
        market_hash: Market to bet on (bytes32 hex string)
        is_maker_betting_outcome_one: True to back outcome one
        total_bet_size: Maker stake in base token units
        percentage_odds: Maker odds scaled by 10**20
        maker: Maker address, must match private_key
        private_key: Maker's private key
        config: Exchange configuration or overrides (default: mainnet)
        salt_generator: Salt source (default: OS CSPRNG)
        api_expiry_seconds: Seconds until the API drops the order
        strict_ladder: Reject odds that are not on the odds ladder
        now: Current unix time (default: time.time())

    Returns:
        Signed Order

    Raises:
        ValidationError: If the size or odds are invalid
        EncodingError: If an address or the market hash is malformed
        SigningError: If the key is invalid or does not belong to maker
    """
    cfg = resolve_exchange_config(config)

    if isinstance(total_bet_size, bool) or not isinstance(total_bet_size, int) or total_bet_size <= 0:
        raise ValidationError(
            f"Invalid total_bet_size: {total_bet_size!r}. Must be a positive integer",
            field="total_bet_size",
        )
    validate_percentage_odds(percentage_odds)
    if strict_ladder and not is_on_ladder(percentage_odds, cfg.odds_ladder_step):
        raise ValidationError(
            f"Odds {percentage_odds} are not on the {cfg.odds_ladder_step} bps odds ladder",
            field="percentage_odds",
        )

    maker = normalize_address(maker, "maker")
    account = load_account(private_key)
    if account.address != maker:
        raise SigningError("Signing key does not belong to maker", field="maker")

    salts = salt_generator or default_salt_generator
    order = Order(
        market_hash=to_hex(bytes32_to_bytes(market_hash, "market_hash")),
        base_token=cfg.base_token,
        total_bet_size=total_bet_size,
        percentage_odds=percentage_odds,
        expiry=cfg.order_expiry,
        salt=salts.next_salt(),
        maker=maker,
        executor=cfg.executor,
        is_maker_betting_outcome_one=check_bool(
            is_maker_betting_outcome_one, "is_maker_betting_outcome_one"
        ),
        api_expiry=int(time.time() if now is None else now) + api_expiry_seconds,
    )
    order_hash = hash_order(order)
    order.signature = sign_order_hash(order_hash, private_key)

    logger.info(
        "order.created",
        order_hash=order_hash,
        market_hash=order.market_hash,
        total_bet_size=total_bet_size,
        percentage_odds=percentage_odds,
    )
    return order
