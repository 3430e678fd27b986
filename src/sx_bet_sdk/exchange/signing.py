"""EIP-712 signing for SX Bet fills and cancellations.

Provides EIP-712 signing functions that work with various wallet types:
- eth_account.Account (direct signing with a private key passed per call)
- TypedDataSigner (browser or custodial wallets that sign typed data)

Two schemas are supported, both with primary type ``Details``:
- fill: domain bound to the EIP712FillHasher contract
- cancel: domain bound to a per-request salt instead of a contract
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, TypedDict, Union

import structlog
from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex

from ..errors import SigningError, ValidationError
from .config import ExchangeConfig, ExchangeConfigDict, resolve_exchange_config
from .encoding import (
    bytes32_to_bytes,
    check_bool,
    check_uint256,
    hex_to_bytes,
    normalize_address,
)
from .types import (
    CANCEL_DOMAIN_TYPE,
    CANCEL_ORDER_TYPES,
    FILL_DETAIL_FIELDS,
    FILL_DOMAIN_TYPE,
    FILL_ORDER_TYPES,
    FILL_PLACEHOLDER,
    Order,
)
from .utils import ZERO_ADDRESS, ZERO_HASH

logger = structlog.get_logger("sx_bet_sdk.signing")

ConfigLike = Optional[Union[ExchangeConfig, ExchangeConfigDict]]


class FillDomain(TypedDict):
    """EIP-712 domain for fills."""

    name: str
    version: str
    chainId: int
    verifyingContract: str


class CancelDomain(TypedDict):
    """EIP-712 domain for cancellations."""

    name: str
    version: str
    chainId: int
    salt: bytes


def load_account(private_key: Optional[str]) -> LocalAccount:
    """Build a signing account from a hex private key.

    Raises:
        SigningError: If the key is missing or malformed
    """
    if not private_key:
        raise SigningError("No signing key provided", field="private_key")
    try:
        return Account.from_key(private_key)
    except Exception:
        # The key must not end up in a traceback.
        raise SigningError("Malformed signing key", field="private_key") from None


def create_fill_domain(config: ConfigLike = None) -> FillDomain:
    """Create the EIP-712 domain for filling orders.

    Args:
        config: Exchange configuration or overrides (default: mainnet)

    Returns:
        EIP-712 domain dictionary
    """
    cfg = resolve_exchange_config(config)
    return {
        "name": cfg.fill_domain_name,
        "version": cfg.fill_domain_version,
        "chainId": cfg.chain_id,
        "verifyingContract": cfg.fill_hasher,
    }


def create_cancel_domain(salt: int, config: ConfigLike = None) -> CancelDomain:
    """Create the EIP-712 domain for a cancellation.

    The domain salt is the request's own random salt, so every cancellation
    signs under a distinct domain.

    Args:
        salt: 256-bit request salt
        config: Exchange configuration or overrides (default: mainnet)
    """
    cfg = resolve_exchange_config(config)
    return {
        "name": cfg.cancel_domain_name,
        "version": cfg.cancel_domain_version,
        "chainId": cfg.chain_id,
        "salt": check_uint256(salt, "salt").to_bytes(32, "big"),
    }


def order_to_typed_message(order: Order, index: int = 0) -> Dict[str, Any]:
    """Order fields in the shape of the EIP-712 ``Order`` struct."""
    prefix = f"orders[{index}]"
    return {
        "marketHash": bytes32_to_bytes(order.market_hash, f"{prefix}.market_hash"),
        "baseToken": normalize_address(order.base_token, f"{prefix}.base_token"),
        "totalBetSize": check_uint256(order.total_bet_size, f"{prefix}.total_bet_size"),
        "percentageOdds": check_uint256(order.percentage_odds, f"{prefix}.percentage_odds"),
        "expiry": check_uint256(order.expiry, f"{prefix}.expiry"),
        "salt": check_uint256(order.salt, f"{prefix}.salt"),
        "maker": normalize_address(order.maker, f"{prefix}.maker"),
        "executor": normalize_address(order.executor, f"{prefix}.executor"),
        "isMakerBettingOutcomeOne": check_bool(
            order.is_maker_betting_outcome_one, f"{prefix}.is_maker_betting_outcome_one"
        ),
    }


def build_fill_typed_data(
    orders: Sequence[Order],
    taker_amounts: Sequence[int],
    fill_salt: int,
    config: ConfigLike = None,
) -> Dict[str, Any]:
    """Build the full EIP-712 structure a taker signs to fill orders.

    The six outer ``Details`` strings are always "N/A". The exchange hashes
    those literal values, so they must not carry real data.

    Args:
        orders: Orders to fill, each carrying its maker signature
        taker_amounts: Maker-side amount to fill per order (index aligned)
        fill_salt: Fresh 256-bit salt for this fill
        config: Exchange configuration or overrides (default: mainnet)

    Returns:
        Typed data dict with types, primaryType, domain and message

    Raises:
        ValidationError: If the arrays are empty, differ in length or an
            order has no maker signature
        EncodingError: If a field does not fit its ABI type
    """
    if not orders or len(orders) != len(taker_amounts):
        raise ValidationError(
            f"orders and taker_amounts must be non-empty and equal length "
            f"(got {len(orders)} and {len(taker_amounts)})",
            field="taker_amounts",
        )

    maker_sigs: List[bytes] = []
    for index, order in enumerate(orders):
        if not order.signature:
            raise ValidationError(
                f"Order {index} has no maker signature", field=f"orders[{index}].signature"
            )
        maker_sigs.append(hex_to_bytes(order.signature, f"orders[{index}].signature"))

    message: Dict[str, Any] = {name: FILL_PLACEHOLDER for name in FILL_DETAIL_FIELDS}
    message["fills"] = {
        "orders": [order_to_typed_message(order, i) for i, order in enumerate(orders)],
        "makerSigs": maker_sigs,
        "takerAmounts": [
            check_uint256(amount, f"taker_amounts[{i}]") for i, amount in enumerate(taker_amounts)
        ],
        "fillSalt": check_uint256(fill_salt, "fill_salt"),
        "beneficiary": ZERO_ADDRESS,
        "beneficiaryType": 0,
        "cashOutTarget": bytes32_to_bytes(ZERO_HASH, "cash_out_target"),
    }

    return {
        "types": {"EIP712Domain": FILL_DOMAIN_TYPE, **FILL_ORDER_TYPES},
        "primaryType": "Details",
        "domain": create_fill_domain(config),
        "message": message,
    }


def build_cancel_typed_data(
    order_hashes: Sequence[str],
    timestamp: int,
    salt: int,
    config: ConfigLike = None,
) -> Dict[str, Any]:
    """Build the full EIP-712 structure a maker signs to cancel orders.

    Order hashes are signed as strings, exactly as they will be submitted.

    Raises:
        ValidationError: If order_hashes is empty
    """
    if not order_hashes:
        raise ValidationError("order_hashes must not be empty", field="order_hashes")

    return {
        "types": {"EIP712Domain": CANCEL_DOMAIN_TYPE, **CANCEL_ORDER_TYPES},
        "primaryType": "Details",
        "domain": create_cancel_domain(salt, config),
        "message": {
            "orderHashes": list(order_hashes),
            "timestamp": check_uint256(timestamp, "timestamp"),
        },
    }


def sign_typed_data(typed_data: Dict[str, Any], private_key: str) -> str:
    """Sign EIP-712 typed data with a private key.

    Args:
        typed_data: Output of ``build_fill_typed_data`` or
            ``build_cancel_typed_data``
        private_key: Private key (hex string with or without 0x prefix)

    Returns:
        65-byte signature (r || s || v) as a 0x hex string

    Raises:
        SigningError: If the key is missing or malformed, or signing fails
    """
    account = load_account(private_key)
    try:
        signed_message = account.sign_typed_data(full_message=typed_data)
    except Exception as exc:
        raise SigningError(f"Failed to sign {typed_data.get('primaryType')} typed data") from exc

    logger.debug(
        "typed_data.signed",
        domain=typed_data["domain"]["name"],
        chain_id=typed_data["domain"]["chainId"],
        signer=account.address,
    )
    return to_hex(signed_message.signature)


def recover_typed_data_signer(typed_data: Dict[str, Any], signature: str) -> str:
    """Recover the address that signed typed data.

    Raises:
        EncodingError: If the signature is not a hex string
        SigningError: If recovery fails
    """
    signature_bytes = hex_to_bytes(signature, "signature")
    try:
        signable_message = encode_typed_data(full_message=typed_data)
        return Account.recover_message(signable_message, signature=signature_bytes)
    except Exception as exc:
        raise SigningError("Could not recover signer from signature") from exc


def verify_typed_data_signature(
    typed_data: Dict[str, Any],
    signature: str,
    expected_signer: str,
) -> bool:
    """Verify a typed-data signature locally (EOA signatures only).

    Returns:
        True if signature is valid and from expected signer
    """
    try:
        recovered = recover_typed_data_signer(typed_data, signature)
    except (SigningError, ValueError):
        return False
    return recovered.lower() == expected_signer.lower()


class TypedDataSigner(Protocol):
    """Protocol for signers that can sign EIP-712 typed data."""

    async def get_address(self) -> str:
        """Get the signer's address."""
        ...

    async def sign_typed_data(self, params: Dict[str, Any]) -> str:
        """Sign EIP-712 typed data.

        Args:
            params: Dict with domain, types, primaryType, and message

        Returns:
            Signature as hex string
        """
        ...


def typed_data_to_json(value: Any) -> Any:
    """JSON-safe copy of typed data: bytes as 0x hex, message ints as strings."""
    if isinstance(value, dict):
        return {
            key: (
                typed_data_to_json_message(item)
                if key == "message"
                else typed_data_to_json(item)
            )
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [typed_data_to_json(item) for item in value]
    if isinstance(value, bytes):
        return to_hex(value)
    return value


def typed_data_to_json_message(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: typed_data_to_json_message(item) for key, item in value.items()}
    if isinstance(value, list):
        return [typed_data_to_json_message(item) for item in value]
    if isinstance(value, bytes):
        return to_hex(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)  # Convert to string for signing
    return value


async def sign_typed_data_with_signer(
    signer: TypedDataSigner, typed_data: Dict[str, Any]
) -> str:
    """Sign typed data with any wallet implementing ``TypedDataSigner``.

    Args:
        signer: Signer that implements TypedDataSigner protocol
        typed_data: Output of ``build_fill_typed_data`` or
            ``build_cancel_typed_data``

    Returns:
        Signature as hex string
    """
    params = typed_data_to_json(typed_data)
    # Wallets derive EIP712Domain from the domain themselves.
    params["types"] = {
        name: fields for name, fields in params["types"].items() if name != "EIP712Domain"
    }
    try:
        return await signer.sign_typed_data(params)
    except SigningError:
        raise
    except Exception as exc:
        raise SigningError("External signer failed to sign typed data") from exc
