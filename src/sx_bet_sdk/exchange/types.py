"""Exchange Types for SX Bet.

Order, fill and cancellation value objects, plus the EIP-712 type tables the
verifying contracts expect. Field order in the type tables is part of the
signed digest and must not change.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union


def parse_uint(value: Union[int, str]) -> int:
    """Parse an API integer given as int, decimal string or 0x hex string."""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text[:2].lower() == "0x":
        return int(text, 16)
    return int(text, 10)


@dataclass
class Order:
    """A maker's standing offer on one market."""

    market_hash: str
    """Market identifier (bytes32 hex string)."""

    base_token: str
    """Settlement token address."""

    total_bet_size: int
    """Maker stake in base token units (e.g., 10000000 = 10 USDC)."""

    percentage_odds: int
    """Maker's implied probability scaled by 10**20."""

    expiry: int
    """Deprecated expiry (unix seconds), still part of the order hash."""

    salt: int
    """Random 256-bit salt, unique per order."""

    maker: str
    """Address of the maker who signs the order."""

    executor: str
    """Address allowed to execute fills for the maker."""

    is_maker_betting_outcome_one: bool
    """True if the maker backs outcome one."""

    signature: Optional[str] = None
    """Maker's signature over the order hash (hex string)."""

    api_expiry: Optional[int] = None
    """Unix seconds after which the API drops the order. Not hashed."""

    fill_amount: int = 0
    """Maker-side amount already filled, as reported by the API. Not hashed."""

    def to_api(self) -> Dict[str, Any]:
        """Serialize to the API's JSON shape (integers as decimal strings)."""
        data: Dict[str, Any] = {
            "marketHash": self.market_hash,
            "baseToken": self.base_token,
            "totalBetSize": str(self.total_bet_size),
            "percentageOdds": str(self.percentage_odds),
            "expiry": str(self.expiry),
            "salt": str(self.salt),
            "maker": self.maker,
            "executor": self.executor,
            "isMakerBettingOutcomeOne": self.is_maker_betting_outcome_one,
        }
        if self.signature is not None:
            data["signature"] = self.signature
        if self.api_expiry is not None:
            data["apiExpiry"] = self.api_expiry
        return data

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Order":
        """Build an Order from API JSON. Unknown keys are ignored."""
        api_expiry = data.get("apiExpiry")
        return cls(
            market_hash=data["marketHash"],
            base_token=data["baseToken"],
            total_bet_size=parse_uint(data["totalBetSize"]),
            percentage_odds=parse_uint(data["percentageOdds"]),
            expiry=parse_uint(data["expiry"]),
            salt=parse_uint(data["salt"]),
            maker=data["maker"],
            executor=data["executor"],
            is_maker_betting_outcome_one=bool(data["isMakerBettingOutcomeOne"]),
            signature=data.get("signature"),
            api_expiry=parse_uint(api_expiry) if api_expiry is not None else None,
            fill_amount=parse_uint(data.get("fillAmount", 0)),
        )


# Outer "Details" strings of the fill schema. The verifier hashes these exact
# values; they carry no information.
FILL_PLACEHOLDER = "N/A"
FILL_DETAIL_FIELDS = ("action", "market", "betting", "stake", "odds", "returning")


@dataclass
class FillPayload:
    """Signed fill request, ready for ``POST /orders/fill``."""

    order_hashes: List[str]
    """Hashes of the orders being filled."""

    taker_amounts: List[int]
    """Maker-side amount filled against each order (index aligned)."""

    taker: str
    """Taker address."""

    taker_sig: str
    """Taker's EIP-712 signature over the fill."""

    fill_salt: int
    """Fresh 256-bit salt for this fill."""

    def to_api(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "orderHashes": list(self.order_hashes),
            "takerAmounts": [str(amount) for amount in self.taker_amounts],
            "taker": self.taker,
            "takerSig": self.taker_sig,
            "fillSalt": str(self.fill_salt),
        }
        data.update({name: FILL_PLACEHOLDER for name in FILL_DETAIL_FIELDS})
        return data


@dataclass
class CancelPayload:
    """Signed cancellation, ready for ``POST /orders/cancel/v2``."""

    signature: str
    """Maker's EIP-712 signature over the cancellation."""

    order_hashes: List[str]
    """Hashes of the orders to cancel, exactly as signed."""

    salt: str
    """Request salt as a bytes32 hex string (also the EIP-712 domain salt)."""

    maker: str
    """Maker address."""

    timestamp: int
    """Unix seconds at signing time."""

    def to_api(self) -> Dict[str, Any]:
        return {
            "signature": self.signature,
            "orderHashes": list(self.order_hashes),
            "salt": self.salt,
            "maker": self.maker,
            "timestamp": self.timestamp,
        }


# EIP-712 domain types
FILL_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

CANCEL_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "salt", "type": "bytes32"},
]

# EIP-712 types for filling orders
FILL_ORDER_TYPES = {
    "Details": [
        {"name": "action", "type": "string"},
        {"name": "market", "type": "string"},
        {"name": "betting", "type": "string"},
        {"name": "stake", "type": "string"},
        {"name": "odds", "type": "string"},
        {"name": "returning", "type": "string"},
        {"name": "fills", "type": "FillObject"},
    ],
    "FillObject": [
        {"name": "orders", "type": "Order[]"},
        {"name": "makerSigs", "type": "bytes[]"},
        {"name": "takerAmounts", "type": "uint256[]"},
        {"name": "fillSalt", "type": "uint256"},
        {"name": "beneficiary", "type": "address"},
        {"name": "beneficiaryType", "type": "uint8"},
        {"name": "cashOutTarget", "type": "bytes32"},
    ],
    "Order": [
        {"name": "marketHash", "type": "bytes32"},
        {"name": "baseToken", "type": "address"},
        {"name": "totalBetSize", "type": "uint256"},
        {"name": "percentageOdds", "type": "uint256"},
        {"name": "expiry", "type": "uint256"},
        {"name": "salt", "type": "uint256"},
        {"name": "maker", "type": "address"},
        {"name": "executor", "type": "address"},
        {"name": "isMakerBettingOutcomeOne", "type": "bool"},
    ],
}

# EIP-712 types for cancelling orders
CANCEL_ORDER_TYPES = {
    "Details": [
        {"name": "orderHashes", "type": "string[]"},
        {"name": "timestamp", "type": "uint256"},
    ],
}
