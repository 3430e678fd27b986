"""Width checks for values that end up ABI-encoded."""

from typing import Any

from eth_utils import decode_hex, is_address, is_hex, to_checksum_address

from ..errors import EncodingError

MAX_UINT256 = 2**256 - 1


def normalize_address(value: Any, field: str) -> str:
    """Return the checksum form of a 20-byte address.

    Raises:
        EncodingError: If value is not a valid address
    """
    if not isinstance(value, str) or not is_address(value):
        raise EncodingError(f"Invalid {field}: {value!r}. Expected a 20-byte address", field=field)
    return to_checksum_address(value)


def hex_to_bytes(value: Any, field: str) -> bytes:
    """Decode a 0x-prefixed hex string.

    Raises:
        EncodingError: If value is not a hex string
    """
    if not isinstance(value, str) or not value.startswith("0x") or not is_hex(value):
        raise EncodingError(f"Invalid {field}: {value!r}. Expected a 0x hex string", field=field)
    try:
        return decode_hex(value)
    except ValueError:
        raise EncodingError(f"Invalid {field}: {value!r}. Odd-length hex string", field=field) from None


def bytes32_to_bytes(value: Any, field: str) -> bytes:
    """Decode a bytes32 hex string, checking it is exactly 32 bytes."""
    decoded = hex_to_bytes(value, field)
    if len(decoded) != 32:
        raise EncodingError(
            f"Invalid {field}: {value!r}. Expected 32 bytes, got {len(decoded)}", field=field
        )
    return decoded


def check_uint256(value: Any, field: str) -> int:
    """Check that value fits in a uint256."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_UINT256:
        raise EncodingError(f"Invalid {field}: {value!r}. Expected a uint256", field=field)
    return value


def check_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise EncodingError(f"Invalid {field}: {value!r}. Expected a bool", field=field)
    return value
