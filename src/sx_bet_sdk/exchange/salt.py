"""Salt generation for orders, fills and cancellations.

Salts are the only thing keeping two otherwise identical orders, fills or
cancellations from colliding, so the default source is the OS CSPRNG.
Tests can inject their own entropy provider.
"""

import secrets
from typing import Callable, Iterable, Iterator, Optional

from ..errors import ValidationError

SALT_BITS = 256
MAX_SALT = 2**SALT_BITS - 1

EntropySource = Callable[[], int]


def _secure_random_salt() -> int:
    return secrets.randbits(SALT_BITS)


class SaltGenerator:
    """Draws fresh 256-bit salts from an entropy provider.

    Args:
        entropy: Zero-argument callable returning an int in [0, 2**256).
            Defaults to ``secrets.randbits(256)``.
    """

    def __init__(self, entropy: Optional[EntropySource] = None) -> None:
        self._entropy = entropy or _secure_random_salt

    @classmethod
    def from_sequence(cls, values: Iterable[int]) -> "SaltGenerator":
        """Deterministic generator yielding ``values`` in order."""
        iterator: Iterator[int] = iter(values)
        return cls(lambda: next(iterator))

    def next_salt(self) -> int:
        """Return a new salt as an unsigned 256-bit integer.

        Raises:
            ValidationError: If the entropy provider returns a value that
                does not fit in 256 bits
        """
        salt = self._entropy()
        if isinstance(salt, bool) or not isinstance(salt, int) or not 0 <= salt <= MAX_SALT:
            raise ValidationError(f"Entropy source returned invalid salt: {salt!r}", field="salt")
        return salt

    def next_salt_hex(self) -> str:
        """Return a new salt as a 0x-prefixed 32-byte hex string."""
        return salt_to_hex(self.next_salt())


def salt_to_hex(salt: int) -> str:
    """Format a 256-bit salt as 0x + 64 hex digits."""
    return "0x" + salt.to_bytes(32, "big").hex()


default_salt_generator = SaltGenerator()
