"""
Type definitions and constants for feeledger.

Addresses are normalised to lowercase ``0x``-prefixed hex strings so they can
be used directly as dict keys. Amounts are plain Python ints kept inside the
uint256 range.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, TypeAlias

from feeledger.core.exceptions import ValidationError

# Accepted address input: hex string or raw 20 bytes
AddressLike: TypeAlias = str | bytes | bytearray

ADDRESS_LENGTH: Final[int] = 20
ZERO_ADDRESS: Final[str] = "0x" + "00" * ADDRESS_LENGTH

MAX_UINT256: Final[int] = 2**256 - 1

# Fees are parts-per-million
FEE_DENOMINATOR: Final[int] = 1_000_000
MIN_FEE: Final[int] = 1
MAX_FEE: Final[int] = FEE_DENOMINATOR

TOKEN_NAME: Final[str] = "REME Coin"
TOKEN_SYMBOL: Final[str] = "REME"
TOKEN_DECIMALS: Final[int] = 18
TOTAL_SUPPLY: Final[int] = 375_000_000 * 10**TOKEN_DECIMALS

_HEX_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


def to_address(value: AddressLike) -> str:
    """
    Normalise an address to its canonical lowercase hex form.

    Args:
        value: ``0x``-prefixed 40-digit hex string or 20 raw bytes

    Returns:
        Lowercase ``0x`` hex string

    Raises:
        ValidationError: If the value is not a 20-byte identifier
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_LENGTH:
            raise ValidationError(
                f"Address must be {ADDRESS_LENGTH} bytes, got {len(value)}",
                details={"value": bytes(value).hex()},
            )
        return "0x" + bytes(value).hex()

    if isinstance(value, str) and _HEX_ADDRESS.match(value):
        return value.lower()

    raise ValidationError(f"Invalid address: {value!r}")


def is_zero_address(address: str) -> bool:
    return address == ZERO_ADDRESS


def require_uint256(value: int, name: str = "amount") -> int:
    """Ensure value is an int within [0, 2**256 - 1]."""
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}",
            details={name: repr(value)},
        )
    if value < 0 or value > MAX_UINT256:
        raise ValidationError(
            f"{name} out of uint256 range",
            details={name: str(value)},
        )
    return value


@dataclass(frozen=True)
class FeeBreakdown:
    """Split of a transfer amount into the fee and what the recipient gets."""

    fee_amount: int
    net_amount: int

    @property
    def charged(self) -> bool:
        return self.fee_amount > 0

    @property
    def gross_amount(self) -> int:
        return self.fee_amount + self.net_amount
