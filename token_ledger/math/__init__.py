"""
token_ledger.math
=================

256-bit unsigned amounts and their canonical storage form.

Amounts are plain Python ints in the closed interval [0, U256_MAX]. On disk
they are always exactly 32 bytes, little-endian. Ordering and equality are the
native int comparisons on decoded values; never compare the raw encodings.

Arithmetic lives in `token_ledger.math.safe_uint` (checked and saturating).
"""

from __future__ import annotations

from typing import Final

from ..errors import MalformedAmount

U256_BITS: Final[int] = 256
U256_BYTES: Final[int] = 32
U256_MAX: Final[int] = (1 << U256_BITS) - 1


def is_u256(n: object) -> bool:
    """True iff `n` is an int (not a bool) in [0, U256_MAX]."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= U256_MAX


def require_amount(n: object) -> int:
    """Return `n` unchanged if it is a valid amount, else raise MalformedAmount."""
    if not is_u256(n):
        raise MalformedAmount(
            "amount must be an int in [0, 2**256-1]",
            data={"value": repr(n)[:80]},
        )
    return n  # type: ignore[return-value]


def encode_u256(n: int) -> bytes:
    """Canonical 32-byte little-endian encoding."""
    require_amount(n)
    return n.to_bytes(U256_BYTES, "little", signed=False)


def decode_u256(raw: bytes) -> int:
    """Inverse of `encode_u256`. Anything but exactly 32 bytes is malformed."""
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise MalformedAmount("encoded amount must be bytes")
    b = bytes(raw)
    if len(b) != U256_BYTES:
        raise MalformedAmount(
            "encoded amount must be exactly 32 bytes",
            data={"len": len(b)},
        )
    return int.from_bytes(b, "little", signed=False)


ZERO_U256: Final[bytes] = bytes(U256_BYTES)


__all__ = [
    "U256_BITS",
    "U256_BYTES",
    "U256_MAX",
    "ZERO_U256",
    "is_u256",
    "require_amount",
    "encode_u256",
    "decode_u256",
]
