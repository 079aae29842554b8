"""
token_ledger.token
==================

Storage layout, key derivation and input validation shared by the token
engine (`fungible`), the read accessors (`views`) and event formatting
(`events`). Nothing here performs storage I/O.

Storage keys
------------
Fixed literal keys:
  - NAME, SYMBOL, DECIMALS, TOTAL_SUPPLY, OWNER

Per-entry keys:
  - balances:   b"BALANCE"   || enc(addr)
  - allowances: b"ALLOWANCE" || enc(owner) || enc(spender)

where enc(addr) = one length byte || UTF-8 bytes of the address. The length
prefix makes every address self-delimiting, so (owner, spender) pairs cannot
collide with each other however the strings are split, and a per-entry key is
always longer than its literal prefix.

Values
------
  - NAME / SYMBOL: UTF-8 bytes
  - DECIMALS:      1 byte
  - TOTAL_SUPPLY, balances, allowances: 32 bytes little-endian
  - OWNER:         UTF-8 address bytes

Addresses
---------
Opaque strings. Valid addresses are 1..max_address_bytes long and made only
of printable ASCII other than space, ":" and "=" (those three delimit event
lines).
"""

from __future__ import annotations

from typing import Final

from ..errors import InvalidMetadata, MalformedAddress

# -----------------------------------------------------------------------------
# Public constants: storage keys
# -----------------------------------------------------------------------------

K_NAME: Final[bytes] = b"NAME"
K_SYMBOL: Final[bytes] = b"SYMBOL"
K_DECIMALS: Final[bytes] = b"DECIMALS"
K_TOTAL_SUPPLY: Final[bytes] = b"TOTAL_SUPPLY"
K_OWNER: Final[bytes] = b"OWNER"

BALANCE_PREFIX: Final[bytes] = b"BALANCE"
ALLOWANCE_PREFIX: Final[bytes] = b"ALLOWANCE"

# Length byte ceiling for the address encoding.
MAX_ADDRESS_BYTES: Final[int] = 255
DEFAULT_MAX_ADDRESS_BYTES: Final[int] = 64

MAX_DECIMALS: Final[int] = 255

_RESERVED = frozenset(b" :=")


# -----------------------------------------------------------------------------
# Validation helpers
# -----------------------------------------------------------------------------


def is_valid_address(addr: object, max_bytes: int = DEFAULT_MAX_ADDRESS_BYTES) -> bool:
    if not isinstance(addr, str):
        return False
    try:
        raw = addr.encode("ascii")
    except UnicodeEncodeError:
        return False
    if not 1 <= len(raw) <= min(max_bytes, MAX_ADDRESS_BYTES):
        return False
    for b in raw:
        if b < 33 or b > 126 or b in _RESERVED:
            return False
    return True


def require_address(addr: object, max_bytes: int = DEFAULT_MAX_ADDRESS_BYTES) -> str:
    """Return `addr` if it is a valid address, else raise MalformedAddress."""
    if not is_valid_address(addr, max_bytes):
        raise MalformedAddress(
            "address must be 1..%d printable ASCII bytes without space, ':' or '='"
            % min(max_bytes, MAX_ADDRESS_BYTES),
            data={"address": repr(addr)[:80]},
        )
    return addr  # type: ignore[return-value]


def encode_address(addr: str) -> bytes:
    """Self-delimiting address encoding used inside storage keys."""
    raw = require_address(addr, MAX_ADDRESS_BYTES).encode("ascii")
    return bytes((len(raw),)) + raw


def require_text(value: object, field: str, max_bytes: int) -> bytes:
    """UTF-8 encode a name/symbol, enforcing 1..max_bytes."""
    if not isinstance(value, str):
        raise InvalidMetadata(f"{field} must be a string", data={"field": field})
    raw = value.encode("utf-8")
    if not 1 <= len(raw) <= max_bytes:
        raise InvalidMetadata(
            f"{field} must be 1..{max_bytes} UTF-8 bytes",
            data={"field": field, "len": len(raw)},
        )
    return raw


def require_decimals(n: object) -> int:
    if not isinstance(n, int) or isinstance(n, bool) or not 0 <= n <= MAX_DECIMALS:
        raise InvalidMetadata(
            "decimals must be an int in [0, 255]",
            data={"field": "decimals", "value": repr(n)[:40]},
        )
    return n


# -----------------------------------------------------------------------------
# Key derivation helpers (no storage I/O here)
# -----------------------------------------------------------------------------


def key_balance(addr: str) -> bytes:
    """Canonical balance key for an address."""
    return BALANCE_PREFIX + encode_address(addr)


def key_allowance(owner: str, spender: str) -> bytes:
    """Canonical allowance key for (owner, spender)."""
    return ALLOWANCE_PREFIX + encode_address(owner) + encode_address(spender)


__all__ = [
    # keys
    "K_NAME",
    "K_SYMBOL",
    "K_DECIMALS",
    "K_TOTAL_SUPPLY",
    "K_OWNER",
    "BALANCE_PREFIX",
    "ALLOWANCE_PREFIX",
    # limits
    "MAX_ADDRESS_BYTES",
    "DEFAULT_MAX_ADDRESS_BYTES",
    "MAX_DECIMALS",
    # validators
    "is_valid_address",
    "require_address",
    "require_text",
    "require_decimals",
    # key derivation
    "encode_address",
    "key_balance",
    "key_allowance",
]
