"""
token_ledger.token.views — read accessors.

Pure lookups over `ctx.storage` that hand back the stored bytes. Amounts come
back as their canonical 32-byte little-endian form even when the entry was
never written (absent means zero). Nothing here writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..math import ZERO_U256, decode_u256
from . import (K_DECIMALS, K_NAME, K_OWNER, K_SYMBOL, K_TOTAL_SUPPLY,
               key_allowance, key_balance, require_address)

if TYPE_CHECKING:  # pragma: no cover
    from ..runtime.context import CallContext


def _get_bytes(ctx: "CallContext", key: bytes) -> bytes:
    v = ctx.storage.get(key)
    return v if v is not None else b""


def _get_amount(ctx: "CallContext", key: bytes) -> bytes:
    v = ctx.storage.get(key)
    if v is None:
        return ZERO_U256
    # Validates the stored width.
    decode_u256(v)
    return v


def name(ctx: "CallContext") -> bytes:
    return _get_bytes(ctx, K_NAME)


def symbol(ctx: "CallContext") -> bytes:
    return _get_bytes(ctx, K_SYMBOL)


def decimals(ctx: "CallContext") -> bytes:
    return _get_bytes(ctx, K_DECIMALS)


def total_supply(ctx: "CallContext") -> bytes:
    return _get_amount(ctx, K_TOTAL_SUPPLY)


def balance_of(ctx: "CallContext", addr: str) -> bytes:
    require_address(addr, ctx.config.max_address_bytes)
    return _get_amount(ctx, key_balance(addr))


def allowance(ctx: "CallContext", owner: str, spender: str) -> bytes:
    require_address(owner, ctx.config.max_address_bytes)
    require_address(spender, ctx.config.max_address_bytes)
    return _get_amount(ctx, key_allowance(owner, spender))


def owner(ctx: "CallContext") -> bytes:
    return _get_bytes(ctx, K_OWNER)


def is_owner(ctx: "CallContext", addr: str) -> bool:
    require_address(addr, ctx.config.max_address_bytes)
    current = ctx.storage.get(K_OWNER)
    return current is not None and current == addr.encode("ascii")


def is_constructed(ctx: "CallContext") -> bool:
    return ctx.storage.exists(K_OWNER)


__all__ = [
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "owner",
    "is_owner",
    "is_constructed",
]
