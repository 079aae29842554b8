"""
ERC-20-style fungible token ledger
==================================

The mutation engine. Every operation takes an explicit `CallContext` (storage
handle, verified caller, event sink, config) and follows the same shape:

    read -> validate -> compute -> write -> emit one event -> return True

All validation, including every checked-arithmetic step and the storage and
event caps, finishes before the first storage write, so a failing call leaves
storage untouched even without the host's rollback.

Writes other than `construct` do not require a constructed ledger. Before
construction there is no owner, so `mint` and `set_owner` are refused, while
holder operations see all-zero balances and allowances as usual.

Public interface
----------------
construct(ctx, name, symbol, decimals, total_supply) -> bool
transfer(ctx, to, amount) -> bool
transfer_from(ctx, owner, to, amount) -> bool
increase_allowance(ctx, spender, amount) -> bool
decrease_allowance(ctx, spender, amount) -> bool
mint(ctx, to, amount) -> bool                  # owner only
burn(ctx, amount) -> bool
burn_from(ctx, owner, amount) -> bool
set_owner(ctx, new_owner) -> bool              # owner only

Notes
-----
- Balances and total supply use checked arithmetic only. Allowances saturate
  by default (config `allowance_overflow="fail"` makes increases checked).
- Zero amounts are valid and still emit their event.
- Read accessors live in `token_ledger.token.views`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Tuple

from ..errors import (AlreadyConstructed, InsufficientAllowance,
                      InsufficientBalance, Unauthorized)
from ..math import decode_u256, encode_u256, require_amount
from ..math.safe_uint import (checked_add, checked_sub, saturating_add,
                              saturating_sub)
from . import (K_DECIMALS, K_NAME, K_OWNER, K_SYMBOL, K_TOTAL_SUPPLY,
               key_allowance, key_balance, require_address, require_decimals,
               require_text)
from . import events

if TYPE_CHECKING:  # pragma: no cover
    from ..runtime.context import CallContext

log = logging.getLogger(__name__)

_Writes = List[Tuple[bytes, bytes]]


# ------------------------------------------------------------------------------
# Internal IO helpers (u256 <-> storage)
# ------------------------------------------------------------------------------


def _get_u256(ctx: "CallContext", key: bytes) -> int:
    v = ctx.storage.get(key)
    return decode_u256(v) if v is not None else 0


def _commit(ctx: "CallContext", writes: _Writes, line: str) -> bool:
    # Caps are checked for every write and the event before anything lands.
    for key, value in writes:
        ctx.storage.check(key, value)
    ctx.events.check(line)
    for key, value in writes:
        ctx.storage.set(key, value)
    ctx.events.emit(line)
    return True


def _address(ctx: "CallContext", addr: str) -> str:
    return require_address(addr, ctx.config.max_address_bytes)


def _require_owner(ctx: "CallContext") -> str:
    current = ctx.storage.get(K_OWNER)
    if current is None or current != ctx.caller.encode("ascii"):
        raise Unauthorized(data={"caller": ctx.caller})
    return ctx.caller


def _debit(ctx: "CallContext", holder: str, amount: int) -> int:
    """Balance of `holder` after removing `amount`; InsufficientBalance if short."""
    bal = _get_u256(ctx, key_balance(holder))
    if bal < amount:
        raise InsufficientBalance(data={"holder": holder, "balance": bal, "amount": amount})
    return checked_sub(bal, amount)


def _spend_allowance(ctx: "CallContext", owner: str, spender: str, amount: int) -> int:
    """Allowance left after `spender` uses `amount`; InsufficientAllowance if short."""
    allowed = _get_u256(ctx, key_allowance(owner, spender))
    if allowed < amount:
        raise InsufficientAllowance(
            data={"owner": owner, "spender": spender, "allowance": allowed, "amount": amount}
        )
    return checked_sub(allowed, amount)


def _move(ctx: "CallContext", sender: str, recipient: str, amount: int) -> _Writes:
    """Balance writes for moving `amount` from `sender` to `recipient`."""
    new_from = _debit(ctx, sender, amount)
    if recipient == sender:
        return [(key_balance(sender), encode_u256(new_from + amount))]
    new_to = checked_add(_get_u256(ctx, key_balance(recipient)), amount)
    return [
        (key_balance(sender), encode_u256(new_from)),
        (key_balance(recipient), encode_u256(new_to)),
    ]


# ------------------------------------------------------------------------------
# Construction (one-time)
# ------------------------------------------------------------------------------


def construct(ctx: "CallContext", name: str, symbol: str, decimals: int, total_supply: int) -> bool:
    """
    One-time initializer: metadata, owner = caller, whole supply to the caller.
    Fails with AlreadyConstructed on any later call.
    """
    if ctx.storage.exists(K_OWNER):
        raise AlreadyConstructed()

    name_b = require_text(name, "name", ctx.config.max_name_bytes)
    symbol_b = require_text(symbol, "symbol", ctx.config.max_symbol_bytes)
    dec = require_decimals(decimals)
    supply = require_amount(total_supply)
    deployer = ctx.caller

    line = events.deployed(deployer, dec, supply).render()
    log.debug("construct: owner=%s decimals=%s supply=%s", deployer, dec, supply)
    return _commit(
        ctx,
        [
            (K_NAME, name_b),
            (K_SYMBOL, symbol_b),
            (K_DECIMALS, bytes((dec,))),
            (K_TOTAL_SUPPLY, encode_u256(supply)),
            (key_balance(deployer), encode_u256(supply)),
            (K_OWNER, deployer.encode("ascii")),
        ],
        line,
    )


# ------------------------------------------------------------------------------
# Transfers
# ------------------------------------------------------------------------------


def transfer(ctx: "CallContext", to: str, amount: int) -> bool:
    _address(ctx, to)
    require_amount(amount)

    writes = _move(ctx, ctx.caller, to, amount)
    line = events.transfer(ctx.caller, to, amount).render()
    log.debug("transfer: %s -> %s amount=%s", ctx.caller, to, amount)
    return _commit(ctx, writes, line)


def transfer_from(ctx: "CallContext", owner: str, to: str, amount: int) -> bool:
    """
    Spender (`ctx.caller`) moves `amount` from `owner` to `to` using allowance.
    Allowance is checked before balance.
    """
    _address(ctx, owner)
    _address(ctx, to)
    require_amount(amount)
    spender = ctx.caller

    new_allow = _spend_allowance(ctx, owner, spender, amount)
    writes = [(key_allowance(owner, spender), encode_u256(new_allow))]
    writes.extend(_move(ctx, owner, to, amount))

    line = events.transfer(owner, to, amount, spender=spender).render()
    log.debug("transfer_from: %s -> %s amount=%s spender=%s", owner, to, amount, spender)
    return _commit(ctx, writes, line)


# ------------------------------------------------------------------------------
# Allowances
# ------------------------------------------------------------------------------


def increase_allowance(ctx: "CallContext", spender: str, amount: int) -> bool:
    _address(ctx, spender)
    require_amount(amount)

    key = key_allowance(ctx.caller, spender)
    cur = _get_u256(ctx, key)
    if ctx.config.allowance_saturates:
        new = saturating_add(cur, amount)
    else:
        new = checked_add(cur, amount)

    line = events.approval(ctx.caller, spender, new).render()
    log.debug("increase_allowance: %s -> %s now=%s", ctx.caller, spender, new)
    return _commit(ctx, [(key, encode_u256(new))], line)


def decrease_allowance(ctx: "CallContext", spender: str, amount: int) -> bool:
    _address(ctx, spender)
    require_amount(amount)

    key = key_allowance(ctx.caller, spender)
    new = saturating_sub(_get_u256(ctx, key), amount)

    line = events.approval(ctx.caller, spender, new).render()
    log.debug("decrease_allowance: %s -> %s now=%s", ctx.caller, spender, new)
    return _commit(ctx, [(key, encode_u256(new))], line)


# ------------------------------------------------------------------------------
# Supply control
# ------------------------------------------------------------------------------


def mint(ctx: "CallContext", to: str, amount: int) -> bool:
    _require_owner(ctx)
    _address(ctx, to)
    require_amount(amount)

    new_total = checked_add(_get_u256(ctx, K_TOTAL_SUPPLY), amount)
    new_to = checked_add(_get_u256(ctx, key_balance(to)), amount)

    line = events.mint(to, amount).render()
    log.debug("mint: to=%s amount=%s total=%s", to, amount, new_total)
    return _commit(
        ctx,
        [
            (K_TOTAL_SUPPLY, encode_u256(new_total)),
            (key_balance(to), encode_u256(new_to)),
        ],
        line,
    )


def burn(ctx: "CallContext", amount: int) -> bool:
    """Holder burns their own tokens."""
    require_amount(amount)
    holder = ctx.caller

    new_bal = _debit(ctx, holder, amount)
    new_total = checked_sub(_get_u256(ctx, K_TOTAL_SUPPLY), amount)

    line = events.burn(holder, amount).render()
    log.debug("burn: from=%s amount=%s total=%s", holder, amount, new_total)
    return _commit(
        ctx,
        [
            (key_balance(holder), encode_u256(new_bal)),
            (K_TOTAL_SUPPLY, encode_u256(new_total)),
        ],
        line,
    )


def burn_from(ctx: "CallContext", owner: str, amount: int) -> bool:
    """Spender burns tokens from `owner` using allowance."""
    _address(ctx, owner)
    require_amount(amount)
    spender = ctx.caller

    new_allow = _spend_allowance(ctx, owner, spender, amount)
    new_bal = _debit(ctx, owner, amount)
    new_total = checked_sub(_get_u256(ctx, K_TOTAL_SUPPLY), amount)

    line = events.burn(owner, amount, spender=spender).render()
    log.debug("burn_from: from=%s amount=%s spender=%s", owner, amount, spender)
    return _commit(
        ctx,
        [
            (key_allowance(owner, spender), encode_u256(new_allow)),
            (key_balance(owner), encode_u256(new_bal)),
            (K_TOTAL_SUPPLY, encode_u256(new_total)),
        ],
        line,
    )


# ------------------------------------------------------------------------------
# Ownership
# ------------------------------------------------------------------------------


def set_owner(ctx: "CallContext", new_owner: str) -> bool:
    previous = _require_owner(ctx)
    _address(ctx, new_owner)

    line = events.change_owner(new_owner, previous).render()
    log.debug("set_owner: %s -> %s", previous, new_owner)
    return _commit(ctx, [(K_OWNER, new_owner.encode("ascii"))], line)


__all__ = [
    "construct",
    "transfer",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
    "mint",
    "burn",
    "burn_from",
    "set_owner",
]
