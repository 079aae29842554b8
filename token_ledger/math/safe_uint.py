"""
token_ledger.math.safe_uint
===========================

Saturating and checked U256 helpers.

Two styles of safety:
  1) **Checked**: raise `Overflow` when the result leaves [0, U256_MAX].
  2) **Saturating**: clamp to the bounds (flooring on subtract).

Balances and total supply use the checked variants only. Allowances may use
the saturating variants.

All functions validate their inputs (`MalformedAmount` on a non-U256 argument).
"""

from __future__ import annotations

from . import U256_MAX, require_amount
from ..errors import Overflow


# ---------------------------------------------------------------------------
# Checked (fail-fast)
# ---------------------------------------------------------------------------

def checked_add(x: int, y: int) -> int:
    """Checked add: raise Overflow above U256_MAX."""
    require_amount(x)
    require_amount(y)
    s = x + y
    if s > U256_MAX:
        raise Overflow("u256 addition overflow", data={"op": "add"})
    return s


def checked_sub(x: int, y: int) -> int:
    """Checked sub: raise Overflow (underflow direction) when y > x."""
    require_amount(x)
    require_amount(y)
    if y > x:
        raise Overflow("u256 subtraction underflow", data={"op": "sub"})
    return x - y


# ---------------------------------------------------------------------------
# Saturating (never fail due to range)
# ---------------------------------------------------------------------------

def saturating_add(x: int, y: int) -> int:
    """min(x+y, U256_MAX)."""
    require_amount(x)
    require_amount(y)
    s = x + y
    return s if s <= U256_MAX else U256_MAX


def saturating_sub(x: int, y: int) -> int:
    """max(x-y, 0)."""
    require_amount(x)
    require_amount(y)
    return x - y if x >= y else 0


__all__ = [
    "checked_add",
    "checked_sub",
    "saturating_add",
    "saturating_sub",
]
