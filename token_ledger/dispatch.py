"""
token_ledger.dispatch — closed routing table from operation to handler.

The host hands us an operation name and raw argument bytes. Names resolve to
the `Operation` enum (anything else is UnknownOperation) and every enum member
has exactly one entry in `OPERATIONS`; the table is checked for completeness
at import time.

Return encoding:
  - reads return the raw stored bytes (amounts as 32-byte little-endian)
  - isOwner returns one bool byte
  - writes return b"\\x01" (failures raise instead)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Tuple

from .abi import decode_args, encode_args, encode_bool
from .errors import UnknownOperation
from .runtime.context import CallContext
from .token import fungible, views

log = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    # writes
    CONSTRUCTOR = "constructor"
    TRANSFER = "transfer"
    TRANSFER_FROM = "transferFrom"
    INCREASE_ALLOWANCE = "increaseAllowance"
    DECREASE_ALLOWANCE = "decreaseAllowance"
    MINT = "mint"
    BURN = "burn"
    BURN_FROM = "burnFrom"
    SET_OWNER = "setOwner"
    # reads
    NAME = "name"
    SYMBOL = "symbol"
    DECIMALS = "decimals"
    TOTAL_SUPPLY = "totalSupply"
    BALANCE_OF = "balanceOf"
    ALLOWANCE = "allowance"
    OWNER = "owner"
    IS_OWNER = "isOwner"

    @classmethod
    def parse(cls, name: "str | Operation") -> "Operation":
        if isinstance(name, Operation):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownOperation(data={"operation": str(name)[:64]}) from None


@dataclass(frozen=True)
class OpSpec:
    """Argument types, handler and whether the call may mutate state."""

    arg_types: Tuple[str, ...]
    handler: Callable[..., Any]
    mutating: bool

    @property
    def arg_count(self) -> int:
        return len(self.arg_types)


OPERATIONS: Dict[Operation, OpSpec] = {
    Operation.CONSTRUCTOR: OpSpec(("string", "string", "u32", "u256"), fungible.construct, True),
    Operation.TRANSFER: OpSpec(("address", "u256"), fungible.transfer, True),
    Operation.TRANSFER_FROM: OpSpec(("address", "address", "u256"), fungible.transfer_from, True),
    Operation.INCREASE_ALLOWANCE: OpSpec(("address", "u256"), fungible.increase_allowance, True),
    Operation.DECREASE_ALLOWANCE: OpSpec(("address", "u256"), fungible.decrease_allowance, True),
    Operation.MINT: OpSpec(("address", "u256"), fungible.mint, True),
    Operation.BURN: OpSpec(("u256",), fungible.burn, True),
    Operation.BURN_FROM: OpSpec(("address", "u256"), fungible.burn_from, True),
    Operation.SET_OWNER: OpSpec(("address",), fungible.set_owner, True),
    Operation.NAME: OpSpec((), views.name, False),
    Operation.SYMBOL: OpSpec((), views.symbol, False),
    Operation.DECIMALS: OpSpec((), views.decimals, False),
    Operation.TOTAL_SUPPLY: OpSpec((), views.total_supply, False),
    Operation.BALANCE_OF: OpSpec(("address",), views.balance_of, False),
    Operation.ALLOWANCE: OpSpec(("address", "address"), views.allowance, False),
    Operation.OWNER: OpSpec((), views.owner, False),
    Operation.IS_OWNER: OpSpec(("address",), views.is_owner, False),
}

_missing = set(Operation) - set(OPERATIONS)
if _missing:  # pragma: no cover - import-time guard
    raise RuntimeError(f"dispatch table incomplete: {sorted(m.value for m in _missing)}")


def spec_for(op: "str | Operation") -> OpSpec:
    return OPERATIONS[Operation.parse(op)]


def encode_call_args(op: "str | Operation", values: Sequence[Any]) -> bytes:
    """Encode Python values with the argument types `op` expects."""
    return encode_args(spec_for(op).arg_types, values)


def _encode_result(result: Any) -> bytes:
    if isinstance(result, bool):
        return encode_bool(result)
    return bytes(result)


def dispatch(op: "str | Operation", ctx: CallContext, raw_args: bytes = b"") -> bytes:
    """Decode `raw_args`, run the handler for `op` and encode its result."""
    operation = Operation.parse(op)
    spec = OPERATIONS[operation]
    args = decode_args(raw_args, spec.arg_types)
    log.debug("dispatch: op=%s caller=%s", operation.value, ctx.caller)
    return _encode_result(spec.handler(ctx, *args))


__all__ = [
    "Operation",
    "OpSpec",
    "OPERATIONS",
    "spec_for",
    "encode_call_args",
    "dispatch",
]
