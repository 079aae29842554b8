"""
token_ledger.token.events — line format for ledger notifications.

The engine decides every value first and only then asks this module to render
a line, so formatting changes cannot touch the arithmetic. Lines look like:

    TRANSFER SUCCESS from=A to=B amount=300
    APPROVAL SUCCESS owner=A spender=C amount=200
    MINT SUCCESS to=B amount=5
    BURN_SUCCESS from=A amount=5
    CHANGE_OWNER:B previous=A
    ERC20_DEPLOYED owner=A decimals=2 supply=1000

Operand values are addresses or decimal integers, neither of which can hold a
space, ":" or "=", so `parse_event` is an exact inverse of `Event.render`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple, Union

from ..errors import EventError

OperandValue = Union[str, int]


class EventKind(str, enum.Enum):
    TRANSFER = "TRANSFER SUCCESS"
    APPROVAL = "APPROVAL SUCCESS"
    MINT = "MINT SUCCESS"
    BURN = "BURN_SUCCESS"
    CHANGE_OWNER = "CHANGE_OWNER"
    DEPLOYED = "ERC20_DEPLOYED"


# CHANGE_OWNER carries its first operand inside the head: "CHANGE_OWNER:<addr>".
_HEAD_OPERAND = {EventKind.CHANGE_OWNER: "new_owner"}


@dataclass(frozen=True)
class Event:
    kind: EventKind
    operands: Tuple[Tuple[str, OperandValue], ...] = ()

    def get(self, key: str) -> OperandValue:
        for k, v in self.operands:
            if k == key:
                return v
        raise KeyError(key)

    def as_dict(self) -> dict:
        return dict(self.operands)

    def render(self) -> str:
        ops = list(self.operands)
        head = self.kind.value
        head_key = _HEAD_OPERAND.get(self.kind)
        if head_key is not None:
            if not ops or ops[0][0] != head_key:
                raise EventError(f"{head} event needs {head_key} first")
            head = f"{head}:{ops.pop(0)[1]}"
        parts = [head]
        parts.extend(f"{k}={v}" for k, v in ops)
        return " ".join(parts)


# -----------------------------------------------------------------------------
# Builders, one per mutation
# -----------------------------------------------------------------------------


def transfer(sender: str, recipient: str, amount: int, spender: str = "") -> Event:
    ops = [("from", sender), ("to", recipient), ("amount", amount)]
    if spender:
        ops.append(("spender", spender))
    return Event(EventKind.TRANSFER, tuple(ops))


def approval(owner: str, spender: str, amount: int) -> Event:
    return Event(EventKind.APPROVAL, (("owner", owner), ("spender", spender), ("amount", amount)))


def mint(recipient: str, amount: int) -> Event:
    return Event(EventKind.MINT, (("to", recipient), ("amount", amount)))


def burn(holder: str, amount: int, spender: str = "") -> Event:
    ops = [("from", holder), ("amount", amount)]
    if spender:
        ops.append(("spender", spender))
    return Event(EventKind.BURN, tuple(ops))


def change_owner(new_owner: str, previous: str) -> Event:
    return Event(EventKind.CHANGE_OWNER, (("new_owner", new_owner), ("previous", previous)))


def deployed(owner: str, decimals: int, supply: int) -> Event:
    return Event(EventKind.DEPLOYED, (("owner", owner), ("decimals", decimals), ("supply", supply)))


# -----------------------------------------------------------------------------
# Parsing (indexers, tests)
# -----------------------------------------------------------------------------


_INT_OPERANDS = frozenset(("amount", "decimals", "supply"))


def _value(key: str, raw: str) -> OperandValue:
    if key in _INT_OPERANDS:
        if not (raw.isascii() and raw.isdigit()):
            raise EventError("event operand must be a decimal int", data={"key": key})
        return int(raw)
    return raw


def parse_event(line: str) -> Event:
    """Inverse of `Event.render`. Raises EventError on an unknown head."""
    if not isinstance(line, str):
        raise EventError("event line must be str")
    tokens = line.split(" ")
    head_tokens = []
    while tokens and "=" not in tokens[0]:
        head_tokens.append(tokens.pop(0))
    head = " ".join(head_tokens)

    ops = []
    kind = None
    if head.startswith(EventKind.CHANGE_OWNER.value + ":"):
        kind = EventKind.CHANGE_OWNER
        ops.append(("new_owner", head.split(":", 1)[1]))
    else:
        for k in EventKind:
            if k.value == head:
                kind = k
                break
    if kind is None:
        raise EventError("unknown event head", data={"head": head[:64]})

    for tok in tokens:
        key, sep, raw = tok.partition("=")
        if not sep or not key:
            raise EventError("malformed event operand", data={"token": tok[:64]})
        ops.append((key, _value(key, raw)))
    return Event(kind, tuple(ops))


__all__ = [
    "EventKind",
    "Event",
    "transfer",
    "approval",
    "mint",
    "burn",
    "change_owner",
    "deployed",
    "parse_event",
]
