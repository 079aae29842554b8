"""
token_ledger
============

An ERC-20-style fungible token ledger with an explicit owner, mint and burn.

The ledger is a state machine over a host-supplied key/value store: every
operation receives a `CallContext` (storage handle, verified caller, event
sink, config), validates against current storage, writes through the
key-space encoder and emits one event line.

Layout
------
- token_ledger.math            U256 codec (32-byte LE) and checked/saturating math
- token_ledger.token           storage keys and validation
- token_ledger.token.fungible  mutations (construct, transfer, mint, ...)
- token_ledger.token.views     read accessors
- token_ledger.token.events    event line format
- token_ledger.runtime         storage, journal, event sink, call context
- token_ledger.abi             call argument framing
- token_ledger.dispatch        operation table
- token_ledger.host            in-process host with atomic calls
- token_ledger.cli             `token-ledger` command line
"""

from __future__ import annotations

from .config import LedgerConfig, load_config
from .dispatch import Operation, dispatch
from .errors import (AlreadyConstructed, InsufficientAllowance,
                     InsufficientBalance, LedgerError, MalformedAddress,
                     MalformedAmount, Overflow, Unauthorized)
from .host import CallReceipt, LedgerHost
from .runtime.context import CallContext
from .version import __version__

__all__ = [
    "__version__",
    "LedgerConfig",
    "load_config",
    "Operation",
    "dispatch",
    "CallContext",
    "CallReceipt",
    "LedgerHost",
    "LedgerError",
    "AlreadyConstructed",
    "InsufficientBalance",
    "InsufficientAllowance",
    "Unauthorized",
    "Overflow",
    "MalformedAmount",
    "MalformedAddress",
]
