"""
token_ledger.errors — typed failures for the token ledger.

Every failure is terminal for the call that raised it: the engine validates
before it writes, and the host discards the call's storage and events when one
of these propagates. Callers branch on the class (or the stable `code`), never
on the message text.

Hierarchy
---------
LedgerError (base)
 ├─ AlreadyConstructed     : constructor called on a constructed ledger
 ├─ InsufficientBalance    : debit larger than the holder's balance
 ├─ InsufficientAllowance  : spender debit larger than the remaining allowance
 ├─ Unauthorized           : owner-only operation called by someone else
 ├─ Overflow               : checked 256-bit arithmetic left its range
 ├─ MalformedAmount        : not an int in [0, 2**256-1] or not 32 bytes
 ├─ MalformedAddress       : address fails the address grammar
 ├─ InvalidMetadata        : bad name/symbol/decimals at construction
 ├─ MalformedArgs          : call arguments could not be decoded
 ├─ UnknownOperation       : no such operation name
 ├─ StorageError           : key/value outside the configured caps
 └─ EventError             : event line outside the configured caps
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class LedgerError(Exception):
    """
    Base ledger error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'INSUFFICIENT_BALANCE').
        data:    Optional structured details (kept JSON-serializable).
    """

    message: str = "ledger error"
    code: str = "LEDGER_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts and CLI output."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class AlreadyConstructed(LedgerError):
    def __init__(self, message: str = "ledger already constructed", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="ALREADY_CONSTRUCTED", data=data)


class InsufficientBalance(LedgerError):
    """Raised before any write when `balance < amount`."""

    def __init__(self, message: str = "insufficient balance", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="INSUFFICIENT_BALANCE", data=data)


class InsufficientAllowance(LedgerError):
    """Raised before any write when `allowance[owner][spender] < amount`."""

    def __init__(self, message: str = "insufficient allowance", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="INSUFFICIENT_ALLOWANCE", data=data)


class Unauthorized(LedgerError):
    def __init__(self, message: str = "caller is not the owner", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="UNAUTHORIZED", data=data)


class Overflow(LedgerError):
    """
    Checked arithmetic left [0, 2**256-1]. Covers both directions; `data["op"]`
    says which ("add" or "sub").
    """

    def __init__(self, message: str = "u256 overflow", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="OVERFLOW", data=data)


class MalformedAmount(LedgerError):
    def __init__(self, message: str = "malformed amount", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="MALFORMED_AMOUNT", data=data)


class MalformedAddress(LedgerError):
    def __init__(self, message: str = "malformed address", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="MALFORMED_ADDRESS", data=data)


class InvalidMetadata(LedgerError):
    def __init__(self, message: str = "invalid token metadata", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="INVALID_METADATA", data=data)


class MalformedArgs(LedgerError):
    def __init__(self, message: str = "malformed call arguments", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="MALFORMED_ARGS", data=data)


class UnknownOperation(LedgerError):
    def __init__(self, message: str = "unknown operation", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="UNKNOWN_OPERATION", data=data)


class StorageError(LedgerError):
    def __init__(self, message: str = "storage limit exceeded", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="STORAGE_ERROR", data=data)


class EventError(LedgerError):
    def __init__(self, message: str = "invalid event", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="EVENT_ERROR", data=data)


__all__ = [
    "LedgerError",
    "AlreadyConstructed",
    "InsufficientBalance",
    "InsufficientAllowance",
    "Unauthorized",
    "Overflow",
    "MalformedAmount",
    "MalformedAddress",
    "InvalidMetadata",
    "MalformedArgs",
    "UnknownOperation",
    "StorageError",
    "EventError",
]
