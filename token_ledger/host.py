"""
token_ledger.host — a local stand-in for the hosting chain.

The real host supplies storage, the verified caller and the event log, and
makes every call atomic. `LedgerHost` does the same in-process so the ledger
can be driven end to end by tests and the CLI:

    host = LedgerHost()
    host.invoke("constructor", "A", "Tok", "TKN", 2, 1000).unwrap()
    host.invoke("transfer", "A", "B", 300).unwrap()
    host.invoke("balanceOf", "A", "A").output     # 32-byte LE amount

Per call the host opens a journal layer and a fresh event buffer, dispatches,
and then either commits both (storage merged into the backend, lines appended
to the host log) or throws both away when a LedgerError propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import LedgerConfig, load_config
from .dispatch import Operation, dispatch, encode_call_args
from .errors import LedgerError
from .runtime.context import CallContext
from .runtime.events_api import BufferedEventSink
from .runtime.journal import JournaledStorage
from .runtime.storage_api import MemoryBackend, StorageHandle

log = logging.getLogger(__name__)


@dataclass
class CallReceipt:
    """Outcome of one host call."""

    op: str
    caller: str
    ok: bool
    output: bytes = b""
    events: List[str] = field(default_factory=list)
    error: Optional[LedgerError] = None

    def unwrap(self) -> bytes:
        """Return the output, or re-raise the call's failure."""
        if self.error is not None:
            raise self.error
        return self.output

    def to_dict(self) -> Dict[str, Any]:
        return {
            "op": self.op,
            "caller": self.caller,
            "ok": self.ok,
            "output": "0x" + self.output.hex(),
            "events": list(self.events),
            "error": self.error.to_dict() if self.error is not None else None,
        }


class LedgerHost:
    """In-process host: one backend, one append-only event log."""

    def __init__(self, backend: Optional[MemoryBackend] = None, config: Optional[LedgerConfig] = None) -> None:
        self.config = config or load_config()
        self.backend = backend if backend is not None else MemoryBackend()
        self._journal = JournaledStorage(self.backend)
        self._storage = StorageHandle(self._journal, self.config)
        self.event_log: List[str] = []

    def call(self, op: "str | Operation", caller: str, raw_args: bytes = b"") -> CallReceipt:
        name = op.value if isinstance(op, Operation) else str(op)
        sink = BufferedEventSink(self.config)
        self._journal.begin()
        try:
            ctx = CallContext(storage=self._storage, caller=caller, events=sink, config=self.config)
            output = dispatch(op, ctx, raw_args)
        except LedgerError as e:
            self._journal.revert()
            log.info("call reverted: op=%s caller=%s code=%s", name, caller, e.code)
            return CallReceipt(op=name, caller=caller, ok=False, error=e)
        except BaseException:
            self._journal.revert()
            raise
        self._journal.commit()
        lines = sink.drain()
        self.event_log.extend(lines)
        log.info("call committed: op=%s caller=%s events=%d", name, caller, len(lines))
        return CallReceipt(op=name, caller=caller, ok=True, output=output, events=lines)

    def invoke(self, op: "str | Operation", caller: str, *values: Any) -> CallReceipt:
        """Like `call`, encoding `values` with the operation's signature."""
        try:
            raw = encode_call_args(op, values)
        except LedgerError as e:
            name = op.value if isinstance(op, Operation) else str(op)
            return CallReceipt(op=name, caller=caller, ok=False, error=e)
        return self.call(op, caller, raw)

    # ------------------------------------------------------------------ #
    # State import / export (hex strings, JSON friendly)
    # ------------------------------------------------------------------ #

    def snapshot(self) -> Dict[str, Any]:
        return {
            "storage": {k.hex(): v.hex() for k, v in self.backend.items()},
            "events": list(self.event_log),
        }

    @classmethod
    def load(cls, state: Dict[str, Any], config: Optional[LedgerConfig] = None) -> "LedgerHost":
        storage = state.get("storage") or {}
        backend = MemoryBackend({bytes.fromhex(k): bytes.fromhex(v) for k, v in storage.items()})
        host = cls(backend=backend, config=config)
        host.event_log.extend(state.get("events") or [])
        return host


__all__ = ["CallReceipt", "LedgerHost"]
