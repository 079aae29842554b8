"""
token_ledger.runtime.context — the explicit per-call environment.

Every engine operation receives a CallContext instead of reaching for ambient
globals: the storage handle, the verified caller, the event sink and the
config travel together and are fixed for the duration of one call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..config import LedgerConfig, load_config
from ..errors import MalformedAddress
from ..token import require_address
from .events_api import BufferedEventSink, EventSink
from .storage_api import MemoryBackend, StorageBackend, StorageHandle


@dataclass(frozen=True)
class CallContext:
    """
    Fields
    ------
    storage: validated view over the host's key/value store.
    caller:  address the host verified as the origin of this call.
    events:  sink that receives one rendered line per successful mutation.
    config:  caps and policies in force for this call.
    """

    storage: StorageHandle
    caller: str
    events: EventSink
    config: LedgerConfig = field(default_factory=load_config)

    def __post_init__(self) -> None:
        try:
            require_address(self.caller, self.config.max_address_bytes)
        except MalformedAddress as e:
            raise MalformedAddress("caller " + e.message, data=e.data) from e

    @classmethod
    def build(
        cls,
        caller: str,
        backend: Optional[StorageBackend] = None,
        events: Optional[EventSink] = None,
        config: Optional[LedgerConfig] = None,
    ) -> "CallContext":
        """Convenience constructor wiring defaults for local runs and tests."""
        cfg = config or load_config()
        return cls(
            storage=StorageHandle(backend if backend is not None else MemoryBackend(), cfg),
            caller=caller,
            events=events if events is not None else BufferedEventSink(cfg),
            config=cfg,
        )

    def as_caller(self, caller: str) -> "CallContext":
        """Same storage, sink and config, different caller."""
        return CallContext(storage=self.storage, caller=caller, events=self.events, config=self.config)


__all__ = ["CallContext"]
