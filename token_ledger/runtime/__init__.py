"""
token_ledger.runtime — the host collaborators the ledger consumes:
key/value storage, an event sink, a write journal and the per-call context.
"""

from .context import CallContext
from .events_api import BufferedEventSink, EventSink
from .journal import JournaledStorage
from .storage_api import MemoryBackend, StorageBackend, StorageHandle

__all__ = [
    "CallContext",
    "EventSink",
    "BufferedEventSink",
    "JournaledStorage",
    "StorageBackend",
    "MemoryBackend",
    "StorageHandle",
]
