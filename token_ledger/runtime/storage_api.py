"""
token_ledger.runtime.storage_api — host-supplied key/value storage.

The ledger only ever sees storage through this surface:

- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None
- exists(key: bytes) -> bool

Design goals
------------
- Simple default: in-process memory backend for local runs & tests.
- Pluggable: a tiny backend protocol so a host can bring its own state DB.
- Safe: `StorageHandle` enforces the key/value byte caps from config before
  anything reaches the backend.

Nothing is ever deleted: zero balances and allowances stay as explicit
32-byte zero entries.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterator, Optional, Protocol, Tuple, runtime_checkable

from ..config import LedgerConfig, load_config
from ..errors import StorageError


# ---------------------------- Backend API ---------------------------- #


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal backend interface for ledger storage."""

    def get(self, key: bytes) -> Optional[bytes]: ...
    def set(self, key: bytes, value: bytes) -> None: ...
    def exists(self, key: bytes) -> bool: ...


class MemoryBackend:
    """Thread-safe in-memory backend for local runs and tests."""

    def __init__(self, initial: Optional[Dict[bytes, bytes]] = None) -> None:
        self._store: Dict[bytes, bytes] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: bytes) -> Optional[bytes]:
        with self._lock:
            return self._store.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        with self._lock:
            self._store[key] = value

    def exists(self, key: bytes) -> bool:
        with self._lock:
            return key in self._store

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        """Sorted snapshot of all entries."""
        with self._lock:
            return iter(sorted(self._store.items()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


# --------------------------- Contract-facing handle --------------------------- #


class StorageHandle:
    """
    Validating view over a backend. This is what `CallContext.storage` holds.
    """

    def __init__(self, backend: StorageBackend, config: Optional[LedgerConfig] = None) -> None:
        for attr in ("get", "set", "exists"):
            if not callable(getattr(backend, attr, None)):
                raise StorageError(f"backend missing method: {attr}")
        self._backend = backend
        self._cfg = config or load_config()

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def _check_key(self, key: bytes) -> bytes:
        if not isinstance(key, (bytes, bytearray)):
            raise StorageError("storage key must be bytes")
        if len(key) == 0:
            raise StorageError("storage key must be non-empty")
        if len(key) > self._cfg.max_storage_key_bytes:
            raise StorageError(
                f"storage key too long (>{self._cfg.max_storage_key_bytes} bytes)",
                data={"len": len(key)},
            )
        return bytes(key)

    def _check_value(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise StorageError("storage value must be bytes")
        if len(value) > self._cfg.max_storage_value_bytes:
            raise StorageError(
                f"storage value too large (>{self._cfg.max_storage_value_bytes} bytes)",
                data={"len": len(value)},
            )
        return bytes(value)

    def check(self, key: bytes, value: bytes) -> None:
        """Raise StorageError if `set(key, value)` would be refused."""
        self._check_key(key)
        self._check_value(value)

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value for `key`, or None if not set."""
        return self._backend.get(self._check_key(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Set `key` to `value` (overwrites existing)."""
        self._backend.set(self._check_key(key), self._check_value(value))

    def exists(self, key: bytes) -> bool:
        return self._backend.exists(self._check_key(key))


__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "StorageHandle",
]
