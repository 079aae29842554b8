"""
token_ledger.runtime.journal — write journal with checkpoints.

Writes go to the top overlay; reads consult overlays from top to bottom and
then the base backend. `commit()` merges the top overlay into the layer below
(or into the base when it is the last one). `revert()` discards the top
overlay.

The host simulator opens one layer per call, so a call either lands in the
backend as a whole or not at all:

    j = JournaledStorage(backend)
    j.begin()
    j.set(b"k", b"v")
    j.commit()        # or j.revert()

The journal itself satisfies the StorageBackend protocol and can be wrapped in
a StorageHandle.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .storage_api import StorageBackend


class JournaledStorage:
    """A copy-on-write overlay stack over a StorageBackend."""

    def __init__(self, base: StorageBackend) -> None:
        self._base = base
        self._layers: List[Dict[bytes, bytes]] = []

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of open overlays (0 means writes go straight to the base)."""
        return len(self._layers)

    def begin(self) -> int:
        """Open a new checkpoint. Returns the new depth."""
        self._layers.append({})
        return len(self._layers)

    def commit(self) -> None:
        """Merge the top overlay into its parent, or into the base."""
        if not self._layers:
            raise RuntimeError("journal has no open checkpoint")
        top = self._layers.pop()
        if self._layers:
            self._layers[-1].update(top)
            return
        for key in sorted(top):
            self._base.set(key, top[key])

    def revert(self) -> None:
        """Discard the top overlay."""
        if not self._layers:
            raise RuntimeError("journal has no open checkpoint")
        self._layers.pop()

    def pending(self) -> Dict[bytes, bytes]:
        """Writes staged across all open overlays (top wins)."""
        out: Dict[bytes, bytes] = {}
        for layer in self._layers:
            out.update(layer)
        return out

    # --------------------------------------------------------------------- #
    # StorageBackend surface
    # --------------------------------------------------------------------- #

    def get(self, key: bytes) -> Optional[bytes]:
        for layer in reversed(self._layers):
            if key in layer:
                return layer[key]
        return self._base.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        if not self._layers:
            self._base.set(key, value)
            return
        self._layers[-1][key] = value

    def exists(self, key: bytes) -> bool:
        for layer in reversed(self._layers):
            if key in layer:
                return True
        return self._base.exists(key)


__all__ = ["JournaledStorage"]
