from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from ..config import LedgerConfig, load_config
from ..errors import EventError


@runtime_checkable
class EventSink(Protocol):
    """Append-only sink for rendered event lines."""

    def check(self, line: str) -> str: ...
    def emit(self, line: str) -> None: ...


class BufferedEventSink:
    """
    Collects the lines emitted during one call. The host flushes them to its
    log on commit and drops them on revert.
    """

    def __init__(self, config: Optional[LedgerConfig] = None) -> None:
        self._cfg = config or load_config()
        self._lines: List[str] = []

    # --- Validation helpers -------------------------------------------------

    def _check_line(self, line: object) -> str:
        if not isinstance(line, str):
            raise EventError("event line must be str", data={"where": "type"})
        if len(line) == 0:
            raise EventError("event line must be non-empty", data={"where": "empty"})
        if "\n" in line or "\r" in line:
            raise EventError("event line must be a single line", data={"where": "newline"})
        size = len(line.encode("utf-8"))
        if size > self._cfg.max_event_bytes:
            raise EventError(
                "event line too long",
                data={"where": "length", "len": size},
            )
        return line

    # --- Core sink operations -----------------------------------------------

    def check(self, line: str) -> str:
        """Raise EventError if `emit(line)` would fail; nothing is recorded."""
        checked = self._check_line(line)
        if len(self._lines) >= self._cfg.max_events_per_call:
            raise EventError(
                "too many events in one call",
                data={"where": "count", "max": self._cfg.max_events_per_call},
            )
        return checked

    def emit(self, line: str) -> None:
        self._lines.append(self.check(line))

    def clear(self) -> None:
        self._lines.clear()

    def drain(self) -> List[str]:
        out = list(self._lines)
        self._lines.clear()
        return out

    def iter_lines(self) -> Iterable[str]:
        # Expose a stable snapshot
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


__all__ = ["EventSink", "BufferedEventSink"]
