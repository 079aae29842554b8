"""
Inverse decoder for ledger call arguments (see encoding.py).

- decode_value(buf, typ, offset=0) -> (value, new_offset)
- decode_args(buf, types) -> list   (rejects trailing bytes)

Truncated input, invalid UTF-8 and a bool byte other than 0x00/0x01 raise
MalformedArgs.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from ..errors import MalformedArgs
from ..math import U256_BYTES

__all__ = [
    "ArgsReader",
    "decode_value",
    "decode_args",
]

_UINT_WIDTHS = {"u8": 1, "u32": 4, "u64": 8, "u256": U256_BYTES}


def _read_exact(buf: bytes, offset: int, n: int) -> Tuple[bytes, int]:
    j = offset + n
    if j > len(buf):
        raise MalformedArgs("truncated payload", data={"offset": offset, "need": n})
    return buf[offset:j], j


def decode_value(buf: bytes, typ: str, offset: int = 0) -> Tuple[Any, int]:
    if typ == "bool":
        raw, j = _read_exact(buf, offset, 1)
        if raw not in (b"\x00", b"\x01"):
            raise MalformedArgs("bool must be 0x00 or 0x01", data={"offset": offset})
        return raw == b"\x01", j
    if typ in ("string", "address"):
        head, j = _read_exact(buf, offset, 4)
        n = int.from_bytes(head, "little")
        raw, j = _read_exact(buf, j, n)
        try:
            return raw.decode("utf-8"), j
        except UnicodeDecodeError as e:
            raise MalformedArgs("string is not valid UTF-8", data={"offset": offset}) from e
    width = _UINT_WIDTHS.get(typ)
    if width is None:
        raise MalformedArgs(f"unsupported type {typ!r}")
    raw, j = _read_exact(buf, offset, width)
    return int.from_bytes(raw, "little", signed=False), j


def decode_args(buf: bytes, types: Sequence[str]) -> List[Any]:
    if not isinstance(buf, (bytes, bytearray, memoryview)):
        raise MalformedArgs("arguments must be bytes")
    b = bytes(buf)
    out: List[Any] = []
    off = 0
    for t in types:
        v, off = decode_value(b, t, off)
        out.append(v)
    if off != len(b):
        raise MalformedArgs("trailing bytes after arguments", data={"extra": len(b) - off})
    return out


class ArgsReader:
    """Sequential reader mirroring ArgsWriter."""

    def __init__(self, buf: bytes) -> None:
        self._buf = bytes(buf)
        self._off = 0

    def _next(self, typ: str) -> Any:
        v, self._off = decode_value(self._buf, typ, self._off)
        return v

    def bool(self) -> bool:
        return self._next("bool")

    def u8(self) -> int:
        return self._next("u8")

    def u32(self) -> int:
        return self._next("u32")

    def u64(self) -> int:
        return self._next("u64")

    def u256(self) -> int:
        return self._next("u256")

    def string(self) -> str:
        return self._next("string")

    def remaining(self) -> int:
        return len(self._buf) - self._off
