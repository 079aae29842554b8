"""
Argument encoding for ledger calls.

Fixed-width little-endian framing, the layout the hosting chain uses for call
arguments:

- bool:     1 byte: 0x00 (false) or 0x01 (true)
- u8:       1 byte
- u32:      4 bytes little-endian
- u64:      8 bytes little-endian
- u256:     32 bytes little-endian
- string:   u32 LE byte length || UTF-8 bytes
- address:  same as string

Arguments are concatenated with no count prefix and no padding; the callee's
signature says how many to read. Decoding lives in token_ledger.abi.decoding.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from ..errors import MalformedArgs
from ..math import U256_BYTES, U256_MAX

__all__ = [
    "ArgsWriter",
    "SCALAR_TYPES",
    "encode_bool",
    "encode_uint",
    "encode_string",
    "encode_value",
    "encode_args",
]

# type name -> byte width for fixed-size unsigned ints
_UINT_WIDTHS = {"u8": 1, "u32": 4, "u64": 8, "u256": U256_BYTES}

SCALAR_TYPES = ("bool", "u8", "u32", "u64", "u256", "string", "address")


# ──────────────────────────────────────────────────────────────────────────────
# Primitive encoders
# ──────────────────────────────────────────────────────────────────────────────


def encode_bool(value: Any) -> bytes:
    if not isinstance(value, bool):
        raise MalformedArgs("bool must be True/False", data={"type": "bool"})
    return b"\x01" if value else b"\x00"


def encode_uint(value: Any, typ: str = "u256") -> bytes:
    width = _UINT_WIDTHS.get(typ)
    if width is None:
        raise MalformedArgs(f"unsupported uint type {typ!r}")
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedArgs(f"{typ} must be an int", data={"type": typ})
    hi = U256_MAX if width == U256_BYTES else (1 << (8 * width)) - 1
    if value < 0 or value > hi:
        raise MalformedArgs(f"{typ} out of range", data={"type": typ})
    return value.to_bytes(width, "little", signed=False)


def encode_string(value: Any) -> bytes:
    if not isinstance(value, str):
        raise MalformedArgs("string must be str", data={"type": "string"})
    raw = value.encode("utf-8")
    return len(raw).to_bytes(4, "little") + raw


def encode_value(value: Any, typ: str) -> bytes:
    if typ == "bool":
        return encode_bool(value)
    if typ in ("string", "address"):
        return encode_string(value)
    return encode_uint(value, typ)


def encode_args(types: Sequence[str], values: Sequence[Any]) -> bytes:
    if len(types) != len(values):
        raise MalformedArgs(
            "argument count mismatch",
            data={"expected": len(types), "got": len(values)},
        )
    return b"".join(encode_value(v, t) for t, v in zip(types, values))


class ArgsWriter:
    """Chained builder: ArgsWriter().string("B").u256(300).to_bytes()."""

    def __init__(self) -> None:
        self._parts: List[bytes] = []

    def bool(self, value: bool) -> "ArgsWriter":
        self._parts.append(encode_bool(value))
        return self

    def u8(self, value: int) -> "ArgsWriter":
        self._parts.append(encode_uint(value, "u8"))
        return self

    def u32(self, value: int) -> "ArgsWriter":
        self._parts.append(encode_uint(value, "u32"))
        return self

    def u64(self, value: int) -> "ArgsWriter":
        self._parts.append(encode_uint(value, "u64"))
        return self

    def u256(self, value: int) -> "ArgsWriter":
        self._parts.append(encode_uint(value, "u256"))
        return self

    def string(self, value: str) -> "ArgsWriter":
        self._parts.append(encode_string(value))
        return self

    def to_bytes(self) -> bytes:
        return b"".join(self._parts)
