"""
token_ledger.abi
================

Argument framing for calls routed into the ledger. Pure and deterministic;
see `encoding` for the byte layout.
"""

from __future__ import annotations

from .decoding import ArgsReader, decode_args, decode_value
from .encoding import (SCALAR_TYPES, ArgsWriter, encode_args, encode_bool,
                       encode_string, encode_uint, encode_value)

__all__ = [
    "SCALAR_TYPES",
    "ArgsWriter",
    "ArgsReader",
    "encode_bool",
    "encode_uint",
    "encode_string",
    "encode_value",
    "encode_args",
    "decode_value",
    "decode_args",
]
