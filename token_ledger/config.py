"""
token_ledger.config — size caps, allowance policy and log level.

This module centralizes configuration for the ledger. It has NO third-party
deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (TOKEN_LEDGER_*)
  2) Hardcoded safe defaults below

Key env vars:
  - TOKEN_LEDGER_MAX_ADDRESS_BYTES       (int)  default: 64   (1..255)
  - TOKEN_LEDGER_MAX_NAME_BYTES          (int)  default: 64
  - TOKEN_LEDGER_MAX_SYMBOL_BYTES        (int)  default: 16
  - TOKEN_LEDGER_MAX_STORAGE_KEY_BYTES   (int)  default: 600
  - TOKEN_LEDGER_MAX_STORAGE_VALUE_BYTES (int)  default: 4096
  - TOKEN_LEDGER_MAX_EVENT_BYTES         (int)  default: 1024
  - TOKEN_LEDGER_MAX_EVENTS_PER_CALL     (int)  default: 16
  - TOKEN_LEDGER_ALLOWANCE_OVERFLOW      (str)  default: "saturate" ("saturate" | "fail")
  - TOKEN_LEDGER_LOG_LEVEL               (str)  default: "WARNING"

Usage:
    from token_ledger.config import load_config
    CFG = load_config()
    if CFG.allowance_saturates: ...

`load_config` is cached; tests that tweak the environment call
`load_config.cache_clear()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Dict

ENV_PREFIX = "TOKEN_LEDGER_"

ALLOWANCE_SATURATE = "saturate"
ALLOWANCE_FAIL = "fail"
_ALLOWANCE_POLICIES = (ALLOWANCE_SATURATE, ALLOWANCE_FAIL)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# ----------------------------- helpers ---------------------------------------


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_choice(name: str, default: str, choices: tuple) -> str:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    val = raw.strip()
    for c in choices:
        if val.lower() == c.lower():
            return c
    return default


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class LedgerConfig:
    # Address / metadata caps (bytes of UTF-8)
    max_address_bytes: int = 64
    max_name_bytes: int = 64
    max_symbol_bytes: int = 16

    # Storage caps (enforced by runtime.storage_api.StorageHandle)
    max_storage_key_bytes: int = 600
    max_storage_value_bytes: int = 4096

    # Event caps (enforced by runtime.events_api.BufferedEventSink)
    max_event_bytes: int = 1024
    max_events_per_call: int = 16

    # Allowance increase past 2**256-1: clamp or raise Overflow
    allowance_overflow: str = ALLOWANCE_SATURATE

    log_level: str = "WARNING"

    @property
    def allowance_saturates(self) -> bool:
        return self.allowance_overflow == ALLOWANCE_SATURATE

    def with_overrides(self, **changes: Any) -> "LedgerConfig":
        """Copy with some fields replaced (tests, embedding hosts)."""
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "max_address_bytes": self.max_address_bytes,
            "max_name_bytes": self.max_name_bytes,
            "max_symbol_bytes": self.max_symbol_bytes,
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_event_bytes": self.max_event_bytes,
            "max_events_per_call": self.max_events_per_call,
            "allowance_overflow": self.allowance_overflow,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def load_config() -> LedgerConfig:
    """
    Build the process-wide config from the environment. Out-of-range integers
    are clamped, unparsable values fall back to defaults.
    """
    return LedgerConfig(
        max_address_bytes=_env_int("MAX_ADDRESS_BYTES", 64, min_v=1, max_v=255),
        max_name_bytes=_env_int("MAX_NAME_BYTES", 64, min_v=1, max_v=1024),
        max_symbol_bytes=_env_int("MAX_SYMBOL_BYTES", 16, min_v=1, max_v=256),
        max_storage_key_bytes=_env_int("MAX_STORAGE_KEY_BYTES", 600, min_v=64, max_v=4096),
        max_storage_value_bytes=_env_int("MAX_STORAGE_VALUE_BYTES", 4096, min_v=64, max_v=1 << 20),
        max_event_bytes=_env_int("MAX_EVENT_BYTES", 1024, min_v=128, max_v=1 << 16),
        max_events_per_call=_env_int("MAX_EVENTS_PER_CALL", 16, min_v=1, max_v=1024),
        allowance_overflow=_env_choice("ALLOWANCE_OVERFLOW", ALLOWANCE_SATURATE, _ALLOWANCE_POLICIES),
        log_level=_env_choice("LOG_LEVEL", "WARNING", _LOG_LEVELS),
    )


__all__ = [
    "ENV_PREFIX",
    "ALLOWANCE_SATURATE",
    "ALLOWANCE_FAIL",
    "LedgerConfig",
    "load_config",
]
