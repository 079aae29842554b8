"""
Shared pytest fixtures:
- Stable addresses for the usual cast (deployer/alice/bob/carol/dave)
- Fresh config per test (TOKEN_LEDGER_* env cleared, cache reset)
- A memory backend + buffered sink, and a factory for CallContexts bound to them
- A constructed ledger (engine level) and a constructed LedgerHost
"""
from __future__ import annotations

import os
from typing import Callable, Optional

import pytest

from token_ledger.config import LedgerConfig, load_config
from token_ledger.math import decode_u256
from token_ledger.runtime import BufferedEventSink, CallContext, MemoryBackend
from token_ledger.token import fungible, views
from token_ledger.host import LedgerHost

A = "AU1deployerAddress123456789012345678901234567890"
B = "AU1aliceAddress1234567890123456789012345678901234"
C = "AU1bobAddress12345678901234567890123456789012345"
D = "AU1charlieAddress12345678901234567890123456789012"

INITIAL_SUPPLY = 1000

ContextFactory = Callable[..., CallContext]


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("TOKEN_LEDGER_"):
            monkeypatch.delenv(key, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def sink() -> BufferedEventSink:
    return BufferedEventSink()


@pytest.fixture
def ctx_for(backend: MemoryBackend, sink: BufferedEventSink) -> ContextFactory:
    def _make(caller: str, config: Optional[LedgerConfig] = None) -> CallContext:
        return CallContext.build(caller, backend=backend, events=sink, config=config)

    return _make


@pytest.fixture
def deployed(ctx_for: ContextFactory, sink: BufferedEventSink) -> ContextFactory:
    """Ledger constructed by A: Tok/TKN, 2 decimals, 1000 to A. Sink emptied."""
    fungible.construct(ctx_for(A), "Tok", "TKN", 2, INITIAL_SUPPLY)
    sink.clear()
    return ctx_for


@pytest.fixture
def host() -> LedgerHost:
    h = LedgerHost()
    h.invoke("constructor", A, "Tok", "TKN", 2, INITIAL_SUPPLY).unwrap()
    return h


def balance(ctx: CallContext, addr: str) -> int:
    return decode_u256(views.balance_of(ctx, addr))


def allowance(ctx: CallContext, owner: str, spender: str) -> int:
    return decode_u256(views.allowance(ctx, owner, spender))


def supply(ctx: CallContext) -> int:
    return decode_u256(views.total_supply(ctx))
