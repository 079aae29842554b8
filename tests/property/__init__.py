# -*- coding: utf-8 -*-
"""
tests.property package bootstrap.

Shared configuration for the ledger's property-based tests (Hypothesis).

What this does on import:
- Registers named Hypothesis profiles (dev/ci/fast/stress).
- Selects the active profile using HYPOTHESIS_PROFILE, otherwise "ci" on CI
  (CI env var present/truthy) and "dev" locally.
- Exposes the strategies the ledger properties share: addresses from the
  address grammar, u256 amounts, and small amounts that keep random call
  sequences from failing on every step.

Usage in tests:
    from . import addresses, small_amounts, given, st

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast|stress
- CI=true (auto-pick the 'ci' profile if HYPOTHESIS_PROFILE not set)
"""
from __future__ import annotations

import os
from typing import Final, Tuple

from hypothesis import HealthCheck, Verbosity, given, settings
from hypothesis import strategies as st

from token_ledger.math import U256_MAX

# ---- profile registry --------------------------------------------------------


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.normal,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(max_examples=25, deadline=None, suppress_health_check=_hc(HealthCheck.too_slow)),
)

settings.register_profile(
    "stress",
    settings(
        max_examples=1000,
        deadline=None,
        suppress_health_check=_hc(
            HealthCheck.too_slow,
            HealthCheck.filter_too_much,
            HealthCheck.data_too_large,
        ),
        derandomize=True,
    ),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)

# ---- ledger strategies -------------------------------------------------------

# Printable ASCII minus space, ':' and '='.
_ADDRESS_ALPHABET = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) not in ":=")

addresses = st.text(alphabet=_ADDRESS_ALPHABET, min_size=1, max_size=64)
amounts = st.integers(min_value=0, max_value=U256_MAX)
small_amounts = st.integers(min_value=0, max_value=2_000)

# A handful of fixed holders so random call sequences keep hitting the same
# balances and allowances.
CAST = ("AU1deployer", "AU1alice", "AU1bob", "AU1carol")
members = st.sampled_from(CAST)


__all__ = [
    "st",
    "given",
    "addresses",
    "amounts",
    "small_amounts",
    "CAST",
    "members",
]
