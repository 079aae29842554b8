"""token_ledger.version — semantic version.

Resolution order: TOKEN_LEDGER_VERSION env → installed package metadata →
BASE_VERSION.
"""

from __future__ import annotations

import os
from importlib import metadata as importlib_metadata

# Bump on changes to the storage layout, event lines or argument framing.
BASE_VERSION = "0.1.0"


def compute_version() -> str:
    env = os.getenv("TOKEN_LEDGER_VERSION")
    if env:
        return env.strip()
    try:
        return importlib_metadata.version("token-ledger")
    except importlib_metadata.PackageNotFoundError:
        return BASE_VERSION


__version__ = compute_version()

__all__ = ["BASE_VERSION", "compute_version", "__version__"]
