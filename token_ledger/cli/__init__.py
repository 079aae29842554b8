"""Command line entry points (`token-ledger`)."""

from .main import app, main

__all__ = ["app", "main"]
