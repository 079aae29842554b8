"""Unit tests for token_ledger. Shared fixtures live in tests/conftest.py."""
