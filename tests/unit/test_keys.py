from __future__ import annotations

import pytest

from token_ledger.errors import InvalidMetadata, MalformedAddress
from token_ledger.token import (ALLOWANCE_PREFIX, BALANCE_PREFIX, K_DECIMALS,
                                K_NAME, K_OWNER, K_SYMBOL, K_TOTAL_SUPPLY,
                                encode_address, is_valid_address,
                                key_allowance, key_balance, require_address,
                                require_decimals, require_text)


def test_fixed_keys_are_literal():
    assert (K_NAME, K_SYMBOL, K_DECIMALS, K_TOTAL_SUPPLY, K_OWNER) == (
        b"NAME",
        b"SYMBOL",
        b"DECIMALS",
        b"TOTAL_SUPPLY",
        b"OWNER",
    )


def test_balance_key_layout():
    assert key_balance("AB") == b"BALANCE\x02AB"
    assert key_balance("AB").startswith(BALANCE_PREFIX)


def test_allowance_key_layout():
    assert key_allowance("A", "BC") == b"ALLOWANCE\x01A\x02BC"
    assert key_allowance("A", "BC").startswith(ALLOWANCE_PREFIX)


def test_allowance_keys_do_not_collide_across_splits():
    # Same concatenated text, different (owner, spender) split.
    assert key_allowance("AB", "C") != key_allowance("A", "BC")
    assert key_allowance("A", "B") != key_allowance("B", "A")


def test_entry_keys_never_equal_fixed_keys():
    fixed = {K_NAME, K_SYMBOL, K_DECIMALS, K_TOTAL_SUPPLY, K_OWNER}
    for addr in ("A", "NAME", "OWNER", "x" * 64):
        assert key_balance(addr) not in fixed
        assert key_allowance(addr, addr) not in fixed


def test_balance_and_allowance_spaces_are_disjoint():
    assert not key_balance("A").startswith(ALLOWANCE_PREFIX)
    assert not key_allowance("A", "B").startswith(BALANCE_PREFIX)


@pytest.mark.parametrize("addr", ["A", "AU1abc", "0xdeadbeef", "anim1qq_-.", "x" * 64])
def test_valid_addresses(addr):
    assert is_valid_address(addr)
    assert require_address(addr) == addr


@pytest.mark.parametrize(
    "addr",
    ["", "has space", "a:b", "a=b", "tab\there", "é", "x" * 65, b"AU1", None, 7],
)
def test_malformed_addresses(addr):
    assert not is_valid_address(addr)
    with pytest.raises(MalformedAddress):
        require_address(addr)


def test_address_cap_is_configurable_up_to_255():
    assert require_address("x" * 100, max_bytes=128) == "x" * 100
    with pytest.raises(MalformedAddress):
        require_address("x" * 256, max_bytes=1000)


def test_encode_address_is_length_prefixed():
    assert encode_address("abc") == b"\x03abc"


def test_metadata_validators():
    assert require_text("Tok", "name", 64) == b"Tok"
    assert require_text("Jeton é", "name", 64) == "Jeton é".encode("utf-8")
    assert require_decimals(0) == 0
    assert require_decimals(255) == 255
    for bad in ("", "x" * 65, 5, None):
        with pytest.raises(InvalidMetadata):
            require_text(bad, "name", 64)
    for bad in (-1, 256, True, "2"):
        with pytest.raises(InvalidMetadata):
            require_decimals(bad)
