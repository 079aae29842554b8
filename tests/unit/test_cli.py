import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from token_ledger.cli import app

runner = CliRunner()


def run_cli(args: List[str], state: Path, *, ok: bool = True) -> str:
    result = runner.invoke(app, ["--state", str(state)] + args)
    if ok:
        assert result.exit_code == 0, result.output
    else:
        assert result.exit_code == 1, result.output
    return result.output


def run_json(args: List[str], state: Path, *, ok: bool = True) -> Dict[str, Any]:
    return json.loads(run_cli(args, state, ok=ok))


@pytest.fixture
def state(tmp_path: Path) -> Path:
    path = tmp_path / "ledger.json"
    out = run_json(
        ["deploy", "--caller", "A", "--name", "Tok", "--symbol", "TKN", "--decimals", "2", "--supply", "1000"],
        path,
    )
    assert out["ok"] is True
    assert out["events"] == ["ERC20_DEPLOYED owner=A decimals=2 supply=1000"]
    return path


def test_deploy_writes_state_file(state: Path) -> None:
    data = json.loads(state.read_text())
    assert set(data) == {"storage", "events"}
    assert len(data["storage"]) == 6


def test_deploy_twice_fails(state: Path) -> None:
    out = run_json(["deploy", "--caller", "B", "--name", "X", "--symbol", "X"], state, ok=False)
    assert out["error"]["code"] == "ALREADY_CONSTRUCTED"


def test_transfer_and_views(state: Path) -> None:
    out = run_json(["call", "transfer", "B", "300", "--caller", "A"], state)
    assert out["value"] is True
    assert out["events"] == ["TRANSFER SUCCESS from=A to=B amount=300"]

    assert run_json(["view", "balanceOf", "A"], state)["value"] == 700
    assert run_json(["view", "balanceOf", "B"], state)["value"] == 300
    assert run_json(["view", "totalSupply"], state)["value"] == 1000
    assert run_json(["view", "name"], state)["value"] == "Tok"
    assert run_json(["view", "decimals"], state)["value"] == 2
    assert run_json(["view", "isOwner", "A"], state)["value"] is True


def test_delegated_transfer(state: Path) -> None:
    run_cli(["call", "increaseAllowance", "C", "200", "--caller", "A"], state)
    run_cli(["call", "transferFrom", "A", "D", "0x96", "--caller", "C"], state)
    assert run_json(["view", "allowance", "A", "C"], state)["value"] == 50
    assert run_json(["view", "balanceOf", "D"], state)["value"] == 150


def test_failed_call_does_not_touch_state(state: Path) -> None:
    before = state.read_text()
    out = run_json(["call", "mint", "B", "1", "--caller", "B"], state, ok=False)
    assert out["ok"] is False
    assert out["error"]["code"] == "UNAUTHORIZED"
    assert state.read_text() == before


def test_bad_arguments(state: Path) -> None:
    out = run_json(["call", "transfer", "B", "--caller", "A"], state, ok=False)
    assert out["error"]["code"] == "MALFORMED_ARGS"
    out = run_json(["call", "transfer", "B", "lots", "--caller", "A"], state, ok=False)
    assert out["error"]["code"] == "MALFORMED_ARGS"
    out = run_json(["call", "approve", "B", "1", "--caller", "A"], state, ok=False)
    assert out["error"]["code"] == "UNKNOWN_OPERATION"


def test_view_refuses_writes(state: Path) -> None:
    out = run_json(["view", "transfer", "B", "1"], state, ok=False)
    assert out["error"]["code"] == "MALFORMED_ARGS"


def test_events_lists_committed_lines(state: Path) -> None:
    run_cli(["call", "burn", "10", "--caller", "A"], state)
    run_cli(["call", "burn", "5000", "--caller", "A"], state, ok=False)
    run_cli(["call", "setOwner", "B", "--caller", "A"], state)
    lines = run_cli(["events"], state).splitlines()
    assert lines == [
        "ERC20_DEPLOYED owner=A decimals=2 supply=1000",
        "BURN_SUCCESS from=A amount=10",
        "CHANGE_OWNER:B previous=A",
    ]


def test_encode_prints_hex(tmp_path: Path) -> None:
    out = run_cli(["encode", "transfer", "B", "1"], tmp_path / "unused.json").strip()
    assert out == "0x" + (b"\x01\x00\x00\x00B" + (1).to_bytes(32, "little")).hex()
    assert not (tmp_path / "unused.json").exists()


def test_ops_lists_every_operation(tmp_path: Path) -> None:
    out = run_cli(["ops"], tmp_path / "unused.json")
    assert "transferFrom" in out and "isOwner" in out
    assert len(out.strip().splitlines()) == 17
