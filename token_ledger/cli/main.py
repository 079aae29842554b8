from __future__ import annotations

"""
token_ledger.cli.main
---------------------

Drive a ledger kept in a local JSON state file.

Examples
--------
# Deploy as A with 1000 units (2 decimals)
token-ledger deploy --caller A --name Tok --symbol TKN --decimals 2 --supply 1000

# Mutations run as --caller and persist only on success
token-ledger call transfer B 300 --caller A
token-ledger call increaseAllowance C 200 --caller A

# Reads never touch the state file
token-ledger view balanceOf A
token-ledger view allowance A C

# Raw argument bytes as the host would receive them
token-ledger encode transferFrom A D 150
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from ..config import load_config
from ..dispatch import OPERATIONS, Operation, encode_call_args, spec_for
from ..errors import LedgerError, MalformedArgs
from ..host import CallReceipt, LedgerHost
from ..math import decode_u256

STATE_ENV = "TOKEN_LEDGER_STATE"
DEFAULT_STATE = Path("ledger_state.json")
VIEW_CALLER = "viewer"

log = logging.getLogger(__name__)

app = typer.Typer(
    name="token-ledger",
    add_completion=False,
    no_args_is_help=True,
    help="Deploy, call and inspect an ERC-20-style token ledger stored in a JSON file.",
)

_AMOUNT_OPS = {Operation.TOTAL_SUPPLY, Operation.BALANCE_OF, Operation.ALLOWANCE}
_TEXT_OPS = {Operation.NAME, Operation.SYMBOL, Operation.OWNER}


# -------------------- utils --------------------


def _state_path(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("state") or DEFAULT_STATE


def _load_host(path: Path) -> LedgerHost:
    if not path.exists():
        return LedgerHost()
    data = json.loads(path.read_text(encoding="utf-8"))
    if "storage" not in data:
        raise typer.BadParameter(f"malformed state file {path}")
    return LedgerHost.load(data)


def _save_host(path: Path, host: LedgerHost) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(host.snapshot(), indent=2, sort_keys=True), encoding="utf-8")
    log.debug("state saved: %s (%d entries)", path, len(host.backend))


def _coerce(raw: str, typ: str) -> Any:
    if typ in ("string", "address"):
        return raw
    if typ == "bool":
        val = raw.strip().lower()
        if val in ("1", "true", "yes"):
            return True
        if val in ("0", "false", "no"):
            return False
        raise MalformedArgs(f"not a bool: {raw!r}")
    try:
        return int(raw, 0)
    except ValueError:
        raise MalformedArgs(f"not an integer: {raw!r}", data={"type": typ}) from None


def _coerce_all(op: str, raw_args: List[str]) -> List[Any]:
    types = spec_for(op).arg_types
    if len(types) != len(raw_args):
        raise MalformedArgs(
            f"{op} takes {len(types)} argument(s): {', '.join(types) or 'none'}",
            data={"expected": len(types), "got": len(raw_args)},
        )
    return [_coerce(r, t) for r, t in zip(raw_args, types)]


def _decoded(op: Operation, output: bytes) -> Any:
    if op in _AMOUNT_OPS:
        return decode_u256(output)
    if op in _TEXT_OPS:
        return output.decode("utf-8")
    if op is Operation.DECIMALS:
        return output[0] if output else None
    return output == b"\x01"


def _emit(receipt: CallReceipt) -> None:
    out: Dict[str, Any] = receipt.to_dict()
    if receipt.ok:
        out["value"] = _decoded(Operation.parse(receipt.op), receipt.output)
    typer.echo(json.dumps(out, indent=2))
    if not receipt.ok:
        raise typer.Exit(code=1)


def _fail(e: LedgerError) -> None:
    typer.echo(json.dumps({"ok": False, "error": e.to_dict()}, indent=2), err=True)
    raise typer.Exit(code=1)


# -------------------- commands --------------------


@app.callback()
def _configure(
    ctx: typer.Context,
    state: Optional[Path] = typer.Option(
        None, "--state", envvar=STATE_ENV, help="Ledger state file (default: ./ledger_state.json)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override TOKEN_LEDGER_LOG_LEVEL"),
) -> None:
    level = (log_level or load_config().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"state": state}


@app.command("deploy")
def deploy(
    ctx: typer.Context,
    caller: str = typer.Option(..., "--caller", help="Deployer address; becomes the owner"),
    name: str = typer.Option(..., "--name"),
    symbol: str = typer.Option(..., "--symbol"),
    decimals: int = typer.Option(18, "--decimals"),
    supply: int = typer.Option(0, "--supply", help="Initial supply credited to the deployer"),
) -> None:
    """Construct the ledger (once per state file)."""
    path = _state_path(ctx)
    host = _load_host(path)
    receipt = host.invoke(Operation.CONSTRUCTOR, caller, name, symbol, decimals, supply)
    if receipt.ok:
        _save_host(path, host)
    _emit(receipt)


@app.command("call")
def call(
    ctx: typer.Context,
    op: str = typer.Argument(..., help="Operation name, e.g. transfer"),
    args: Optional[List[str]] = typer.Argument(None, help="Operation arguments"),
    caller: str = typer.Option(..., "--caller", help="Address the call runs as"),
) -> None:
    """Run an operation as --caller and persist the result if it commits."""
    path = _state_path(ctx)
    host = _load_host(path)
    try:
        values = _coerce_all(op, list(args or []))
    except LedgerError as e:
        _fail(e)
        return
    receipt = host.invoke(op, caller, *values)
    if receipt.ok and OPERATIONS[Operation.parse(op)].mutating:
        _save_host(path, host)
    _emit(receipt)


@app.command("view")
def view(
    ctx: typer.Context,
    op: str = typer.Argument(..., help="Read operation, e.g. balanceOf"),
    args: Optional[List[str]] = typer.Argument(None),
) -> None:
    """Run a read operation without touching the state file."""
    try:
        if OPERATIONS[Operation.parse(op)].mutating:
            raise MalformedArgs(f"{op} is not a read operation; use `call`")
        values = _coerce_all(op, list(args or []))
    except LedgerError as e:
        _fail(e)
        return
    host = _load_host(_state_path(ctx))
    _emit(host.invoke(op, VIEW_CALLER, *values))


@app.command("encode")
def encode(
    op: str = typer.Argument(...),
    args: Optional[List[str]] = typer.Argument(None),
) -> None:
    """Print the hex argument payload for an operation."""
    try:
        raw = encode_call_args(op, _coerce_all(op, list(args or [])))
    except LedgerError as e:
        _fail(e)
        return
    typer.echo("0x" + raw.hex())


@app.command("events")
def events(ctx: typer.Context) -> None:
    """Print the committed event log, one line per event."""
    host = _load_host(_state_path(ctx))
    for line in host.event_log:
        typer.echo(line)


@app.command("ops")
def ops() -> None:
    """List operations and their argument types."""
    for operation, spec in OPERATIONS.items():
        kind = "write" if spec.mutating else "read"
        typer.echo(f"{operation.value:<18} {kind:<5} ({', '.join(spec.arg_types)})")


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
