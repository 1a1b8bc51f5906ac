"""
Command-line driver for the staked-token pool.

    stakeswap demo
    stakeswap run add:100 swap:6 add:10 swap:30 remove:all

Each step prints one JSON line. Amounts are human decimals on the way in and
on the way out; the pool snapshot is printed in raw fixed-point units.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Callable, Optional, Sequence

from .config import PoolConfig, load_config
from .core.lp_pool import ConfigurationError, LpPool, PoolError
from .core.units import LpTokenAmount, Percentage, Price, StakedTokenAmount, TokenAmount

BANNER = "Liquidity Pool Simulation"

DEMO_OPS: tuple[str, ...] = ("add:100", "swap:6", "add:10", "swap:30", "remove:all")


class OpSpecError(ValueError):
    """Malformed `kind:amount` operation argument."""


def _add(pool: LpPool, arg: str) -> dict[str, object]:
    minted = pool.add_liquidity(TokenAmount.from_decimal(arg))
    return {"minted": str(minted)}


def _remove(pool: LpPool, arg: str) -> dict[str, object]:
    shares = pool.lp_token_amount if arg == "all" else LpTokenAmount.from_decimal(arg)
    token_out, staked_out = pool.remove_liquidity(shares)
    return {"shares": str(shares), "token_out": str(token_out), "staked_out": str(staked_out)}


def _swap(pool: LpPool, arg: str) -> dict[str, object]:
    quote = pool.swap_with_quote(StakedTokenAmount.from_decimal(arg))
    return {"token_out": str(quote.token_out), "fee_rate": str(quote.fee_rate), "fee_amount": str(quote.fee_amount)}


_OPS: dict[str, Callable[[LpPool, str], dict[str, object]]] = {
    "add": _add,
    "remove": _remove,
    "swap": _swap,
}

_ARG_KINDS = {
    "add": TokenAmount,
    "remove": LpTokenAmount,
    "swap": StakedTokenAmount,
}


def parse_op(spec: str) -> tuple[str, str]:
    kind, sep, arg = spec.partition(":")
    kind = kind.strip().lower()
    arg = arg.strip()
    if not sep or kind not in _OPS or not arg:
        raise OpSpecError(f"expected add:<amount>, remove:<shares|all> or swap:<amount>, got {spec!r}")
    if arg == "all":
        if kind != "remove":
            raise OpSpecError(f"'all' is only valid for remove: {spec!r}")
        return kind, arg
    try:
        _ARG_KINDS[kind].from_decimal(arg)
    except ValueError as exc:
        raise OpSpecError(f"{spec!r}: {exc}") from exc
    return kind, arg


def run_ops(pool: LpPool, ops: Sequence[str], out=None) -> int:
    """Apply `ops` in order, printing one JSON line per step. Stops at the first rejection."""
    out = sys.stdout if out is None else out
    parsed = [parse_op(s) for s in ops]
    for kind, arg in parsed:
        line: dict[str, object] = {"op": kind, "arg": arg}
        try:
            line.update(_OPS[kind](pool, arg))
        except PoolError as exc:
            line.update({"error": exc.code, "message": str(exc)})
            print(json.dumps(line, sort_keys=True), file=out)
            return 1
        line["pool"] = pool.snapshot()
        line["status"] = pool.status.value
        print(json.dumps(line, sort_keys=True), file=out)
    return 0


def _apply_overrides(cfg: PoolConfig, args: argparse.Namespace) -> PoolConfig:
    overrides: dict[str, object] = {}
    if args.price is not None:
        overrides["price"] = Price.from_decimal(args.price)
    if args.min_fee is not None:
        overrides["min_fee"] = Percentage.from_decimal(args.min_fee)
    if args.max_fee is not None:
        overrides["max_fee"] = Percentage.from_decimal(args.max_fee)
    if args.liquidity_target is not None:
        overrides["liquidity_target"] = TokenAmount.from_decimal(args.liquidity_target)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    return replace(cfg, **overrides) if overrides else cfg


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stakeswap", description="Staked-token liquidity pool simulator.")
    p.add_argument("--price", help="Staked -> token exchange rate (default: $STAKESWAP_PRICE or 1.5)")
    p.add_argument("--min-fee", help="Fee floor as a fraction (default: $STAKESWAP_MIN_FEE or 0.001)")
    p.add_argument("--max-fee", help="Fee ceiling as a fraction (default: $STAKESWAP_MAX_FEE or 0.09)")
    p.add_argument("--liquidity-target", help="Token reserve target (default: $STAKESWAP_LIQUIDITY_TARGET or 90)")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: $STAKESWAP_LOG_LEVEL or WARNING)",
    )
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("demo", help="Run the reference deposit/swap/withdraw scenario")
    run = sub.add_parser("run", help="Run a sequence of operations")
    run.add_argument("ops", nargs="+", metavar="OP", help="add:<amount> | remove:<shares|all> | swap:<amount>")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = _apply_overrides(load_config(), args)
        pool = cfg.build_pool()
        ops = DEMO_OPS if args.command == "demo" else tuple(args.ops)
        for spec in ops:
            parse_op(spec)
    except (ConfigurationError, OpSpecError, TypeError, ValueError) as exc:
        print(f"stakeswap error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print(BANNER)
    return run_ops(pool, ops)


if __name__ == "__main__":
    raise SystemExit(main())
