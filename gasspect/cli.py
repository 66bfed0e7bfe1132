"""Command line entry point: gas report or instruction counts for one transaction."""

from __future__ import annotations

import argparse
import logging
import sys

from . import constants
from .api import gasspect_evm, parse_struct_logs, profile_evm
from .counter import count_opcodes_exact
from .errors import GasspectError, PersistFailure
from .report import GasspectConfig
from .sink import persist_trace
from .trace_source import get_trace_source


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gasspect",
        description="Per-instruction gas report from a debug_traceTransaction trace",
    )
    parser.add_argument("tx_hash", nargs="?", default="", help="Transaction hash")
    parser.add_argument(
        "--rpc-url",
        "-r",
        default=constants.DEFAULT_RPC_URL,
        help=f"Node JSON-RPC endpoint (default: {constants.DEFAULT_RPC_URL})",
    )
    parser.add_argument(
        "--trace-json",
        default="",
        help="Read a saved trace from this file instead of querying a node",
    )
    parser.add_argument(
        "--min-gas",
        "-m",
        type=int,
        default=constants.DEFAULT_MIN_OP_GAS_COST,
        help="Only report steps costing more than this "
        f"(default: {constants.DEFAULT_MIN_OP_GAS_COST})",
    )
    parser.add_argument("--args", action="store_true", help="Show decoded arguments")
    parser.add_argument("--res", action="store_true", help="Show decoded results")
    parser.add_argument(
        "--count",
        nargs="+",
        metavar="OP",
        help="Print occurrence counts of these mnemonics instead of the report",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="With --count, count the op field of each step instead of scanning the JSON text",
    )
    parser.add_argument("--save-trace", default="", help="Write the raw trace to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _count(args: argparse.Namespace, source) -> list[int]:
    if not args.exact:
        return profile_evm(source, args.tx_hash, args.count, args.save_trace or None)
    trace = source.fetch(args.tx_hash)
    if args.save_trace:
        persist_trace(trace, args.save_trace)
    return count_opcodes_exact(parse_struct_logs(trace), args.count)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )

    if not args.tx_hash and not args.trace_json:
        parser.error("a transaction hash or --trace-json is required")

    if args.trace_json:
        source = get_trace_source(constants.TRACE_SOURCE_FILE, path=args.trace_json)
    else:
        source = get_trace_source(constants.TRACE_SOURCE_RPC, rpc_url=args.rpc_url)

    try:
        if args.count:
            counts = _count(args, source)
            for instr, count in zip(args.count, counts):
                print(f"{instr.upper()}: {count}")
            return 0

        config = GasspectConfig(
            min_op_gas_cost=args.min_gas, args=args.args, res=args.res
        )
        lines = gasspect_evm(source, args.tx_hash, config, args.save_trace or None)
    except PersistFailure as exc:
        for line in exc.report or []:
            print(line)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except GasspectError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
