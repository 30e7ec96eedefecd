"""Command-line entry point.

Usage:
    clmm-probe probe --dex orca --pool <pubkey> --sizes 100,1000,10000
    clmm-probe probe --dex raydium --pool <pubkey> --range 1000:10000:1000 --csv out.csv
    clmm-probe merge data/daily/2024-01-01
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

import structlog

from clmm_probe import __version__
from clmm_probe.constants import DEFAULT_RPC_URL, DEFAULT_SIZES, USDC
from clmm_probe.engine.runner import ProbeRunner, ProbeSink
from clmm_probe.errors import ProbeError
from clmm_probe.models.config import ProbeConfig, parse_sizes
from clmm_probe.models.types import SizeUnit
from clmm_probe.reporting.console import ConsoleReporter
from clmm_probe.reporting.csv_sink import CsvAppender
from clmm_probe.reporting.merge import merge_csv_dir
from clmm_probe.units import UnitResolver
from clmm_probe.venues.registry import ADAPTERS, get_adapter
from clmm_probe.venues.rpc import SolanaAccountReader

logger = structlog.get_logger()

RPC_URL_ENV = "SOLANA_RPC_URL"

# "usd" is accepted as an alias for the stable unit
UNIT_CHOICES = {"stable": SizeUnit.STABLE, "usd": SizeUnit.STABLE, "quote": SizeUnit.QUOTE}


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure structlog for CLI use; logs go to stderr so stdout stays tabular."""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clmm-probe",
        description="Round-trip depth probe for Solana CLMM pools",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    probe = subparsers.add_parser("probe", help="Probe round-trip cost for a list of sizes")
    probe.add_argument("--dex", choices=sorted(ADAPTERS), default="orca", help="Pool venue")
    probe.add_argument("--pool", required=True, help="Pool account pubkey")
    probe.add_argument(
        "--rpc",
        default=os.environ.get(RPC_URL_ENV, DEFAULT_RPC_URL),
        help=f"RPC URL (default: ${RPC_URL_ENV} or {DEFAULT_RPC_URL})",
    )
    probe.add_argument("--sizes", default=DEFAULT_SIZES, help="Comma-separated sizes")
    probe.add_argument(
        "--range",
        default=None,
        help="A:B:S inclusive size range in the size unit (overrides --sizes)",
    )
    probe.add_argument(
        "--size-unit",
        choices=sorted(UNIT_CHOICES),
        default=None,
        help="Size denomination (default: stable if the stable mint is in the pool, else quote)",
    )
    probe.add_argument(
        "--price-unit",
        choices=sorted(UNIT_CHOICES),
        default=None,
        help="Price denomination (same default as --size-unit)",
    )
    probe.add_argument(
        "--stable-mode",
        action="store_true",
        help="Default both units to stable and use the built-in SOL oracle for SOL quotes",
    )
    probe.add_argument("--quote-mint", default=None, help="Force the quote mint")
    probe.add_argument(
        "--oracle-pool",
        default=None,
        help="Pool pairing the stable mint with the quote or base token",
    )
    probe.add_argument(
        "--oracle-dex",
        choices=sorted(ADAPTERS),
        default="orca",
        help="Venue of the oracle pool (default: orca)",
    )
    probe.add_argument("--stable-mint", default=USDC, help="Stable mint (default: USDC)")
    probe.add_argument("--delay-ms", type=float, default=0.0, help="Sleep between sizes (ms)")
    probe.add_argument(
        "--tick-arrays",
        type=int,
        default=3,
        help="Tick arrays to load on each side of the active one",
    )
    probe.add_argument(
        "--depth-dump",
        type=int,
        default=None,
        help="Print initialized ticks within N tick arrays of the active tick",
    )
    probe.add_argument("--csv", default=None, help="Append rows to this CSV file")
    probe.add_argument("--quiet", "-q", action="store_true", help="Suppress console tables")
    probe.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    probe.set_defaults(handler=run_probe)

    merge = subparsers.add_parser("merge", help="Merge a directory of CSVs into all.csv")
    merge.add_argument("day_dir", help="Directory containing probe CSV files")
    merge.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    merge.set_defaults(handler=run_merge, quiet=False)

    return parser


def config_from_args(args: argparse.Namespace) -> ProbeConfig:
    """Build a validated ProbeConfig from parsed arguments.

    Raises:
        ConfigError: If any value is invalid
    """
    return ProbeConfig.build(
        dex=args.dex,
        pool=args.pool,
        rpc_url=args.rpc,
        sizes=parse_sizes(args.sizes, args.range),
        size_unit=UNIT_CHOICES[args.size_unit] if args.size_unit else None,
        price_unit=UNIT_CHOICES[args.price_unit] if args.price_unit else None,
        stable_mode=args.stable_mode,
        quote_mint=args.quote_mint,
        oracle_pool=args.oracle_pool,
        oracle_dex=args.oracle_dex,
        stable_mint=args.stable_mint,
        delay_ms=args.delay_ms,
        tick_arrays=args.tick_arrays,
        depth_dump=args.depth_dump,
        csv_path=args.csv,
        quiet=args.quiet,
    )


def run_probe(args: argparse.Namespace) -> int:
    try:
        config = config_from_args(args)
        reader = SolanaAccountReader(config.rpc_url)
        adapter = get_adapter(config.dex, reader, tick_arrays=config.tick_arrays)
        if config.oracle_dex == config.dex:
            oracle_adapter = adapter
        else:
            oracle_adapter = get_adapter(config.oracle_dex, reader)

        sinks: list[ProbeSink] = []
        if not config.quiet:
            sinks.append(ConsoleReporter())
        if config.csv_path is not None:
            sinks.append(CsvAppender(config.csv_path))

        runner = ProbeRunner(adapter, UnitResolver(oracle_adapter), sinks)
        runner.run(config)
    except ProbeError as e:
        logger.error("probe_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run_merge(args: argparse.Namespace) -> int:
    out = merge_csv_dir(args.day_dir)
    if out is None:
        print("no csv")
    else:
        print(f"merged -> {out}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    return args.handler(args)


__all__ = ["main", "build_parser", "config_from_args", "configure_logging"]


if __name__ == "__main__":
    sys.exit(main())
