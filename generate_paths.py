#!/usr/bin/env python3
"""
Triangular path generation CLI.

Builds every 3-hop cycle on a base token from a pool registry, drops
blacklisted paths and, when a reserve snapshot is given, ranks paths by
simulated output.

Usage:
    python3 generate_paths.py --config configs/example_paths.yaml
    python3 generate_paths.py --pools pools.csv --base-token 0xC02a... --reserves reserves.yaml
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import List, Optional

from tabulate import tabulate

import logging_config
from arb_paths.config import ConfigError, PathsConfig, load_config
from arb_paths.exceptions import ArbPathsError
from arb_paths.filters import filter_blacklisted, rank_by_output
from arb_paths.generator import LoggingProgress, generate_triangular_paths
from arb_paths.loader import load_pools, load_reserves

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate and rank triangular arbitrage paths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run from a config file
  python3 generate_paths.py --config configs/example_paths.yaml

  # Override the base token and use 4 worker processes
  python3 generate_paths.py --config configs/example_paths.yaml --base-token WETH --workers 4

  # No config: pools + base token on the command line, JSON output
  python3 generate_paths.py --pools pools.yaml --base-token WETH --reserves reserves.yaml --json
        """,
    )
    parser.add_argument("--config", help="Path to config YAML file")
    parser.add_argument("--pools", help="Pools file (YAML or CSV)")
    parser.add_argument("--reserves", help="Reserve snapshot file (YAML or CSV)")
    parser.add_argument("--base-token", help="Token the cycles start and end on")
    parser.add_argument(
        "--amount-in", type=int, help="Whole-token amount to simulate (default: 1)"
    )
    parser.add_argument("--workers", type=int, help="Worker processes (default: 1)")
    parser.add_argument("--top", type=int, help="Ranked paths to show (default: 10)")
    parser.add_argument(
        "--json", action="store_true", help="Print JSON instead of a table"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PathsConfig:
    """Load config file (if any) and apply CLI overrides."""
    if args.config:
        config = load_config(args.config)
    else:
        config = PathsConfig(
            {"base_token": args.base_token, "pools_file": args.pools}
        )

    if args.pools:
        config.pools_file = args.pools
    if args.reserves:
        config.reserves_file = args.reserves
    overrides = {
        "base_token": args.base_token,
        "amount_in": args.amount_in,
        "workers": args.workers,
        "top": args.top,
    }
    merged = {
        "base_token": config.base_token,
        "pools_file": config.pools_file,
        "amount_in": config.amount_in,
        "fee_denominator": config.fee_denominator,
        "workers": config.workers,
        "top": config.top,
        "blacklist_tokens": config.blacklist_tokens,
    }
    merged.update({k: v for k, v in overrides.items() if v is not None})
    reserves_file = config.reserves_file
    config = PathsConfig(merged)
    config.reserves_file = reserves_file
    return config


def format_amount(raw: int, decimals: int) -> str:
    """Render base units as whole tokens."""
    return f"{Decimal(raw) / (Decimal(10) ** decimals):,.6f}"


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)
    if args.debug:
        logging_config.setup_debug()
    else:
        logging_config.setup()

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
        return 1

    try:
        pools = load_pools(config.pools_file)
        reserves = load_reserves(config.reserves_file) if config.reserves_file else None
    except (ArbPathsError, FileNotFoundError) as e:
        print(f"❌ Input error: {e}", file=sys.stderr)
        return 1

    paths = generate_triangular_paths(
        pools,
        config.base_token,
        progress=LoggingProgress(log_every=max(1, len(pools) // 20)),
        workers=config.workers,
    )
    kept = filter_blacklisted(paths, config.blacklist_tokens)
    if len(kept) != len(paths):
        logger.info(f"Blacklist removed {len(paths) - len(kept)} paths")

    if reserves is None:
        if args.json:
            print(json.dumps([p.to_dict() for p in kept], indent=2))
        else:
            print(f"{len(kept)} paths (no reserves given, nothing simulated)")
        return 0

    ranked = rank_by_output(kept, config.amount_in, reserves, config.fee_denominator)
    skipped = len(kept) - len(ranked)
    if skipped:
        logger.info(
            f"Skipped {skipped} paths without reserves or with infeasible swaps"
        )

    top = ranked[: config.top]
    if args.json:
        rows = []
        for path, amount_out in top:
            row = path.to_dict()
            row["amount_out"] = str(amount_out)
            rows.append(row)
        print(json.dumps(rows, indent=2))
        return 0

    table = []
    for rank, (path, amount_out) in enumerate(top, start=1):
        first = path.hops[0]
        decimals = first.pool.decimals_of(first.zero_for_one)
        amount_in_raw = config.amount_in * 10**decimals
        pnl_pct = (
            (Decimal(amount_out) / Decimal(amount_in_raw) - 1) * 100
            if amount_in_raw
            else Decimal(0)
        )
        table.append(
            [
                rank,
                " -> ".join(token[:10] for token in path.token_path),
                format_amount(amount_out, decimals),
                f"{pnl_pct:+.4f}%",
            ]
        )

    print(
        tabulate(
            table,
            headers=["#", "Route", f"Out (per {config.amount_in} in)", "PnL"],
            tablefmt="simple",
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
