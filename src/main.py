"""
Command line interface for the Pump liquidator.

Usage::

    python src/main.py [--dry-run] [--json]

The wallet comes from ``KEYPAIR_PATH`` or ``PRIVATE_KEY`` and the endpoint
from ``SOLANA_RPC_ENDPOINT`` (see ``config.py``).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import os

# Ensure ``src/`` is on the import path
sys.path.insert(0, os.path.dirname(__file__))

from pump_liquidator.context import LiquidatorContext
from pump_liquidator.liquidator import scan_and_sell
from pump_liquidator.logging_config import setup_logging
from pump_liquidator.models import LiquidationReport

logger = logging.getLogger("pump_liquidator.cli")


async def _run(dry_run: bool) -> LiquidationReport:
    """Async entry point."""
    async with LiquidatorContext.from_config() as ctx:
        return await scan_and_sell(ctx, dry_run=dry_run)


def _print_report(report: LiquidationReport) -> None:
    print("=" * 60)
    print("  Pump Liquidator – Results")
    print("=" * 60)
    print(f"  Wallet       : {report.wallet}")
    print(f"  Mode         : {'DRY RUN' if report.dry_run else 'EXECUTE'}")
    print(f"  Holdings     : {report.holdings_scanned}")
    print(f"  Pump tokens  : {report.pump_tokens}")
    print(f"  Unclassified : {len(report.lookup_failures)}")
    print("-" * 60)
    for o in report.outcomes:
        if o.signature:
            status = f"sold  {o.signature}"
        elif o.error:
            status = f"FAIL  {o.error}"
        else:
            status = "skipped"
        print(f"  {o.mint[:12]}…  {o.display_amount:>16,.6f}  {status}")
    print("=" * 60)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sell every Pump.fun bonding-curve token held by the wallet"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scan, classify and derive addresses without submitting transactions",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Output the run report as raw JSON",
    )
    args = parser.parse_args(argv)
    setup_logging()

    try:
        report = asyncio.run(_run(args.dry_run))
    except Exception:
        logger.exception("Liquidation run aborted")
        return 1

    if args.as_json:
        print(report.model_dump_json(indent=2))
    else:
        _print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
